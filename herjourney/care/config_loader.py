"""Load, validate, and hot-reload the HerJourney care configuration.

The config lives in ``care_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_care_config()`` to re-read from
disk after an edit, no restart required.

Usage::

    from herjourney.care.config_loader import get_care_config

    config = get_care_config()
    config.pregnancy.full_term_days          # 280
    config.analyzer.points["caffeine"]       # 2
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger("herjourney.care.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "care_config.yaml"

_REQUIRED_POINTS = (
    "red_flag_symptom",
    "caffeine",
    "alcohol",
    "smoking",
    "sleep",
    "exercise",
    "water",
    "prenatal_vitamin",
)


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class PregnancyConfig:
    """Gestational age settings."""

    full_term_days: int = 280
    display_weeks_cap: int = 40
    reference_cycle_length: int = 28
    first_trimester_max_week: int = 13
    second_trimester_max_week: int = 27


@dataclass
class CycleConfig:
    """Menstrual cycle estimate settings."""

    default_length: int = 28
    luteal_phase_days: int = 14
    fertile_days_before_ovulation: int = 5
    fertile_days_after_ovulation: int = 1


@dataclass
class AnalyzerConfig:
    """Health analyzer thresholds and point values."""

    red_flag_threshold: int
    heads_up_threshold: int
    caffeine_max_mg: float
    sleep_min_hours: float
    exercise_min_minutes: float
    water_min_cups: float
    water_great_cups: float
    points: dict[str, int]

    def points_for(self, rule: str) -> int:
        return self.points.get(rule, 0)


@dataclass
class TrendConfig:
    """Weekly trend settings."""

    window_entries: int = 7
    margin: float = 1.0


@dataclass
class CareConfig:
    """Complete, validated care configuration.

    This is the single in-memory representation of care_config.yaml.
    The calculator and analyzer components read from this object.

    Attributes:
        version:    Config schema version string.
        pregnancy:  Gestational age settings.
        cycle:      Cycle estimate settings.
        analyzer:   Analyzer thresholds and points.
        trends:     Weekly trend settings.
    """

    version: str
    pregnancy: PregnancyConfig
    cycle: CycleConfig
    analyzer: AnalyzerConfig
    trends: TrendConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when care_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Care config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> CareConfig:
    """Validate the raw YAML dict and construct a CareConfig.

    Performs structural validation and applies defaults for optional fields.
    Every problem is collected so a single error lists all of them.

    Raises:
        ConfigValidationError: If required fields are missing or invalid.
    """
    errors: list[str] = []

    def _number(d: dict, key: str, section: str, default: Any, cast: type = int) -> Any:
        value = d.get(key, default)
        try:
            return cast(value)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be a number, got {value!r}")
            return default

    version = str(raw.get("version", "1.0"))

    # ── Pregnancy ──
    pg_raw = raw.get("pregnancy", {}) or {}
    tb_raw = pg_raw.get("trimester_boundaries", {}) or {}
    pregnancy = PregnancyConfig(
        full_term_days=_number(pg_raw, "full_term_days", "pregnancy", 280),
        display_weeks_cap=_number(pg_raw, "display_weeks_cap", "pregnancy", 40),
        reference_cycle_length=_number(pg_raw, "reference_cycle_length", "pregnancy", 28),
        first_trimester_max_week=_number(
            tb_raw, "first_max_week", "pregnancy.trimester_boundaries", 13
        ),
        second_trimester_max_week=_number(
            tb_raw, "second_max_week", "pregnancy.trimester_boundaries", 27
        ),
    )
    if pregnancy.full_term_days <= 0:
        errors.append("pregnancy.full_term_days must be positive")
    if pregnancy.first_trimester_max_week >= pregnancy.second_trimester_max_week:
        errors.append(
            "pregnancy.trimester_boundaries.first_max_week must be below second_max_week"
        )

    # ── Cycle ──
    cy_raw = raw.get("cycle", {}) or {}
    fw_raw = cy_raw.get("fertile_window", {}) or {}
    cycle = CycleConfig(
        default_length=_number(cy_raw, "default_length", "cycle", 28),
        luteal_phase_days=_number(cy_raw, "luteal_phase_days", "cycle", 14),
        fertile_days_before_ovulation=_number(
            fw_raw, "days_before_ovulation", "cycle.fertile_window", 5
        ),
        fertile_days_after_ovulation=_number(
            fw_raw, "days_after_ovulation", "cycle.fertile_window", 1
        ),
    )
    if cycle.default_length <= 0:
        errors.append("cycle.default_length must be positive")

    # ── Analyzer ──
    an_raw = raw.get("analyzer", {}) or {}
    th_raw = an_raw.get("thresholds", {}) or {}
    lim_raw = an_raw.get("limits", {}) or {}
    pts_raw = an_raw.get("points", {}) or {}

    points: dict[str, int] = {}
    for name in _REQUIRED_POINTS:
        if name not in pts_raw:
            errors.append(f"Missing required key '{name}' in section 'analyzer.points'")
            continue
        value = _number(pts_raw, name, "analyzer.points", 0)
        if value < 0:
            errors.append(f"analyzer.points.{name} = {value} must not be negative")
        points[name] = value

    analyzer = AnalyzerConfig(
        red_flag_threshold=_number(th_raw, "red_flag", "analyzer.thresholds", 5),
        heads_up_threshold=_number(th_raw, "heads_up", "analyzer.thresholds", 2),
        caffeine_max_mg=_number(lim_raw, "caffeine_max_mg", "analyzer.limits", 200, float),
        sleep_min_hours=_number(lim_raw, "sleep_min_hours", "analyzer.limits", 6, float),
        exercise_min_minutes=_number(
            lim_raw, "exercise_min_minutes", "analyzer.limits", 150, float
        ),
        water_min_cups=_number(lim_raw, "water_min_cups", "analyzer.limits", 6, float),
        water_great_cups=_number(lim_raw, "water_great_cups", "analyzer.limits", 8, float),
        points=points,
    )
    if analyzer.heads_up_threshold > analyzer.red_flag_threshold:
        errors.append("analyzer.thresholds.heads_up must not exceed red_flag")

    # ── Trends ──
    tr_raw = raw.get("trends", {}) or {}
    trends = TrendConfig(
        window_entries=_number(tr_raw, "window_entries", "trends", 7),
        margin=_number(tr_raw, "margin", "trends", 1.0, float),
    )
    if trends.window_entries < 1:
        errors.append("trends.window_entries must be at least 1")

    if errors:
        raise ConfigValidationError(
            f"care_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return CareConfig(
        version=version,
        pregnancy=pregnancy,
        cycle=cycle,
        analyzer=analyzer,
        trends=trends,
        _raw=raw,
    )


def load_care_config(path: Path | None = None) -> CareConfig:
    """Load and validate the care config from disk.

    Args:
        path: Override path to YAML. Uses the bundled care_config.yaml by default.

    Returns:
        Validated CareConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded care config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: CareConfig | None = None
_config_lock = threading.Lock()


def get_care_config() -> CareConfig:
    """Return the global CareConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_care_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_care_config()
    return _config


def reload_care_config(path: Path | None = None) -> CareConfig:
    """Reload the care config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_care_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info(
        "Reloaded care config: %s → %s",
        old_version,
        new_config.version,
    )
    return new_config
