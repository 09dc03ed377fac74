"""Rules-based daily health analyzer.

NOT MEDICAL ADVICE.  Converts one day of lifestyle and symptom inputs into
an additive risk score, a three-level classification and human-readable
messages and recommendations.

The checks are an explicit ordered list of ``ScoringRule`` objects so the
message sequence is deterministic:

    1. Red-flag symptoms (bleeding, fever, severe pain,
       headaches/vision changes, swelling), +5 each
    2. Caffeine above 200 mg                    +2
    3. Any alcohol                              +3
    4. Smoking                                  +3
    5. Under 6 hours of sleep                   +1
    6. Under 150 minutes of exercise            +1
    7. Under 6 cups of water                    +1
    8. Prenatal vitamin skipped                 +1

Thresholds and points come from care_config.yaml.  Numeric checks only fire
for a recorded, non-zero reading.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Callable, Mapping

from herjourney.care.config_loader import AnalyzerConfig, CareConfig, get_care_config

logger = logging.getLogger("herjourney.care.analyzer")

MEDICAL_DISCLAIMER = (
    "⚠️ This is not medical advice. If you have concerns, kindly contact a "
    "healthcare professional."
)

_RED_FLAG_BANNER = "🚨 Some concerning items detected - please contact your healthcare provider"
_HEADS_UP_BANNER = "⚠️ A few areas could use attention"
_OK_BANNER = "✅ Overall looking good!"


class RiskLevel(str, Enum):
    ok = "ok"
    heads_up = "heads_up"
    red_flag = "red_flag"


class RiskTrend(str, Enum):
    improving = "improving"
    stable = "stable"
    concerning = "concerning"


_LEVEL_TEXT = {
    RiskLevel.ok: "All Good",
    RiskLevel.heads_up: "Heads Up",
    RiskLevel.red_flag: "Attention Needed",
}


@dataclass(frozen=True)
class AnalyzerEntry:
    """One day of analyzer inputs.

    Attributes:
        date:             Day the inputs describe.
        water_cups:       Cups of water.
        caffeine_mg:      Caffeine in milligrams.
        alcohol_drinks:   Alcoholic drinks.
        sleep_hours:      Hours slept.
        exercise_mins:    Minutes of exercise.
        smoked:           Smoked today.
        prenatal_vitamin: Took a prenatal vitamin (None = not answered).
        bleeding .. swelling: Red-flag symptoms.
        score:            Previously computed score, used by trend analysis.
    """

    date: date
    water_cups: float | None = None
    caffeine_mg: float | None = None
    alcohol_drinks: float | None = None
    sleep_hours: float | None = None
    exercise_mins: float | None = None
    smoked: bool | None = None
    prenatal_vitamin: bool | None = None
    bleeding: bool | None = None
    fever: bool | None = None
    severe_pain: bool | None = None
    headaches_vision: bool | None = None
    swelling: bool | None = None
    score: int | None = None


@dataclass(frozen=True)
class AnalyzerResult:
    score: int
    level: RiskLevel
    messages: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TrendSummary:
    """Averages and risk direction over the most recent entries."""

    avg_water: int = 0
    avg_sleep: float = 0.0
    avg_exercise: int = 0
    avg_caffeine: int = 0
    risk_trend: RiskTrend = RiskTrend.stable


@dataclass(frozen=True)
class ScoringRule:
    """A single additive check.

    Attributes:
        name:           Rule identifier (matches a key under analyzer.points).
        predicate:      True when the rule fires for an entry.
        points:         Points added when it fires.
        message:        Appended to messages when it fires (None = none).
        recommendation: Appended to recommendations when it fires (None = none).
        red_flag:       Firing forces the red_flag level.
    """

    name: str
    predicate: Callable[[AnalyzerEntry], bool]
    points: int
    message: str | None = None
    recommendation: str | None = None
    red_flag: bool = False


def _recorded(value: float | None) -> bool:
    return value is not None and value != 0


def build_rules(cfg: AnalyzerConfig) -> list[ScoringRule]:
    """Build the ordered rule list from analyzer config."""
    red = cfg.points_for("red_flag_symptom")
    return [
        ScoringRule(
            "bleeding", lambda e: bool(e.bleeding), red,
            message="🚨 Unexpected bleeding should be evaluated immediately",
            red_flag=True,
        ),
        ScoringRule(
            "fever", lambda e: bool(e.fever), red,
            message="🚨 Fever during pregnancy needs medical attention",
            red_flag=True,
        ),
        ScoringRule(
            "severe_pain", lambda e: bool(e.severe_pain), red,
            message="🚨 Severe pain should be evaluated promptly",
            red_flag=True,
        ),
        ScoringRule(
            "headaches_vision", lambda e: bool(e.headaches_vision), red,
            message="🚨 Severe headaches or vision changes need immediate attention",
            red_flag=True,
        ),
        ScoringRule(
            "swelling", lambda e: bool(e.swelling), red,
            message="🚨 Sudden swelling could indicate complications",
            red_flag=True,
        ),
        ScoringRule(
            "caffeine",
            lambda e: _recorded(e.caffeine_mg) and e.caffeine_mg > cfg.caffeine_max_mg,
            cfg.points_for("caffeine"),
            message="High caffeine intake detected",
            recommendation=(
                f"Consider reducing caffeine to under {cfg.caffeine_max_mg:g}mg per day"
            ),
        ),
        ScoringRule(
            "alcohol",
            lambda e: _recorded(e.alcohol_drinks) and e.alcohol_drinks > 0,
            cfg.points_for("alcohol"),
            message="Alcohol consumption noted",
            recommendation="Alcohol is not recommended during pregnancy",
        ),
        ScoringRule(
            "smoking", lambda e: bool(e.smoked), cfg.points_for("smoking"),
            message="Smoking detected",
            recommendation="Consider smoking cessation resources",
        ),
        ScoringRule(
            "sleep",
            lambda e: _recorded(e.sleep_hours) and e.sleep_hours < cfg.sleep_min_hours,
            cfg.points_for("sleep"),
            message="Limited sleep noted",
            recommendation="Aim for 7-9 hours of sleep per night",
        ),
        ScoringRule(
            "exercise",
            lambda e: _recorded(e.exercise_mins) and e.exercise_mins < cfg.exercise_min_minutes,
            cfg.points_for("exercise"),
            recommendation="Consider gentle exercise like walking or prenatal yoga",
        ),
        ScoringRule(
            "water",
            lambda e: _recorded(e.water_cups) and e.water_cups < cfg.water_min_cups,
            cfg.points_for("water"),
            message="Low water intake",
            recommendation="Aim for 8-10 glasses of water daily",
        ),
        ScoringRule(
            "prenatal_vitamin", lambda e: e.prenatal_vitamin is False,
            cfg.points_for("prenatal_vitamin"),
            recommendation="Consider taking prenatal vitamins as recommended by your provider",
        ),
    ]


def _round_half_up(value: float, ndigits: int = 0) -> float:
    """Round the exact binary value half up: 7.5 gives 8, but 6.05 (stored as 6.0499...) gives 6.0."""
    step = Decimal(1).scaleb(-ndigits)
    return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


class HealthRiskScorer:
    """Score analyzer entries and summarise recent trends.

    Usage::

        scorer = HealthRiskScorer()
        result = scorer.score(AnalyzerEntry(date=date.today(), caffeine_mg=250))
        print(result.score, result.level)
    """

    def __init__(self, config: CareConfig | None = None) -> None:
        self._config = config or get_care_config()
        self._rules = build_rules(self._config.analyzer)

    @property
    def rules(self) -> list[ScoringRule]:
        return list(self._rules)

    def score(self, entry: AnalyzerEntry) -> AnalyzerResult:
        """Evaluate every rule in order and classify the total."""
        cfg = self._config.analyzer
        score = 0
        has_red_flag = False
        messages: list[str] = []
        recommendations: list[str] = []

        for rule in self._rules:
            if not rule.predicate(entry):
                continue
            score += rule.points
            has_red_flag = has_red_flag or rule.red_flag
            if rule.message:
                messages.append(rule.message)
            if rule.recommendation:
                recommendations.append(rule.recommendation)

        if has_red_flag or score >= cfg.red_flag_threshold:
            level = RiskLevel.red_flag
            messages.insert(0, _RED_FLAG_BANNER)
        elif score >= cfg.heads_up_threshold:
            level = RiskLevel.heads_up
            messages.insert(0, _HEADS_UP_BANNER)
        else:
            level = RiskLevel.ok
            messages.insert(0, _OK_BANNER)

        if level is RiskLevel.ok:
            if entry.prenatal_vitamin:
                recommendations.append("Great job taking your prenatal vitamins!")
            if _recorded(entry.water_cups) and entry.water_cups >= cfg.water_great_cups:
                recommendations.append("Excellent hydration!")
            if _recorded(entry.exercise_mins) and entry.exercise_mins >= cfg.exercise_min_minutes:
                recommendations.append("Fantastic activity level!")

        messages.append(MEDICAL_DISCLAIMER)

        logger.debug("Analyzer score for %s: %d (%s)", entry.date, score, level.value)

        return AnalyzerResult(
            score=max(0, score),
            level=level,
            messages=messages,
            recommendations=recommendations,
        )

    def trend_analysis(self, entries: Mapping[object, AnalyzerEntry]) -> TrendSummary:
        """Average the most recent entries and compare halves of the window.

        Entries are sorted newest first and the first ``window_entries``
        kept.  With ``h = n // 2`` the "first half" is ``recent[h:]`` (the
        older entries) and the "second half" is ``recent[:h]`` (the newer
        ones).  A first-half mean score below the second-half mean by more
        than the margin reads as improving, above it as concerning.

        Args:
            entries: Mapping of day key to entry; only the entries are used.

        Returns:
            TrendSummary (all zeros and stable when there are no entries).
        """
        tr = self._config.trends
        recent = sorted(entries.values(), key=lambda e: e.date, reverse=True)
        recent = recent[: tr.window_entries]
        if not recent:
            return TrendSummary()

        count = len(recent)
        half = count // 2
        first_mean = _mean([e.score or 0 for e in recent[half:]])
        second_mean = _mean([e.score or 0 for e in recent[:half]])

        if first_mean is None or second_mean is None:
            trend = RiskTrend.stable
        elif first_mean < second_mean - tr.margin:
            trend = RiskTrend.improving
        elif first_mean > second_mean + tr.margin:
            trend = RiskTrend.concerning
        else:
            trend = RiskTrend.stable

        return TrendSummary(
            avg_water=int(_round_half_up(sum(e.water_cups or 0 for e in recent) / count)),
            avg_sleep=_round_half_up(sum(e.sleep_hours or 0 for e in recent) / count, 1),
            avg_exercise=int(_round_half_up(sum(e.exercise_mins or 0 for e in recent) / count)),
            avg_caffeine=int(_round_half_up(sum(e.caffeine_mg or 0 for e in recent) / count)),
            risk_trend=trend,
        )


def score(entry: AnalyzerEntry) -> AnalyzerResult:
    """Module-level shortcut for ``HealthRiskScorer().score``."""
    return HealthRiskScorer().score(entry)


def trend_analysis(entries: Mapping[object, AnalyzerEntry]) -> TrendSummary:
    """Module-level shortcut for ``HealthRiskScorer().trend_analysis``."""
    return HealthRiskScorer().trend_analysis(entries)


def level_text(level: RiskLevel) -> str:
    return _LEVEL_TEXT[RiskLevel(level)]
