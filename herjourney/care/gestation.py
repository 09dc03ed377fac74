"""Gestational age and menstrual cycle estimates.

Two calendar calculations back the dashboard:

- Pregnancy: gestational age, trimester and progress from either the last
  menstrual period (LMP) or the estimated due date (EDD).
- Cycle: next period, fertile window and cycle progress from the last
  period start.

Both are pure functions of their inputs plus a reference date (defaults to
today).  Missing input never raises: pregnancy returns ``None`` and the
cycle estimate returns a zero-progress result with every date left unset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from herjourney.care.config_loader import CareConfig, get_care_config
from herjourney.care.tips import SizeComparison, get_weekly_content

logger = logging.getLogger("herjourney.care.gestation")

_TRIMESTER_NAMES = {
    1: "First Trimester",
    2: "Second Trimester",
    3: "Third Trimester",
}


@dataclass(frozen=True)
class PregnancyResult:
    """Gestational age on the reference date.

    Attributes:
        gestational_weeks: Completed weeks, 0–40.
        gestational_days:  Total days since LMP, clamped to 0–280.
        day_in_week:       Day within the current week, 1–7.
        due_date:          Estimated due date.
        trimester:         1, 2 or 3.
        progress:          Percentage of a full-term pregnancy, 0–100.
    """

    gestational_weeks: int
    gestational_days: int
    day_in_week: int
    due_date: date
    trimester: int
    progress: float


@dataclass(frozen=True)
class CycleResult:
    """Cycle estimate on the reference date.

    Attributes:
        next_period:            Estimated start of the next period.
        fertile_window_start:   First day of the fertile window.
        fertile_window_end:     Last day of the fertile window.
        days_until_next_period: Negative once the estimate has passed.
        cycle_progress:         Percentage of the cycle elapsed, capped at 100.
    """

    cycle_progress: float = 0.0
    next_period: date | None = None
    fertile_window_start: date | None = None
    fertile_window_end: date | None = None
    days_until_next_period: int | None = None


class GestationCalculator:
    """Compute pregnancy and cycle estimates.

    Usage::

        calc = GestationCalculator()
        pregnancy = calc.compute_gestation(last_period=date(2026, 3, 2))
        cycle = calc.compute_cycle(last_period=date(2026, 10, 1), cycle_length=30)
    """

    def __init__(self, config: CareConfig | None = None) -> None:
        self._config = config or get_care_config()

    def trimester_for_week(self, week: int) -> int:
        pg = self._config.pregnancy
        if week <= pg.first_trimester_max_week:
            return 1
        if week <= pg.second_trimester_max_week:
            return 2
        return 3

    def compute_gestation(
        self,
        last_period: date | None = None,
        due_date: date | None = None,
        cycle_length: int | None = None,
        as_of: date | None = None,
    ) -> PregnancyResult | None:
        """Compute gestational age from an LMP or a due date.

        A due date takes precedence when both are supplied.  With only an
        LMP, the due date is shifted by the difference between the user's
        cycle length and the reference 28-day cycle.

        Args:
            last_period:  First day of the last menstrual period.
            due_date:     Estimated due date.
            cycle_length: Cycle length in days (defaults to the configured 28).
            as_of:        Reference date (defaults to today).

        Returns:
            PregnancyResult, or None when neither date is known.
        """
        if last_period is None and due_date is None:
            return None

        pg = self._config.pregnancy
        today = as_of or date.today()
        if cycle_length is None:
            cycle_length = self._config.cycle.default_length

        if due_date is not None:
            edd = due_date
            gestational_days = pg.full_term_days - (edd - today).days
        else:
            adjustment = cycle_length - pg.reference_cycle_length
            edd = last_period + timedelta(days=pg.full_term_days + adjustment)
            gestational_days = (today - last_period).days

        gestational_days = max(0, min(gestational_days, pg.full_term_days))
        weeks = gestational_days // 7
        day_in_week = gestational_days % 7 + 1
        trimester = self.trimester_for_week(weeks)
        progress = min(100.0, weeks / pg.display_weeks_cap * 100)

        logger.debug(
            "Gestation as of %s: %d days (week %d, trimester %d), due %s",
            today, gestational_days, weeks, trimester, edd,
        )

        return PregnancyResult(
            gestational_weeks=min(weeks, pg.display_weeks_cap),
            gestational_days=gestational_days,
            day_in_week=day_in_week,
            due_date=edd,
            trimester=trimester,
            progress=progress,
        )

    def compute_cycle(
        self,
        last_period: date | None = None,
        cycle_length: int | None = None,
        as_of: date | None = None,
    ) -> CycleResult:
        """Estimate the next period and fertile window.

        Ovulation is placed one luteal phase (14 days) before the next
        period; the fertile window runs from 5 days before ovulation to
        1 day after it.

        Args:
            last_period:  First day of the last period.
            cycle_length: Cycle length in days (defaults to the configured 28).
            as_of:        Reference date (defaults to today).

        Returns:
            CycleResult.  Without a last period only ``cycle_progress`` (0) is set.
        """
        if last_period is None:
            return CycleResult()

        cy = self._config.cycle
        today = as_of or date.today()
        if cycle_length is None:
            cycle_length = cy.default_length

        days_since = (today - last_period).days
        next_period = last_period + timedelta(days=cycle_length)
        ovulation_offset = cycle_length - cy.luteal_phase_days

        return CycleResult(
            cycle_progress=min(100.0, days_since / cycle_length * 100),
            next_period=next_period,
            fertile_window_start=last_period
            + timedelta(days=ovulation_offset - cy.fertile_days_before_ovulation),
            fertile_window_end=last_period
            + timedelta(days=ovulation_offset + cy.fertile_days_after_ovulation),
            days_until_next_period=(next_period - today).days,
        )


def compute_gestation(
    last_period: date | None = None,
    due_date: date | None = None,
    cycle_length: int | None = None,
    as_of: date | None = None,
) -> PregnancyResult | None:
    """Module-level shortcut for ``GestationCalculator().compute_gestation``."""
    return GestationCalculator().compute_gestation(last_period, due_date, cycle_length, as_of)


def compute_cycle(
    last_period: date | None = None,
    cycle_length: int | None = None,
    as_of: date | None = None,
) -> CycleResult:
    """Module-level shortcut for ``GestationCalculator().compute_cycle``."""
    return GestationCalculator().compute_cycle(last_period, cycle_length, as_of)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def fruit_for_week(week: int) -> SizeComparison:
    """Return the fruit/vegetable the baby is compared to in a given week."""
    content = get_weekly_content()
    return content.fruit_by_week.get(week, content.fallback_fruit)


def week_display_text(pregnancy: PregnancyResult) -> str:
    if pregnancy.gestational_weeks == 0:
        return f"Day {pregnancy.day_in_week}"
    return f"Week {pregnancy.gestational_weeks}, Day {pregnancy.day_in_week}"


def trimester_text(trimester: int) -> str:
    return _TRIMESTER_NAMES[trimester]


def format_due_date(due_date: date) -> str:
    """Format as e.g. ``October 19, 2026``."""
    return f"{due_date:%B} {due_date.day}, {due_date.year}"


def days_until_due(due_date: date, as_of: date | None = None) -> int:
    """Days remaining until the due date, never negative."""
    today = as_of or date.today()
    return max(0, (due_date - today).days)
