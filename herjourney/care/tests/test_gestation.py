"""Tests for gestational age and cycle estimates."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from herjourney.care.gestation import (
    CycleResult,
    GestationCalculator,
    PregnancyResult,
    compute_cycle,
    compute_gestation,
    days_until_due,
    format_due_date,
    fruit_for_week,
    trimester_text,
    week_display_text,
)
from herjourney.care.tests.conftest import TEST_DATE


# ---------------------------------------------------------------------------
# Pregnancy
# ---------------------------------------------------------------------------


class TestComputeGestation:
    def test_no_dates_returns_none(self, calculator: GestationCalculator) -> None:
        assert calculator.compute_gestation(None, None, 28, as_of=TEST_DATE) is None

    def test_from_due_date(self, calculator: GestationCalculator) -> None:
        due = TEST_DATE + timedelta(days=100)
        result = calculator.compute_gestation(due_date=due, as_of=TEST_DATE)
        assert result is not None
        assert result.gestational_days == 180
        assert result.gestational_weeks == 25
        assert result.day_in_week == 6
        assert result.trimester == 2
        assert result.due_date == due
        assert result.progress == pytest.approx(62.5)

    @pytest.mark.parametrize("offset", [-30, -1, 0, 1, 45, 140, 279, 280, 281, 400])
    def test_due_date_days_follow_280_minus_distance(
        self, calculator: GestationCalculator, offset: int
    ) -> None:
        due = TEST_DATE + timedelta(days=offset)
        result = calculator.compute_gestation(due_date=due, as_of=TEST_DATE)
        assert result is not None
        assert result.gestational_days == max(0, min(280 - offset, 280))

    def test_due_date_far_in_future_clamps_to_zero(
        self, calculator: GestationCalculator
    ) -> None:
        result = calculator.compute_gestation(
            due_date=TEST_DATE + timedelta(days=300), as_of=TEST_DATE
        )
        assert result is not None
        assert result.gestational_days == 0
        assert result.gestational_weeks == 0
        assert result.day_in_week == 1
        assert result.trimester == 1
        assert result.progress == 0

    def test_past_due_date_clamps_to_full_term(
        self, calculator: GestationCalculator
    ) -> None:
        result = calculator.compute_gestation(
            due_date=TEST_DATE - timedelta(days=10), as_of=TEST_DATE
        )
        assert result is not None
        assert result.gestational_days == 280
        assert result.gestational_weeks == 40
        assert result.trimester == 3
        assert result.progress == 100

    def test_from_lmp(self, calculator: GestationCalculator) -> None:
        lmp = TEST_DATE - timedelta(days=70)
        result = calculator.compute_gestation(last_period=lmp, as_of=TEST_DATE)
        assert result is not None
        assert result.gestational_days == 70
        assert result.gestational_weeks == 10
        assert result.day_in_week == 1
        assert result.due_date == lmp + timedelta(days=280)

    @pytest.mark.parametrize("cycle_length", [21, 26, 28, 32, 40])
    def test_lmp_due_date_shifts_with_cycle_length(
        self, calculator: GestationCalculator, cycle_length: int
    ) -> None:
        lmp = date(2025, 9, 1)
        result = calculator.compute_gestation(lmp, None, cycle_length, as_of=TEST_DATE)
        assert result is not None
        assert result.due_date == lmp + timedelta(days=280 + cycle_length - 28)

    def test_due_date_takes_precedence_over_lmp(
        self, calculator: GestationCalculator
    ) -> None:
        due = TEST_DATE + timedelta(days=140)
        lmp = TEST_DATE - timedelta(days=10)
        result = calculator.compute_gestation(lmp, due, 28, as_of=TEST_DATE)
        assert result is not None
        assert result.due_date == due
        assert result.gestational_days == 140

    def test_future_lmp_clamps_to_zero(self, calculator: GestationCalculator) -> None:
        result = calculator.compute_gestation(
            last_period=TEST_DATE + timedelta(days=5), as_of=TEST_DATE
        )
        assert result is not None
        assert result.gestational_days == 0

    @pytest.mark.parametrize(
        "week,trimester",
        [(0, 1), (13, 1), (14, 2), (27, 2), (28, 3), (40, 3)],
    )
    def test_trimester_boundaries(
        self, calculator: GestationCalculator, week: int, trimester: int
    ) -> None:
        lmp = TEST_DATE - timedelta(days=week * 7)
        result = calculator.compute_gestation(last_period=lmp, as_of=TEST_DATE)
        assert result is not None
        assert result.gestational_weeks == week
        assert result.trimester == trimester
        assert calculator.trimester_for_week(week) == trimester

    def test_result_is_immutable(self, calculator: GestationCalculator) -> None:
        result = calculator.compute_gestation(
            last_period=TEST_DATE - timedelta(days=30), as_of=TEST_DATE
        )
        with pytest.raises(AttributeError):
            result.trimester = 2  # type: ignore[misc]

    def test_module_shortcut(self) -> None:
        result = compute_gestation(TEST_DATE - timedelta(days=14), as_of=TEST_DATE)
        assert isinstance(result, PregnancyResult)
        assert result.gestational_weeks == 2


# ---------------------------------------------------------------------------
# Cycle
# ---------------------------------------------------------------------------


class TestComputeCycle:
    def test_no_last_period_returns_zero_progress(
        self, calculator: GestationCalculator
    ) -> None:
        result = calculator.compute_cycle(None, 28, as_of=TEST_DATE)
        assert result == CycleResult(cycle_progress=0)
        assert result.next_period is None
        assert result.fertile_window_start is None
        assert result.fertile_window_end is None
        assert result.days_until_next_period is None

    def test_regular_cycle(self, calculator: GestationCalculator) -> None:
        lmp = TEST_DATE - timedelta(days=7)
        result = calculator.compute_cycle(lmp, 28, as_of=TEST_DATE)
        assert result.next_period == lmp + timedelta(days=28)
        assert result.days_until_next_period == 21
        assert result.fertile_window_start == lmp + timedelta(days=9)
        assert result.fertile_window_end == lmp + timedelta(days=15)
        assert result.cycle_progress == pytest.approx(25.0)

    def test_fertile_window_tracks_cycle_length(
        self, calculator: GestationCalculator
    ) -> None:
        lmp = date(2026, 2, 1)
        result = calculator.compute_cycle(lmp, 35, as_of=TEST_DATE)
        # Ovulation at day 21 of a 35-day cycle
        assert result.fertile_window_start == date(2026, 2, 17)
        assert result.fertile_window_end == date(2026, 2, 23)
        assert (result.fertile_window_end - result.fertile_window_start).days == 6

    def test_progress_caps_at_100_when_overdue(
        self, calculator: GestationCalculator
    ) -> None:
        lmp = TEST_DATE - timedelta(days=40)
        result = calculator.compute_cycle(lmp, 28, as_of=TEST_DATE)
        assert result.cycle_progress == 100
        assert result.days_until_next_period == -12

    def test_module_shortcut_defaults_to_28_days(self) -> None:
        lmp = TEST_DATE - timedelta(days=14)
        result = compute_cycle(lmp, as_of=TEST_DATE)
        assert result.next_period == lmp + timedelta(days=28)
        assert result.cycle_progress == pytest.approx(50.0)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


class TestDisplayHelpers:
    def _pregnancy(self, days: int) -> PregnancyResult:
        return PregnancyResult(
            gestational_weeks=days // 7,
            gestational_days=days,
            day_in_week=days % 7 + 1,
            due_date=date(2026, 10, 19),
            trimester=1,
            progress=0.0,
        )

    def test_week_text_in_first_week_shows_day_only(self) -> None:
        assert week_display_text(self._pregnancy(3)) == "Day 4"

    def test_week_text_shows_week_and_day(self) -> None:
        assert week_display_text(self._pregnancy(86)) == "Week 12, Day 3"

    def test_trimester_text(self) -> None:
        assert trimester_text(1) == "First Trimester"
        assert trimester_text(3) == "Third Trimester"

    def test_format_due_date(self) -> None:
        assert format_due_date(date(2026, 10, 9)) == "October 9, 2026"

    def test_days_until_due_never_negative(self) -> None:
        assert days_until_due(TEST_DATE + timedelta(days=12), as_of=TEST_DATE) == 12
        assert days_until_due(TEST_DATE - timedelta(days=3), as_of=TEST_DATE) == 0

    def test_fruit_for_week(self) -> None:
        assert fruit_for_week(20).name == "Banana"
        assert fruit_for_week(40).name == "Small pumpkin"

    def test_fruit_for_unknown_week_falls_back(self) -> None:
        assert fruit_for_week(0).name == "Little one"
