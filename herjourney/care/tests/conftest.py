"""Shared fixtures for care calculator tests."""

from __future__ import annotations

from datetime import date

import pytest

from herjourney.care.analyzer import AnalyzerEntry, HealthRiskScorer
from herjourney.care.config_loader import CareConfig, load_care_config
from herjourney.care.gestation import GestationCalculator

# Canonical reference date for every calculation
TEST_DATE = date(2026, 2, 23)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def care_config() -> CareConfig:
    """Load the real care config for tests."""
    return load_care_config()


@pytest.fixture
def calculator(care_config: CareConfig) -> GestationCalculator:
    return GestationCalculator(care_config)


@pytest.fixture
def scorer(care_config: CareConfig) -> HealthRiskScorer:
    return HealthRiskScorer(care_config)


# ---------------------------------------------------------------------------
# Analyzer entries
# ---------------------------------------------------------------------------


@pytest.fixture
def healthy_entry() -> AnalyzerEntry:
    """A day with every lifestyle input in the healthy range."""
    return AnalyzerEntry(
        date=date(2025, 1, 1),
        water_cups=8,
        sleep_hours=8,
        exercise_mins=200,
        caffeine_mg=0,
        alcohol_drinks=0,
        smoked=False,
        prenatal_vitamin=True,
    )
