"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from herjourney.care.analyzer import HealthRiskScorer
from herjourney.care.config_loader import get_care_config
from herjourney.care.gestation import GestationCalculator
from herjourney.config import Settings, get_settings
from herjourney.storage.service import StateService, get_state_service


def get_calculator() -> GestationCalculator:
    return GestationCalculator(get_care_config())


def get_scorer() -> HealthRiskScorer:
    return HealthRiskScorer(get_care_config())


# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
State = Annotated[StateService, Depends(get_state_service)]
Calculator = Annotated[GestationCalculator, Depends(get_calculator)]
Scorer = Annotated[HealthRiskScorer, Depends(get_scorer)]
