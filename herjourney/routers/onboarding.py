"""Onboarding endpoint: first-run profile setup."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from herjourney.dependencies import Calculator, State
from herjourney.models.tracking import OnboardingCreate, OnboardingRead
from herjourney.routers.pregnancy import pregnancy_read

router = APIRouter(prefix="/onboarding", tags=["onboarding"])
logger = logging.getLogger("herjourney.onboarding")


@router.post("", response_model=OnboardingRead, status_code=201)
def complete_onboarding(body: OnboardingCreate, state: State, calc: Calculator) -> Any:
    """Save the onboarding answers and return a gestation preview."""
    if body.is_pregnant and body.lmp is None and body.edd is None:
        raise HTTPException(
            status_code=422,
            detail="A last period date or due date is required when pregnant",
        )

    state.update_user(
        name=body.name or None,
        email=body.email or None,
        is_pregnant=body.is_pregnant,
        lmp=body.lmp,
        edd=body.edd,
        cycle_length=body.cycle_length,
    )
    logger.info("Onboarding completed (pregnant=%s)", body.is_pregnant)

    preview = None
    if body.is_pregnant:
        result = calc.compute_gestation(body.lmp, body.edd, body.cycle_length)
        if result is not None:
            preview = pregnancy_read(result)
    return OnboardingRead(is_pregnant=body.is_pregnant, preview=preview)
