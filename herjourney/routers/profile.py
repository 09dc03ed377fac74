"""Profile, settings, data export and account deletion endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from herjourney.dependencies import State
from herjourney.models.state import Preferences, UserProfile
from herjourney.models.tracking import ProfileUpdate, SettingsUpdate

router = APIRouter(prefix="/profile", tags=["profile"])
logger = logging.getLogger("herjourney.profile")


@router.get("", response_model=UserProfile)
def get_profile(state: State) -> Any:
    return state.get().user


@router.patch("", response_model=UserProfile)
def update_profile(body: ProfileUpdate, state: State) -> Any:
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")
    return state.update_user(**updates).user


@router.patch("/settings", response_model=Preferences)
def update_settings(body: SettingsUpdate, state: State) -> Any:
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")
    return state.update_settings(**updates).settings


@router.get("/export")
def export_data(state: State) -> dict:
    """Full state document, suitable for download as JSON."""
    return state.export()


@router.delete("", status_code=204)
def delete_account(state: State) -> None:
    """Permanently delete every stored piece of personal data."""
    state.delete_account()
    logger.info("Account deleted via API")
