"""Premium features: demo activation, feature availability and API keys."""

from __future__ import annotations

import hmac
import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from herjourney.dependencies import AppSettings, State
from herjourney.models.state import AppState
from herjourney.models.tracking import ApiKeysUpdate, PremiumActivate, PremiumFeatureRead

router = APIRouter(prefix="/premium", tags=["premium"])
logger = logging.getLogger("herjourney.premium")


def premium_features(state: AppState) -> list[PremiumFeatureRead]:
    """The premium catalogue with availability for the current user."""
    is_premium = state.user.premium_active
    return [
        PremiumFeatureRead(
            title="Smart Notes & Journal",
            description="Keep detailed daily notes with tags, search, and favorites",
            available=is_premium,
        ),
        PremiumFeatureRead(
            title="Calendar Integration",
            description="Sync appointments and milestones to your calendar",
            available=is_premium,
        ),
        PremiumFeatureRead(
            title="AI Health Assistant",
            description="Get personalized answers to your pregnancy questions any time",
            available=is_premium and bool(state.keys.openai_api_key),
        ),
        PremiumFeatureRead(
            title="Clinic Finder",
            description="Find nearby hospitals, clinics, and healthcare providers",
            available=is_premium,
        ),
    ]


@router.get("/features", response_model=list[PremiumFeatureRead])
def list_features(state: State) -> Any:
    return premium_features(state.get())


@router.post("/activate", response_model=list[PremiumFeatureRead])
def activate(body: PremiumActivate, state: State, settings: AppSettings) -> Any:
    """Enable premium with the demo access code."""
    if not hmac.compare_digest(body.code.encode(), settings.premium_demo_code.encode()):
        logger.warning("Rejected premium activation code")
        raise HTTPException(status_code=400, detail="Invalid access code")
    return premium_features(state.enable_premium())


@router.delete("", status_code=204)
def deactivate(state: State) -> None:
    state.disable_premium()


@router.put("/keys", response_model=list[PremiumFeatureRead])
def update_keys(body: ApiKeysUpdate, state: State) -> Any:
    """Store third-party API keys.  Keys are never echoed back."""
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No keys to update")
    return premium_features(state.update_api_keys(**updates))
