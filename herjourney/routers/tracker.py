"""Daily symptom and period tracker endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Query

from herjourney.care.symptoms import catalog_for
from herjourney.dependencies import State
from herjourney.models.tracking import PeriodLogCreate, SymptomDayRead, SymptomLogUpdate

router = APIRouter(prefix="/tracker", tags=["tracker"])


@router.get("/symptoms/catalog", response_model=list[str])
def get_symptom_catalog(state: State) -> Any:
    """Symptoms offered for logging, depending on pregnancy status."""
    return catalog_for(state.get().user.is_pregnant)


@router.put("/symptoms/{day}", response_model=SymptomDayRead)
def save_symptoms(day: date, body: SymptomLogUpdate, state: State) -> Any:
    symptoms = state.save_symptoms(day, body.symptoms)
    return SymptomDayRead(date=day, symptoms=symptoms)


@router.get("/symptoms/history", response_model=list[SymptomDayRead])
def get_symptom_history(
    state: State, limit: int = Query(default=10, ge=1, le=365)
) -> Any:
    history = state.symptom_history()[:limit]
    return [SymptomDayRead(date=day, symptoms=symptoms) for day, symptoms in history]


@router.post("/periods", response_model=list[date], status_code=201)
def log_period(body: PeriodLogCreate, state: State) -> Any:
    """Record a period start.  Returns every recorded start, newest first."""
    return state.add_period_log(body.date)


@router.get("/periods", response_model=list[date])
def list_periods(state: State) -> Any:
    return sorted(state.get().logs.period_logs, reverse=True)
