"""Pregnancy, cycle and dashboard endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from herjourney.care.gestation import (
    CycleResult,
    PregnancyResult,
    days_until_due,
    format_due_date,
    fruit_for_week,
    trimester_text,
    week_display_text,
)
from herjourney.care.tips import general_tips, tips_for_week
from herjourney.dependencies import Calculator, State
from herjourney.models.tracking import (
    MAX_CYCLE_DAYS,
    MIN_CYCLE_DAYS,
    CycleRead,
    DashboardRead,
    PregnancyRead,
    SizeComparisonRead,
)

router = APIRouter(tags=["pregnancy"])


def pregnancy_read(result: PregnancyResult) -> PregnancyRead:
    return PregnancyRead(
        **asdict(result),
        week_text=week_display_text(result),
        trimester_text=trimester_text(result.trimester),
        due_date_text=format_due_date(result.due_date),
        days_until_due=days_until_due(result.due_date),
    )


def cycle_read(result: CycleResult) -> CycleRead:
    return CycleRead(**asdict(result))


@router.get("/pregnancy", response_model=PregnancyRead)
def get_pregnancy(state: State, calc: Calculator) -> Any:
    """Gestational age for the stored profile."""
    user = state.get().user
    if not user.is_pregnant:
        raise HTTPException(status_code=404, detail="Profile is not marked as pregnant")
    result = calc.compute_gestation(user.lmp, user.edd, user.cycle_length)
    if result is None:
        raise HTTPException(status_code=404, detail="No LMP or due date on profile")
    return pregnancy_read(result)


@router.get("/pregnancy/preview", response_model=PregnancyRead)
def preview_pregnancy(
    calc: Calculator,
    lmp: date | None = Query(default=None),
    edd: date | None = Query(default=None),
    cycle_length: int = Query(default=28, ge=MIN_CYCLE_DAYS, le=MAX_CYCLE_DAYS),
) -> Any:
    """Gestational age for arbitrary dates, without touching stored state."""
    result = calc.compute_gestation(lmp, edd, cycle_length)
    if result is None:
        raise HTTPException(status_code=400, detail="Provide lmp or edd")
    return pregnancy_read(result)


@router.get("/cycle", response_model=CycleRead)
def get_cycle(state: State, calc: Calculator) -> Any:
    """Next period and fertile window for the stored profile."""
    user = state.get().user
    return cycle_read(calc.compute_cycle(user.lmp, user.cycle_length))


@router.get("/dashboard", response_model=DashboardRead)
def get_dashboard(state: State, calc: Calculator) -> Any:
    user = state.get().user
    greeting = f"Hello, {user.name}!" if user.name else "Hello there!"

    pregnancy = None
    cycle = None
    fruit = None
    if user.is_pregnant:
        result = calc.compute_gestation(user.lmp, user.edd, user.cycle_length)
        if result is not None:
            pregnancy = pregnancy_read(result)
            size = fruit_for_week(result.gestational_weeks)
            fruit = SizeComparisonRead(name=size.name, description=size.description)
    elif user.lmp:
        cycle = cycle_read(calc.compute_cycle(user.lmp, user.cycle_length))

    tips = tips_for_week(pregnancy.gestational_weeks) if pregnancy else general_tips()

    return DashboardRead(
        greeting=greeting,
        is_pregnant=user.is_pregnant,
        is_premium=user.premium_active,
        pregnancy=pregnancy,
        cycle=cycle,
        tips=tips,
        fruit=fruit,
    )
