"""Tips library endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Path, Query

from herjourney.care.gestation import fruit_for_week
from herjourney.care.tips import general_tips, tips_for_week
from herjourney.models.tracking import SizeComparisonRead, TipsRead, WeekInfoRead

router = APIRouter(prefix="/tips", tags=["tips"])


@router.get("", response_model=TipsRead)
async def get_tips(week: int | None = Query(default=None, ge=0, le=42)) -> Any:
    """Tips for a pregnancy week, or general tips when no week is given."""
    if week is None:
        return TipsRead(tips=general_tips())
    return TipsRead(week=week, tips=tips_for_week(week))


@router.get("/weeks/{week}", response_model=WeekInfoRead)
async def get_week(week: int = Path(ge=0, le=42)) -> Any:
    size = fruit_for_week(week)
    return WeekInfoRead(
        week=week,
        tips=tips_for_week(week),
        fruit=SizeComparisonRead(name=size.name, description=size.description),
    )
