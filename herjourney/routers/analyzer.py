"""Health analyzer endpoints: score a day, store it, and summarise trends.

NOT MEDICAL ADVICE.  Every result carries the medical disclaimer.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Query

from herjourney.care.analyzer import AnalyzerResult, level_text
from herjourney.dependencies import Scorer, State
from herjourney.models.state import AnalyzerLog
from herjourney.models.tracking import AnalyzerEntryCreate, AnalyzerResultRead, TrendRead

router = APIRouter(prefix="/analyzer", tags=["analyzer"])


def _result_read(result: AnalyzerResult) -> AnalyzerResultRead:
    return AnalyzerResultRead(
        score=result.score,
        level=result.level,
        level_text=level_text(result.level),
        messages=result.messages,
        recommendations=result.recommendations,
    )


@router.post("/score", response_model=AnalyzerResultRead)
def score_entry(body: AnalyzerEntryCreate, scorer: Scorer) -> Any:
    """Score one day of inputs without storing them."""
    return _result_read(scorer.score(body.to_entry()))


@router.post("/entries", response_model=AnalyzerLog, status_code=201)
def save_entry(body: AnalyzerEntryCreate, scorer: Scorer, state: State) -> Any:
    """Score one day of inputs and store it, replacing any entry for that day."""
    result = scorer.score(body.to_entry())
    log = AnalyzerLog(
        **body.model_dump(),
        score=result.score,
        level=result.level,
        messages=result.messages,
    )
    return state.save_analyzer_entry(log)


@router.get("/entries", response_model=list[AnalyzerLog])
def list_entries(state: State, limit: int = Query(default=30, ge=1, le=365)) -> Any:
    entries = state.get().logs.analyzer_by_date.values()
    return sorted(entries, key=lambda e: e.date, reverse=True)[:limit]


@router.get("/trends", response_model=TrendRead)
def get_trends(state: State, scorer: Scorer) -> Any:
    """Averages and risk direction over the most recent stored entries."""
    logs = state.get().logs.analyzer_by_date
    summary = scorer.trend_analysis({day: log.to_entry() for day, log in logs.items()})
    return TrendRead(**asdict(summary))
