"""Pydantic models for the persisted application state.

The whole state document is versioned; ``CURRENT_STATE_VERSION`` is bumped
whenever the layout changes and ``migrate_if_needed`` in
``herjourney.storage.repository`` handles older documents.
"""

from __future__ import annotations

import uuid
from datetime import date
from enum import Enum

from pydantic import Field

from herjourney.care.analyzer import AnalyzerEntry, RiskLevel
from herjourney.models.base import HerJourneyBase

CURRENT_STATE_VERSION = 1


# ---------- Enums ----------

class Units(str, Enum):
    metric = "metric"
    imperial = "imperial"


class Theme(str, Enum):
    light = "light"
    dark = "dark"
    system = "system"


# ---------- User ----------

class UserProfile(HerJourneyBase):
    name: str | None = None
    email: str | None = None
    is_pregnant: bool = False
    lmp: date | None = None  # last menstrual period
    edd: date | None = None  # estimated due date
    cycle_length: int = 28
    premium_active: bool = False
    email_subscription: bool = False


class ApiKeys(HerJourneyBase):
    openai_api_key: str | None = None
    mapbox_token: str | None = None


# ---------- Logs ----------

class AnalyzerLog(HerJourneyBase):
    """A stored analyzer entry together with the result computed for it."""

    date: date
    water_cups: float | None = None
    caffeine_mg: float | None = None
    alcohol_drinks: float | None = None
    sleep_hours: float | None = None
    exercise_mins: float | None = None
    smoked: bool | None = None
    prenatal_vitamin: bool | None = None
    bleeding: bool | None = None
    fever: bool | None = None
    severe_pain: bool | None = None
    headaches_vision: bool | None = None
    swelling: bool | None = None
    score: int | None = None
    level: RiskLevel | None = None
    messages: list[str] = Field(default_factory=list)

    def to_entry(self) -> AnalyzerEntry:
        return AnalyzerEntry(**self.model_dump(exclude={"level", "messages"}))


class Note(HerJourneyBase):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    date: date
    text: str
    tags: list[str] = Field(default_factory=list)
    pinned: bool = False


class Appointment(HerJourneyBase):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str
    date: date
    notes: str | None = None


class Logs(HerJourneyBase):
    symptoms_by_date: dict[date, list[str]] = Field(default_factory=dict)
    analyzer_by_date: dict[date, AnalyzerLog] = Field(default_factory=dict)
    period_logs: list[date] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)


class Preferences(HerJourneyBase):
    units: Units = Units.metric
    theme: Theme = Theme.system


# ---------- Root document ----------

class AppState(HerJourneyBase):
    version: int = CURRENT_STATE_VERSION
    user: UserProfile = Field(default_factory=UserProfile)
    keys: ApiKeys = Field(default_factory=ApiKeys)
    logs: Logs = Field(default_factory=Logs)
    settings: Preferences = Field(default_factory=Preferences)
