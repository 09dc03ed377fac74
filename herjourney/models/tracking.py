"""Pydantic request/response models for the HTTP API: onboarding, pregnancy
and cycle estimates, analyzer, tracker, notes, appointments, profile and premium."""

from __future__ import annotations

import datetime as dt
import uuid

from pydantic import EmailStr, Field, field_validator

from herjourney.care.analyzer import AnalyzerEntry, RiskLevel, RiskTrend
from herjourney.models.base import HerJourneyBase
from herjourney.models.state import Theme, Units

# Accepted cycle length range for user input
MIN_CYCLE_DAYS = 14
MAX_CYCLE_DAYS = 60


def _reject_null(value: object) -> object:
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


# ---------- Onboarding / profile ----------

class OnboardingCreate(HerJourneyBase):
    name: str | None = None
    email: EmailStr | None = None
    is_pregnant: bool
    lmp: dt.date | None = None
    edd: dt.date | None = None
    cycle_length: int = Field(default=28, ge=MIN_CYCLE_DAYS, le=MAX_CYCLE_DAYS)


class ProfileUpdate(HerJourneyBase):
    name: str | None = None
    email: EmailStr | None = None
    is_pregnant: bool | None = None
    lmp: dt.date | None = None
    edd: dt.date | None = None
    cycle_length: int | None = Field(default=None, ge=MIN_CYCLE_DAYS, le=MAX_CYCLE_DAYS)
    email_subscription: bool | None = None

    reject_nulls = field_validator("is_pregnant", "cycle_length", "email_subscription")(_reject_null)


class SettingsUpdate(HerJourneyBase):
    units: Units | None = None
    theme: Theme | None = None


# ---------- Pregnancy / cycle ----------

class PregnancyRead(HerJourneyBase):
    gestational_weeks: int
    gestational_days: int
    day_in_week: int
    due_date: dt.date
    trimester: int
    progress: float
    week_text: str
    trimester_text: str
    due_date_text: str
    days_until_due: int


class CycleRead(HerJourneyBase):
    cycle_progress: float
    next_period: dt.date | None = None
    fertile_window_start: dt.date | None = None
    fertile_window_end: dt.date | None = None
    days_until_next_period: int | None = None


class SizeComparisonRead(HerJourneyBase):
    name: str
    description: str


class OnboardingRead(HerJourneyBase):
    is_pregnant: bool
    preview: PregnancyRead | None = None


class WeekInfoRead(HerJourneyBase):
    week: int
    tips: list[str]
    fruit: SizeComparisonRead


class TipsRead(HerJourneyBase):
    week: int | None = None
    tips: list[str]


class DashboardRead(HerJourneyBase):
    greeting: str
    is_pregnant: bool
    is_premium: bool
    pregnancy: PregnancyRead | None = None
    cycle: CycleRead | None = None
    tips: list[str]
    fruit: SizeComparisonRead | None = None


# ---------- Analyzer ----------

class AnalyzerEntryCreate(HerJourneyBase):
    date: dt.date = Field(default_factory=dt.date.today)
    water_cups: float | None = Field(default=None, ge=0)
    caffeine_mg: float | None = Field(default=None, ge=0)
    alcohol_drinks: float | None = Field(default=None, ge=0)
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    exercise_mins: float | None = Field(default=None, ge=0)
    smoked: bool | None = None
    prenatal_vitamin: bool | None = None
    bleeding: bool | None = None
    fever: bool | None = None
    severe_pain: bool | None = None
    headaches_vision: bool | None = None
    swelling: bool | None = None

    def to_entry(self) -> AnalyzerEntry:
        return AnalyzerEntry(**self.model_dump())


class AnalyzerResultRead(HerJourneyBase):
    score: int
    level: RiskLevel
    level_text: str
    messages: list[str]
    recommendations: list[str]


class TrendRead(HerJourneyBase):
    avg_water: int
    avg_sleep: float
    avg_exercise: int
    avg_caffeine: int
    risk_trend: RiskTrend


# ---------- Tracker ----------

class SymptomLogUpdate(HerJourneyBase):
    symptoms: list[str] = Field(default_factory=list)


class SymptomDayRead(HerJourneyBase):
    date: dt.date
    symptoms: list[str]


class PeriodLogCreate(HerJourneyBase):
    date: dt.date = Field(default_factory=dt.date.today)


# ---------- Notes / appointments ----------

class NoteCreate(HerJourneyBase):
    date: dt.date = Field(default_factory=dt.date.today)
    text: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    pinned: bool = False


class NoteUpdate(HerJourneyBase):
    date: dt.date | None = None
    text: str | None = Field(default=None, min_length=1)
    tags: list[str] | None = None
    pinned: bool | None = None

    reject_nulls = field_validator("date", "text", "tags", "pinned")(_reject_null)


class NoteRead(HerJourneyBase):
    id: uuid.UUID
    date: dt.date
    text: str
    tags: list[str]
    pinned: bool


class AppointmentCreate(HerJourneyBase):
    title: str = Field(min_length=1)
    date: dt.date
    notes: str | None = None


class AppointmentRead(HerJourneyBase):
    id: uuid.UUID
    title: str
    date: dt.date
    notes: str | None = None


# ---------- Premium ----------

class PremiumActivate(HerJourneyBase):
    code: str


class ApiKeysUpdate(HerJourneyBase):
    openai_api_key: str | None = None
    mapbox_token: str | None = None


class PremiumFeatureRead(HerJourneyBase):
    title: str
    description: str
    available: bool
