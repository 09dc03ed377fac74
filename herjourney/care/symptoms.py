"""Symptom catalogues for the daily tracker."""

from __future__ import annotations

from datetime import date
from typing import Mapping

PREGNANCY_SYMPTOMS: tuple[str, ...] = (
    "Nausea",
    "Fatigue",
    "Breast Tenderness",
    "Cravings",
    "Mood Swings",
    "Headaches",
    "Back Pain",
    "Heartburn",
    "Frequent Urination",
    "Constipation",
    "Leg Cramps",
    "Insomnia",
)

PERIOD_SYMPTOMS: tuple[str, ...] = (
    "Cramps",
    "Bloating",
    "Mood Changes",
    "Fatigue",
    "Headaches",
    "Acne",
    "Breast Tenderness",
    "Back Pain",
    "Food Cravings",
    "Irritability",
    "Sleep Issues",
)


def catalog_for(is_pregnant: bool) -> list[str]:
    return list(PREGNANCY_SYMPTOMS if is_pregnant else PERIOD_SYMPTOMS)


def symptom_history(
    symptoms_by_date: Mapping[date, list[str]],
) -> list[tuple[date, list[str]]]:
    """Logged days as ``(date, symptoms)`` pairs, newest first."""
    return sorted(
        ((day, list(symptoms)) for day, symptoms in symptoms_by_date.items()),
        key=lambda pair: pair[0],
        reverse=True,
    )
