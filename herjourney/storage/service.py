"""Read-modify-write operations on the application state.

``StateService`` wraps a ``StateRepository`` and serialises updates behind a
lock so concurrent requests never interleave a load and a save.  Every
mutation goes through ``update()``, which hands a private copy of the
current state to an updater and saves whatever it returns.

A module-level service is initialised once at app startup::

    init_state_service(settings)
    service = get_state_service()
    service.update_user(is_pregnant=True, lmp=date(2026, 3, 2))
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import date
from typing import Any, Callable, TypeVar

from herjourney.care.symptoms import symptom_history
from herjourney.config import Settings, get_settings
from herjourney.models.base import HerJourneyBase
from herjourney.models.state import (
    AnalyzerLog,
    Appointment,
    AppState,
    Note,
)
from herjourney.storage.repository import StateRepository, create_state_repository

logger = logging.getLogger("herjourney.storage.service")

StateUpdater = Callable[[AppState], AppState]
ModelT = TypeVar("ModelT", bound=HerJourneyBase)


class NotFoundError(LookupError):
    """Raised when an update or delete targets a record that does not exist."""


def _merged(model: ModelT, updates: dict[str, Any]) -> ModelT:
    """Apply partial updates and validate the result.

    Raises:
        pydantic.ValidationError: If the merged record is invalid.
    """
    return type(model).model_validate({**model.model_dump(), **updates})


class StateService:
    """Typed helpers over a state repository."""

    def __init__(self, repository: StateRepository) -> None:
        self._repo = repository
        self._lock = threading.RLock()

    @property
    def repository(self) -> StateRepository:
        return self._repo

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    def get(self) -> AppState:
        return self._repo.load()

    def update(self, updater: StateUpdater) -> AppState:
        """Apply ``updater`` to a copy of the current state and persist the result."""
        with self._lock:
            current = self._repo.load()
            new_state = updater(current.model_copy(deep=True))
            self._repo.save(new_state)
            return new_state

    def export(self) -> dict[str, Any]:
        """The full state as a JSON-ready dict."""
        return self.get().model_dump(mode="json")

    def delete_account(self) -> None:
        """Remove every piece of stored personal data."""
        with self._lock:
            self._repo.clear()
        logger.info("Account data deleted")

    # ------------------------------------------------------------------
    # User profile, settings and keys
    # ------------------------------------------------------------------

    def update_user(self, **updates: Any) -> AppState:
        """Merge ``updates`` into the profile.  Invalid values raise before anything is saved."""
        def _apply(state: AppState) -> AppState:
            state.user = _merged(state.user, updates)
            return state

        return self.update(_apply)

    def update_settings(self, **updates: Any) -> AppState:
        def _apply(state: AppState) -> AppState:
            state.settings = _merged(state.settings, updates)
            return state

        return self.update(_apply)

    def update_api_keys(self, **updates: Any) -> AppState:
        def _apply(state: AppState) -> AppState:
            state.keys = _merged(state.keys, updates)
            return state

        return self.update(_apply)

    def enable_premium(self) -> AppState:
        logger.info("Premium enabled")
        return self.update_user(premium_active=True)

    def disable_premium(self) -> AppState:
        logger.info("Premium disabled")
        return self.update_user(premium_active=False)

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def save_analyzer_entry(self, entry: AnalyzerLog) -> AnalyzerLog:
        """Store an analyzer entry, replacing any entry for the same day."""
        def _apply(state: AppState) -> AppState:
            state.logs.analyzer_by_date[entry.date] = entry
            return state

        self.update(_apply)
        return entry

    def save_symptoms(self, day: date, symptoms: list[str]) -> list[str]:
        """Store the symptom list for a day, replacing any earlier list."""
        def _apply(state: AppState) -> AppState:
            state.logs.symptoms_by_date[day] = list(symptoms)
            return state

        self.update(_apply)
        return list(symptoms)

    def symptom_history(self) -> list[tuple[date, list[str]]]:
        return symptom_history(self.get().logs.symptoms_by_date)

    def add_period_log(self, day: date) -> list[date]:
        """Record a period start; duplicates are ignored.  Returns all starts, newest first."""
        def _apply(state: AppState) -> AppState:
            if day not in state.logs.period_logs:
                state.logs.period_logs.append(day)
            return state

        state = self.update(_apply)
        return sorted(state.logs.period_logs, reverse=True)

    def add_note(self, **fields: Any) -> Note:
        note = Note(**fields)

        def _apply(state: AppState) -> AppState:
            state.logs.notes.append(note)
            return state

        self.update(_apply)
        return note

    def update_note(self, note_id: uuid.UUID, **updates: Any) -> Note:
        """Apply partial updates to a note.

        Raises:
            NotFoundError: If no note has ``note_id``.
            pydantic.ValidationError: If the updated note would be invalid.
        """
        updated: list[Note] = []

        def _apply(state: AppState) -> AppState:
            for i, note in enumerate(state.logs.notes):
                if note.id == note_id:
                    state.logs.notes[i] = _merged(note, updates)
                    updated.append(state.logs.notes[i])
                    return state
            raise NotFoundError(f"Note {note_id} not found")

        self.update(_apply)
        return updated[0]

    def delete_note(self, note_id: uuid.UUID) -> None:
        """Remove a note.

        Raises:
            NotFoundError: If no note has ``note_id``.
        """
        def _apply(state: AppState) -> AppState:
            remaining = [n for n in state.logs.notes if n.id != note_id]
            if len(remaining) == len(state.logs.notes):
                raise NotFoundError(f"Note {note_id} not found")
            state.logs.notes = remaining
            return state

        self.update(_apply)

    def add_appointment(self, **fields: Any) -> Appointment:
        appointment = Appointment(**fields)

        def _apply(state: AppState) -> AppState:
            state.logs.appointments.append(appointment)
            return state

        self.update(_apply)
        return appointment


# ---------------------------------------------------------------------------
# Module-level service, initialised at app startup
# ---------------------------------------------------------------------------

_service: StateService | None = None


def init_state_service(settings: Settings | None = None) -> StateService:
    """Create the global state service.  Call once at app startup."""
    global _service
    s = settings or get_settings()
    _service = StateService(create_state_repository(s))
    return _service


def close_state_service() -> None:
    global _service
    _service = None


def get_state_service() -> StateService:
    if _service is None:
        raise RuntimeError("State service not initialized; call init_state_service() first")
    return _service
