"""Tests for StateService read-modify-write helpers."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from pydantic import ValidationError

from herjourney.care.analyzer import RiskLevel
from herjourney.config import Settings
from herjourney.models.state import AnalyzerLog, AppState, Theme
from herjourney.storage import service as service_module
from herjourney.storage.repository import InMemoryStateRepository
from herjourney.storage.service import NotFoundError, StateService


@pytest.fixture
def service() -> StateService:
    return StateService(InMemoryStateRepository())


class TestProfile:
    def test_update_user_persists(self, service: StateService) -> None:
        service.update_user(name="Ada", is_pregnant=True, lmp=date(2026, 1, 5))
        user = service.get().user
        assert user.name == "Ada"
        assert user.is_pregnant is True
        assert user.lmp == date(2026, 1, 5)
        assert user.cycle_length == 28

    def test_update_settings(self, service: StateService) -> None:
        state = service.update_settings(theme=Theme.dark)
        assert state.settings.theme is Theme.dark
        assert service.get().settings.theme is Theme.dark

    def test_premium_toggle(self, service: StateService) -> None:
        assert service.enable_premium().user.premium_active is True
        assert service.disable_premium().user.premium_active is False

    def test_api_keys(self, service: StateService) -> None:
        service.update_api_keys(openai_api_key="sk-test")
        assert service.get().keys.openai_api_key == "sk-test"
        assert service.get().keys.mapbox_token is None

    def test_failed_update_leaves_state_untouched(self, service: StateService) -> None:
        service.update_user(name="Ada")

        def _boom(state: AppState) -> AppState:
            state.user.name = "Changed"
            raise ValueError("boom")

        with pytest.raises(ValueError):
            service.update(_boom)
        assert service.get().user.name == "Ada"

    @pytest.mark.parametrize("field", ["is_pregnant", "cycle_length", "premium_active"])
    def test_null_required_field_is_rejected_before_saving(
        self, service: StateService, field: str
    ) -> None:
        service.update_user(name="Ada")
        service.add_note(date=date(2026, 2, 1), text="keep me")
        with pytest.raises(ValidationError):
            service.update_user(**{field: None})
        state = service.get()
        assert state.user.name == "Ada"
        assert [n.text for n in state.logs.notes] == ["keep me"]

    def test_updates_are_validated(self, service: StateService) -> None:
        state = service.update_user(lmp="2026-01-05")
        assert state.user.lmp == date(2026, 1, 5)
        with pytest.raises(ValidationError):
            service.update_settings(theme="neon")

    def test_export_is_json_ready(self, service: StateService) -> None:
        service.update_user(lmp=date(2026, 1, 5))
        exported = service.export()
        assert exported["version"] == 1
        assert exported["user"]["lmp"] == "2026-01-05"

    def test_delete_account(self, service: StateService) -> None:
        service.update_user(name="Ada")
        service.delete_account()
        assert service.get() == AppState()


class TestLogs:
    def test_analyzer_entry_replaces_same_day(self, service: StateService) -> None:
        day = date(2026, 2, 1)
        service.save_analyzer_entry(AnalyzerLog(date=day, water_cups=4, score=1, level=RiskLevel.ok))
        service.save_analyzer_entry(AnalyzerLog(date=day, water_cups=9, score=0, level=RiskLevel.ok))
        stored = service.get().logs.analyzer_by_date
        assert list(stored) == [day]
        assert stored[day].water_cups == 9

    def test_stored_analyzer_log_converts_to_entry(self, service: StateService) -> None:
        day = date(2026, 2, 1)
        service.save_analyzer_entry(AnalyzerLog(date=day, caffeine_mg=250, score=2))
        entry = service.get().logs.analyzer_by_date[day].to_entry()
        assert entry.caffeine_mg == 250
        assert entry.score == 2

    def test_symptoms_replace_and_history(self, service: StateService) -> None:
        service.save_symptoms(date(2026, 2, 1), ["Nausea"])
        service.save_symptoms(date(2026, 2, 3), ["Fatigue"])
        service.save_symptoms(date(2026, 2, 1), ["Heartburn", "Insomnia"])
        assert service.symptom_history() == [
            (date(2026, 2, 3), ["Fatigue"]),
            (date(2026, 2, 1), ["Heartburn", "Insomnia"]),
        ]

    def test_period_logs_deduplicate(self, service: StateService) -> None:
        service.add_period_log(date(2026, 1, 5))
        service.add_period_log(date(2026, 2, 2))
        starts = service.add_period_log(date(2026, 1, 5))
        assert starts == [date(2026, 2, 2), date(2026, 1, 5)]


class TestNotes:
    def test_add_and_update(self, service: StateService) -> None:
        note = service.add_note(date=date(2026, 2, 1), text="First kick!", tags=["baby"])
        updated = service.update_note(note.id, pinned=True)
        assert updated.id == note.id
        assert updated.pinned is True
        assert updated.text == "First kick!"
        assert service.get().logs.notes == [updated]

    def test_null_note_date_is_rejected(self, service: StateService) -> None:
        service.update_user(name="Ada")
        note = service.add_note(date=date(2026, 2, 1), text="First kick!")
        with pytest.raises(ValidationError):
            service.update_note(note.id, date=None)
        state = service.get()
        assert state.logs.notes == [note]
        assert state.user.name == "Ada"

    def test_update_missing_note(self, service: StateService) -> None:
        with pytest.raises(NotFoundError):
            service.update_note(uuid.uuid4(), pinned=True)

    def test_delete(self, service: StateService) -> None:
        keep = service.add_note(date=date(2026, 2, 1), text="keep")
        drop = service.add_note(date=date(2026, 2, 2), text="drop")
        service.delete_note(drop.id)
        assert [n.id for n in service.get().logs.notes] == [keep.id]
        with pytest.raises(NotFoundError):
            service.delete_note(drop.id)

    def test_add_appointment(self, service: StateService) -> None:
        appt = service.add_appointment(title="Anatomy scan", date=date(2026, 3, 10))
        assert service.get().logs.appointments == [appt]


class TestModuleService:
    def test_get_before_init_raises(self) -> None:
        service_module.close_state_service()
        with pytest.raises(RuntimeError):
            service_module.get_state_service()

    def test_init_and_close(self) -> None:
        created = service_module.init_state_service(Settings(state_backend="memory"))
        try:
            assert service_module.get_state_service() is created
            assert isinstance(created.repository, InMemoryStateRepository)
        finally:
            service_module.close_state_service()
