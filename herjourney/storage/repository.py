"""State repositories: where the single application state document lives.

Every repository exposes the same three operations::

    state = repo.load()     # never raises for missing or corrupt data
    repo.save(state)        # raises StateStoreError if it cannot persist
    repo.clear()            # forget everything

``load()`` falls back to the default state when nothing is stored, the
document cannot be parsed, or its version predates the first layout.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from herjourney.config import Settings, get_settings
from herjourney.models.state import CURRENT_STATE_VERSION, AppState

logger = logging.getLogger("herjourney.storage")


class StateStoreError(RuntimeError):
    """Raised when the state document cannot be persisted or removed."""


def default_state() -> AppState:
    return AppState()


def migrate_if_needed(raw: Any) -> AppState:
    """Bring a raw stored document up to the current layout.

    Documents without a version, or with a version below 1, are discarded in
    favour of the default state.
    """
    if not isinstance(raw, dict):
        logger.warning("Stored state is not an object; using default state")
        return default_state()

    version = raw.get("version")
    if not isinstance(version, int) or version < 1:
        logger.warning("Stored state has no usable version (%r); using default state", version)
        return default_state()

    if version > CURRENT_STATE_VERSION:
        logger.warning(
            "Stored state version %d is newer than supported version %d",
            version, CURRENT_STATE_VERSION,
        )

    try:
        return AppState.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Stored state failed validation; using default state: %s", exc)
        return default_state()


class StateRepository(ABC):
    """Load and save the application state document."""

    @abstractmethod
    def load(self) -> AppState:
        """Return the stored state, or the default state."""

    @abstractmethod
    def save(self, state: AppState) -> None:
        """Persist the state, replacing whatever was stored."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored state."""


class InMemoryStateRepository(StateRepository):
    """Process-local repository.  Stores a serialized copy, never the live object."""

    def __init__(self, initial: AppState | None = None) -> None:
        self._lock = threading.Lock()
        self._raw: dict | None = initial.model_dump(mode="json") if initial else None

    def load(self) -> AppState:
        with self._lock:
            raw = self._raw
        if raw is None:
            return default_state()
        return migrate_if_needed(raw)

    def save(self, state: AppState) -> None:
        with self._lock:
            self._raw = state.model_dump(mode="json")

    def clear(self) -> None:
        with self._lock:
            self._raw = None


class JsonFileStateRepository(StateRepository):
    """Single JSON file on disk, written atomically via a temp file + rename."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppState:
        if not self._path.exists():
            return default_state()
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not load state from %s: %s", self._path, exc)
            return default_state()
        return migrate_if_needed(raw)

    def save(self, state: AppState) -> None:
        payload = state.model_dump(mode="json")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Could not save state to %s: %s", self._path, exc)
            raise StateStoreError(f"Could not save state: {exc}") from exc

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Could not remove state file %s: %s", self._path, exc)
            raise StateStoreError(f"Could not remove state: {exc}") from exc


def create_state_repository(settings: Settings | None = None) -> StateRepository:
    """Create the repository selected by ``STATE_BACKEND``.

    ``memory`` keeps state in-process; anything else uses the JSON file at
    ``STATE_FILE``.
    """
    s = settings or get_settings()
    if s.state_backend == "memory":
        logger.info("Using in-memory state repository")
        return InMemoryStateRepository()
    logger.info("Using JSON state repository at %s", s.state_file)
    return JsonFileStateRepository(s.state_file)
