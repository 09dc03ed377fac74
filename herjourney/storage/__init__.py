"""Persistence for the HerJourney state document.

Modules:
    repository - StateRepository interface plus JSON-file and in-memory stores
    service    - StateService read-modify-write helpers
"""

from herjourney.storage.repository import (
    InMemoryStateRepository,
    JsonFileStateRepository,
    StateRepository,
    StateStoreError,
    create_state_repository,
    default_state,
    migrate_if_needed,
)
from herjourney.storage.service import (
    NotFoundError,
    StateService,
    get_state_service,
    init_state_service,
)

__all__ = [
    "InMemoryStateRepository",
    "JsonFileStateRepository",
    "StateRepository",
    "StateStoreError",
    "create_state_repository",
    "default_state",
    "migrate_if_needed",
    "NotFoundError",
    "StateService",
    "get_state_service",
    "init_state_service",
]
