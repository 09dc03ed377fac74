"""Shared fixtures for API tests.

The app is built without running its lifespan; the state service is swapped
for an in-memory one through ``dependency_overrides``.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from herjourney.config import Settings, get_settings
from herjourney.main import create_app
from herjourney.storage.repository import InMemoryStateRepository, StateRepository
from herjourney.storage.service import StateService, get_state_service

TEST_PREMIUM_CODE = "TEST-CODE"


@pytest.fixture
def repository() -> StateRepository:
    return InMemoryStateRepository()


@pytest.fixture
def service(repository: StateRepository) -> StateService:
    return StateService(repository)


@pytest.fixture
def app(service: StateService) -> Iterator[FastAPI]:
    application = create_app()
    application.dependency_overrides[get_state_service] = lambda: service
    application.dependency_overrides[get_settings] = lambda: Settings(
        state_backend="memory", premium_demo_code=TEST_PREMIUM_CODE
    )
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
