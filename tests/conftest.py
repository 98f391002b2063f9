"""Shared fixtures: every test gets its own in-memory database."""

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from jersey_store.core.config import Settings
from jersey_store.database import Database
from jersey_store.main import create_app
from jersey_store.services import CatalogService, CatalogStore

MEMORY_URL = "sqlite://"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(DATABASE_URL=MEMORY_URL, REQUEST_TIMEOUT_SECONDS=5.0)


@pytest.fixture
def database() -> Iterator[Database]:
    db = Database(MEMORY_URL)
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def store(database: Database) -> CatalogStore:
    return CatalogStore(database)


@pytest.fixture
def service(store: CatalogStore) -> CatalogService:
    return CatalogService(store, timeout=5.0)


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def jersey_fields() -> dict[str, Any]:
    return {
        "team": "Super Eagles",
        "country": "Nigeria",
        "price": 59.99,
        "imageUrl": "https://x/y.jpg",
    }
