"""
Shared fixtures for the school API tests.

- `InMemorySchoolRepository`: storage fake implementing `SchoolRepository`
- app / client fixtures wired to the fake
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.errors import StorageError
from core.settings import Settings
from main import create_app
from schools.validation import SchoolFields


class InMemorySchoolRepository:
    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.healthy = True
        self.fail_with: Exception | None = None
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with is not None:
            raise self.fail_with

    async def insert(self, fields: SchoolFields) -> dict[str, Any]:
        self._check("insert")
        # Strictly increasing timestamps keep creation order deterministic.
        self._clock += timedelta(seconds=1)
        row = {
            "id": self._next_id,
            "name": fields.name,
            "address": fields.address,
            "latitude": fields.latitude,
            "longitude": fields.longitude,
            "created_at": self._clock,
        }
        self.rows[self._next_id] = row
        self._next_id += 1
        return dict(row)

    async def list_all(self) -> list[dict[str, Any]]:
        self._check("list_all")
        ordered = sorted(self.rows.values(), key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [dict(r) for r in ordered]

    async def get_by_id(self, school_id: int) -> dict[str, Any] | None:
        self._check("get_by_id")
        row = self.rows.get(school_id)
        return dict(row) if row is not None else None

    async def update(self, school_id: int, fields: SchoolFields) -> dict[str, Any] | None:
        self._check("update")
        row = self.rows.get(school_id)
        if row is None:
            return None
        row.update(
            name=fields.name,
            address=fields.address,
            latitude=fields.latitude,
            longitude=fields.longitude,
        )
        return dict(row)

    async def delete(self, school_id: int) -> dict[str, Any] | None:
        self._check("delete")
        row = self.rows.pop(school_id, None)
        return dict(row) if row is not None else None

    async def ping(self) -> bool:
        return self.healthy


@pytest.fixture
def repository() -> InMemorySchoolRepository:
    return InMemorySchoolRepository()


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", log_level="WARNING")


@pytest.fixture
def client(repository: InMemorySchoolRepository, settings: Settings) -> TestClient:
    app = create_app(settings=settings, repository=repository)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def storage_failure() -> StorageError:
    return StorageError("Failed to fetch schools from database")


@pytest.fixture
def school_payload() -> dict[str, Any]:
    return {
        "name": "Lincoln Elementary",
        "address": "12 Main St, Springfield",
        "latitude": 42.3601,
        "longitude": -71.0589,
    }
