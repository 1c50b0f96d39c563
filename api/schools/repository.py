"""
School persistence (raw SQL).

`SchoolRepository` is the narrow interface the service depends on;
`PostgresSchoolRepository` implements it over `core.db.Database`.
Driver failures are logged here and re-raised as `StorageError` with a stable
client-facing message.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Protocol

import asyncpg

from core.db import Database
from core.errors import StorageError

from .validation import SchoolFields


logger = logging.getLogger(__name__)

SCHOOL_COLUMNS = "id, name, address, latitude, longitude, created_at"

CREATE_SCHOOLS_TABLE = """
CREATE TABLE IF NOT EXISTS schools (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    address VARCHAR(500) NOT NULL,
    latitude DOUBLE PRECISION NOT NULL,
    longitude DOUBLE PRECISION NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class SchoolRepository(Protocol):
    async def insert(self, fields: SchoolFields) -> dict[str, Any]: ...

    async def list_all(self) -> list[dict[str, Any]]: ...

    async def get_by_id(self, school_id: int) -> dict[str, Any] | None: ...

    async def update(self, school_id: int, fields: SchoolFields) -> dict[str, Any] | None: ...

    async def delete(self, school_id: int) -> dict[str, Any] | None: ...

    async def ping(self) -> bool: ...


async def ensure_schema(database: Database) -> None:
    """
    Create the schools table if it does not exist yet. Runs once on startup.
    """
    await database.execute(CREATE_SCHOOLS_TABLE)
    logger.info("schema_ready table=schools")


@asynccontextmanager
async def _storage_call(operation: str, message: str) -> AsyncIterator[None]:
    try:
        yield
    except _DRIVER_ERRORS as exc:
        logger.exception("storage_failed operation=%s", operation)
        raise StorageError(message) from exc


class PostgresSchoolRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, fields: SchoolFields) -> dict[str, Any]:
        async with _storage_call("insert", "Failed to add school to database"):
            row = await self._db.fetch_one(
                f"""
                INSERT INTO schools (name, address, latitude, longitude)
                VALUES ($1, $2, $3, $4)
                RETURNING {SCHOOL_COLUMNS}
                """,
                fields.name,
                fields.address,
                fields.latitude,
                fields.longitude,
            )
        if row is None:
            raise StorageError("Failed to add school to database")
        return row

    async def list_all(self) -> list[dict[str, Any]]:
        async with _storage_call("list_all", "Failed to fetch schools from database"):
            return await self._db.fetch_all(
                f"""
                SELECT {SCHOOL_COLUMNS}
                FROM schools
                ORDER BY created_at DESC, id DESC
                """
            )

    async def get_by_id(self, school_id: int) -> dict[str, Any] | None:
        async with _storage_call("get_by_id", "Failed to fetch school from database"):
            return await self._db.fetch_one(
                f"""
                SELECT {SCHOOL_COLUMNS}
                FROM schools
                WHERE id = $1
                """,
                school_id,
            )

    async def update(self, school_id: int, fields: SchoolFields) -> dict[str, Any] | None:
        async with _storage_call("update", "Failed to update school in database"):
            return await self._db.fetch_one(
                f"""
                UPDATE schools
                SET name = $2,
                    address = $3,
                    latitude = $4,
                    longitude = $5
                WHERE id = $1
                RETURNING {SCHOOL_COLUMNS}
                """,
                school_id,
                fields.name,
                fields.address,
                fields.latitude,
                fields.longitude,
            )

    async def delete(self, school_id: int) -> dict[str, Any] | None:
        async with _storage_call("delete", "Failed to delete school from database"):
            return await self._db.fetch_one(
                f"""
                DELETE FROM schools
                WHERE id = $1
                RETURNING {SCHOOL_COLUMNS}
                """,
                school_id,
            )

    async def ping(self) -> bool:
        try:
            row = await self._db.fetch_one("SELECT 1 AS ok")
        except (*_DRIVER_ERRORS, RuntimeError):
            logger.exception("storage_ping_failed")
            return False
        return row is not None
