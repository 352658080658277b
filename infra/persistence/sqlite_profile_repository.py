from __future__ import annotations

import json
import sqlite3
from typing import Any

from domain.errors import RepositoryError
from domain.models import NewProfile, Profile, ProfileUpdate
from domain.ports import ClockPort, IdGeneratorPort
from infra.runtime import SystemClock, UuidIdGenerator

from ._datetime import dt_to_iso
from .mappers import (
    PROFILE_JSON_FIELDS,
    new_profile_to_row,
    profile_fields_to_row,
    profile_from_row,
)


def _encode_json_columns(row: dict[str, Any]) -> dict[str, Any]:
    return {
        key: json.dumps(value) if key in PROFILE_JSON_FIELDS else value
        for key, value in row.items()
    }


class SQLiteProfileRepository:
    """SQLite-backed ``ProfileRepositoryPort``; one row per user."""

    _SCHEMA_SQL = """\
    CREATE TABLE IF NOT EXISTS profiles (
        id          TEXT PRIMARY KEY,
        user_id     TEXT NOT NULL UNIQUE,
        name        TEXT,
        email       TEXT,
        phone       TEXT,
        summary     TEXT,
        skills      TEXT NOT NULL DEFAULT '[]',
        education   TEXT NOT NULL DEFAULT '[]',
        experience  TEXT NOT NULL DEFAULT '[]',
        resume_url  TEXT,
        created_at  TEXT NOT NULL,
        updated_at  TEXT NOT NULL
    );
    """

    def __init__(
        self,
        db_path: str = ":memory:",
        *,
        clock: ClockPort | None = None,
        ids: IdGeneratorPort | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._ids = ids or UuidIdGenerator()
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(self._SCHEMA_SQL)

    def __enter__(self) -> "SQLiteProfileRepository":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    async def find_by_user_id(self, user_id: str) -> Profile | None:
        row = self._conn.execute(
            "SELECT * FROM profiles WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        return profile_from_row(dict(row)) if row else None

    async def create(self, profile: NewProfile) -> Profile:
        now = dt_to_iso(self._clock.now())
        row = _encode_json_columns(new_profile_to_row(profile))
        row.update(id=self._ids.new_id(), created_at=now, updated_at=now)
        self._write(
            f"INSERT INTO profiles ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})",
            tuple(row.values()),
            action="create",
        )
        return await self._require(profile.user_id, action="create")

    async def update(self, user_id: str, update: ProfileUpdate) -> Profile:
        row = _encode_json_columns(profile_fields_to_row(update.provided()))
        row["updated_at"] = dt_to_iso(self._clock.now())
        assignments = ", ".join(f"{column} = ?" for column in row)
        self._write(
            f"UPDATE profiles SET {assignments} WHERE user_id = ?",
            (*row.values(), user_id),
            action="update",
        )
        return await self._require(user_id, action="update")

    async def upsert(self, profile: NewProfile) -> Profile:
        now = dt_to_iso(self._clock.now())
        row = _encode_json_columns(new_profile_to_row(profile))
        row.update(id=self._ids.new_id(), created_at=now, updated_at=now)
        refreshed = [c for c in row if c not in ("id", "user_id", "created_at")]
        self._write(
            f"INSERT INTO profiles ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)}) "
            "ON CONFLICT(user_id) DO UPDATE SET "
            + ", ".join(f"{c} = excluded.{c}" for c in refreshed),
            tuple(row.values()),
            action="upsert",
        )
        return await self._require(profile.user_id, action="upsert")

    def close(self) -> None:
        self._conn.close()

    # -- helpers ------------------------------------------------------------

    def _write(self, sql: str, params: tuple[Any, ...], *, action: str) -> None:
        try:
            self._conn.execute(sql, params)
            self._conn.commit()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to {action} profile: {exc}") from exc

    async def _require(self, user_id: str, *, action: str) -> Profile:
        profile = await self.find_by_user_id(user_id)
        if profile is None:
            raise RepositoryError(f"Failed to {action} profile: no matching row")
        return profile
