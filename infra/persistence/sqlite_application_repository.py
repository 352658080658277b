from __future__ import annotations

import json
import sqlite3
from typing import Any, Sequence

from domain.errors import RepositoryError
from domain.models import (
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationUpdate,
    NewApplication,
    compute_application_stats,
)
from domain.ports import ClockPort, IdGeneratorPort
from infra.runtime import SystemClock, UuidIdGenerator

from ._datetime import dt_to_iso
from .mappers import (
    APPLICATION_JSON_FIELDS,
    application_fields_to_row,
    application_from_row,
    new_application_to_row,
)


def _like_pattern(keyword: str) -> str:
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _encode_json_columns(row: dict[str, Any]) -> dict[str, Any]:
    return {
        key: json.dumps(value) if key in APPLICATION_JSON_FIELDS else value
        for key, value in row.items()
    }


class SQLiteApplicationRepository:
    """
    SQLite-backed implementation of ``ApplicationRepositoryPort``.

    Uses the same row shape as the hosted ``applications`` table; ids and
    timestamps are assigned here instead of by the database.
    """

    _SCHEMA_SQL = """\
    CREATE TABLE IF NOT EXISTS applications (
        id             TEXT PRIMARY KEY,
        user_id        TEXT NOT NULL,
        company        TEXT NOT NULL,
        position       TEXT NOT NULL,
        status         TEXT NOT NULL DEFAULT 'Saved',
        applied_date   TEXT,
        notes          TEXT,
        url            TEXT,
        followed_up_at TEXT,
        interview_date TEXT,
        saved_messages TEXT NOT NULL DEFAULT '[]',
        created_at     TEXT NOT NULL,
        updated_at     TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_applications_user ON applications (user_id);
    """

    # Columns added after the first release; older files get them on open.
    _ADDED_COLUMNS = {"saved_messages": "TEXT NOT NULL DEFAULT '[]'"}

    _ORDER_SQL = " ORDER BY applied_date DESC, created_at DESC"

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
        self._add_missing_columns()

    def __enter__(self) -> "SQLiteApplicationRepository":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    async def find_by_id(self, application_id: str) -> Application | None:
        row = self._conn.execute(
            "SELECT * FROM applications WHERE id = ?",
            (application_id,),
        ).fetchone()
        return application_from_row(dict(row)) if row else None

    async def find_by_user_id(self, user_id: str) -> Sequence[Application]:
        return self._select("WHERE user_id = ?" + self._ORDER_SQL, (user_id,))

    async def find_by_status(
        self,
        user_id: str,
        status: ApplicationStatus,
    ) -> Sequence[Application]:
        return self._select(
            "WHERE user_id = ? AND status = ?" + self._ORDER_SQL,
            (user_id, ApplicationStatus(status).value),
        )

    async def search(self, user_id: str, keyword: str) -> Sequence[Application]:
        pattern = _like_pattern(keyword)
        return self._select(
            "WHERE user_id = ? AND ("
            "company LIKE ? ESCAPE '\\' OR position LIKE ? ESCAPE '\\' "
            "OR notes LIKE ? ESCAPE '\\')" + self._ORDER_SQL,
            (user_id, pattern, pattern, pattern),
        )

    async def create(self, application: NewApplication) -> Application:
        created = self._insert_rows([new_application_to_row(application)])
        return created[0]

    async def create_many(
        self,
        applications: Sequence[NewApplication],
    ) -> Sequence[Application]:
        if not applications:
            return []
        return self._insert_rows([new_application_to_row(a) for a in applications])

    async def update(self, application_id: str, update: ApplicationUpdate) -> Application:
        row = _encode_json_columns(application_fields_to_row(update.provided()))
        row["updated_at"] = dt_to_iso(self._clock.now())
        assignments = ", ".join(f"{column} = ?" for column in row)
        try:
            cursor = self._conn.execute(
                f"UPDATE applications SET {assignments} WHERE id = ?",
                (*row.values(), application_id),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to update application: {exc}") from exc
        if cursor.rowcount == 0:
            raise RepositoryError("Failed to update application: no matching row")
        updated = await self.find_by_id(application_id)
        if updated is None:
            raise RepositoryError("Failed to update application: row vanished after update")
        return updated

    async def delete(self, application_id: str) -> None:
        try:
            self._conn.execute("DELETE FROM applications WHERE id = ?", (application_id,))
            self._conn.commit()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete application: {exc}") from exc

    async def delete_by_user_id(self, user_id: str) -> int:
        try:
            cursor = self._conn.execute("DELETE FROM applications WHERE user_id = ?", (user_id,))
            self._conn.commit()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete applications: {exc}") from exc
        return cursor.rowcount

    async def get_stats(self, user_id: str) -> ApplicationStats:
        applications = await self.find_by_user_id(user_id)
        return compute_application_stats(applications, self._clock.now())

    def close(self) -> None:
        self._conn.close()

    # -- helpers ------------------------------------------------------------

    def _add_missing_columns(self) -> None:
        present = {row["name"] for row in self._conn.execute("PRAGMA table_info(applications)")}
        for column, definition in self._ADDED_COLUMNS.items():
            if column not in present:
                self._conn.execute(f"ALTER TABLE applications ADD COLUMN {column} {definition}")
        self._conn.commit()

    def _select(self, where: str, params: tuple[Any, ...]) -> list[Application]:
        rows = self._conn.execute(f"SELECT * FROM applications {where}", params).fetchall()
        return [application_from_row(dict(r)) for r in rows]

    def _insert_rows(self, rows: list[dict[str, Any]]) -> list[Application]:
        now = dt_to_iso(self._clock.now())
        ids: list[str] = []
        try:
            for row in rows:
                row_id = self._ids.new_id()
                full = {**row, "id": row_id, "created_at": now, "updated_at": now}
                columns = ", ".join(full)
                marks = ", ".join("?" for _ in full)
                self._conn.execute(
                    f"INSERT INTO applications ({columns}) VALUES ({marks})",
                    tuple(full.values()),
                )
                ids.append(row_id)
            self._conn.commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            raise RepositoryError(f"Failed to create applications: {exc}") from exc

        found = []
        for row_id in ids:
            row = self._conn.execute("SELECT * FROM applications WHERE id = ?", (row_id,)).fetchone()
            found.append(application_from_row(dict(row)))
        return found
