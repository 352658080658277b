from __future__ import annotations

import json
import sqlite3
from typing import Any, Sequence

from domain.errors import RepositoryError
from domain.models import InterviewQuestion, NewPracticeSession, PracticeSession
from domain.ports import ClockPort, IdGeneratorPort
from infra.runtime import SystemClock, UuidIdGenerator

from ._datetime import dt_to_iso
from .mappers import new_practice_session_to_row, practice_session_from_row, questions_to_rows


class SQLitePracticeSessionRepository:
    """SQLite-backed ``PracticeSessionRepositoryPort``. Questions are stored as a JSON array."""

    _SCHEMA_SQL = """\
    CREATE TABLE IF NOT EXISTS practice_sessions (
        id             TEXT PRIMARY KEY,
        user_id        TEXT NOT NULL,
        application_id TEXT,
        type           TEXT NOT NULL,
        questions      TEXT NOT NULL DEFAULT '[]',
        created_at     TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_practice_sessions_user ON practice_sessions (user_id);
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

    def __enter__(self) -> "SQLitePracticeSessionRepository":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    async def find_by_id(self, session_id: str) -> PracticeSession | None:
        row = self._conn.execute(
            "SELECT * FROM practice_sessions WHERE id = ?",
            (session_id,),
        ).fetchone()
        return practice_session_from_row(dict(row)) if row else None

    async def find_by_user_id(self, user_id: str) -> Sequence[PracticeSession]:
        return self._select("WHERE user_id = ?", (user_id,))

    async def find_by_application_id(self, application_id: str) -> Sequence[PracticeSession]:
        return self._select("WHERE application_id = ?", (application_id,))

    async def create(self, session: NewPracticeSession) -> PracticeSession:
        row = new_practice_session_to_row(session)
        row["questions"] = json.dumps(row["questions"])
        row.update(id=self._ids.new_id(), created_at=dt_to_iso(self._clock.now()))
        self._write(
            f"INSERT INTO practice_sessions ({', '.join(row)}) "
            f"VALUES ({', '.join('?' for _ in row)})",
            tuple(row.values()),
            action="create",
        )
        return await self._require(row["id"], action="create")

    async def update_questions(
        self,
        session_id: str,
        questions: Sequence[InterviewQuestion],
    ) -> PracticeSession:
        self._write(
            "UPDATE practice_sessions SET questions = ? WHERE id = ?",
            (json.dumps(questions_to_rows(questions)), session_id),
            action="update",
        )
        return await self._require(session_id, action="update")

    async def delete(self, session_id: str) -> None:
        self._write(
            "DELETE FROM practice_sessions WHERE id = ?",
            (session_id,),
            action="delete",
        )

    def close(self) -> None:
        self._conn.close()

    # -- helpers ------------------------------------------------------------

    def _select(self, where: str, params: tuple[Any, ...]) -> list[PracticeSession]:
        rows = self._conn.execute(
            f"SELECT * FROM practice_sessions {where} ORDER BY created_at DESC",
            params,
        ).fetchall()
        return [practice_session_from_row(dict(r)) for r in rows]

    def _write(self, sql: str, params: tuple[Any, ...], *, action: str) -> None:
        try:
            self._conn.execute(sql, params)
            self._conn.commit()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to {action} practice session: {exc}") from exc

    async def _require(self, session_id: str, *, action: str) -> PracticeSession:
        session = await self.find_by_id(session_id)
        if session is None:
            raise RepositoryError(f"Failed to {action} practice session: no matching row")
        return session
