from __future__ import annotations

from typing import Sequence

from domain.models import InterviewQuestion, NewPracticeSession, PracticeSession
from infra.persistence.mappers import (
    new_practice_session_to_row,
    practice_session_from_row,
    questions_to_rows,
)

from ._base import SupabaseTableAdapter


class SupabasePracticeSessionRepository(SupabaseTableAdapter):
    table_name = "practice_sessions"

    async def find_by_id(self, session_id: str) -> PracticeSession | None:
        rows = await self._read(
            self._table().select("*").eq("id", session_id).limit(1),
            "find_by_id",
        )
        return practice_session_from_row(rows[0]) if rows else None

    async def find_by_user_id(self, user_id: str) -> Sequence[PracticeSession]:
        query = self._table().select("*").eq("user_id", user_id).order("created_at", desc=True)
        return [practice_session_from_row(r) for r in await self._read(query, "find_by_user_id")]

    async def find_by_application_id(self, application_id: str) -> Sequence[PracticeSession]:
        query = (
            self._table()
            .select("*")
            .eq("application_id", application_id)
            .order("created_at", desc=True)
        )
        rows = await self._read(query, "find_by_application_id")
        return [practice_session_from_row(r) for r in rows]

    async def create(self, session: NewPracticeSession) -> PracticeSession:
        rows = await self._write(
            self._table().insert(new_practice_session_to_row(session)),
            "Failed to create practice session",
        )
        return practice_session_from_row(rows[0])

    async def update_questions(
        self,
        session_id: str,
        questions: Sequence[InterviewQuestion],
    ) -> PracticeSession:
        rows = await self._write(
            self._table().update({"questions": questions_to_rows(questions)}).eq("id", session_id),
            "Failed to update practice session",
        )
        return practice_session_from_row(rows[0])

    async def delete(self, session_id: str) -> None:
        await self._write(
            self._table().delete().eq("id", session_id),
            "Failed to delete practice session",
            expect_rows=False,
        )
