from __future__ import annotations

from typing import Sequence

from domain.models import (
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationUpdate,
    NewApplication,
    compute_application_stats,
)
from domain.ports import ClockPort, LoggerPort
from infra.persistence.mappers import (
    application_fields_to_row,
    application_from_row,
    new_application_to_row,
)
from infra.runtime import SystemClock

from ._base import SupabaseTableAdapter
from .client import TableClient, ilike_any

SEARCH_COLUMNS = ("company", "position", "notes")


class SupabaseApplicationRepository(SupabaseTableAdapter):
    """
    ``ApplicationRepositoryPort`` over the hosted ``applications`` table.

    Failed reads are logged and come back empty; failed writes raise
    ``RepositoryError``.
    """

    table_name = "applications"

    def __init__(
        self,
        client: TableClient,
        *,
        clock: ClockPort | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__(client, logger=logger)
        self._clock = clock or SystemClock()

    async def find_by_id(self, application_id: str) -> Application | None:
        rows = await self._read(
            self._table().select("*").eq("id", application_id).limit(1),
            "find_by_id",
        )
        return application_from_row(rows[0]) if rows else None

    async def find_by_user_id(self, user_id: str) -> Sequence[Application]:
        query = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .order("applied_date", desc=True)
            .order("created_at", desc=True)
        )
        return [application_from_row(r) for r in await self._read(query, "find_by_user_id")]

    async def find_by_status(
        self,
        user_id: str,
        status: ApplicationStatus,
    ) -> Sequence[Application]:
        query = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .eq("status", ApplicationStatus(status).value)
            .order("applied_date", desc=True)
        )
        return [application_from_row(r) for r in await self._read(query, "find_by_status")]

    async def search(self, user_id: str, keyword: str) -> Sequence[Application]:
        query = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .or_(ilike_any(SEARCH_COLUMNS, keyword))
            .order("applied_date", desc=True)
        )
        return [application_from_row(r) for r in await self._read(query, "search")]

    async def create(self, application: NewApplication) -> Application:
        rows = await self._write(
            self._table().insert(new_application_to_row(application)),
            "Failed to create application",
        )
        return application_from_row(rows[0])

    async def create_many(
        self,
        applications: Sequence[NewApplication],
    ) -> Sequence[Application]:
        if not applications:
            return []
        rows = await self._write(
            self._table().insert([new_application_to_row(a) for a in applications]),
            "Failed to create applications",
        )
        return [application_from_row(r) for r in rows]

    async def update(self, application_id: str, update: ApplicationUpdate) -> Application:
        rows = await self._write(
            self._table().update(application_fields_to_row(update.provided())).eq("id", application_id),
            "Failed to update application",
        )
        return application_from_row(rows[0])

    async def delete(self, application_id: str) -> None:
        await self._write(
            self._table().delete().eq("id", application_id),
            "Failed to delete application",
            expect_rows=False,
        )

    async def delete_by_user_id(self, user_id: str) -> int:
        rows = await self._write(
            self._table().delete().eq("user_id", user_id),
            "Failed to delete applications",
            expect_rows=False,
        )
        return len(rows)

    async def get_stats(self, user_id: str) -> ApplicationStats:
        rows = await self._read(
            self._table().select("*").eq("user_id", user_id),
            "get_stats",
        )
        if not rows:
            return ApplicationStats.empty()
        return compute_application_stats(
            [application_from_row(r) for r in rows],
            self._clock.now(),
        )
