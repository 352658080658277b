from __future__ import annotations

from typing import Any

from domain.errors import RepositoryError
from domain.ports import LoggerPort
from domain.utils import SilentLogger

from .client import QueryBuilder, TableClient


class SupabaseTableAdapter:
    """Shared read/write handling for repositories over one hosted table."""

    table_name: str = ""

    def __init__(self, client: TableClient, *, logger: LoggerPort | None = None) -> None:
        self._client = client
        self._logger = logger or SilentLogger()

    def _table(self) -> QueryBuilder:
        return self._client.table(self.table_name)

    async def _read(self, query: QueryBuilder, operation: str) -> list[dict[str, Any]]:
        """Run a read; failures are logged and yield no rows."""
        try:
            response = await query.execute()
        except Exception as exc:
            self._logger.warning(
                "repository_read_failed",
                table=self.table_name,
                operation=operation,
                error=str(exc),
            )
            return []
        return list(response.data or [])

    async def _write(
        self,
        query: QueryBuilder,
        failure: str,
        *,
        expect_rows: bool = True,
    ) -> list[dict[str, Any]]:
        try:
            response = await query.execute()
        except Exception as exc:
            raise RepositoryError(f"{failure}: {exc}") from exc
        rows = list(response.data or [])
        if expect_rows and not rows:
            raise RepositoryError(f"{failure}: Unknown error")
        return rows
