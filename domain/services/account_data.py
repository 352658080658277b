"""Bulk operations over everything a user has stored."""

from __future__ import annotations

import asyncio

from domain.models import DataExport
from domain.ports import (
    ApplicationRepositoryPort,
    ClockPort,
    LoggerPort,
    ProfileRepositoryPort,
)

from .common import logger_or_silent


class ExportUserData:
    """Collect the profile and all applications, most recently created first."""

    def __init__(
        self,
        *,
        profiles: ProfileRepositoryPort,
        applications: ApplicationRepositoryPort,
        clock: ClockPort,
    ) -> None:
        self._profiles = profiles
        self._applications = applications
        self._clock = clock

    async def execute(self, user_id: str) -> DataExport:
        profile, applications = await asyncio.gather(
            self._profiles.find_by_user_id(user_id),
            self._applications.find_by_user_id(user_id),
        )
        return DataExport(
            exported_on=self._clock.now().date(),
            profile=profile,
            applications=sorted(applications, key=lambda a: a.created_at, reverse=True),
        )


class ClearApplications:
    """Delete every application the user owns and report how many went."""

    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._applications = applications
        self._logger = logger_or_silent(logger)

    async def execute(self, user_id: str) -> int:
        removed = await self._applications.delete_by_user_id(user_id)
        self._logger.info("applications_cleared", user_id=user_id, removed=removed)
        return removed
