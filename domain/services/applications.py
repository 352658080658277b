"""Use cases for tracking job applications."""

from __future__ import annotations

from datetime import date, datetime
from types import MappingProxyType
from typing import Sequence

from dateutil import parser as date_parser

from domain.errors import ValidationError
from domain.models import (
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationUpdate,
    ImportRecord,
    ImportResult,
    ImportRowError,
    NewApplication,
)
from domain.ports import ApplicationRepositoryPort, ClockPort, LoggerPort
from domain.utils import clean_optional, is_blank

from .common import load_owned_application, logger_or_silent

# Keys are lower-cased, trimmed spreadsheet values.
STATUS_SYNONYMS = MappingProxyType(
    {
        "saved": ApplicationStatus.SAVED,
        "applied": ApplicationStatus.APPLIED,
        "interview": ApplicationStatus.INTERVIEW,
        "interviewing": ApplicationStatus.INTERVIEW,
        "offer": ApplicationStatus.OFFER,
        "offered": ApplicationStatus.OFFER,
        "rejected": ApplicationStatus.REJECTED,
        "declined": ApplicationStatus.REJECTED,
    }
)

# Fills the parts a lenient date leaves out.
_DATE_DEFAULT = datetime(2000, 1, 1)


def normalize_status(raw: str | None) -> ApplicationStatus:
    """Map a free-form status to an ``ApplicationStatus``; unknown values become Saved."""
    if raw is None:
        return ApplicationStatus.SAVED
    return STATUS_SYNONYMS.get(raw.strip().lower(), ApplicationStatus.SAVED)


def parse_lenient_date(raw: str | None) -> date | None:
    """
    Parse a human-entered date, returning ``None`` when it cannot be read.

    Missing parts fall back to January and the 1st, so "Feb 2024" is
    2024-02-01 whatever day the import runs.
    """
    if is_blank(raw):
        return None
    try:
        return date_parser.parse(raw.strip(), default=_DATE_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def _coerce_status(status: ApplicationStatus | str) -> ApplicationStatus:
    try:
        return ApplicationStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid status: {status}") from None


class CreateApplication:
    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(
        self,
        user_id: str,
        company: str,
        position: str,
        *,
        status: ApplicationStatus | str = ApplicationStatus.SAVED,
        applied_date: date | None = None,
        notes: str | None = None,
        url: str | None = None,
    ) -> Application:
        if is_blank(company):
            raise ValidationError("Company name is required")
        if is_blank(position):
            raise ValidationError("Position is required")

        return await self._applications.create(
            NewApplication(
                user_id=user_id,
                company=company.strip(),
                position=position.strip(),
                status=_coerce_status(status),
                applied_date=applied_date,
                notes=clean_optional(notes),
                url=clean_optional(url),
            )
        )


class GetApplicationById:
    """Return an application only when it belongs to the caller."""

    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(self, application_id: str, user_id: str) -> Application | None:
        application = await self._applications.find_by_id(application_id)
        if application is None or application.user_id != user_id:
            return None
        return application


class GetApplications:
    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(
        self,
        user_id: str,
        status: ApplicationStatus | str | None = None,
    ) -> list[Application]:
        if status:
            found = await self._applications.find_by_status(user_id, _coerce_status(status))
        else:
            found = await self._applications.find_by_user_id(user_id)
        return list(found)


class UpdateApplication:
    """
    Apply a partial update to an owned application.

    Only fields set on the ``ApplicationUpdate`` reach the repository. An
    explicit ``None`` clears a nullable field.
    """

    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(
        self,
        application_id: str,
        user_id: str,
        update: ApplicationUpdate,
    ) -> Application:
        await load_owned_application(
            self._applications, application_id, user_id, action="update"
        )

        fields = update.provided()
        if "company" in fields:
            if is_blank(fields["company"]):
                raise ValidationError("Company name cannot be empty")
            fields["company"] = fields["company"].strip()
        if "position" in fields:
            if is_blank(fields["position"]):
                raise ValidationError("Position cannot be empty")
            fields["position"] = fields["position"].strip()
        if "status" in fields:
            fields["status"] = _coerce_status(fields["status"])
        for name in ("notes", "url"):
            if name in fields:
                fields[name] = clean_optional(fields[name])

        return await self._applications.update(application_id, ApplicationUpdate(**fields))


class DeleteApplication:
    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(self, application_id: str, user_id: str) -> None:
        await load_owned_application(
            self._applications, application_id, user_id, action="delete"
        )
        await self._applications.delete(application_id)


class SearchApplications:
    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(self, user_id: str, keyword: str) -> list[Application]:
        if is_blank(keyword):
            return []
        return list(await self._applications.search(user_id, keyword.strip()))


class ImportApplications:
    """
    Bulk import from spreadsheet-like records.

    Invalid rows are reported by their original index and never abort the
    import; valid rows are written in a single ``create_many`` call.
    """

    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._applications = applications
        self._logger = logger_or_silent(logger)

    async def execute(self, user_id: str, records: Sequence[ImportRecord]) -> ImportResult:
        valid: list[NewApplication] = []
        errors: list[ImportRowError] = []

        for index, record in enumerate(records):
            if is_blank(record.company):
                errors.append(ImportRowError(index=index, error="Company name is required"))
                continue
            if is_blank(record.position):
                errors.append(ImportRowError(index=index, error="Position is required"))
                continue
            valid.append(
                NewApplication(
                    user_id=user_id,
                    company=record.company.strip(),
                    position=record.position.strip(),
                    status=normalize_status(record.status),
                    applied_date=parse_lenient_date(record.applied_date),
                    notes=clean_optional(record.notes),
                    url=clean_optional(record.url),
                )
            )

        imported: Sequence[Application] = ()
        if valid:
            imported = await self._applications.create_many(valid)

        self._logger.info(
            "applications_imported",
            user_id=user_id,
            imported=len(imported),
            rejected=len(errors),
        )
        return ImportResult(imported=tuple(imported), errors=tuple(errors))


class GetApplicationStats:
    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(self, user_id: str) -> ApplicationStats:
        return await self._applications.get_stats(user_id)


class MarkFollowedUp:
    """Record that the user followed up on an owned application."""

    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        clock: ClockPort,
    ) -> None:
        self._applications = applications
        self._clock = clock

    async def execute(self, application_id: str, user_id: str) -> Application:
        await load_owned_application(
            self._applications, application_id, user_id, action="update"
        )
        followed_up_at: datetime = self._clock.now()
        return await self._applications.update(
            application_id,
            ApplicationUpdate(followed_up_at=followed_up_at),
        )
