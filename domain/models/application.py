from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from .common import provided_fields
from .values import APPLICATION_STATUSES, UNSET, ApplicationStatus, Unset


@dataclass(frozen=True)
class SavedMessage:
    """An assistant reply the user pinned to an application."""

    id: str
    content: str
    saved_at: datetime

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SavedMessage":
        saved_at = data["saved_at"]
        if isinstance(saved_at, str):
            saved_at = datetime.fromisoformat(saved_at.replace("Z", "+00:00"))
        return cls(id=str(data["id"]), content=str(data["content"]), saved_at=saved_at)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "content": self.content, "saved_at": self.saved_at.isoformat()}


@dataclass(frozen=True)
class Application:
    """A job application tracked by a user."""

    id: str
    user_id: str
    company: str
    position: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime
    applied_date: date | None = None
    notes: str | None = None
    url: str | None = None
    followed_up_at: datetime | None = None
    interview_date: date | None = None
    saved_messages: Sequence[SavedMessage] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "saved_messages", tuple(self.saved_messages))

    @property
    def is_active(self) -> bool:
        return self.status not in (ApplicationStatus.OFFER, ApplicationStatus.REJECTED)

    def needs_follow_up(self, now: datetime, days_since_applied: int = 7) -> bool:
        if self.status is not ApplicationStatus.APPLIED or self.applied_date is None:
            return False
        elapsed = (now.date() - self.applied_date).days
        return elapsed >= days_since_applied and self.followed_up_at is None


@dataclass(frozen=True)
class NewApplication:
    """Validated data for inserting an application."""

    user_id: str
    company: str
    position: str
    status: ApplicationStatus = ApplicationStatus.SAVED
    applied_date: date | None = None
    notes: str | None = None
    url: str | None = None
    followed_up_at: datetime | None = None
    interview_date: date | None = None


@dataclass(frozen=True)
class ApplicationUpdate:
    """Partial update; only fields that are not ``UNSET`` are written."""

    company: str | Unset = UNSET
    position: str | Unset = UNSET
    status: ApplicationStatus | Unset = UNSET
    applied_date: date | None | Unset = UNSET
    notes: str | None | Unset = UNSET
    url: str | None | Unset = UNSET
    followed_up_at: datetime | None | Unset = UNSET
    interview_date: date | None | Unset = UNSET
    saved_messages: Sequence[SavedMessage] | Unset = UNSET

    def provided(self) -> dict[str, object]:
        return provided_fields(self)


@dataclass(frozen=True)
class ApplicationStats:
    total: int
    by_status: Mapping[ApplicationStatus, int]
    this_week: int
    this_month: int

    def __post_init__(self) -> None:
        counts = {status: 0 for status in APPLICATION_STATUSES}
        counts.update(self.by_status)
        object.__setattr__(self, "by_status", MappingProxyType(counts))

    @classmethod
    def empty(cls) -> "ApplicationStats":
        return cls(total=0, by_status={}, this_week=0, this_month=0)


def compute_application_stats(
    applications: Iterable[Application],
    now: datetime,
) -> ApplicationStats:
    """Aggregate counts over a user's full application set."""
    one_week_ago = now - timedelta(days=7)
    one_month_ago = now - timedelta(days=30)
    by_status = {status: 0 for status in APPLICATION_STATUSES}
    total = this_week = this_month = 0
    for app in applications:
        total += 1
        by_status[app.status] += 1
        if app.created_at >= one_week_ago:
            this_week += 1
        if app.created_at >= one_month_ago:
            this_month += 1
    return ApplicationStats(
        total=total,
        by_status=by_status,
        this_week=this_week,
        this_month=this_month,
    )


@dataclass(frozen=True)
class ImportRecord:
    """One raw row of a bulk import, before validation."""

    company: str | None = None
    position: str | None = None
    status: str | None = None
    applied_date: str | None = None
    notes: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class ImportRowError:
    index: int
    error: str


@dataclass(frozen=True)
class ImportResult:
    imported: Sequence[Application] = field(default_factory=tuple)
    errors: Sequence[ImportRowError] = field(default_factory=tuple)
