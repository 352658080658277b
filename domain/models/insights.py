"""Read models derived from a user's applications: reminders and analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Sequence

from .application import Application
from .values import ApplicationStatus


class NotificationType(str, Enum):
    UPCOMING_INTERVIEW = "upcoming_interview"
    STALE = "stale"
    FOLLOW_UP = "follow_up"


@dataclass(frozen=True)
class Notification:
    id: str
    type: NotificationType
    application: Application
    days_since_applied: int
    message: str
    days_until_interview: int | None = None


class WeeklyTrend(str, Enum):
    UP = "up"
    DOWN = "down"
    SAME = "same"


@dataclass(frozen=True)
class WeeklyCount:
    label: str  # e.g. "3/9"
    week_start: date
    count: int


@dataclass(frozen=True)
class ApplicationAnalytics:
    total_applications: int
    response_rate: int
    avg_days_to_response: int | None
    this_week_count: int
    last_week_count: int
    weekly_trend: WeeklyTrend
    weekly_data: Sequence[WeeklyCount] = field(default_factory=tuple)
    status_counts: Mapping[ApplicationStatus, int] = field(default_factory=dict)
