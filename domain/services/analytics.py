from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from domain.models import (
    APPLICATION_STATUSES,
    Application,
    ApplicationAnalytics,
    ApplicationStatus,
    WeeklyCount,
    WeeklyTrend,
)
from domain.ports import ApplicationRepositoryPort, ClockPort
from domain.utils import round_half_up

CHART_WEEKS = 8

_RESPONDED = (ApplicationStatus.INTERVIEW, ApplicationStatus.OFFER)


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _activity_date(app: Application) -> date:
    return app.created_at.date() if app.created_at else app.applied_date


def _trend(this_week: int, last_week: int) -> WeeklyTrend:
    if this_week > last_week:
        return WeeklyTrend.UP
    if this_week < last_week:
        return WeeklyTrend.DOWN
    return WeeklyTrend.SAME


def compute_analytics(applications: Sequence[Application], today: date) -> ApplicationAnalytics:
    """
    Dashboard numbers for one user's applications.

    Response rate counts Interview and Offer against everything that left
    Saved. Days to response runs from the applied date to the last update.
    """
    status_counts = {status: 0 for status in APPLICATION_STATUSES}
    submitted = responded = 0
    response_days: list[int] = []

    for app in applications:
        status_counts[app.status] += 1
        if app.status == ApplicationStatus.SAVED:
            continue
        submitted += 1
        if app.status in _RESPONDED:
            responded += 1
            if app.applied_date is not None:
                days = (app.updated_at.date() - app.applied_date).days
                if days >= 0:
                    response_days.append(days)

    response_rate = round_half_up(responded / submitted * 100) if submitted else 0
    avg_days = (
        round_half_up(sum(response_days) / len(response_days)) if response_days else None
    )

    this_week_start = week_start(today)
    last_week_start = this_week_start - timedelta(days=7)
    activity = [_activity_date(app) for app in applications]

    this_week = sum(1 for day in activity if day >= this_week_start)
    last_week = sum(1 for day in activity if last_week_start <= day < this_week_start)

    weekly: list[WeeklyCount] = []
    for offset in range(CHART_WEEKS - 1, -1, -1):
        start = this_week_start - timedelta(weeks=offset)
        end = start + timedelta(days=6)
        weekly.append(
            WeeklyCount(
                label=f"{start.month}/{start.day}",
                week_start=start,
                count=sum(1 for day in activity if start <= day <= end),
            )
        )

    return ApplicationAnalytics(
        total_applications=len(applications),
        response_rate=response_rate,
        avg_days_to_response=avg_days,
        this_week_count=this_week,
        last_week_count=last_week,
        weekly_trend=_trend(this_week, last_week),
        weekly_data=tuple(weekly),
        status_counts=status_counts,
    )


class GetApplicationAnalytics:
    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        clock: ClockPort,
    ) -> None:
        self._applications = applications
        self._clock = clock

    async def execute(self, user_id: str) -> ApplicationAnalytics:
        applications = list(await self._applications.find_by_user_id(user_id))
        return compute_analytics(applications, self._clock.now().date())
