from __future__ import annotations

from datetime import date

from domain.models import Application, ApplicationStatus, Notification, NotificationType
from domain.ports import ApplicationRepositoryPort, ClockPort

FOLLOW_UP_AFTER_DAYS = 7
STALE_AFTER_DAYS = 14
UPCOMING_INTERVIEW_DAYS = 3

_PRIORITY = {
    NotificationType.UPCOMING_INTERVIEW: 0,
    NotificationType.STALE: 1,
    NotificationType.FOLLOW_UP: 2,
}


def days_since_applied(application: Application, today: date) -> int:
    """Whole days since the applied date, or since creation when it is unknown."""
    start = application.applied_date or application.created_at.date()
    return (today - start).days


def _interview_message(days_until: int) -> str:
    if days_until == 0:
        return "Interview today!"
    if days_until == 1:
        return "Interview tomorrow"
    return f"Interview in {days_until} days"


def build_notifications(applications: list[Application], today: date) -> list[Notification]:
    notifications: list[Notification] = []
    for app in applications:
        elapsed = days_since_applied(app, today)

        if app.status == ApplicationStatus.INTERVIEW and app.interview_date is not None:
            days_until = (app.interview_date - today).days
            if 0 <= days_until <= UPCOMING_INTERVIEW_DAYS:
                notifications.append(
                    Notification(
                        id=f"interview-{app.id}",
                        type=NotificationType.UPCOMING_INTERVIEW,
                        application=app,
                        days_since_applied=elapsed,
                        days_until_interview=days_until,
                        message=_interview_message(days_until),
                    )
                )

        if (
            app.status == ApplicationStatus.APPLIED
            and elapsed >= FOLLOW_UP_AFTER_DAYS
            and app.followed_up_at is None
        ):
            if elapsed >= STALE_AFTER_DAYS:
                notifications.append(
                    Notification(
                        id=f"stale-{app.id}",
                        type=NotificationType.STALE,
                        application=app,
                        days_since_applied=elapsed,
                        message=f"No response for {elapsed} days",
                    )
                )
            else:
                notifications.append(
                    Notification(
                        id=f"followup-{app.id}",
                        type=NotificationType.FOLLOW_UP,
                        application=app,
                        days_since_applied=elapsed,
                        message=f"Applied {elapsed} days ago",
                    )
                )

    def sort_key(n: Notification) -> tuple[int, int]:
        if n.type is NotificationType.UPCOMING_INTERVIEW:
            return _PRIORITY[n.type], n.days_until_interview or 0
        return _PRIORITY[n.type], -n.days_since_applied

    notifications.sort(key=sort_key)
    return notifications


class GetNotifications:
    """Follow-up reminders and upcoming interviews, most urgent first."""

    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        clock: ClockPort,
    ) -> None:
        self._applications = applications
        self._clock = clock

    async def execute(self, user_id: str) -> list[Notification]:
        candidates = [
            app
            for app in await self._applications.find_by_user_id(user_id)
            if app.status in (ApplicationStatus.APPLIED, ApplicationStatus.INTERVIEW)
        ]
        return build_notifications(candidates, self._clock.now().date())
