"""Assistant replies pinned to an application."""

from __future__ import annotations

from domain.errors import ValidationError
from domain.models import ApplicationUpdate, SavedMessage
from domain.ports import ApplicationRepositoryPort, ClockPort, IdGeneratorPort

from .common import load_owned_application


class SaveMessage:
    """Append a message to an owned application's saved list."""

    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        clock: ClockPort,
        ids: IdGeneratorPort,
    ) -> None:
        self._applications = applications
        self._clock = clock
        self._ids = ids

    async def execute(self, application_id: str, user_id: str, content: str) -> SavedMessage:
        if not content.strip():
            raise ValidationError("Message cannot be empty")
        application = await load_owned_application(
            self._applications, application_id, user_id, action="update"
        )
        message = SavedMessage(id=self._ids.new_id(), content=content, saved_at=self._clock.now())
        await self._applications.update(
            application_id,
            ApplicationUpdate(saved_messages=[*application.saved_messages, message]),
        )
        return message


class RemoveSavedMessage:
    """Drop one saved message. Unknown message ids leave the application untouched."""

    def __init__(self, *, applications: ApplicationRepositoryPort) -> None:
        self._applications = applications

    async def execute(self, application_id: str, user_id: str, message_id: str) -> None:
        application = await load_owned_application(
            self._applications, application_id, user_id, action="update"
        )
        remaining = [m for m in application.saved_messages if m.id != message_id]
        if len(remaining) == len(application.saved_messages):
            return
        await self._applications.update(
            application_id,
            ApplicationUpdate(saved_messages=remaining),
        )
