"""Career assistant chat use cases."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from types import MappingProxyType
from typing import Sequence

from domain.errors import NotFoundError, ValidationError
from domain.models import Application, ApplicationStatus, ChatMessage
from domain.ports import (
    AIServicePort,
    ApplicationRepositoryPort,
    LoggerPort,
    ProfileRepositoryPort,
)
from domain.prompts import build_application_chat_prompt, build_assistant_system_prompt

from .common import logger_or_silent, require_data

MAX_MESSAGE_LENGTH = 2000
HISTORY_WINDOW = 10
MAX_SUGGESTED_PROMPTS = 4

DEFAULT_PROMPTS = (
    "How can I improve my resume?",
    "What should I focus on this week?",
    "Give me tips for my job search",
)

# {company} and {position} are filled from the application.
APPLICATION_PROMPTS = MappingProxyType(
    {
        ApplicationStatus.SAVED: (
            "Should I apply?",
            "Research {company}",
            "Tailor my resume",
            "What skills are needed?",
        ),
        ApplicationStatus.APPLIED: (
            "Draft follow-up email",
            "What to expect next",
            "Research {company}",
            "How long to wait?",
        ),
        ApplicationStatus.INTERVIEW: (
            "Prepare for interview",
            "Common questions for {position}",
            "Questions to ask them",
            "What to wear?",
        ),
        ApplicationStatus.OFFER: (
            "How to negotiate salary",
            "Questions about offer",
            "Compare with market rate",
            "What to ask HR?",
        ),
        ApplicationStatus.REJECTED: (
            "Why might I be rejected?",
            "How to improve",
            "Draft feedback request",
            "What to do next?",
        ),
    }
)


@dataclass(frozen=True)
class ChatReply:
    response: str
    history: Sequence[ChatMessage]


def _validate_message(message: str) -> None:
    if not message.strip():
        raise ValidationError("Message cannot be empty")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationError(f"Message too long (max {MAX_MESSAGE_LENGTH} characters)")


async def _exchange(
    ai: AIServicePort,
    logger: LoggerPort,
    user_id: str,
    system_prompt: str,
    message: str,
    history: Sequence[ChatMessage],
) -> ChatReply:
    """Send one turn; the system message never enters the returned history."""
    user_message = ChatMessage.user(message.strip())
    outgoing = [
        ChatMessage.system(system_prompt),
        *list(history)[-HISTORY_WINDOW:],
        user_message,
    ]

    result = await ai.chat(outgoing)
    if not result.ok:
        logger.error("chat_failed", user_id=user_id, error=result.error)
    response = require_data(result, "Failed to get response")

    return ChatReply(
        response=response,
        history=(*history, user_message, ChatMessage.assistant(response)),
    )


def suggested_prompts_for_application(application: Application) -> list[str]:
    """Starters for a conversation about one application, chosen by its status."""
    return [
        prompt.replace("{company}", application.company).replace(
            "{position}", application.position
        )
        for prompt in APPLICATION_PROMPTS[application.status]
    ]


class SendChatMessage:
    """
    Answer a user message with the AI assistant.

    The request carries a freshly built system message with the user's
    profile and applications, the last ten history turns and the new
    message. The system message never enters the returned history.
    """

    def __init__(
        self,
        *,
        ai: AIServicePort,
        profiles: ProfileRepositoryPort,
        applications: ApplicationRepositoryPort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._ai = ai
        self._profiles = profiles
        self._applications = applications
        self._logger = logger_or_silent(logger)

    async def execute(
        self,
        user_id: str,
        message: str,
        history: Sequence[ChatMessage] = (),
    ) -> ChatReply:
        _validate_message(message)
        system_prompt = await self._build_system_prompt(user_id)
        return await _exchange(
            self._ai, self._logger, user_id, system_prompt, message, history
        )

    async def _build_system_prompt(self, user_id: str) -> str:
        profile, applications = await asyncio.gather(
            self._profiles.find_by_user_id(user_id),
            self._applications.find_by_user_id(user_id),
        )
        return build_assistant_system_prompt(
            profile=profile,
            applications=list(applications),
        )


class GetSuggestedPrompts:
    """Conversation starters tailored to the user's applications. Never raises."""

    def __init__(
        self,
        *,
        applications: ApplicationRepositoryPort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._applications = applications
        self._logger = logger_or_silent(logger)

    async def execute(self, user_id: str) -> list[str]:
        prompts = list(DEFAULT_PROMPTS)
        try:
            applications = await self._applications.find_by_user_id(user_id)
        except Exception as exc:
            self._logger.warning("suggested_prompts_fallback", user_id=user_id, error=str(exc))
            return prompts[:MAX_SUGGESTED_PROMPTS]

        interview = next(
            (a for a in applications if a.status == ApplicationStatus.INTERVIEW), None
        )
        if interview is not None:
            prompts.insert(0, f"Help me prepare for my interview at {interview.company}")

        applied = next(
            (a for a in applications if a.status == ApplicationStatus.APPLIED), None
        )
        if applied is not None:
            prompts.append(f"How can I follow up on my application at {applied.company}?")

        return prompts[:MAX_SUGGESTED_PROMPTS]


class ChatAboutApplication:
    """
    Answer a question about one of the user's applications.

    The system message describes only that application. Missing and
    foreign applications are both reported as not found.
    """

    def __init__(
        self,
        *,
        ai: AIServicePort,
        applications: ApplicationRepositoryPort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._ai = ai
        self._applications = applications
        self._logger = logger_or_silent(logger)

    async def execute(
        self,
        user_id: str,
        application_id: str,
        message: str,
        history: Sequence[ChatMessage] = (),
    ) -> ChatReply:
        _validate_message(message)
        application = await self._applications.find_by_id(application_id)
        if application is None or application.user_id != user_id:
            raise NotFoundError("Application not found")
        return await _exchange(
            self._ai,
            self._logger,
            user_id,
            build_application_chat_prompt(application),
            message,
            history,
        )
