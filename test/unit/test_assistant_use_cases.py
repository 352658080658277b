from __future__ import annotations

import asyncio
from datetime import date

import pytest

from domain.errors import ExternalServiceError, NotFoundError, ValidationError
from domain.models import ApplicationStatus, ChatMessage, ChatRole, ServiceResult
from domain.services import (
    ChatAboutApplication,
    GetSuggestedPrompts,
    SendChatMessage,
    suggested_prompts_for_application,
)
from test.fixtures import make_application, make_profile
from test.mocks import (
    InMemoryApplicationRepository,
    InMemoryLogger,
    InMemoryProfileRepository,
    ScriptedAIService,
)


def _chat(ai: ScriptedAIService | None = None):
    ai = ai or ScriptedAIService(chat_result=ServiceResult.success("Try STAR stories."))
    profiles = InMemoryProfileRepository()
    applications = InMemoryApplicationRepository()
    use_case = SendChatMessage(ai=ai, profiles=profiles, applications=applications)
    return use_case, ai, profiles, applications


class TestSendChatMessage:
    def test_returns_response_and_extended_history(self) -> None:
        use_case, ai, _, _ = _chat()
        history = [ChatMessage.user("Hi"), ChatMessage.assistant("Hello!")]

        reply = asyncio.run(use_case.execute("u1", "  How do I prep?  ", history))

        assert reply.response == "Try STAR stories."
        assert [m.role for m in reply.history] == [
            ChatRole.USER,
            ChatRole.ASSISTANT,
            ChatRole.USER,
            ChatRole.ASSISTANT,
        ]
        assert reply.history[2].content == "How do I prep?"
        assert all(m.role is not ChatRole.SYSTEM for m in reply.history)
        assert len(ai.chat_calls) == 1

    def test_sends_system_prompt_window_and_new_turn(self) -> None:
        use_case, ai, profiles, applications = _chat()
        profiles.add(make_profile(name="Jane", skills=["Python"]))
        applications.add(make_application(id="a1", status=ApplicationStatus.INTERVIEW))
        history = [ChatMessage.user(f"turn {i}") for i in range(15)]

        asyncio.run(use_case.execute("u1", "next", history))

        sent = ai.chat_calls[0]
        assert len(sent) == 12
        assert sent[0].role is ChatRole.SYSTEM
        assert "- Name: Jane" in sent[0].content
        assert "- Acme: Engineer (Interview)" in sent[0].content
        assert [m.content for m in sent[1:11]] == [f"turn {i}" for i in range(5, 15)]
        assert sent[-1].content == "next"

    @pytest.mark.parametrize(
        ("message", "error"),
        [
            ("", "Message cannot be empty"),
            ("   \n", "Message cannot be empty"),
            ("x" * 2001, "Message too long"),
        ],
    )
    def test_invalid_messages_never_reach_ai(self, message: str, error: str) -> None:
        use_case, ai, _, _ = _chat()
        with pytest.raises(ValidationError, match=error):
            asyncio.run(use_case.execute("u1", message))
        assert ai.chat_calls == []

    def test_message_at_limit_is_accepted(self) -> None:
        use_case, ai, _, _ = _chat()
        asyncio.run(use_case.execute("u1", "x" * 2000))
        assert len(ai.chat_calls) == 1

    def test_ai_failure_raises(self) -> None:
        use_case, _, _, _ = _chat(ScriptedAIService(chat_result=ServiceResult.failure("Chat failed: 503")))
        with pytest.raises(ExternalServiceError, match="Chat failed: 503"):
            asyncio.run(use_case.execute("u1", "hello"))

    def test_empty_ai_text_uses_fallback_message(self) -> None:
        use_case, _, _, _ = _chat(ScriptedAIService(chat_result=ServiceResult.success("")))
        with pytest.raises(ExternalServiceError, match="Failed to get response"):
            asyncio.run(use_case.execute("u1", "hello"))


class TestGetSuggestedPrompts:
    def test_defaults_without_applications(self) -> None:
        prompts = asyncio.run(
            GetSuggestedPrompts(applications=InMemoryApplicationRepository()).execute("u1")
        )
        assert prompts == [
            "How can I improve my resume?",
            "What should I focus on this week?",
            "Give me tips for my job search",
        ]

    def test_interview_and_applied_prompts(self) -> None:
        repo = InMemoryApplicationRepository()
        repo.add(make_application(id="a1", company="Initech", status=ApplicationStatus.APPLIED))
        repo.add(make_application(id="a2", company="Globex", status=ApplicationStatus.INTERVIEW))

        prompts = asyncio.run(GetSuggestedPrompts(applications=repo).execute("u1"))

        assert len(prompts) == 4
        assert prompts[0] == "Help me prepare for my interview at Globex"
        assert prompts[-1] == "How can I follow up on my application at Initech?"

    def test_repository_errors_fall_back_to_defaults(self) -> None:
        repo = InMemoryApplicationRepository()
        repo.read_error = RuntimeError("database is down")
        logger = InMemoryLogger()

        prompts = asyncio.run(GetSuggestedPrompts(applications=repo, logger=logger).execute("u1"))

        assert len(prompts) == 3
        assert logger.messages("warning") == ["suggested_prompts_fallback"]


class TestChatAboutApplication:
    def _use_case(self, ai: ScriptedAIService | None = None):
        ai = ai or ScriptedAIService(chat_result=ServiceResult.success("Mention the launch."))
        applications = InMemoryApplicationRepository()
        applications.add(
            make_application(
                id="a1",
                status=ApplicationStatus.APPLIED,
                applied_date=date(2025, 3, 1),
                notes="Referred by Dana",
            )
        )
        return ChatAboutApplication(ai=ai, applications=applications), ai

    def test_system_prompt_describes_only_that_application(self) -> None:
        use_case, ai = self._use_case()

        reply = asyncio.run(use_case.execute("u1", "a1", "Draft follow-up email"))

        assert reply.response == "Mention the launch."
        system = ai.chat_calls[0][0]
        assert system.role is ChatRole.SYSTEM
        assert "- Company: Acme" in system.content
        assert "- Position: Engineer" in system.content
        assert "- Status: Applied" in system.content
        assert "- Applied Date: 2025-03-01" in system.content
        assert "- Notes: Referred by Dana" in system.content
        assert [m.role for m in reply.history] == [ChatRole.USER, ChatRole.ASSISTANT]

    def test_missing_details_have_placeholders(self) -> None:
        ai = ScriptedAIService()
        applications = InMemoryApplicationRepository()
        applications.add(make_application(id="a1"))
        asyncio.run(ChatAboutApplication(ai=ai, applications=applications).execute("u1", "a1", "hi"))

        system = ai.chat_calls[0][0].content
        assert "- Applied Date: Not specified" in system
        assert "- Notes: None" in system

    @pytest.mark.parametrize(("application_id", "user_id"), [("missing", "u1"), ("a1", "intruder")])
    def test_missing_or_foreign_application_is_not_found(
        self, application_id: str, user_id: str
    ) -> None:
        use_case, ai = self._use_case()
        with pytest.raises(NotFoundError, match="Application not found"):
            asyncio.run(use_case.execute(user_id, application_id, "hello"))
        assert ai.chat_calls == []

    def test_blank_message_is_rejected_before_lookup(self) -> None:
        use_case, ai = self._use_case()
        with pytest.raises(ValidationError, match="Message cannot be empty"):
            asyncio.run(use_case.execute("u1", "a1", "   "))
        assert ai.chat_calls == []

    def test_ai_failure_raises(self) -> None:
        use_case, _ = self._use_case(ScriptedAIService(chat_result=ServiceResult.failure("down")))
        with pytest.raises(ExternalServiceError, match="down"):
            asyncio.run(use_case.execute("u1", "a1", "hello"))


def test_application_prompts_follow_status_and_fill_placeholders() -> None:
    interview = make_application(status=ApplicationStatus.INTERVIEW, position="Data Engineer")
    saved = make_application(status=ApplicationStatus.SAVED, company="Globex")

    assert suggested_prompts_for_application(interview)[1] == "Common questions for Data Engineer"
    assert suggested_prompts_for_application(saved)[1] == "Research Globex"
    for status in ApplicationStatus:
        assert len(suggested_prompts_for_application(make_application(status=status))) == 4
