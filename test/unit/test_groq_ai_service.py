"""Unit tests for GroqAIService.

HTTP calls are mocked via unittest.mock.patch to avoid real API calls.
"""

from __future__ import annotations

import asyncio
import json
import urllib.error
from unittest.mock import MagicMock, patch

from domain.models import ChatMessage, GenerateQuestionsParams, InterviewType
from infra.llm import GroqAIService
from infra.llm.groq_ai_service import strip_code_fences


def _mock_response(content: str) -> MagicMock:
    body = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    resp = MagicMock()
    resp.read.return_value = json.dumps(body).encode("utf-8")
    resp.__enter__ = MagicMock(return_value=resp)
    resp.__exit__ = MagicMock(return_value=False)
    return resp


def _make_service() -> GroqAIService:
    return GroqAIService(
        api_key="gsk-test-key",
        model="llama-test",
        base_url="https://api.groq.test/openai/v1/",
    )


def _sent_payload(mock_urlopen: MagicMock) -> dict:
    req = mock_urlopen.call_args[0][0]
    return json.loads(req.data.decode("utf-8"))


class TestChat:
    @patch("urllib.request.urlopen")
    def test_sends_messages_and_returns_text(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.return_value = _mock_response("Here is a plan.")
        result = asyncio.run(
            _make_service().chat([ChatMessage.system("sys"), ChatMessage.user("hi")])
        )

        assert result.ok
        assert result.data == "Here is a plan."
        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://api.groq.test/openai/v1/chat/completions"
        assert req.get_header("Authorization") == "Bearer gsk-test-key"
        payload = _sent_payload(mock_urlopen)
        assert payload["model"] == "llama-test"
        assert payload["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "hi"},
        ]
        assert (payload["temperature"], payload["max_tokens"]) == (0.7, 1024)

    @patch("urllib.request.urlopen")
    def test_http_error_becomes_failure(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.side_effect = urllib.error.HTTPError(
            "https://api.groq.test", 429, "Too Many Requests", {}, None
        )
        result = asyncio.run(_make_service().chat([ChatMessage.user("hi")]))
        assert not result.ok
        assert result.error == "Chat failed: API error: 429"

    @patch("urllib.request.urlopen")
    def test_network_error_becomes_failure(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.side_effect = urllib.error.URLError("connection refused")
        result = asyncio.run(_make_service().chat([ChatMessage.user("hi")]))
        assert not result.ok
        assert result.error.startswith("Chat failed:")


class TestParseResume:
    @patch("urllib.request.urlopen")
    def test_decodes_fenced_json(self, mock_urlopen: MagicMock) -> None:
        content = '```json\n{"name": "Jane", "skills": ["Python"], "education": [], "experience": []}\n```'
        mock_urlopen.return_value = _mock_response(content)

        result = asyncio.run(_make_service().parse_resume("Jane Doe, Python"))

        assert result.ok
        assert result.data.name == "Jane"
        assert result.data.skills == ("Python",)
        payload = _sent_payload(mock_urlopen)
        assert payload["messages"][1]["content"] == "Parse this resume:\n\nJane Doe, Python"
        assert (payload["temperature"], payload["max_tokens"]) == (0.1, 2048)

    @patch("urllib.request.urlopen")
    def test_invalid_json_is_a_failure(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.return_value = _mock_response("I could not parse that.")
        result = asyncio.run(_make_service().parse_resume("text"))
        assert not result.ok
        assert result.error.startswith("Resume parsing failed:")


class TestQuestionsAndFeedback:
    @patch("urllib.request.urlopen")
    def test_questions_are_cleaned(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.return_value = _mock_response('["Why us?", "  ", "Tell me about a failure."]')
        result = asyncio.run(
            _make_service().generate_interview_questions(
                GenerateQuestionsParams(type=InterviewType.BEHAVIORAL, question_count=2)
            )
        )
        assert result.data == ["Why us?", "Tell me about a failure."]
        payload = _sent_payload(mock_urlopen)
        assert "Generate 2 behavioral interview questions" in payload["messages"][0]["content"]
        assert payload["temperature"] == 0.8

    @patch("urllib.request.urlopen")
    def test_non_array_questions_fail(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.return_value = _mock_response('{"questions": []}')
        result = asyncio.run(
            _make_service().generate_interview_questions(
                GenerateQuestionsParams(type=InterviewType.TECHNICAL)
            )
        )
        assert not result.ok
        assert result.error == "Question generation failed: expected a JSON array"

    @patch("urllib.request.urlopen")
    def test_feedback(self, mock_urlopen: MagicMock) -> None:
        mock_urlopen.return_value = _mock_response("Good use of STAR.")
        result = asyncio.run(_make_service().generate_feedback("Why?", "Because."))
        assert result.data == "Good use of STAR."
        payload = _sent_payload(mock_urlopen)
        assert payload["messages"][1]["content"] == "Question: Why?\n\nAnswer: Because."
        assert payload["max_tokens"] == 512


def test_strip_code_fences() -> None:
    assert strip_code_fences("```json\n[1]\n```") == "[1]"
    assert strip_code_fences("```\n{}\n```") == "{}"
    assert strip_code_fences("  [2]  ") == "[2]"
