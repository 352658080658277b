"""Groq implementation of ``AIServicePort`` over the OpenAI-compatible chat API.

Uses ``urllib.request`` for HTTP calls (no external HTTP library needed);
blocking requests run in a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import re
import urllib.error
import urllib.request
from typing import Any, Sequence

from domain.models import ChatMessage, GenerateQuestionsParams, ParsedResume, ServiceResult
from domain.prompts import (
    FEEDBACK_PROMPT,
    GENERATE_QUESTIONS_REQUEST,
    RESUME_PARSER_PROMPT,
    build_feedback_request,
    build_questions_prompt,
    build_resume_request,
)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"

_CODE_FENCE_OPEN = re.compile(r"^```(?:json)?\n?")
_CODE_FENCE_CLOSE = re.compile(r"\n?```$")


class GroqAPIError(RuntimeError):
    """Non-2xx response or malformed body from the completions endpoint."""


def strip_code_fences(content: str) -> str:
    cleaned = content.strip()
    if cleaned.startswith("```"):
        cleaned = _CODE_FENCE_CLOSE.sub("", _CODE_FENCE_OPEN.sub("", cleaned))
    return cleaned


def parse_json_response(content: str) -> Any:
    return json.loads(strip_code_fences(content))


class GroqAIService:
    """
    Chat, resume parsing, question generation and answer feedback.

    Every method returns a ``ServiceResult``; transport, HTTP and decoding
    errors become failures prefixed with the operation name.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 60,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def chat(self, messages: Sequence[ChatMessage]) -> ServiceResult[str]:
        api_messages = [{"role": m.role.value, "content": m.content} for m in messages]
        try:
            content = await self._complete(api_messages, temperature=0.7, max_tokens=1024)
        except Exception as exc:
            return ServiceResult.failure(f"Chat failed: {exc}")
        return ServiceResult.success(content)

    async def parse_resume(self, resume_text: str) -> ServiceResult[ParsedResume]:
        try:
            content = await self._complete(
                [
                    {"role": "system", "content": RESUME_PARSER_PROMPT},
                    {"role": "user", "content": build_resume_request(resume_text)},
                ],
                temperature=0.1,
                max_tokens=2048,
            )
            data = parse_json_response(content)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            parsed = ParsedResume.from_mapping(data)
        except Exception as exc:
            return ServiceResult.failure(f"Resume parsing failed: {exc}")
        return ServiceResult.success(parsed)

    async def generate_interview_questions(
        self,
        params: GenerateQuestionsParams,
    ) -> ServiceResult[list[str]]:
        try:
            content = await self._complete(
                [
                    {"role": "system", "content": build_questions_prompt(params)},
                    {"role": "user", "content": GENERATE_QUESTIONS_REQUEST},
                ],
                temperature=0.8,
                max_tokens=1024,
            )
            data = parse_json_response(content)
            if not isinstance(data, list):
                raise ValueError("expected a JSON array")
            questions = [str(q).strip() for q in data if str(q).strip()]
        except Exception as exc:
            return ServiceResult.failure(f"Question generation failed: {exc}")
        return ServiceResult.success(questions)

    async def generate_feedback(self, question: str, answer: str) -> ServiceResult[str]:
        try:
            content = await self._complete(
                [
                    {"role": "system", "content": FEEDBACK_PROMPT},
                    {"role": "user", "content": build_feedback_request(question, answer)},
                ],
                temperature=0.7,
                max_tokens=512,
            )
        except Exception as exc:
            return ServiceResult.failure(f"Feedback generation failed: {exc}")
        return ServiceResult.success(content)

    # -- internal helpers ---------------------------------------------------

    async def _complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        data = await asyncio.to_thread(self._post_chat_completions, payload)
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise GroqAPIError(f"Malformed response: {exc}") from exc

    def _post_chat_completions(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/chat/completions"
        body = json.dumps(payload).encode("utf-8")
        req = urllib.request.Request(url, data=body, method="POST")
        req.add_header("Authorization", f"Bearer {self._api_key}")
        req.add_header("Content-Type", "application/json")
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            raise GroqAPIError(f"API error: {exc.code}") from exc
