"""Prompt templates for the hosted LLM."""

from .system_prompt import (  # noqa: F401
    build_application_chat_prompt,
    build_assistant_system_prompt,
)
from .task_prompts import (  # noqa: F401
    FEEDBACK_PROMPT,
    GENERATE_QUESTIONS_REQUEST,
    RESUME_PARSER_PROMPT,
    build_feedback_request,
    build_questions_prompt,
    build_resume_request,
)

__all__ = [
    "build_application_chat_prompt",
    "build_assistant_system_prompt",
    "FEEDBACK_PROMPT",
    "GENERATE_QUESTIONS_REQUEST",
    "RESUME_PARSER_PROMPT",
    "build_feedback_request",
    "build_questions_prompt",
    "build_resume_request",
]
