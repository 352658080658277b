from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Sequence

from .values import InterviewType


@dataclass(frozen=True)
class InterviewQuestion:
    question: str
    answer: str | None = None
    feedback: str | None = None

    @property
    def is_answered(self) -> bool:
        return self.answer is not None and bool(self.answer.strip())

    @property
    def has_feedback(self) -> bool:
        return self.feedback is not None and bool(self.feedback.strip())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InterviewQuestion":
        return cls(
            question=str(data.get("question") or ""),
            answer=data.get("answer"),
            feedback=data.get("feedback"),
        )

    def to_dict(self) -> dict[str, str | None]:
        return {"question": self.question, "answer": self.answer, "feedback": self.feedback}


@dataclass(frozen=True)
class PracticeSession:
    """
    One interview practice run.

    The question list keeps its length for the life of the session; answers
    are written in place by index.
    """

    id: str
    user_id: str
    type: InterviewType
    questions: Sequence[InterviewQuestion]
    created_at: datetime
    application_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))

    @property
    def completion_percentage(self) -> int:
        if not self.questions:
            return 0
        answered = sum(1 for q in self.questions if q.is_answered)
        # Round half up.
        return math.floor(answered * 100 / len(self.questions) + 0.5)

    @property
    def is_complete(self) -> bool:
        return self.completion_percentage == 100


@dataclass(frozen=True)
class NewPracticeSession:
    user_id: str
    type: InterviewType
    questions: Sequence[InterviewQuestion]
    application_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))


@dataclass(frozen=True)
class GenerateQuestionsParams:
    type: InterviewType
    company: str | None = None
    position: str | None = None
    skills: Sequence[str] = field(default_factory=tuple)
    question_count: int = 5
