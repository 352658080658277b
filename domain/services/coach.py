"""Interview practice use cases."""

from __future__ import annotations

from dataclasses import dataclass

from domain.errors import AuthorizationError, NotFoundError, ValidationError
from domain.models import (
    GenerateQuestionsParams,
    InterviewQuestion,
    InterviewType,
    NewPracticeSession,
    PracticeSession,
)
from domain.ports import (
    AIServicePort,
    ApplicationRepositoryPort,
    LoggerPort,
    PracticeSessionRepositoryPort,
    ProfileRepositoryPort,
)
from domain.utils import is_blank

from .common import logger_or_silent, require_data

DEFAULT_QUESTION_COUNT = 5


class StartPracticeSession:
    """Generate a set of interview questions and persist them as a new session."""

    def __init__(
        self,
        *,
        sessions: PracticeSessionRepositoryPort,
        applications: ApplicationRepositoryPort,
        profiles: ProfileRepositoryPort,
        ai: AIServicePort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._sessions = sessions
        self._applications = applications
        self._profiles = profiles
        self._ai = ai
        self._logger = logger_or_silent(logger)

    async def execute(
        self,
        user_id: str,
        interview_type: InterviewType | str,
        *,
        application_id: str | None = None,
        question_count: int = DEFAULT_QUESTION_COUNT,
    ) -> PracticeSession:
        try:
            interview_type = InterviewType(interview_type)
        except ValueError:
            raise ValidationError(f"Invalid interview type: {interview_type}") from None

        company = position = None
        if application_id:
            application = await self._applications.find_by_id(application_id)
            # A foreign application contributes no context.
            if application is not None and application.user_id == user_id:
                company = application.company
                position = application.position

        skills: tuple[str, ...] = ()
        if interview_type is InterviewType.TECHNICAL:
            profile = await self._profiles.find_by_user_id(user_id)
            if profile is not None and profile.skills:
                skills = tuple(profile.skills)

        result = await self._ai.generate_interview_questions(
            GenerateQuestionsParams(
                type=interview_type,
                company=company,
                position=position,
                skills=skills,
                question_count=question_count,
            )
        )
        if not result.ok:
            self._logger.error(
                "question_generation_failed",
                user_id=user_id,
                type=interview_type.value,
                error=result.error,
            )
        questions = require_data(result, "Failed to generate questions")

        session = await self._sessions.create(
            NewPracticeSession(
                user_id=user_id,
                type=interview_type,
                questions=[InterviewQuestion(question=q) for q in questions],
                application_id=application_id,
            )
        )
        self._logger.info(
            "practice_session_started",
            user_id=user_id,
            session_id=session.id,
            questions=len(session.questions),
        )
        return session


@dataclass(frozen=True)
class AnswerFeedback:
    session: PracticeSession
    feedback: str


class SubmitAnswer:
    """Record an answer for one question and attach AI feedback to it."""

    def __init__(
        self,
        *,
        sessions: PracticeSessionRepositoryPort,
        ai: AIServicePort,
        logger: LoggerPort | None = None,
    ) -> None:
        self._sessions = sessions
        self._ai = ai
        self._logger = logger_or_silent(logger)

    async def execute(
        self,
        user_id: str,
        session_id: str,
        question_index: int,
        answer: str,
    ) -> AnswerFeedback:
        session = await self._sessions.find_by_id(session_id)
        if session is None:
            raise NotFoundError("Practice session not found")
        if session.user_id != user_id:
            raise AuthorizationError("Not authorized to access this session")
        if question_index < 0 or question_index >= len(session.questions):
            raise ValidationError("Invalid question index")
        if is_blank(answer):
            raise ValidationError("Answer cannot be empty")

        answer = answer.strip()
        question = session.questions[question_index]
        result = await self._ai.generate_feedback(question.question, answer)
        if not result.ok:
            self._logger.error(
                "feedback_generation_failed",
                user_id=user_id,
                session_id=session_id,
                error=result.error,
            )
        feedback = require_data(result, "Failed to generate feedback")

        questions = list(session.questions)
        questions[question_index] = InterviewQuestion(
            question=question.question,
            answer=answer,
            feedback=feedback,
        )
        updated = await self._sessions.update_questions(session_id, questions)
        return AnswerFeedback(session=updated, feedback=feedback)


class GetPracticeSessions:
    def __init__(self, *, sessions: PracticeSessionRepositoryPort) -> None:
        self._sessions = sessions

    async def execute(
        self,
        user_id: str,
        application_id: str | None = None,
    ) -> list[PracticeSession]:
        if application_id:
            found = await self._sessions.find_by_application_id(application_id)
        else:
            found = await self._sessions.find_by_user_id(user_id)
        return [s for s in found if s.user_id == user_id]
