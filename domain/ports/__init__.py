from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, Sequence, runtime_checkable

from domain.models import (
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationUpdate,
    AuthUser,
    ChatMessage,
    GenerateQuestionsParams,
    InterviewQuestion,
    NewApplication,
    NewPracticeSession,
    NewProfile,
    ParsedResume,
    PDFText,
    PracticeSession,
    Profile,
    ProfileUpdate,
    ServiceResult,
    UploadRequest,
)


@runtime_checkable
class ApplicationRepositoryPort(Protocol):
    """Store and query a user's job applications."""

    @abstractmethod
    async def find_by_id(self, application_id: str) -> Application | None:
        ...

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Sequence[Application]:
        ...

    @abstractmethod
    async def find_by_status(
        self,
        user_id: str,
        status: ApplicationStatus,
    ) -> Sequence[Application]:
        ...

    @abstractmethod
    async def search(self, user_id: str, keyword: str) -> Sequence[Application]:
        """Match ``keyword`` against company, position and notes."""

    @abstractmethod
    async def create(self, application: NewApplication) -> Application:
        ...

    @abstractmethod
    async def create_many(
        self,
        applications: Sequence[NewApplication],
    ) -> Sequence[Application]:
        ...

    @abstractmethod
    async def update(self, application_id: str, update: ApplicationUpdate) -> Application:
        ...

    @abstractmethod
    async def delete(self, application_id: str) -> None:
        ...

    @abstractmethod
    async def delete_by_user_id(self, user_id: str) -> int:
        """Remove every application the user owns; returns how many were removed."""

    @abstractmethod
    async def get_stats(self, user_id: str) -> ApplicationStats:
        ...


@runtime_checkable
class ProfileRepositoryPort(Protocol):
    """Store and query career profiles, one per user."""

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Profile | None:
        ...

    @abstractmethod
    async def create(self, profile: NewProfile) -> Profile:
        ...

    @abstractmethod
    async def update(self, user_id: str, update: ProfileUpdate) -> Profile:
        ...

    @abstractmethod
    async def upsert(self, profile: NewProfile) -> Profile:
        ...


@runtime_checkable
class PracticeSessionRepositoryPort(Protocol):
    """Store and query interview practice sessions."""

    @abstractmethod
    async def find_by_id(self, session_id: str) -> PracticeSession | None:
        ...

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Sequence[PracticeSession]:
        ...

    @abstractmethod
    async def find_by_application_id(self, application_id: str) -> Sequence[PracticeSession]:
        ...

    @abstractmethod
    async def create(self, session: NewPracticeSession) -> PracticeSession:
        ...

    @abstractmethod
    async def update_questions(
        self,
        session_id: str,
        questions: Sequence[InterviewQuestion],
    ) -> PracticeSession:
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        ...


@runtime_checkable
class AIServicePort(Protocol):
    """
    Hosted LLM features.

    Every method returns a ``ServiceResult`` instead of raising.
    """

    async def chat(self, messages: Sequence[ChatMessage]) -> ServiceResult[str]:
        ...

    async def parse_resume(self, resume_text: str) -> ServiceResult[ParsedResume]:
        ...

    async def generate_interview_questions(
        self,
        params: GenerateQuestionsParams,
    ) -> ServiceResult[list[str]]:
        ...

    async def generate_feedback(self, question: str, answer: str) -> ServiceResult[str]:
        ...


@runtime_checkable
class StorageServicePort(Protocol):
    """File storage. Paths passed to ``delete``/``get_signed_url`` are ``<bucket>/<path>``."""

    async def upload(self, request: UploadRequest) -> ServiceResult[str]:
        ...

    async def delete(self, path: str) -> ServiceResult[None]:
        ...

    async def get_signed_url(self, path: str, expires_in: int = 3600) -> ServiceResult[str]:
        ...


@runtime_checkable
class AuthServicePort(Protocol):
    async def get_current_user(self) -> AuthUser | None:
        ...

    async def sign_in(self, email: str, password: str) -> ServiceResult[AuthUser]:
        ...

    async def sign_up(self, email: str, password: str) -> ServiceResult[AuthUser]:
        ...

    async def sign_out(self) -> None:
        ...

    async def reset_password(self, email: str) -> ServiceResult[None]:
        ...


@runtime_checkable
class PDFParserPort(Protocol):
    async def extract_text(self, file: bytes) -> ServiceResult[PDFText]:
        ...


@dataclass
class RateLimitWindow:
    count: int
    reset_at: float


@runtime_checkable
class RateLimitStorePort(Protocol):
    """Backing store for rate-limit windows, keyed by caller identifier."""

    def get(self, identifier: str) -> RateLimitWindow | None:
        ...

    def set(self, identifier: str, window: RateLimitWindow) -> None:
        ...

    def delete(self, identifier: str) -> None:
        ...

    def items(self) -> Sequence[tuple[str, RateLimitWindow]]:
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Time source for deterministic and easily testable code."""

    def now(self) -> datetime:
        ...


@runtime_checkable
class IdGeneratorPort(Protocol):
    def new_id(self) -> str:
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Structured, testable logging abstraction."""

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, **fields: Any) -> None:
        ...


__all__ = [
    "ApplicationRepositoryPort",
    "ProfileRepositoryPort",
    "PracticeSessionRepositoryPort",
    "AIServicePort",
    "StorageServicePort",
    "AuthServicePort",
    "PDFParserPort",
    "RateLimitStorePort",
    "RateLimitWindow",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
