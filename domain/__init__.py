"""
Domain layer package.

This package contains the job-tracking business logic: models, ports and
use cases that are independent of any specific database, LLM vendor or
storage backend.
"""

from .errors import (  # noqa: F401
    AuthorizationError,
    DomainError,
    ExternalServiceError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from .models import (  # noqa: F401
    Application,
    ApplicationStatus,
    ChatMessage,
    InterviewType,
    PracticeSession,
    Profile,
    ServiceResult,
)
from .ports import (  # noqa: F401
    AIServicePort,
    ApplicationRepositoryPort,
    AuthServicePort,
    ClockPort,
    IdGeneratorPort,
    LoggerPort,
    PDFParserPort,
    PracticeSessionRepositoryPort,
    ProfileRepositoryPort,
    RateLimitStorePort,
    StorageServicePort,
)

__all__ = [
    # Errors
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "ExternalServiceError",
    "RepositoryError",
    # Models
    "Application",
    "ApplicationStatus",
    "Profile",
    "PracticeSession",
    "InterviewType",
    "ChatMessage",
    "ServiceResult",
    # Ports
    "ApplicationRepositoryPort",
    "ProfileRepositoryPort",
    "PracticeSessionRepositoryPort",
    "AIServicePort",
    "StorageServicePort",
    "AuthServicePort",
    "PDFParserPort",
    "RateLimitStorePort",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
