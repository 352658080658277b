"""
Reusable fakes and in-memory implementations for tests.
"""

from .fake_application_repository import InMemoryApplicationRepository
from .fake_backend_client import FakeBackendClient
from .fake_practice_session_repository import InMemoryPracticeSessionRepository
from .fake_profile_repository import InMemoryProfileRepository
from .fake_runtime import FixedClock, InMemoryLogger, SequentialIdGenerator
from .fake_services import InMemoryStorageService, StubPDFParser
from .scripted_ai_service import ScriptedAIService

__all__ = [
    "FakeBackendClient",
    "InMemoryApplicationRepository",
    "InMemoryProfileRepository",
    "InMemoryPracticeSessionRepository",
    "InMemoryStorageService",
    "StubPDFParser",
    "ScriptedAIService",
    "FixedClock",
    "SequentialIdGenerator",
    "InMemoryLogger",
]
