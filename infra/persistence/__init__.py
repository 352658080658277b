"""SQLite-backed persistence adapters for domain repository ports."""

from .sqlite_application_repository import SQLiteApplicationRepository
from .sqlite_practice_session_repository import SQLitePracticeSessionRepository
from .sqlite_profile_repository import SQLiteProfileRepository

__all__ = [
    "SQLiteApplicationRepository",
    "SQLiteProfileRepository",
    "SQLitePracticeSessionRepository",
]
