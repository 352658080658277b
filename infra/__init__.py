"""Infrastructure adapters: concrete implementations of domain ports."""

from .config import FileSystemConfigProvider
from .importers import parse_csv_text, read_csv_file
from .llm import GroqAIService
from .pdf import PdfMinerParserService
from .persistence import (
    SQLiteApplicationRepository,
    SQLitePracticeSessionRepository,
    SQLiteProfileRepository,
)
from .runtime import InMemoryRateLimitStore, StructuredLogger, SystemClock, UuidIdGenerator
from .storage import FileSystemStorageService
from .supabase import (
    SupabaseApplicationRepository,
    SupabaseAuthService,
    SupabasePracticeSessionRepository,
    SupabaseProfileRepository,
    SupabaseStorageService,
)

__all__ = [
    "FileSystemConfigProvider",
    "FileSystemStorageService",
    "GroqAIService",
    "InMemoryRateLimitStore",
    "PdfMinerParserService",
    "SQLiteApplicationRepository",
    "SQLitePracticeSessionRepository",
    "SQLiteProfileRepository",
    "StructuredLogger",
    "SupabaseApplicationRepository",
    "SupabaseAuthService",
    "SupabasePracticeSessionRepository",
    "SupabaseProfileRepository",
    "SupabaseStorageService",
    "SystemClock",
    "UuidIdGenerator",
    "parse_csv_text",
    "read_csv_file",
]
