"""Adapters for the hosted backend (database, auth and storage) behind explicit client protocols."""

from .application_repository import SupabaseApplicationRepository
from .auth_service import SupabaseAuthService
from .client import (
    AuthClient,
    BackendClient,
    QueryBuilder,
    StorageBucket,
    StorageClient,
    TableClient,
)
from .practice_session_repository import SupabasePracticeSessionRepository
from .profile_repository import SupabaseProfileRepository
from .storage_service import SupabaseStorageService

__all__ = [
    "AuthClient",
    "BackendClient",
    "QueryBuilder",
    "StorageBucket",
    "StorageClient",
    "TableClient",
    "SupabaseApplicationRepository",
    "SupabaseAuthService",
    "SupabasePracticeSessionRepository",
    "SupabaseProfileRepository",
    "SupabaseStorageService",
]
