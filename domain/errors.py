"""
Error taxonomy shared by use cases and adapters.

Use cases raise these; ports that talk to external systems return
``ServiceResult`` envelopes instead and the use case converts a failure
envelope into ``ExternalServiceError``.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for every error raised by the core."""


class ValidationError(DomainError, ValueError):
    """Input is missing, blank, too long or out of range."""


class NotFoundError(DomainError, LookupError):
    """The referenced entity does not exist."""


class AuthorizationError(DomainError, PermissionError):
    """The entity exists but belongs to another user."""


class ExternalServiceError(DomainError, RuntimeError):
    """An AI, storage or parser port reported a failure."""


class RepositoryError(DomainError, RuntimeError):
    """A persistence adapter failed to write."""


class RateLimitError(DomainError):
    """The caller used up its request budget for the current window."""


__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "ExternalServiceError",
    "RepositoryError",
    "RateLimitError",
]
