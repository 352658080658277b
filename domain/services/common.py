from __future__ import annotations

from typing import TypeVar

from domain.errors import AuthorizationError, ExternalServiceError, NotFoundError
from domain.models import Application, ServiceResult
from domain.ports import ApplicationRepositoryPort, LoggerPort
from domain.utils import SilentLogger

T = TypeVar("T")


def require_data(result: ServiceResult[T], fallback_error: str) -> T:
    """
    Unwrap a port envelope or raise ``ExternalServiceError``.

    Empty data (``""``, ``[]``, ``None``) counts as a failure.
    """
    if not result.ok or not result.data:
        raise ExternalServiceError(result.error or fallback_error)
    return result.data


def logger_or_silent(logger: LoggerPort | None) -> LoggerPort:
    return logger if logger is not None else SilentLogger()


async def load_owned_application(
    repo: ApplicationRepositoryPort,
    application_id: str,
    user_id: str,
    *,
    action: str,
) -> Application:
    """Fetch an application for mutation, distinguishing missing from foreign."""
    existing = await repo.find_by_id(application_id)
    if existing is None:
        raise NotFoundError("Application not found")
    if existing.user_id != user_id:
        raise AuthorizationError(f"Not authorized to {action} this application")
    return existing
