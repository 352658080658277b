from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Generic, TypeVar

from .values import Unset

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Tagged success/failure envelope returned by external-service ports.

    Network and vendor failures are data at the port boundary; the use case
    decides whether a failure becomes an exception.
    """

    ok: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, data: T | None = None) -> "ServiceResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "ServiceResult[T]":
        return cls(ok=False, error=error or "Unknown error")


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None
    created_at: datetime


@dataclass(frozen=True)
class UploadRequest:
    """Parameters for ``StorageServicePort.upload``."""

    bucket: str
    path: str
    content: bytes
    content_type: str | None = None
    upsert: bool = False


@dataclass(frozen=True)
class PDFText:
    text: str
    page_count: int | None = None


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration loaded from config.json."""

    groq_api_key: str
    groq_model: str = "llama-3.1-8b-instant"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    resume_bucket: str = "resumes"
    rate_limit_max_requests: int = 30
    rate_limit_window_seconds: int = 60


def provided_fields(update: Any) -> dict[str, Any]:
    """Return the fields of a partial-update dataclass that were actually set."""
    return {
        f.name: getattr(update, f.name)
        for f in fields(update)
        if not isinstance(getattr(update, f.name), Unset)
    }
