from __future__ import annotations

from datetime import datetime
from typing import Any

from domain.models import AuthUser, ServiceResult
from domain.ports import LoggerPort
from domain.utils import SilentLogger
from infra.persistence._datetime import iso_to_dt

from .client import AuthClient


def _to_auth_user(user: Any) -> AuthUser:
    created_at = getattr(user, "created_at", None)
    if not isinstance(created_at, datetime):
        created_at = iso_to_dt(created_at)
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None) or None,
        created_at=created_at,
    )


class SupabaseAuthService:
    """``AuthServicePort`` over the backend's ``auth`` namespace."""

    def __init__(self, auth: AuthClient, *, logger: LoggerPort | None = None) -> None:
        self._auth = auth
        self._logger = logger or SilentLogger()

    async def get_current_user(self) -> AuthUser | None:
        try:
            response = await self._auth.get_user()
        except Exception as exc:
            self._logger.warning("auth_get_user_failed", error=str(exc))
            return None
        user = getattr(response, "user", None) if response is not None else None
        return _to_auth_user(user) if user is not None else None

    async def sign_in(self, email: str, password: str) -> ServiceResult[AuthUser]:
        return await self._authenticate(
            self._auth.sign_in_with_password,
            email,
            password,
            label="Sign in failed",
        )

    async def sign_up(self, email: str, password: str) -> ServiceResult[AuthUser]:
        return await self._authenticate(
            self._auth.sign_up,
            email,
            password,
            label="Sign up failed",
        )

    async def sign_out(self) -> None:
        await self._auth.sign_out()

    async def reset_password(self, email: str) -> ServiceResult[None]:
        try:
            await self._auth.reset_password_for_email(email)
        except Exception as exc:
            return ServiceResult.failure(f"Password reset failed: {exc}")
        return ServiceResult.success()

    async def _authenticate(
        self,
        call: Any,
        email: str,
        password: str,
        *,
        label: str,
    ) -> ServiceResult[AuthUser]:
        try:
            response = await call({"email": email, "password": password})
        except Exception as exc:
            return ServiceResult.failure(f"{label}: {exc}")
        user = getattr(response, "user", None)
        if user is None:
            return ServiceResult.failure(label)
        return ServiceResult.success(_to_auth_user(user))
