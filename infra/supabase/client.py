"""
Minimal backend client contract, one protocol per capability.

The shapes follow the async Supabase Python client (``table(...)`` query
builders with an awaitable ``execute()``, ``auth`` and ``storage``
namespaces) so a real client can be passed straight in. Anything else that
satisfies these protocols works too; the repositories never import a vendor
SDK.

Failures are reported by raising: ``execute()`` and the auth/storage calls
raise on error, and the adapters convert that into their own error model.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class QueryResponse(Protocol):
    data: Any


@runtime_checkable
class QueryBuilder(Protocol):
    def select(self, columns: str = "*") -> "QueryBuilder":
        ...

    def insert(self, values: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> "QueryBuilder":
        ...

    def update(self, values: Mapping[str, Any]) -> "QueryBuilder":
        ...

    def upsert(self, values: Mapping[str, Any], *, on_conflict: str = "") -> "QueryBuilder":
        ...

    def delete(self) -> "QueryBuilder":
        ...

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        ...

    def in_(self, column: str, values: Sequence[Any]) -> "QueryBuilder":
        ...

    def or_(self, filters: str) -> "QueryBuilder":
        """PostgREST ``or`` filter, e.g. ``company.ilike."%acme%",notes.ilike."%acme%"``."""

    def order(self, column: str, *, desc: bool = False) -> "QueryBuilder":
        ...

    def limit(self, size: int) -> "QueryBuilder":
        ...

    async def execute(self) -> QueryResponse:
        ...


@runtime_checkable
class TableClient(Protocol):
    def table(self, name: str) -> QueryBuilder:
        ...


@runtime_checkable
class AuthClient(Protocol):
    """Responses expose ``.user`` with ``id``, ``email`` and ``created_at``."""

    async def get_user(self) -> Any:
        ...

    async def sign_in_with_password(self, credentials: Mapping[str, str]) -> Any:
        ...

    async def sign_up(self, credentials: Mapping[str, str]) -> Any:
        ...

    async def sign_out(self) -> None:
        ...

    async def reset_password_for_email(self, email: str) -> None:
        ...


@runtime_checkable
class StorageBucket(Protocol):
    async def upload(
        self,
        path: str,
        file: bytes,
        file_options: Mapping[str, str] | None = None,
    ) -> Any:
        ...

    async def remove(self, paths: Sequence[str]) -> Any:
        ...

    async def create_signed_url(self, path: str, expires_in: int) -> Mapping[str, Any]:
        """Returns a mapping with ``signedURL`` (or ``signedUrl``)."""

    def get_public_url(self, path: str) -> str:
        ...


@runtime_checkable
class StorageClient(Protocol):
    def from_(self, bucket: str) -> StorageBucket:
        ...


@runtime_checkable
class BackendClient(TableClient, Protocol):
    """A full client: tables plus ``auth`` and ``storage`` namespaces."""

    auth: AuthClient
    storage: StorageClient


def postgrest_quote(value: str) -> str:
    """Quote a value for use inside a PostgREST ``or`` filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def ilike_any(columns: Sequence[str], keyword: str) -> str:
    pattern = postgrest_quote(f"%{keyword}%")
    return ",".join(f"{column}.ilike.{pattern}" for column in columns)
