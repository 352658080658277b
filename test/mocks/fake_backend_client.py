"""
In-memory stand-in for the hosted backend client.

Implements just enough of the query-builder, auth and storage surfaces for
the Supabase adapters: equality and ``in`` filters, quoted ``ilike`` or-filters,
ordering with PostgreSQL null placement, and ``on_conflict`` upserts.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Callable, Mapping, Sequence

from infra.supabase import BackendClient, TableClient

_ILIKE_TERM = re.compile(r'(\w+)\.ilike\.("(?:[^"\\]|\\.)*"|[^,]*)')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
        return re.sub(r"\\(.)", r"\1", value)
    return value


def _ilike(pattern: str, text: Any) -> bool:
    if text is None:
        return False
    regex = "".join(".*" if ch == "%" else re.escape(ch) for ch in pattern)
    return re.fullmatch(regex, str(text), flags=re.IGNORECASE | re.DOTALL) is not None


@dataclass
class FakeResponse:
    data: Any


class FakeQueryBuilder:
    def __init__(self, backend: "FakeBackendClient", table: str) -> None:
        self._backend = backend
        self._table = table
        self._op = "select"
        self._values: Any = None
        self._on_conflict = ""
        self._filters: list[Callable[[Mapping[str, Any]], bool]] = []
        self._order: list[tuple[str, bool]] = []
        self._limit: int | None = None

    def select(self, columns: str = "*") -> "FakeQueryBuilder":
        self._op = "select"
        return self

    def insert(self, values: Any) -> "FakeQueryBuilder":
        self._op, self._values = "insert", values
        return self

    def update(self, values: Mapping[str, Any]) -> "FakeQueryBuilder":
        self._op, self._values = "update", values
        return self

    def upsert(self, values: Mapping[str, Any], *, on_conflict: str = "") -> "FakeQueryBuilder":
        self._op, self._values, self._on_conflict = "upsert", values, on_conflict
        return self

    def delete(self) -> "FakeQueryBuilder":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQueryBuilder":
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: Sequence[Any]) -> "FakeQueryBuilder":
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def or_(self, filters: str) -> "FakeQueryBuilder":
        terms = [(col, _unquote(raw)) for col, raw in _ILIKE_TERM.findall(filters)]
        self._backend.or_filters.append(filters)
        self._filters.append(lambda row: any(_ilike(p, row.get(c)) for c, p in terms))
        return self

    def order(self, column: str, *, desc: bool = False) -> "FakeQueryBuilder":
        self._order.append((column, desc))
        return self

    def limit(self, size: int) -> "FakeQueryBuilder":
        self._limit = size
        return self

    async def execute(self) -> FakeResponse:
        error = self._backend.errors.pop(self._table, None)
        if error is not None:
            raise error
        rows = self._backend.tables.setdefault(self._table, [])
        handler = getattr(self, f"_run_{self._op}")
        return FakeResponse(data=copy.deepcopy(handler(rows)))

    def _matches(self, row: Mapping[str, Any]) -> bool:
        return all(f(row) for f in self._filters)

    def _run_select(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        found = [r for r in rows if self._matches(r)]
        # NULLS LAST ascending, NULLS FIRST descending.
        for column, desc in reversed(self._order):
            found.sort(
                key=lambda r: (r.get(column) is None, r.get(column) or ""),
                reverse=desc,
            )
        return found[: self._limit] if self._limit is not None else found

    def _run_insert(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        values = self._values if isinstance(self._values, list) else [self._values]
        inserted = []
        for value in values:
            row = {
                "id": self._backend.new_id(self._table),
                "created_at": self._backend.now,
                "updated_at": self._backend.now,
                **copy.deepcopy(dict(value)),
            }
            rows.append(row)
            inserted.append(row)
        return inserted

    def _run_update(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        updated = []
        for row in rows:
            if self._matches(row):
                row.update(copy.deepcopy(dict(self._values)), updated_at=self._backend.now)
                updated.append(row)
        return updated

    def _run_upsert(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        key = self._on_conflict or "id"
        for row in rows:
            if key in self._values and row.get(key) == self._values[key]:
                row.update(copy.deepcopy(dict(self._values)), updated_at=self._backend.now)
                return [row]
        return self._run_insert(rows)

    def _run_delete(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        removed = [r for r in rows if self._matches(r)]
        rows[:] = [r for r in rows if not self._matches(r)]
        return removed


class FakeAuthClient:
    def __init__(self, now: str) -> None:
        self._now = now
        self._users: dict[str, tuple[str, SimpleNamespace]] = {}
        self.current: SimpleNamespace | None = None
        self.reset_requests: list[str] = []
        self.fail_reset: Exception | None = None

    async def get_user(self) -> Any:
        return SimpleNamespace(user=self.current) if self.current is not None else None

    async def sign_in_with_password(self, credentials: Mapping[str, str]) -> Any:
        entry = self._users.get(credentials["email"])
        if entry is None or entry[0] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        self.current = entry[1]
        return SimpleNamespace(user=self.current, session=SimpleNamespace(access_token="t"))

    async def sign_up(self, credentials: Mapping[str, str]) -> Any:
        email = credentials["email"]
        if email in self._users:
            raise RuntimeError("User already registered")
        user = SimpleNamespace(id=f"user-{len(self._users) + 1}", email=email, created_at=self._now)
        self._users[email] = (credentials["password"], user)
        self.current = user
        return SimpleNamespace(user=user, session=None)

    async def sign_out(self) -> None:
        self.current = None

    async def reset_password_for_email(self, email: str) -> None:
        if self.fail_reset is not None:
            raise self.fail_reset
        self.reset_requests.append(email)


class FakeStorageBucket:
    def __init__(self, name: str) -> None:
        self.name = name
        self.files: dict[str, tuple[bytes, dict[str, str]]] = {}

    async def upload(
        self,
        path: str,
        file: bytes,
        file_options: Mapping[str, str] | None = None,
    ) -> Any:
        options = dict(file_options or {})
        if path in self.files and options.get("upsert") != "true":
            raise RuntimeError("The resource already exists")
        self.files[path] = (file, options)
        return SimpleNamespace(path=path)

    async def remove(self, paths: Sequence[str]) -> Any:
        return [{"name": p} for p in paths if self.files.pop(p, None) is not None]

    async def create_signed_url(self, path: str, expires_in: int) -> Mapping[str, Any]:
        if path not in self.files:
            raise RuntimeError("Object not found")
        return {"signedURL": f"https://storage.test/sign/{self.name}/{path}?expires_in={expires_in}"}

    def get_public_url(self, path: str) -> str:
        return f"https://storage.test/public/{self.name}/{path}"


class FakeStorageClient:
    def __init__(self) -> None:
        self.buckets: dict[str, FakeStorageBucket] = {}

    def from_(self, bucket: str) -> FakeStorageBucket:
        return self.buckets.setdefault(bucket, FakeStorageBucket(bucket))


class FakeBackendClient:
    def __init__(self, now: str = "2025-03-12T12:00:00+00:00") -> None:
        self.now = now
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.errors: dict[str, Exception] = {}
        self.or_filters: list[str] = []
        self.auth = FakeAuthClient(now)
        self.storage = FakeStorageClient()
        self._counter = 0

    def table(self, name: str) -> FakeQueryBuilder:
        return FakeQueryBuilder(self, name)

    def new_id(self, table: str) -> str:
        self._counter += 1
        return f"{table}-{self._counter}"

    def fail_next(self, table: str, error: Exception) -> None:
        """Make the next query against ``table`` raise ``error``."""
        self.errors[table] = error


_table_client_check: TableClient = FakeBackendClient()
_backend_client_check: BackendClient = FakeBackendClient()
