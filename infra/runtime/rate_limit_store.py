from __future__ import annotations

from typing import Sequence

from domain.ports import RateLimitWindow


class InMemoryRateLimitStore:
    """Per-process ``RateLimitStorePort``. Share one instance to share limits."""

    def __init__(self) -> None:
        self._windows: dict[str, RateLimitWindow] = {}

    def get(self, identifier: str) -> RateLimitWindow | None:
        return self._windows.get(identifier)

    def set(self, identifier: str, window: RateLimitWindow) -> None:
        self._windows[identifier] = window

    def delete(self, identifier: str) -> None:
        self._windows.pop(identifier, None)

    def items(self) -> Sequence[tuple[str, RateLimitWindow]]:
        return list(self._windows.items())

    def __len__(self) -> int:
        return len(self._windows)
