from __future__ import annotations

from domain.ports import ClockPort, RateLimitStorePort, RateLimitWindow

DEFAULT_MAX_REQUESTS = 30
DEFAULT_WINDOW_SECONDS = 60


class RateLimiter:
    """
    Fixed-window request limiter.

    State lives in the injected store so one limiter instance (or a shared
    store) scopes the limits; nothing is kept at module level.
    """

    def __init__(
        self,
        *,
        store: RateLimitStorePort,
        clock: ClockPort,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
    ) -> None:
        self._store = store
        self._clock = clock
        self._max_requests = max_requests
        self._window_seconds = window_seconds

    def is_limited(self, identifier: str) -> bool:
        """Count one request for ``identifier``; True when it must be rejected."""
        now = self._clock.now().timestamp()
        window = self._store.get(identifier)

        if window is None or now > window.reset_at:
            self._store.set(
                identifier,
                RateLimitWindow(count=1, reset_at=now + self._window_seconds),
            )
            return False

        if window.count >= self._max_requests:
            return True

        self._store.set(
            identifier,
            RateLimitWindow(count=window.count + 1, reset_at=window.reset_at),
        )
        return False

    def cleanup(self) -> int:
        """Drop expired windows and return how many were removed."""
        now = self._clock.now().timestamp()
        expired = [key for key, window in self._store.items() if now > window.reset_at]
        for key in expired:
            self._store.delete(key)
        return len(expired)
