from __future__ import annotations

from datetime import datetime, timezone


class SystemClock:
    """Wall-clock ``ClockPort``; always timezone-aware UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
