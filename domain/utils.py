from __future__ import annotations

import math
from typing import Any


def split_csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def clean_optional(value: str | None) -> str | None:
    """Trim ``value``; blank or missing becomes ``None``."""
    if value is None:
        return None
    return value.strip() or None


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class SilentLogger:
    """``LoggerPort`` that drops everything; default when no logger is injected."""

    def info(self, message: str, **fields: Any) -> None:
        return None

    def warning(self, message: str, **fields: Any) -> None:
        return None

    def error(self, message: str, **fields: Any) -> None:
        return None


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
