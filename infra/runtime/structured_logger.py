from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

_LEVELS = {"info": 20, "warning": 30, "error": 40}


class StructuredLogger:
    """
    ``LoggerPort`` adapter that writes one JSON object per line.

    Events below ``min_level`` are dropped. Field values that JSON cannot
    encode are rendered with ``str``.
    """

    def __init__(
        self,
        name: str = "nexcareer",
        *,
        min_level: str = "info",
        stream: TextIO | None = None,
    ) -> None:
        if min_level not in _LEVELS:
            raise ValueError(f"Unknown log level: {min_level}")
        self._name = name
        self._min_level = _LEVELS[min_level]
        self._stream = stream

    def info(self, message: str, **fields: Any) -> None:
        self._emit("info", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._emit("warning", message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._emit("error", message, fields)

    def child(self, name: str) -> "StructuredLogger":
        level = next(k for k, v in _LEVELS.items() if v == self._min_level)
        return StructuredLogger(f"{self._name}.{name}", min_level=level, stream=self._stream)

    def _emit(self, level: str, message: str, fields: dict[str, Any]) -> None:
        if _LEVELS[level] < self._min_level:
            return
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "logger": self._name,
            "message": message,
            "fields": fields,
        }
        print(json.dumps(payload, sort_keys=True, default=str), file=self._stream or sys.stdout)
