from __future__ import annotations

import asyncio
import json
import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.models import AppConfig

CONFIG_FILENAME = "config.json"

_REQUIRED_KEYS = ("GROQ_API_KEY",)
_POSITIVE_INT_KEYS = ("RATE_LIMIT_MAX_REQUESTS", "RATE_LIMIT_WINDOW_SECONDS")
_PLACEHOLDER = re.compile(r"^YOUR_", re.IGNORECASE)
_MIN_KEY_LENGTH = 10


@dataclass(frozen=True)
class ConnectivityResult:
    """Result of probing the Groq models endpoint with the configured key."""

    errors: list[str]
    model_count: int | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


def _format_problems(data: dict[str, Any]) -> list[str]:
    problems: list[str] = []

    api_key = str(data.get("GROQ_API_KEY") or "")
    if not api_key or _PLACEHOLDER.match(api_key):
        problems.append("GROQ_API_KEY is a placeholder. Create a key in the Groq console.")
    elif len(api_key) < _MIN_KEY_LENGTH:
        problems.append(f"GROQ_API_KEY must be at least {_MIN_KEY_LENGTH} characters.")

    base_url = data.get("GROQ_BASE_URL")
    if base_url is not None and not str(base_url).startswith("https://"):
        problems.append("GROQ_BASE_URL must start with 'https://'.")

    for key in _POSITIVE_INT_KEYS:
        if key not in data:
            continue
        value = data[key]
        # bool is an int subclass; reject it explicitly.
        if type(value) is not int or value <= 0:
            problems.append(f"{key} must be a positive integer.")
    return problems


def _fetch_models(api_key: str, base_url: str) -> tuple[int | None, str | None]:
    req = urllib.request.Request(f"{base_url.rstrip('/')}/models", method="GET")
    req.add_header("Authorization", f"Bearer {api_key}")
    try:
        with urllib.request.urlopen(req, timeout=15) as resp:
            body = json.loads(resp.read().decode("utf-8"))
    except urllib.error.HTTPError as exc:
        if exc.code == 401:
            return None, (
                "Groq API key rejected: 401 Unauthorized. "
                f"Check GROQ_API_KEY in {CONFIG_FILENAME}."
            )
        return None, f"Groq API error: {exc.code} {exc.reason}."
    except Exception as exc:
        return None, f"Groq connectivity failed: {exc}"
    return len(body.get("data") or []), None


class FileSystemConfigProvider:
    """
    Loads ``AppConfig`` from ``<config_dir>/config.json``.

    Nothing is cached: each call reads the file again, so edits apply to the
    next command without a restart.
    """

    def __init__(self, config_dir: str) -> None:
        self._config_dir = Path(config_dir)

    @property
    def config_path(self) -> Path:
        return self._config_dir / CONFIG_FILENAME

    def validate(self) -> list[str]:
        """Human-readable problems with the config file; empty when usable."""
        path = self.config_path
        if not path.is_file():
            return [f"Missing file: {path}"]
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            return [f"Cannot read {path}: {exc}"]

        absent = [key for key in _REQUIRED_KEYS if key not in data]
        if absent:
            return [f"{path.name} missing keys: {', '.join(absent)}"]
        return _format_problems(data)

    def get_config(self) -> AppConfig:
        data = json.loads(self.config_path.read_text(encoding="utf-8"))
        fallback = AppConfig(groq_api_key="")
        return AppConfig(
            groq_api_key=data["GROQ_API_KEY"],
            groq_model=data.get("GROQ_MODEL", fallback.groq_model),
            groq_base_url=data.get("GROQ_BASE_URL", fallback.groq_base_url),
            resume_bucket=data.get("RESUME_BUCKET", fallback.resume_bucket),
            rate_limit_max_requests=int(
                data.get("RATE_LIMIT_MAX_REQUESTS", fallback.rate_limit_max_requests)
            ),
            rate_limit_window_seconds=int(
                data.get("RATE_LIMIT_WINDOW_SECONDS", fallback.rate_limit_window_seconds)
            ),
        )

    async def validate_connectivity(self) -> ConnectivityResult:
        """List the models visible to the configured key; the request runs in a worker thread."""
        config = self.get_config()
        count, problem = await asyncio.to_thread(
            _fetch_models, config.groq_api_key, config.groq_base_url
        )
        return ConnectivityResult(errors=[problem] if problem else [], model_count=count)
