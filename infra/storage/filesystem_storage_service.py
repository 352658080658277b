from __future__ import annotations

import re
from datetime import timedelta
from pathlib import Path, PurePosixPath

from domain.models import ServiceResult, UploadRequest
from domain.ports import ClockPort
from infra.runtime import SystemClock

_SAFE_SEGMENT = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_segment(segment: str) -> str:
    cleaned = _SAFE_SEGMENT.sub("_", segment)
    cleaned = re.sub(r"\.{2,}", ".", cleaned).strip(".")
    return cleaned[:255] or "file"


class FileSystemStorageService:
    """
    Local ``StorageServicePort`` that keeps buckets as directories under ``base_dir``.

    URLs are ``file://`` URIs. Signed URLs carry an ``expires`` query
    parameter (epoch seconds) but nothing enforces it locally.
    """

    def __init__(self, base_dir: str = "storage", *, clock: ClockPort | None = None) -> None:
        self._base_dir = Path(base_dir)
        self._clock = clock or SystemClock()

    async def upload(self, request: UploadRequest) -> ServiceResult[str]:
        target = self._resolve(request.bucket, request.path)
        if target.exists() and not request.upsert:
            return ServiceResult.failure(f"Upload failed: {request.bucket}/{request.path} already exists")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(request.content)
        except OSError as exc:
            return ServiceResult.failure(f"Upload failed: {exc}")
        return ServiceResult.success(target.resolve().as_uri())

    async def delete(self, path: str) -> ServiceResult[None]:
        bucket, _, file_path = path.partition("/")
        target = self._resolve(bucket, file_path)
        try:
            target.unlink()
        except FileNotFoundError:
            return ServiceResult.failure(f"Delete failed: {path} not found")
        except OSError as exc:
            return ServiceResult.failure(f"Delete failed: {exc}")
        return ServiceResult.success()

    async def get_signed_url(self, path: str, expires_in: int = 3600) -> ServiceResult[str]:
        bucket, _, file_path = path.partition("/")
        target = self._resolve(bucket, file_path)
        if not target.is_file():
            return ServiceResult.failure("Failed to create signed URL")
        expires = int((self._clock.now() + timedelta(seconds=expires_in)).timestamp())
        return ServiceResult.success(f"{target.resolve().as_uri()}?expires={expires}")

    def _resolve(self, bucket: str, path: str) -> Path:
        parts = [_safe_segment(p) for p in PurePosixPath(path).parts if p not in ("", "/", "..")]
        return self._base_dir.joinpath(_safe_segment(bucket), *parts)
