from __future__ import annotations

from domain.models import ServiceResult, UploadRequest

from .client import StorageClient


def split_bucket_path(path: str) -> tuple[str, str]:
    """``"resumes/u1/file.pdf"`` -> ``("resumes", "u1/file.pdf")``."""
    bucket, _, file_path = path.partition("/")
    return bucket, file_path


class SupabaseStorageService:
    """``StorageServicePort`` over the backend's ``storage`` namespace."""

    def __init__(self, storage: StorageClient) -> None:
        self._storage = storage

    async def upload(self, request: UploadRequest) -> ServiceResult[str]:
        options = {"upsert": "true" if request.upsert else "false"}
        if request.content_type:
            options["content-type"] = request.content_type
        try:
            bucket = self._storage.from_(request.bucket)
            await bucket.upload(request.path, request.content, options)
            return ServiceResult.success(bucket.get_public_url(request.path))
        except Exception as exc:
            return ServiceResult.failure(f"Upload failed: {exc}")

    async def delete(self, path: str) -> ServiceResult[None]:
        bucket, file_path = split_bucket_path(path)
        try:
            await self._storage.from_(bucket).remove([file_path])
        except Exception as exc:
            return ServiceResult.failure(f"Delete failed: {exc}")
        return ServiceResult.success()

    async def get_signed_url(self, path: str, expires_in: int = 3600) -> ServiceResult[str]:
        bucket, file_path = split_bucket_path(path)
        try:
            data = await self._storage.from_(bucket).create_signed_url(file_path, expires_in)
        except Exception as exc:
            return ServiceResult.failure(f"Failed to create signed URL: {exc}")
        url = (data or {}).get("signedURL") or (data or {}).get("signedUrl")
        if not url:
            return ServiceResult.failure("Failed to create signed URL")
        return ServiceResult.success(url)
