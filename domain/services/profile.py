"""Use cases for the user's career profile and resume import."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence
from urllib.parse import unquote, urlsplit

from domain.errors import ExternalServiceError, NotFoundError
from domain.models import (
    Education,
    Experience,
    NewProfile,
    ParsedResume,
    Profile,
    ProfileUpdate,
    UploadRequest,
)
from domain.ports import (
    AIServicePort,
    ClockPort,
    LoggerPort,
    PDFParserPort,
    ProfileRepositoryPort,
    StorageServicePort,
)
from domain.utils import clean_optional

from .common import logger_or_silent, require_data

RESUME_BUCKET = "resumes"
RESUME_CONTENT_TYPE = "application/pdf"
RESUME_URL_TTL_SECONDS = 3600

_TEXT_FIELDS = ("name", "email", "phone", "summary")


def merge_skills(existing: Iterable[str], parsed: Iterable[str]) -> list[str]:
    """Union preserving order: existing skills first, then novel parsed ones."""
    return list(dict.fromkeys([*existing, *parsed]))


def merge_education(
    existing: Sequence[Education],
    parsed: Sequence[Education],
) -> list[Education]:
    known = {entry.merge_key for entry in existing}
    return [*existing, *(entry for entry in parsed if entry.merge_key not in known)]


def merge_experience(
    existing: Sequence[Experience],
    parsed: Sequence[Experience],
) -> list[Experience]:
    known = {entry.merge_key for entry in existing}
    return [*existing, *(entry for entry in parsed if entry.merge_key not in known)]


def merge_parsed_resume(
    user_id: str,
    existing: Profile | None,
    parsed: ParsedResume,
    resume_url: str,
) -> NewProfile:
    """
    Non-destructive merge of AI-parsed resume data into a profile.

    Existing scalar fields win unless empty. List fields only ever grow.
    """
    scalars = {
        name: (getattr(existing, name, None) or getattr(parsed, name) or None)
        for name in _TEXT_FIELDS
    }
    return NewProfile(
        user_id=user_id,
        skills=merge_skills(existing.skills if existing else (), parsed.skills),
        education=merge_education(existing.education if existing else (), parsed.education),
        experience=merge_experience(existing.experience if existing else (), parsed.experience),
        resume_url=resume_url,
        **scalars,
    )


def resume_storage_path(bucket: str, user_id: str, resume_url: str) -> str:
    """Storage key ``<bucket>/<user_id>/<file>`` for a stored resume, from the URL's last segment."""
    file_name = unquote(urlsplit(resume_url).path.rstrip("/").rsplit("/", 1)[-1])
    return f"{bucket}/{user_id}/{file_name}"


def _clean_profile_fields(update: ProfileUpdate) -> dict[str, object]:
    fields = update.provided()
    for name in _TEXT_FIELDS:
        if name in fields:
            fields[name] = clean_optional(fields[name])
    if "skills" in fields:
        fields["skills"] = [s.strip() for s in fields["skills"] if s.strip()]
    return fields


class GetProfile:
    def __init__(self, *, profiles: ProfileRepositoryPort) -> None:
        self._profiles = profiles

    async def execute(self, user_id: str) -> Profile | None:
        return await self._profiles.find_by_user_id(user_id)


class UpdateProfile:
    """Partially update the profile, creating it on first use."""

    def __init__(self, *, profiles: ProfileRepositoryPort) -> None:
        self._profiles = profiles

    async def execute(self, user_id: str, update: ProfileUpdate) -> Profile:
        fields = _clean_profile_fields(update)
        existing = await self._profiles.find_by_user_id(user_id)
        if existing is None:
            return await self._profiles.create(NewProfile(user_id=user_id, **fields))
        return await self._profiles.update(user_id, ProfileUpdate(**fields))


@dataclass(frozen=True)
class ParseResumeResult:
    profile: Profile
    resume_url: str


class ParseResume:
    """
    Extract, store and parse a PDF resume, then merge it into the profile.

    Stages run in order and the first failure aborts the rest. A failure
    after the upload leaves the stored file in place.
    """

    def __init__(
        self,
        *,
        profiles: ProfileRepositoryPort,
        ai: AIServicePort,
        storage: StorageServicePort,
        pdf_parser: PDFParserPort,
        clock: ClockPort,
        logger: LoggerPort | None = None,
        bucket: str = RESUME_BUCKET,
    ) -> None:
        self._profiles = profiles
        self._ai = ai
        self._storage = storage
        self._pdf_parser = pdf_parser
        self._clock = clock
        self._logger = logger_or_silent(logger)
        self._bucket = bucket

    async def execute(self, user_id: str, file: bytes, file_name: str) -> ParseResumeResult:
        extracted = await self._pdf_parser.extract_text(file)
        text = extracted.data.text if extracted.ok and extracted.data else ""
        if not text:
            self._logger.warning(
                "resume_text_extraction_failed",
                user_id=user_id,
                error=extracted.error,
            )
            raise ExternalServiceError(extracted.error or "Failed to extract text from PDF")

        millis = int(self._clock.now().timestamp() * 1000)
        uploaded = await self._storage.upload(
            UploadRequest(
                bucket=self._bucket,
                path=f"{user_id}/{millis}-{file_name}",
                content=file,
                content_type=RESUME_CONTENT_TYPE,
                upsert=True,
            )
        )
        if not uploaded.ok:
            self._logger.error("resume_upload_failed", user_id=user_id, error=uploaded.error)
        resume_url = require_data(uploaded, "Failed to upload resume")

        parsed_result = await self._ai.parse_resume(text)
        if not parsed_result.ok:
            self._logger.error(
                "resume_parse_failed",
                user_id=user_id,
                resume_url=resume_url,
                error=parsed_result.error,
            )
        parsed = require_data(parsed_result, "Failed to parse resume")

        existing = await self._profiles.find_by_user_id(user_id)
        profile = await self._profiles.upsert(
            merge_parsed_resume(user_id, existing, parsed, resume_url)
        )
        self._logger.info("resume_parsed", user_id=user_id, resume_url=resume_url)
        return ParseResumeResult(profile=profile, resume_url=resume_url)


class DeleteResume:
    """
    Remove the stored resume and the data parsed from it.

    Name and email are kept. A failed storage delete is logged and the
    profile is cleared anyway.
    """

    def __init__(
        self,
        *,
        profiles: ProfileRepositoryPort,
        storage: StorageServicePort,
        logger: LoggerPort | None = None,
        bucket: str = RESUME_BUCKET,
    ) -> None:
        self._profiles = profiles
        self._storage = storage
        self._logger = logger_or_silent(logger)
        self._bucket = bucket

    async def execute(self, user_id: str) -> Profile:
        profile = await self._profiles.find_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Profile not found")

        if profile.resume_url:
            path = resume_storage_path(self._bucket, user_id, profile.resume_url)
            removed = await self._storage.delete(path)
            if not removed.ok:
                self._logger.warning(
                    "resume_delete_failed", user_id=user_id, path=path, error=removed.error
                )

        cleared = await self._profiles.update(
            user_id,
            ProfileUpdate(
                phone=None,
                summary=None,
                skills=(),
                education=(),
                experience=(),
                resume_url=None,
            ),
        )
        self._logger.info("resume_deleted", user_id=user_id)
        return cleared


class GetResumeUrl:
    """Time-limited download link for the user's stored resume."""

    def __init__(
        self,
        *,
        profiles: ProfileRepositoryPort,
        storage: StorageServicePort,
        bucket: str = RESUME_BUCKET,
    ) -> None:
        self._profiles = profiles
        self._storage = storage
        self._bucket = bucket

    async def execute(self, user_id: str, expires_in: int = RESUME_URL_TTL_SECONDS) -> str:
        profile = await self._profiles.find_by_user_id(user_id)
        if profile is None or not profile.resume_url:
            raise NotFoundError("No resume uploaded")
        path = resume_storage_path(self._bucket, user_id, profile.resume_url)
        signed = await self._storage.get_signed_url(path, expires_in)
        return require_data(signed, "Failed to create signed URL")
