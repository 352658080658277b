from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Sequence

from .common import provided_fields
from .values import UNSET, Unset


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass(frozen=True)
class Education:
    school: str
    degree: str
    year: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Education":
        return cls(
            school=_text(data.get("school")),
            degree=_text(data.get("degree")),
            year=_optional_text(data.get("year")),
        )

    def to_dict(self) -> dict[str, str | None]:
        return {"school": self.school, "degree": self.degree, "year": self.year}

    @property
    def merge_key(self) -> str:
        return f"{self.school}|{self.degree}".lower()


@dataclass(frozen=True)
class Experience:
    company: str
    role: str
    duration: str | None = None
    description: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Experience":
        return cls(
            company=_text(data.get("company")),
            role=_text(data.get("role")),
            duration=_optional_text(data.get("duration")),
            description=_optional_text(data.get("description")),
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "company": self.company,
            "role": self.role,
            "duration": self.duration,
            "description": self.description,
        }

    @property
    def merge_key(self) -> str:
        return f"{self.company}|{self.role}".lower()


def _freeze_lists(obj: object, *names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if isinstance(value, Unset):
            continue
        object.__setattr__(obj, name, tuple(value))


@dataclass(frozen=True)
class Profile:
    """A user's career profile. One per user."""

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    summary: str | None = None
    skills: Sequence[str] = field(default_factory=tuple)
    education: Sequence[Education] = field(default_factory=tuple)
    experience: Sequence[Experience] = field(default_factory=tuple)
    resume_url: str | None = None

    def __post_init__(self) -> None:
        _freeze_lists(self, "skills", "education", "experience")

    @property
    def is_complete(self) -> bool:
        return bool(
            self.name
            and self.email
            and self.skills
            and (self.education or self.experience)
        )


@dataclass(frozen=True)
class NewProfile:
    """Full profile data for create and upsert."""

    user_id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    summary: str | None = None
    skills: Sequence[str] = field(default_factory=tuple)
    education: Sequence[Education] = field(default_factory=tuple)
    experience: Sequence[Experience] = field(default_factory=tuple)
    resume_url: str | None = None

    def __post_init__(self) -> None:
        _freeze_lists(self, "skills", "education", "experience")


@dataclass(frozen=True)
class ProfileUpdate:
    """Partial profile update; ``UNSET`` fields are left untouched."""

    name: str | None | Unset = UNSET
    email: str | None | Unset = UNSET
    phone: str | None | Unset = UNSET
    summary: str | None | Unset = UNSET
    skills: Sequence[str] | Unset = UNSET
    education: Sequence[Education] | Unset = UNSET
    experience: Sequence[Experience] | Unset = UNSET
    resume_url: str | None | Unset = UNSET

    def __post_init__(self) -> None:
        _freeze_lists(self, "skills", "education", "experience")

    def provided(self) -> dict[str, object]:
        return provided_fields(self)


@dataclass(frozen=True)
class ParsedResume:
    """Structured fields an AI model extracted from resume text."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    summary: str | None = None
    skills: Sequence[str] = field(default_factory=tuple)
    education: Sequence[Education] = field(default_factory=tuple)
    experience: Sequence[Experience] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze_lists(self, "skills", "education", "experience")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ParsedResume":
        return cls(
            name=_optional_text(data.get("name")),
            email=_optional_text(data.get("email")),
            phone=_optional_text(data.get("phone")),
            summary=_optional_text(data.get("summary")),
            skills=[str(s) for s in data.get("skills") or [] if s],
            education=[Education.from_mapping(e) for e in data.get("education") or []],
            experience=[Experience.from_mapping(e) for e in data.get("experience") or []],
        )
