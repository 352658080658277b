"""
Row <-> entity mapping shared by the SQLite and hosted-database repositories.

Rows are plain mappings with snake_case keys. Datetimes are ISO-8601 strings,
date-only fields ``YYYY-MM-DD``. JSON columns (profile lists, session
questions) are native lists here; adapters that store text encode them.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping

from domain.models import (
    Application,
    ApplicationStatus,
    Education,
    Experience,
    InterviewQuestion,
    InterviewType,
    NewApplication,
    NewPracticeSession,
    NewProfile,
    PracticeSession,
    Profile,
    SavedMessage,
)

from ._datetime import date_to_iso, dt_to_iso, iso_to_date, iso_to_dt

_APPLICATION_DATE_FIELDS = ("applied_date", "interview_date")
_APPLICATION_DATETIME_FIELDS = ("followed_up_at",)
APPLICATION_JSON_FIELDS = ("saved_messages",)
PROFILE_JSON_FIELDS = ("skills", "education", "experience")


def _json_list(value: Any) -> list[Any]:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        value = json.loads(value)
    return list(value)


def application_from_row(row: Mapping[str, Any]) -> Application:
    return Application(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        company=row["company"],
        position=row["position"],
        status=ApplicationStatus(row["status"]),
        applied_date=iso_to_date(row.get("applied_date")),
        notes=row.get("notes"),
        url=row.get("url"),
        followed_up_at=iso_to_dt(row.get("followed_up_at")),
        interview_date=iso_to_date(row.get("interview_date")),
        saved_messages=[
            SavedMessage.from_mapping(m) for m in _json_list(row.get("saved_messages"))
        ],
        created_at=iso_to_dt(row["created_at"]),
        updated_at=iso_to_dt(row["updated_at"]),
    )


def application_fields_to_row(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Convert provided application fields to column values, keeping only those present."""
    row: dict[str, Any] = {}
    for name, value in fields.items():
        if name in _APPLICATION_DATE_FIELDS:
            row[name] = date_to_iso(value)
        elif name in _APPLICATION_DATETIME_FIELDS:
            row[name] = dt_to_iso(value)
        elif name in APPLICATION_JSON_FIELDS:
            row[name] = [message.to_dict() for message in value]
        elif isinstance(value, Enum):
            row[name] = value.value
        else:
            row[name] = value
    return row


def new_application_to_row(application: NewApplication) -> dict[str, Any]:
    return application_fields_to_row(
        {
            "user_id": application.user_id,
            "company": application.company,
            "position": application.position,
            "status": application.status,
            "applied_date": application.applied_date,
            "notes": application.notes,
            "url": application.url,
            "followed_up_at": application.followed_up_at,
            "interview_date": application.interview_date,
        }
    )


def profile_from_row(row: Mapping[str, Any]) -> Profile:
    return Profile(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        name=row.get("name"),
        email=row.get("email"),
        phone=row.get("phone"),
        summary=row.get("summary"),
        skills=[str(s) for s in _json_list(row.get("skills"))],
        education=[Education.from_mapping(e) for e in _json_list(row.get("education"))],
        experience=[Experience.from_mapping(e) for e in _json_list(row.get("experience"))],
        resume_url=row.get("resume_url"),
        created_at=iso_to_dt(row["created_at"]),
        updated_at=iso_to_dt(row["updated_at"]),
    )


def profile_fields_to_row(fields: Mapping[str, Any]) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for name, value in fields.items():
        if name == "skills":
            row[name] = list(value)
        elif name in ("education", "experience"):
            row[name] = [entry.to_dict() for entry in value]
        else:
            row[name] = value
    return row


def new_profile_to_row(profile: NewProfile) -> dict[str, Any]:
    return profile_fields_to_row(
        {
            "user_id": profile.user_id,
            "name": profile.name,
            "email": profile.email,
            "phone": profile.phone,
            "summary": profile.summary,
            "skills": profile.skills,
            "education": profile.education,
            "experience": profile.experience,
            "resume_url": profile.resume_url,
        }
    )


def questions_to_rows(questions: Any) -> list[dict[str, Any]]:
    return [q.to_dict() for q in questions]


def practice_session_from_row(row: Mapping[str, Any]) -> PracticeSession:
    return PracticeSession(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        application_id=row.get("application_id"),
        type=InterviewType(row["type"]),
        questions=[InterviewQuestion.from_mapping(q) for q in _json_list(row.get("questions"))],
        created_at=iso_to_dt(row["created_at"]),
    )


def new_practice_session_to_row(session: NewPracticeSession) -> dict[str, Any]:
    return {
        "user_id": session.user_id,
        "application_id": session.application_id,
        "type": InterviewType(session.type).value,
        "questions": questions_to_rows(session.questions),
    }
