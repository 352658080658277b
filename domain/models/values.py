from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class ApplicationStatus(str, Enum):
    """Lifecycle stage of a tracked job application."""

    SAVED = "Saved"
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


APPLICATION_STATUSES: tuple[ApplicationStatus, ...] = tuple(ApplicationStatus)

# Advisory only: nothing enforces these on write.
_NEXT_STATUSES = MappingProxyType(
    {
        ApplicationStatus.SAVED: (ApplicationStatus.APPLIED,),
        ApplicationStatus.APPLIED: (ApplicationStatus.INTERVIEW, ApplicationStatus.REJECTED),
        ApplicationStatus.INTERVIEW: (ApplicationStatus.OFFER, ApplicationStatus.REJECTED),
        ApplicationStatus.OFFER: (),
        ApplicationStatus.REJECTED: (),
    }
)


def is_valid_application_status(value: str) -> bool:
    return value in {s.value for s in ApplicationStatus}


def next_statuses(current: ApplicationStatus) -> tuple[ApplicationStatus, ...]:
    """Statuses a UI may offer as the next step from ``current``."""
    return _NEXT_STATUSES[ApplicationStatus(current)]


class InterviewType(str, Enum):
    """Kind of interview practice session."""

    BEHAVIORAL = "behavioral"
    TECHNICAL = "technical"
    COMPANY_SPECIFIC = "companySpecific"


INTERVIEW_TYPES: tuple[InterviewType, ...] = tuple(InterviewType)

_INTERVIEW_TYPE_LABELS = MappingProxyType(
    {
        InterviewType.BEHAVIORAL: "Behavioral",
        InterviewType.TECHNICAL: "Technical",
        InterviewType.COMPANY_SPECIFIC: "Company Specific",
    }
)


def is_valid_interview_type(value: str) -> bool:
    return value in {t.value for t in InterviewType}


def interview_type_label(interview_type: InterviewType) -> str:
    return _INTERVIEW_TYPE_LABELS[InterviewType(interview_type)]


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Unset(Enum):
    """
    Marker for "field not provided" in partial updates.

    ``None`` is a legitimate value for nullable fields (it clears them), so
    omitted fields need a distinct sentinel.
    """

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset.UNSET
