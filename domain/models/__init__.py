from __future__ import annotations

from .application import (
    Application,
    ApplicationStats,
    ApplicationUpdate,
    ImportRecord,
    ImportResult,
    ImportRowError,
    NewApplication,
    SavedMessage,
    compute_application_stats,
)
from .chat import ChatMessage
from .common import AppConfig, AuthUser, PDFText, ServiceResult, UploadRequest
from .export import DataExport
from .insights import (
    ApplicationAnalytics,
    Notification,
    NotificationType,
    WeeklyCount,
    WeeklyTrend,
)
from .practice import (
    GenerateQuestionsParams,
    InterviewQuestion,
    NewPracticeSession,
    PracticeSession,
)
from .profile import (
    Education,
    Experience,
    NewProfile,
    ParsedResume,
    Profile,
    ProfileUpdate,
)
from .values import (
    APPLICATION_STATUSES,
    INTERVIEW_TYPES,
    UNSET,
    ApplicationStatus,
    ChatRole,
    InterviewType,
    Unset,
    interview_type_label,
    is_valid_application_status,
    is_valid_interview_type,
    next_statuses,
)

__all__ = [
    "AppConfig",
    "Application",
    "ApplicationAnalytics",
    "ApplicationStats",
    "ApplicationStatus",
    "ApplicationUpdate",
    "APPLICATION_STATUSES",
    "AuthUser",
    "ChatMessage",
    "ChatRole",
    "DataExport",
    "Education",
    "Experience",
    "GenerateQuestionsParams",
    "ImportRecord",
    "ImportResult",
    "ImportRowError",
    "InterviewQuestion",
    "InterviewType",
    "INTERVIEW_TYPES",
    "NewApplication",
    "NewPracticeSession",
    "NewProfile",
    "Notification",
    "NotificationType",
    "ParsedResume",
    "PDFText",
    "PracticeSession",
    "Profile",
    "ProfileUpdate",
    "SavedMessage",
    "ServiceResult",
    "UNSET",
    "Unset",
    "UploadRequest",
    "WeeklyCount",
    "WeeklyTrend",
    "compute_application_stats",
    "interview_type_label",
    "is_valid_application_status",
    "is_valid_interview_type",
    "next_statuses",
]
