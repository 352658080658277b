"""
Use cases.

Each class wraps one business operation behind an async ``execute`` method
and depends only on domain models and ports, so adapters and the CLI stay
thin.
"""

from .account_data import ClearApplications, ExportUserData
from .analytics import GetApplicationAnalytics, compute_analytics
from .applications import (
    CreateApplication,
    DeleteApplication,
    GetApplicationById,
    GetApplications,
    GetApplicationStats,
    ImportApplications,
    MarkFollowedUp,
    SearchApplications,
    UpdateApplication,
    normalize_status,
    parse_lenient_date,
)
from .assistant import (
    ChatAboutApplication,
    ChatReply,
    GetSuggestedPrompts,
    SendChatMessage,
    suggested_prompts_for_application,
)
from .coach import AnswerFeedback, GetPracticeSessions, StartPracticeSession, SubmitAnswer
from .notifications import GetNotifications, build_notifications
from .profile import (
    DeleteResume,
    GetProfile,
    GetResumeUrl,
    ParseResume,
    ParseResumeResult,
    UpdateProfile,
    merge_education,
    merge_experience,
    merge_parsed_resume,
    merge_skills,
    resume_storage_path,
)
from .rate_limit import RateLimiter
from .saved_messages import RemoveSavedMessage, SaveMessage

__all__ = [
    "AnswerFeedback",
    "ChatAboutApplication",
    "ChatReply",
    "ClearApplications",
    "CreateApplication",
    "DeleteApplication",
    "DeleteResume",
    "ExportUserData",
    "GetApplicationAnalytics",
    "GetApplicationById",
    "GetApplications",
    "GetApplicationStats",
    "GetNotifications",
    "GetPracticeSessions",
    "GetProfile",
    "GetResumeUrl",
    "GetSuggestedPrompts",
    "ImportApplications",
    "MarkFollowedUp",
    "ParseResume",
    "ParseResumeResult",
    "RateLimiter",
    "RemoveSavedMessage",
    "SaveMessage",
    "SearchApplications",
    "SendChatMessage",
    "StartPracticeSession",
    "SubmitAnswer",
    "UpdateApplication",
    "UpdateProfile",
    "build_notifications",
    "compute_analytics",
    "merge_education",
    "merge_experience",
    "merge_parsed_resume",
    "merge_skills",
    "normalize_status",
    "parse_lenient_date",
    "resume_storage_path",
    "suggested_prompts_for_application",
]
