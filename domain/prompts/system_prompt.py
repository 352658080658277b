"""System prompt for the career assistant chat."""

from __future__ import annotations

from typing import Sequence

from domain.models import Application, Profile

MAX_PROMPT_APPLICATIONS = 10
MAX_PROMPT_EXPERIENCES = 3

ASSISTANT_PREAMBLE = "You are a personalized career assistant."

ASSISTANT_INSTRUCTIONS = (
    "INSTRUCTIONS:\n"
    "- Help with job search, applications, resume tips, interview prep, and career advice\n"
    "- Reference the user's profile and applications when relevant\n"
    "- Be concise, friendly, and actionable\n"
    "- Keep responses under 300 words unless more detail is needed"
)


def _profile_section(profile: Profile | None) -> list[str]:
    if profile is None or not (profile.name or profile.skills):
        return []
    lines = ["USER PROFILE:"]
    if profile.name:
        lines.append(f"- Name: {profile.name}")
    if profile.skills:
        lines.append(f"- Skills: {', '.join(profile.skills)}")
    if profile.experience:
        lines.append("- Experience:")
        for exp in profile.experience[:MAX_PROMPT_EXPERIENCES]:
            duration = f" ({exp.duration})" if exp.duration else ""
            lines.append(f"  • {exp.role} at {exp.company}{duration}")
    lines.append("")
    return lines


def _applications_section(applications: Sequence[Application]) -> list[str]:
    if not applications:
        return []
    lines = ["ACTIVE JOB APPLICATIONS:"]
    for app in applications[:MAX_PROMPT_APPLICATIONS]:
        lines.append(f"- {app.company}: {app.position} ({app.status.value})")
    lines.append("")
    return lines


def build_assistant_system_prompt(
    *,
    profile: Profile | None,
    applications: Sequence[Application],
) -> str:
    """
    Build the system message sent ahead of every chat request.

    The profile section is included only when the profile has a name or
    skills; at most ten applications are listed.
    """
    parts = [ASSISTANT_PREAMBLE, ""]
    parts.extend(_profile_section(profile))
    parts.extend(_applications_section(applications))
    parts.append(ASSISTANT_INSTRUCTIONS)
    return "\n".join(parts)


def build_application_chat_prompt(application: Application) -> str:
    """System message for a conversation about one application."""
    applied = application.applied_date.isoformat() if application.applied_date else "Not specified"
    return (
        "You are helping the user with their job application.\n"
        "\n"
        "Application Details:\n"
        f"- Company: {application.company}\n"
        f"- Position: {application.position}\n"
        f"- Status: {application.status.value}\n"
        f"- Applied Date: {applied}\n"
        f"- Notes: {application.notes or 'None'}\n"
        "\n"
        "Provide specific, actionable advice for this role and company. "
        "Keep responses concise and helpful."
    )
