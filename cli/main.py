from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from app import Core, create_local_core, create_rate_limiter
from domain.errors import DomainError, NotFoundError, RateLimitError
from domain.models import (
    AppConfig,
    ApplicationStatus,
    ApplicationUpdate,
    ChatMessage,
    InterviewType,
    ProfileUpdate,
)
from domain.services import RateLimiter, parse_lenient_date, suggested_prompts_for_application
from domain.utils import split_csv
from infra.config import FileSystemConfigProvider
from infra.exporters import write_export_csv
from infra.importers import CSVImportError, read_csv_file
from infra.runtime import StructuredLogger

_AI_COMMANDS = {"parse-resume", "chat", "practice", "answer"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nexcareer")
    parser.add_argument("--db-path", default="nexcareer.db")
    parser.add_argument("--config-dir", default="./config", help="Path to config folder")
    parser.add_argument("--storage-dir", default="storage", help="Where uploaded resumes are kept")
    parser.add_argument("--user-id", default="local")
    parser.add_argument("--log-level", choices=["info", "warning", "error"], default="warning")
    sub = parser.add_subparsers(dest="command", required=True)

    add_p = sub.add_parser("add", help="Track a new application")
    add_p.add_argument("company")
    add_p.add_argument("position")
    add_p.add_argument("--status", choices=[s.value for s in ApplicationStatus], default="Saved")
    add_p.add_argument("--applied-date")
    add_p.add_argument("--notes")
    add_p.add_argument("--url")

    list_p = sub.add_parser("list")
    list_p.add_argument("--status", choices=[s.value for s in ApplicationStatus])

    search_p = sub.add_parser("search")
    search_p.add_argument("keyword")

    status_p = sub.add_parser("update-status")
    status_p.add_argument("application_id")
    status_p.add_argument("status", choices=[s.value for s in ApplicationStatus])

    delete_p = sub.add_parser("delete")
    delete_p.add_argument("application_id")

    import_p = sub.add_parser("import-csv", help="Bulk import applications from a CSV export")
    import_p.add_argument("path")

    sub.add_parser("stats")
    sub.add_parser("notifications")

    follow_p = sub.add_parser("follow-up", help="Record that you followed up")
    follow_p.add_argument("application_id")

    profile_p = sub.add_parser("profile", help="Show or edit your profile")
    profile_p.add_argument("--name")
    profile_p.add_argument("--email")
    profile_p.add_argument("--phone")
    profile_p.add_argument("--summary")
    profile_p.add_argument("--skills", help="Comma-separated; replaces the current list")

    resume_p = sub.add_parser("parse-resume")
    resume_p.add_argument("pdf_path")

    chat_p = sub.add_parser("chat", help="Ask the career assistant")
    chat_p.add_argument("message", nargs="?", help="Omit to start an interactive session")
    chat_p.add_argument("--application-id", help="Talk about one application only")

    save_p = sub.add_parser("save-message", help="Pin a message to an application")
    save_p.add_argument("application_id")
    save_p.add_argument("content")

    messages_p = sub.add_parser("messages", help="Show messages pinned to an application")
    messages_p.add_argument("application_id")

    unsave_p = sub.add_parser("remove-message")
    unsave_p.add_argument("application_id")
    unsave_p.add_argument("message_id")

    export_p = sub.add_parser("export", help="Download your profile and applications as CSV")
    export_p.add_argument("--output-dir", default=".")

    clear_p = sub.add_parser("clear-applications", help="Delete every tracked application")
    clear_p.add_argument("--yes", action="store_true", help="Confirm the deletion")

    sub.add_parser("delete-resume", help="Remove the stored resume and its parsed data")

    resume_url_p = sub.add_parser("resume-url", help="Print a temporary link to your resume")
    resume_url_p.add_argument("--expires-in", type=int, default=3600)

    practice_p = sub.add_parser("practice", help="Start an interview practice session")
    practice_p.add_argument("type", choices=[t.value for t in InterviewType])
    practice_p.add_argument("--application-id")
    practice_p.add_argument("--count", type=int, default=5)

    answer_p = sub.add_parser("answer")
    answer_p.add_argument("session_id")
    answer_p.add_argument("question_index", type=int)
    answer_p.add_argument("answer")

    sessions_p = sub.add_parser("sessions")
    sessions_p.add_argument("--application-id")

    check_p = sub.add_parser("check-config")
    check_p.add_argument(
        "--skip-connectivity",
        action="store_true",
        help="Skip the Groq API connectivity check",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config_provider = FileSystemConfigProvider(args.config_dir)

    if args.command == "check-config":
        return _handle_check_config(args, config_provider)

    errors = config_provider.validate()
    if errors and args.command in _AI_COMMANDS:
        _print_config_errors(errors)
        return 1
    # Tracking commands work offline without an API key.
    config = config_provider.get_config() if not errors else AppConfig(groq_api_key="")

    core = create_local_core(
        config,
        db_path=args.db_path,
        storage_dir=args.storage_dir,
        logger=StructuredLogger(min_level=args.log_level),
    )
    limiter = create_rate_limiter(config)
    try:
        return asyncio.run(_dispatch(args, core, limiter))
    except (DomainError, CSVImportError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        core.close()


def _check_rate_limit(limiter: RateLimiter, user_id: str) -> None:
    """Count one AI request against the user's window."""
    if limiter.is_limited(user_id):
        raise RateLimitError("Too many AI requests; wait a moment and try again")


async def _dispatch(args: argparse.Namespace, core: Core, limiter: RateLimiter) -> int:
    uc = core.use_cases
    user_id = args.user_id
    if args.command in _AI_COMMANDS and not (args.command == "chat" and not args.message):
        _check_rate_limit(limiter, user_id)

    if args.command == "add":
        applied = parse_lenient_date(args.applied_date) if args.applied_date else None
        app = await uc.create_application.execute(
            user_id,
            args.company,
            args.position,
            status=ApplicationStatus(args.status),
            applied_date=applied,
            notes=args.notes,
            url=args.url,
        )
        print(f"added {app.id}")
        return 0

    if args.command == "list":
        status = ApplicationStatus(args.status) if args.status else None
        _print_applications(await uc.get_applications.execute(user_id, status))
        return 0

    if args.command == "search":
        _print_applications(await uc.search_applications.execute(user_id, args.keyword))
        return 0

    if args.command == "update-status":
        app = await uc.update_application.execute(
            args.application_id,
            user_id,
            ApplicationUpdate(status=ApplicationStatus(args.status)),
        )
        print(f"{app.company} | {app.position} -> {app.status.value}")
        return 0

    if args.command == "delete":
        await uc.delete_application.execute(args.application_id, user_id)
        print(f"deleted {args.application_id}")
        return 0

    if args.command == "import-csv":
        records = read_csv_file(args.path)
        result = await uc.import_applications.execute(user_id, records)
        print(f"imported {len(result.imported)} of {len(records)}")
        for err in result.errors:
            # Row numbers as seen in a spreadsheet, header on row 1.
            print(f"  - row {err.index + 2}: {err.error}")
        return 0

    if args.command == "stats":
        return await _handle_stats(core, user_id)

    if args.command == "notifications":
        notes = await uc.get_notifications.execute(user_id)
        if not notes:
            print("nothing needs attention")
        for note in notes:
            print(f"[{note.type.value}] {note.message}")
        return 0

    if args.command == "follow-up":
        app = await uc.mark_followed_up.execute(args.application_id, user_id)
        print(f"followed up with {app.company} at {app.followed_up_at.isoformat()}")
        return 0

    if args.command == "profile":
        return await _handle_profile(args, core, user_id)

    if args.command == "parse-resume":
        content = Path(args.pdf_path).read_bytes()
        result = await uc.parse_resume.execute(user_id, content, Path(args.pdf_path).name)
        profile = result.profile
        print(f"Profile: {profile.name or '-'} ({profile.email or '-'})")
        print(f"Skills: {', '.join(profile.skills) or '-'}")
        print(f"Resume: {result.resume_url}")
        return 0

    if args.command == "chat":
        return await _handle_chat(args, core, user_id, limiter)

    if args.command == "save-message":
        message = await uc.save_message.execute(args.application_id, user_id, args.content)
        print(f"saved {message.id}")
        return 0

    if args.command == "messages":
        app = await uc.get_application_by_id.execute(args.application_id, user_id)
        if app is None:
            raise NotFoundError("Application not found")
        if not app.saved_messages:
            print("no saved messages")
        for message in app.saved_messages:
            print(f"{message.id} | {message.saved_at.date().isoformat()} | {message.content}")
        return 0

    if args.command == "remove-message":
        await uc.remove_saved_message.execute(args.application_id, user_id, args.message_id)
        print(f"removed {args.message_id}")
        return 0

    if args.command == "export":
        export = await uc.export_user_data.execute(user_id)
        path = write_export_csv(export, args.output_dir)
        print(f"exported {len(export.applications)} applications to {path}")
        return 0

    if args.command == "clear-applications":
        if not args.yes:
            print("refusing to delete every application without --yes", file=sys.stderr)
            return 1
        removed = await uc.clear_applications.execute(user_id)
        print(f"deleted {removed} applications")
        return 0

    if args.command == "delete-resume":
        await uc.delete_resume.execute(user_id)
        print("resume and parsed data deleted")
        return 0

    if args.command == "resume-url":
        print(await uc.get_resume_url.execute(user_id, args.expires_in))
        return 0

    if args.command == "practice":
        session = await uc.start_practice_session.execute(
            user_id,
            args.type,
            application_id=args.application_id,
            question_count=args.count,
        )
        print(f"session {session.id}")
        for i, q in enumerate(session.questions):
            print(f"  [{i}] {q.question}")
        return 0

    if args.command == "answer":
        outcome = await uc.submit_answer.execute(
            user_id, args.session_id, args.question_index, args.answer
        )
        print(outcome.feedback)
        print(f"progress: {outcome.session.completion_percentage}%")
        return 0

    if args.command == "sessions":
        sessions = await uc.get_practice_sessions.execute(user_id, args.application_id)
        for s in sessions:
            created = s.created_at.date().isoformat()
            print(f"{s.id} | {s.type.value} | {created} | {s.completion_percentage}%")
        return 0

    raise SystemExit(f"Unsupported command: {args.command}")


async def _handle_stats(core: Core, user_id: str) -> int:
    uc = core.use_cases
    stats, analytics = await asyncio.gather(
        uc.get_application_stats.execute(user_id),
        uc.get_application_analytics.execute(user_id),
    )
    print(f"total: {stats.total} (this week {stats.this_week}, this month {stats.this_month})")
    for status, count in stats.by_status.items():
        print(f"  {status.value}: {count}")
    avg = analytics.avg_days_to_response
    print(f"response rate: {analytics.response_rate}%")
    print(f"avg days to response: {avg if avg is not None else '-'}")
    print(
        f"weekly: {analytics.this_week_count} vs {analytics.last_week_count} "
        f"({analytics.weekly_trend.value})"
    )
    return 0


async def _handle_profile(args: argparse.Namespace, core: Core, user_id: str) -> int:
    uc = core.use_cases
    changes = {
        key: getattr(args, key)
        for key in ("name", "email", "phone", "summary")
        if getattr(args, key) is not None
    }
    if args.skills is not None:
        changes["skills"] = split_csv(args.skills)

    if changes:
        profile = await uc.update_profile.execute(user_id, ProfileUpdate(**changes))
    else:
        profile = await uc.get_profile.execute(user_id)
    if profile is None:
        print("no profile yet; use --name/--skills or parse-resume")
        return 0

    print(f"Name: {profile.name or '-'}")
    print(f"Email: {profile.email or '-'}")
    print(f"Phone: {profile.phone or '-'}")
    print(f"Skills: {', '.join(profile.skills) or '-'}")
    for exp in profile.experience:
        print(f"  {exp.role} at {exp.company} ({exp.duration})")
    return 0


async def _handle_chat(
    args: argparse.Namespace,
    core: Core,
    user_id: str,
    limiter: RateLimiter,
) -> int:
    uc = core.use_cases
    application_id = args.application_id

    async def send(message: str, history: Sequence[ChatMessage] = ()):
        if application_id:
            return await uc.chat_about_application.execute(
                user_id, application_id, message, history
            )
        return await uc.send_chat_message.execute(user_id, message, history)

    if args.message:
        print((await send(args.message)).response)
        return 0

    if application_id:
        app = await uc.get_application_by_id.execute(application_id, user_id)
        if app is None:
            raise NotFoundError("Application not found")
        prompts = suggested_prompts_for_application(app)
    else:
        prompts = await uc.get_suggested_prompts.execute(user_id)
    for prompt in prompts:
        print(f"  * {prompt}")
    history: tuple[ChatMessage, ...] = ()
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if line.strip().lower() in ("exit", "quit"):
            break
        if not line.strip():
            continue
        try:
            _check_rate_limit(limiter, user_id)
            reply = await send(line, history)
        except DomainError as exc:
            print(f"error: {exc}", file=sys.stderr)
            continue
        history = tuple(reply.history)
        print(reply.response)
    return 0


def _handle_check_config(args: argparse.Namespace, provider: FileSystemConfigProvider) -> int:
    errors = provider.validate()
    if errors:
        _print_config_errors(errors)
        return 1

    cfg = provider.get_config()
    print(f"Config OK: groq_api_key=***{cfg.groq_api_key[-4:]}, model={cfg.groq_model}")
    print(
        f"Rate limit: {cfg.rate_limit_max_requests} requests / "
        f"{cfg.rate_limit_window_seconds}s"
    )
    if args.skip_connectivity:
        print("Skipping connectivity checks (--skip-connectivity)")
        return 0

    print("Verifying API connectivity...")
    result = asyncio.run(provider.validate_connectivity())
    if not result.ok:
        print("Connectivity check failed:")
        for err in result.errors:
            print(f"  - {err}")
        return 1
    print(f"Groq API: connected ({result.model_count} models)")
    return 0


def _print_config_errors(errors: list[str]) -> None:
    print("Config validation failed:")
    for err in errors:
        print(f"  - {err}")


def _print_applications(apps) -> None:
    if not apps:
        print("no applications")
    for app in apps:
        applied = app.applied_date.isoformat() if app.applied_date else "-"
        print(f"{app.id} | {app.company} | {app.position} | {app.status.value} | {applied}")


if __name__ == "__main__":
    raise SystemExit(main())
