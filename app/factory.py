"""
Wiring: build repositories, services and use cases from configuration.

Two assemblies are provided. ``create_core`` targets the hosted backend
through an injected client; ``create_local_core`` uses SQLite and the local
filesystem and is what the CLI runs on.
"""

from __future__ import annotations

from dataclasses import dataclass

from domain.models import AppConfig
from domain.ports import (
    AIServicePort,
    ApplicationRepositoryPort,
    AuthServicePort,
    ClockPort,
    IdGeneratorPort,
    LoggerPort,
    PDFParserPort,
    PracticeSessionRepositoryPort,
    ProfileRepositoryPort,
    RateLimitStorePort,
    StorageServicePort,
)
from domain.services import (
    ChatAboutApplication,
    ClearApplications,
    CreateApplication,
    DeleteApplication,
    DeleteResume,
    ExportUserData,
    GetApplicationAnalytics,
    GetApplicationById,
    GetApplications,
    GetApplicationStats,
    GetNotifications,
    GetPracticeSessions,
    GetProfile,
    GetResumeUrl,
    GetSuggestedPrompts,
    ImportApplications,
    MarkFollowedUp,
    ParseResume,
    RateLimiter,
    RemoveSavedMessage,
    SaveMessage,
    SearchApplications,
    SendChatMessage,
    StartPracticeSession,
    SubmitAnswer,
    UpdateApplication,
    UpdateProfile,
)
from domain.utils import SilentLogger
from infra.llm import GroqAIService
from infra.pdf import PdfMinerParserService
from infra.persistence import (
    SQLiteApplicationRepository,
    SQLitePracticeSessionRepository,
    SQLiteProfileRepository,
)
from infra.runtime import InMemoryRateLimitStore, SystemClock, UuidIdGenerator
from infra.storage import FileSystemStorageService
from infra.supabase import (
    BackendClient,
    SupabaseApplicationRepository,
    SupabaseAuthService,
    SupabasePracticeSessionRepository,
    SupabaseProfileRepository,
    SupabaseStorageService,
    TableClient,
)


@dataclass(frozen=True)
class Repositories:
    applications: ApplicationRepositoryPort
    profiles: ProfileRepositoryPort
    practice_sessions: PracticeSessionRepositoryPort


@dataclass(frozen=True)
class Services:
    ai: AIServicePort
    storage: StorageServicePort
    auth: AuthServicePort | None = None
    pdf_parser: PDFParserPort | None = None


@dataclass(frozen=True)
class UseCases:
    # Applications
    create_application: CreateApplication
    get_application_by_id: GetApplicationById
    get_applications: GetApplications
    update_application: UpdateApplication
    delete_application: DeleteApplication
    search_applications: SearchApplications
    import_applications: ImportApplications
    get_application_stats: GetApplicationStats
    mark_followed_up: MarkFollowedUp
    get_notifications: GetNotifications
    get_application_analytics: GetApplicationAnalytics
    save_message: SaveMessage
    remove_saved_message: RemoveSavedMessage
    export_user_data: ExportUserData
    clear_applications: ClearApplications
    # Profile
    get_profile: GetProfile
    update_profile: UpdateProfile
    delete_resume: DeleteResume
    get_resume_url: GetResumeUrl
    # Assistant
    send_chat_message: SendChatMessage
    get_suggested_prompts: GetSuggestedPrompts
    chat_about_application: ChatAboutApplication
    # Coach
    start_practice_session: StartPracticeSession
    submit_answer: SubmitAnswer
    get_practice_sessions: GetPracticeSessions
    # Requires a PDF parser.
    parse_resume: ParseResume | None = None


@dataclass(frozen=True)
class Core:
    repositories: Repositories
    services: Services
    use_cases: UseCases

    def close(self) -> None:
        """Release repository connections; adapters without ``close`` hold none."""
        for repo in (
            self.repositories.applications,
            self.repositories.profiles,
            self.repositories.practice_sessions,
        ):
            close = getattr(repo, "close", None)
            if close is not None:
                close()


def create_repositories(
    client: TableClient,
    *,
    clock: ClockPort | None = None,
    logger: LoggerPort | None = None,
) -> Repositories:
    return Repositories(
        applications=SupabaseApplicationRepository(client, clock=clock, logger=logger),
        profiles=SupabaseProfileRepository(client, logger=logger),
        practice_sessions=SupabasePracticeSessionRepository(client, logger=logger),
    )


def create_sqlite_repositories(db_path: str, *, clock: ClockPort | None = None) -> Repositories:
    ids = UuidIdGenerator()
    return Repositories(
        applications=SQLiteApplicationRepository(db_path, clock=clock, ids=ids),
        profiles=SQLiteProfileRepository(db_path, clock=clock, ids=ids),
        practice_sessions=SQLitePracticeSessionRepository(db_path, clock=clock, ids=ids),
    )


def create_ai_service(config: AppConfig) -> GroqAIService:
    return GroqAIService(
        api_key=config.groq_api_key,
        model=config.groq_model,
        base_url=config.groq_base_url,
    )


def create_services(
    client: BackendClient,
    config: AppConfig,
    *,
    pdf_parser: PDFParserPort | None = None,
    logger: LoggerPort | None = None,
) -> Services:
    return Services(
        ai=create_ai_service(config),
        storage=SupabaseStorageService(client.storage),
        auth=SupabaseAuthService(client.auth, logger=logger),
        pdf_parser=pdf_parser,
    )


def create_use_cases(
    repositories: Repositories,
    services: Services,
    *,
    clock: ClockPort | None = None,
    logger: LoggerPort | None = None,
    ids: IdGeneratorPort | None = None,
    resume_bucket: str = "resumes",
) -> UseCases:
    clock = clock or SystemClock()
    logger = logger or SilentLogger()
    ids = ids or UuidIdGenerator()
    applications = repositories.applications
    profiles = repositories.profiles
    sessions = repositories.practice_sessions

    parse_resume = None
    if services.pdf_parser is not None:
        parse_resume = ParseResume(
            profiles=profiles,
            ai=services.ai,
            storage=services.storage,
            pdf_parser=services.pdf_parser,
            clock=clock,
            logger=logger,
            bucket=resume_bucket,
        )

    return UseCases(
        create_application=CreateApplication(applications=applications),
        get_application_by_id=GetApplicationById(applications=applications),
        get_applications=GetApplications(applications=applications),
        update_application=UpdateApplication(applications=applications),
        delete_application=DeleteApplication(applications=applications),
        search_applications=SearchApplications(applications=applications),
        import_applications=ImportApplications(applications=applications, logger=logger),
        get_application_stats=GetApplicationStats(applications=applications),
        mark_followed_up=MarkFollowedUp(applications=applications, clock=clock),
        get_notifications=GetNotifications(applications=applications, clock=clock),
        get_application_analytics=GetApplicationAnalytics(applications=applications, clock=clock),
        save_message=SaveMessage(applications=applications, clock=clock, ids=ids),
        remove_saved_message=RemoveSavedMessage(applications=applications),
        export_user_data=ExportUserData(
            profiles=profiles, applications=applications, clock=clock
        ),
        clear_applications=ClearApplications(applications=applications, logger=logger),
        get_profile=GetProfile(profiles=profiles),
        update_profile=UpdateProfile(profiles=profiles),
        delete_resume=DeleteResume(
            profiles=profiles,
            storage=services.storage,
            logger=logger,
            bucket=resume_bucket,
        ),
        get_resume_url=GetResumeUrl(
            profiles=profiles, storage=services.storage, bucket=resume_bucket
        ),
        send_chat_message=SendChatMessage(
            ai=services.ai,
            profiles=profiles,
            applications=applications,
            logger=logger,
        ),
        get_suggested_prompts=GetSuggestedPrompts(applications=applications, logger=logger),
        chat_about_application=ChatAboutApplication(
            ai=services.ai, applications=applications, logger=logger
        ),
        start_practice_session=StartPracticeSession(
            sessions=sessions,
            applications=applications,
            profiles=profiles,
            ai=services.ai,
            logger=logger,
        ),
        submit_answer=SubmitAnswer(sessions=sessions, ai=services.ai, logger=logger),
        get_practice_sessions=GetPracticeSessions(sessions=sessions),
        parse_resume=parse_resume,
    )


def create_rate_limiter(
    config: AppConfig,
    *,
    store: RateLimitStorePort | None = None,
    clock: ClockPort | None = None,
) -> RateLimiter:
    return RateLimiter(
        store=store if store is not None else InMemoryRateLimitStore(),
        clock=clock or SystemClock(),
        max_requests=config.rate_limit_max_requests,
        window_seconds=config.rate_limit_window_seconds,
    )


def create_core(
    client: BackendClient,
    config: AppConfig,
    *,
    pdf_parser: PDFParserPort | None = None,
    clock: ClockPort | None = None,
    logger: LoggerPort | None = None,
) -> Core:
    """Assemble everything against the hosted backend."""
    repositories = create_repositories(client, clock=clock, logger=logger)
    services = create_services(client, config, pdf_parser=pdf_parser, logger=logger)
    use_cases = create_use_cases(
        repositories,
        services,
        clock=clock,
        logger=logger,
        resume_bucket=config.resume_bucket,
    )
    return Core(repositories=repositories, services=services, use_cases=use_cases)


def create_local_core(
    config: AppConfig,
    *,
    db_path: str,
    storage_dir: str,
    clock: ClockPort | None = None,
    logger: LoggerPort | None = None,
) -> Core:
    """Assemble everything on SQLite, local files, Groq and pdfminer."""
    clock = clock or SystemClock()
    repositories = create_sqlite_repositories(db_path, clock=clock)
    services = Services(
        ai=create_ai_service(config),
        storage=FileSystemStorageService(storage_dir, clock=clock),
        pdf_parser=PdfMinerParserService(),
    )
    use_cases = create_use_cases(
        repositories,
        services,
        clock=clock,
        logger=logger,
        resume_bucket=config.resume_bucket,
    )
    return Core(repositories=repositories, services=services, use_cases=use_cases)
