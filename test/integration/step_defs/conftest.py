"""Shared fixtures and context for BDD step definitions."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable

import pytest
from pytest_bdd import given, parsers, then, when

from app import Repositories, Services, UseCases, create_use_cases
from domain.errors import DomainError
from domain.models import ImportRecord, PracticeSession
from test.mocks import (
    FixedClock,
    InMemoryApplicationRepository,
    InMemoryLogger,
    InMemoryPracticeSessionRepository,
    InMemoryProfileRepository,
    InMemoryStorageService,
    ScriptedAIService,
    SequentialIdGenerator,
    StubPDFParser,
)


@dataclass
class TrackerContext:
    """Holds mutable state shared across BDD steps."""

    user_id: str = "u1"
    clock: FixedClock = field(default_factory=FixedClock)
    logger: InMemoryLogger = field(default_factory=InMemoryLogger)
    ai: ScriptedAIService = field(default_factory=ScriptedAIService)
    applications: InMemoryApplicationRepository = None  # type: ignore[assignment]
    profiles: InMemoryProfileRepository = field(default_factory=InMemoryProfileRepository)
    sessions: InMemoryPracticeSessionRepository = None  # type: ignore[assignment]
    import_rows: list[ImportRecord] = field(default_factory=list)
    last_application_id: str | None = None
    session: PracticeSession | None = None
    result: Any = None
    error: DomainError | None = None

    def __post_init__(self) -> None:
        if self.applications is None:
            self.applications = InMemoryApplicationRepository(
                clock=self.clock,
                ids=SequentialIdGenerator("app"),
            )
        if self.sessions is None:
            self.sessions = InMemoryPracticeSessionRepository(
                clock=self.clock,
                ids=SequentialIdGenerator("session"),
            )

    def use_cases(self) -> UseCases:
        return create_use_cases(
            Repositories(
                applications=self.applications,
                profiles=self.profiles,
                practice_sessions=self.sessions,
            ),
            Services(
                ai=self.ai,
                storage=InMemoryStorageService(),
                pdf_parser=StubPDFParser(),
            ),
            clock=self.clock,
            logger=self.logger,
        )

    def run(self, call: Awaitable[Any]) -> None:
        """Await a use case call, keeping either its result or its domain error."""
        self.result, self.error = None, None
        try:
            self.result = asyncio.run(call)
        except DomainError as exc:
            self.error = exc


@pytest.fixture()
def ctx() -> TrackerContext:
    return TrackerContext()


# -- steps shared by every feature -----------------------------------------

@given(parsers.parse('a signed-in user "{user_id}"'))
def given_signed_in_user(ctx: TrackerContext, user_id: str) -> None:
    ctx.user_id = user_id


@given(parsers.re(r'they track the position "(?P<position>[^"]*)" at "(?P<company>[^"]*)"'))
@when(parsers.re(r'they track the position "(?P<position>[^"]*)" at "(?P<company>[^"]*)"'))
def track_position(ctx: TrackerContext, position: str, company: str) -> None:
    ctx.run(ctx.use_cases().create_application.execute(ctx.user_id, company, position))
    if ctx.result is not None:
        ctx.last_application_id = ctx.result.id


@then(parsers.parse('the request is rejected with "{message}"'))
def then_rejected(ctx: TrackerContext, message: str) -> None:
    assert ctx.error is not None, f"expected an error, got {ctx.result!r}"
    assert str(ctx.error) == message
