from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from domain.errors import RepositoryError
from domain.models import (
    Education,
    Experience,
    InterviewQuestion,
    InterviewType,
    NewPracticeSession,
    NewProfile,
    ProfileUpdate,
)
from domain.ports import PracticeSessionRepositoryPort, ProfileRepositoryPort
from infra.persistence import SQLitePracticeSessionRepository, SQLiteProfileRepository
from test.fixtures import NOW


# -- profiles --------------------------------------------------------------

def test_profile_repo_conforms_to_port(profile_repo: SQLiteProfileRepository) -> None:
    assert isinstance(profile_repo, ProfileRepositoryPort)


def test_create_and_find_profile(profile_repo: SQLiteProfileRepository) -> None:
    created = asyncio.run(
        profile_repo.create(
            NewProfile(
                user_id="u1",
                name="Jane",
                skills=["Python", "SQL"],
                education=[Education(school="MIT", degree="BSc", year="2018")],
                experience=[Experience(company="Acme", role="Engineer", duration="2 years")],
            )
        )
    )
    assert created.id == "profile-1"
    assert created.skills == ("Python", "SQL")
    assert created.education[0].school == "MIT"
    assert created.experience[0].duration == "2 years"
    assert asyncio.run(profile_repo.find_by_user_id("u1")) == created
    assert asyncio.run(profile_repo.find_by_user_id("u2")) is None


def test_second_profile_for_same_user_is_rejected(profile_repo: SQLiteProfileRepository) -> None:
    asyncio.run(profile_repo.create(NewProfile(user_id="u1")))
    with pytest.raises(RepositoryError, match="Failed to create profile"):
        asyncio.run(profile_repo.create(NewProfile(user_id="u1")))


def test_partial_profile_update(profile_repo: SQLiteProfileRepository, clock) -> None:
    asyncio.run(profile_repo.create(NewProfile(user_id="u1", name="Jane", phone="555")))
    clock.advance(minutes=5)

    updated = asyncio.run(
        profile_repo.update("u1", ProfileUpdate(phone=None, skills=["Go"]))
    )
    assert updated.name == "Jane"
    assert updated.phone is None
    assert updated.skills == ("Go",)
    assert updated.updated_at == NOW + timedelta(minutes=5)


def test_update_without_profile_raises(profile_repo: SQLiteProfileRepository) -> None:
    with pytest.raises(RepositoryError, match="no matching row"):
        asyncio.run(profile_repo.update("ghost", ProfileUpdate(name="x")))


def test_upsert_inserts_then_replaces(profile_repo: SQLiteProfileRepository, clock) -> None:
    first = asyncio.run(profile_repo.upsert(NewProfile(user_id="u1", name="Jane")))
    clock.advance(days=1)
    second = asyncio.run(
        profile_repo.upsert(NewProfile(user_id="u1", name="Jane Doe", resume_url="file:///cv.pdf"))
    )

    assert second.id == first.id
    assert second.created_at == first.created_at
    assert second.name == "Jane Doe"
    assert second.resume_url == "file:///cv.pdf"
    assert second.updated_at == NOW + timedelta(days=1)


# -- practice sessions -----------------------------------------------------

def _session(**overrides: object) -> NewPracticeSession:
    values: dict = dict(
        user_id="u1",
        type=InterviewType.BEHAVIORAL,
        questions=[InterviewQuestion(question="Why us?"), InterviewQuestion(question="A failure?")],
    )
    values.update(overrides)
    return NewPracticeSession(**values)


def test_session_repo_conforms_to_port(session_repo: SQLitePracticeSessionRepository) -> None:
    assert isinstance(session_repo, PracticeSessionRepositoryPort)


def test_create_and_list_sessions_newest_first(
    session_repo: SQLitePracticeSessionRepository,
    clock,
) -> None:
    asyncio.run(session_repo.create(_session()))
    clock.advance(minutes=1)
    asyncio.run(session_repo.create(_session(application_id="app-1", type=InterviewType.TECHNICAL)))
    asyncio.run(session_repo.create(_session(user_id="u2")))

    sessions = asyncio.run(session_repo.find_by_user_id("u1"))
    assert [s.id for s in sessions] == ["session-2", "session-1"]
    assert sessions[0].type is InterviewType.TECHNICAL

    linked = asyncio.run(session_repo.find_by_application_id("app-1"))
    assert [s.id for s in linked] == ["session-2"]


def test_update_questions_keeps_length(session_repo: SQLitePracticeSessionRepository) -> None:
    session = asyncio.run(session_repo.create(_session()))
    answered = [
        InterviewQuestion(question="Why us?", answer="Mission", feedback="Be specific."),
        session.questions[1],
    ]

    updated = asyncio.run(session_repo.update_questions(session.id, answered))
    assert len(updated.questions) == 2
    assert updated.questions[0].feedback == "Be specific."
    assert updated.completion_percentage == 50
    assert asyncio.run(session_repo.find_by_id(session.id)) == updated


def test_update_questions_missing_session(session_repo: SQLitePracticeSessionRepository) -> None:
    with pytest.raises(RepositoryError, match="Failed to update practice session"):
        asyncio.run(session_repo.update_questions("nope", []))


def test_delete_session(session_repo: SQLitePracticeSessionRepository) -> None:
    session = asyncio.run(session_repo.create(_session()))
    asyncio.run(session_repo.delete(session.id))
    assert asyncio.run(session_repo.find_by_id(session.id)) is None
