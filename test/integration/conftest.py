from __future__ import annotations

import os
from typing import Generator

import pytest

from infra.persistence import (
    SQLiteApplicationRepository,
    SQLitePracticeSessionRepository,
    SQLiteProfileRepository,
)
from test.mocks import FakeBackendClient, FixedClock, SequentialIdGenerator


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def db_path(tmp_path: str) -> str:
    return os.path.join(tmp_path, "nexcareer.db")


@pytest.fixture()
def application_repo(db_path: str, clock: FixedClock) -> Generator[SQLiteApplicationRepository, None, None]:
    repo = SQLiteApplicationRepository(db_path, clock=clock, ids=SequentialIdGenerator("app"))
    yield repo
    repo.close()


@pytest.fixture()
def profile_repo(db_path: str, clock: FixedClock) -> Generator[SQLiteProfileRepository, None, None]:
    repo = SQLiteProfileRepository(db_path, clock=clock, ids=SequentialIdGenerator("profile"))
    yield repo
    repo.close()


@pytest.fixture()
def session_repo(db_path: str, clock: FixedClock) -> Generator[SQLitePracticeSessionRepository, None, None]:
    repo = SQLitePracticeSessionRepository(db_path, clock=clock, ids=SequentialIdGenerator("session"))
    yield repo
    repo.close()


@pytest.fixture()
def backend() -> FakeBackendClient:
    return FakeBackendClient()
