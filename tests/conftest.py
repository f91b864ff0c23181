import os
from datetime import date
from datetime import timedelta

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from statsboard.db import Base
from statsboard.db import get_db
from statsboard.main import app
import statsboard.models  # noqa: F401


@pytest.fixture
def db_session() -> Session:
    test_engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    testing_session_local = sessionmaker(
        bind=test_engine,
        autoflush=False,
        autocommit=False,
    )
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db_client(db_session: Session) -> TestClient:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_weeks(counts: list[int], start: str) -> list[dict[str, object]]:
    """Build GraphQL calendar weeks for consecutive days starting at `start`."""

    first = date.fromisoformat(start)
    weeks: list[dict[str, object]] = []
    current: list[dict[str, object]] = []
    for offset, count in enumerate(counts):
        day = first + timedelta(days=offset)
        weekday = (day.weekday() + 1) % 7
        if weekday == 0 and current:
            weeks.append({"contributionDays": current})
            current = []
        current.append(
            {"date": day.isoformat(), "contributionCount": count, "weekday": weekday}
        )
    if current:
        weeks.append({"contributionDays": current})
    return weeks


@pytest.fixture
def github_user() -> dict[str, object]:
    """GraphQL `user` object as returned by the profile query."""

    return {
        "name": "The Octocat",
        "login": "octocat",
        "avatarUrl": "https://avatars.githubusercontent.com/u/583231",
        "bio": "GitHub mascot",
        "createdAt": "2011-01-25T18:44:36Z",
        "followers": {"totalCount": 150},
        "following": {"totalCount": 9},
        "starredRepositories": {"totalCount": 42},
        "repositories": {
            "totalCount": 8,
            "nodes": [
                {
                    "name": "hello-world",
                    "description": "My first repository",
                    "stargazerCount": 2500,
                    "forkCount": 2000,
                    "url": "https://github.com/octocat/hello-world",
                    "primaryLanguage": {"name": "Go", "color": "#00ADD8"},
                    "languages": {
                        "edges": [
                            {"size": 800, "node": {"name": "Go", "color": "#00ADD8"}},
                            {"size": 200, "node": {"name": "Rust", "color": None}},
                        ]
                    },
                },
                {
                    "name": "spoon-knife",
                    "description": None,
                    "stargazerCount": 12,
                    "forkCount": 1,
                    "url": "https://github.com/octocat/spoon-knife",
                    "primaryLanguage": None,
                    "languages": {
                        "edges": [
                            {"size": 400, "node": {"name": "Go", "color": "#00ADD8"}},
                        ]
                    },
                },
            ],
        },
        "contributionsCollection": {
            "contributionCalendar": {
                "totalContributions": 2500,
                # 2026-10-11 is a Sunday.
                "weeks": make_weeks([3, 0, 5, 2, 0, 0, 4, 1], "2026-10-11"),
            },
            "totalCommitContributions": 1200,
            "totalIssueContributions": 30,
            "totalPullRequestContributions": 60,
            "totalPullRequestReviewContributions": 15,
        },
    }
