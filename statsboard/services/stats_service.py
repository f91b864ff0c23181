import logging
from collections.abc import Mapping
from datetime import date
from datetime import datetime
from typing import Any

import httpx

from statsboard.clients.github_client import GraphQLResponseError
from statsboard.clients.github_client import UserNotFoundError
from statsboard.clients.github_client import fetch_private_repo_count
from statsboard.clients.github_client import fetch_user_stats
from statsboard.records import AchievementCounters
from statsboard.records import LanguageEdge
from statsboard.records import PrimaryLanguage
from statsboard.records import Repository
from statsboard.records import StatsRecord
from statsboard.services.achievements import evaluate_achievements
from statsboard.services.activity import activity_pattern
from statsboard.services.calendar import normalize_calendar
from statsboard.services.calendar import utc_today
from statsboard.services.languages import aggregate_languages
from statsboard.services.streaks import current_streak
from statsboard.services.streaks import longest_streak


logger = logging.getLogger(__name__)

TOP_REPOSITORIES_LIMIT = 5


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


class InvalidGitHubTokenError(GitHubAPIError):
    """Raised when GitHub rejects the provided token."""


class GitHubQueryError(GitHubAPIError):
    """Raised when GitHub reports an error for the GraphQL query itself."""


class GitHubUserNotFoundError(GitHubAPIError):
    """Raised when GitHub has no profile for the requested login."""


def parse_github_datetime(raw_value: object) -> datetime | None:
    if not isinstance(raw_value, str) or not raw_value:
        return None
    try:
        return datetime.fromisoformat(raw_value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _total_count(container: Mapping[str, Any], key: str) -> int:
    connection = container.get(key)
    if isinstance(connection, Mapping):
        value = connection.get("totalCount")
        if isinstance(value, int):
            return value
    return 0


def _int_field(container: Mapping[str, Any], key: str) -> int:
    value = container.get(key)
    return value if isinstance(value, int) else 0


def parse_repository(node: Mapping[str, Any]) -> Repository:
    primary = node.get("primaryLanguage")
    primary_language = None
    if isinstance(primary, Mapping) and isinstance(primary.get("name"), str):
        primary_language = PrimaryLanguage(name=primary["name"], color=primary.get("color"))

    languages = None
    connection = node.get("languages")
    if isinstance(connection, Mapping) and isinstance(connection.get("edges"), list):
        edges = []
        for edge in connection["edges"]:
            if not isinstance(edge, Mapping):
                continue
            language = edge.get("node")
            size = edge.get("size")
            if not isinstance(language, Mapping) or not isinstance(size, int):
                continue
            if not isinstance(language.get("name"), str):
                continue
            edges.append(
                LanguageEdge(name=language["name"], color=language.get("color"), size=size)
            )
        languages = tuple(edges)

    return Repository(
        name=str(node.get("name") or ""),
        description=node.get("description"),
        url=node.get("url"),
        stargazer_count=_int_field(node, "stargazerCount"),
        fork_count=_int_field(node, "forkCount"),
        primary_language=primary_language,
        languages=languages,
    )


def build_stats_record(
    user: Mapping[str, Any],
    private_repos: int = 0,
    today: date | None = None,
) -> StatsRecord:
    """Derive the full statistics record from one GraphQL `user` object."""

    today = today or utc_today()

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        collection = {}
    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        calendar = {}
    weeks = calendar.get("weeks")

    days = normalize_calendar(weeks if isinstance(weeks, list) else [])

    repositories_connection = user.get("repositories")
    nodes: list[Any] = []
    if isinstance(repositories_connection, Mapping):
        raw_nodes = repositories_connection.get("nodes")
        if isinstance(raw_nodes, list):
            nodes = raw_nodes
    repositories = [parse_repository(node) for node in nodes if isinstance(node, Mapping)]

    login = str(user.get("login") or "")
    created_at = parse_github_datetime(user.get("createdAt"))
    # The owned-repository connection includes private repositories the token can see.
    total_repos = _total_count(user, "repositories")
    public_repos = max(total_repos - private_repos, 0)
    followers = _total_count(user, "followers")
    total_contributions = _int_field(calendar, "totalContributions")
    commits = _int_field(collection, "totalCommitContributions")
    pull_requests = _int_field(collection, "totalPullRequestContributions")

    streak = current_streak(days, today=today)
    achievements = evaluate_achievements(
        AchievementCounters(
            current_streak=streak,
            total_contributions=total_contributions,
            repositories=total_repos,
            pull_requests=pull_requests,
            followers=followers,
            commits=commits,
            created_at=created_at,
        ),
        today=today,
    )

    return StatsRecord(
        name=str(user.get("name") or login),
        login=login,
        avatar_url=user.get("avatarUrl"),
        bio=user.get("bio"),
        created_at=created_at,
        followers=followers,
        following=_total_count(user, "following"),
        stars=_total_count(user, "starredRepositories"),
        public_repos=public_repos,
        private_repos=private_repos,
        total_repos=total_repos,
        total_contributions=total_contributions,
        commits=commits,
        issues=_int_field(collection, "totalIssueContributions"),
        pull_requests=pull_requests,
        reviews=_int_field(collection, "totalPullRequestReviewContributions"),
        current_streak=streak,
        longest_streak=longest_streak(days),
        contribution_days=tuple(days),
        language_stats=tuple(aggregate_languages(repositories)),
        top_repositories=tuple(repositories[:TOP_REPOSITORIES_LIMIT]),
        activity_pattern=activity_pattern(days),
        achievements=tuple(achievements),
    )


def _private_repo_count(login: str, token: str, graphql_url: str, timeout: float) -> int:
    try:
        return fetch_private_repo_count(
            login=login,
            token=token,
            graphql_url=graphql_url,
            timeout=timeout,
        )
    except Exception:
        logger.warning("Could not fetch private repository count for %s", login, exc_info=True)
        return 0


def get_user_stats(
    username: str,
    token: str,
    graphql_url: str,
    include_private_repos: bool = True,
    timeout: float = 20.0,
    today: date | None = None,
) -> StatsRecord:
    """Fetch a user's GitHub data and derive the dashboard statistics."""

    try:
        user = fetch_user_stats(
            username=username,
            token=token,
            graphql_url=graphql_url,
            timeout=timeout,
        )
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 401:
            raise InvalidGitHubTokenError(
                "Invalid token. Please check your credentials."
            ) from exc
        raise GitHubAPIError("Failed to fetch data from GitHub") from exc
    except GraphQLResponseError as exc:
        raise GitHubQueryError(exc.message) from exc
    except UserNotFoundError as exc:
        raise GitHubUserNotFoundError("User not found") from exc
    except Exception as exc:
        raise GitHubAPIError("Failed to fetch data from GitHub") from exc

    private_repos = 0
    login = str(user.get("login") or username)
    if include_private_repos:
        private_repos = _private_repo_count(login, token, graphql_url, timeout)

    record = build_stats_record(user, private_repos=private_repos, today=today)
    logger.info(
        "Built stats for %s: %d contribution days, %d achievements",
        record.login,
        len(record.contribution_days),
        len(record.achievements),
    )
    return record
