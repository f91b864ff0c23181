from collections.abc import Mapping
from typing import Any

import httpx


USER_AGENT = "statsboard"

USER_STATS_QUERY = """
query($username: String!) {
  user(login: $username) {
    name
    login
    avatarUrl
    bio
    createdAt
    followers { totalCount }
    following { totalCount }
    starredRepositories { totalCount }
    repositories(
      first: 100
      ownerAffiliations: OWNER
      orderBy: {field: STARGAZERS, direction: DESC}
    ) {
      totalCount
      nodes {
        name
        description
        stargazerCount
        forkCount
        url
        primaryLanguage { name color }
        languages(first: 10, orderBy: {field: SIZE, direction: DESC}) {
          edges {
            size
            node { name color }
          }
        }
      }
    }
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
            weekday
          }
        }
      }
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
    }
  }
}
"""

PRIVATE_REPO_COUNT_QUERY = """
query($username: String!) {
  user(login: $username) {
    repositories(first: 1, ownerAffiliations: OWNER, privacy: PRIVATE) {
      totalCount
    }
  }
}
"""


class GraphQLResponseError(ValueError):
    """Raised when GitHub answers with an `errors` payload."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserNotFoundError(LookupError):
    """Raised when the GraphQL response carries no user object."""


def _post_graphql(
    query: str,
    variables: Mapping[str, Any],
    token: str,
    graphql_url: str,
    timeout: float,
) -> Mapping[str, Any]:
    if not token:
        raise ValueError("A personal access token is required for GraphQL requests")

    response = httpx.post(
        graphql_url,
        json={"query": query, "variables": dict(variables)},
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        },
        timeout=timeout,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        message = "GraphQL query failed"
        if isinstance(errors, list) and errors and isinstance(errors[0], Mapping):
            message = str(errors[0].get("message") or message)
        raise GraphQLResponseError(message)

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise UserNotFoundError("User not found")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise UserNotFoundError("User not found")

    return user


def fetch_user_stats(
    username: str,
    token: str,
    graphql_url: str,
    timeout: float = 20.0,
) -> Mapping[str, Any]:
    """Fetch profile, repositories and contribution calendar for a user."""

    return _post_graphql(
        USER_STATS_QUERY,
        {"username": username},
        token=token,
        graphql_url=graphql_url,
        timeout=timeout,
    )


def fetch_private_repo_count(
    login: str,
    token: str,
    graphql_url: str,
    timeout: float = 20.0,
) -> int:
    """Count private repositories owned by `login` that the token can see."""

    user = _post_graphql(
        PRIVATE_REPO_COUNT_QUERY,
        {"username": login},
        token=token,
        graphql_url=graphql_url,
        timeout=timeout,
    )

    repositories = user.get("repositories")
    if not isinstance(repositories, Mapping):
        raise ValueError("GitHub repositories connection is missing")

    total = repositories.get("totalCount")
    if not isinstance(total, int):
        raise ValueError("GitHub repository count is missing")

    return total
