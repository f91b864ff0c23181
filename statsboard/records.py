"""Immutable records produced by the statistics derivation pipeline."""

from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import computed_field


DEFAULT_LANGUAGE_COLOR = "#888888"


def contribution_level(count: int) -> int:
    """Map daily contribution count to a heatmap level in range 0..4."""

    if count > 10:
        return 4
    if count > 6:
        return 3
    if count > 3:
        return 2
    if count > 0:
        return 1
    return 0


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ContributionDay(FrozenModel):
    """Single calendar day; weekday 0 is Sunday as in the GitHub calendar."""

    date: date
    count: int = Field(ge=0)
    weekday: int = Field(ge=0, le=6)

    @computed_field
    @property
    def level(self) -> int:
        return contribution_level(self.count)


class LanguageEdge(FrozenModel):
    name: str
    color: str | None = None
    size: int = Field(ge=0)


class PrimaryLanguage(FrozenModel):
    name: str
    color: str | None = None


class Repository(FrozenModel):
    """Owned repository with its language breakdown by byte size."""

    name: str
    description: str | None = None
    url: str | None = None
    stargazer_count: int = 0
    fork_count: int = 0
    primary_language: PrimaryLanguage | None = None
    languages: tuple[LanguageEdge, ...] | None = None


class LanguageStat(FrozenModel):
    name: str
    color: str = DEFAULT_LANGUAGE_COLOR
    size: int
    percentage: float


class ActivityPattern(FrozenModel):
    average_by_weekday: tuple[int, ...]
    total_by_weekday: tuple[int, ...]


class Achievement(FrozenModel):
    icon: str
    name: str
    description: str


class AchievementCounters(FrozenModel):
    current_streak: int = 0
    total_contributions: int = 0
    repositories: int = 0
    pull_requests: int = 0
    followers: int = 0
    commits: int = 0
    created_at: datetime | None = None


class StatsRecord(FrozenModel):
    """Everything the dashboard shows for one user after a refresh."""

    name: str
    login: str
    avatar_url: str | None = None
    bio: str | None = None
    created_at: datetime | None = None
    followers: int = 0
    following: int = 0
    stars: int = 0
    public_repos: int = 0
    private_repos: int = 0
    total_repos: int = 0
    total_contributions: int = 0
    commits: int = 0
    issues: int = 0
    pull_requests: int = 0
    reviews: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    contribution_days: tuple[ContributionDay, ...] = ()
    language_stats: tuple[LanguageStat, ...] = ()
    top_repositories: tuple[Repository, ...] = ()
    activity_pattern: ActivityPattern
    achievements: tuple[Achievement, ...] = ()
