"""Badge evaluation driven by declarative threshold tables.

Each category lists its thresholds most prestigious first. A category emits
at most one badge, the first threshold its counter reaches, and badges are
returned in category order.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from statsboard.records import Achievement
from statsboard.records import AchievementCounters
from statsboard.services.calendar import utc_today


ACCOUNT_AGE = "account_age_days"


@dataclass(frozen=True)
class Threshold:
    minimum: int
    icon: str
    name: str
    description: str


@dataclass(frozen=True)
class AchievementCategory:
    counter: str
    thresholds: tuple[Threshold, ...]


ACHIEVEMENT_CATEGORIES: tuple[AchievementCategory, ...] = (
    AchievementCategory(
        counter="current_streak",
        thresholds=(
            Threshold(365, "🔥", "Year Warrior", "365+ day streak"),
            Threshold(100, "💯", "Century Streak", "100+ day streak"),
            Threshold(30, "🌟", "Month Master", "30+ day streak"),
            Threshold(7, "⚡", "Week Warrior", "7+ day streak"),
        ),
    ),
    AchievementCategory(
        counter="total_contributions",
        thresholds=(
            Threshold(5000, "👑", "Contribution King", "5000+ contributions"),
            Threshold(2000, "💎", "Diamond Contributor", "2000+ contributions"),
            Threshold(1000, "🏆", "Elite Coder", "1000+ contributions"),
        ),
    ),
    AchievementCategory(
        counter="repositories",
        thresholds=(
            Threshold(100, "📚", "Repository Master", "100+ repositories"),
            Threshold(50, "📖", "Prolific Creator", "50+ repositories"),
            Threshold(20, "📝", "Active Builder", "20+ repositories"),
        ),
    ),
    AchievementCategory(
        counter="pull_requests",
        thresholds=(
            Threshold(500, "🚀", "PR Legend", "500+ pull requests"),
            Threshold(100, "🎯", "PR Expert", "100+ pull requests"),
            Threshold(50, "🎪", "PR Enthusiast", "50+ pull requests"),
        ),
    ),
    AchievementCategory(
        counter="followers",
        thresholds=(
            Threshold(1000, "🌟", "GitHub Celebrity", "1000+ followers"),
            Threshold(500, "⭐", "Rising Star", "500+ followers"),
            Threshold(100, "✨", "Popular Developer", "100+ followers"),
        ),
    ),
    AchievementCategory(
        counter="commits",
        thresholds=(
            Threshold(2000, "💻", "Commit Machine", "2000+ commits"),
            Threshold(1000, "⌨️", "Serial Committer", "1000+ commits"),
        ),
    ),
    AchievementCategory(
        counter=ACCOUNT_AGE,
        thresholds=(
            Threshold(3650, "🎂", "10 Year Veteran", "Account 10+ years old"),
            Threshold(1825, "🎉", "5 Year Member", "Account 5+ years old"),
            Threshold(365, "🎊", "Annual Member", "Account 1+ year old"),
        ),
    ),
)


def account_age_days(counters: AchievementCounters, today: date | None = None) -> int:
    if counters.created_at is None:
        return 0
    today = today or utc_today()
    return (today - counters.created_at.date()).days


def _counter_values(counters: AchievementCounters, today: date | None) -> dict[str, int]:
    values = counters.model_dump(exclude={"created_at"})
    values[ACCOUNT_AGE] = account_age_days(counters, today)
    return values


def evaluate_achievements(
    counters: AchievementCounters,
    today: date | None = None,
    categories: Sequence[AchievementCategory] = ACHIEVEMENT_CATEGORIES,
) -> list[Achievement]:
    values = _counter_values(counters, today)
    achievements: list[Achievement] = []

    for category in categories:
        value = values[category.counter]
        for threshold in category.thresholds:
            if value >= threshold.minimum:
                achievements.append(
                    Achievement(
                        icon=threshold.icon,
                        name=threshold.name,
                        description=threshold.description,
                    )
                )
                break

    return achievements
