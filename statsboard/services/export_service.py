import csv
import io
import json
from datetime import date
from datetime import datetime
from typing import Any

from statsboard.api.schemas.preferences import DateFormat
from statsboard.records import StatsRecord


MONTHS_SHORT = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DEFAULT_DATE_FORMAT: DateFormat = "MMM DD, YYYY"

MEDIA_TYPES = {"json": "application/json", "csv": "text/csv"}


def _ordinal_suffix(day: int) -> str:
    if day in (1, 21, 31):
        return "st"
    if day in (2, 22):
        return "nd"
    if day in (3, 23):
        return "rd"
    return "th"


def format_date(value: date, fmt: DateFormat = DEFAULT_DATE_FORMAT) -> str:
    """Render a date in one of the dashboard's supported display formats."""

    if fmt == "DD/MM/YYYY":
        return f"{value.day:02d}/{value.month:02d}/{value.year}"
    if fmt == "MM/DD/YYYY":
        return f"{value.month:02d}/{value.day:02d}/{value.year}"
    if fmt == "YYYY-MM-DD":
        return value.isoformat()
    return (
        f"{MONTHS_SHORT[value.month - 1]} {value.day}"
        f"{_ordinal_suffix(value.day)}, {value.year}"
    )


def export_filename(login: str, fmt: str, on: date) -> str:
    return f"github-stats-{login}-{on.isoformat()}.{fmt}"


def build_export_document(record: StatsRecord, exported_at: datetime) -> dict[str, Any]:
    """Nested export document: user, statistics, languages, repositories, badges."""

    return {
        "user": {
            "name": record.name,
            "username": record.login,
            "bio": record.bio,
            "createdAt": record.created_at.isoformat() if record.created_at else None,
            "followers": record.followers,
            "following": record.following,
            "stars": record.stars,
        },
        "statistics": {
            "totalContributions": record.total_contributions,
            "currentStreak": record.current_streak,
            "longestStreak": record.longest_streak,
            "commits": record.commits,
            "pullRequests": record.pull_requests,
            "issues": record.issues,
            "reviews": record.reviews,
            "repositories": record.total_repos,
        },
        "languages": [
            {
                "name": language.name,
                "color": language.color,
                "size": language.size,
                "percentage": language.percentage,
            }
            for language in record.language_stats
        ],
        "topRepositories": [
            {
                "name": repository.name,
                "stars": repository.stargazer_count,
                "forks": repository.fork_count,
                "url": repository.url,
            }
            for repository in record.top_repositories
        ],
        "achievements": [
            {
                "icon": achievement.icon,
                "name": achievement.name,
                "desc": achievement.description,
            }
            for achievement in record.achievements
        ],
        "exportedAt": exported_at.isoformat(),
    }


def render_export_json(record: StatsRecord, exported_at: datetime) -> str:
    return json.dumps(
        build_export_document(record, exported_at), indent=2, ensure_ascii=False
    )


def render_export_csv(record: StatsRecord, date_format: DateFormat = DEFAULT_DATE_FORMAT) -> str:
    """Two-column metric/value table."""

    member_since = format_date(record.created_at.date(), date_format) if record.created_at else ""
    rows = [
        ("Username", record.login),
        ("Name", record.name),
        ("Total Contributions", record.total_contributions),
        ("Current Streak", record.current_streak),
        ("Longest Streak", record.longest_streak),
        ("Commits", record.commits),
        ("Pull Requests", record.pull_requests),
        ("Issues", record.issues),
        ("Code Reviews", record.reviews),
        ("Repositories", record.total_repos),
        ("Followers", record.followers),
        ("Following", record.following),
        ("Stars Earned", record.stars),
        ("Member Since", member_since),
    ]

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["Metric", "Value"])
    writer.writerows(rows)
    return output.getvalue()
