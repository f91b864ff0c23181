from collections.abc import Mapping
from collections.abc import Sequence
from datetime import UTC
from datetime import date
from datetime import datetime

from statsboard.records import ContributionDay


def normalize_calendar(weeks: Sequence[Mapping[str, object]]) -> list[ContributionDay]:
    """Flatten GraphQL calendar weeks into one chronological day sequence.

    Weeks and days already arrive in date order, so entries are only
    flattened, never re-sorted.
    """

    days: list[ContributionDay] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if not isinstance(raw_date, str) or not isinstance(raw_count, int):
                continue

            try:
                parsed_day = date.fromisoformat(raw_date)
            except ValueError:
                continue

            raw_weekday = item.get("weekday")
            if isinstance(raw_weekday, int) and 0 <= raw_weekday <= 6:
                weekday = raw_weekday
            else:
                weekday = (parsed_day.weekday() + 1) % 7

            days.append(
                ContributionDay(date=parsed_day, count=raw_count, weekday=weekday)
            )

    return days


def utc_today() -> date:
    """Current day in UTC, the timezone GitHub uses for calendar dates."""

    return datetime.now(UTC).date()
