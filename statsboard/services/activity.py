import math
from collections.abc import Iterable

from statsboard.records import ActivityPattern
from statsboard.records import ContributionDay


def activity_pattern(days: Iterable[ContributionDay]) -> ActivityPattern:
    """Total and average contributions per weekday over active days only."""

    totals = [0] * 7
    active_days = [0] * 7

    for day in days:
        if day.count > 0:
            totals[day.weekday] += day.count
            active_days[day.weekday] += 1

    averages = [
        math.floor(total / active + 0.5) if active > 0 else 0
        for total, active in zip(totals, active_days)
    ]

    return ActivityPattern(
        average_by_weekday=tuple(averages),
        total_by_weekday=tuple(totals),
    )
