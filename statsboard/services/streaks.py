from collections.abc import Sequence
from datetime import date

from statsboard.records import ContributionDay
from statsboard.services.calendar import utc_today


def longest_streak(days: Sequence[ContributionDay]) -> int:
    """Return the longest run of consecutive days with contributions."""

    longest = 0
    running = 0
    for day in days:
        if day.count > 0:
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return longest


def current_streak(days: Sequence[ContributionDay], today: date | None = None) -> int:
    """Return the run of contributing days that reaches today or yesterday.

    A zero (or not yet published) entry for today does not break the streak.
    Once counting has started, the first zero-count day ends it.
    """

    today = today or utc_today()
    streak = 0

    for day in reversed(days):
        gap = (today - day.date).days

        if gap <= 1 and day.count > 0:
            streak += 1
        elif streak > 0 and day.count > 0:
            streak += 1
        elif streak > 0:
            break
        elif gap > 1:
            break

    return streak
