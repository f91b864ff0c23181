from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import timezone

from statsboard.records import AchievementCounters
from statsboard.records import ContributionDay
from statsboard.records import LanguageEdge
from statsboard.records import Repository
from statsboard.records import contribution_level
from statsboard.services.achievements import evaluate_achievements
from statsboard.services.activity import activity_pattern
from statsboard.services.calendar import normalize_calendar
from statsboard.services.calendar import utc_today
from statsboard.services.languages import aggregate_languages
from statsboard.services.streaks import current_streak
from statsboard.services.streaks import longest_streak


TODAY = date(2026, 10, 18)


def days_ending(counts: list[int], last: date = TODAY) -> list[ContributionDay]:
    first = last - timedelta(days=len(counts) - 1)
    days = []
    for offset, count in enumerate(counts):
        day = first + timedelta(days=offset)
        days.append(
            ContributionDay(date=day, count=count, weekday=(day.weekday() + 1) % 7)
        )
    return days


def test_normalize_calendar_flattens_weeks_in_source_order() -> None:
    weeks = [
        {
            "contributionDays": [
                {"date": "2026-10-10", "contributionCount": 1, "weekday": 6},
            ]
        },
        {
            "contributionDays": [
                {"date": "2026-10-11", "contributionCount": 0, "weekday": 0},
                {"date": "2026-10-12", "contributionCount": 4, "weekday": 1},
            ]
        },
    ]

    days = normalize_calendar(weeks)

    assert [(d.date.isoformat(), d.count, d.weekday) for d in days] == [
        ("2026-10-10", 1, 6),
        ("2026-10-11", 0, 0),
        ("2026-10-12", 4, 1),
    ]


def test_normalize_calendar_empty_input() -> None:
    assert normalize_calendar([]) == []


def test_normalize_calendar_skips_malformed_entries_and_derives_weekday() -> None:
    weeks = [
        {"contributionDays": [{"date": "2026-10-12", "contributionCount": 2}]},
        {"contributionDays": [{"date": "not-a-date", "contributionCount": 2}]},
        {"contributionDays": [{"date": "2026-10-13"}]},
        {"other": []},
    ]

    days = normalize_calendar(weeks)

    assert len(days) == 1
    assert days[0].weekday == 1


def test_contribution_level_thresholds() -> None:
    assert [contribution_level(n) for n in (0, 1, 3, 4, 6, 7, 10, 11)] == [
        0, 1, 1, 2, 2, 3, 3, 4,
    ]


def test_longest_streak_of_empty_and_all_zero_sequences() -> None:
    assert longest_streak([]) == 0
    assert longest_streak(days_ending([0, 0, 0])) == 0


def test_longest_streak_is_maximum_run() -> None:
    assert longest_streak(days_ending([1, 2, 0, 1, 1, 1, 0, 5])) == 3


def test_streaks_for_trailing_run_ending_today() -> None:
    days = days_ending([3, 0, 5, 2])

    assert current_streak(days, today=TODAY) == 2
    assert longest_streak(days) == 2


def test_current_streak_tolerates_zero_count_today() -> None:
    days = days_ending([1, 1, 1, 0])

    assert current_streak(days, today=TODAY) == 3


def test_current_streak_tolerates_missing_today_entry() -> None:
    days = days_ending([2, 2], last=TODAY - timedelta(days=1))

    assert current_streak(days, today=TODAY) == 2


def test_current_streak_broken_when_yesterday_had_no_contributions() -> None:
    days = days_ending([4, 4, 0, 0])

    assert current_streak(days, today=TODAY) == 0


def test_current_streak_is_zero_for_stale_calendar() -> None:
    days = days_ending([1, 1, 1], last=TODAY - timedelta(days=5))

    assert current_streak(days, today=TODAY) == 0
    assert current_streak([], today=TODAY) == 0


def test_current_streak_never_exceeds_longest_streak() -> None:
    for counts in ([1], [0, 1, 1], [1, 1, 0, 1], [3, 3, 3, 3, 0], [0, 0]):
        days = days_ending(counts)
        assert current_streak(days, today=TODAY) <= longest_streak(days)


def test_aggregate_languages_sums_sizes_and_rounds_percentages() -> None:
    repositories = [
        Repository(
            name="a",
            languages=(
                LanguageEdge(name="Go", color="#00ADD8", size=800),
                LanguageEdge(name="Rust", size=200),
            ),
        ),
        Repository(name="b", languages=(LanguageEdge(name="Go", size=400),)),
        Repository(name="c"),
    ]

    stats = aggregate_languages(repositories)

    assert [(s.name, s.size, s.percentage) for s in stats] == [
        ("Go", 1200, 85.7),
        ("Rust", 200, 14.3),
    ]
    assert stats[0].color == "#00ADD8"
    assert stats[1].color == "#888888"
    assert sum(s.percentage for s in stats) <= 100


def test_aggregate_languages_keeps_top_eight() -> None:
    edges = tuple(
        LanguageEdge(name=f"Lang{i}", size=(i + 1) * 10) for i in range(10)
    )

    stats = aggregate_languages([Repository(name="poly", languages=edges)])

    assert len(stats) == 8
    assert stats[0].name == "Lang9"
    assert stats[-1].name == "Lang2"
    assert sum(s.percentage for s in stats) < 100


def test_aggregate_languages_tie_keeps_encounter_order() -> None:
    repositories = [
        Repository(
            name="r",
            languages=(
                LanguageEdge(name="Shell", size=50),
                LanguageEdge(name="Make", size=50),
            ),
        )
    ]

    assert [s.name for s in aggregate_languages(repositories)] == ["Shell", "Make"]


def test_aggregate_languages_without_bytes() -> None:
    stats = aggregate_languages(
        [Repository(name="empty", languages=(LanguageEdge(name="Text", size=0),))]
    )

    assert stats[0].percentage == 0.0
    assert aggregate_languages([]) == []


def test_activity_pattern_averages_positive_days_only() -> None:
    days = [
        ContributionDay(date=date(2026, 10, 4), count=2, weekday=0),
        ContributionDay(date=date(2026, 10, 5), count=0, weekday=1),
        ContributionDay(date=date(2026, 10, 11), count=4, weekday=0),
    ]

    pattern = activity_pattern(days)

    assert pattern.average_by_weekday == (3, 0, 0, 0, 0, 0, 0)
    assert pattern.total_by_weekday == (6, 0, 0, 0, 0, 0, 0)


def test_activity_pattern_rounds_half_up() -> None:
    days = [
        ContributionDay(date=date(2026, 10, 6), count=1, weekday=2),
        ContributionDay(date=date(2026, 10, 13), count=2, weekday=2),
    ]

    assert activity_pattern(days).average_by_weekday[2] == 2


def test_utc_today_ignores_local_timezone(monkeypatch) -> None:
    class FrozenDateTime(datetime):
        @classmethod
        def now(cls, tz=None):
            # 08:30 on the 19th for a server running at UTC+9.
            moment = datetime(2026, 10, 18, 23, 30, tzinfo=UTC)
            if tz is None:
                return moment.astimezone(timezone(timedelta(hours=9))).replace(tzinfo=None)
            return moment.astimezone(tz)

    monkeypatch.setattr("statsboard.services.calendar.datetime", FrozenDateTime)

    assert utc_today() == date(2026, 10, 18)


def test_current_streak_defaults_to_utc_today(monkeypatch) -> None:
    monkeypatch.setattr("statsboard.services.streaks.utc_today", lambda: TODAY)

    assert current_streak(days_ending([1, 1, 0])) == 2


def test_derivations_are_repeatable() -> None:
    days = days_ending([1, 0, 3, 3, 0, 7, 2])
    repositories = [
        Repository(
            name="a",
            languages=(
                LanguageEdge(name="Go", size=300),
                LanguageEdge(name="Rust", size=300),
            ),
        ),
        Repository(name="b", languages=(LanguageEdge(name="Python", size=100),)),
    ]
    counters = AchievementCounters(
        current_streak=30,
        total_contributions=1500,
        followers=120,
        created_at=datetime(2020, 5, 1, tzinfo=UTC),
    )

    assert activity_pattern(days) == activity_pattern(days)
    assert current_streak(days, today=TODAY) == current_streak(days, today=TODAY)
    assert longest_streak(days) == longest_streak(days)
    assert aggregate_languages(repositories) == aggregate_languages(repositories)
    assert evaluate_achievements(counters, today=TODAY) == evaluate_achievements(
        counters, today=TODAY
    )
