from collections.abc import Iterable

from statsboard.records import DEFAULT_LANGUAGE_COLOR
from statsboard.records import LanguageStat
from statsboard.records import Repository


TOP_LANGUAGES_LIMIT = 8


def aggregate_languages(
    repositories: Iterable[Repository],
    limit: int = TOP_LANGUAGES_LIMIT,
) -> list[LanguageStat]:
    """Rank languages by total byte size across all repositories.

    Percentages are computed against the size of every language seen, so the
    retained top entries may sum to less than 100.
    """

    sizes: dict[str, int] = {}
    colors: dict[str, str] = {}
    total = 0

    for repository in repositories:
        if not repository.languages:
            continue
        for edge in repository.languages:
            if edge.name not in sizes:
                sizes[edge.name] = 0
                colors[edge.name] = edge.color or DEFAULT_LANGUAGE_COLOR
            sizes[edge.name] += edge.size
            total += edge.size

    stats = [
        LanguageStat(
            name=name,
            color=colors[name],
            size=size,
            percentage=round(size / total * 100, 1) if total > 0 else 0.0,
        )
        for name, size in sizes.items()
    ]
    # sorted() is stable, so equal sizes keep first-seen order.
    stats = sorted(stats, key=lambda stat: stat.size, reverse=True)
    return stats[:limit]
