"""Server-side storage for dashboard preferences and section layout."""

import logging
from collections.abc import Sequence

from sqlalchemy import delete
from sqlalchemy import select
from sqlalchemy.orm import Session

from statsboard.api.schemas.preferences import Layout
from statsboard.api.schemas.preferences import Preferences
from statsboard.api.schemas.preferences import PreferencesUpdate
from statsboard.models import DashboardLayout
from statsboard.models import DashboardPreferences


logger = logging.getLogger(__name__)

DEFAULT_SECTIONS = (
    "stats",
    "contributions",
    "languages",
    "activity",
    "achievements",
    "top-repos",
)


def _normalize_login(login: str) -> str:
    return login.strip().lower()


def get_preferences(db: Session, login: str) -> Preferences:
    row = db.scalar(
        select(DashboardPreferences).where(
            DashboardPreferences.login == _normalize_login(login)
        )
    )
    if row is None:
        return Preferences()
    return Preferences(
        chart_type=row.chart_type,
        show_private_repos=row.show_private_repos,
        date_format=row.date_format,
        export_format=row.export_format,
        theme=row.theme,
    )


def update_preferences(db: Session, login: str, update: PreferencesUpdate) -> Preferences:
    """Merge the provided fields over the stored (or default) preferences."""

    normalized = _normalize_login(login)
    merged = get_preferences(db, normalized).model_copy(
        update=update.model_dump(exclude_none=True)
    )

    row = db.scalar(
        select(DashboardPreferences).where(DashboardPreferences.login == normalized)
    )
    if row is None:
        row = DashboardPreferences(login=normalized)
        db.add(row)

    row.chart_type = merged.chart_type
    row.show_private_repos = merged.show_private_repos
    row.date_format = merged.date_format
    row.export_format = merged.export_format
    row.theme = merged.theme
    db.commit()

    logger.info("Saved dashboard preferences for %s", normalized)
    return merged


def get_layout(db: Session, login: str) -> Layout:
    row = db.scalar(
        select(DashboardLayout).where(DashboardLayout.login == _normalize_login(login))
    )
    if row is None:
        return Layout()
    return Layout(
        section_order=list(row.section_order),
        hidden_sections=list(row.hidden_sections),
        initialized=row.initialized,
    )


def save_layout(
    db: Session,
    login: str,
    layout: Layout,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> Layout:
    """Store a layout, dropping unknown and duplicate section ids."""

    known = set(sections)
    section_order = list(dict.fromkeys(s for s in layout.section_order if s in known))
    hidden_sections = list(dict.fromkeys(s for s in layout.hidden_sections if s in known))
    cleaned = Layout(
        section_order=section_order,
        hidden_sections=hidden_sections,
        initialized=True,
    )

    normalized = _normalize_login(login)
    row = db.scalar(select(DashboardLayout).where(DashboardLayout.login == normalized))
    if row is None:
        row = DashboardLayout(login=normalized)
        db.add(row)

    row.section_order = cleaned.section_order
    row.hidden_sections = cleaned.hidden_sections
    row.initialized = cleaned.initialized
    db.commit()

    logger.info("Saved dashboard layout for %s", normalized)
    return cleaned


def reset_layout(db: Session, login: str) -> None:
    db.execute(
        delete(DashboardLayout).where(DashboardLayout.login == _normalize_login(login))
    )
    db.commit()


def apply_layout(layout: Layout, sections: Sequence[str] = DEFAULT_SECTIONS) -> list[str]:
    """Return the visible sections in display order.

    Saved order comes first; sections the saved order does not mention keep
    their default relative order at the end. Hidden sections are removed.
    """

    if not layout.initialized or not layout.section_order:
        ordered = list(sections)
    else:
        known = set(sections)
        ordered = [s for s in dict.fromkeys(layout.section_order) if s in known]
        ordered += [s for s in sections if s not in ordered]

    hidden = set(layout.hidden_sections) if layout.initialized else set()
    return [s for s in ordered if s not in hidden]
