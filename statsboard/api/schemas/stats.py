from pydantic import BaseModel

from statsboard.api.schemas.preferences import Preferences
from statsboard.records import StatsRecord


class DashboardResponse(BaseModel):
    """Statistics plus the viewer's preferences and visible section order."""

    stats: StatsRecord
    preferences: Preferences
    sections: list[str]
