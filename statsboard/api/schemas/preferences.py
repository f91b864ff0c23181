from typing import Literal

from pydantic import BaseModel


ChartType = Literal["line", "bar"]
DateFormat = Literal["MMM DD, YYYY", "DD/MM/YYYY", "MM/DD/YYYY", "YYYY-MM-DD"]
ExportFormat = Literal["json", "csv"]
Theme = Literal["dark", "light"]


class Preferences(BaseModel):
    """Per-user dashboard display preferences."""

    chart_type: ChartType = "line"
    show_private_repos: bool = True
    date_format: DateFormat = "MMM DD, YYYY"
    export_format: ExportFormat = "json"
    theme: Theme = "dark"


class PreferencesUpdate(BaseModel):
    """Partial preferences; omitted fields keep their stored value."""

    chart_type: ChartType | None = None
    show_private_repos: bool | None = None
    date_format: DateFormat | None = None
    export_format: ExportFormat | None = None
    theme: Theme | None = None


class Layout(BaseModel):
    """Saved section ordering and visibility for the dashboard."""

    section_order: list[str] = []
    hidden_sections: list[str] = []
    initialized: bool = False
