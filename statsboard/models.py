from datetime import datetime

from sqlalchemy import Boolean
from sqlalchemy import DateTime
from sqlalchemy import JSON
from sqlalchemy import String
from sqlalchemy import func
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column

from statsboard.db import Base


class DashboardPreferences(Base):
    __tablename__ = "dashboard_preferences"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    login: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    chart_type: Mapped[str] = mapped_column(String(20), nullable=False, default="line")
    show_private_repos: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    date_format: Mapped[str] = mapped_column(
        String(20), nullable=False, default="MMM DD, YYYY"
    )
    export_format: Mapped[str] = mapped_column(String(10), nullable=False, default="json")
    theme: Mapped[str] = mapped_column(String(10), nullable=False, default="dark")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class DashboardLayout(Base):
    __tablename__ = "dashboard_layouts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    login: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    section_order: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    hidden_sections: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    initialized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
