"""Line (feeder) model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from outage_journal.core.database import Base


class Line(Base):
    """Feeder line sourced from either a cell or a transformer point."""

    __tablename__ = "lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    voltage_class: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    line_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # "overhead" | "cable"

    # Current source (mutually exclusive)
    source_cell_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("cells.id"), nullable=True
    )
    source_tp_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tps.id"), nullable=True)

    # Normal (default) source, independent of switching state
    normal_source_cell_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("cells.id"), nullable=True
    )
    normal_source_tp_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("tps.id"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Line(id={self.id}, name='{self.name}')>"
