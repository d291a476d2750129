"""Topology switch history model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from outage_journal.core.database import Base


class TopologySwitch(Base):
    """Record of a feeder/source change applied to a TP or a line."""

    __tablename__ = "topology_switches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    object_id: Mapped[int] = mapped_column(Integer, nullable=False)
    object_type: Mapped[str] = mapped_column(String(10), nullable=False)  # "TP" | "LINE"
    source_type: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)  # "CELL" | "TP"
    from_source_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    to_source_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    event_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("outage_events.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
