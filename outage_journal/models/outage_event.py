"""Outage event model and its asset association tables."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from outage_journal.core.database import Base
from outage_journal.core.timeutils import storage_now


class OutageEvent(Base):
    """A de-energization or switching action logged against network assets.

    Timestamps are stored as naive UTC. ``is_completed`` is an integer flag
    (0/1) and is normalized to a boolean by the read schemas.
    """

    __tablename__ = "outage_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    reason_category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reason_subcategory: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    time_start: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    time_end: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    deadline_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    measures_planned: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    measures_taken: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_switching: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    switching_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    substation_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("substations.id"), nullable=True, index=True
    )
    cell_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("cells.id"), nullable=True, index=True
    )
    tp_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("tps.id"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=storage_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=storage_now, onupdate=storage_now, nullable=False
    )

    # Relationships
    substation = relationship("Substation", lazy="raise")
    cell = relationship("Cell", lazy="raise")
    tp = relationship("Tp", lazy="raise")
    event_lines: Mapped[List["EventLine"]] = relationship(
        "EventLine", back_populates="event", lazy="raise", passive_deletes=True
    )
    event_tps: Mapped[List["EventTp"]] = relationship(
        "EventTp", back_populates="event", lazy="raise", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<OutageEvent(id={self.id}, type='{self.type}', is_completed={self.is_completed})>"


class EventLine(Base):
    """Many-to-many link between an event and an affected line."""

    __tablename__ = "event_lines"

    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("outage_events.id"), primary_key=True
    )
    line_id: Mapped[int] = mapped_column(Integer, ForeignKey("lines.id"), primary_key=True)

    event = relationship("OutageEvent", back_populates="event_lines")
    line = relationship("Line", lazy="raise")


class EventTp(Base):
    """Many-to-many link between an event and an affected transformer point."""

    __tablename__ = "event_tps"

    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("outage_events.id"), primary_key=True
    )
    tp_id: Mapped[int] = mapped_column(Integer, ForeignKey("tps.id"), primary_key=True)

    event = relationship("OutageEvent", back_populates="event_tps")
    tp = relationship("Tp", lazy="raise")
