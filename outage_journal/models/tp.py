"""Transformer point model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from outage_journal.core.database import Base


class Tp(Base):
    """Transformer point fed by a line.

    ``feeder_id`` follows the current switching state, ``normal_feeder_id``
    records the default topology.
    """

    __tablename__ = "tps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    voltage_class: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    capacity: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    feeder_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("lines.id", use_alter=True), nullable=True
    )
    normal_feeder_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("lines.id", use_alter=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Tp(id={self.id}, name='{self.name}')>"
