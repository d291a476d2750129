"""Substation and cell models."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from outage_journal.core.database import Base


class Substation(Base):
    """Top-level network site."""

    __tablename__ = "substations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    voltage_class: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    district: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    # Cell removal goes through CascadeService so dependent events are cleaned up too
    cells: Mapped[List["Cell"]] = relationship(
        "Cell", back_populates="substation", order_by="Cell.id", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Substation(id={self.id}, name='{self.name}')>"


class Cell(Base):
    """Switchable bay within a substation."""

    __tablename__ = "cells"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    voltage_class: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    substation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("substations.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    substation: Mapped["Substation"] = relationship("Substation", back_populates="cells")

    def __repr__(self) -> str:
        return f"<Cell(id={self.id}, name='{self.name}', substation_id={self.substation_id})>"
