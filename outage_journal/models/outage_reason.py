"""Outage reason taxonomy model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from outage_journal.core.database import Base


class OutageReason(Base):
    """One (category, subcategory) pair of the reason taxonomy."""

    __tablename__ = "outage_reasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subcategory: Mapped[str] = mapped_column(String(500), nullable=False)
