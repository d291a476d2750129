"""Existence checks for ids that point at other reference rows."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.exceptions import ValidationException


async def require_reference(db: AsyncSession, model, ref_id: Optional[int], label: str) -> None:
    """Raise ValidationException when ``ref_id`` is set but no ``model`` row has it."""
    if ref_id is None:
        return
    found = await db.scalar(select(model.id).where(model.id == ref_id))
    if found is None:
        raise ValidationException(f"Unknown {label} id: {ref_id}")
