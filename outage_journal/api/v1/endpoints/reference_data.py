"""Reference data endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db
from outage_journal.models.user import User
from outage_journal.schemas.reference import ReferenceData
from outage_journal.services.reference_data import ReferenceDataService

router = APIRouter()


@router.get("", response_model=ReferenceData)
async def get_reference_data(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Substations with cells, TPs, lines and the reason taxonomy."""
    return await ReferenceDataService.get_reference_data(db)
