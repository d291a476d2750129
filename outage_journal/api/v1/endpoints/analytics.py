"""Dashboard analytics endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db
from outage_journal.models.user import User
from outage_journal.schemas.analytics import AnalyticsResponse
from outage_journal.services.analytics import AnalyticsService

router = APIRouter()


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Category, asset, type and timeline breakdowns plus the hazardous objects list."""
    return await AnalyticsService(db).get_dashboard()
