"""Report endpoint."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db
from outage_journal.models.user import User
from outage_journal.schemas.report import DateRangePreset, ReportBundle
from outage_journal.services.event_reports import build_report
from outage_journal.services.outage_event import OutageEventService

router = APIRouter()


@router.get("", response_model=ReportBundle)
async def get_reports(
    preset: DateRangePreset = Query("month", description="Date range preset"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Operational, analytical and efficiency reports for a date range preset."""
    events = await OutageEventService.list_events(db)
    return build_report(events, preset)
