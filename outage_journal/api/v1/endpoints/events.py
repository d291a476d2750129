"""Outage event endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db, require_event_writer
from outage_journal.models.user import User
from outage_journal.schemas.base import SuccessResponse
from outage_journal.schemas.event_filter import FilteredEvents, FilterState
from outage_journal.schemas.outage_event import (
    OutageEvent,
    OutageEventCreate,
    OutageEventPatch,
    OutageEventReplace,
)
from outage_journal.services.outage_event import OutageEventService

router = APIRouter()


@router.get("", response_model=List[OutageEvent])
async def get_events(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """All events, newest first."""
    return await OutageEventService.list_events(db)


@router.post("/filter", response_model=FilteredEvents)
async def filter_events(
    filters: FilterState,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Apply a journal filter state server-side."""
    return await OutageEventService.filter_journal(db, filters)


@router.get("/{event_id}", response_model=OutageEvent)
async def get_event(
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OutageEventService.get_event(db, event_id)


@router.post("", response_model=OutageEvent, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: OutageEventCreate,
    current_user: User = Depends(require_event_writer),
    db: AsyncSession = Depends(get_db),
):
    """Create an event with its line and TP associations."""
    return await OutageEventService.create(db, event)


@router.put("/{event_id}", response_model=OutageEvent)
async def replace_event(
    event_id: int,
    event: OutageEventReplace,
    current_user: User = Depends(require_event_writer),
    db: AsyncSession = Depends(get_db),
):
    """Replace an event; associations are rebuilt from the payload."""
    return await OutageEventService.replace(db, event_id, event)


@router.patch("/{event_id}", response_model=OutageEvent)
async def patch_event(
    event_id: int,
    patch: OutageEventPatch,
    current_user: User = Depends(require_event_writer),
    db: AsyncSession = Depends(get_db),
):
    """Close, reopen or annotate an event."""
    return await OutageEventService.patch(db, event_id, patch)


@router.delete("/{event_id}", response_model=SuccessResponse)
async def delete_event(
    event_id: int,
    current_user: User = Depends(require_event_writer),
    db: AsyncSession = Depends(get_db),
):
    await OutageEventService.delete(db, event_id)
    return SuccessResponse()
