"""Outage event service."""

from datetime import datetime
from typing import Iterable, List, Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from outage_journal.core.exceptions import NotFoundException, ValidationException
from outage_journal.core.timeutils import storage_now
from outage_journal.models.line import Line
from outage_journal.models.outage_event import EventLine, EventTp, OutageEvent
from outage_journal.models.substation import Cell, Substation
from outage_journal.models.tp import Tp
from outage_journal.schemas.event_filter import FilteredEvents, FilterState
from outage_journal.schemas.outage_event import OutageEvent as OutageEventSchema
from outage_journal.schemas.outage_event import OutageEventPatch, OutageEventWrite
from outage_journal.services.cascade import CascadeService
from outage_journal.services.event_filter import active_filter_count, filter_events

logger = structlog.get_logger()

_SCALAR_FIELDS = (
    "type",
    "reason_category",
    "reason_subcategory",
    "time_start",
    "time_end",
    "deadline_date",
    "measures_planned",
    "measures_taken",
    "comment",
    "substation_id",
    "cell_id",
    "tp_id",
)


def _event_query():
    return (
        select(OutageEvent)
        .options(
            selectinload(OutageEvent.substation),
            selectinload(OutageEvent.cell),
            selectinload(OutageEvent.tp),
            selectinload(OutageEvent.event_lines).selectinload(EventLine.line),
            selectinload(OutageEvent.event_tps).selectinload(EventTp.tp),
        )
        .execution_options(populate_existing=True)
    )


class OutageEventService:
    """Journal reads and writes; multi-row writes commit once."""

    @staticmethod
    async def list_events(db: AsyncSession) -> List[OutageEventSchema]:
        """All events, newest first, with their assets inlined."""
        result = await db.execute(
            _event_query().order_by(OutageEvent.created_at.desc(), OutageEvent.id.desc())
        )
        return [OutageEventSchema.from_orm_event(event) for event in result.scalars().all()]

    @staticmethod
    async def get_event(db: AsyncSession, event_id: int) -> OutageEventSchema:
        result = await db.execute(_event_query().where(OutageEvent.id == event_id))
        event = result.scalar_one_or_none()
        if event is None:
            raise NotFoundException("Event not found")
        return OutageEventSchema.from_orm_event(event)

    @staticmethod
    async def filter_journal(
        db: AsyncSession, filters: FilterState, now: Optional[datetime] = None
    ) -> FilteredEvents:
        events = await OutageEventService.list_events(db)
        matched = filter_events(events, filters, now=now)
        return FilteredEvents(
            events=matched,
            total=len(events),
            active_filter_count=active_filter_count(filters),
        )

    @staticmethod
    async def _missing(db: AsyncSession, model, ids: Iterable[int]) -> List[int]:
        wanted = set(ids)
        if not wanted:
            return []
        result = await db.execute(select(model.id).where(model.id.in_(wanted)))
        return sorted(wanted - set(result.scalars().all()))

    @staticmethod
    async def _check_references(db: AsyncSession, data: OutageEventWrite) -> None:
        """Reject payloads pointing at assets that do not exist."""
        singles = (
            (Substation, data.substation_id, "substation"),
            (Cell, data.cell_id, "cell"),
            (Tp, data.tp_id, "TP"),
        )
        for model, ref_id, label in singles:
            if ref_id is not None and await OutageEventService._missing(db, model, [ref_id]):
                raise ValidationException(f"Unknown {label} id: {ref_id}")

        missing_lines = await OutageEventService._missing(db, Line, data.line_ids)
        if missing_lines:
            raise ValidationException(f"Unknown line ids: {missing_lines}")
        missing_tps = await OutageEventService._missing(db, Tp, data.tp_ids)
        if missing_tps:
            raise ValidationException(f"Unknown TP ids: {missing_tps}")

    @staticmethod
    def _link(db: AsyncSession, event_id: int, data: OutageEventWrite) -> None:
        db.add_all([EventLine(event_id=event_id, line_id=line_id) for line_id in data.line_ids])
        db.add_all([EventTp(event_id=event_id, tp_id=tp_id) for tp_id in data.tp_ids])

    @staticmethod
    async def create(db: AsyncSession, data: OutageEventWrite) -> OutageEventSchema:
        """Insert an event with its line/TP associations."""
        await OutageEventService._check_references(db, data)
        try:
            event = OutageEvent(
                **{field: getattr(data, field) for field in _SCALAR_FIELDS},
                is_completed=int(data.is_completed),
            )
            db.add(event)
            await db.flush()
            OutageEventService._link(db, event.id, data)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Event create failed", error=str(e))
            raise

        logger.info(
            "Event created",
            event_id=event.id,
            type=event.type,
            lines=len(data.line_ids),
            tps=len(data.tp_ids),
        )
        return await OutageEventService.get_event(db, event.id)

    @staticmethod
    async def replace(db: AsyncSession, event_id: int, data: OutageEventWrite) -> OutageEventSchema:
        """Overwrite every field and rebuild the associations from scratch."""
        event = await db.get(OutageEvent, event_id)
        if event is None:
            raise NotFoundException("Event not found")
        await OutageEventService._check_references(db, data)

        try:
            for field in _SCALAR_FIELDS:
                setattr(event, field, getattr(data, field))
            event.is_completed = int(data.is_completed)

            await db.execute(delete(EventLine).where(EventLine.event_id == event_id))
            await db.execute(delete(EventTp).where(EventTp.event_id == event_id))
            OutageEventService._link(db, event_id, data)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Event replace failed", event_id=event_id, error=str(e))
            raise

        logger.info("Event replaced", event_id=event_id)
        return await OutageEventService.get_event(db, event_id)

    @staticmethod
    async def patch(db: AsyncSession, event_id: int, data: OutageEventPatch) -> OutageEventSchema:
        """Status patch: close stamps ``time_end``, reopen clears it."""
        event = await db.get(OutageEvent, event_id)
        if event is None:
            raise NotFoundException("Event not found")

        updates = {field: getattr(data, field) for field in data.model_fields_set}
        completed = updates.get("is_completed")
        if (
            completed is None
            and not event.is_completed
            and updates.get("time_end") is not None
        ):
            raise ValidationException("timeEnd must be empty while the event is not completed")

        if "measures_taken" in updates:
            event.measures_taken = updates["measures_taken"]
        if "comment" in updates:
            event.comment = updates["comment"]

        if completed is True:
            event.is_completed = 1
            event.time_end = updates.get("time_end") or storage_now()
        elif completed is False:
            event.is_completed = 0
            event.time_end = None
        elif "time_end" in updates:
            event.time_end = updates["time_end"]

        await db.commit()
        logger.info(
            "Event status patched",
            event_id=event_id,
            is_completed=bool(event.is_completed),
            fields=sorted(updates),
        )
        return await OutageEventService.get_event(db, event_id)

    @staticmethod
    async def delete(db: AsyncSession, event_id: int) -> None:
        await CascadeService.delete_event(db, event_id)
