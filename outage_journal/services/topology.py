"""Topology switching: re-point a TP's feeder or a line's source."""

import json
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.constants import (
    EVENT_TYPE_SWITCHING,
    SWITCHING_REASON_CATEGORY,
    SWITCHING_REASON_SUBCATEGORY,
)
from outage_journal.core.exceptions import NotFoundException
from outage_journal.core.timeutils import storage_now
from outage_journal.models.line import Line
from outage_journal.models.outage_event import EventLine, OutageEvent
from outage_journal.models.substation import Cell
from outage_journal.models.topology_switch import TopologySwitch
from outage_journal.models.tp import Tp
from outage_journal.schemas.topology import TopologySwitchRequest, TopologySwitchResult
from outage_journal.schemas.topology import TopologySwitch as TopologySwitchSchema
from outage_journal.services.lookups import require_reference

logger = structlog.get_logger()


class TopologyService:

    @staticmethod
    async def _switch_tp(db: AsyncSession, request: TopologySwitchRequest) -> Optional[int]:
        tp = await db.get(Tp, request.object_id)
        if tp is None:
            raise NotFoundException("TP not found")
        await require_reference(db, Line, request.to_source_id, "line")

        previous = tp.feeder_id
        tp.feeder_id = request.to_source_id
        return previous

    @staticmethod
    async def _switch_line(db: AsyncSession, request: TopologySwitchRequest) -> Optional[int]:
        line = await db.get(Line, request.object_id)
        if line is None:
            raise NotFoundException("Line not found")

        if request.source_type == "CELL":
            await require_reference(db, Cell, request.to_source_id, "cell")
            previous = line.source_cell_id
            line.source_cell_id = request.to_source_id
            line.source_tp_id = None
        else:
            await require_reference(db, Tp, request.to_source_id, "TP")
            previous = line.source_tp_id
            line.source_tp_id = request.to_source_id
            line.source_cell_id = None
        return previous

    @staticmethod
    async def switch(db: AsyncSession, request: TopologySwitchRequest) -> TopologySwitchResult:
        """Apply the switch and log it as a completed SWITCHING event, atomically."""
        if request.object_type == "TP":
            previous = await TopologyService._switch_tp(db, request)
        else:
            previous = await TopologyService._switch_line(db, request)

        try:
            now = storage_now()
            details = {
                "objectId": request.object_id,
                "objectType": request.object_type,
                "fromId": previous,
                "toId": request.to_source_id,
            }
            event = OutageEvent(
                type=EVENT_TYPE_SWITCHING,
                reason_category=SWITCHING_REASON_CATEGORY,
                reason_subcategory=SWITCHING_REASON_SUBCATEGORY,
                time_start=now,
                time_end=now,
                is_completed=1,
                is_switching=1,
                switching_details=json.dumps(details),
                comment=request.comment or f"Switching of {request.object_type} #{request.object_id}",
                tp_id=request.object_id if request.object_type == "TP" else None,
            )
            db.add(event)
            await db.flush()
            if request.object_type == "LINE":
                db.add(EventLine(event_id=event.id, line_id=request.object_id))

            switch = TopologySwitch(
                object_id=request.object_id,
                object_type=request.object_type,
                source_type=request.source_type if request.object_type == "LINE" else None,
                from_source_id=previous,
                to_source_id=request.to_source_id,
                event_id=event.id,
            )
            db.add(switch)
            await db.commit()
            await db.refresh(switch)
        except Exception as e:
            await db.rollback()
            logger.error(
                "Topology switch failed",
                object_type=request.object_type,
                object_id=request.object_id,
                error=str(e),
            )
            raise

        logger.info(
            "Topology switched",
            object_type=request.object_type,
            object_id=request.object_id,
            from_source_id=previous,
            to_source_id=request.to_source_id,
            event_id=event.id,
        )
        return TopologySwitchResult(
            switch=TopologySwitchSchema.model_validate(switch),
            event_id=event.id,
        )
