"""Cascading deletes for network assets and events.

Each ``delete_*`` procedure removes a parent row together with every row that
depends on it, enumerating the dependent tables explicitly, and commits once.
Any failure rolls the whole procedure back.
"""

from typing import List, Sequence

import structlog
from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.exceptions import NotFoundException
from outage_journal.models.line import Line
from outage_journal.models.outage_event import EventLine, EventTp, OutageEvent
from outage_journal.models.substation import Cell, Substation
from outage_journal.models.topology_switch import TopologySwitch
from outage_journal.models.tp import Tp

logger = structlog.get_logger()


class CascadeService:

    @staticmethod
    async def _ids(db: AsyncSession, statement) -> List[int]:
        result = await db.execute(statement)
        return list(result.scalars().all())

    @staticmethod
    async def _purge_events(db: AsyncSession, event_ids: Sequence[int]) -> None:
        """Delete events with their line/TP links; switch history keeps its rows."""
        if not event_ids:
            return
        await db.execute(delete(EventLine).where(EventLine.event_id.in_(event_ids)))
        await db.execute(delete(EventTp).where(EventTp.event_id.in_(event_ids)))
        await db.execute(
            update(TopologySwitch)
            .where(TopologySwitch.event_id.in_(event_ids))
            .values(event_id=None)
        )
        await db.execute(delete(OutageEvent).where(OutageEvent.id.in_(event_ids)))

    @staticmethod
    async def _release_cells(db: AsyncSession, cell_ids: Sequence[int]) -> None:
        """Clear line source pointers that reference the given cells."""
        if not cell_ids:
            return
        await db.execute(
            update(Line).where(Line.source_cell_id.in_(cell_ids)).values(source_cell_id=None)
        )
        await db.execute(
            update(Line)
            .where(Line.normal_source_cell_id.in_(cell_ids))
            .values(normal_source_cell_id=None)
        )

    @staticmethod
    async def _release_tp(db: AsyncSession, tp_id: int) -> None:
        await db.execute(update(Line).where(Line.source_tp_id == tp_id).values(source_tp_id=None))
        await db.execute(
            update(Line).where(Line.normal_source_tp_id == tp_id).values(normal_source_tp_id=None)
        )

    @staticmethod
    async def _release_line(db: AsyncSession, line_id: int) -> None:
        await db.execute(update(Tp).where(Tp.feeder_id == line_id).values(feeder_id=None))
        await db.execute(
            update(Tp).where(Tp.normal_feeder_id == line_id).values(normal_feeder_id=None)
        )

    @staticmethod
    async def _require(db: AsyncSession, model, entity_id: int, label: str) -> None:
        found = await db.scalar(select(model.id).where(model.id == entity_id))
        if found is None:
            raise NotFoundException(f"{label} not found")

    @staticmethod
    async def delete_event(db: AsyncSession, event_id: int) -> None:
        await CascadeService._require(db, OutageEvent, event_id, "Event")
        try:
            await CascadeService._purge_events(db, [event_id])
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Event delete failed", event_id=event_id, error=str(e))
            raise
        logger.info("Event deleted", event_id=event_id)

    @staticmethod
    async def delete_substation(db: AsyncSession, substation_id: int) -> None:
        """Remove a substation, its cells and every event referencing either."""
        await CascadeService._require(db, Substation, substation_id, "Substation")
        try:
            cell_ids = await CascadeService._ids(
                db, select(Cell.id).where(Cell.substation_id == substation_id)
            )
            conditions = [OutageEvent.substation_id == substation_id]
            if cell_ids:
                conditions.append(OutageEvent.cell_id.in_(cell_ids))
            event_ids = await CascadeService._ids(db, select(OutageEvent.id).where(or_(*conditions)))

            await CascadeService._purge_events(db, event_ids)
            await CascadeService._release_cells(db, cell_ids)
            await db.execute(delete(Cell).where(Cell.substation_id == substation_id))
            await db.execute(delete(Substation).where(Substation.id == substation_id))
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Substation delete failed", substation_id=substation_id, error=str(e))
            raise

        logger.info(
            "Substation deleted",
            substation_id=substation_id,
            cells=len(cell_ids),
            events=len(event_ids),
        )

    @staticmethod
    async def delete_cell(db: AsyncSession, cell_id: int) -> None:
        await CascadeService._require(db, Cell, cell_id, "Cell")
        try:
            event_ids = await CascadeService._ids(
                db, select(OutageEvent.id).where(OutageEvent.cell_id == cell_id)
            )
            await CascadeService._purge_events(db, event_ids)
            await CascadeService._release_cells(db, [cell_id])
            await db.execute(delete(Cell).where(Cell.id == cell_id))
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Cell delete failed", cell_id=cell_id, error=str(e))
            raise
        logger.info("Cell deleted", cell_id=cell_id, events=len(event_ids))

    @staticmethod
    async def delete_line(db: AsyncSession, line_id: int) -> None:
        """Remove a line; events that touched it lose the association but stay."""
        await CascadeService._require(db, Line, line_id, "Line")
        try:
            await db.execute(delete(EventLine).where(EventLine.line_id == line_id))
            await CascadeService._release_line(db, line_id)
            await db.execute(delete(Line).where(Line.id == line_id))
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Line delete failed", line_id=line_id, error=str(e))
            raise
        logger.info("Line deleted", line_id=line_id)

    @staticmethod
    async def delete_tp(db: AsyncSession, tp_id: int) -> None:
        """Remove a TP with the events recorded against it."""
        await CascadeService._require(db, Tp, tp_id, "TP")
        try:
            event_ids = await CascadeService._ids(
                db, select(OutageEvent.id).where(OutageEvent.tp_id == tp_id)
            )
            await CascadeService._purge_events(db, event_ids)
            await db.execute(delete(EventTp).where(EventTp.tp_id == tp_id))
            await CascadeService._release_tp(db, tp_id)
            await db.execute(delete(Tp).where(Tp.id == tp_id))
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("TP delete failed", tp_id=tp_id, error=str(e))
            raise
        logger.info("TP deleted", tp_id=tp_id, events=len(event_ids))
