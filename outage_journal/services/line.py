"""Line (feeder) service."""

from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from outage_journal.core.exceptions import NotFoundException, ValidationException
from outage_journal.models.line import Line
from outage_journal.models.substation import Cell
from outage_journal.models.tp import Tp
from outage_journal.schemas.line import LineCreate, LineUpdate
from outage_journal.services.cascade import CascadeService
from outage_journal.services.lookups import require_reference

logger = structlog.get_logger()

# (cell field, tp field) pairs; a line has at most one source of each pair set
_SOURCE_PAIRS = (
    ("source_cell_id", "source_tp_id"),
    ("normal_source_cell_id", "normal_source_tp_id"),
)


async def _check_sources(db: AsyncSession, data: dict) -> None:
    for cell_field, tp_field in _SOURCE_PAIRS:
        await require_reference(db, Cell, data.get(cell_field), "cell")
        await require_reference(db, Tp, data.get(tp_field), "TP")


class LineService:

    @staticmethod
    async def get_lines(db: AsyncSession) -> List[Line]:
        result = await db.execute(select(Line).order_by(Line.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_line(db: AsyncSession, line_id: int) -> Optional[Line]:
        result = await db.execute(select(Line).where(Line.id == line_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_line(db: AsyncSession, line: LineCreate) -> Line:
        data = line.model_dump()
        # Without an explicit normal source the current one is the normal one
        if data["normal_source_cell_id"] is None and data["normal_source_tp_id"] is None:
            data["normal_source_cell_id"] = data["source_cell_id"]
            data["normal_source_tp_id"] = data["source_tp_id"]
        await _check_sources(db, data)

        db_line = Line(**data)
        db.add(db_line)
        await db.commit()
        await db.refresh(db_line)
        logger.info("Line created", line_id=db_line.id, name=db_line.name)
        return db_line

    @staticmethod
    async def update_line(db: AsyncSession, line_id: int, line_update: LineUpdate) -> Line:
        db_line = await LineService.get_line(db, line_id)
        if not db_line:
            raise NotFoundException("Line not found")

        update_data = line_update.model_dump(exclude_unset=True)
        for cell_field, tp_field in _SOURCE_PAIRS:
            if update_data.get(cell_field) is not None and update_data.get(tp_field) is not None:
                raise ValidationException("A line can be sourced from a cell or a TP, not both")
            # Choosing one kind of source drops the other
            if update_data.get(cell_field) is not None:
                update_data[tp_field] = None
            elif update_data.get(tp_field) is not None:
                update_data[cell_field] = None
        await _check_sources(db, update_data)

        for field, value in update_data.items():
            setattr(db_line, field, value)

        await db.commit()
        await db.refresh(db_line)
        logger.info("Line updated", line_id=line_id)
        return db_line

    @staticmethod
    async def delete_line(db: AsyncSession, line_id: int) -> None:
        await CascadeService.delete_line(db, line_id)
