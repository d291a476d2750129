"""Cell service."""

from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from outage_journal.core.exceptions import NotFoundException
from outage_journal.models.substation import Cell, Substation
from outage_journal.schemas.substation import CellCreate, CellUpdate
from outage_journal.services.cascade import CascadeService

logger = structlog.get_logger()


class CellService:

    @staticmethod
    async def get_cells(db: AsyncSession, substation_id: Optional[int] = None) -> List[Cell]:
        query = select(Cell).order_by(Cell.id)
        if substation_id is not None:
            query = query.where(Cell.substation_id == substation_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_cell(db: AsyncSession, cell_id: int) -> Optional[Cell]:
        result = await db.execute(select(Cell).where(Cell.id == cell_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_cell(db: AsyncSession, cell: CellCreate) -> Cell:
        substation = await db.scalar(select(Substation.id).where(Substation.id == cell.substation_id))
        if substation is None:
            raise NotFoundException("Substation not found")

        db_cell = Cell(**cell.model_dump())
        db.add(db_cell)
        await db.commit()
        await db.refresh(db_cell)
        logger.info("Cell created", cell_id=db_cell.id, substation_id=db_cell.substation_id)
        return db_cell

    @staticmethod
    async def update_cell(db: AsyncSession, cell_id: int, cell_update: CellUpdate) -> Cell:
        db_cell = await CellService.get_cell(db, cell_id)
        if not db_cell:
            raise NotFoundException("Cell not found")

        update_data = cell_update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_cell, field, value)

        await db.commit()
        await db.refresh(db_cell)
        logger.info("Cell updated", cell_id=cell_id)
        return db_cell

    @staticmethod
    async def delete_cell(db: AsyncSession, cell_id: int) -> None:
        await CascadeService.delete_cell(db, cell_id)
