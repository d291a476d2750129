"""Substation service."""

from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from outage_journal.core.exceptions import NotFoundException
from outage_journal.models.substation import Substation
from outage_journal.schemas.substation import SubstationCreate, SubstationUpdate
from outage_journal.services.cascade import CascadeService

logger = structlog.get_logger()


class SubstationService:

    @staticmethod
    async def get_substations(db: AsyncSession) -> List[Substation]:
        result = await db.execute(
            select(Substation).options(selectinload(Substation.cells)).order_by(Substation.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_substation(db: AsyncSession, substation_id: int) -> Optional[Substation]:
        result = await db.execute(
            select(Substation)
            .options(selectinload(Substation.cells))
            .where(Substation.id == substation_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_substation(db: AsyncSession, substation: SubstationCreate) -> Substation:
        db_substation = Substation(**substation.model_dump())
        db.add(db_substation)
        await db.commit()
        logger.info("Substation created", substation_id=db_substation.id, name=db_substation.name)
        return await SubstationService.get_substation(db, db_substation.id)

    @staticmethod
    async def update_substation(
        db: AsyncSession,
        substation_id: int,
        substation_update: SubstationUpdate
    ) -> Substation:
        db_substation = await SubstationService.get_substation(db, substation_id)
        if not db_substation:
            raise NotFoundException("Substation not found")

        update_data = substation_update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_substation, field, value)

        await db.commit()
        logger.info("Substation updated", substation_id=substation_id, fields=sorted(update_data))
        return await SubstationService.get_substation(db, substation_id)

    @staticmethod
    async def delete_substation(db: AsyncSession, substation_id: int) -> None:
        await CascadeService.delete_substation(db, substation_id)
