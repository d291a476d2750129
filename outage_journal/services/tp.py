"""Transformer point service."""

from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from outage_journal.core.exceptions import NotFoundException
from outage_journal.models.line import Line
from outage_journal.models.tp import Tp
from outage_journal.schemas.tp import TpCreate, TpUpdate
from outage_journal.services.cascade import CascadeService
from outage_journal.services.lookups import require_reference

logger = structlog.get_logger()


async def _check_feeders(db: AsyncSession, data: dict) -> None:
    await require_reference(db, Line, data.get("feeder_id"), "feeder")
    await require_reference(db, Line, data.get("normal_feeder_id"), "feeder")


class TpService:

    @staticmethod
    async def get_tps(db: AsyncSession) -> List[Tp]:
        result = await db.execute(select(Tp).order_by(Tp.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_tp(db: AsyncSession, tp_id: int) -> Optional[Tp]:
        result = await db.execute(select(Tp).where(Tp.id == tp_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_tp(db: AsyncSession, tp: TpCreate) -> Tp:
        data = tp.model_dump()
        if data["normal_feeder_id"] is None:
            data["normal_feeder_id"] = data["feeder_id"]
        await _check_feeders(db, data)

        db_tp = Tp(**data)
        db.add(db_tp)
        await db.commit()
        await db.refresh(db_tp)
        logger.info("TP created", tp_id=db_tp.id, name=db_tp.name)
        return db_tp

    @staticmethod
    async def update_tp(db: AsyncSession, tp_id: int, tp_update: TpUpdate) -> Tp:
        db_tp = await TpService.get_tp(db, tp_id)
        if not db_tp:
            raise NotFoundException("TP not found")

        update_data = tp_update.model_dump(exclude_unset=True)
        await _check_feeders(db, update_data)
        for field, value in update_data.items():
            setattr(db_tp, field, value)

        await db.commit()
        await db.refresh(db_tp)
        logger.info("TP updated", tp_id=tp_id)
        return db_tp

    @staticmethod
    async def delete_tp(db: AsyncSession, tp_id: int) -> None:
        await CascadeService.delete_tp(db, tp_id)
