"""Reference data retrieval."""

from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.models.outage_reason import OutageReason
from outage_journal.schemas.line import Line
from outage_journal.schemas.reference import ReferenceData
from outage_journal.schemas.substation import Substation
from outage_journal.schemas.tp import Tp
from outage_journal.services.line import LineService
from outage_journal.services.substation import SubstationService
from outage_journal.services.tp import TpService


def group_reasons(pairs) -> Dict[str, List[str]]:
    """Category -> subcategories, unique and in first-seen order."""
    hierarchy: Dict[str, List[str]] = {}
    for category, subcategory in pairs:
        subcategories = hierarchy.setdefault(category, [])
        if subcategory not in subcategories:
            subcategories.append(subcategory)
    return hierarchy


class ReferenceDataService:

    @staticmethod
    async def get_reasons(db: AsyncSession) -> Dict[str, List[str]]:
        result = await db.execute(
            select(OutageReason.category, OutageReason.subcategory).order_by(OutageReason.id)
        )
        return group_reasons(result.all())

    @staticmethod
    async def get_reference_data(db: AsyncSession) -> ReferenceData:
        substations = await SubstationService.get_substations(db)
        tps = await TpService.get_tps(db)
        lines = await LineService.get_lines(db)
        return ReferenceData(
            substations=[Substation.model_validate(s) for s in substations],
            tps=[Tp.model_validate(t) for t in tps],
            lines=[Line.model_validate(line) for line in lines],
            reasons=await ReferenceDataService.get_reasons(db),
        )
