"""Topology switching endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_db, require_reference_writer
from outage_journal.models.user import User
from outage_journal.schemas.topology import TopologySwitchRequest, TopologySwitchResult
from outage_journal.services.topology import TopologyService

router = APIRouter()


@router.post("/switch", response_model=TopologySwitchResult)
async def switch_topology(
    request: TopologySwitchRequest,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Re-point a TP or line and record the switch in the journal."""
    return await TopologyService.switch(db, request)
