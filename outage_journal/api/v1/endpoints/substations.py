"""Substation endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db, require_reference_writer
from outage_journal.models.user import User
from outage_journal.schemas.base import SuccessResponse
from outage_journal.schemas.substation import Substation, SubstationCreate, SubstationUpdate
from outage_journal.services.substation import SubstationService

router = APIRouter()


@router.get("", response_model=List[Substation])
async def get_substations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get all substations with their cells"""
    return await SubstationService.get_substations(db)


@router.get("/{substation_id}", response_model=Substation)
async def get_substation(
    substation_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific substation by ID"""
    substation = await SubstationService.get_substation(db, substation_id)
    if not substation:
        raise HTTPException(status_code=404, detail="Substation not found")
    return substation


@router.post("", response_model=Substation, status_code=201)
async def create_substation(
    substation: SubstationCreate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Create a new substation"""
    return await SubstationService.create_substation(db, substation)


@router.put("/{substation_id}", response_model=Substation)
async def update_substation(
    substation_id: int,
    substation_update: SubstationUpdate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Update a substation"""
    return await SubstationService.update_substation(db, substation_id, substation_update)


@router.delete("/{substation_id}", response_model=SuccessResponse)
async def delete_substation(
    substation_id: int,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Delete a substation together with its cells and their events"""
    await SubstationService.delete_substation(db, substation_id)
    return SuccessResponse()
