"""Cell endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db, require_reference_writer
from outage_journal.models.user import User
from outage_journal.schemas.base import SuccessResponse
from outage_journal.schemas.substation import Cell, CellCreate, CellUpdate
from outage_journal.services.cell import CellService

router = APIRouter()


@router.get("", response_model=List[Cell])
async def get_cells(
    substation_id: Optional[int] = Query(None, alias="substationId"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get cells, optionally of one substation"""
    return await CellService.get_cells(db, substation_id)


@router.get("/{cell_id}", response_model=Cell)
async def get_cell(
    cell_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    cell = await CellService.get_cell(db, cell_id)
    if not cell:
        raise HTTPException(status_code=404, detail="Cell not found")
    return cell


@router.post("", response_model=Cell, status_code=201)
async def create_cell(
    cell: CellCreate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    return await CellService.create_cell(db, cell)


@router.put("/{cell_id}", response_model=Cell)
async def update_cell(
    cell_id: int,
    cell_update: CellUpdate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Rename or reclassify a cell; its substation cannot change"""
    return await CellService.update_cell(db, cell_id, cell_update)


@router.delete("/{cell_id}", response_model=SuccessResponse)
async def delete_cell(
    cell_id: int,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    await CellService.delete_cell(db, cell_id)
    return SuccessResponse()
