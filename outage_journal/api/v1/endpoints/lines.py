"""Line (feeder) endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db, require_reference_writer
from outage_journal.models.user import User
from outage_journal.schemas.base import SuccessResponse
from outage_journal.schemas.line import Line, LineCreate, LineUpdate
from outage_journal.services.line import LineService

router = APIRouter()


@router.get("", response_model=List[Line])
async def get_lines(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await LineService.get_lines(db)


@router.get("/{line_id}", response_model=Line)
async def get_line(
    line_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    line = await LineService.get_line(db, line_id)
    if not line:
        raise HTTPException(status_code=404, detail="Line not found")
    return line


@router.post("", response_model=Line, status_code=201)
async def create_line(
    line: LineCreate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Create a line; the normal source defaults to the current one"""
    return await LineService.create_line(db, line)


@router.put("/{line_id}", response_model=Line)
async def update_line(
    line_id: int,
    line_update: LineUpdate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    return await LineService.update_line(db, line_id, line_update)


@router.delete("/{line_id}", response_model=SuccessResponse)
async def delete_line(
    line_id: int,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    await LineService.delete_line(db, line_id)
    return SuccessResponse()
