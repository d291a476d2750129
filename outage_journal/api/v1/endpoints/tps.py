"""Transformer point endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db, require_reference_writer
from outage_journal.models.user import User
from outage_journal.schemas.base import SuccessResponse
from outage_journal.schemas.tp import Tp, TpCreate, TpUpdate
from outage_journal.services.tp import TpService

router = APIRouter()


@router.get("", response_model=List[Tp])
async def get_tps(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await TpService.get_tps(db)


@router.get("/{tp_id}", response_model=Tp)
async def get_tp(
    tp_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    tp = await TpService.get_tp(db, tp_id)
    if not tp:
        raise HTTPException(status_code=404, detail="TP not found")
    return tp


@router.post("", response_model=Tp, status_code=201)
async def create_tp(
    tp: TpCreate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Create a TP; the normal feeder defaults to the current one"""
    return await TpService.create_tp(db, tp)


@router.put("/{tp_id}", response_model=Tp)
async def update_tp(
    tp_id: int,
    tp_update: TpUpdate,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    return await TpService.update_tp(db, tp_id, tp_update)


@router.delete("/{tp_id}", response_model=SuccessResponse)
async def delete_tp(
    tp_id: int,
    current_user: User = Depends(require_reference_writer),
    db: AsyncSession = Depends(get_db),
):
    """Delete a TP and the events recorded against it"""
    await TpService.delete_tp(db, tp_id)
    return SuccessResponse()
