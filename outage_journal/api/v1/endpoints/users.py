"""User management endpoints (admin only)."""

from typing import List

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_db, require_admin
from outage_journal.models.user import User
from outage_journal.schemas.base import SuccessResponse
from outage_journal.schemas.user import UserCreate, UserResponse, UserUpdate
from outage_journal.services.user import UserService

logger = structlog.get_logger()

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def get_users(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Get all users."""
    return await UserService(db).get_all()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a user."""
    return await UserService(db).create(user_data)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a user; an empty password leaves the current one."""
    return await UserService(db).update(user_id, user_data)


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user."""
    await UserService(db).delete(user_id)
    logger.info("User deleted by admin", user_id=user_id, admin_id=current_user.id)
    return SuccessResponse()
