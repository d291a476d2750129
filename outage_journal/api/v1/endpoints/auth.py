"""Authentication endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.deps import get_current_user, get_db
from outage_journal.core.security import create_access_token
from outage_journal.models.user import User
from outage_journal.schemas.user import LoginUser, Token, UserLogin
from outage_journal.services.user import UserService

logger = structlog.get_logger()

router = APIRouter()


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db),
):
    """Login with JSON data and get access token."""
    user_service = UserService(db)

    user = await user_service.authenticate(login_data.username, login_data.password)

    if not user:
        logger.warning("Login failed", username=login_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(subject=user.username, role=user.role)
    logger.info("User logged in successfully", user_id=user.id, username=user.username)

    return Token(token=access_token, user=LoginUser.model_validate(user))


@router.get("/me", response_model=LoginUser)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """Get current user."""
    return current_user
