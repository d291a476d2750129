"""User service for business logic."""

from typing import List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.exceptions import NotFoundException, ValidationException
from outage_journal.core.security import get_password_hash, verify_password
from outage_journal.models.user import User
from outage_journal.schemas.user import UserCreate, UserUpdate

logger = structlog.get_logger()


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_all(self) -> List[User]:
        """Get all users ordered by id."""
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def create(self, user_data: UserCreate) -> User:
        """Create a new user."""
        existing_user = await self.get_by_username(user_data.username)
        if existing_user:
            raise ValidationException("User with this username already exists")

        user = User(
            username=user_data.username,
            hashed_password=get_password_hash(user_data.password),
            name=user_data.name,
            role=user_data.role.value,
        )

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("User created", user_id=user.id, username=user.username, role=user.role)
        return user

    async def update(self, user_id: int, user_data: UserUpdate) -> User:
        """Update a user."""
        user = await self.get_by_id(user_id)
        if not user:
            raise NotFoundException("User not found")

        if user_data.username and user_data.username != user.username:
            existing_user = await self.get_by_username(user_data.username)
            if existing_user:
                raise ValidationException("User with this username already exists")

        update_data = user_data.model_dump(exclude_unset=True)

        password = update_data.pop("password", None)
        if password:
            update_data["hashed_password"] = get_password_hash(password)
        if update_data.get("role") is not None:
            update_data["role"] = update_data["role"].value

        for field, value in update_data.items():
            if value is not None:
                setattr(user, field, value)

        await self.db.commit()
        await self.db.refresh(user)

        logger.info("User updated", user_id=user.id, username=user.username)
        return user

    async def delete(self, user_id: int) -> bool:
        """Delete a user."""
        user = await self.get_by_id(user_id)
        if not user:
            raise NotFoundException("User not found")

        await self.db.delete(user)
        await self.db.commit()

        logger.info("User deleted", user_id=user_id)
        return True

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """Authenticate a user by username and password."""
        user = await self.get_by_username(username)
        if not user:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user
