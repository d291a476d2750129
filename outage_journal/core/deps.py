"""Dependency injection utilities."""

from typing import Callable

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.constants import (
    ADMIN_ROLES,
    EVENT_WRITE_ROLES,
    REFERENCE_WRITE_ROLES,
    Role,
)
from outage_journal.core.database import get_db
from outage_journal.core.exceptions import AuthenticationException, AuthorizationException
from outage_journal.core.security import verify_token
from outage_journal.models.user import User
from outage_journal.services.user import UserService

logger = structlog.get_logger()
security = HTTPBearer(auto_error=False)

__all__ = [
    "get_db",
    "get_current_user",
    "require_roles",
    "require_event_writer",
    "require_reference_writer",
    "require_admin",
]


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> User:
    """Get current authenticated user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("No token provided")

    username = verify_token(credentials.credentials)
    if username is None:
        raise AuthenticationException("Invalid token")

    user_service = UserService(db)
    user = await user_service.get_by_username(username)

    if user is None:
        raise AuthenticationException("User not found")

    return user


def require_roles(*roles: Role) -> Callable:
    """Build a dependency that admits only users holding one of ``roles``."""
    allowed = {Role(role).value for role in roles}

    async def _check_role(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            logger.warning(
                "Role check failed",
                user_id=current_user.id,
                role=current_user.role,
                allowed=sorted(allowed),
            )
            raise AuthorizationException("Insufficient permissions")
        return current_user

    return _check_role


require_event_writer = require_roles(*EVENT_WRITE_ROLES)
require_reference_writer = require_roles(*REFERENCE_WRITE_ROLES)
require_admin = require_roles(*ADMIN_ROLES)
