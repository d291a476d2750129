"""Business logic services package."""

from .outage_event import OutageEventService
from .user import UserService

__all__ = ["OutageEventService", "UserService"]
