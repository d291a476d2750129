"""User schemas for request/response validation."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from outage_journal.core.constants import Role
from outage_journal.schemas.base import CamelModel


class UserBase(CamelModel):
    """Base user schema."""
    username: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.READER


class UserCreate(UserBase):
    """Schema for creating a user."""
    password: str = Field(..., min_length=1, max_length=100)


class UserUpdate(CamelModel):
    """Schema for updating a user. A blank password keeps the current one."""
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    password: Optional[str] = Field(None, max_length=100)

    @field_validator("password", mode="before")
    @classmethod
    def blank_password(cls, v):
        return None if v == "" else v


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    created_at: Optional[datetime] = None


class UserLogin(CamelModel):
    """Schema for user login."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginUser(CamelModel):
    id: int
    username: str
    name: str
    role: Role


class Token(CamelModel):
    """Schema for the login response."""
    token: str
    token_type: str = "bearer"
    user: LoginUser
