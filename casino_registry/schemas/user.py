"""
User schemas for API request/response validation.
Separates internal models from API contracts using Pydantic.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from casino_registry.models.user import UserRole, UserStatus
from casino_registry.schemas.common import APIModel


class UserBase(APIModel):
    """Base user schema with common fields."""

    name: str = Field(min_length=3, max_length=255)
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user creation by an authenticated user."""

    password: str = Field(min_length=6, max_length=72)
    role: UserRole = UserRole.TECHNICIAN
    status: UserStatus = UserStatus.ACTIVE


class UserRegister(UserBase):
    """Schema for public self-registration; role and status are not client-controlled."""

    password: str = Field(min_length=6, max_length=72)


class UserUpdate(APIModel):
    """Partial update; a new password is re-hashed."""

    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None


class UserResponse(UserBase):
    """
    Schema for user data in API responses.
    Excludes sensitive information like hashed_password.
    """

    id: str
    role: UserRole
    status: UserStatus
    last_login: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserFilter(APIModel):
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
