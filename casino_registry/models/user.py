"""
User model with role and account status.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from casino_registry.models.base import TimestampMixin, new_id


class UserRole(str, Enum):
    """User role enumeration."""

    ADMIN = "admin"
    MANAGER = "manager"
    TECHNICIAN = "technician"


class UserStatus(str, Enum):
    """Account status; inactive users cannot log in or use their tokens."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class User(TimestampMixin, table=True):
    """
    User account.

    Attributes:
        id: Primary key (UUID string)
        name: Display name
        email: Unique email address (used for login)
        hashed_password: Password hash, never returned by the API
        role: admin, manager or technician
        status: active or inactive
        last_login: Last time the user logged in or made an authenticated request
        created_by: Id of the user who created this account, if any
    """

    __tablename__ = "users"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str
    role: UserRole = Field(default=UserRole.TECHNICIAN)
    status: UserStatus = Field(default=UserStatus.ACTIVE)
    last_login: Optional[datetime] = None
    created_by: Optional[str] = Field(default=None, max_length=36)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
