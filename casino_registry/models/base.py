"""
Shared column helpers for the registry tables.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


def new_id() -> str:
    """Primary keys are UUID4 strings generated by the service."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    """created_at / updated_at columns shared by the mutable tables."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class AuditedMixin(TimestampMixin):
    """Records created through the API remember the authenticated user."""

    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True)


# Relationships are navigation-only; foreign key columns are always set directly
READ_ONLY = {"viewonly": True}
