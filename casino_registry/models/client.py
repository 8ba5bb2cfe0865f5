"""
Casino clients identified by an official document.
"""

from enum import Enum
from typing import List, Optional

from sqlmodel import Field, Relationship

from casino_registry.models.base import READ_ONLY, AuditedMixin, new_id


class ClientIDType(str, Enum):
    """Identity document kinds accepted for a client."""

    BI = "BI"
    DIR = "Dir"
    DRIVING_LICENSE = "driving_license"
    PASSPORT = "passport"


class Client(AuditedMixin, table=True):
    __tablename__ = "clients"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)
    id_type: ClientIDType
    id_number: str = Field(unique=True, index=True, max_length=32)
    casino_id: str = Field(foreign_key="casinos.id", index=True)

    casino: Optional["Casino"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    user: Optional["User"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    attachments: List["ClientAttachment"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
