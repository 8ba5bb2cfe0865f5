"""
Incidents involving a client at a casino.
"""

from enum import Enum
from typing import List, Optional

from sqlmodel import Field, Relationship

from casino_registry.models.base import READ_ONLY, AuditedMixin, new_id


class OccurrenceStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"


class Occurrence(AuditedMixin, table=True):
    __tablename__ = "occurrences"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: str = Field(foreign_key="clients.id", index=True)
    casino_id: str = Field(foreign_key="casinos.id", index=True)
    title: str = Field(max_length=255)
    description: str
    date: str = Field(max_length=10)  # dd-mm-yyyy
    hour: str = Field(max_length=5)  # HH:mm
    status: OccurrenceStatus = Field(default=OccurrenceStatus.PENDING)

    client: Optional["Client"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    casino: Optional["Casino"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    attachments: List["OccurrenceAttachment"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
