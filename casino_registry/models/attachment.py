"""
File attachments. One table per owning record type, sharing the same columns.
"""

from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from casino_registry.models.base import new_id, utc_now


class AttachmentType(str, Enum):
    """Document kind derived from the uploaded file's mime type."""

    PDF = "PDF"
    IMAGE = "Image"
    DOCUMENT = "Document"


class AttachmentBase(SQLModel):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=255)  # Original filename
    type: AttachmentType
    path: str = Field(max_length=1024)  # Location on disk
    created_at: datetime = Field(default_factory=utc_now)


class ClientAttachment(AttachmentBase, table=True):
    __tablename__ = "client_attachments"  # type: ignore

    client_id: str = Field(foreign_key="clients.id", index=True)


class InterdictionAttachment(AttachmentBase, table=True):
    __tablename__ = "interdiction_attachments"  # type: ignore

    interdiction_id: str = Field(foreign_key="interdictions.id", index=True)


class OccurrenceAttachment(AttachmentBase, table=True):
    __tablename__ = "occurrence_attachments"  # type: ignore

    occurrence_id: str = Field(foreign_key="occurrences.id", index=True)
