"""
Attachment metadata for clients, interdictions and occurrences.
"""

from dataclasses import dataclass
from typing import List, Sequence, Type

from fastapi import UploadFile
from sqlmodel import Session, SQLModel, col, select

from casino_registry.core.errors import NotFound, ValidationFailed
from casino_registry.core.logging import get_logger
from casino_registry.models import (
    AttachmentType,
    Client,
    ClientAttachment,
    Interdiction,
    InterdictionAttachment,
    Occurrence,
    OccurrenceAttachment,
)
from casino_registry.services.file_storage_service import FileStorageService

logger = get_logger(__name__)


def classify_mime_type(mime_type: str | None) -> AttachmentType:
    """PDF if the mime type mentions pdf, Image if it mentions image, otherwise Document."""
    mime_type = (mime_type or "").lower()
    if "pdf" in mime_type:
        return AttachmentType.PDF
    if "image" in mime_type:
        return AttachmentType.IMAGE
    return AttachmentType.DOCUMENT


@dataclass(frozen=True)
class AttachmentOwner:
    """How one record type links to its attachment table."""

    label: str
    model: Type[SQLModel]
    attachment_model: Type[SQLModel]
    foreign_key: str
    directory: str


CLIENT_ATTACHMENTS = AttachmentOwner("Client", Client, ClientAttachment, "client_id", "clients")
INTERDICTION_ATTACHMENTS = AttachmentOwner(
    "Interdiction", Interdiction, InterdictionAttachment, "interdiction_id", "interdictions"
)
OCCURRENCE_ATTACHMENTS = AttachmentOwner(
    "Occurrence", Occurrence, OccurrenceAttachment, "occurrence_id", "occurrences"
)


class AttachmentService:
    """Stores uploads on disk and keeps their metadata rows in step."""

    def __init__(self, session: Session, storage: FileStorageService, owner: AttachmentOwner):
        self.session = session
        self.storage = storage
        self.owner = owner

    def _require_owner(self, owner_id: str) -> SQLModel:
        record = self.session.get(self.owner.model, owner_id)
        if record is None:
            raise NotFound(f"{self.owner.label} not found")
        return record

    def stage(self, owner_id: str, files: Sequence[UploadFile]) -> List[SQLModel]:
        """
        Save files to disk and add their rows to the session without committing.

        Lets a record and its first attachments be committed together. If saving
        fails part way, files already written are removed.
        """
        staged: List[SQLModel] = []
        try:
            for upload in files:
                path = self.storage.save_uploaded_file(upload, self.owner.directory, owner_id)
                attachment = self.owner.attachment_model(
                    name=upload.filename or "upload",
                    type=classify_mime_type(upload.content_type),
                    path=path,
                    **{self.owner.foreign_key: owner_id},
                )
                self.session.add(attachment)
                staged.append(attachment)
        except Exception:
            self.discard(staged)
            raise
        return staged

    def discard(self, staged: Sequence[SQLModel]) -> None:
        """Remove files written by ``stage`` when the surrounding transaction fails."""
        self.storage.delete_files(getattr(a, "path") for a in staged)

    def add(self, owner_id: str, files: Sequence[UploadFile]) -> List[SQLModel]:
        """Attach files to an existing record."""
        if not files:
            raise ValidationFailed("No files provided")
        self._require_owner(owner_id)
        staged = self.stage(owner_id, files)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            self.discard(staged)
            raise
        for attachment in staged:
            self.session.refresh(attachment)
        logger.info(f"Added {len(staged)} attachment(s) to {self.owner.label.lower()} {owner_id}")
        return staged

    def get_all(self, owner_id: str) -> List[SQLModel]:
        self._require_owner(owner_id)
        model = self.owner.attachment_model
        statement = (
            select(model)
            .where(col(getattr(model, self.owner.foreign_key)) == owner_id)
            .order_by(col(getattr(model, "created_at")))
        )
        return list(self.session.exec(statement).all())

    def get(self, owner_id: str, attachment_id: str) -> SQLModel:
        attachment = self.session.get(self.owner.attachment_model, attachment_id)
        if attachment is None or getattr(attachment, self.owner.foreign_key) != owner_id:
            raise NotFound("Attachment not found")
        return attachment

    def delete(self, owner_id: str, attachment_id: str) -> None:
        self._require_owner(owner_id)
        attachment = self.get(owner_id, attachment_id)
        path = getattr(attachment, "path")
        self.session.delete(attachment)
        self.session.commit()
        self.storage.delete_file(path)
        logger.info(f"Deleted attachment {attachment_id} of {self.owner.label.lower()} {owner_id}")
