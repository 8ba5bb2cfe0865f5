"""
Occurrence service.
"""

from typing import List, Sequence, Tuple

from fastapi import UploadFile
from sqlmodel import Session, col, select

from casino_registry.core.logging import get_logger
from casino_registry.core.security import utcnow
from casino_registry.models import Casino, Client, Occurrence
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.schemas.occurrence import OccurrenceCreate, OccurrenceUpdate
from casino_registry.services.attachment_service import (
    OCCURRENCE_ATTACHMENTS,
    AttachmentService,
)
from casino_registry.services.cascade import CascadeResult, delete_with_dependents
from casino_registry.services.file_storage_service import FileStorageService
from casino_registry.services.lookup import get_or_404
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)


class OccurrenceService:
    """Service for occurrences and their attachments."""

    def __init__(self, session: Session, storage: FileStorageService):
        self.session = session
        self.storage = storage
        self.attachments = AttachmentService(session, storage, OCCURRENCE_ATTACHMENTS)

    def get(self, occurrence_id: str) -> Occurrence:
        return get_or_404(self.session, Occurrence, occurrence_id, "Occurrence")

    def get_all(self, params: PaginationParams) -> Tuple[List[Occurrence], PaginationMeta]:
        statement = select(Occurrence).order_by(col(Occurrence.created_at).desc())
        return paginate(self.session, statement, params)

    def _commit_with(self, occurrence: Occurrence, files: Sequence[UploadFile]) -> Occurrence:
        self.session.add(occurrence)
        self.session.flush()
        staged = self.attachments.stage(occurrence.id, files)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            self.attachments.discard(staged)
            raise
        self.session.refresh(occurrence)
        return occurrence

    def create(
        self,
        occurrence_in: OccurrenceCreate,
        user_id: str,
        files: Sequence[UploadFile] = (),
    ) -> Occurrence:
        """
        Record an occurrence, optionally with attachments.

        Raises:
            NotFound: If the client or casino does not exist
        """
        get_or_404(self.session, Client, occurrence_in.client_id, "Client")
        get_or_404(self.session, Casino, occurrence_in.casino_id, "Casino")

        occurrence = Occurrence(**occurrence_in.model_dump(), user_id=user_id)
        occurrence = self._commit_with(occurrence, files)
        logger.info(f"Occurrence created: {occurrence.id}")
        return occurrence

    def update(
        self,
        occurrence_id: str,
        occurrence_in: OccurrenceUpdate,
        files: Sequence[UploadFile] = (),
    ) -> Occurrence:
        """Update fields and append any newly uploaded files."""
        occurrence = self.get(occurrence_id)
        changes = occurrence_in.model_dump(exclude_unset=True, exclude_none=True)

        if "client_id" in changes:
            get_or_404(self.session, Client, changes["client_id"], "Client")
        if "casino_id" in changes:
            get_or_404(self.session, Casino, changes["casino_id"], "Casino")

        for key, value in changes.items():
            setattr(occurrence, key, value)
        occurrence.updated_at = utcnow()
        return self._commit_with(occurrence, files)

    def delete(self, occurrence_id: str) -> CascadeResult:
        self.get(occurrence_id)
        return delete_with_dependents(self.session, Occurrence, occurrence_id, self.storage)
