"""
Interdiction service. A client has at most one interdiction per casino.
"""

from typing import List, Optional, Sequence, Tuple

from fastapi import UploadFile
from sqlmodel import Session, col, select

from casino_registry.core.errors import Conflict, ValidationFailed
from casino_registry.core.logging import get_logger
from casino_registry.core.security import as_utc, utcnow
from casino_registry.models import Casino, Client, Interdiction, InterdictionStatus
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.schemas.interdiction import InterdictionCreate, InterdictionUpdate
from casino_registry.services.attachment_service import (
    INTERDICTION_ATTACHMENTS,
    AttachmentService,
)
from casino_registry.services.cascade import CascadeResult, delete_with_dependents
from casino_registry.services.file_storage_service import FileStorageService
from casino_registry.services.lookup import get_or_404
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)


class InterdictionService:
    """Service for interdictions and their attachments."""

    def __init__(self, session: Session, storage: FileStorageService):
        self.session = session
        self.storage = storage
        self.attachments = AttachmentService(session, storage, INTERDICTION_ATTACHMENTS)

    def find_existing(self, client_id: str, casino_id: str) -> Optional[Interdiction]:
        statement = select(Interdiction).where(
            Interdiction.client_id == client_id,
            Interdiction.casino_id == casino_id,
        )
        return self.session.exec(statement).first()

    def get(self, interdiction_id: str) -> Interdiction:
        return get_or_404(self.session, Interdiction, interdiction_id, "Interdiction")

    def get_all(self, params: PaginationParams) -> Tuple[List[Interdiction], PaginationMeta]:
        statement = select(Interdiction).order_by(col(Interdiction.created_at).desc())
        return paginate(self.session, statement, params)

    def create(
        self,
        interdiction_in: InterdictionCreate,
        user_id: str,
        files: Sequence[UploadFile] = (),
    ) -> Interdiction:
        """
        Register an interdiction, optionally with attachments.

        Raises:
            NotFound: If the casino or client does not exist
            Conflict: If the client already has an interdiction for the casino
        """
        get_or_404(self.session, Casino, interdiction_in.casino_id, "Casino")
        get_or_404(self.session, Client, interdiction_in.client_id, "Client")
        if self.find_existing(interdiction_in.client_id, interdiction_in.casino_id):
            raise Conflict("Client already has an interdiction")

        interdiction = Interdiction(**interdiction_in.model_dump(), user_id=user_id)
        self.session.add(interdiction)
        self.session.flush()

        staged = self.attachments.stage(interdiction.id, files)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            self.attachments.discard(staged)
            raise
        self.session.refresh(interdiction)
        logger.info(f"Interdiction created: {interdiction.id}")
        return interdiction

    def update(self, interdiction_id: str, interdiction_in: InterdictionUpdate) -> Interdiction:
        interdiction = self.get(interdiction_id)
        changes = interdiction_in.model_dump(exclude_unset=True, exclude_none=True)

        client_id = changes.get("client_id", interdiction.client_id)
        casino_id = changes.get("casino_id", interdiction.casino_id)
        if "casino_id" in changes:
            get_or_404(self.session, Casino, casino_id, "Casino")
        if "client_id" in changes:
            get_or_404(self.session, Client, client_id, "Client")
        if "client_id" in changes or "casino_id" in changes:
            existing = self.find_existing(client_id, casino_id)
            if existing and existing.id != interdiction.id:
                raise Conflict("Client already has an interdiction")

        start_date = changes.get("start_date", interdiction.start_date)
        end_date = changes.get("end_date", interdiction.end_date)
        if start_date and end_date and as_utc(end_date) < as_utc(start_date):
            raise ValidationFailed(
                details=[{"field": "endDate", "message": "endDate must not be before startDate"}]
            )

        for key, value in changes.items():
            setattr(interdiction, key, value)
        interdiction.updated_at = utcnow()

        self.session.add(interdiction)
        self.session.commit()
        self.session.refresh(interdiction)
        return interdiction

    def set_status(self, interdiction_id: str, status: InterdictionStatus) -> Interdiction:
        """Move an interdiction to approved or rejected."""
        interdiction = self.get(interdiction_id)
        interdiction.status = status
        interdiction.updated_at = utcnow()
        self.session.add(interdiction)
        self.session.commit()
        self.session.refresh(interdiction)
        logger.info(f"Interdiction {interdiction_id} marked {status.value}")
        return interdiction

    def delete(self, interdiction_id: str) -> CascadeResult:
        self.get(interdiction_id)
        return delete_with_dependents(self.session, Interdiction, interdiction_id, self.storage)
