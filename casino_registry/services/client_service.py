"""
Client service. Deleting a client removes everything recorded about them.
"""

from typing import List, Optional, Sequence, Tuple

from fastapi import UploadFile
from sqlmodel import Session, col, select

from casino_registry.core.errors import Conflict, ValidationFailed
from casino_registry.core.logging import get_logger
from casino_registry.core.security import utcnow
from casino_registry.models import Casino, Client
from casino_registry.schemas.client import ClientCreate, ClientUpdate, check_id_number
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.services.attachment_service import CLIENT_ATTACHMENTS, AttachmentService
from casino_registry.services.cascade import CascadeResult, delete_with_dependents
from casino_registry.services.file_storage_service import FileStorageService
from casino_registry.services.lookup import get_or_404
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)


class ClientService:
    """Service for casino clients and their attachments."""

    def __init__(self, session: Session, storage: FileStorageService):
        self.session = session
        self.storage = storage
        self.attachments = AttachmentService(session, storage, CLIENT_ATTACHMENTS)

    def get_by_id_number(self, id_number: str) -> Optional[Client]:
        return self.session.exec(select(Client).where(Client.id_number == id_number)).first()

    def get(self, client_id: str) -> Client:
        return get_or_404(self.session, Client, client_id, "Client")

    def get_all(self, params: PaginationParams) -> Tuple[List[Client], PaginationMeta]:
        statement = select(Client).order_by(col(Client.created_at).desc())
        return paginate(self.session, statement, params)

    def create(
        self,
        client_in: ClientCreate,
        user_id: str,
        files: Sequence[UploadFile] = (),
    ) -> Client:
        """
        Create a client, optionally with attachments, in one commit.

        Raises:
            Conflict: If the identity document number is already registered
            NotFound: If the casino does not exist
        """
        if self.get_by_id_number(client_in.id_number):
            raise Conflict("Client already exists")
        get_or_404(self.session, Casino, client_in.casino_id, "Casino")

        client = Client(**client_in.model_dump(), user_id=user_id)
        self.session.add(client)
        self.session.flush()

        staged = self.attachments.stage(client.id, files)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            self.attachments.discard(staged)
            raise
        self.session.refresh(client)
        logger.info(f"Client created: {client.id} with {len(staged)} attachment(s)")
        return client

    def update(self, client_id: str, client_in: ClientUpdate) -> Client:
        """
        Apply a partial update.

        The identity number is re-checked against the resulting id type, so
        changing only ``id_type`` cannot leave an invalid number behind.
        """
        client = self.get(client_id)
        changes = client_in.model_dump(exclude_unset=True, exclude_none=True)

        if "id_type" in changes or "id_number" in changes:
            id_type = changes.get("id_type", client.id_type)
            id_number = changes.get("id_number", client.id_number).strip()
            try:
                changes["id_number"] = check_id_number(id_type, id_number)
            except ValueError as e:
                raise ValidationFailed(details=[{"field": "id_number", "message": str(e)}]) from e
            existing = self.get_by_id_number(changes["id_number"])
            if existing and existing.id != client.id:
                raise Conflict("Another client already uses this identification number")

        if "casino_id" in changes:
            get_or_404(self.session, Casino, changes["casino_id"], "Casino")

        for key, value in changes.items():
            setattr(client, key, value)
        client.updated_at = utcnow()

        self.session.add(client)
        self.session.commit()
        self.session.refresh(client)
        return client

    def delete(self, client_id: str) -> CascadeResult:
        """Delete a client with attachments, transactions, interdictions and occurrences."""
        self.get(client_id)
        return delete_with_dependents(self.session, Client, client_id, self.storage)
