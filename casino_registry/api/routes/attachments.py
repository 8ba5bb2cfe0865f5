"""
Attachment sub-routes shared by clients, interdictions and occurrences.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, UploadFile, status
from fastapi.responses import FileResponse

from casino_registry.api.deps import CurrentUserDep, FileStorageDep, SessionDep
from casino_registry.api.payload import uploaded_files
from casino_registry.core.errors import NotFound
from casino_registry.schemas.common import AttachmentResponse, MessageResponse
from casino_registry.services.attachment_service import AttachmentOwner, AttachmentService


def add_attachment_routes(router: APIRouter, owner: AttachmentOwner) -> None:
    """
    Register add/list/download/delete attachment routes on ``router``.

    Args:
        router: Router of the owning resource
        owner: Attachment table configuration for the resource
    """

    def service(session: SessionDep, storage: FileStorageDep) -> AttachmentService:
        return AttachmentService(session, storage, owner)

    ServiceDep = Annotated[AttachmentService, Depends(service)]
    base = "/{owner_id}/attachments"

    @router.post(
        base,
        response_model=List[AttachmentResponse],
        status_code=status.HTTP_201_CREATED,
        summary=f"Add {owner.label.lower()} attachments",
    )
    def add_attachments(
        current_user: CurrentUserDep,
        owner_id: str,
        files: Annotated[List[UploadFile], Depends(uploaded_files)],
        attachments: ServiceDep,
    ) -> List[AttachmentResponse]:
        added = attachments.add(owner_id, files)
        return [AttachmentResponse.model_validate(a) for a in added]

    @router.get(
        base,
        response_model=List[AttachmentResponse],
        summary=f"List {owner.label.lower()} attachments",
    )
    def list_attachments(
        current_user: CurrentUserDep,
        owner_id: str,
        attachments: ServiceDep,
    ) -> List[AttachmentResponse]:
        return [AttachmentResponse.model_validate(a) for a in attachments.get_all(owner_id)]

    @router.get(
        f"{base}/{{attachment_id}}/download",
        response_class=FileResponse,
        summary=f"Download a {owner.label.lower()} attachment",
    )
    def download_attachment(
        current_user: CurrentUserDep,
        owner_id: str,
        attachment_id: str,
        attachments: ServiceDep,
        storage: FileStorageDep,
    ) -> FileResponse:
        attachment = attachments.get(owner_id, attachment_id)
        path = getattr(attachment, "path")
        if not storage.exists(path):
            raise NotFound("Attachment file not found")
        return FileResponse(path, filename=getattr(attachment, "name"))

    @router.delete(
        f"{base}/{{attachment_id}}",
        response_model=MessageResponse,
        summary=f"Delete a {owner.label.lower()} attachment",
    )
    def delete_attachment(
        current_user: CurrentUserDep,
        owner_id: str,
        attachment_id: str,
        attachments: ServiceDep,
    ) -> MessageResponse:
        attachments.delete(owner_id, attachment_id)
        return MessageResponse(message="Attachment deleted successfully")
