"""
Client routes. Creation accepts JSON or multipart with attachment files.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from casino_registry.api.deps import CurrentUserDep, FileStorageDep, PaginationDep, SessionDep
from casino_registry.api.payload import Payload, payload_parser
from casino_registry.api.routes.attachments import add_attachment_routes
from casino_registry.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from casino_registry.schemas.common import CascadeDeleteResponse, Page
from casino_registry.services.attachment_service import CLIENT_ATTACHMENTS
from casino_registry.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])

ClientPayload = Annotated[Payload[ClientCreate], Depends(payload_parser(ClientCreate))]


@router.get("", response_model=Page[ClientResponse])
def list_clients(
    current_user: CurrentUserDep,
    session: SessionDep,
    storage: FileStorageDep,
    pagination: PaginationDep,
) -> Page[ClientResponse]:
    clients, meta = ClientService(session, storage).get_all(pagination)
    return Page[ClientResponse](
        data=[ClientResponse.model_validate(c) for c in clients],
        pagination=meta,
    )


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    current_user: CurrentUserDep,
    payload: ClientPayload,
    session: SessionDep,
    storage: FileStorageDep,
) -> ClientResponse:
    """
    Register a client, optionally uploading identity documents as ``files``.

    Raises:
        ValidationFailed: Malformed fields (e.g. ``id_number`` not matching ``id_type``)
        NotFound: If the casino does not exist
        Conflict: If the identification number is already registered
    """
    client = ClientService(session, storage).create(
        payload.data, user_id=current_user.id, files=payload.files
    )
    return ClientResponse.model_validate(client)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    current_user: CurrentUserDep,
    client_id: str,
    session: SessionDep,
    storage: FileStorageDep,
) -> ClientResponse:
    return ClientResponse.model_validate(ClientService(session, storage).get(client_id))


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    current_user: CurrentUserDep,
    client_id: str,
    client_in: ClientUpdate,
    session: SessionDep,
    storage: FileStorageDep,
) -> ClientResponse:
    client = ClientService(session, storage).update(client_id, client_in)
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}", response_model=CascadeDeleteResponse)
def delete_client(
    current_user: CurrentUserDep,
    client_id: str,
    session: SessionDep,
    storage: FileStorageDep,
) -> CascadeDeleteResponse:
    """Delete a client and every record and file that belongs to them, all or nothing."""
    result = ClientService(session, storage).delete(client_id)
    return CascadeDeleteResponse(message="Client deleted successfully", deleted=dict(result.counts))


add_attachment_routes(router, CLIENT_ATTACHMENTS)
