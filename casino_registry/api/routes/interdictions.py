"""
Interdiction routes, including approval and rejection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from casino_registry.api.deps import CurrentUserDep, FileStorageDep, PaginationDep, SessionDep
from casino_registry.api.payload import Payload, payload_parser
from casino_registry.api.routes.attachments import add_attachment_routes
from casino_registry.models.interdiction import InterdictionStatus
from casino_registry.schemas.common import CascadeDeleteResponse, Page
from casino_registry.schemas.interdiction import (
    InterdictionCreate,
    InterdictionResponse,
    InterdictionUpdate,
)
from casino_registry.services.attachment_service import INTERDICTION_ATTACHMENTS
from casino_registry.services.interdiction_service import InterdictionService

router = APIRouter(prefix="/interdictions", tags=["interdictions"])

InterdictionPayload = Annotated[
    Payload[InterdictionCreate], Depends(payload_parser(InterdictionCreate))
]


def get_service(session: SessionDep, storage: FileStorageDep) -> InterdictionService:
    return InterdictionService(session, storage)


ServiceDep = Annotated[InterdictionService, Depends(get_service)]


@router.get("", response_model=Page[InterdictionResponse])
def list_interdictions(
    current_user: CurrentUserDep,
    service: ServiceDep,
    pagination: PaginationDep,
) -> Page[InterdictionResponse]:
    interdictions, meta = service.get_all(pagination)
    return Page[InterdictionResponse](
        data=[InterdictionResponse.model_validate(i) for i in interdictions],
        pagination=meta,
    )


@router.post("", response_model=InterdictionResponse, status_code=status.HTTP_201_CREATED)
def create_interdiction(
    current_user: CurrentUserDep,
    payload: InterdictionPayload,
    service: ServiceDep,
) -> InterdictionResponse:
    """
    Register an interdiction, optionally with supporting documents as ``files``.

    Raises:
        NotFound: If the client or casino does not exist
        Conflict: If the client already has an interdiction for the casino
    """
    interdiction = service.create(payload.data, user_id=current_user.id, files=payload.files)
    return InterdictionResponse.model_validate(interdiction)


@router.get("/{interdiction_id}", response_model=InterdictionResponse)
def get_interdiction(
    current_user: CurrentUserDep,
    interdiction_id: str,
    service: ServiceDep,
) -> InterdictionResponse:
    return InterdictionResponse.model_validate(service.get(interdiction_id))


@router.patch("/{interdiction_id}", response_model=InterdictionResponse)
def update_interdiction(
    current_user: CurrentUserDep,
    interdiction_id: str,
    interdiction_in: InterdictionUpdate,
    service: ServiceDep,
) -> InterdictionResponse:
    return InterdictionResponse.model_validate(service.update(interdiction_id, interdiction_in))


@router.post("/{interdiction_id}/approve", response_model=InterdictionResponse)
def approve_interdiction(
    current_user: CurrentUserDep,
    interdiction_id: str,
    service: ServiceDep,
) -> InterdictionResponse:
    interdiction = service.set_status(interdiction_id, InterdictionStatus.APPROVED)
    return InterdictionResponse.model_validate(interdiction)


@router.post("/{interdiction_id}/reject", response_model=InterdictionResponse)
def reject_interdiction(
    current_user: CurrentUserDep,
    interdiction_id: str,
    service: ServiceDep,
) -> InterdictionResponse:
    interdiction = service.set_status(interdiction_id, InterdictionStatus.REJECTED)
    return InterdictionResponse.model_validate(interdiction)


@router.delete("/{interdiction_id}", response_model=CascadeDeleteResponse)
def delete_interdiction(
    current_user: CurrentUserDep,
    interdiction_id: str,
    service: ServiceDep,
) -> CascadeDeleteResponse:
    result = service.delete(interdiction_id)
    return CascadeDeleteResponse(
        message="Interdiction deleted successfully", deleted=dict(result.counts)
    )


add_attachment_routes(router, INTERDICTION_ATTACHMENTS)
