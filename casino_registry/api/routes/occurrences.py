"""
Occurrence routes. Create and update accept multipart forms with files.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from casino_registry.api.deps import CurrentUserDep, FileStorageDep, PaginationDep, SessionDep
from casino_registry.api.payload import Payload, payload_parser
from casino_registry.api.routes.attachments import add_attachment_routes
from casino_registry.schemas.common import CascadeDeleteResponse, Page
from casino_registry.schemas.occurrence import (
    OccurrenceCreate,
    OccurrenceResponse,
    OccurrenceUpdate,
)
from casino_registry.services.attachment_service import OCCURRENCE_ATTACHMENTS
from casino_registry.services.occurrence_service import OccurrenceService

router = APIRouter(prefix="/occurrences", tags=["occurrences"])

CreatePayload = Annotated[Payload[OccurrenceCreate], Depends(payload_parser(OccurrenceCreate))]
UpdatePayload = Annotated[Payload[OccurrenceUpdate], Depends(payload_parser(OccurrenceUpdate))]


def get_service(session: SessionDep, storage: FileStorageDep) -> OccurrenceService:
    return OccurrenceService(session, storage)


ServiceDep = Annotated[OccurrenceService, Depends(get_service)]


@router.get("", response_model=Page[OccurrenceResponse])
def list_occurrences(
    current_user: CurrentUserDep,
    service: ServiceDep,
    pagination: PaginationDep,
) -> Page[OccurrenceResponse]:
    occurrences, meta = service.get_all(pagination)
    return Page[OccurrenceResponse](
        data=[OccurrenceResponse.model_validate(o) for o in occurrences],
        pagination=meta,
    )


@router.post("", response_model=OccurrenceResponse, status_code=status.HTTP_201_CREATED)
def create_occurrence(
    current_user: CurrentUserDep,
    payload: CreatePayload,
    service: ServiceDep,
) -> OccurrenceResponse:
    occurrence = service.create(payload.data, user_id=current_user.id, files=payload.files)
    return OccurrenceResponse.model_validate(occurrence)


@router.get("/{occurrence_id}", response_model=OccurrenceResponse)
def get_occurrence(
    current_user: CurrentUserDep,
    occurrence_id: str,
    service: ServiceDep,
) -> OccurrenceResponse:
    return OccurrenceResponse.model_validate(service.get(occurrence_id))


@router.put("/{occurrence_id}", response_model=OccurrenceResponse)
def update_occurrence(
    current_user: CurrentUserDep,
    occurrence_id: str,
    payload: UpdatePayload,
    service: ServiceDep,
) -> OccurrenceResponse:
    """Update an occurrence; uploaded ``files`` are added to its attachments."""
    occurrence = service.update(occurrence_id, payload.data, files=payload.files)
    return OccurrenceResponse.model_validate(occurrence)


@router.delete("/{occurrence_id}", response_model=CascadeDeleteResponse)
def delete_occurrence(
    current_user: CurrentUserDep,
    occurrence_id: str,
    service: ServiceDep,
) -> CascadeDeleteResponse:
    result = service.delete(occurrence_id)
    return CascadeDeleteResponse(
        message="Occurrence deleted successfully", deleted=dict(result.counts)
    )


add_attachment_routes(router, OCCURRENCE_ATTACHMENTS)
