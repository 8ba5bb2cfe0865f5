"""
Casino routes.
"""

from fastapi import APIRouter, status

from casino_registry.api.deps import CurrentUserDep, PaginationDep, SessionDep
from casino_registry.schemas.casino import CasinoCreate, CasinoResponse, CasinoUpdate
from casino_registry.schemas.common import MessageResponse, Page
from casino_registry.services.casino_service import CasinoService

router = APIRouter(prefix="/casinos", tags=["casinos"])


@router.get("", response_model=Page[CasinoResponse])
def list_casinos(
    current_user: CurrentUserDep,
    session: SessionDep,
    pagination: PaginationDep,
) -> Page[CasinoResponse]:
    casinos, meta = CasinoService(session).get_all(pagination)
    return Page[CasinoResponse](
        data=[CasinoResponse.model_validate(c) for c in casinos],
        pagination=meta,
    )


@router.post("", response_model=CasinoResponse, status_code=status.HTTP_201_CREATED)
def create_casino(
    current_user: CurrentUserDep,
    casino_in: CasinoCreate,
    session: SessionDep,
) -> CasinoResponse:
    """
    Register a casino.

    Raises:
        Conflict: If a casino with the same name exists
    """
    casino = CasinoService(session).create(casino_in, user_id=current_user.id)
    return CasinoResponse.model_validate(casino)


@router.get("/{casino_id}", response_model=CasinoResponse)
def get_casino(current_user: CurrentUserDep, casino_id: str, session: SessionDep) -> CasinoResponse:
    return CasinoResponse.model_validate(CasinoService(session).get(casino_id))


@router.patch("/{casino_id}", response_model=CasinoResponse)
def update_casino(
    current_user: CurrentUserDep,
    casino_id: str,
    casino_in: CasinoUpdate,
    session: SessionDep,
) -> CasinoResponse:
    return CasinoResponse.model_validate(CasinoService(session).update(casino_id, casino_in))


@router.delete("/{casino_id}", response_model=MessageResponse)
def delete_casino(current_user: CurrentUserDep, casino_id: str, session: SessionDep) -> MessageResponse:
    """
    Delete a casino that has no dependent records.

    Raises:
        Conflict: With ``relatedRecords`` counts when anything references the casino
    """
    CasinoService(session).delete(casino_id)
    return MessageResponse(message="Casino deleted successfully")
