"""
Transaction routes.
"""

from fastapi import APIRouter, status

from casino_registry.api.deps import CurrentUserDep, PaginationDep, SessionDep
from casino_registry.schemas.common import MessageResponse, Page
from casino_registry.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from casino_registry.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=Page[TransactionResponse])
def list_transactions(
    current_user: CurrentUserDep,
    session: SessionDep,
    pagination: PaginationDep,
) -> Page[TransactionResponse]:
    transactions, meta = TransactionService(session).get_all(pagination)
    return Page[TransactionResponse](
        data=[TransactionResponse.model_validate(t) for t in transactions],
        pagination=meta,
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    current_user: CurrentUserDep,
    transaction_in: TransactionCreate,
    session: SessionDep,
) -> TransactionResponse:
    transaction = TransactionService(session).create(transaction_in, user_id=current_user.id)
    return TransactionResponse.model_validate(transaction)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    current_user: CurrentUserDep,
    transaction_id: str,
    session: SessionDep,
) -> TransactionResponse:
    return TransactionResponse.model_validate(TransactionService(session).get(transaction_id))


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    current_user: CurrentUserDep,
    transaction_id: str,
    transaction_in: TransactionUpdate,
    session: SessionDep,
) -> TransactionResponse:
    transaction = TransactionService(session).update(transaction_id, transaction_in)
    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    current_user: CurrentUserDep,
    transaction_id: str,
    session: SessionDep,
) -> MessageResponse:
    TransactionService(session).delete(transaction_id)
    return MessageResponse(message="Transaction deleted successfully")
