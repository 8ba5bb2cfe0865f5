"""
Transaction service.
"""

from typing import List, Tuple

from sqlmodel import Session, col, select

from casino_registry.core.logging import get_logger
from casino_registry.core.security import utcnow
from casino_registry.models import Casino, Client, Transaction
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.schemas.transaction import TransactionCreate, TransactionUpdate
from casino_registry.services.lookup import get_or_404
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)


class TransactionService:
    def __init__(self, session: Session):
        self.session = session

    def get(self, transaction_id: str) -> Transaction:
        return get_or_404(self.session, Transaction, transaction_id, "Transaction")

    def get_all(self, params: PaginationParams) -> Tuple[List[Transaction], PaginationMeta]:
        statement = select(Transaction).order_by(col(Transaction.date).desc())
        return paginate(self.session, statement, params)

    def create(self, transaction_in: TransactionCreate, user_id: str) -> Transaction:
        get_or_404(self.session, Client, transaction_in.client_id, "Client")
        get_or_404(self.session, Casino, transaction_in.casino_id, "Casino")

        transaction = Transaction(**transaction_in.model_dump(), user_id=user_id)
        self.session.add(transaction)
        self.session.commit()
        self.session.refresh(transaction)
        logger.info(f"Transaction created: {transaction.id}")
        return transaction

    def update(self, transaction_id: str, transaction_in: TransactionUpdate) -> Transaction:
        transaction = self.get(transaction_id)
        changes = transaction_in.model_dump(exclude_unset=True, exclude_none=True)

        if "client_id" in changes:
            get_or_404(self.session, Client, changes["client_id"], "Client")
        if "casino_id" in changes:
            get_or_404(self.session, Casino, changes["casino_id"], "Casino")

        for key, value in changes.items():
            setattr(transaction, key, value)
        transaction.updated_at = utcnow()

        self.session.add(transaction)
        self.session.commit()
        self.session.refresh(transaction)
        return transaction

    def delete(self, transaction_id: str) -> None:
        transaction = self.get(transaction_id)
        self.session.delete(transaction)
        self.session.commit()
