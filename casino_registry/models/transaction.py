"""
Money movements reported for a client at a casino.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, Relationship

from casino_registry.models.base import READ_ONLY, AuditedMixin, new_id


class TransactionType(str, Enum):
    BANK = "bank"
    CASH = "cash"


class Transaction(AuditedMixin, table=True):
    __tablename__ = "transactions"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: str = Field(foreign_key="clients.id", index=True)
    casino_id: str = Field(foreign_key="casinos.id", index=True)
    amount: float
    date: datetime
    type: TransactionType

    client: Optional["Client"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    casino: Optional["Casino"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    user: Optional["User"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
