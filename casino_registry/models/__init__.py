"""SQLModel table models. Importing this package registers every table."""

from casino_registry.models.attachment import (
    AttachmentType,
    ClientAttachment,
    InterdictionAttachment,
    OccurrenceAttachment,
)
from casino_registry.models.casino import Casino, CasinoLocation
from casino_registry.models.client import Client, ClientIDType
from casino_registry.models.interdiction import (
    Interdiction,
    InterdictionPeriod,
    InterdictionStatus,
    InterdictionType,
)
from casino_registry.models.occurrence import Occurrence, OccurrenceStatus
from casino_registry.models.refresh_token import RefreshToken
from casino_registry.models.tax import SpecialTax, StampTax
from casino_registry.models.transaction import Transaction, TransactionType
from casino_registry.models.user import User, UserRole, UserStatus

__all__ = [
    "AttachmentType",
    "Casino",
    "CasinoLocation",
    "Client",
    "ClientAttachment",
    "ClientIDType",
    "Interdiction",
    "InterdictionAttachment",
    "InterdictionPeriod",
    "InterdictionStatus",
    "InterdictionType",
    "Occurrence",
    "OccurrenceAttachment",
    "OccurrenceStatus",
    "RefreshToken",
    "SpecialTax",
    "StampTax",
    "Transaction",
    "TransactionType",
    "User",
    "UserRole",
    "UserStatus",
]
