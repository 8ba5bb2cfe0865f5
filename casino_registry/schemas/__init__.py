"""Pydantic schemas for request/response validation."""

from casino_registry.schemas.casino import CasinoCreate, CasinoResponse, CasinoUpdate, RelatedRecords
from casino_registry.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from casino_registry.schemas.common import (
    AttachmentResponse,
    CascadeDeleteResponse,
    MessageResponse,
    Page,
    PaginationMeta,
    PaginationParams,
    RefSummary,
)
from casino_registry.schemas.interdiction import (
    InterdictionCreate,
    InterdictionResponse,
    InterdictionUpdate,
)
from casino_registry.schemas.occurrence import OccurrenceCreate, OccurrenceResponse, OccurrenceUpdate
from casino_registry.schemas.session import LoginRequest, SessionResponse
from casino_registry.schemas.tax import (
    SpecialTaxCreate,
    SpecialTaxResponse,
    SpecialTaxUpdate,
    StampTaxCreate,
    StampTaxResponse,
    StampTaxUpdate,
    TaxFilter,
)
from casino_registry.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from casino_registry.schemas.user import (
    UserCreate,
    UserFilter,
    UserRegister,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AttachmentResponse",
    "CascadeDeleteResponse",
    "CasinoCreate",
    "CasinoResponse",
    "CasinoUpdate",
    "ClientCreate",
    "ClientResponse",
    "ClientUpdate",
    "InterdictionCreate",
    "InterdictionResponse",
    "InterdictionUpdate",
    "LoginRequest",
    "MessageResponse",
    "OccurrenceCreate",
    "OccurrenceResponse",
    "OccurrenceUpdate",
    "Page",
    "PaginationMeta",
    "PaginationParams",
    "RefSummary",
    "RelatedRecords",
    "SessionResponse",
    "SpecialTaxCreate",
    "SpecialTaxResponse",
    "SpecialTaxUpdate",
    "StampTaxCreate",
    "StampTaxResponse",
    "StampTaxUpdate",
    "TaxFilter",
    "TransactionCreate",
    "TransactionResponse",
    "TransactionUpdate",
    "UserCreate",
    "UserFilter",
    "UserRegister",
    "UserResponse",
    "UserUpdate",
]
