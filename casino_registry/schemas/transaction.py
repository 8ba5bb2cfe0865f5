"""
Transaction schemas.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from casino_registry.models.transaction import TransactionType
from casino_registry.schemas.common import APIModel, RefSummary


def check_not_future(value: datetime) -> datetime:
    aware = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if aware > datetime.now(timezone.utc):
        raise ValueError("Date cannot be in the future")
    return value


class TransactionCreate(APIModel):
    client_id: str = Field(min_length=1)
    casino_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    date: datetime
    type: TransactionType

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: datetime) -> datetime:
        return check_not_future(v)


class TransactionUpdate(APIModel):
    client_id: Optional[str] = Field(default=None, min_length=1)
    casino_id: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    date: Optional[datetime] = None
    type: Optional[TransactionType] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return None if v is None else check_not_future(v)


class TransactionResponse(APIModel):
    id: str
    client_id: str
    casino_id: str
    amount: float
    date: datetime
    type: TransactionType
    user_id: Optional[str] = None
    client: Optional[RefSummary] = None
    casino: Optional[RefSummary] = None
    user: Optional[RefSummary] = None
    created_at: datetime
    updated_at: datetime
