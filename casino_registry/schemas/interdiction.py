"""
Interdiction schemas.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from casino_registry.models.interdiction import (
    InterdictionPeriod,
    InterdictionStatus,
    InterdictionType,
)
from casino_registry.schemas.common import APIModel, AttachmentResponse, RefSummary


class InterdictionCreate(APIModel):
    client_id: str = Field(min_length=1)
    casino_id: str = Field(min_length=1)
    type: InterdictionType
    reason: str = Field(min_length=1)
    period: InterdictionPeriod
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: InterdictionStatus = InterdictionStatus.PENDING

    @field_validator("start_date", "end_date")
    @classmethod
    def as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def check_dates(self) -> "InterdictionCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class InterdictionUpdate(APIModel):
    client_id: Optional[str] = Field(default=None, min_length=1)
    casino_id: Optional[str] = Field(default=None, min_length=1)
    type: Optional[InterdictionType] = None
    reason: Optional[str] = Field(default=None, min_length=1)
    period: Optional[InterdictionPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[InterdictionStatus] = None


class InterdictionResponse(APIModel):
    id: str
    client_id: str
    casino_id: str
    type: InterdictionType
    reason: str
    period: InterdictionPeriod
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: InterdictionStatus
    user_id: Optional[str] = None
    client: Optional[RefSummary] = None
    casino: Optional[RefSummary] = None
    user: Optional[RefSummary] = None
    attachments: List[AttachmentResponse] = []
    created_at: datetime
    updated_at: datetime
