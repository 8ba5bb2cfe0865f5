"""
Occurrence schemas. Dates are ``dd-mm-yyyy`` strings and hours ``HH:mm``.
"""

import re
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from casino_registry.models.occurrence import OccurrenceStatus
from casino_registry.schemas.common import APIModel, AttachmentResponse, RefSummary

HOUR_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def check_occurrence_date(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise ValueError("Date must be in dd-mm-yyyy format")
    try:
        datetime.strptime(value, "%d-%m-%Y")
    except ValueError:
        raise ValueError("Date must be a real calendar date") from None
    return value


def check_hour(value: str) -> str:
    if not HOUR_PATTERN.match(value):
        raise ValueError("Hour must be in HH:mm format")
    return value


class OccurrenceCreate(APIModel):
    client_id: str = Field(min_length=1)
    casino_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    date: str
    hour: str
    status: OccurrenceStatus = OccurrenceStatus.PENDING

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return check_occurrence_date(v.strip())

    @field_validator("hour")
    @classmethod
    def validate_hour(cls, v: str) -> str:
        return check_hour(v.strip())


class OccurrenceUpdate(APIModel):
    client_id: Optional[str] = Field(default=None, min_length=1)
    casino_id: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[str] = None
    hour: Optional[str] = None
    status: Optional[OccurrenceStatus] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else check_occurrence_date(v.strip())

    @field_validator("hour")
    @classmethod
    def validate_hour(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else check_hour(v.strip())


class OccurrenceResponse(APIModel):
    id: str
    client_id: str
    casino_id: str
    title: str
    description: str
    date: str
    hour: str
    status: OccurrenceStatus
    user_id: Optional[str] = None
    client: Optional[RefSummary] = None
    casino: Optional[RefSummary] = None
    attachments: List[AttachmentResponse] = []
    created_at: datetime
    updated_at: datetime
