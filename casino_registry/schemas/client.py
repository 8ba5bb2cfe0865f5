"""
Client schemas. Identity fields keep their snake_case wire names
(``id_type``, ``id_number``, ``casino_id``); everything else is camelCase.
"""

import re
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from casino_registry.models.client import ClientIDType
from casino_registry.schemas.common import APIModel, AttachmentResponse, RefSummary

ID_NUMBER_PATTERNS = {
    ClientIDType.BI: re.compile(r"^\d{12}[A-Za-z]$"),
    ClientIDType.DIR: re.compile(r"^\d{2}[A-Za-z]{2}\d{8}[A-Za-z]$"),
    ClientIDType.DRIVING_LICENSE: re.compile(r"^\d{8}$"),
    ClientIDType.PASSPORT: re.compile(r"^[A-Za-z]{2}\d{7}$"),
}

PHONE_PATTERN = re.compile(r"^\+258\d{9}$")


def normalize_phone(value: Optional[str]) -> Optional[str]:
    """
    Normalise a Mozambican phone number to ``+258`` followed by 9 digits.

    Spaces, dashes and parentheses are ignored and a missing country code is added.

    Raises:
        ValueError: If the result is not ``+258`` plus 9 digits
    """
    if value is None:
        return None
    compact = re.sub(r"[\s\-()]", "", value)
    if not compact:
        return None
    if not compact.startswith("+"):
        if compact.startswith("258") and len(compact) == 12:
            compact = compact[3:]
        compact = f"+258{compact}"
    if not PHONE_PATTERN.match(compact):
        raise ValueError("Phone must be +258 followed by 9 digits")
    return compact


def check_id_number(id_type: ClientIDType, id_number: str) -> str:
    """Validate an identity document number against the format of its type."""
    if not ID_NUMBER_PATTERNS[id_type].match(id_number):
        raise ValueError("Invalid identification number format for the selected type")
    return id_number


class ClientCreate(APIModel):
    name: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    id_type: ClientIDType = Field(alias="id_type")
    id_number: str = Field(min_length=1, alias="id_number")
    casino_id: str = Field(min_length=1, alias="casino_id")

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)

    @field_validator("id_number")
    @classmethod
    def validate_id_number(cls, v: str, info: ValidationInfo) -> str:
        id_type = info.data.get("id_type")
        if id_type is None:
            # id_type failed on its own; that error is already reported
            return v
        return check_id_number(id_type, v.strip())


class ClientUpdate(APIModel):
    """Partial update; ``id_number`` is checked against the resulting id type by the service."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    id_type: Optional[ClientIDType] = Field(default=None, alias="id_type")
    id_number: Optional[str] = Field(default=None, min_length=1, alias="id_number")
    casino_id: Optional[str] = Field(default=None, min_length=1, alias="casino_id")

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)


class ClientResponse(APIModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    id_type: ClientIDType = Field(alias="id_type")
    id_number: str = Field(alias="id_number")
    casino_id: str = Field(alias="casino_id")
    user_id: Optional[str] = None
    casino: Optional[RefSummary] = None
    user: Optional[RefSummary] = None
    attachments: List[AttachmentResponse] = []
    created_at: datetime
    updated_at: datetime
