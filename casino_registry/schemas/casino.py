"""
Casino schemas. The address travels as ``adress`` on the wire.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field

from casino_registry.models.casino import CasinoLocation
from casino_registry.schemas.common import APIModel


class CasinoCreate(APIModel):
    name: str = Field(min_length=1, max_length=255)
    contact: Optional[str] = None
    email: Optional[EmailStr] = None
    location: CasinoLocation
    address: str = Field(min_length=1, alias="adress")
    founded_in: date
    license_nr: str = Field(min_length=1)
    license_validity: date


class CasinoUpdate(APIModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    contact: Optional[str] = None
    email: Optional[EmailStr] = None
    location: Optional[CasinoLocation] = None
    address: Optional[str] = Field(default=None, min_length=1, alias="adress")
    founded_in: Optional[date] = None
    license_nr: Optional[str] = Field(default=None, min_length=1)
    license_validity: Optional[date] = None


class CasinoResponse(APIModel):
    id: str
    name: str
    contact: Optional[str] = None
    email: Optional[str] = None
    location: CasinoLocation
    address: str = Field(alias="adress")
    founded_in: date
    license_nr: str
    license_validity: date
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RelatedRecords(APIModel):
    """Dependent row counts that block a casino delete."""

    clients: int = 0
    transactions: int = 0
    interdictions: int = 0
    occurrences: int = 0
    special_taxes: int = 0
    stamp_taxes: int = 0

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())
