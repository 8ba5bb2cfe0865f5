"""
Licensed casino establishments.
"""

from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field

from casino_registry.models.base import AuditedMixin, new_id


class CasinoLocation(str, Enum):
    """Provinces and cities where a casino can be licensed."""

    MAPUTO = "Maputo"
    MATOLA = "Matola"
    GAZA = "Gaza"
    INHAMBANE = "Inhambane"
    BEIRA = "Beira"
    MANICA = "Manica"
    ZAMBEZIA = "Zambezia"
    TETE = "Tete"
    NAMPULA = "Nampula"
    NIASSA = "Niassa"
    PEMBA = "Pemba"


class Casino(AuditedMixin, table=True):
    __tablename__ = "casinos"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    contact: Optional[str] = Field(default=None, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)
    location: CasinoLocation
    address: str = Field(max_length=512)
    founded_in: date
    license_nr: str = Field(max_length=128)
    license_validity: date
