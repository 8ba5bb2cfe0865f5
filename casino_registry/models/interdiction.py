"""
Interdictions bar a client from a casino for a period.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import Field, Relationship

from casino_registry.models.base import READ_ONLY, AuditedMixin, new_id


class InterdictionType(str, Enum):
    ADMINISTRATIVE = "administrative"
    JUDICIAL = "judicial"
    VOLUNTARY = "voluntary"


class InterdictionPeriod(str, Enum):
    SIX_MONTHS = "six_months"
    ONE_YEAR = "one_year"
    TWO_YEARS = "two_years"
    THREE_YEARS = "three_years"
    FIVE_YEARS = "five_years"
    INDEFINITE = "indefinite"


class InterdictionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Interdiction(AuditedMixin, table=True):
    __tablename__ = "interdictions"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: str = Field(foreign_key="clients.id", index=True)
    casino_id: str = Field(foreign_key="casinos.id", index=True)
    type: InterdictionType
    reason: str
    period: InterdictionPeriod
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: InterdictionStatus = Field(default=InterdictionStatus.PENDING)

    client: Optional["Client"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    casino: Optional["Casino"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    user: Optional["User"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
    attachments: List["InterdictionAttachment"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
