"""
Daily tax declarations filed by casinos.
"""

import datetime as dt
from typing import Optional

from sqlmodel import Field, Relationship

from casino_registry.models.base import READ_ONLY, AuditedMixin, new_id


class SpecialTax(AuditedMixin, table=True):
    """Gaming results of one casino for one day (at most one per casino and day)."""

    __tablename__ = "special_taxes"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    casino_id: str = Field(foreign_key="casinos.id", index=True)
    table_result: float
    machine_result: float
    date: dt.date = Field(index=True)

    casino: Optional["Casino"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821


class StampTax(AuditedMixin, table=True):
    """Tickets sold by a casino on a given day."""

    __tablename__ = "stamp_taxes"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    casino_id: str = Field(foreign_key="casinos.id", index=True)
    tickets_sold: int
    date: dt.date = Field(index=True)

    casino: Optional["Casino"] = Relationship(sa_relationship_kwargs=READ_ONLY)  # type: ignore[name-defined]  # noqa: F821
