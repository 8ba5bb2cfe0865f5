"""
Special tax and stamp tax schemas. Input dates are ``dd/mm/yyyy``.
"""

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from casino_registry.schemas.common import APIModel, RefSummary, ensure_not_future, parse_day


class _TaxDateMixin(APIModel):
    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def validate_date(cls, v: object) -> Optional[dt.date]:
        if v is None:
            return None
        return ensure_not_future(parse_day(v))


class SpecialTaxCreate(_TaxDateMixin):
    casino_id: str = Field(min_length=1)
    table_result: float
    machine_result: float
    date: dt.date


class SpecialTaxUpdate(_TaxDateMixin):
    casino_id: Optional[str] = Field(default=None, min_length=1)
    table_result: Optional[float] = None
    machine_result: Optional[float] = None
    date: Optional[dt.date] = None


class SpecialTaxResponse(APIModel):
    id: str
    casino_id: str
    table_result: float
    machine_result: float
    date: dt.date
    user_id: Optional[str] = None
    casino: Optional[RefSummary] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class StampTaxCreate(_TaxDateMixin):
    casino_id: str = Field(min_length=1)
    tickets_sold: int = Field(gt=0)
    date: dt.date


class StampTaxUpdate(_TaxDateMixin):
    casino_id: Optional[str] = Field(default=None, min_length=1)
    tickets_sold: Optional[int] = Field(default=None, gt=0)
    date: Optional[dt.date] = None


class StampTaxResponse(APIModel):
    id: str
    casino_id: str
    tickets_sold: int
    date: dt.date
    user_id: Optional[str] = None
    casino: Optional[RefSummary] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class TaxFilter(APIModel):
    """List filters shared by both tax kinds."""

    casino_id: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_bounds(cls, v: object) -> Optional[dt.date]:
        if v is None or v == "":
            return None
        return parse_day(v)
