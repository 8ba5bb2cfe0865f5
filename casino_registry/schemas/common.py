"""
Shared schema building blocks: camelCase wire names, pagination envelope,
nested summaries and attachment metadata.
"""

import re
from datetime import date, datetime
from typing import Dict, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from casino_registry.models.attachment import AttachmentType

T = TypeVar("T")

MAX_PAGE_SIZE = 100


class APIModel(BaseModel):
    """Base schema exposing camelCase names while accepting snake_case input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationParams(BaseModel):
    """Validated ``page`` / ``pageSize`` query parameters."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE, alias="pageSize")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PaginationMeta(APIModel):
    current_page: int
    total_pages: int
    total_items: int
    page_size: int


class Page(APIModel, Generic[T]):
    """Listing envelope returned by every paginated endpoint."""

    data: List[T]
    pagination: PaginationMeta


class RefSummary(APIModel):
    """``{id, name}`` summary of a related record."""

    id: str
    name: str


class AttachmentResponse(APIModel):
    id: str
    name: str
    type: AttachmentType
    created_at: datetime


class MessageResponse(BaseModel):
    message: str


SLASH_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def parse_day(value: object) -> date:
    """
    Parse a calendar day given as ``dd/mm/yyyy`` or ISO ``yyyy-mm-dd``.

    Raises:
        ValueError: If the value is neither format or not a real date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if SLASH_DATE_PATTERN.match(text):
            return datetime.strptime(text, "%d/%m/%Y").date()
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError("Date must be a valid date in dd/mm/yyyy format") from None


def ensure_not_future(day: date) -> date:
    if day > date.today():
        raise ValueError("Date cannot be in the future")
    return day


class CascadeDeleteResponse(MessageResponse):
    """Delete confirmation listing how many rows were removed per table."""

    deleted: Dict[str, int]
