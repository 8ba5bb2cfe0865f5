"""
Special tax and stamp tax services.

Both taxes are daily declarations per casino and share listing filters:
an optional casino and an inclusive date range, newest first.
"""

from typing import Any, List, Optional, Tuple, Type

from sqlmodel import Session, SQLModel, col, select

from casino_registry.core.errors import Conflict
from casino_registry.core.logging import get_logger
from casino_registry.core.security import utcnow
from casino_registry.models import Casino, SpecialTax, StampTax
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.schemas.tax import (
    SpecialTaxCreate,
    SpecialTaxUpdate,
    StampTaxCreate,
    StampTaxUpdate,
    TaxFilter,
)
from casino_registry.services.lookup import get_or_404
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)


def filtered_statement(model: Type[SQLModel], filters: TaxFilter) -> Any:
    date_column = col(getattr(model, "date"))
    statement = select(model)
    if filters.casino_id:
        statement = statement.where(col(getattr(model, "casino_id")) == filters.casino_id)
    if filters.start_date:
        statement = statement.where(date_column >= filters.start_date)
    if filters.end_date:
        statement = statement.where(date_column <= filters.end_date)
    return statement.order_by(date_column.desc(), col(getattr(model, "created_at")).desc())


class SpecialTaxService:
    """At most one special tax declaration per casino and day."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, tax_id: str) -> SpecialTax:
        return get_or_404(self.session, SpecialTax, tax_id, "Special tax")

    def find_for_day(self, casino_id: str, day: Any) -> Optional[SpecialTax]:
        statement = select(SpecialTax).where(
            SpecialTax.casino_id == casino_id,
            SpecialTax.date == day,
        )
        return self.session.exec(statement).first()

    def get_all(
        self, filters: TaxFilter, params: PaginationParams
    ) -> Tuple[List[SpecialTax], PaginationMeta]:
        return paginate(self.session, filtered_statement(SpecialTax, filters), params)

    def create(self, tax_in: SpecialTaxCreate, user_id: str) -> SpecialTax:
        """
        Raises:
            NotFound: If the casino does not exist
            Conflict: If the casino already declared this day
        """
        get_or_404(self.session, Casino, tax_in.casino_id, "Casino")
        if self.find_for_day(tax_in.casino_id, tax_in.date):
            raise Conflict("Special tax already registered for this casino on this date")

        tax = SpecialTax(**tax_in.model_dump(), user_id=user_id)
        self.session.add(tax)
        self.session.commit()
        self.session.refresh(tax)
        logger.info(f"Special tax created: {tax.id}")
        return tax

    def update(self, tax_id: str, tax_in: SpecialTaxUpdate) -> SpecialTax:
        tax = self.get(tax_id)
        changes = tax_in.model_dump(exclude_unset=True, exclude_none=True)

        if "casino_id" in changes:
            get_or_404(self.session, Casino, changes["casino_id"], "Casino")
        if "casino_id" in changes or "date" in changes:
            existing = self.find_for_day(
                changes.get("casino_id", tax.casino_id), changes.get("date", tax.date)
            )
            if existing and existing.id != tax.id:
                raise Conflict("Special tax already registered for this casino on this date")

        for key, value in changes.items():
            setattr(tax, key, value)
        tax.updated_at = utcnow()

        self.session.add(tax)
        self.session.commit()
        self.session.refresh(tax)
        return tax

    def delete(self, tax_id: str) -> None:
        tax = self.get(tax_id)
        self.session.delete(tax)
        self.session.commit()


class StampTaxService:
    """Tickets sold per casino and day."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, tax_id: str) -> StampTax:
        return get_or_404(self.session, StampTax, tax_id, "Stamp tax")

    def get_all(
        self, filters: TaxFilter, params: PaginationParams
    ) -> Tuple[List[StampTax], PaginationMeta]:
        return paginate(self.session, filtered_statement(StampTax, filters), params)

    def get_for_casino(
        self, casino_id: str, filters: TaxFilter, params: PaginationParams
    ) -> Tuple[List[StampTax], PaginationMeta]:
        get_or_404(self.session, Casino, casino_id, "Casino")
        scoped = filters.model_copy(update={"casino_id": casino_id})
        return self.get_all(scoped, params)

    def create(self, tax_in: StampTaxCreate, user_id: str) -> StampTax:
        get_or_404(self.session, Casino, tax_in.casino_id, "Casino")

        tax = StampTax(**tax_in.model_dump(), user_id=user_id)
        self.session.add(tax)
        self.session.commit()
        self.session.refresh(tax)
        logger.info(f"Stamp tax created: {tax.id}")
        return tax

    def update(self, tax_id: str, tax_in: StampTaxUpdate) -> StampTax:
        tax = self.get(tax_id)
        changes = tax_in.model_dump(exclude_unset=True, exclude_none=True)

        if "casino_id" in changes:
            get_or_404(self.session, Casino, changes["casino_id"], "Casino")

        for key, value in changes.items():
            setattr(tax, key, value)
        tax.updated_at = utcnow()

        self.session.add(tax)
        self.session.commit()
        self.session.refresh(tax)
        return tax

    def delete(self, tax_id: str) -> None:
        tax = self.get(tax_id)
        self.session.delete(tax)
        self.session.commit()
