"""
Casino service: unique names and delete protection for casinos with records.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import Session, SQLModel, col, select

from casino_registry.core.errors import Conflict
from casino_registry.core.logging import get_logger
from casino_registry.core.security import utcnow
from casino_registry.models import (
    Casino,
    Client,
    Interdiction,
    Occurrence,
    SpecialTax,
    StampTax,
    Transaction,
)
from casino_registry.schemas.casino import CasinoCreate, CasinoUpdate, RelatedRecords
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.services.lookup import get_or_404
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)

# RelatedRecords field -> table holding a casino_id
DEPENDENT_TABLES = {
    "clients": Client,
    "transactions": Transaction,
    "interdictions": Interdiction,
    "occurrences": Occurrence,
    "special_taxes": SpecialTax,
    "stamp_taxes": StampTax,
}


class CasinoService:
    """Service for casino records."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_name(self, name: str) -> Optional[Casino]:
        return self.session.exec(select(Casino).where(Casino.name == name)).first()

    def get(self, casino_id: str) -> Casino:
        return get_or_404(self.session, Casino, casino_id, "Casino")

    def get_all(self, params: PaginationParams) -> Tuple[List[Casino], PaginationMeta]:
        statement = select(Casino).order_by(col(Casino.name))
        return paginate(self.session, statement, params)

    def create(self, casino_in: CasinoCreate, user_id: str) -> Casino:
        """
        Create a casino.

        Raises:
            Conflict: If a casino with the same name exists
        """
        name = casino_in.name.strip()
        if self.get_by_name(name):
            raise Conflict("Casino already exists")

        casino = Casino(**casino_in.model_dump(exclude={"name"}), name=name, user_id=user_id)
        self.session.add(casino)
        self.session.commit()
        self.session.refresh(casino)
        logger.info(f"Casino created: {casino.id}")
        return casino

    def update(self, casino_id: str, casino_in: CasinoUpdate) -> Casino:
        casino = self.get(casino_id)
        changes = casino_in.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            existing = self.get_by_name(changes["name"])
            if existing and existing.id != casino.id:
                raise Conflict("A casino with this name already exists")

        for key, value in changes.items():
            setattr(casino, key, value)
        casino.updated_at = utcnow()

        self.session.add(casino)
        self.session.commit()
        self.session.refresh(casino)
        return casino

    def related_records(self, casino_id: str) -> RelatedRecords:
        """Count rows in every table that references the casino."""
        counts = {}
        for key, model in DEPENDENT_TABLES.items():
            counts[key] = self.session.exec(
                select(func.count()).select_from(model).where(_casino_column(model) == casino_id)
            ).one()
        return RelatedRecords(**counts)

    def delete(self, casino_id: str) -> None:
        """
        Delete a casino that nothing references.

        Raises:
            NotFound: If the casino does not exist
            Conflict: If any dependent record exists; the body lists the counts
        """
        casino = self.get(casino_id)
        related = self.related_records(casino_id)
        if related.total:
            logger.info(f"Refused to delete casino {casino_id} with related records")
            raise Conflict(
                "Cannot delete casino with related records",
                relatedRecords=related.model_dump(by_alias=True),
            )
        self.session.delete(casino)
        self.session.commit()
        logger.info(f"Casino deleted: {casino_id}")


def _casino_column(model: type[SQLModel]):  # type: ignore[no-untyped-def]
    return col(getattr(model, "casino_id"))
