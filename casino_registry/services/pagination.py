"""
Offset pagination over SQLModel select statements.
"""

import math
from typing import Any, List, Tuple

from sqlalchemy import func
from sqlmodel import Session, select

from casino_registry.schemas.common import PaginationMeta, PaginationParams


def page_meta(total_items: int, params: PaginationParams) -> PaginationMeta:
    """Build the pagination block; ``totalPages`` is ``ceil(total / pageSize)``."""
    return PaginationMeta(
        current_page=params.page,
        total_pages=math.ceil(total_items / params.page_size),
        total_items=total_items,
        page_size=params.page_size,
    )


def paginate(session: Session, statement: Any, params: PaginationParams) -> Tuple[List[Any], PaginationMeta]:
    """
    Run ``statement`` for one page and count all matching rows.

    Args:
        session: Database session
        statement: A ``select(Model)`` with filters and ordering applied
        params: Requested page and page size

    Returns:
        The rows of the requested page (empty past the end) and the pagination block
    """
    count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
    total_items = session.exec(count_statement).one()
    items = session.exec(statement.offset(params.offset).limit(params.page_size)).all()
    return list(items), page_meta(total_items, params)
