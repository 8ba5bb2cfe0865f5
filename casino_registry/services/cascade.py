"""
Ownership graph and subtree deletion.

``OWNERSHIP`` maps a parent table to the tables whose rows cannot outlive it.
``delete_subtree`` walks that graph depth-first, deleting children before
their parents so foreign keys hold at every flush.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple, Type

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, col, select

from casino_registry.core.logging import get_logger
from casino_registry.models import (
    Client,
    ClientAttachment,
    Interdiction,
    InterdictionAttachment,
    Occurrence,
    OccurrenceAttachment,
    RefreshToken,
    Transaction,
    User,
)
from casino_registry.services.file_storage_service import FileStorageService

logger = get_logger(__name__)

# parent -> [(child, foreign key column on child)]
OWNERSHIP: Dict[Type[SQLModel], List[Tuple[Type[SQLModel], str]]] = {
    Client: [
        (ClientAttachment, "client_id"),
        (Transaction, "client_id"),
        (Interdiction, "client_id"),
        (Occurrence, "client_id"),
    ],
    Interdiction: [(InterdictionAttachment, "interdiction_id")],
    Occurrence: [(OccurrenceAttachment, "occurrence_id")],
    User: [(RefreshToken, "user_id")],
}


@dataclass
class CascadeResult:
    """Rows deleted per table and the stored files they referenced."""

    counts: Counter = field(default_factory=Counter)
    file_paths: List[str] = field(default_factory=list)


def delete_subtree(
    session: Session,
    model: Type[SQLModel],
    ids: Iterable[str],
    result: CascadeResult | None = None,
) -> CascadeResult:
    """
    Delete rows of ``model`` with the given ids and everything they own.

    Does not commit; the caller owns the transaction.
    """
    result = result if result is not None else CascadeResult()
    ids = list(ids)
    if not ids:
        return result

    for child, foreign_key in OWNERSHIP.get(model, []):
        child_ids = session.exec(
            select(child.id).where(col(getattr(child, foreign_key)).in_(ids))  # type: ignore[attr-defined]
        ).all()
        delete_subtree(session, child, child_ids, result)

    rows = session.exec(select(model).where(col(model.id).in_(ids))).all()  # type: ignore[attr-defined]
    for row in rows:
        path = getattr(row, "path", None)
        if path:
            result.file_paths.append(path)
        session.delete(row)
    session.flush()
    result.counts[model.__tablename__] += len(rows)
    return result


def delete_with_dependents(
    session: Session,
    model: Type[SQLModel],
    record_id: str,
    storage: FileStorageService | None = None,
) -> CascadeResult:
    """
    Delete one record and its subtree in a single transaction.

    Stored attachment files are removed only after the commit succeeds.
    Any failure rolls the whole subtree back.
    """
    try:
        result = delete_subtree(session, model, [record_id])
        session.commit()
    except IntegrityError as e:
        # Rows outside the ownership graph still reference the record
        session.rollback()
        logger.warning(
            f"Cascade delete of {model.__tablename__} {record_id} blocked by references: {e.orig}"
        )
        raise
    except Exception:
        session.rollback()
        logger.exception(f"Cascade delete of {model.__tablename__} {record_id} rolled back")
        raise

    logger.info(f"Deleted {model.__tablename__} {record_id} with dependents: {dict(result.counts)}")
    if storage is not None and result.file_paths:
        storage.delete_files(result.file_paths)
    return result
