"""Primary-key lookups that raise NotFound."""

from typing import Type, TypeVar

from sqlmodel import Session, SQLModel

from casino_registry.core.errors import NotFound

ModelT = TypeVar("ModelT", bound=SQLModel)


def get_or_404(session: Session, model: Type[ModelT], record_id: str, label: str) -> ModelT:
    record = session.get(model, record_id)
    if record is None:
        raise NotFound(f"{label} not found")
    return record
