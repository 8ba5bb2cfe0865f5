"""
Service-level tests for behaviour that is awkward to reach over HTTP.
"""

import io
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from starlette.datastructures import Headers

from casino_registry.core.errors import NotFound, ValidationFailed
from casino_registry.models import (
    AttachmentType,
    Casino,
    Client,
    ClientAttachment,
    Transaction,
    TransactionType,
    User,
)
from casino_registry.services.attachment_service import (
    CLIENT_ATTACHMENTS,
    AttachmentService,
    classify_mime_type,
)
from casino_registry.services.cascade import delete_with_dependents
from casino_registry.services.file_storage_service import FileStorageService
from casino_registry.services.user_service import UserService

from conftest import USER_PASSWORD


def upload(name: str, content_type: str, content: bytes = b"data") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.parametrize(
    "mime_type, expected",
    [
        ("application/pdf", AttachmentType.PDF),
        ("image/png", AttachmentType.IMAGE),
        ("image/jpeg", AttachmentType.IMAGE),
        ("application/msword", AttachmentType.DOCUMENT),
        (None, AttachmentType.DOCUMENT),
    ],
)
def test_classify_mime_type(mime_type, expected) -> None:
    assert classify_mime_type(mime_type) == expected


def test_sanitize_filename(storage: FileStorageService) -> None:
    assert storage._sanitize_filename("../../etc/passwd") == "passwd.unknown"
    assert storage._sanitize_filename("my scan (1).pdf") == "my_scan__1_.pdf"


def test_saved_file_lands_under_owner(storage: FileStorageService, tmp_path: Path) -> None:
    path = Path(storage.save_uploaded_file(upload("id.pdf", "application/pdf"), "clients", "abc"))
    assert path.parent == tmp_path / "uploads" / "clients" / "abc"
    assert path.read_bytes() == b"data"
    assert path.name.endswith("_id.pdf")


def test_add_attachments(session: Session, storage: FileStorageService, registered_client: Client) -> None:
    service = AttachmentService(session, storage, CLIENT_ATTACHMENTS)
    added = service.add(registered_client.id, [upload("id.pdf", "application/pdf"), upload("face.png", "image/png")])
    assert [a.type for a in added] == [AttachmentType.PDF, AttachmentType.IMAGE]
    assert all(storage.exists(a.path) for a in added)
    assert len(service.get_all(registered_client.id)) == 2


def test_add_attachments_requires_files(
    session: Session, storage: FileStorageService, registered_client: Client
) -> None:
    with pytest.raises(ValidationFailed):
        AttachmentService(session, storage, CLIENT_ATTACHMENTS).add(registered_client.id, [])


def test_attachment_of_other_owner_not_found(
    session: Session, storage: FileStorageService, registered_client: Client
) -> None:
    service = AttachmentService(session, storage, CLIENT_ATTACHMENTS)
    attachment = service.add(registered_client.id, [upload("id.pdf", "application/pdf")])[0]
    with pytest.raises(NotFound):
        service.get("someone-else", attachment.id)


def test_cascade_rolls_back_on_failure(
    session: Session,
    storage: FileStorageService,
    registered_client: Client,
    test_user: User,
    monkeypatch,
) -> None:
    attachment = AttachmentService(session, storage, CLIENT_ATTACHMENTS).add(
        registered_client.id, [upload("id.pdf", "application/pdf")]
    )[0]
    session.add(
        Transaction(
            client_id=registered_client.id,
            casino_id=registered_client.casino_id,
            amount=500.0,
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            type=TransactionType.CASH,
            user_id=test_user.id,
        )
    )
    session.commit()
    client_id, path = registered_client.id, attachment.path

    def failing_commit() -> None:
        raise RuntimeError("disk full")

    monkeypatch.setattr(session, "commit", failing_commit)
    with pytest.raises(RuntimeError):
        delete_with_dependents(session, Client, client_id, storage)
    monkeypatch.undo()

    assert session.get(Client, client_id) is not None
    assert len(session.exec(select(Transaction).where(Transaction.client_id == client_id)).all()) == 1
    assert len(session.exec(select(ClientAttachment).where(ClientAttachment.client_id == client_id)).all()) == 1
    assert storage.exists(path)


def test_cascade_reports_counts(
    session: Session, storage: FileStorageService, registered_client: Client
) -> None:
    path = AttachmentService(session, storage, CLIENT_ATTACHMENTS).add(
        registered_client.id, [upload("id.pdf", "application/pdf")]
    )[0].path

    result = delete_with_dependents(session, Client, registered_client.id, storage)

    assert result.counts["clients"] == 1
    assert result.counts["client_attachments"] == 1
    assert not storage.exists(path)


def test_authenticate(session: Session, test_user: User, inactive_user: User) -> None:
    assert UserService.authenticate(session, "TEST@example.com", USER_PASSWORD) == test_user
    assert UserService.authenticate(session, "test@example.com", "wrong") is None
    assert UserService.authenticate(session, "nobody@example.com", USER_PASSWORD) is None
    assert UserService.authenticate(session, "inactive@example.com", USER_PASSWORD) is None


def test_touch_last_seen_debounce(session: Session, test_user: User) -> None:
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert UserService.touch_last_seen(session, test_user, 60, now=now)
    assert not UserService.touch_last_seen(session, test_user, 60, now=now + timedelta(seconds=30))
    assert UserService.touch_last_seen(session, test_user, 60, now=now + timedelta(seconds=61))
    assert UserService.touch_last_seen(session, test_user, 0, now=now + timedelta(seconds=62))


def test_first_superuser_created_once(session: Session) -> None:
    from casino_registry.core.config import settings

    admin = UserService.ensure_first_superuser(session, settings)
    assert admin is not None
    assert admin.role.value == "admin"
    assert UserService.ensure_first_superuser(session, settings) is None


def test_cascade_blocked_by_references_logs_warning(
    session: Session, test_user: User, casino: Casino, caplog
) -> None:
    user_id = test_user.id

    with caplog.at_level(logging.INFO, logger="casino_registry.services.cascade"):
        with pytest.raises(IntegrityError):
            delete_with_dependents(session, User, user_id)

    records = [r for r in caplog.records if r.name == "casino_registry.services.cascade"]
    assert [r.levelno for r in records] == [logging.WARNING]
    assert records[0].exc_info is None
    assert session.get(User, user_id) is not None
