"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os

# Settings are read at import time; configure the environment first.
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["DISABLE_BOOTSTRAP_USERS"] = "true"

from pathlib import Path  # noqa: E402
from typing import Callable, Dict, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from casino_registry.api.deps import get_file_storage  # noqa: E402
from casino_registry.db.session import get_session, init_db  # noqa: E402
from casino_registry.main import app  # noqa: E402
from casino_registry.models import Casino, Client, User, UserRole, UserStatus  # noqa: E402
from casino_registry.schemas.casino import CasinoCreate  # noqa: E402
from casino_registry.schemas.client import ClientCreate  # noqa: E402
from casino_registry.schemas.user import UserCreate  # noqa: E402
from casino_registry.services.casino_service import CasinoService  # noqa: E402
from casino_registry.services.client_service import ClientService  # noqa: E402
from casino_registry.services.file_storage_service import FileStorageService  # noqa: E402
from casino_registry.services.user_service import UserService  # noqa: E402

CASINO_PAYLOAD = {
    "name": "Casino A",
    "location": "Maputo",
    "adress": "Av. X",
    "foundedIn": "2020-01-01",
    "licenseNr": "LIC-1",
    "licenseValidity": "2030-01-01",
}

USER_PASSWORD = "testpassword123"
ADMIN_PASSWORD = "adminpassword123"


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="storage")
def storage_fixture(tmp_path: Path) -> FileStorageService:
    """File storage rooted in a per-test temporary directory."""
    return FileStorageService(tmp_path / "uploads")


@pytest.fixture(name="client")
def client_fixture(session: Session, storage: FileStorageService) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_file_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    """
    Create an active technician.
    """
    user_create = UserCreate(
        name="Test User",
        email="test@example.com",
        password=USER_PASSWORD,
    )
    return UserService.create(session, user_create)


@pytest.fixture(name="test_admin")
def test_admin_fixture(session: Session) -> User:
    """
    Create an active admin.
    """
    user_create = UserCreate(
        name="Admin User",
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        role=UserRole.ADMIN,
    )
    return UserService.create(session, user_create)


@pytest.fixture(name="inactive_user")
def inactive_user_fixture(session: Session) -> User:
    user_create = UserCreate(
        name="Inactive User",
        email="inactive@example.com",
        password=USER_PASSWORD,
        status=UserStatus.INACTIVE,
    )
    return UserService.create(session, user_create)


def login(client: TestClient, email: str, password: str) -> str:
    response = client.post("/sessions/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["accessToken"]


@pytest.fixture(name="user_token")
def user_token_fixture(client: TestClient, test_user: User) -> str:
    """
    Get an access token for a regular user.
    """
    return login(client, "test@example.com", USER_PASSWORD)


@pytest.fixture(name="admin_token")
def admin_token_fixture(client: TestClient, test_admin: User) -> str:
    """
    Get an access token for an admin user.
    """
    return login(client, "admin@example.com", ADMIN_PASSWORD)


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(user_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture(name="make_casino")
def make_casino_fixture(session: Session, test_user: User) -> Callable[..., Casino]:
    """Factory creating casinos directly through the service."""

    def make(**overrides: str) -> Casino:
        payload = {**CASINO_PAYLOAD, **overrides}
        return CasinoService(session).create(CasinoCreate(**payload), user_id=test_user.id)

    return make


@pytest.fixture(name="casino")
def casino_fixture(make_casino: Callable[..., Casino]) -> Casino:
    return make_casino()


@pytest.fixture(name="registered_client")
def registered_client_fixture(
    session: Session, storage: FileStorageService, casino: Casino, test_user: User
) -> Client:
    """A client of ``casino`` with a valid BI number."""
    client_in = ClientCreate(
        name="Joana Macuácua",
        id_type="BI",
        id_number="123456789012A",
        casino_id=casino.id,
    )
    return ClientService(session, storage).create(client_in, user_id=test_user.id)
