"""
API dependencies for FastAPI dependency injection.
Provides the authentication gate and the per-request service objects.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from casino_registry.core.config import Settings, get_settings
from casino_registry.core.errors import AccountDisabled, InvalidToken, MissingToken
from casino_registry.core.logging import get_logger
from casino_registry.core.security import TokenCodec
from casino_registry.db.session import get_session
from casino_registry.models.user import UserRole
from casino_registry.schemas.common import MAX_PAGE_SIZE, PaginationParams
from casino_registry.services.file_storage_service import FileStorageService
from casino_registry.services.session_service import SessionManager
from casino_registry.services.user_service import UserService

logger = get_logger(__name__)

SessionDep = Annotated[Session, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]

# auto_error=False so a missing header maps to our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_codec(settings: SettingsDep) -> TokenCodec:
    return TokenCodec(settings)


TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]


def get_file_storage(settings: SettingsDep) -> FileStorageService:
    return FileStorageService(settings.UPLOAD_DIR)


FileStorageDep = Annotated[FileStorageService, Depends(get_file_storage)]


def get_session_manager(
    session: SessionDep,
    settings: SettingsDep,
    codec: TokenCodecDep,
) -> SessionManager:
    return SessionManager(session, settings, codec)


SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the caller, attached to every protected request."""

    id: str
    role: UserRole


def get_current_user(
    session: SessionDep,
    settings: SettingsDep,
    codec: TokenCodecDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> CurrentUser:
    """
    Authentication gate for protected routes.

    Verifies the bearer access token, loads the user, records last-seen
    activity and rejects inactive accounts.

    Raises:
        MissingToken: No bearer token in the Authorization header
        InvalidToken: Bad signature, expired token, or unknown user
        AccountDisabled: The user's status is inactive
    """
    if credentials is None or not credentials.credentials:
        raise MissingToken()

    claims = codec.verify_access(credentials.credentials)

    user = UserService.get_by_id(session, claims["sub"])
    if user is None:
        logger.warning("Access token subject no longer exists")
        raise InvalidToken()

    # Recorded even for inactive users; a failed write must not fail the request
    try:
        UserService.touch_last_seen(session, user, settings.LAST_SEEN_DEBOUNCE_SECONDS)
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(f"Could not record last-seen for user {user.id}: {e}")

    if not user.is_active:
        logger.warning(f"Inactive user {user.id} attempted access")
        raise AccountDisabled()

    return CurrentUser(id=user.id, role=user.role)


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


def get_pagination(
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE, alias="pageSize")] = 10,
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]
