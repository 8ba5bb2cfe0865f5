"""
Session routes: login, access-token refresh and logout.
The refresh token travels only in an HTTP-only cookie.
"""

from fastapi import APIRouter, Request, Response

from casino_registry.api.deps import SessionManagerDep, SettingsDep
from casino_registry.core.logging import get_logger
from casino_registry.schemas.common import MessageResponse
from casino_registry.schemas.session import LoginRequest, SessionResponse
from casino_registry.schemas.user import UserResponse
from casino_registry.services.session_service import clear_refresh_cookie, set_refresh_cookie

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/login", response_model=SessionResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    manager: SessionManagerDep,
    settings: SettingsDep,
) -> SessionResponse:
    """
    Exchange email and password for an access token.

    Args:
        credentials: Email and password
        response: Outgoing response, receives the refresh cookie
        manager: Session lifecycle manager
        settings: Application settings (cookie attributes)

    Returns:
        Access token and the user profile

    Raises:
        InvalidCredentials: Same 401 for unknown email, wrong password or inactive user
    """
    result = manager.login(credentials.email, credentials.password)
    if result.refresh is not None:
        set_refresh_cookie(response, settings, result.refresh)
    return SessionResponse(
        access_token=result.access_token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/refresh-token", response_model=SessionResponse)
def refresh_token(
    request: Request,
    response: Response,
    manager: SessionManagerDep,
    settings: SettingsDep,
) -> SessionResponse:
    """
    Issue a new access token from the refresh cookie.

    The cookie is only replaced when refresh-token rotation is enabled.
    """
    result = manager.refresh(request.cookies.get(settings.REFRESH_TOKEN_COOKIE_NAME))
    if result.refresh is not None:
        set_refresh_cookie(response, settings, result.refresh)
    return SessionResponse(
        access_token=result.access_token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    manager: SessionManagerDep,
    settings: SettingsDep,
) -> MessageResponse:
    """Revoke the refresh cookie's session and clear the cookie. Always succeeds."""
    revoked = manager.logout(request.cookies.get(settings.REFRESH_TOKEN_COOKIE_NAME))
    clear_refresh_cookie(response, settings)
    logger.info(f"Logout revoked {revoked} refresh token(s)")
    return MessageResponse(message="Logged out successfully")
