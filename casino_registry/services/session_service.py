"""
Session lifecycle: login, access-token refresh and logout.

A session is a refresh token row. Login creates one, logout deletes it,
refresh trades a live row for a new access token.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Response
from sqlmodel import Session, col, select

from casino_registry.core.config import Settings
from casino_registry.core.errors import (
    ExpiredOrRevoked,
    InvalidCredentials,
    MissingToken,
    UnknownUser,
)
from casino_registry.core.logging import get_logger
from casino_registry.core.security import IssuedToken, TokenCodec, utcnow
from casino_registry.models.refresh_token import RefreshToken
from casino_registry.models.user import User
from casino_registry.services.user_service import UserService

logger = get_logger(__name__)


@dataclass
class SessionResult:
    """Outcome of login or refresh. ``refresh`` is set when a new cookie must be sent."""

    access_token: str
    user: User
    refresh: Optional[IssuedToken] = None


class SessionManager:
    """Issues and revokes sessions for one request."""

    def __init__(self, session: Session, settings: Settings, codec: TokenCodec):
        self.session = session
        self.settings = settings
        self.codec = codec

    def _store_refresh(self, user_id: str) -> IssuedToken:
        issued = self.codec.issue_refresh(user_id)
        self.session.add(
            RefreshToken(token=issued.token, user_id=user_id, expires_at=issued.expires_at)
        )
        return issued

    def login(self, email: str, password: str) -> SessionResult:
        """
        Authenticate and open a new session.

        Raises:
            InvalidCredentials: Unknown email, wrong password or inactive account
        """
        user = UserService.authenticate(self.session, email, password)
        if user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        access = self.codec.issue_access(user.id, user.role.value)
        refresh = self._store_refresh(user.id)
        user.last_login = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(f"User logged in: {user.id}")
        return SessionResult(access_token=access.token, user=user, refresh=refresh)

    def refresh(self, token: Optional[str]) -> SessionResult:
        """
        Issue a new access token for a live refresh token.

        With rotation enabled the presented token is revoked and replaced.

        Raises:
            MissingToken: No refresh cookie
            InvalidToken: Bad signature or expired token
            ExpiredOrRevoked: No unexpired stored row for the token
            UnknownUser: The token's subject no longer exists
        """
        if not token:
            raise MissingToken("Refresh token not provided")

        claims = self.codec.verify_refresh(token)

        stored = self.session.exec(
            select(RefreshToken).where(
                RefreshToken.token == token,
                col(RefreshToken.expires_at) > utcnow(),
            )
        ).first()
        if stored is None:
            logger.warning("Refresh attempted with an expired or revoked token")
            raise ExpiredOrRevoked()

        user = UserService.get_by_id(self.session, claims["sub"])
        if user is None:
            raise UnknownUser()

        access = self.codec.issue_access(user.id, user.role.value)
        result = SessionResult(access_token=access.token, user=user)

        if self.settings.REFRESH_TOKEN_ROTATION:
            self.session.delete(stored)
            result.refresh = self._store_refresh(user.id)
            self.session.commit()
            self.session.refresh(user)

        return result

    def logout(self, token: Optional[str]) -> int:
        """
        Revoke every stored row for the token. Safe to call repeatedly.

        Returns:
            Number of rows removed
        """
        if not token:
            return 0
        rows = self.session.exec(select(RefreshToken).where(RefreshToken.token == token)).all()
        for row in rows:
            self.session.delete(row)
        self.session.commit()
        return len(rows)


def set_refresh_cookie(response: Response, settings: Settings, issued: IssuedToken) -> None:
    """Place the refresh token in a cookie expiring with its stored row."""
    response.set_cookie(
        key=settings.REFRESH_TOKEN_COOKIE_NAME,
        value=issued.token,
        expires=issued.expires_at,
        path=settings.REFRESH_TOKEN_COOKIE_PATH,
        secure=settings.REFRESH_TOKEN_COOKIE_SECURE,
        httponly=settings.REFRESH_TOKEN_COOKIE_HTTPONLY,
        samesite=settings.REFRESH_TOKEN_COOKIE_SAMESITE,
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.REFRESH_TOKEN_COOKIE_NAME,
        path=settings.REFRESH_TOKEN_COOKIE_PATH,
        secure=settings.REFRESH_TOKEN_COOKIE_SECURE,
        httponly=settings.REFRESH_TOKEN_COOKIE_HTTPONLY,
        samesite=settings.REFRESH_TOKEN_COOKIE_SAMESITE,
    )
