"""
Security utilities for password hashing and JWT token management.

Access and refresh tokens are signed with separate secrets and lifetimes:
a leaked access token is short-lived, a leaked refresh token can be revoked
by deleting its row from the refresh token store.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from casino_registry.core.config import Settings
from casino_registry.core.errors import InvalidTokenSignature, TokenExpired

# Prefer pbkdf2 for new hashes while still verifying legacy bcrypt hashes.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the same time as a real verification when no user matched."""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """
    Hash a password using the configured default scheme.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Decode and validate a JWT. Pure function, no I/O.

    Raises:
        TokenExpired: If the token's exp claim is in the past
        InvalidTokenSignature: If the token is malformed or the signature does not match
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as e:
        raise TokenExpired() from e
    except JWTError as e:
        raise InvalidTokenSignature() from e


@dataclass(frozen=True)
class IssuedToken:
    """A signed token together with its expiry instant."""

    token: str
    expires_at: datetime


class TokenCodec:
    """Signs and verifies access and refresh tokens for one configuration."""

    def __init__(self, settings: Settings):
        self.algorithm = settings.JWT_ALGORITHM
        self.access_secret = settings.ACCESS_TOKEN_SECRET
        self.refresh_secret = settings.REFRESH_TOKEN_SECRET
        self.access_lifetime = settings.access_token_lifetime
        self.refresh_lifetime = settings.refresh_token_lifetime

    def _encode(
        self,
        claims: dict[str, Any],
        secret: str,
        lifetime: timedelta,
        now: Optional[datetime] = None,
    ) -> IssuedToken:
        issued_at = now or utcnow()
        expires_at = issued_at + lifetime
        payload = {**claims, "iat": issued_at, "exp": expires_at}
        return IssuedToken(
            token=jwt.encode(payload, secret, algorithm=self.algorithm),
            expires_at=expires_at,
        )

    def issue_access(self, user_id: str, role: str, now: Optional[datetime] = None) -> IssuedToken:
        """Create an access token carrying the user id and role."""
        claims = {"sub": str(user_id), "role": role, "type": ACCESS_TOKEN_TYPE}
        return self._encode(claims, self.access_secret, self.access_lifetime, now)

    def issue_refresh(self, user_id: str, now: Optional[datetime] = None) -> IssuedToken:
        """
        Create a refresh token for a user.

        The random ``jti`` keeps every refresh token string unique, even for
        two logins of the same user within the same second.
        """
        claims = {"sub": str(user_id), "jti": uuid4().hex, "type": REFRESH_TOKEN_TYPE}
        return self._encode(claims, self.refresh_secret, self.refresh_lifetime, now)

    def _verify_typed(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        claims = verify_token(token, secret, self.algorithm)
        if claims.get("type") != expected_type or not claims.get("sub"):
            raise InvalidTokenSignature()
        return claims

    def verify_access(self, token: str) -> dict[str, Any]:
        return self._verify_typed(token, self.access_secret, ACCESS_TOKEN_TYPE)

    def verify_refresh(self, token: str) -> dict[str, Any]:
        return self._verify_typed(token, self.refresh_secret, REFRESH_TOKEN_TYPE)
