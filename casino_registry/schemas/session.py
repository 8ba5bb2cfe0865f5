"""
Login request and session response schemas.
"""

from pydantic import BaseModel, EmailStr

from casino_registry.schemas.common import APIModel
from casino_registry.schemas.user import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SessionResponse(APIModel):
    """Access token returned to the caller; the refresh token travels in a cookie."""

    access_token: str
    user: UserResponse
