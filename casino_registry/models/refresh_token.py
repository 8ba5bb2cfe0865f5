"""
Issued refresh tokens. A token is usable only while its row exists and has not expired.
"""

from datetime import datetime

from sqlmodel import Field, SQLModel

from casino_registry.models.base import new_id, utc_now


class RefreshToken(SQLModel, table=True):
    __tablename__ = "refresh_tokens"  # type: ignore

    id: str = Field(default_factory=new_id, primary_key=True)
    token: str = Field(unique=True, index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)
