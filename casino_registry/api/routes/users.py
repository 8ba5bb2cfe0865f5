"""
User routes: account management and public self-registration.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from casino_registry.api.deps import CurrentUserDep, PaginationDep, SessionDep
from casino_registry.core.logging import get_logger
from casino_registry.models.user import UserRole, UserStatus
from casino_registry.schemas.common import MessageResponse, Page
from casino_registry.schemas.user import (
    UserCreate,
    UserFilter,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from casino_registry.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def get_user_filter(
    role: Optional[UserRole] = None,
    user_status: Annotated[Optional[UserStatus], Query(alias="status")] = None,
) -> UserFilter:
    return UserFilter(role=role, status=user_status)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserRegister, session: SessionDep) -> UserResponse:
    """
    Register a new account without authentication.

    The account is always an active technician.

    Raises:
        Conflict: If the email is already registered
    """
    user = UserService.register(session, user_in)
    logger.info(f"New user registered: {user.id}")
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(current_user: CurrentUserDep, session: SessionDep) -> UserResponse:
    """
    Get current user's profile.

    Args:
        current_user: Current authenticated user
        session: Database session

    Returns:
        User profile data
    """
    return UserResponse.model_validate(UserService.require(session, current_user.id))


@router.get("", response_model=Page[UserResponse])
def list_users(
    current_user: CurrentUserDep,
    session: SessionDep,
    filters: Annotated[UserFilter, Depends(get_user_filter)],
    pagination: PaginationDep,
) -> Page[UserResponse]:
    users, meta = UserService.get_all(session, filters, pagination)
    return Page[UserResponse](
        data=[UserResponse.model_validate(u) for u in users],
        pagination=meta,
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(current_user: CurrentUserDep, user_in: UserCreate, session: SessionDep) -> UserResponse:
    """Create an account on behalf of the authenticated user."""
    user = UserService.create(session, user_in, created_by=current_user.id)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(current_user: CurrentUserDep, user_id: str, session: SessionDep) -> UserResponse:
    return UserResponse.model_validate(UserService.require(session, user_id))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    current_user: CurrentUserDep,
    user_id: str,
    user_in: UserUpdate,
    session: SessionDep,
) -> UserResponse:
    return UserResponse.model_validate(UserService.update(session, user_id, user_in))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(current_user: CurrentUserDep, user_id: str, session: SessionDep) -> MessageResponse:
    """
    Delete a user and their sessions.

    Raises:
        Conflict: If records created by the user still reference them
    """
    UserService.delete(session, user_id)
    return MessageResponse(message="User deleted successfully")
