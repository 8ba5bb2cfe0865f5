"""
User service layer implementing business logic for user operations.
Separates business logic from API routes and database operations.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlmodel import Session, col, select

from casino_registry.core.config import Settings
from casino_registry.core.errors import Conflict, NotFound
from casino_registry.core.logging import get_logger
from casino_registry.core.security import (
    as_utc,
    dummy_verify,
    get_password_hash,
    utcnow,
    verify_password,
)
from casino_registry.models.user import User, UserRole, UserStatus
from casino_registry.schemas.common import PaginationMeta, PaginationParams
from casino_registry.schemas.user import UserCreate, UserFilter, UserRegister, UserUpdate
from casino_registry.services.cascade import delete_with_dependents
from casino_registry.services.pagination import paginate

logger = get_logger(__name__)


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[User]:
        """
        Retrieve a user by email address.

        Args:
            session: Database session
            email: Email address to search for (case-insensitive)

        Returns:
            User if found, None otherwise
        """
        statement = select(User).where(User.email == email.strip().lower())
        return session.exec(statement).first()

    @staticmethod
    def get_by_id(session: Session, user_id: str) -> Optional[User]:
        """
        Retrieve a user by ID.

        Args:
            session: Database session
            user_id: User ID to search for

        Returns:
            User if found, None otherwise
        """
        return session.get(User, user_id)

    @staticmethod
    def require(session: Session, user_id: str) -> User:
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def create(
        session: Session,
        user_create: UserCreate,
        created_by: Optional[str] = None,
    ) -> User:
        """
        Create a new user with hashed password.

        Args:
            session: Database session
            user_create: User creation data, including role and status
            created_by: Id of the authenticated user creating the account

        Returns:
            Created user instance

        Raises:
            Conflict: If the email is already registered
        """
        if UserService.get_by_email(session, user_create.email):
            raise Conflict("User with this email already exists")

        db_user = User(
            name=user_create.name.strip(),
            email=user_create.email.lower(),
            hashed_password=get_password_hash(user_create.password),
            role=user_create.role,
            status=user_create.status,
            created_by=created_by,
        )
        session.add(db_user)
        session.commit()
        session.refresh(db_user)
        logger.info(f"User created: {db_user.id} ({db_user.role.value})")
        return db_user

    @staticmethod
    def register(session: Session, user_register: UserRegister) -> User:
        """Self-registration always yields an active technician."""
        user_create = UserCreate(
            name=user_register.name,
            email=user_register.email,
            password=user_register.password,
            role=UserRole.TECHNICIAN,
            status=UserStatus.ACTIVE,
        )
        return UserService.create(session, user_create)

    @staticmethod
    def get_all(
        session: Session,
        filters: UserFilter,
        params: PaginationParams,
    ) -> Tuple[List[User], PaginationMeta]:
        statement = select(User)
        if filters.role is not None:
            statement = statement.where(User.role == filters.role)
        if filters.status is not None:
            statement = statement.where(User.status == filters.status)
        statement = statement.order_by(col(User.created_at).desc())
        return paginate(session, statement, params)

    @staticmethod
    def update(session: Session, user_id: str, user_update: UserUpdate) -> User:
        """
        Apply a partial update. A new password is hashed before storing.

        Raises:
            NotFound: If the user does not exist
            Conflict: If the new email belongs to another user
        """
        user = UserService.require(session, user_id)
        changes = user_update.model_dump(exclude_unset=True)

        if changes.get("email"):
            changes["email"] = changes["email"].lower()
            existing = UserService.get_by_email(session, changes["email"])
            if existing and existing.id != user.id:
                raise Conflict("User with this email already exists")

        password = changes.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)

        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value)
        user.updated_at = utcnow()

        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    @staticmethod
    def delete(session: Session, user_id: str) -> None:
        """Delete a user and their refresh tokens."""
        UserService.require(session, user_id)
        delete_with_dependents(session, User, user_id)

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> Optional[User]:
        """
        Authenticate a user by email and password.

        Unknown email, wrong password and inactive account all return None;
        a dummy hash check keeps the unknown-email path as slow as the others.

        Args:
            session: Database session
            email: User's email
            password: Plain text password

        Returns:
            User if authentication successful, None otherwise
        """
        user = UserService.get_by_email(session, email)
        if not user:
            dummy_verify()
            return None
        if not verify_password(password, user.hashed_password):
            return None
        if not user.is_active:
            return None
        return user

    @staticmethod
    def touch_last_seen(
        session: Session,
        user: User,
        debounce_seconds: int,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Record activity on ``last_login`` unless it was written recently.

        Returns:
            True if a write happened
        """
        now = now or utcnow()
        if user.last_login is not None and debounce_seconds > 0:
            if now - as_utc(user.last_login) < timedelta(seconds=debounce_seconds):
                return False
        user.last_login = now
        user.updated_at = now
        session.add(user)
        session.commit()
        return True

    @staticmethod
    def ensure_first_superuser(session: Session, settings: Settings) -> Optional[User]:
        """Create the configured administrator if no user has that email yet."""
        if UserService.get_by_email(session, settings.FIRST_SUPERUSER_EMAIL):
            return None
        superuser = UserCreate(
            name=settings.FIRST_SUPERUSER_NAME,
            email=settings.FIRST_SUPERUSER_EMAIL,
            password=settings.FIRST_SUPERUSER_PASSWORD,
            role=UserRole.ADMIN,
        )
        return UserService.create(session, superuser)
