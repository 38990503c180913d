"""
Persistence for user records.

UserStore is the only component that creates, mutates or destroys rows in the
users table. It never hashes passwords: callers pass password_hash already hashed.
Username uniqueness is enforced by the unique index, so a concurrent create that
slips past a preceding lookup still fails with DuplicateUsernameError.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, load_only

from app.models import ROLE_ADMIN, ROLE_USER, User

logger = logging.getLogger(__name__)

# Columns callers may change through update_fields.
UPDATABLE_FIELDS = ("username", "firstname", "lastname", "password_hash", "role")

# users.id is a 32-bit INTEGER on PostgreSQL; no row can have an id outside this range.
MIN_USER_ID = -(2**31)
MAX_USER_ID = 2**31 - 1

# Everything except password_hash.
PUBLIC_COLUMNS = (
    User.id,
    User.username,
    User.firstname,
    User.lastname,
    User.role,
    User.created_at,
    User.updated_at,
)


class UserServiceError(Exception):
    """Base class for user store and user service failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class DuplicateUsernameError(UserServiceError):
    """Raised when a username is already taken."""

    def __init__(self, message: str = "Username already exists", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class UserNotFoundError(UserServiceError):
    """Raised when no record matches the given id or username."""

    def __init__(self, message: str = "User not found", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class ProtectedUserError(UserServiceError):
    """Raised when deleting an admin record or demoting the bootstrap admin."""

    def __init__(
        self,
        message: str = "Cannot delete the default admin user",
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause)


class UserStore:
    """Repository for User rows bound to one SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Rejected write violating users unique constraint")
            raise DuplicateUsernameError(cause=e) from e

    def create(
        self,
        *,
        username: str,
        firstname: str,
        lastname: str,
        password_hash: str,
        role: str | None = None,
    ) -> User:
        """Insert a new user. Raises DuplicateUsernameError if the username exists."""
        user = User(
            username=username,
            firstname=firstname,
            lastname=lastname,
            password_hash=password_hash,
            role=role or ROLE_USER,
        )
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        return user

    def find_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> User | None:
        if not MIN_USER_ID <= user_id <= MAX_USER_ID:
            return None
        return self.session.get(User, user_id)

    def list_excluding_secret(self) -> list[dict[str, Any]]:
        """
        Snapshot of all users in insertion (id) order, without password_hash.

        Returned as plain dicts so the hash cannot be lazily loaded afterwards.
        """
        rows = self.session.query(User).options(load_only(*PUBLIC_COLUMNS)).order_by(User.id).all()
        return [
            {column.key: getattr(row, column.key) for column in PUBLIC_COLUMNS}
            for row in rows
        ]

    def update_fields(self, user_id: int, fields: dict[str, Any]) -> User:
        """
        Apply only the supplied fields. password_hash must already be hashed.
        Raises UserNotFoundError or DuplicateUsernameError.
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        for name, value in fields.items():
            setattr(user, name, value)
        self._commit()
        self.session.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Remove a user. Raises UserNotFoundError, or ProtectedUserError for any admin."""
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        if user.role == ROLE_ADMIN:
            raise ProtectedUserError()
        self.session.delete(user)
        self.session.commit()
