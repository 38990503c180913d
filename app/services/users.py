"""User service: login and admin operations over the user store."""

import logging
from typing import TYPE_CHECKING, Any

from app.core.security import TokenClaims, TokenCodec, hash_password, verify_password
from app.models import ROLE_ADMIN, ROLE_USER, User
from app.schemas.users import UserCreate, UserUpdate
from app.services.user_store import (
    DuplicateUsernameError,
    ProtectedUserError,
    UserNotFoundError,
    UserServiceError,
    UserStore,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Fields copied from an update body when present and non-empty.
_PLAIN_UPDATE_FIELDS = ("username", "firstname", "lastname", "role")


class InvalidCredentialsError(UserServiceError):
    """Raised when the password does not match the stored hash."""

    def __init__(self, message: str = "Invalid password", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class InvalidUserDataError(UserServiceError):
    """Raised when a create request is missing a required field."""

    def __init__(self, message: str = "Invalid data", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


def login(store: UserStore, codec: TokenCodec, username: str, password: str) -> str:
    """
    Verify credentials and return a signed session token.

    Raises UserNotFoundError for an unknown username and InvalidCredentialsError
    for a wrong password.
    """
    user = store.find_by_username(username)
    if user is None:
        logger.info("Login failed", extra={"username": username, "reason": "unknown_user"})
        raise UserNotFoundError()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"username": username, "reason": "bad_password"})
        raise InvalidCredentialsError()
    token = codec.issue(TokenClaims(id=user.id, username=user.username, role=user.role))
    logger.info("Login succeeded", extra={"user_id": user.id, "role": user.role})
    return token


def list_users(store: UserStore) -> list[dict[str, Any]]:
    """All users without password hashes, in creation order."""
    return store.list_excluding_secret()


def create_user(store: UserStore, data: UserCreate) -> User:
    """
    Create a user after validating required fields and username uniqueness.
    Role defaults to 'user'.
    """
    if not (data.username and data.firstname and data.lastname and data.password):
        raise InvalidUserDataError()
    if store.find_by_username(data.username) is not None:
        raise DuplicateUsernameError()
    user = store.create(
        username=data.username,
        firstname=data.firstname,
        lastname=data.lastname,
        password_hash=hash_password(data.password),
        role=data.role or ROLE_USER,
    )
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def update_user(
    store: UserStore,
    user_id: int,
    data: UserUpdate,
    bootstrap_username: str | None = None,
) -> User:
    """
    Partially update a user. Empty or missing fields are left unchanged; a new
    password is hashed before it reaches the store.

    The bootstrap admin (bootstrap_username) keeps role 'admin' so the directory
    always has an undeletable administrator.
    """
    current = store.find_by_id(user_id)
    if current is None:
        raise UserNotFoundError()
    if (
        bootstrap_username is not None
        and current.username == bootstrap_username
        and data.role is not None
        and data.role != ROLE_ADMIN
    ):
        raise ProtectedUserError("Cannot change the role of the default admin user")
    fields: dict[str, Any] = {}
    for name in _PLAIN_UPDATE_FIELDS:
        value = getattr(data, name)
        if value:
            fields[name] = value
    if data.password:
        fields["password_hash"] = hash_password(data.password)
    user = store.update_fields(user_id, fields)
    logger.info(
        "User updated",
        extra={"user_id": user.id, "fields": ",".join(sorted(fields))},
    )
    return user


def delete_user(store: UserStore, user_id: int) -> None:
    """Delete a non-admin user. Admin records are protected."""
    store.delete(user_id)
    logger.info("User deleted", extra={"user_id": user_id})


def ensure_bootstrap_admin(store: UserStore, settings: "Settings") -> bool:
    """
    Insert the configured admin account if no user has its username.
    Returns True when a record was inserted.
    """
    username = settings.BOOTSTRAP_ADMIN_USERNAME
    if store.find_by_username(username) is not None:
        return False
    try:
        store.create(
            username=username,
            firstname=settings.BOOTSTRAP_ADMIN_FIRSTNAME,
            lastname=settings.BOOTSTRAP_ADMIN_LASTNAME,
            password_hash=hash_password(
                settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(),
                rounds=settings.BCRYPT_ROUNDS,
            ),
            role=ROLE_ADMIN,
        )
    except DuplicateUsernameError:
        # Another worker inserted it first.
        return False
    logger.info("Bootstrap admin created", extra={"username": username})
    return True
