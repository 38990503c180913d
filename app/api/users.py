"""User administration endpoints. Listing needs a token; changes need an admin token."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.auth import authenticate, get_user_store, require_admin
from app.core.config import settings
from app.schemas.auth import CurrentUser
from app.schemas.users import (
    MessageResponse,
    UserCreate,
    UserCreatedResponse,
    UserPublic,
    UserUpdate,
    UserUpdatedResponse,
)
from app.services import users as user_service
from app.services.user_store import (
    ProtectedUserError,
    UserNotFoundError,
    UserServiceError,
    UserStore,
)

router = APIRouter()


def _to_http_error(e: UserServiceError) -> HTTPException:
    if isinstance(e, UserNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, ProtectedUserError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("", response_model=list[UserPublic])
def list_users(
    _user: Annotated[CurrentUser, Depends(authenticate)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> list[UserPublic]:
    """List all users without passwords. Any authenticated user may call this."""
    return [UserPublic(**row) for row in user_service.list_users(store)]


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserCreatedResponse:
    """Create a user (admin only). Role defaults to 'user'."""
    try:
        user = user_service.create_user(store, body)
    except UserServiceError as e:
        raise _to_http_error(e) from e
    return UserCreatedResponse(id=user.id, username=user.username, role=user.role)


@router.put("/{user_id}", response_model=UserUpdatedResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserUpdatedResponse:
    """
    Update any subset of a user's fields (admin only). The password hash is not
    returned. The bootstrap admin cannot be given another role.
    """
    try:
        user = user_service.update_user(
            store, user_id, body, bootstrap_username=settings.BOOTSTRAP_ADMIN_USERNAME
        )
    except UserServiceError as e:
        raise _to_http_error(e) from e
    return UserUpdatedResponse(
        message="User updated successfully",
        user=UserPublic.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> MessageResponse:
    """Delete a user (admin only). Users with role 'admin' cannot be deleted."""
    try:
        user_service.delete_user(store, user_id)
    except UserServiceError as e:
        raise _to_http_error(e) from e
    return MessageResponse(message="User deleted successfully")
