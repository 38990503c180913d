"""JWT login and auth dependencies (authenticate, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import InvalidTokenError, TokenCodec, get_token_codec
from app.models import ROLE_ADMIN
from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from app.services import users as user_service
from app.services.user_store import UserServiceError, UserStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    """Dependency: a UserStore bound to the request's DB session."""
    return UserStore(db)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    store: Annotated[UserStore, Depends(get_user_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token = user_service.login(store, codec, body.username, body.password)
    except UserServiceError as e:
        # Unknown user and wrong password are both reported as 400.
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return LoginResponse(message="Login successful", token=token)


def authenticate(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.
    Also stored on request.state.user. Raises 401 if missing or invalid.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = codec.verify(credentials.credentials)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    current_user = CurrentUser(id=claims.id, username=claims.username, role=claims.role)
    request.state.user = current_user
    return current_user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(authenticate)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admins only.",
        )
    return current_user
