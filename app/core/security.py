"""Password hashing and JWT issuance/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import get_settings

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ("id", "username", "role")


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, expired, or missing claims."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried inside a session token."""

    id: int
    username: str
    role: str


class TokenCodec:
    """
    Issues and verifies signed, expiring JWTs.

    The signing key is injected at construction; nothing here reads global state.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=1)) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: TokenClaims, issued_at: datetime | None = None) -> str:
        """Create a token carrying claims plus iat and exp (iat + ttl)."""
        now = issued_at or datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": claims.id,
            "username": claims.username,
            "role": claims.role,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token; return its claims.
        Raises InvalidTokenError on bad signature, malformed input, expiry or missing claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", *REQUIRED_CLAIMS]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired", e) from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError("Invalid token", e) from e

        try:
            return TokenClaims(
                id=int(payload["id"]),
                username=str(payload["username"]),
                role=str(payload["role"]),
            )
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token payload", e) from e


@lru_cache
def get_token_codec() -> TokenCodec:
    """Return the process-wide codec configured from settings."""
    settings = get_settings()
    return TokenCodec(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
