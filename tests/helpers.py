"""Shared helpers: isolated in-memory databases and sample users."""

from sqlalchemy.orm import Session, sessionmaker

from app.core.database import build_engine
from app.core.security import hash_password
from app.models import Base, User
from app.services.user_store import UserStore


def memory_session_factory() -> "sessionmaker[Session]":
    """Fresh in-memory SQLite database with the users table created."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(
    store: UserStore,
    username: str = "jdoe",
    password: str = "secret123",
    role: str = "user",
) -> User:
    """Insert a user with a real bcrypt hash (low cost)."""
    return store.create(
        username=username,
        firstname="Jane",
        lastname="Doe",
        password_hash=hash_password(password, rounds=4),
        role=role,
    )
