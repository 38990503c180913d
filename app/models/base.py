"""SQLAlchemy declarative Base shared by ORM models and Alembic autogenerate."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata holds the users table."""
