"""Startup initialization: schema creation and the bootstrap admin account."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.models import Base
from app.services.user_store import UserStore
from app.services.users import ensure_bootstrap_admin

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def init_db(engine: Engine, session_factory: "sessionmaker[Session]", settings: "Settings") -> None:
    """
    Prepare the users table and make sure the bootstrap admin exists.

    In dev with DB_RESET_ON_STARTUP the schema is dropped and recreated, wiping
    every user. Otherwise missing tables are created and existing data is kept,
    so repeated starts are idempotent.
    """
    if settings.reset_db_on_startup:
        logger.warning("Resetting database schema (APP_ENV=dev, DB_RESET_ON_STARTUP=true)")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = session_factory()
    try:
        inserted = ensure_bootstrap_admin(UserStore(db), settings)
    finally:
        db.close()
    if not inserted:
        logger.info(
            "Bootstrap admin already present",
            extra={"username": settings.BOOTSTRAP_ADMIN_USERNAME},
        )
