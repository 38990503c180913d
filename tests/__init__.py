"""Test package. Settings are read at import time, so test env is fixed here first."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_RESET_ON_STARTUP", "true")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
