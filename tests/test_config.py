"""Unit tests for app.core.config.Settings validation."""

import unittest

from pydantic import SecretStr, ValidationError

from app.core.config import Settings


class TestSettingsDefaults(unittest.TestCase):
    def test_bootstrap_defaults(self) -> None:
        settings = Settings(DATABASE_URL="sqlite://")
        self.assertEqual(settings.BOOTSTRAP_ADMIN_USERNAME, "haulmatic")
        self.assertEqual(settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(), "123456")
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")

    def test_reset_only_in_dev(self) -> None:
        self.assertTrue(Settings(APP_ENV="dev", DB_RESET_ON_STARTUP=True).reset_db_on_startup)
        self.assertFalse(Settings(APP_ENV="dev", DB_RESET_ON_STARTUP=False).reset_db_on_startup)
        self.assertFalse(Settings(APP_ENV="prod", DB_RESET_ON_STARTUP=True).reset_db_on_startup)

    def test_normalizes_values(self) -> None:
        settings = Settings(LOG_LEVEL="debug", API_PREFIX="/api/", DATABASE_URL="  sqlite://  ")
        self.assertEqual(settings.LOG_LEVEL, "DEBUG")
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.DATABASE_URL, "sqlite://")


class TestSettingsValidation(unittest.TestCase):
    def test_rejects_invalid_values(self) -> None:
        cases = {
            "DATABASE_URL": "mysql://root@localhost/db",
            "JWT_SECRET": SecretStr("   "),
            "JWT_EXPIRE_MINUTES": 0,
            "BCRYPT_ROUNDS": 3,
            "PORT": 70000,
            "LOG_LEVEL": "chatty",
            "API_PREFIX": "api",
            "BOOTSTRAP_ADMIN_USERNAME": " ",
            "BOOTSTRAP_ADMIN_PASSWORD": SecretStr(""),
        }
        for field, value in cases.items():
            with self.subTest(field=field), self.assertRaises(ValidationError):
                Settings(**{field: value})


if __name__ == "__main__":
    unittest.main()
