"""Unit tests for the authenticate and require_admin dependencies in app.api.auth."""

import unittest
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from app.api.auth import authenticate, require_admin
from app.core.security import TokenClaims, TokenCodec
from app.schemas.auth import CurrentUser


def _request() -> MagicMock:
    request = MagicMock()
    request.state = SimpleNamespace()
    return request


class TestAuthenticate(unittest.TestCase):
    def setUp(self) -> None:
        self.codec = TokenCodec("dependency-test-secret", ttl=timedelta(hours=1))

    def _bearer(self, token: str) -> HTTPAuthorizationCredentials:
        return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

    def test_attaches_identity_to_request_state(self) -> None:
        request = _request()
        token = self.codec.issue(TokenClaims(id=3, username="jdoe", role="user"))
        current = authenticate(request, self._bearer(token), self.codec)
        self.assertEqual(current, CurrentUser(id=3, username="jdoe", role="user"))
        self.assertIs(request.state.user, current)

    def test_missing_credentials(self) -> None:
        request = _request()
        with self.assertRaises(HTTPException) as ctx:
            authenticate(request, None, self.codec)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.detail, "Unauthorized")
        self.assertFalse(hasattr(request.state, "user"))

    def test_invalid_token_leaves_state_untouched(self) -> None:
        request = _request()
        with self.assertRaises(HTTPException) as ctx:
            authenticate(request, self._bearer("garbage"), self.codec)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.detail, "Invalid token")
        self.assertFalse(hasattr(request.state, "user"))


class TestRequireAdmin(unittest.TestCase):
    def test_admin_passes(self) -> None:
        admin = CurrentUser(id=1, username="haulmatic", role="admin")
        self.assertIs(require_admin(admin), admin)

    def test_user_rejected(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            require_admin(CurrentUser(id=2, username="jdoe", role="user"))
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.detail, "Access denied. Admins only.")


if __name__ == "__main__":
    unittest.main()
