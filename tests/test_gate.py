"""Unit tests for pengaduan.services.gate: header parsing, token failures and user re-fetch."""

import unittest
from datetime import UTC, datetime, timedelta

from pengaduan.core.errors import ForbiddenError, UnauthenticatedError
from pengaduan.core.security import TokenCodec
from pengaduan.models.user import Role, User
from pengaduan.services.gate import (
    MSG_BAD_FORMAT,
    MSG_EXPIRED,
    MSG_INVALID,
    MSG_NO_TOKEN,
    MSG_USER_NOT_FOUND,
    authenticate_bearer,
    parse_bearer,
)
from tests.helpers import insert_user, make_codec, make_database


class TestParseBearer(unittest.TestCase):
    def test_missing_header(self) -> None:
        for value in (None, "", "   "):
            with self.subTest(value=value):
                with self.assertRaises(UnauthenticatedError) as ctx:
                    parse_bearer(value)
                self.assertEqual(ctx.exception.message, MSG_NO_TOKEN)

    def test_bad_format(self) -> None:
        for value in ("Bearer", "Token abc", "Bearer a b", "abc"):
            with self.subTest(value=value):
                with self.assertRaises(UnauthenticatedError) as ctx:
                    parse_bearer(value)
                self.assertEqual(ctx.exception.message, MSG_BAD_FORMAT)

    def test_scheme_is_case_insensitive(self) -> None:
        self.assertEqual(parse_bearer("Bearer abc.def.ghi"), "abc.def.ghi")
        self.assertEqual(parse_bearer("bearer abc.def.ghi"), "abc.def.ghi")


class TestAuthenticateBearer(unittest.TestCase):
    def setUp(self) -> None:
        self.database = make_database()
        self.db = self.database.session()
        self.codec = make_codec()
        self.user = insert_user(self.database, "siti@x.com", "1111222233334444", nama="Siti")

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()

    def _token(self, **kwargs: object) -> str:
        return self.codec.issue(subject_id=self.user.id, email=self.user.email, role=Role.CITIZEN, **kwargs)

    def test_valid_token_returns_public_user(self) -> None:
        current = authenticate_bearer(f"Bearer {self._token()}", self.codec, self.db)
        self.assertEqual(current.id, self.user.id)
        self.assertEqual(current.email, "siti@x.com")
        self.assertIs(current.role, Role.CITIZEN)
        self.assertNotIn("password_hash", current.model_dump())

    def test_expired_token(self) -> None:
        token = self._token(now=datetime.now(UTC) - timedelta(days=8))
        with self.assertRaises(UnauthenticatedError) as ctx:
            authenticate_bearer(f"Bearer {token}", self.codec, self.db)
        self.assertEqual(ctx.exception.message, MSG_EXPIRED)

    def test_tampered_token(self) -> None:
        header, payload, signature = self._token().split(".")
        signature = ("B" if signature[0] == "A" else "A") + signature[1:]
        with self.assertRaises(UnauthenticatedError) as ctx:
            authenticate_bearer(f"Bearer {header}.{payload}.{signature}", self.codec, self.db)
        self.assertEqual(ctx.exception.message, MSG_INVALID)

    def test_token_from_other_server(self) -> None:
        other = TokenCodec(secret="another-secret-key-of-sufficient-length")
        token = other.issue(subject_id=self.user.id, email=self.user.email, role=Role.ADMIN)
        with self.assertRaises(UnauthenticatedError) as ctx:
            authenticate_bearer(f"Bearer {token}", self.codec, self.db)
        self.assertEqual(ctx.exception.message, MSG_INVALID)

    def test_malformed_token(self) -> None:
        with self.assertRaises(UnauthenticatedError) as ctx:
            authenticate_bearer("Bearer not-a-jwt", self.codec, self.db)
        self.assertEqual(ctx.exception.message, MSG_INVALID)

    def test_unknown_subject_is_forbidden(self) -> None:
        token = self.codec.issue(subject_id=9999, email="ghost@x.com", role=Role.ADMIN)
        with self.assertRaises(ForbiddenError) as ctx:
            authenticate_bearer(f"Bearer {token}", self.codec, self.db)
        self.assertEqual(ctx.exception.message, MSG_USER_NOT_FOUND)

    def test_role_comes_from_store_not_token(self) -> None:
        token = self._token()
        self.db.query(User).filter(User.id == self.user.id).update({"role": Role.ADMIN.value})
        self.db.commit()
        current = authenticate_bearer(f"Bearer {token}", self.codec, self.db)
        self.assertIs(current.role, Role.ADMIN)

    def test_admin_claim_in_token_does_not_grant_admin(self) -> None:
        token = self.codec.issue(subject_id=self.user.id, email=self.user.email, role=Role.ADMIN)
        current = authenticate_bearer(f"Bearer {token}", self.codec, self.db)
        self.assertIs(current.role, Role.CITIZEN)


if __name__ == "__main__":
    unittest.main()
