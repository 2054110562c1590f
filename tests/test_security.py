"""Unit tests for pengaduan.core.security: bcrypt password hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from pengaduan.core.security import (
    BadSignatureError,
    MalformedTokenError,
    PasswordHasher,
    TokenCodec,
    TokenError,
    TokenExpiredError,
)
from pengaduan.models.user import Role
from tests.helpers import TEST_JWT_SECRET


def _flip_first_char(segment: str) -> str:
    return ("B" if segment[0] == "A" else "A") + segment[1:]


class TestPasswordHasher(unittest.TestCase):
    """hash/verify round trip, salting and cost changes."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_digest_is_not_the_plain_secret(self) -> None:
        digest = self.hasher.hash("secret1")
        self.assertNotEqual(digest, "secret1")
        self.assertTrue(digest.startswith("$2"))

    def test_verify_round_trip(self) -> None:
        digest = self.hasher.hash("secret1")
        self.assertTrue(self.hasher.verify("secret1", digest))

    def test_wrong_secret_returns_false(self) -> None:
        digest = self.hasher.hash("secret1")
        self.assertFalse(self.hasher.verify("secret2", digest))

    def test_hash_is_not_deterministic(self) -> None:
        self.assertNotEqual(self.hasher.hash("secret1"), self.hasher.hash("secret1"))

    def test_malformed_digest_returns_false(self) -> None:
        self.assertFalse(self.hasher.verify("secret1", "not-a-bcrypt-digest"))
        self.assertFalse(self.hasher.verify("secret1", ""))

    def test_old_digest_still_verifies_after_cost_change(self) -> None:
        old_digest = PasswordHasher(rounds=4).hash("secret1")
        stronger = PasswordHasher(rounds=5)
        self.assertTrue(stronger.verify("secret1", old_digest))
        self.assertIn("$05$", stronger.hash("secret1"))

    def test_long_secret_is_accepted(self) -> None:
        secret = "x" * 100
        digest = self.hasher.hash(secret)
        self.assertTrue(self.hasher.verify(secret, digest))


class TestTokenCodecIssueVerify(unittest.TestCase):
    """issue() embeds id, email, role, iat, exp; verify() returns them."""

    def setUp(self) -> None:
        self.codec = TokenCodec(secret=TEST_JWT_SECRET, expire_minutes=10080)

    def test_round_trip_claims(self) -> None:
        token = self.codec.issue(subject_id=42, email="budi@x.com", role=Role.CITIZEN)
        claims = self.codec.verify(token)
        self.assertEqual(claims.subject_id, 42)
        self.assertEqual(claims.email, "budi@x.com")
        self.assertIs(claims.role, Role.CITIZEN)

    def test_default_expiry_is_seven_days(self) -> None:
        token = self.codec.issue(subject_id=1, email="a@b.c", role="admin")
        claims = self.codec.verify(token)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(days=7))
        self.assertIs(claims.role, Role.ADMIN)

    def test_custom_ttl(self) -> None:
        token = self.codec.issue(subject_id=1, email="a@b.c", role=Role.CITIZEN, ttl=timedelta(minutes=5))
        claims = self.codec.verify(token)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(minutes=5))


class TestTokenCodecFailures(unittest.TestCase):
    """Expired, mis-signed and malformed tokens raise distinguishable errors."""

    def setUp(self) -> None:
        self.codec = TokenCodec(secret=TEST_JWT_SECRET)

    def test_expired_token(self) -> None:
        token = self.codec.issue(
            subject_id=1,
            email="a@b.c",
            role=Role.CITIZEN,
            now=datetime.now(UTC) - timedelta(days=8),
        )
        with self.assertRaises(TokenExpiredError):
            self.codec.verify(token)

    def test_token_expiring_now_is_rejected(self) -> None:
        token = self.codec.issue(subject_id=1, email="a@b.c", role=Role.CITIZEN, ttl=timedelta(seconds=-1))
        with self.assertRaises(TokenExpiredError):
            self.codec.verify(token)

    def test_tampered_signature(self) -> None:
        token = self.codec.issue(subject_id=1, email="a@b.c", role=Role.CITIZEN)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, _flip_first_char(signature)])
        with self.assertRaises(BadSignatureError):
            self.codec.verify(tampered)

    def test_tampered_payload_keeps_old_signature(self) -> None:
        token = self.codec.issue(subject_id=1, email="a@b.c", role=Role.CITIZEN)
        forged = TokenCodec(secret="another-secret-key-of-sufficient-length").issue(
            subject_id=1, email="a@b.c", role=Role.ADMIN
        )
        header, _, signature = token.split(".")
        _, forged_payload, _ = forged.split(".")
        with self.assertRaises(BadSignatureError):
            self.codec.verify(".".join([header, forged_payload, signature]))

    def test_token_signed_with_other_secret(self) -> None:
        other = TokenCodec(secret="another-secret-key-of-sufficient-length")
        token = other.issue(subject_id=1, email="a@b.c", role=Role.CITIZEN)
        with self.assertRaises(BadSignatureError):
            self.codec.verify(token)

    def test_garbage_is_malformed(self) -> None:
        for token in ("", "abc", "a.b.c", "not a jwt at all"):
            with self.subTest(token=token):
                with self.assertRaises(MalformedTokenError):
                    self.codec.verify(token)

    def test_missing_subject_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"email": "a@b.c", "role": "admin", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(MalformedTokenError):
            self.codec.verify(token)

    def test_non_numeric_subject_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "budi", "email": "a@b.c", "role": "admin", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(MalformedTokenError):
            self.codec.verify(token)

    def test_unknown_role_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "1", "email": "a@b.c", "role": "superuser", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(MalformedTokenError):
            self.codec.verify(token)

    def test_all_failures_share_a_base(self) -> None:
        for cls in (TokenExpiredError, BadSignatureError, MalformedTokenError):
            self.assertTrue(issubclass(cls, TokenError))


if __name__ == "__main__":
    unittest.main()
