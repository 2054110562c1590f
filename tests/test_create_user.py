"""Tests for the create_user operator script."""

import unittest

from pengaduan.models.user import Role, User
from pengaduan.scripts.create_user import main
from tests.helpers import make_database


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.database = make_database()

    def tearDown(self) -> None:
        self.database.dispose()

    def _users(self) -> list[User]:
        db = self.database.session()
        try:
            return db.query(User).all()
        finally:
            db.close()

    def test_creates_admin(self) -> None:
        code = main(
            ["3201000000000001", "Admin Desa", "admin@desa.go.id", "rahasia-admin", "admin"],
            database=self.database,
        )
        self.assertEqual(code, 0)
        users = self._users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].role, Role.ADMIN.value)
        self.assertNotEqual(users[0].password_hash, "rahasia-admin")

    def test_defaults_to_citizen(self) -> None:
        self.assertEqual(main(["3201000000000002", "Warga", "warga@x.com", "pw"], database=self.database), 0)
        self.assertEqual(self._users()[0].role, Role.CITIZEN.value)

    def test_rejects_bad_nik_and_duplicates(self) -> None:
        self.assertEqual(main(["123", "Admin", "admin@x.com", "pw", "admin"], database=self.database), 1)
        self.assertEqual(main(["3201000000000001", "Admin", "admin@x.com", "pw"], database=self.database), 0)
        self.assertEqual(main(["3201000000000001", "Other", "other@x.com", "pw"], database=self.database), 1)
        self.assertEqual(len(self._users()), 1)


if __name__ == "__main__":
    unittest.main()
