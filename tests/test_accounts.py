"""Unit tests for tripcast.services.accounts: validation, hashing at rest, uniform auth failures."""

import unittest

from tripcast.core.database import create_db_engine, create_session_factory, init_db
from tripcast.core.errors import AuthFailure, ConstraintViolation, ValidationError
from tripcast.core.security import verify_password
from tripcast.models import Role, User
from tripcast.services.accounts import (
    authenticate,
    create_user,
    validate_email,
    validate_password,
)
from tripcast.services.users import list_users


class AccountsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_db_engine("sqlite://")
        init_db(self.engine)
        self.db = create_session_factory(self.engine)()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def _create(
        self,
        email: str = "ada@example.com",
        password: str = "secret-pass",
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        role: Role = Role.USER,
    ) -> User:
        return create_user(self.db, email, password, first_name, last_name, role=role)


class TestCreateAndAuthenticate(AccountsTestCase):
    def test_create_then_authenticate(self) -> None:
        self._create(email="ada@example.com", password="secret-pass")
        user = authenticate(self.db, "ada@example.com", "secret-pass")
        self.assertEqual(user.email, "ada@example.com")

    def test_password_is_hashed_at_rest(self) -> None:
        user = self._create(password="secret-pass")
        stored = self.db.get(User, user.id).password_hash
        self.assertNotEqual(stored, "secret-pass")
        self.assertTrue(stored.startswith("$2"))
        self.assertTrue(verify_password("secret-pass", stored))

    def test_default_role_is_user(self) -> None:
        user = self._create()
        self.assertEqual(user.role, Role.USER)

    def test_admin_role_can_be_set(self) -> None:
        user = self._create(role=Role.ADMIN)
        self.assertEqual(user.role, Role.ADMIN)

    def test_names_are_stored_trimmed(self) -> None:
        user = self._create(first_name="  Ada ", last_name=" Lovelace ")
        self.assertEqual((user.first_name, user.last_name), ("Ada", "Lovelace"))


class TestDuplicateEmail(AccountsTestCase):
    def test_second_account_with_same_email_fails(self) -> None:
        self._create(email="dup@example.com")
        with self.assertRaises(ConstraintViolation) as ctx:
            self._create(email="dup@example.com", password="another-pass")
        self.assertEqual(ctx.exception.message, "Email already in use.")
        emails = [u.email for u in list_users(self.db)]
        self.assertEqual(emails.count("dup@example.com"), 1)
        self.assertEqual(len(emails), 1)


class TestPasswordLength(AccountsTestCase):
    def test_boundaries(self) -> None:
        for length in (5, 65):
            with self.subTest(length=length):
                with self.assertRaises(ValidationError):
                    validate_password("p" * length)
        for length in (6, 64):
            with self.subTest(length=length):
                validate_password("p" * length)

    def test_messages(self) -> None:
        with self.assertRaises(ValidationError) as short:
            validate_password("12345")
        self.assertIn("6 characters or more", short.exception.message)
        with self.assertRaises(ValidationError) as long:
            validate_password("x" * 65)
        self.assertIn("64 characters or less", long.exception.message)

    def test_create_user_enforces_boundaries(self) -> None:
        with self.assertRaises(ValidationError):
            self._create(email="five@example.com", password="p" * 5)
        self._create(email="six@example.com", password="p" * 6)
        self._create(email="sixtyfour@example.com", password="p" * 64)
        with self.assertRaises(ValidationError):
            self._create(email="sixtyfive@example.com", password="p" * 65)
        self.assertEqual(len(list_users(self.db)), 2)

    def test_multibyte_passwords_differing_late_are_distinct(self) -> None:
        # 36 two-byte characters fill the first 72 bytes; only the tail differs.
        stored = "\u00e9" * 36 + "a" * 28
        self._create(email="accent@example.com", password=stored)
        with self.assertRaises(AuthFailure):
            authenticate(self.db, "accent@example.com", "\u00e9" * 36 + "b" * 28)
        user = authenticate(self.db, "accent@example.com", stored)
        self.assertEqual(user.email, "accent@example.com")

    def test_longest_password_authenticates(self) -> None:
        self._create(email="long@example.com", password="q" * 64)
        user = authenticate(self.db, "long@example.com", "q" * 64)
        self.assertEqual(user.email, "long@example.com")


class TestInputValidation(AccountsTestCase):
    def test_invalid_email_rejected(self) -> None:
        for email in ("", "not-an-email", "a@", "@example.com", "two@@example.com"):
            with self.subTest(email=email):
                with self.assertRaises(ValidationError) as ctx:
                    validate_email(email)
                self.assertEqual(ctx.exception.message, "Please enter a valid email address.")

    def test_valid_email_is_normalized(self) -> None:
        self.assertEqual(validate_email("  ada@Example.COM "), "ada@example.com")

    def test_missing_first_name_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self._create(first_name="   ")
        self.assertEqual(list_users(self.db), [])


class TestAuthFailures(AccountsTestCase):
    def test_wrong_password_and_unknown_email_are_indistinguishable(self) -> None:
        self._create(email="ada@example.com", password="secret-pass")
        with self.assertRaises(AuthFailure) as wrong_password:
            authenticate(self.db, "ada@example.com", "wrong-pass")
        with self.assertRaises(AuthFailure) as unknown_email:
            authenticate(self.db, "nobody@example.com", "secret-pass")
        self.assertEqual(wrong_password.exception.message, unknown_email.exception.message)
        self.assertEqual(wrong_password.exception.status_code, unknown_email.exception.status_code)
        self.assertIs(type(wrong_password.exception), type(unknown_email.exception))

    def test_malformed_email_is_a_plain_auth_failure(self) -> None:
        with self.assertRaises(AuthFailure):
            authenticate(self.db, "not-an-email", "whatever")

    def test_empty_password_fails(self) -> None:
        self._create(email="ada@example.com", password="secret-pass")
        with self.assertRaises(AuthFailure):
            authenticate(self.db, "ada@example.com", "")


if __name__ == "__main__":
    unittest.main()
