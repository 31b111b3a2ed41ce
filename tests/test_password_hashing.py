"""Tests for the passlib-backed password hasher."""

from __future__ import annotations

import unittest

from accounts.exceptions import InvalidInput
from accounts.security import PasswordHasher


class PasswordHashingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher()

    def test_hash_and_verify_round_trip(self) -> None:
        hashed = self.hasher.hash("Password123!")
        self.assertNotEqual(hashed, "Password123!")
        self.assertTrue(self.hasher.verify("Password123!", hashed))
        self.assertFalse(self.hasher.verify("password123!", hashed))

    def test_each_hash_uses_a_fresh_salt(self) -> None:
        first = self.hasher.hash("Password123!")
        second = self.hasher.hash("Password123!")
        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify("Password123!", first))
        self.assertTrue(self.hasher.verify("Password123!", second))

    def test_hash_rejects_missing_password(self) -> None:
        with self.assertRaises(InvalidInput):
            self.hasher.hash(None)

    def test_verify_returns_false_for_missing_password(self) -> None:
        hashed = self.hasher.hash("Password123!")
        self.assertFalse(self.hasher.verify(None, hashed))

    def test_verify_rejects_missing_hash(self) -> None:
        with self.assertRaises(InvalidInput) as ctx:
            self.hasher.verify("Password123!", None)
        self.assertEqual(ctx.exception.message, "Encrypted password cannot be null")

    def test_verify_treats_unrecognised_hash_as_mismatch(self) -> None:
        self.assertFalse(self.hasher.verify("Password123!", "not-a-hash"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
