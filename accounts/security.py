"""Password hashing helpers for stored user credentials."""
from __future__ import annotations

from typing import Optional

from passlib.context import CryptContext

from .exceptions import InvalidInput


class PasswordHasher:
    """Salted one-way hashing backed by a passlib ``CryptContext``.

    The hasher holds no mutable state of its own; a single instance can be
    shared between requests or injected wherever hashing is needed.
    """

    def __init__(self, context: Optional[CryptContext] = None) -> None:
        self._context = context or CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def hash(self, raw: Optional[str]) -> str:
        """Return a freshly salted hash token for ``raw``."""

        if raw is None:
            raise InvalidInput("Password cannot be null")
        return self._context.hash(raw)

    def verify(self, raw: Optional[str], hash_token: Optional[str]) -> bool:
        """Return ``True`` when ``raw`` hashes to ``hash_token``."""

        if raw is None:
            return False
        if hash_token is None:
            raise InvalidInput("Encrypted password cannot be null")

        try:
            return self._context.verify(raw, hash_token)
        except (ValueError, TypeError):
            return False


__all__ = ["PasswordHasher"]
