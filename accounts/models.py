"""Domain models for the user account service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PersonFields:
    """Raw, unhashed fields supplied by a client when creating or updating a user."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@dataclass
class UserRecord:
    """Represents a user account stored in the accounts database.

    ``id`` stays ``None`` until the record has been persisted for the first time.
    """

    name: str
    email: str
    password_hash: str
    id: Optional[str] = None


__all__ = ["PersonFields", "UserRecord"]
