"""Conversion between client-facing user shapes and stored records."""

from __future__ import annotations

from typing import Optional

from .exceptions import InvalidInput
from .models import PersonFields, UserRecord
from .schemas import UserResponse
from .security import PasswordHasher


def _has_text(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


class UserTranslator:
    """Build, patch and render :class:`UserRecord` instances."""

    def __init__(self, hasher: Optional[PasswordHasher] = None) -> None:
        self._hasher = hasher or PasswordHasher()

    @property
    def hasher(self) -> PasswordHasher:
        return self._hasher

    def to_record(self, fields: PersonFields) -> UserRecord:
        if not (_has_text(fields.name) and _has_text(fields.email) and _has_text(fields.password)):
            raise InvalidInput("All fields are required")

        # Name and email are stored exactly as supplied.
        return UserRecord(
            name=fields.name,  # type: ignore[arg-type]
            email=fields.email,  # type: ignore[arg-type]
            password_hash=self._hasher.hash(fields.password),
        )

    def apply_update(self, record: UserRecord, fields: PersonFields) -> UserRecord:
        """Replace each field of ``record`` for which ``fields`` carries a non-blank value."""

        if _has_text(fields.name):
            record.name = fields.name  # type: ignore[assignment]
        if _has_text(fields.email):
            record.email = fields.email  # type: ignore[assignment]
        if _has_text(fields.password):
            record.password_hash = self._hasher.hash(fields.password)
        return record

    def to_response(self, record: UserRecord) -> UserResponse:
        return UserResponse(
            id=record.id,
            name=record.name,
            email=record.email,
            password_hash=record.password_hash,
        )


__all__ = ["UserTranslator"]
