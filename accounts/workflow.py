"""Service layer sequencing lookups and persistence calls for user accounts."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from .exceptions import DuplicateUser, UserNotFound
from .models import PersonFields, UserRecord
from .schemas import UserResponse
from .translator import UserTranslator

logger = logging.getLogger("accounts.workflow")


class UserStore(Protocol):
    def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    def find_all(self) -> List[UserRecord]: ...

    def save(self, record: UserRecord) -> UserRecord: ...

    def delete_by_email(self, email: str) -> bool: ...


class UserWorkflow:
    """Create, update, delete and preview user accounts.

    The existence checks are not atomic with the writes that follow them.
    Concurrent creates for one email are resolved by the store, which rejects
    the second insert with :class:`DuplicateUser`.
    """

    def __init__(self, store: UserStore, translator: Optional[UserTranslator] = None) -> None:
        self._store = store
        self._translator = translator or UserTranslator()

    def find_user_by_email(self, email: str) -> UserRecord:
        record = self._store.find_by_email(email)
        if record is None:
            raise UserNotFound(email)
        return record

    def ensure_absent(self, email: Optional[str]) -> None:
        if email is not None and self._store.find_by_email(email) is not None:
            raise DuplicateUser(email)

    def create(self, fields: PersonFields) -> UserRecord:
        self.ensure_absent(fields.email)
        saved = self._store.save(self._translator.to_record(fields))
        logger.info("Created user %s <%s>", saved.id, saved.email)
        return saved

    def update(self, email: str, fields: PersonFields) -> UserRecord:
        record = self.find_user_by_email(email)
        self._translator.apply_update(record, fields)
        saved = self._store.save(record)
        logger.info("Updated user %s <%s>", saved.id, saved.email)
        return saved

    def delete(self, email: str) -> None:
        record = self.find_user_by_email(email)
        self._store.delete_by_email(email)
        logger.info("Deleted user %s <%s>", record.id, email)

    def preview_one(self, email: str) -> UserResponse:
        return self._translator.to_response(self.find_user_by_email(email))

    def preview_all(self) -> List[UserResponse]:
        return [self._translator.to_response(record) for record in self._store.find_all()]


__all__ = ["UserStore", "UserWorkflow"]
