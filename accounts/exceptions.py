"""Failure taxonomy shared by the validation, translation and workflow layers."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional


class FailureKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"
    MISSING_PARAMETER = "missing_parameter"
    USER_NOT_FOUND = "user_not_found"
    DUPLICATE_USER = "duplicate_user"
    UNCLASSIFIED = "unclassified"


class AccountsError(Exception):
    """Base class for every failure the service reports to its callers."""

    kind: FailureKind = FailureKind.UNCLASSIFIED

    def __init__(self, message: str, details: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: List[str] = list(details or [])


class ValidationFailed(AccountsError):
    """Raised when a request body violates one or more field constraints."""

    kind = FailureKind.VALIDATION_FAILED

    def __init__(self, details: Iterable[str], message: str = "Invalid input data") -> None:
        super().__init__(message, details)


class InvalidInput(AccountsError, ValueError):
    kind = FailureKind.INVALID_INPUT


class MissingParameter(AccountsError):
    kind = FailureKind.MISSING_PARAMETER

    def __init__(self, parameter: str) -> None:
        super().__init__(f"Missing required parameter: {parameter}")
        self.parameter = parameter


class UserNotFound(AccountsError):
    kind = FailureKind.USER_NOT_FOUND

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} not found")
        self.email = email


class DuplicateUser(AccountsError):
    kind = FailureKind.DUPLICATE_USER

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.email = email


__all__ = [
    "AccountsError",
    "DuplicateUser",
    "FailureKind",
    "InvalidInput",
    "MissingParameter",
    "UserNotFound",
    "ValidationFailed",
]
