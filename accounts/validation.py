"""Field constraints applied to incoming user requests before any workflow runs."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from .exceptions import InvalidInput, MissingParameter, ValidationFailed
from .models import PersonFields

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}$"
)

Rule = Tuple[Callable[[Optional[str]], bool], str]


def _present(value: Optional[str]) -> bool:
    return value is not None


def _not_blank(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def _length(minimum: int, maximum: int) -> Callable[[Optional[str]], bool]:
    def check(value: Optional[str]) -> bool:
        return value is None or minimum <= len(value) <= maximum

    return check


def _email_shape(value: Optional[str]) -> bool:
    # Blank values are reported by the non-blank rule only.
    if value is None or not value:
        return True
    return EMAIL_PATTERN.fullmatch(value) is not None


def _password_strength(value: Optional[str]) -> bool:
    return value is None or PASSWORD_PATTERN.fullmatch(value) is not None


USER_REQUEST_RULES: Sequence[Tuple[str, Sequence[Rule]]] = (
    (
        "name",
        (
            (_present, "Name is required"),
            (_not_blank, "Name cannot be blank"),
            (_length(2, 50), "Name must be between 2 and 50 characters"),
        ),
    ),
    (
        "email",
        (
            (_present, "Email is required"),
            (_not_blank, "Email cannot be blank"),
            (_email_shape, "Please provide a valid email address"),
            (_length(0, 100), "Email cannot exceed 100 characters"),
        ),
    ),
    (
        "password",
        (
            (_present, "Password is required"),
            (_not_blank, "Password cannot be blank"),
            (_length(8, 255), "Password must be between 8 and 255 characters"),
            (
                _password_strength,
                "Password must contain at least one uppercase letter, one lowercase letter, "
                "one digit, and one special character",
            ),
        ),
    ),
)


def collect_violations(fields: PersonFields, *, partial: bool = False) -> List[str]:
    """Evaluate every rule against ``fields`` and return ``"field: message"`` entries.

    With ``partial`` set, fields that were not supplied at all are skipped.
    """

    violations: List[str] = []
    for field_name, rules in USER_REQUEST_RULES:
        value = getattr(fields, field_name)
        if partial and value is None:
            continue
        for predicate, message in rules:
            if not predicate(value):
                violations.append(f"{field_name}: {message}")
    return violations


def validate_user_request(fields: PersonFields, *, partial: bool = False) -> PersonFields:
    """Raise :class:`ValidationFailed` unless ``fields`` satisfies every constraint."""

    violations = collect_violations(fields, partial=partial)
    if violations:
        raise ValidationFailed(violations)
    return fields


def validate_email_parameter(email: Optional[str], *, parameter: str = "email") -> str:
    """Check an email supplied as a query parameter rather than in a request body."""

    if email is None:
        raise MissingParameter(parameter)
    if not email.strip():
        raise InvalidInput("Email parameter is required and cannot be empty")
    if EMAIL_PATTERN.fullmatch(email) is None:
        raise InvalidInput("Invalid email format")
    return email


__all__ = [
    "EMAIL_PATTERN",
    "PASSWORD_PATTERN",
    "USER_REQUEST_RULES",
    "collect_violations",
    "validate_email_parameter",
    "validate_user_request",
]
