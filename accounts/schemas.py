"""Wire-level request and response shapes for the user endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .models import PersonFields


class UserRequest(BaseModel):
    """Body accepted by the create and update endpoints.

    Every field is optional at the parsing stage so that missing values are
    reported alongside the other field constraints instead of by pydantic.
    """

    name: Optional[str] = Field(default=None, description="Display name, 2-50 characters")
    email: Optional[str] = Field(default=None, description="Unique email address")
    password: Optional[str] = Field(default=None, description="Plaintext password, hashed before storage")

    def to_fields(self) -> PersonFields:
        return PersonFields(name=self.name, email=self.email, password=self.password)


class UserResponse(BaseModel):
    id: Optional[str]
    name: str
    email: str
    password_hash: str


__all__ = ["UserRequest", "UserResponse"]
