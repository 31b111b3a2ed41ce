from __future__ import annotations

import pytest

from accounts.exceptions import InvalidInput
from accounts.models import PersonFields, UserRecord
from accounts.security import PasswordHasher
from accounts.translator import UserTranslator


@pytest.fixture()
def translator() -> UserTranslator:
    return UserTranslator(PasswordHasher())


def test_to_record_hashes_password_and_keeps_fields_verbatim(translator: UserTranslator) -> None:
    record = translator.to_record(
        PersonFields(name="  John Doe ", email="john@example.com", password="Password123!")
    )

    assert record.id is None
    assert record.name == "  John Doe "
    assert record.email == "john@example.com"
    assert record.password_hash != "Password123!"
    assert translator.hasher.verify("Password123!", record.password_hash)


@pytest.mark.parametrize(
    "fields",
    [
        PersonFields(name=" ", email="john@example.com", password="Password123!"),
        PersonFields(name="John", email="\t", password="Password123!"),
        PersonFields(name="John", email="john@example.com", password=""),
        PersonFields(name=None, email="john@example.com", password="Password123!"),
    ],
)
def test_to_record_requires_every_field(translator: UserTranslator, fields: PersonFields) -> None:
    with pytest.raises(InvalidInput) as excinfo:
        translator.to_record(fields)
    assert excinfo.value.message == "All fields are required"


def test_apply_update_replaces_only_supplied_fields(translator: UserTranslator) -> None:
    record = UserRecord(id="abc", name="John", email="john@example.com", password_hash="old-hash")

    translator.apply_update(record, PersonFields(name="Jane", email="   ", password=None))

    assert record.name == "Jane"
    assert record.email == "john@example.com"
    assert record.password_hash == "old-hash"


def test_apply_update_hashes_new_password(translator: UserTranslator) -> None:
    record = UserRecord(id="abc", name="John", email="john@example.com", password_hash="old-hash")

    translator.apply_update(record, PersonFields(password="NewPassword1!"))

    assert record.password_hash != "old-hash"
    assert translator.hasher.verify("NewPassword1!", record.password_hash)


def test_apply_update_with_blank_fields_is_a_no_op(translator: UserTranslator) -> None:
    record = UserRecord(id="abc", name="John", email="john@example.com", password_hash="old-hash")
    before = UserRecord(**vars(record))

    translator.apply_update(record, PersonFields(name=" ", email="", password="\n"))

    assert record == before


def test_to_response_copies_every_field(translator: UserTranslator) -> None:
    record = UserRecord(id="abc", name="John", email="john@example.com", password_hash="hash")

    response = translator.to_response(record)

    assert response.model_dump() == {
        "id": "abc",
        "name": "John",
        "email": "john@example.com",
        "password_hash": "hash",
    }
