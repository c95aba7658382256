"""Tests for UserService request handling."""

import pytest

from users_common.errors import UserNotFoundError, UserValidationError
from users_common.services.user_service import UserService, build_user_fields
from users_common.services.user_store import InMemoryUserStore


@pytest.fixture
def service(user_store: InMemoryUserStore) -> UserService:
    return UserService(user_store)


@pytest.mark.unit
def test_build_user_fields_trims_and_coerces(valid_payload: dict) -> None:
    valid_payload.update(name="  Ann  ", email=" ann@example.com ", phone="\t555\n", company="  Acme ")
    valid_payload["address"] = {
        "street": " 1 Main St ",
        "city": " Springfield",
        "zip": "12345 ",
        "geo": {"lat": 40.5, "lng": " -74 "},
    }

    fields = build_user_fields(valid_payload)

    assert fields.name == "Ann"
    assert fields.email == "ann@example.com"
    assert fields.phone == "555"
    assert fields.company == "Acme"
    assert fields.address.street == "1 Main St"
    assert fields.address.city == "Springfield"
    assert fields.address.zip == "12345"
    assert fields.address.geo.lat == "40.5"
    assert fields.address.geo.lng == "-74"


@pytest.mark.unit
@pytest.mark.parametrize("company", ["missing", None, ""])
def test_build_user_fields_defaults_company(valid_payload: dict, company) -> None:
    if company == "missing":
        del valid_payload["company"]
    else:
        valid_payload["company"] = company

    assert build_user_fields(valid_payload).company == ""


@pytest.mark.unit
def test_create_user_assigns_identity_and_timestamps(service: UserService, valid_payload: dict) -> None:
    user = service.create_user(valid_payload)

    assert user.id
    assert user.created_at == user.updated_at
    assert service.get_user(user.id) == user


@pytest.mark.unit
def test_create_user_rejects_invalid_payload(service: UserService, user_store: InMemoryUserStore) -> None:
    with pytest.raises(UserValidationError) as exc_info:
        service.create_user({"name": "Ann"})

    assert exc_info.value.http_status == 400
    assert {d.field for d in exc_info.value.details} >= {"email", "phone", "address"}
    assert user_store.users == {}


@pytest.mark.unit
@pytest.mark.parametrize("user_id", ["not-an-id", "", "123", "6f1c2b4e-8d0a-4c61-9a55"])
def test_malformed_id_is_not_found(service: UserService, user_id: str) -> None:
    with pytest.raises(UserNotFoundError):
        service.get_user(user_id)


@pytest.mark.unit
def test_unknown_id_is_not_found(service: UserService) -> None:
    with pytest.raises(UserNotFoundError) as exc_info:
        service.get_user("00000000-0000-4000-8000-000000000000")

    assert exc_info.value.message == "User not found"


@pytest.mark.unit
def test_update_replaces_all_fields(service: UserService, valid_payload: dict) -> None:
    user = service.create_user(valid_payload)
    replacement = {
        "name": "Bob",
        "email": "bob@example.org",
        "phone": "1",
        "address": {"street": "2 Side St", "city": "Shelbyville", "zip": "54321", "geo": {"lat": "1", "lng": "2"}},
    }

    updated = service.update_user(user.id, replacement)

    assert updated.id == user.id
    assert updated.created_at == user.created_at
    assert updated.updated_at >= user.updated_at
    assert updated.company == ""
    assert updated.address.model_dump() == replacement["address"]
    assert service.get_user(user.id) == updated


@pytest.mark.unit
def test_update_checks_existence_before_validation(service: UserService) -> None:
    with pytest.raises(UserNotFoundError):
        service.update_user("00000000-0000-4000-8000-000000000000", {})


@pytest.mark.unit
def test_update_requires_full_payload(service: UserService, valid_payload: dict) -> None:
    user = service.create_user(valid_payload)

    with pytest.raises(UserValidationError):
        service.update_user(user.id, {"name": "Only a name"})

    assert service.get_user(user.id).name == "Ann Smith"


@pytest.mark.unit
def test_patch_merges_supplied_fields(service: UserService, valid_payload: dict) -> None:
    user = service.create_user(valid_payload)

    patched = service.patch_user(user.id, {"phone": " 999 ", "address": {"city": "Capital City", "geo": {"lng": 10}}})

    assert patched.phone == "999"
    assert patched.name == user.name
    assert patched.company == "Acme"
    assert patched.address.street == "1 Main St"
    assert patched.address.city == "Capital City"
    assert patched.address.geo.lat == "40.7128"
    assert patched.address.geo.lng == "10"


@pytest.mark.unit
def test_patch_rejects_blank_supplied_field(service: UserService, valid_payload: dict) -> None:
    user = service.create_user(valid_payload)

    with pytest.raises(UserValidationError) as exc_info:
        service.patch_user(user.id, {"name": ""})

    assert [(d.field, d.message) for d in exc_info.value.details] == [("name", "Name is required")]


@pytest.mark.unit
def test_delete_then_get_is_not_found(service: UserService, valid_payload: dict) -> None:
    user = service.create_user(valid_payload)

    service.delete_user(user.id)

    with pytest.raises(UserNotFoundError):
        service.get_user(user.id)
    with pytest.raises(UserNotFoundError):
        service.delete_user(user.id)


@pytest.mark.unit
def test_list_users_is_newest_first(service: UserService, valid_payload: dict) -> None:
    first = service.create_user(valid_payload)
    second = service.create_user({**valid_payload, "name": "Second"})

    assert [user.id for user in service.list_users()] == [second.id, first.id]
