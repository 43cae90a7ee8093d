import pytest

from storefront.domain.errors import InvalidInput, UserNotFound
from storefront.services.user_service import UserService

CREATED = {
    "id": "user_abc",
    "first_name": "Rina",
    "last_name": None,
    "image_url": "https://img.example.com/rina.png",
    "email_addresses": [{"email_address": "rina@example.com"}],
}


def test_user_created_and_updated(db):
    svc = UserService(db)

    assert svc.handle_identity_event("user.created", CREATED) == "User has been created!"
    profile = svc.get_profile("user_abc")
    assert profile.full_name == "Rina"
    assert profile.email == "rina@example.com"

    svc.handle_identity_event(
        "user.updated",
        {"id": "user_abc", "first_name": "Rina", "last_name": "Das", "email_addresses": []},
    )
    profile = svc.get_profile("user_abc")
    assert profile.full_name == "Rina Das"
    # bez adresow email zostaje stary
    assert profile.email == "rina@example.com"
    assert profile.avatar_url is None


def test_user_created_twice_is_upsert(db):
    svc = UserService(db)
    svc.handle_identity_event("user.created", CREATED)
    svc.handle_identity_event("user.created", {**CREATED, "first_name": "R."})

    assert svc.get_profile("user_abc").full_name == "R."


def test_update_unknown_user_and_other_events(db):
    svc = UserService(db)

    with pytest.raises(UserNotFound):
        svc.handle_identity_event("user.updated", {"id": "missing"})
    assert svc.handle_identity_event("session.created", {"id": "x"}) == "Webhook received"


def test_default_address(db, make_user):
    make_user()
    svc = UserService(db)

    assert svc.get_default_address("user_1") == ""
    assert svc.set_default_address("user_1", "  House 4, Road 2  ") == "House 4, Road 2"
    assert svc.get_default_address("user_1") == "House 4, Road 2"

    with pytest.raises(InvalidInput):
        svc.set_default_address("user_1", "   ")
