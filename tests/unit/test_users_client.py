"""Tests for UsersClient request mapping."""

from tests.unit.conftest import BASE_URL, USER_JSON
from tests.unit.fakes import FakeHttpSession, FakeResponse
from yan_notes.api.users import UsersClient
from yan_notes.models.user import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
)


def test_register_posts_profile(users_client: UsersClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(201, json_data=USER_JSON))

    user = users_client.register(
        RegisterRequest(username="alice", password="hunter22", email="alice@example.com")
    )

    assert http.last_call["url"] == f"{BASE_URL}/api/v1/users/register"
    assert http.last_json_body() == {
        "username": "alice",
        "password": "hunter22",
        "email": "alice@example.com",
    }
    assert user.id == 7


def test_login_posts_credentials(users_client: UsersClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=USER_JSON))

    user = users_client.login(LoginRequest(email="alice@example.com", password="pw"))

    assert http.last_call["method"] == "POST"
    assert http.last_call["url"] == f"{BASE_URL}/api/v1/users/login"
    assert user.username == "alice"
    assert not user.is_administrator


def test_logout(users_client: UsersClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(200, text=""))

    users_client.logout()

    assert http.last_call["method"] == "POST"
    assert http.last_call["url"] == f"{BASE_URL}/api/v1/users/logout"


def test_get_user(users_client: UsersClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=USER_JSON))

    user = users_client.get(7)

    assert http.last_call["url"] == f"{BASE_URL}/api/v1/users/7"
    assert user.email == "alice@example.com"


def test_update_profile_sends_only_supplied_fields(
    users_client: UsersClient, http: FakeHttpSession
) -> None:
    http.queue(FakeResponse(json_data={**USER_JSON, "username": "al"}))

    user = users_client.update_profile(7, UpdateProfileRequest(username="al"))

    assert http.last_call["method"] == "PUT"
    assert http.last_json_body() == {"username": "al"}
    assert user.username == "al"


def test_change_password(users_client: UsersClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(200, text=""))

    users_client.change_password(7, ChangePasswordRequest(new_password="s3cret!"))

    assert http.last_call["url"] == f"{BASE_URL}/api/v1/users/7/password"
    assert http.last_json_body() == {"new_password": "s3cret!"}
