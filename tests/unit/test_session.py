"""Tests for login state handling."""

import pytest

from tests.unit.conftest import USER_JSON
from tests.unit.fakes import FakeHttpSession, FakeNavigator, FakeResponse, connection_error
from yan_notes.api.users import UsersClient
from yan_notes.context import SessionContext
from yan_notes.errors import AuthExpired, HttpError
from yan_notes.models.user import LoginRequest, RegisterRequest, User
from yan_notes.session import SessionState

CREDENTIALS = LoginRequest(email="alice@example.com", password="pw")


@pytest.fixture
def session(
    users_client: UsersClient, context: SessionContext, navigator: FakeNavigator
) -> SessionState:
    return SessionState(users_client, context, navigator)


def test_login_stores_profile(session: SessionState, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=USER_JSON))

    user = session.login(CREDENTIALS)

    assert session.is_logged_in()
    assert session.current_user() == user
    assert user.username == "alice"


def test_login_stores_issued_token_for_later_requests(
    session: SessionState, http: FakeHttpSession, context: SessionContext
) -> None:
    http.queue(FakeResponse(json_data=USER_JSON, headers={"Authorization": "tok-123"}))
    http.queue(FakeResponse(json_data=USER_JSON))

    session.login(CREDENTIALS)
    session.users.get(7)

    assert context.token == "tok-123"
    assert http.last_call["headers"]["Authorization"] == "tok-123"


def test_login_without_issued_token_keeps_existing_token(
    session: SessionState, http: FakeHttpSession, context: SessionContext
) -> None:
    context.token = "configured"
    http.queue(FakeResponse(json_data=USER_JSON))

    session.login(CREDENTIALS)

    assert context.token == "configured"


def test_failed_login_clears_profile_and_reraises(
    session: SessionState, http: FakeHttpSession, context: SessionContext
) -> None:
    context.user = User(id=1, username="old", email="old@example.com")
    http.queue(FakeResponse(400, text="invalid email or password"))

    with pytest.raises(HttpError, match="invalid email or password"):
        session.login(CREDENTIALS)

    assert not session.is_logged_in()


def test_register_does_not_log_in(session: SessionState, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(201, json_data=USER_JSON))

    user = session.register(RegisterRequest(username="alice", password="pw1234", email="a@b.c"))

    assert user.id == 7
    assert not session.is_logged_in()


def test_logout_clears_state_and_redirects(
    session: SessionState,
    http: FakeHttpSession,
    context: SessionContext,
    navigator: FakeNavigator,
) -> None:
    context.token = "t"
    context.user = User(id=7, username="alice", email="alice@example.com")
    http.queue(FakeResponse(200, text=""))

    session.logout()

    assert not session.is_logged_in()
    assert context.token is None
    assert navigator.redirects == ["/login"]


def test_logout_completes_locally_when_server_call_fails(
    session: SessionState,
    http: FakeHttpSession,
    context: SessionContext,
    navigator: FakeNavigator,
    log_messages: list[str],
) -> None:
    context.user = User(id=7, username="alice", email="alice@example.com")
    http.queue(connection_error())

    session.logout()

    assert not session.is_logged_in()
    assert navigator.redirects == ["/login"]
    assert any("Logout API call failed" in m for m in log_messages)


def test_expired_session_is_cleared_by_any_request(
    session: SessionState, http: FakeHttpSession, context: SessionContext
) -> None:
    http.queue(FakeResponse(json_data=USER_JSON))
    session.login(CREDENTIALS)
    http.queue(FakeResponse(401, text="invalid session"))

    with pytest.raises(AuthExpired):
        session.users.get(7)

    assert not session.is_logged_in()
