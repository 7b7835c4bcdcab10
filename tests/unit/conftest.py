"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from loguru import logger

from tests.unit.fakes import FakeFileSaver, FakeHttpSession, FakeNavigator
from yan_notes.api.notes import NotesClient
from yan_notes.api.users import UsersClient
from yan_notes.context import SessionContext
from yan_notes.storage import MemoryStorage
from yan_notes.transport import Transport

BASE_URL = "http://notes.test"

USER_JSON = {
    "id": 7,
    "username": "alice",
    "email": "alice@example.com",
    "status": 1,
    "is_admin": 0,
    "created_at": "2025-01-01T00:00:00Z",
}

NOTE_JSON = {
    "id": 1,
    "parent_id": None,
    "user_id": 7,
    "title": "Inbox",
    "content": "# Inbox",
    "icon": None,
    "is_favorite": 0,
    "position": 0,
    "status": 1,
    "created_at": "2025-01-01T00:00:00Z",
}


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output for assertions."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m)), level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def context(storage: MemoryStorage) -> SessionContext:
    return SessionContext.init(storage)


@pytest.fixture
def http() -> FakeHttpSession:
    return FakeHttpSession()


@pytest.fixture
def navigator() -> FakeNavigator:
    return FakeNavigator(current_path="/notes/1")


@pytest.fixture
def file_saver() -> FakeFileSaver:
    return FakeFileSaver()


@pytest.fixture
def transport(
    context: SessionContext,
    http: FakeHttpSession,
    navigator: FakeNavigator,
    file_saver: FakeFileSaver,
) -> Transport:
    return Transport(
        context,
        base_url=BASE_URL,
        navigator=navigator,
        file_saver=file_saver,
        session=http,
    )


@pytest.fixture
def notes_client(transport: Transport) -> NotesClient:
    return NotesClient(transport)


@pytest.fixture
def users_client(transport: Transport) -> UsersClient:
    return UsersClient(transport)
