"""Tests for MCP tool core functions."""

import pytest

from tests.unit.conftest import NOTE_JSON
from tests.unit.fakes import (
    FakeFileSaver,
    FakeHttpSession,
    FakeNavigator,
    FakeNotifier,
    FakeResponse,
)
from yan_notes.app import YanClient, build_client
from yan_notes.mcp.server import notes_create, notes_read, notes_tree, notes_update
from yan_notes.storage import MemoryStorage

NOTES = [
    {**NOTE_JSON, "id": 1, "title": "Projects"},
    {**NOTE_JSON, "id": 2, "parent_id": 1, "title": "Website"},
    {**NOTE_JSON, "id": 3, "parent_id": 2, "title": "Launch plan"},
    {**NOTE_JSON, "id": 4, "title": "Journal", "position": 1},
]


@pytest.fixture
def client(http: FakeHttpSession) -> YanClient:
    return build_client(
        storage=MemoryStorage(),
        base_url="http://notes.test",
        navigator=FakeNavigator(),
        notifier=FakeNotifier(),
        file_saver=FakeFileSaver(),
        http_session=http,
    )


def test_notes_tree_markdown(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=NOTES))

    result = notes_tree(client)

    assert result["count"] == 4
    assert result["content"].startswith("- Projects (id=1)\n")


def test_notes_tree_subtree_as_json(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=NOTES))

    result = notes_tree(client, root_id=2, output_format="json")

    assert result["count"] == 2
    assert result["notes"][0]["title"] == "Website"
    assert result["notes"][0]["children"][0]["title"] == "Launch plan"


def test_notes_tree_unknown_root(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=NOTES))

    assert notes_tree(client, root_id=99) == {"error": "Note '99' not found."}


def test_notes_tree_trashed_filter(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data=[]))

    result = notes_tree(client, trashed=True)

    assert result["count"] == 0
    assert http.last_call["params"] == {"status": "0"}


def test_notes_read_returns_error_dict(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(404, text="note not found"))

    assert notes_read(client, note_id=5) == {"error": "note not found"}


def test_notes_update_keeps_title_when_omitted(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(json_data={**NOTE_JSON, "id": 5, "title": "Kept"}))
    http.queue(FakeResponse(json_data={"updatedAt": "2025-01-02T00:00:00Z"}))

    result = notes_update(client, note_id=5, content="new body")

    assert result == {"success": True, "note_id": 5, "updated_at": "2025-01-02T00:00:00Z"}
    assert http.last_json_body() == {"title": "Kept", "content": "new body"}


def test_notes_update_requires_a_field(client: YanClient) -> None:
    assert notes_update(client, note_id=5)["success"] is False


def test_notes_create(client: YanClient, http: FakeHttpSession) -> None:
    http.queue(FakeResponse(201, json_data={**NOTE_JSON, "id": 8, "parent_id": 1}))

    result = notes_create(client, title="Child", parent_id=1)

    assert result == {"success": True, "note_id": 8}
    assert http.last_json_body() == {"title": "Child", "parent_id": 1}
