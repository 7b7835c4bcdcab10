"""Client for the /v1/notes endpoints."""

from typing import Any

from yan_notes.models.note import (
    CreateNoteRequest,
    ListNotesParams,
    Note,
    NoteUpdated,
    UpdateNoteRequest,
    UpdatePositionRequest,
)
from yan_notes.transport import Transport


class NotesClient:
    """Maps note operations to API calls. Errors pass through from the transport."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def create(self, data: CreateNoteRequest) -> Note:
        """POST /v1/notes"""
        return Note.from_json(self.transport.request("/v1/notes", method="POST", body=data))

    def get(self, note_id: int) -> Note:
        """GET /v1/notes/:id"""
        return Note.from_json(self.transport.request(f"/v1/notes/{note_id}", method="GET"))

    def list_all(self) -> list[Note]:
        return self.list()

    # Defined after list_all: inside the class body "list" refers to this method.
    def list(self, params: ListNotesParams | None = None) -> list[Note]:
        """GET /v1/notes, adding only the filters that were supplied."""
        query = params.to_query() if params else {}
        rows: list[dict[str, Any]] = (
            self.transport.request("/v1/notes", method="GET", params=query or None) or []
        )
        return [Note.from_json(row) for row in rows]

    def update(self, note_id: int, data: UpdateNoteRequest) -> NoteUpdated:
        """PUT /v1/notes/:id"""
        result = self.transport.request(f"/v1/notes/{note_id}", method="PUT", body=data)
        return NoteUpdated.from_json(result if isinstance(result, dict) else None)

    def delete(self, note_id: int) -> None:
        """DELETE /v1/notes/:id (permanent)."""
        self.transport.request(f"/v1/notes/{note_id}", method="DELETE")

    def trash(self, note_id: int) -> None:
        """PUT /v1/notes/:id/trash (soft delete)."""
        self.transport.request(f"/v1/notes/{note_id}/trash", method="PUT")

    def restore(self, note_id: int) -> None:
        """PUT /v1/notes/:id/restore"""
        self.transport.request(f"/v1/notes/{note_id}/restore", method="PUT")

    def toggle_favorite(self, note_id: int) -> None:
        """PUT /v1/notes/:id/favorite"""
        self.transport.request(f"/v1/notes/{note_id}/favorite", method="PUT")

    def update_position(self, note_id: int, position: int) -> None:
        """PUT /v1/notes/:id/position"""
        self.transport.request(
            f"/v1/notes/{note_id}/position",
            method="PUT",
            body=UpdatePositionRequest(position=position),
        )
