"""Note models and the request bodies of the notes endpoints."""

import enum
from dataclasses import asdict, dataclass, fields
from typing import Any


class NoteStatus(enum.IntEnum):
    """Note lifecycle status, using the server's numeric codes."""

    TRASHED = 0
    NORMAL = 1


class _Unset(enum.Enum):
    UNSET = "UNSET"


# Marks a filter that was not supplied, as opposed to an explicit None.
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class Note:
    """A single note in the user's hierarchy."""

    id: int
    parent_id: int | None
    user_id: int
    title: str
    content: str
    icon: str | None = None
    is_favorite: int = 0
    position: int = 0
    status: NoteStatus = NoteStatus.NORMAL
    created_at: str = ""
    updated_at: str | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_trashed(self) -> bool:
        return self.status == NoteStatus.TRASHED

    @property
    def favorited(self) -> bool:
        return self.is_favorite == 1

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Note":
        """Build a note from a server JSON object."""
        return cls(
            id=int(data["id"]),
            parent_id=None if data.get("parent_id") is None else int(data["parent_id"]),
            user_id=int(data.get("user_id", 0)),
            title=data.get("title", ""),
            content=data.get("content", ""),
            icon=data.get("icon"),
            is_favorite=int(data.get("is_favorite", 0)),
            position=int(data.get("position", 0)),
            status=NoteStatus(int(data.get("status", NoteStatus.NORMAL))),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
        )

    def to_json(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = int(self.status)
        return data


def _drop_none(obj: Any) -> dict[str, Any]:
    return {f.name: getattr(obj, f.name) for f in fields(obj) if getattr(obj, f.name) is not None}


@dataclass(frozen=True)
class CreateNoteRequest:
    """Body of POST /v1/notes. A None parent creates a root note."""

    title: str
    parent_id: int | None = None
    content: str | None = None
    icon: str | None = None
    is_favorite: int | None = None
    position: int | None = None

    def to_json(self) -> dict[str, Any]:
        return _drop_none(self)


@dataclass(frozen=True)
class UpdateNoteRequest:
    """Body of PUT /v1/notes/:id. Fields left as None are not changed."""

    title: str
    parent_id: int | None = None
    content: str | None = None
    icon: str | None = None
    is_favorite: int | None = None
    position: int | None = None
    status: NoteStatus | None = None

    def to_json(self) -> dict[str, Any]:
        data = _drop_none(self)
        if self.status is not None:
            data["status"] = int(self.status)
        return data


@dataclass(frozen=True)
class UpdatePositionRequest:
    """Body of PUT /v1/notes/:id/position."""

    position: int

    def to_json(self) -> dict[str, Any]:
        return {"position": self.position}


@dataclass(frozen=True)
class NoteUpdated:
    """Result of PUT /v1/notes/:id."""

    updated_at: str | None

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "NoteUpdated":
        return cls(updated_at=(data or {}).get("updatedAt"))


@dataclass(frozen=True)
class ListNotesParams:
    """Filters for GET /v1/notes.

    parent_id distinguishes "not filtered" (UNSET) from "top-level notes" (None).
    """

    parent_id: int | None | _Unset = UNSET
    status: NoteStatus | None = None
    favorite: bool | None = None

    def to_query(self) -> dict[str, str]:
        """Query parameters for the filters that were supplied."""
        query: dict[str, str] = {}
        if self.parent_id is not UNSET:
            query["parent_id"] = "null" if self.parent_id is None else str(self.parent_id)
        if self.status is not None:
            query["status"] = str(int(self.status))
        if self.favorite is not None:
            query["favorite"] = "true" if self.favorite else "false"
        return query
