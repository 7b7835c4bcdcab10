"""Protocols for the collaborators the client is wired with."""

from typing import Any, Protocol, runtime_checkable

from yan_notes.models.note import Note, UpdateNoteRequest


@runtime_checkable
class StorageProtocol(Protocol):
    """Opaque key-value store holding credentials and the user profile."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is not set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        ...

    def remove(self, key: str) -> None:
        """Forget a key. Missing keys are ignored."""
        ...

    def clear(self) -> None:
        """Forget every key."""
        ...


@runtime_checkable
class NavigatorProtocol(Protocol):
    """Navigation capability of the host application."""

    @property
    def current_path(self) -> str:
        """Path the user is currently looking at."""
        ...

    def redirect(self, path: str) -> None:
        """Send the user to another entry point."""
        ...


@runtime_checkable
class NotifierProtocol(Protocol):
    """Transient success/error messages shown to the user."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@runtime_checkable
class FileSaverProtocol(Protocol):
    """Client-side file save used for downloadable responses."""

    def save(self, filename: str, payload: bytes) -> None:
        """Persist a downloaded payload under the suggested filename."""
        ...


@runtime_checkable
class HttpSessionProtocol(Protocol):
    """The subset of requests.Session the transport relies on."""

    # A requests cookie jar; the transport loads and persists session cookies through it.
    cookies: Any

    def request(self, method: str, url: str, **kwargs: Any) -> Any: ...


@runtime_checkable
class NoteStoreProtocol(Protocol):
    """Note operations the sync scheduler relies on."""

    def get(self, note_id: int) -> Note:
        """Fetch a note by id."""
        ...

    def update(self, note_id: int, data: UpdateNoteRequest) -> Any:
        """Persist note fields."""
        ...
