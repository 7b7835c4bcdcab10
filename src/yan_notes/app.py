"""Wiring of the client components around one session context."""

from dataclasses import dataclass
from pathlib import Path

from yan_notes.api.notes import NotesClient
from yan_notes.api.users import UsersClient
from yan_notes.capabilities import ConsoleNavigator, DiskFileSaver, LogNotifier
from yan_notes.config import resolve_base_url, resolve_download_dir, resolve_state_file
from yan_notes.context import SessionContext
from yan_notes.protocols import (
    FileSaverProtocol,
    HttpSessionProtocol,
    NavigatorProtocol,
    NotifierProtocol,
    StorageProtocol,
)
from yan_notes.session import SessionState
from yan_notes.storage import JsonFileStorage
from yan_notes.transport import Transport


@dataclass
class YanClient:
    """All components sharing one context, transport and set of capabilities."""

    context: SessionContext
    transport: Transport
    notes: NotesClient
    users: UsersClient
    session: SessionState
    navigator: NavigatorProtocol
    notifier: NotifierProtocol


def build_client(
    *,
    storage: StorageProtocol | None = None,
    base_url: str | None = None,
    navigator: NavigatorProtocol | None = None,
    notifier: NotifierProtocol | None = None,
    file_saver: FileSaverProtocol | None = None,
    http_session: HttpSessionProtocol | None = None,
    state_file: Path | None = None,
    download_dir: Path | None = None,
) -> YanClient:
    """Create the client, loading persisted credentials.

    Anything not passed in falls back to the environment-aware defaults in config.
    """
    if storage is None:
        storage = JsonFileStorage(state_file or resolve_state_file())
    context = SessionContext.init(storage)
    navigator = navigator or ConsoleNavigator()
    notifier = notifier or LogNotifier()
    file_saver = file_saver or DiskFileSaver(download_dir or resolve_download_dir())

    transport = Transport(
        context,
        base_url=base_url or resolve_base_url(),
        navigator=navigator,
        file_saver=file_saver,
        session=http_session,
    )
    users = UsersClient(transport)
    return YanClient(
        context=context,
        transport=transport,
        notes=NotesClient(transport),
        users=users,
        session=SessionState(users, context, navigator),
        navigator=navigator,
        notifier=notifier,
    )
