"""Periodic flushing of locally edited note content."""

import asyncio
import contextlib
import enum
from dataclasses import dataclass
from types import TracebackType

from loguru import logger

from yan_notes.config import SYNC_INTERVAL
from yan_notes.errors import ApplicationError, SyncFailure, YanError
from yan_notes.models.note import Note, UpdateNoteRequest
from yan_notes.protocols import NoteStoreProtocol


class SyncState(enum.Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    FLUSHING = "flushing"


@dataclass
class DirtyRecord:
    """Editing state of the note that is currently open."""

    note_id: int
    title: str
    content: str
    needs_flush: bool = False
    flushing: bool = False
    # Bumped on every edit; a flush only cleans the record if nothing changed meanwhile.
    revision: int = 0

    @property
    def state(self) -> SyncState:
        if self.flushing:
            return SyncState.FLUSHING
        if self.needs_flush:
            return SyncState.DIRTY
        return SyncState.CLEAN


class SyncScheduler:
    """Flush edited content of the open note to the server every `interval` seconds.

    At most one flush is in flight at a time. A failed flush leaves the note dirty
    and is retried on the next tick. Opening another note or closing the editor
    drops unsynced edits of the previous note.

    Use as an async context manager to tie the periodic task to an editing session:

        async with SyncScheduler(notes) as sync:
            await sync.load(note_id)
            sync.edit("new text")
    """

    def __init__(self, notes: NoteStoreProtocol, *, interval: float = SYNC_INTERVAL) -> None:
        self.notes = notes
        self.interval = interval
        self.record: DirtyRecord | None = None
        self.last_error: SyncFailure | None = None
        self._task: asyncio.Task[None] | None = None
        self._flush_done: asyncio.Event | None = None
        self._load_seq = 0

    @property
    def state(self) -> SyncState | None:
        """State of the open note, or None when no note is open."""
        return self.record.state if self.record else None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def open(self, note: Note) -> DirtyRecord:
        """Start editing a note that is already in memory."""
        self._discard(f"opening note {note.id}")
        self.record = DirtyRecord(note_id=note.id, title=note.title, content=note.content)
        self.last_error = None
        logger.debug("Editing note {} ({!r})", note.id, note.title)
        return self.record

    async def load(self, note_id: int) -> Note | None:
        """Fetch a note from the server and start editing it.

        Returns None if the fetch failed, in which case no note is open.
        If another load starts before this one finishes, this result is dropped.
        """
        self._discard(f"loading note {note_id}")
        self.record = None
        self._load_seq += 1
        seq = self._load_seq
        try:
            note = await asyncio.to_thread(self.notes.get, note_id)
        except YanError as e:
            logger.error("Failed to fetch note {}: {}", note_id, e)
            return None
        if seq != self._load_seq:
            logger.debug("Dropping stale fetch of note {}", note_id)
            return None
        self.open(note)
        return note

    def close(self) -> None:
        """Stop editing. Unsynced edits are dropped."""
        self._discard("closing editor")
        self.record = None

    def _discard(self, reason: str) -> None:
        record = self.record
        if record is not None and record.state != SyncState.CLEAN:
            logger.warning("Dropping unsynced edits to note {} ({})", record.note_id, reason)

    def edit(self, content: str) -> None:
        """Record new content for the open note."""
        if self.record is None:
            msg = "No note is open for editing"
            raise ApplicationError(msg)
        self.record.content = content
        self.record.needs_flush = True
        self.record.revision += 1

    async def tick(self) -> bool:
        """Flush the open note if it is dirty and no flush is in flight.

        Returns:
            True if content reached the server during this call.
        """
        record = self.record
        if record is None or not record.needs_flush or record.flushing:
            return False

        record.flushing = True
        revision = record.revision
        request = UpdateNoteRequest(title=record.title, content=record.content)
        self._flush_done = done = asyncio.Event()
        try:
            await asyncio.to_thread(self.notes.update, record.note_id, request)
        except YanError as e:
            if record is not self.record:
                logger.warning("Failed to sync closed note {}: {}", record.note_id, e)
                return False
            self.last_error = SyncFailure(record.note_id, e)
            logger.error("Failed to sync note {}: {}", record.note_id, e)
            return False
        finally:
            record.flushing = False
            done.set()

        if record is not self.record:
            logger.debug("Note {} was closed while syncing, result dropped", record.note_id)
            return True
        if record.revision == revision:
            record.needs_flush = False
        self.last_error = None
        logger.debug("Synced note {} ({} chars)", record.note_id, len(request.content or ""))
        return True

    async def flush_now(self) -> None:
        """Flush pending edits immediately, waiting for an in-flight flush first.

        Raises:
            SyncFailure: The content could not be persisted.
        """
        if self._flush_done is not None:
            await self._flush_done.wait()
        record = self.record
        if record is None or not record.needs_flush:
            return
        if not await self.tick() and self.last_error is not None:
            raise self.last_error

    def start(self) -> None:
        """Start the periodic task on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="yan-notes-sync")
        logger.debug("Sync task started, interval {}s", self.interval)

    async def stop(self) -> None:
        """Cancel the periodic task and wait until it has finished."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("Sync task stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.tick()
            except Exception:
                logger.exception("Sync tick failed")

    async def __aenter__(self) -> "SyncScheduler":
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()
        self.close()
