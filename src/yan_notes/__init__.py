"""Client for the yan note-taking service: transport, note tree and content sync."""

from yan_notes.api.notes import NotesClient
from yan_notes.api.users import UsersClient
from yan_notes.app import YanClient, build_client
from yan_notes.context import SessionContext
from yan_notes.core.sync.scheduler import SyncScheduler, SyncState
from yan_notes.core.tree.builder import TreeNode, build_tree
from yan_notes.session import SessionState
from yan_notes.transport import Transport

__all__ = [
    "NotesClient",
    "SessionContext",
    "SessionState",
    "SyncScheduler",
    "SyncState",
    "Transport",
    "TreeNode",
    "UsersClient",
    "YanClient",
    "build_client",
    "build_tree",
]
