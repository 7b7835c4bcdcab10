"""MCP server exposing the note tree and note editing tools."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from yan_notes.app import YanClient, build_client
from yan_notes.core.tree.builder import build_tree, by_position, count_nodes, iter_tree
from yan_notes.core.tree.markdown import render_tree_as_markdown
from yan_notes.errors import YanError
from yan_notes.models.note import CreateNoteRequest, ListNotesParams, NoteStatus, UpdateNoteRequest

# --- Core functions (testable without MCP context) ---


def notes_tree(
    client: YanClient,
    *,
    root_id: int | None = None,
    max_depth: int | None = None,
    trashed: bool = False,
    output_format: str = "markdown",
) -> dict[str, Any]:
    """Fetch all notes and return them as a tree.

    Args:
        root_id: Only return the subtree below this note.
        max_depth: Max depth levels (None = unlimited).
        trashed: Show trashed notes instead of normal ones.
        output_format: "markdown" (human-readable) or "json" (structured).
    """
    params = ListNotesParams(status=NoteStatus.TRASHED if trashed else None)
    try:
        notes = client.notes.list(params)
    except YanError as e:
        return {"error": str(e)}

    roots = build_tree(notes, sort_key=by_position)
    if root_id is not None:
        match = next((node for _, node in iter_tree(roots) if node.item.id == root_id), None)
        if match is None:
            return {"error": f"Note '{root_id}' not found."}
        roots = [match]

    result: dict[str, Any] = {"count": count_nodes(roots)}
    if output_format == "json":
        result["notes"] = [r.to_json() for r in roots]
    else:
        result["content"] = render_tree_as_markdown(roots, max_depth=max_depth)
    return result


def notes_read(client: YanClient, *, note_id: int) -> dict[str, Any]:
    """Return a single note with its content."""
    try:
        note = client.notes.get(note_id)
    except YanError as e:
        return {"error": str(e)}
    return note.to_json()


def notes_update(
    client: YanClient,
    *,
    note_id: int,
    title: str | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    """Replace a note's title and/or content."""
    if title is None and content is None:
        return {"success": False, "error": "No fields to update."}
    try:
        if title is None:
            title = client.notes.get(note_id).title
        updated = client.notes.update(note_id, UpdateNoteRequest(title=title, content=content))
    except YanError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "note_id": note_id, "updated_at": updated.updated_at}


def notes_create(
    client: YanClient,
    *,
    title: str,
    parent_id: int | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    """Create a note, optionally below a parent."""
    try:
        note = client.notes.create(
            CreateNoteRequest(title=title, parent_id=parent_id, content=content)
        )
    except YanError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "note_id": note.id}


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    client: YanClient


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Load the persisted session on startup."""
    client = build_client()
    user = client.session.current_user()
    if user is None:
        logger.warning("No stored session; tools will fail until 'yan-notes login' is run")
    else:
        logger.info("Serving notes of {}", user.username)
    yield ServerContext(client=client)


mcp_server = FastMCP(
    "yan-notes",
    instructions="""\
Notes are organized as a tree: every note may have a parent note.

1. Call notes_tree_tool to see titles and ids of all notes.
2. Call notes_read_tool with an id to get the full content of a note.
3. Use notes_update_tool / notes_create_tool to change notes.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def notes_tree_tool(
    ctx: Context,
    root_id: int | None = None,
    max_depth: int | None = None,
    trashed: bool = False,
    output_format: str = "markdown",
) -> dict[str, Any]:
    """Show notes as a tree of titles and ids.

    Args:
        root_id: Only show the subtree below this note.
        max_depth: Max depth levels (None = unlimited).
        trashed: Show trashed notes instead of normal ones.
        output_format: "markdown" (human-readable) or "json" (structured).
    """
    return notes_tree(
        _ctx(ctx).client,
        root_id=root_id,
        max_depth=max_depth,
        trashed=trashed,
        output_format=output_format,
    )


@mcp_server.tool()
async def notes_read_tool(ctx: Context, note_id: int) -> dict[str, Any]:
    """Read the full content of a note.

    Args:
        note_id: Note id from notes_tree_tool.
    """
    return notes_read(_ctx(ctx).client, note_id=note_id)


@mcp_server.tool()
async def notes_update_tool(
    ctx: Context,
    note_id: int,
    title: str | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    """Replace a note's title and/or content.

    Args:
        note_id: Note id.
        title: New title (unchanged when omitted).
        content: New content (unchanged when omitted).
    """
    return notes_update(_ctx(ctx).client, note_id=note_id, title=title, content=content)


@mcp_server.tool()
async def notes_create_tool(
    ctx: Context,
    title: str,
    parent_id: int | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    """Create a note.

    Args:
        title: Title of the new note.
        parent_id: Parent note id (top level when omitted).
        content: Initial content.
    """
    return notes_create(_ctx(ctx).client, title=title, parent_id=parent_id, content=content)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from yan_notes.logging_config import configure_logging

    configure_logging(server=True)
    mcp_server.run(transport="stdio")
