"""Command-line interface for yan-notes."""

import asyncio
import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from yan_notes.app import YanClient, build_client
from yan_notes.config import SYNC_INTERVAL, WATCH_POLL_INTERVAL
from yan_notes.core.sync.scheduler import SyncScheduler
from yan_notes.core.tree.builder import build_tree, by_position, count_nodes
from yan_notes.core.tree.markdown import render_tree_as_markdown
from yan_notes.errors import YanError
from yan_notes.logging_config import configure_logging
from yan_notes.models.note import CreateNoteRequest, ListNotesParams, NoteStatus
from yan_notes.models.user import LoginRequest, RegisterRequest

app = typer.Typer(help="yan-notes: browse and edit your note tree from the terminal.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@contextmanager
def _reporting(client: YanClient) -> Iterator[None]:
    """Turn client errors into a notification and exit code 1."""
    try:
        yield
    except YanError as e:
        client.notifier.error(str(e))
        raise typer.Exit(1) from e


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    tenant: Annotated[
        str | None, typer.Option("--tenant", "-t", help="Organization code sent with requests")
    ] = None,
    token: Annotated[
        str | None, typer.Option("--token", help="Authorization token sent with requests")
    ] = None,
) -> None:
    """Log in and remember the session."""
    client = build_client()
    if tenant:
        client.context.tenant_code = tenant
    if token:
        client.context.token = token
    with _reporting(client):
        user = client.session.login(LoginRequest(email=email, password=password))
    client.notifier.success(f"Logged in as {user.username}")


@app.command()
def register(
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True
    ),
) -> None:
    """Create an account. Log in afterwards with 'yan-notes login'."""
    client = build_client()
    with _reporting(client):
        user = client.session.register(
            RegisterRequest(username=username, password=password, email=email)
        )
    client.notifier.success(f"Registered {user.username}, you can now log in")


@app.command()
def logout() -> None:
    """Log out and forget the local session."""
    client = build_client()
    client.session.logout()
    client.notifier.success("Logged out")


@app.command()
def whoami(
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the logged-in user."""
    client = build_client()
    user = client.session.current_user()
    if user is None:
        typer.echo("Not logged in.")
        raise typer.Exit(1)
    if output_json:
        _echo_json(user.to_json())
    else:
        typer.echo(f"{user.username} <{user.email}> (id={user.id})")


@app.command()
def tree(
    trash: bool = typer.Option(False, "--trash", help="Show trashed notes instead"),
    favorites: bool = typer.Option(False, "--favorites", help="Only favorite notes"),
    depth: Annotated[
        int | None, typer.Option("--depth", "-n", help="Max depth below top level")
    ] = None,
    content: bool = typer.Option(False, "--content", "-c", help="Include note content"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show all notes as a tree."""
    client = build_client()
    params = ListNotesParams(
        status=NoteStatus.TRASHED if trash else None,
        favorite=True if favorites else None,
    )
    with _reporting(client):
        notes = client.notes.list(params)

    roots = build_tree(notes, sort_key=by_position)
    if output_json:
        _echo_json({"count": count_nodes(roots), "notes": [r.to_json() for r in roots]})
        return
    if not roots:
        typer.echo("No notes.")
        return
    typer.echo(render_tree_as_markdown(roots, max_depth=depth, include_content=content), nl=False)


@app.command()
def show(
    note_id: int = typer.Argument(..., help="Note id"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print a single note."""
    client = build_client()
    with _reporting(client):
        note = client.notes.get(note_id)
    if output_json:
        _echo_json(note.to_json())
        return
    typer.echo(f"# {note.title}")
    if note.content:
        typer.echo("")
        typer.echo(note.content)


@app.command()
def new(
    title: str = typer.Argument(..., help="Title of the new note"),
    parent: Annotated[int | None, typer.Option("--parent", "-P", help="Parent note id")] = None,
    content: Annotated[str | None, typer.Option("--content", "-c", help="Initial content")] = None,
    icon: Annotated[str | None, typer.Option("--icon", help="Icon")] = None,
) -> None:
    """Create a note."""
    client = build_client()
    with _reporting(client):
        note = client.notes.create(
            CreateNoteRequest(title=title, parent_id=parent, content=content, icon=icon)
        )
    typer.echo(str(note.id))


@app.command()
def trash(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Move a note to the trash."""
    client = build_client()
    with _reporting(client):
        client.notes.trash(note_id)
    client.notifier.success(f"Moved note {note_id} to trash")


@app.command()
def restore(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Restore a note from the trash."""
    client = build_client()
    with _reporting(client):
        client.notes.restore(note_id)
    client.notifier.success(f"Restored note {note_id}")


@app.command()
def favorite(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Toggle the favorite flag of a note."""
    client = build_client()
    with _reporting(client):
        client.notes.toggle_favorite(note_id)
    client.notifier.success(f"Toggled favorite on note {note_id}")


@app.command()
def move(
    note_id: int = typer.Argument(..., help="Note id"),
    position: int = typer.Argument(..., help="New position among its siblings"),
) -> None:
    """Change the position of a note among its siblings."""
    client = build_client()
    with _reporting(client):
        client.notes.update_position(note_id, position)
    client.notifier.success(f"Moved note {note_id} to position {position}")


@app.command(name="rm")
def remove(
    note_id: int = typer.Argument(..., help="Note id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a note permanently."""
    if not yes:
        typer.confirm(f"Delete note {note_id} permanently?", abort=True)
    client = build_client()
    with _reporting(client):
        client.notes.delete(note_id)
    client.notifier.success(f"Deleted note {note_id}")


async def run_edit_session(
    client: YanClient,
    note_id: int,
    path: Path,
    *,
    interval: float = SYNC_INTERVAL,
    poll: float = WATCH_POLL_INTERVAL,
    once: bool = False,
) -> bool:
    """Mirror a local file into a note's content until cancelled.

    The file is seeded with the note's content if it does not exist. Changes are
    flushed by the sync scheduler; pending edits are flushed once more on exit.

    Returns:
        False if the note could not be loaded.
    """
    async with SyncScheduler(client.notes, interval=interval) as sync:
        note = await sync.load(note_id)
        if note is None:
            return False

        if not path.exists():
            path.write_text(note.content, encoding="utf-8")
            logger.info("Wrote note {} to {}", note_id, path)
        last = path.read_text(encoding="utf-8")
        if last != note.content:
            sync.edit(last)

        if once:
            await sync.flush_now()
            return True

        logger.info("Watching {} for changes to note {} (Ctrl-C to stop)", path, note_id)
        try:
            while True:
                await asyncio.sleep(poll)
                text = path.read_text(encoding="utf-8")
                if text != last:
                    last = text
                    sync.edit(text)
        except asyncio.CancelledError:
            await sync.flush_now()
            raise


@app.command()
def edit(
    note_id: int = typer.Argument(..., help="Note id"),
    file: Path = typer.Argument(..., help="Local file mirrored into the note content"),
    interval: float = typer.Option(SYNC_INTERVAL, "--interval", "-i", help="Seconds between syncs"),
    once: bool = typer.Option(False, "--once", help="Push the file once and exit"),
) -> None:
    """Edit a note through a local file, syncing changes in the background."""
    client = build_client()
    with _reporting(client):
        try:
            loaded = asyncio.run(run_edit_session(client, note_id, file, interval=interval, once=once))
        except KeyboardInterrupt:
            loaded = True
    if not loaded:
        client.notifier.error(f"Could not load note {note_id}")
        raise typer.Exit(1)
    if once:
        client.notifier.success(f"Synced {file} to note {note_id}")


@app.command()
def serve() -> None:
    """Run the MCP server (stdio transport)."""
    from yan_notes.mcp.server import run_mcp_server

    run_mcp_server()
