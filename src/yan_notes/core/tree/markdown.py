"""Render materialized note trees as markdown."""

import io
from collections.abc import Iterable

from yan_notes.core.tree.builder import TreeNode, iter_tree
from yan_notes.models.note import Note


def render_tree_as_markdown(
    roots: Iterable[TreeNode[Note]],
    *,
    max_depth: int | None = None,
    include_content: bool = False,
    show_ids: bool = True,
) -> str:
    """Render note trees as an indented markdown outline.

    Args:
        roots: Top-level nodes, as returned by build_tree.
        max_depth: Max levels below the roots to include (None = unlimited).
        include_content: Whether to include note content under each title.
        show_ids: Append the note id to each line.

    Returns:
        Markdown string with bullet-list hierarchy.
    """
    out = io.StringIO()
    for depth, node in iter_tree(roots):
        if max_depth is not None and depth > max_depth:
            continue
        note = node.item
        indent = "    " * depth

        marker = "★ " if note.favorited else ""
        icon = f"{note.icon} " if note.icon else ""
        title = note.title or "(untitled)"
        suffix = f" (id={note.id})" if show_ids else ""
        out.write(f"{indent}- {marker}{icon}{title}{suffix}\n")

        if include_content and note.content:
            for line in note.content.split("\n"):
                out.write(f"{indent}  > {line}\n")

        # Truncation indicator when children are cut off by max_depth
        if max_depth is not None and depth == max_depth and node.children:
            count = len(node.children)
            noun = "child" if count == 1 else "children"
            out.write(f"{indent}    - ... ({count} more {noun})\n")

    return out.getvalue()
