"""Tests for markdown rendering of note trees."""

from tests.unit.fakes import make_note
from yan_notes.core.tree.builder import TreeNode, build_tree
from yan_notes.core.tree.markdown import render_tree_as_markdown


def _roots() -> list[TreeNode]:
    return build_tree(
        [
            make_note(1, title="Projects", content="All projects\nActive only"),
            make_note(2, 1, title="Website", is_favorite=1),
            make_note(3, 2, title="Launch plan", icon="🚀"),
            make_note(4, title="Journal"),
        ]
    )


def test_render_nests_children_with_indentation() -> None:
    md = render_tree_as_markdown(_roots())

    assert md.splitlines() == [
        "- Projects (id=1)",
        "    - ★ Website (id=2)",
        "        - 🚀 Launch plan (id=3)",
        "- Journal (id=4)",
    ]


def test_render_with_depth_limit_shows_truncation() -> None:
    md = render_tree_as_markdown(_roots(), max_depth=1)

    assert "Website" in md
    assert "Launch plan" not in md
    assert "... (1 more child)" in md


def test_render_no_truncation_for_childless_nodes() -> None:
    md = render_tree_as_markdown(_roots(), max_depth=0)

    assert "... (1 more child)" in md
    assert md.count("more child") == 1


def test_render_includes_content_when_requested() -> None:
    md = render_tree_as_markdown(_roots(), include_content=True, show_ids=False)

    assert "- Projects\n  > All projects\n  > Active only\n" in md


def test_render_untitled_note() -> None:
    md = render_tree_as_markdown(build_tree([make_note(9, title="")]), show_ids=False)

    assert md == "- (untitled)\n"
