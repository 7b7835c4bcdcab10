"""Materialize a flat, parent-referencing list into a nested tree."""

import copy
import functools
import operator
from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class TreeNode(Generic[T]):
    """An item plus its ordered children."""

    item: T
    children: list["TreeNode[T]"] = field(default_factory=list)

    def to_json(self, item_to_json: Callable[[T], Any] | None = None) -> dict[str, Any]:
        """Nested JSON form: the item's fields plus a "children" list."""
        if item_to_json is not None:
            data = dict(item_to_json(self.item))
        elif hasattr(self.item, "to_json"):
            data = dict(self.item.to_json())  # type: ignore[attr-defined]
        else:
            data = dict(self.item)  # type: ignore[call-overload]
        data["children"] = [child.to_json(item_to_json) for child in self.children]
        return data


def build_tree(
    items: Iterable[T],
    *,
    root_parent_id: Hashable | None = None,
    sort_key: Callable[[T], Any] | None = None,
    cmp: Callable[[T, T], int] | None = None,
    id_of: Callable[[T], Hashable] = operator.attrgetter("id"),
    parent_of: Callable[[T], Hashable | None] = operator.attrgetter("parent_id"),
) -> list[TreeNode[T]]:
    """Convert a flat list of items into a list of root nodes with children.

    Items are deep-copied into the nodes, so the result can be modified freely.

    Placement of each item:
    - parent equals root_parent_id: top level.
    - parent is another item in the list: that item's children.
    - parent is set but not in the list: top level (fallback, not an error).
    An item whose parent is None while root_parent_id is not None is left out.

    Args:
        items: Flat items, each with an id and a nullable parent id.
        root_parent_id: Parent id marking top-level items.
        sort_key: Sibling ordering key, applied independently at every level.
        cmp: Old-style comparator, used when sort_key is not given.
        id_of: Returns an item's id.
        parent_of: Returns an item's parent id.

    Returns:
        Top-level nodes, in input order unless a sort is requested.
    """
    items = list(items)
    index: dict[Hashable, TreeNode[T]] = {}
    nodes: list[TreeNode[T]] = []
    for item in items:
        node = TreeNode(item=copy.deepcopy(item))
        index[id_of(item)] = node
        nodes.append(node)

    result: list[TreeNode[T]] = []
    for item, node in zip(items, nodes):
        parent_id = parent_of(item)
        if parent_id == root_parent_id:
            result.append(node)
        elif parent_id is not None:
            parent = index.get(parent_id)
            if parent is not None:
                parent.children.append(node)
            else:
                result.append(node)

    key = sort_key
    if key is None and cmp is not None:
        key = functools.cmp_to_key(cmp)
    if key is not None:
        _sort_levels(result, key)

    return result


def _sort_levels(nodes: list[TreeNode[T]], key: Callable[[T], Any]) -> None:
    # Iterative so that deep trees cannot exhaust the recursion limit.
    todo = [nodes]
    while todo:
        level = todo.pop()
        level.sort(key=lambda n: key(n.item))
        todo.extend(n.children for n in level if n.children)


def iter_tree(nodes: Iterable[TreeNode[T]]) -> Iterator[tuple[int, TreeNode[T]]]:
    """Walk nodes in pre-order (same order as shown in UI), yielding (depth, node)."""
    todo: list[tuple[int, TreeNode[T]]] = [(0, n) for n in nodes]
    todo.reverse()
    while todo:
        depth, node = todo.pop()
        yield depth, node
        todo.extend((depth + 1, child) for child in reversed(node.children))


def count_nodes(nodes: Iterable[TreeNode[Any]]) -> int:
    """Total number of nodes across all levels."""
    return sum(1 for _ in iter_tree(nodes))


def by_position(note: Any) -> tuple[int, int]:
    """Default sibling order for notes: position, then id."""
    return (note.position, note.id)
