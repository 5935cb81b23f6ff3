"""Tag hierarchy: forest construction from parent pointers and tree art."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .models import Tag

# Id of the synthetic "no parent" node whose children are the roots.
ROOT: None = None

BRANCH = "├───"
TERMINAL = "└───"
HAS_CHILDREN = "┬"
LEAF = "─"
CONTINUATION = "│   "
PADDING = "    "


@dataclass(slots=True)
class TreeNode:
    id: str | None
    name: str = ""
    parent_id: str | None = None
    children: list[str] = field(default_factory=list)


Forest = dict[str | None, TreeNode]


def build_forest(tags: Iterable[Tag]) -> Forest:
    """Build a forest keyed by id from flat ``{id, name, parent_id}`` records.

    Children keep the order in which their records arrive; sort upstream to
    get ordered siblings. A record may name a parent that comes later in the
    input, so parents are allocated as placeholders on first reference.
    A parent id that never gets a record of its own stays an empty-named
    placeholder and is hung off the root so its subtree is still reachable.
    """
    forest: Forest = {ROOT: TreeNode(id=ROOT)}
    described: set[str] = set()

    for tag in tags:
        node = forest.setdefault(tag.id, TreeNode(id=tag.id))
        node.name = tag.name
        node.parent_id = tag.parent_id
        described.add(tag.id)

        parent = forest.setdefault(tag.parent_id, TreeNode(id=tag.parent_id))
        parent.children.append(tag.id)

    root = forest[ROOT]
    for node_id, node in forest.items():
        if node_id is not ROOT and node_id not in described:
            root.children.append(node_id)
    return forest


def unreachable_ids(forest: Forest) -> list[str]:
    """Ids that no walk from the root visits, e.g. members of a parent cycle."""
    seen: set[str | None] = set()
    stack: list[str | None] = [ROOT]
    while stack:
        node_id = stack.pop()
        if node_id in seen:
            continue
        seen.add(node_id)
        stack.extend(forest[node_id].children)
    return [node_id for node_id in forest if node_id not in seen and node_id is not None]


@dataclass(frozen=True, slots=True)
class RenderOptions:
    max_depth: int | None = None
    show_count: bool = False
    counts: Mapping[str, int] = field(default_factory=dict)

    def label(self, node: TreeNode) -> str:
        if not self.show_count:
            return node.name
        return f"{node.name} ({self.counts.get(node.id or '', 0)})"


def render_forest(forest: Forest, options: RenderOptions | None = None) -> Iterator[str]:
    """Yield one line of tree art per visited node, parents first.

    Roots sit at depth 1 and carry no connector. Nodes deeper than
    ``options.max_depth`` are skipped together with their descendants.
    """
    opts = options or RenderOptions()
    if opts.max_depth is not None and opts.max_depth < 1:
        return
    for root_id in forest[ROOT].children:
        root = forest[root_id]
        yield opts.label(root)
        yield from _render_children(forest, root, opts, prefix="", depth=2)


def _render_children(
    forest: Forest,
    node: TreeNode,
    opts: RenderOptions,
    *,
    prefix: str,
    depth: int,
) -> Iterator[str]:
    if opts.max_depth is not None and depth > opts.max_depth:
        return

    last_idx = len(node.children) - 1
    for idx, child_id in enumerate(node.children):
        child = forest[child_id]
        is_last = idx == last_idx
        connector = TERMINAL if is_last else BRANCH
        glyph = HAS_CHILDREN if child.children else LEAF
        yield f"{prefix}{connector}{glyph} {opts.label(child)}"
        yield from _render_children(
            forest,
            child,
            opts,
            prefix=prefix + (PADDING if is_last else CONTINUATION),
            depth=depth + 1,
        )
