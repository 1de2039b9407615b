"""Merging of stack samples into a single call tree."""
from dataclasses import dataclass
from dataclasses import field
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple

from stackmerge._trace import Branch

ROOT_NAME = "<ROOT>"


@dataclass
class CallNode:
    """A call in the tree"""

    name: str
    children: Dict[str, "CallNode"] = field(default_factory=dict)

    def sorted_children(self) -> List["CallNode"]:
        return [self.children[name] for name in sorted(self.children)]


class CallTree:
    """Prefix tree of call names built from stack samples.

    The root node is implicit: it is never rendered and its children are the
    outermost calls seen across all the samples.
    """

    def __init__(self) -> None:
        self.root = CallNode(name=ROOT_NAME)

    @classmethod
    def from_branches(cls, branches: Iterable[Branch]) -> "CallTree":
        return merge_branches(branches, tree=cls())

    def top_level_names(self) -> List[str]:
        return sorted(self.root.children)

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    def walk(self, max_depth: Optional[int] = None) -> Iterator[Tuple[int, CallNode]]:
        """Yield ``(depth, node)`` pairs in pre-order.

        Children are visited in name order. Nodes deeper than *max_depth* are
        skipped together with their whole subtree. ``None`` means no limit.
        """
        stack = [(0, child) for child in reversed(self.root.sorted_children())]
        while stack:
            depth, node = stack.pop()
            if max_depth is not None and depth > max_depth:
                continue
            yield depth, node
            stack.extend(
                (depth + 1, child) for child in reversed(node.sorted_children())
            )

    def walk_visible(
        self, max_depth: Optional[int] = None
    ) -> Iterator[Tuple[int, CallNode]]:
        """Like :meth:`walk`, but nodes with an empty name are transparent.

        An empty-named node is not yielded and its children take its place at
        the same depth, so it never consumes a level of indentation.
        """
        stack = [(0, child) for child in reversed(self.root.sorted_children())]
        while stack:
            depth, node = stack.pop()
            if max_depth is not None and depth > max_depth:
                continue
            child_depth = depth
            if node.name:
                yield depth, node
                child_depth += 1
            stack.extend(
                (child_depth, child) for child in reversed(node.sorted_children())
            )


def merge_branch(tree: CallTree, branch: Branch) -> None:
    """Insert one sample, outermost call first, reusing existing nodes."""
    current = tree.root
    for name in reversed(branch):
        node = current.children.get(name)
        if node is None:
            node = current.children[name] = CallNode(name=name)
        current = node


def merge_branches(
    branches: Iterable[Branch], *, tree: Optional[CallTree] = None
) -> CallTree:
    if tree is None:
        tree = CallTree()
    for branch in branches:
        merge_branch(tree, branch)
    return tree
