from typing import Iterable
from typing import Optional
from typing import TextIO

from stackmerge._calltree import CallTree
from stackmerge._trace import Branch

INDENT = "  "
BULLET = "|-"


class TextReporter:
    def __init__(self, tree: CallTree) -> None:
        super().__init__()
        self.tree = tree

    @classmethod
    def from_branches(cls, branches: Iterable[Branch]) -> "TextReporter":
        return cls(CallTree.from_branches(branches))

    def render(
        self,
        outfile: TextIO,
        *,
        max_depth: Optional[int] = None,
    ) -> None:
        for depth, node in self.tree.walk(max_depth):
            print(f"{INDENT * depth}{BULLET}{node.name}", file=outfile)
