import html
from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional
from typing import TextIO

from stackmerge._calltree import CallTree
from stackmerge._trace import Branch
from stackmerge.reporters.templates import render_report

NBSP_INDENT = "&nbsp;&nbsp;"


class HtmlReporter:
    def __init__(self, tree: CallTree, *, header: Optional[str] = None) -> None:
        super().__init__()
        self.tree = tree
        self.header = header

    @classmethod
    def from_branches(
        cls, branches: Iterable[Branch], *, header: Optional[str] = None
    ) -> "HtmlReporter":
        return cls(CallTree.from_branches(branches), header=header)

    def get_rows(self, max_depth: Optional[int] = None) -> List[Dict[str, Any]]:
        return [
            {
                "depth": depth,
                "indent": NBSP_INDENT * depth,
                "name": html.escape(node.name),
            }
            for depth, node in self.tree.walk_visible(max_depth)
        ]

    def render(
        self,
        outfile: TextIO,
        *,
        max_depth: Optional[int] = None,
    ) -> None:
        html_code = render_report(
            kind="callgraph",
            rows=self.get_rows(max_depth),
            header=self.header,
        )
        print(html_code, file=outfile)
