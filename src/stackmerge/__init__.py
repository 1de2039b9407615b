from ._calltree import CallNode
from ._calltree import CallTree
from ._calltree import merge_branch
from ._calltree import merge_branches
from ._errors import MalformedInputError
from ._errors import StackmergeError
from ._trace import Branch
from ._trace import TraceParser
from ._version import __version__

__all__ = [
    "Branch",
    "CallNode",
    "CallTree",
    "MalformedInputError",
    "StackmergeError",
    "TraceParser",
    "merge_branch",
    "merge_branches",
    "__version__",
]
