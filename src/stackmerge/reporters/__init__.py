from typing import Optional
from typing import Protocol
from typing import TextIO


class BaseReporter(Protocol):
    def render(
        self,
        outfile: TextIO,
        *,
        max_depth: Optional[int] = None,
    ) -> None:
        ...
