"""Parsing of stack sample logs into branches.

A trace log is a sequence of samples. Each sample starts with a marker line::

    stack: innermost_call
        its_caller
        its_callers_caller

Every following line up to the next marker belongs to the same sample, so a
sample lists the innermost call first and the outermost call last.
"""
import io
import logging
import os
from typing import Iterable
from typing import List
from typing import Union

from stackmerge._errors import MalformedInputError

LOGGER = logging.getLogger(__name__)

MARKER = "stack:"

# ASCII whitespace only: str.strip() without arguments would also eat
# unicode separators that may legitimately be part of a call name.
WHITESPACE = " \t\n\r\f\v"

Branch = List[str]


class TraceParser:
    """Parser for stack sample logs."""

    def __init__(self, marker: str = MARKER, *, strict: bool = False) -> None:
        if not marker:
            raise ValueError("The sample marker can't be empty")
        self.marker = marker
        self.strict = strict
        self.skipped_lines: List[int] = []

    def parse_file(self, file_path: Union[str, "os.PathLike[str]"]) -> List[Branch]:
        """Parse all the samples in a trace file."""
        with open(file_path, encoding="utf-8", errors="replace", newline="\n") as f:
            return self.parse(f)

    def parse_string(self, content: str) -> List[Branch]:
        return self.parse(io.StringIO(content))

    def parse(self, lines: Iterable[str]) -> List[Branch]:
        branches: List[Branch] = []
        self.skipped_lines = []
        for line_number, line in enumerate(lines, start=1):
            _, marker, call = line.partition(self.marker)
            if marker:
                branches.append([call.strip(WHITESPACE)])
                continue

            if not branches:
                self._handle_orphan_line(line_number, line)
                continue
            branches[-1].append(line.strip(WHITESPACE))

        LOGGER.debug("Parsed %d branches", len(branches))
        return branches

    def _handle_orphan_line(self, line_number: int, line: str) -> None:
        line = line.strip(WHITESPACE)
        if self.strict:
            raise MalformedInputError(line_number, line)
        LOGGER.debug(
            "Skipping line %d that precedes the first sample marker: %r",
            line_number,
            line,
        )
        self.skipped_lines.append(line_number)
