from typing import Any


class StackmergeError(Exception):
    """Exceptions raised in this package."""


class StackmergeCommandError(StackmergeError):
    """Exceptions raised from this package's CLI commands."""

    def __init__(self, *args: Any, exit_code: int) -> None:
        super().__init__(*args)
        self.exit_code = exit_code


class MalformedInputError(StackmergeError):
    """A call line was found before any sample marker."""

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(
            f"Line {line_number} does not belong to any stack sample: {line!r}"
        )
        self.line_number = line_number
        self.line = line
