import textwrap

import pytest


@pytest.fixture(autouse=True)
def use_80_columns(monkeypatch):
    """Override the COLUMNS environment variable to 80.

    This keeps the width of rich warnings independent of the terminal.
    """
    monkeypatch.setenv("COLUMNS", "80")


@pytest.fixture
def write_trace(tmp_path):
    """Write a dedented trace log into a temporary file and return its path."""

    def _write(content, name="trace.log"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write
