import logging
from textwrap import dedent

import pytest

from stackmerge._errors import MalformedInputError
from stackmerge._trace import TraceParser


class TestTraceParser:
    def test_empty_input_has_no_branches(self):
        assert TraceParser().parse_string("") == []

    def test_marker_starts_a_new_branch(self):
        # GIVEN
        content = dedent(
            """\
            stack: me
                parent
                grandparent
            stack: other
                parent
            """
        )

        # WHEN
        branches = TraceParser().parse_string(content)

        # THEN
        assert branches == [["me", "parent", "grandparent"], ["other", "parent"]]

    def test_marker_can_appear_after_a_prefix(self):
        # GIVEN
        content = "[12:00:01] pid 42 stack:   me  \n  parent\n"

        # WHEN
        branches = TraceParser().parse_string(content)

        # THEN
        assert branches == [["me", "parent"]]

    def test_only_ascii_whitespace_is_trimmed(self):
        # GIVEN
        content = "stack:\t me \r\n \f\vFoo::bar baz\x0b\n\u00a0nbsp\n"

        # WHEN
        branches = TraceParser().parse_string(content)

        # THEN
        assert branches == [["me", "Foo::bar baz", "\u00a0nbsp"]]

    def test_blank_lines_become_empty_names(self):
        # GIVEN
        content = "stack: me\n\nparent\nstack:\n"

        # WHEN
        branches = TraceParser().parse_string(content)

        # THEN
        assert branches == [["me", "", "parent"], [""]]

    def test_custom_marker(self):
        # GIVEN
        parser = TraceParser(marker="SAMPLE>")

        # WHEN
        branches = parser.parse_string("SAMPLE> me\nstack: parent\n")

        # THEN
        assert branches == [["me", "stack: parent"]]

    def test_empty_marker_is_rejected(self):
        with pytest.raises(ValueError):
            TraceParser(marker="")

    def test_lines_before_first_marker_are_skipped(self, caplog):
        # GIVEN
        content = "orphan\n\nstack: me\n  parent\n"
        parser = TraceParser()

        # WHEN
        with caplog.at_level(logging.DEBUG, logger="stackmerge._trace"):
            branches = parser.parse_string(content)

        # THEN
        assert branches == [["me", "parent"]]
        assert parser.skipped_lines == [1, 2]
        assert "Skipping line 1" in caplog.text
        assert "'orphan'" in caplog.text

    def test_skipped_lines_are_reset_between_parses(self):
        # GIVEN
        parser = TraceParser()
        parser.parse_string("orphan\nstack: me\n")

        # WHEN
        parser.parse_string("stack: me\n")

        # THEN
        assert parser.skipped_lines == []

    def test_strict_mode_rejects_lines_before_first_marker(self):
        # GIVEN
        parser = TraceParser(strict=True)

        # WHEN
        with pytest.raises(MalformedInputError) as exc_info:
            parser.parse_string("  orphan  \nstack: me\n")

        # THEN
        assert exc_info.value.line_number == 1
        assert exc_info.value.line == "orphan"

    def test_parse_file(self, write_trace):
        # GIVEN
        path = write_trace(
            """\
            stack: b
              a
            stack: c
              a
            """
        )

        # WHEN
        branches = TraceParser().parse_file(path)

        # THEN
        assert branches == [["b", "a"], ["c", "a"]]

    def test_parse_file_with_windows_line_endings(self, tmp_path):
        # GIVEN
        path = tmp_path / "trace.log"
        path.write_bytes(b"stack: b\r\n  a\r\n")

        # WHEN
        branches = TraceParser().parse_file(path)

        # THEN
        assert branches == [["b", "a"]]

    def test_parse_file_keeps_carriage_returns_inside_names(self, tmp_path):
        # GIVEN
        content = b"stack: a\rb\n  main\n"
        path = tmp_path / "trace.log"
        path.write_bytes(content)

        # WHEN
        branches = TraceParser().parse_file(path)

        # THEN
        assert branches == [["a\rb", "main"]]
        assert branches == TraceParser().parse_string(content.decode())

    def test_parse_file_with_invalid_utf8(self, tmp_path):
        # GIVEN
        path = tmp_path / "trace.log"
        path.write_bytes(b"stack: b\xff\n  a\n")

        # WHEN
        branches = TraceParser().parse_file(path)

        # THEN
        assert branches == [["b\ufffd", "a"]]
