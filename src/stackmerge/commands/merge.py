import argparse
import io
import os
import sys
from pathlib import Path
from textwrap import dedent
from typing import List
from typing import Optional
from typing import Tuple

from rich import print as pprint
from rich.markup import escape

from stackmerge._calltree import CallTree
from stackmerge._errors import StackmergeCommandError
from stackmerge._trace import TraceParser
from stackmerge.reporters import BaseReporter
from stackmerge.reporters.html import HtmlReporter
from stackmerge.reporters.text import TextReporter

UNLIMITED = "unlimited"


def depth_limit(value: str) -> Optional[int]:
    """Convert the depth argument, ``None`` meaning no limit."""
    if value.lower() == UNLIMITED:
        return None
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"{value} is not an integer depth or {UNLIMITED!r}"
        )
    return depth if depth >= 0 else None


def warn_if_lines_were_skipped(skipped_lines: List[int], trace_path: Path) -> None:
    if not skipped_lines:
        return
    shown = ", ".join(str(number) for number in skipped_lines[:5])
    if len(skipped_lines) > 5:
        shown += ", ..."
    pprint(
        f":warning: [bold yellow] Skipped {len(skipped_lines)} line(s) of "
        f"{escape(str(trace_path))} that precede the first sample marker"
        " [/] :warning:\n\n"
        f"Lines: {shown}. Use [b]--strict[/] to reject such files instead.\n",
        file=sys.stderr,
    )


class MergeCommand:
    """Merge stack samples into a call tree and render it as text and HTML"""

    suffix = ".html"
    reporter_name = "callgraph"

    def __init__(self) -> None:
        self.output_file: Optional[Path] = None

    def determine_output_filename(self, trace_file: Path) -> Path:
        output_name = trace_file.with_suffix(self.suffix).name
        if output_name.startswith("stackmerge-"):
            output_name = output_name[len("stackmerge-") :]

        return trace_file.parent / f"stackmerge-{self.reporter_name}-{output_name}"

    def validate_filenames(
        self, output: Optional[str], trace: str, overwrite: bool = False
    ) -> Tuple[Path, Path]:
        """Ensure that the filenames provided by the user are usable."""
        trace_path = Path(trace)
        if not trace_path.exists() or not trace_path.is_file():
            raise StackmergeCommandError(f"No such file: {trace}", exit_code=1)

        output_file = Path(
            output if output is not None else self.determine_output_filename(trace_path)
        )
        if not overwrite and output_file.exists():
            raise StackmergeCommandError(
                f"File already exists, will not overwrite: {output_file}",
                exit_code=1,
            )
        return trace_path, output_file

    def read_header(self, header: Optional[str]) -> Optional[str]:
        if header is None:
            return None
        try:
            return Path(header).read_text(encoding="utf-8")
        except OSError as e:
            raise StackmergeCommandError(
                f"Failed to read HTML header {header}\nReason: {e}", exit_code=1
            )

    def write_report(
        self,
        reporter: BaseReporter,
        output_file: Path,
        max_depth: Optional[int],
    ) -> None:
        contents = io.StringIO()
        reporter.render(contents, max_depth=max_depth)

        output_path = output_file.expanduser()
        try:
            with open(os.fspath(output_path), "w", encoding="utf-8") as f:
                f.write(contents.getvalue())
        except OSError as e:
            if output_path.is_file():
                output_path.unlink()
            raise StackmergeCommandError(
                f"Failed to write {output_file}\nReason: {e}", exit_code=1
            )

    def prepare_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("trace", help="Stack sample log to merge")
        parser.add_argument(
            "depth",
            help=dedent(
                """
                Maximum depth of the rendered tree. Top level calls are at
                depth 0. A negative value or 'unlimited' renders the whole tree.
                """
            ),
            type=depth_limit,
        )
        parser.add_argument(
            "-o",
            "--output",
            help="Output file name for the HTML call graph",
            default=None,
        )
        parser.add_argument(
            "-f",
            "--force",
            help="If the output file already exists, overwrite it",
            action="store_true",
            default=False,
        )
        parser.add_argument(
            "--header",
            help="HTML fragment to use as the page header instead of the default one",
            default=None,
        )
        parser.add_argument(
            "--strict",
            help="Fail on lines that precede the first sample marker",
            action="store_true",
            default=False,
        )

    def run(self, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
        trace_path, output_file = self.validate_filenames(
            output=args.output,
            trace=args.trace,
            overwrite=args.force,
        )
        self.output_file = output_file
        header = self.read_header(args.header)

        trace_parser = TraceParser(strict=args.strict)
        try:
            branches = trace_parser.parse_file(trace_path)
        except OSError as e:
            raise StackmergeCommandError(
                f"Failed to read stack samples from {trace_path}\nReason: {e}",
                exit_code=1,
            )
        warn_if_lines_were_skipped(trace_parser.skipped_lines, trace_path)

        tree = CallTree.from_branches(branches)
        print(f"Parsed {len(branches)} branches from {trace_path}")
        TextReporter(tree).render(sys.stdout, max_depth=args.depth)

        self.write_report(
            HtmlReporter(tree, header=header), output_file, max_depth=args.depth
        )
        print(f"Wrote {output_file}")
