import argparse
import logging
import sys
import textwrap
from typing import List
from typing import Optional

from stackmerge._errors import StackmergeCommandError
from stackmerge._errors import StackmergeError
from stackmerge._version import __version__

from .merge import MergeCommand

_EPILOG = textwrap.dedent(
    """\
    Each sample in the trace starts with a 'stack:' marker line naming the
    innermost call, followed by one line per caller, outermost last.
    """
)

_DESCRIPTION = """\
Merge sampled call stacks into a single call tree

Prints the tree to the terminal and writes it as a browsable HTML page.

    Example:

    $ python3 -m stackmerge trace.log 10
    $ python3 -m stackmerge trace.log unlimited -o callgraph.html
"""


def get_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=_DESCRIPTION,
        prog="stackmerge",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity. Option is additive and can be specified up to 3 times",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=__version__,
        help="Displays the current version of stackmerge",
    )

    command = MergeCommand()
    parser.set_defaults(entrypoint=command.run)
    command.prepare_parser(parser)
    return parser


def determine_logging_level_from_verbosity(
    verbose_level: int,
) -> int:  # pragma: no cover
    if verbose_level == 0:
        return logging.WARNING
    elif verbose_level == 1:
        return logging.INFO
    else:
        return logging.DEBUG


def main(args: Optional[List[str]] = None) -> int:
    if args is None:
        args = sys.argv[1:]

    parser = get_argument_parser()
    arg_values = parser.parse_args(args=args)
    logging.basicConfig(
        level=determine_logging_level_from_verbosity(arg_values.verbose),
        format="%(levelname)s(%(funcName)s): %(message)s",
    )

    try:
        arg_values.entrypoint(arg_values, parser)
    except StackmergeCommandError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    except StackmergeError as e:
        print(e, file=sys.stderr)
        return 1
    else:
        return 0
