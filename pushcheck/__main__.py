"""Main entry-point."""
import argparse
import logging
import os
import sys
from typing import List, NoReturn, TextIO

from . import __version__, get_head_oid, get_repo
from .errors import PushCheckError
from .formatting import describe_error, describe_result
from .reachability import FILTER_MODES, FilterMode, Pushed, check
from .references import AncestryQuery, RepoReferences

LOG_LEVEL_ENV_VAR = "PUSHCHECK_LOG"

EXIT_PUSHED = 0
EXIT_ERROR = 1
EXIT_NOT_PUSHED = 2


class UsageError(Exception):
    """Raised when the command-line arguments are invalid."""


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser which doesn't exit the process on bad input.

    `argparse` exits with code 2 on usage errors, which would be
    indistinguishable from "not pushed".
    """

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def get_log_level() -> int:
    """Get the logging level requested through the environment.

    Returns:
      The level named by `PUSHCHECK_LOG` (e.g. "debug"), or `logging.WARNING`
      if it is unset or not a level name.
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "warning")
    level = logging.getLevelName(level_name.upper())
    if isinstance(level, int):
        return level
    else:
        return logging.WARNING


def run(*, out: TextIO, mode: FilterMode) -> int:
    """Check whether `HEAD` of the repository in the current directory is pushed.

    Args:
      out: The output stream to write to.
      mode: Which references to consider.

    Returns:
      `EXIT_PUSHED` or `EXIT_NOT_PUSHED`.

    Raises:
      PushCheckError: If the check could not be carried out.
    """
    repo = get_repo()
    logging.debug(f"Opened repository: {repo.path}")

    head_oid = get_head_oid(repo)
    logging.debug(f"HEAD is at {head_oid}")

    result = check(
        head=head_oid,
        references=RepoReferences(repo),
        mode=mode,
        is_ancestor=AncestryQuery(repo),
    )
    out.write(describe_result(head_oid, result) + "\n")
    if isinstance(result, Pushed):
        return EXIT_PUSHED
    else:
        return EXIT_NOT_PUSHED


def main(argv: List[str], *, out: TextIO, err: TextIO) -> int:
    """Run the check.

    Args:
      argv: List of command-line arguments (e.g. from `sys.argv`).
      out: Output stream to write to (may be a TTY).
      err: Error stream to write to (may be a TTY).

    Errors which abort the check are written to `err` as `Error: <message>`
    regardless of the logging level, and logged at debug level along with
    their traceback.

    Returns:
      Exit code: 0 if `HEAD` is pushed, 2 if it isn't, and 1 on error.
    """
    logging.basicConfig(level=get_log_level())

    parser = ArgumentParser(
        prog="pushcheck",
        add_help=False,
        description=(
            "Check if HEAD is pushed to a remote. Exits with 0 if the HEAD "
            "commit is found in a remote branch or tag, 2 if it isn't, and 1 "
            "if an error occurs. You may want to fetch updates first."
        ),
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="show this help message and exit"
    )
    parser.add_argument(
        "--version", action="store_true", help="show the version number and exit"
    )
    parser.add_argument(
        "--only",
        choices=FILTER_MODES,
        default="all",
        help="Which references to check: branches, tags, or all (default: all).",
    )

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(file=err)
        err.write(f"{parser.prog}: error: {e}\n")
        return EXIT_ERROR
    logging.debug(f"Parsed arguments: {args}")

    if args.help:
        parser.print_help(file=out)
        return 0
    elif args.version:
        out.write(f"{parser.prog} {__version__}\n")
        return 0

    try:
        return run(out=out, mode=args.only)
    except PushCheckError as e:
        logging.debug(f"Check failed: {e}", exc_info=True)
        err.write(describe_error(err, e) + "\n")
        return EXIT_ERROR


def entry_point() -> None:
    sys.exit(main(sys.argv[1:], out=sys.stdout, err=sys.stderr))


if __name__ == "__main__":
    entry_point()
