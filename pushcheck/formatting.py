"""Formatting and output helpers.

Results are always written as plain text, since scripts match on them. The
label of an error message is highlighted when written to a TTY.
"""
from typing import TextIO

import colorama

from . import OidStr
from .reachability import NotPushed, Pushed, ReachabilityResult


def describe_result(head_oid: OidStr, result: ReachabilityResult) -> str:
    """Describe the outcome of a check in a single line.

    Args:
      head_oid: The full OID of `HEAD`.
      result: The result of `pushcheck.reachability.check`.

    Returns:
      The line to print, without a trailing newline.
    """
    if isinstance(result, Pushed):
        kind = "remote tag" if result.is_tag else "remote branch"
        return (
            f"Local HEAD ({head_oid}) is pushed "
            f"(found in {kind}: {result.reference_name})."
        )
    else:
        assert isinstance(result, NotPushed)
        return f"Local HEAD ({head_oid}) is NOT pushed to remote."


def describe_error(err: TextIO, error: Exception) -> str:
    """Describe a failed check, styling the label in bright red on a TTY.

    Args:
      err: The stream the message will be written to.
      error: The error which aborted the check.

    Returns:
      The line to print, without a trailing newline.
    """
    label = "Error"
    if err.isatty():
        colorama.just_fix_windows_console()
        label = (
            colorama.Style.BRIGHT
            + colorama.Fore.RED
            + label
            + colorama.Style.RESET_ALL
        )
    return f"{label}: {error}"
