"""Decide whether a commit is reachable from remote references.

This is the heart of pushcheck. It doesn't talk to the repository directly:
the references and the ancestor-of query are handed in by the caller (see
`pushcheck.references` for the implementations backed by `pygit2`). That way,
the rules below can be tested against an in-memory commit graph.

Remote-tracking branches and tags are treated differently:

  * A remote branch matches if its tip is `HEAD` or a descendant of `HEAD`.
    Branch tips advance, so a branch which has moved past `HEAD` still
    contains it.
  * A tag matches only if it points at exactly `HEAD`. Tags are fixed
    markers, and a later tag says nothing about whether the intermediate
    commits were ever pushed.

Remote branches are always scanned before tags, and the first matching
reference wins. References are scanned in the order they are enumerated;
they are deliberately not sorted.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Literal, Optional, Tuple, Union

from typing_extensions import Protocol

from . import OidStr
from .errors import UnresolvableReferenceError

FilterMode = Union[Literal["branches"], Literal["tags"], Literal["all"]]
"""Which reference namespaces participate in the check."""

FILTER_MODES: Tuple[FilterMode, ...] = ("branches", "tags", "all")

REMOTE_BRANCH_PREFIX = "refs/remotes/"
TAG_PREFIX = "refs/tags/"

IsAncestor = Callable[[OidStr, OidStr], bool]
"""Answers whether the first commit is an ancestor of the second.

May raise `AncestryQueryError`, which is propagated to the caller of `check`.
"""


class Reference(Protocol):
    """A named pointer which can be resolved to a commit."""

    @property
    def name(self) -> str:  # pragma: no cover
        """The full name of the reference, such as `refs/tags/v1.0`."""
        ...

    def peel(self) -> OidStr:  # pragma: no cover
        """Resolve the reference to the commit it ultimately points to.

        Annotated tags are dereferenced to the commit they describe.

        Raises:
          UnresolvableReferenceError: If the reference doesn't lead to a
            commit.
        """
        ...


@dataclass(frozen=True, eq=True)
class ResolvedReference:
    """A reference whose target commit is already known."""

    name: str
    target: OidStr

    def peel(self) -> OidStr:
        return self.target


@dataclass(frozen=True, eq=True)
class Pushed:
    """`HEAD` was found on a remote."""

    reference_name: str
    """The first reference found to contain `HEAD`."""

    @property
    def is_tag(self) -> bool:
        return self.reference_name.startswith(TAG_PREFIX)


@dataclass(frozen=True, eq=True)
class NotPushed:
    """No remote reference contains `HEAD`."""


ReachabilityResult = Union[Pushed, NotPushed]


def _iter_targets(
    references: Iterable[Reference], prefix: str, logger: logging.Logger
) -> Iterator[Tuple[str, OidStr]]:
    for reference in references:
        name = reference.name
        if not name.startswith(prefix):
            continue
        try:
            target = reference.peel()
        except UnresolvableReferenceError as e:
            logger.debug(f"Skipping reference: {e}")
            continue
        yield (name, target)


def check(
    head: OidStr,
    references: Iterable[Reference],
    mode: FilterMode,
    is_ancestor: IsAncestor,
    logger: Optional[logging.Logger] = None,
) -> ReachabilityResult:
    """Determine whether `head` is reachable from a remote reference.

    Args:
      head: The commit to look for.
      references: The references of the repository. A re-iterable view is
        enumerated afresh for each namespace scanned; a one-shot iterator
        is collected into a list first.
      mode: Which namespaces to scan.
      is_ancestor: The ancestor-of query over the commit graph.
      logger: Where to send debug events. Defaults to this module's logger.

    Returns:
      `Pushed` with the first matching reference, or `NotPushed`.

    Raises:
      AncestryQueryError: If `is_ancestor` fails.
      ReferenceEnumerationError: If `references` can't be enumerated.
      ValueError: If `mode` is not a known filter mode.
    """
    if mode not in FILTER_MODES:
        raise ValueError(f"Unknown filter mode: {mode!r}")
    if logger is None:
        logger = logging.getLogger(__name__)
    if mode == "all" and iter(references) is references:
        # One-shot iterators would be exhausted by the branch scan.
        references = list(references)

    if mode in ["branches", "all"]:
        for (name, target) in _iter_targets(references, REMOTE_BRANCH_PREFIX, logger):
            logger.debug(f"Comparing {head} with remote branch {name} at {target}")
            # Ancestry is only queried when the tip isn't `HEAD` itself.
            if target == head or is_ancestor(head, target):
                logger.debug(f"Found {head} in remote branch {name}")
                return Pushed(reference_name=name)

    if mode in ["tags", "all"]:
        for (name, target) in _iter_targets(references, TAG_PREFIX, logger):
            logger.debug(f"Comparing {head} with tag {name} at {target}")
            if target == head:
                logger.debug(f"Found {head} in tag {name}")
                return Pushed(reference_name=name)

    logger.debug(f"No remote reference contains {head}")
    return NotPushed()
