"""Errors raised while determining whether HEAD has been pushed.

Every error derives from `PushCheckError`, so that callers can either handle
all failures uniformly or match on a specific kind. Only
`UnresolvableReferenceError` is recoverable: the checker skips the offending
reference and moves on.
"""


class PushCheckError(Exception):
    """Base class for all errors raised by pushcheck."""


class RepositoryNotFoundError(PushCheckError):
    def __init__(self, path: str) -> None:
        self._path = path

    def __str__(self) -> str:
        return f"Failed to discover repository from: {self._path}"


class HeadUnresolvableError(PushCheckError):
    """Raised when `HEAD` does not point to a commit (e.g. an unborn branch)."""

    def __init__(self, reason: str) -> None:
        self._reason = reason

    def __str__(self) -> str:
        return f"Could not resolve HEAD to a commit: {self._reason}"


class ReferenceEnumerationError(PushCheckError):
    """Raised when the references of the repository cannot be listed.

    This is distinct from a single reference failing to resolve, which is
    reported as `UnresolvableReferenceError`.
    """

    def __init__(self, reason: str) -> None:
        self._reason = reason

    def __str__(self) -> str:
        return f"Failed to enumerate references: {self._reason}"


class AncestryQueryError(PushCheckError):
    def __init__(self, ancestor: str, descendant: str, reason: str) -> None:
        self._ancestor = ancestor
        self._descendant = descendant
        self._reason = reason

    def __str__(self) -> str:
        return (
            f"Failed to determine whether {self._ancestor} is an ancestor of "
            f"{self._descendant}: {self._reason}"
        )


class UnresolvableReferenceError(PushCheckError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self._reason = reason

    def __str__(self) -> str:
        return f"Reference {self.name} does not resolve to a commit: {self._reason}"
