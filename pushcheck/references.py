"""Read references and commit ancestry out of a `pygit2` repository.

These provide the inputs consumed by `pushcheck.reachability.check`. Nothing
here writes to the repository.
"""
from typing import Iterator

import pygit2

from . import OidStr
from .errors import (
    AncestryQueryError,
    ReferenceEnumerationError,
    UnresolvableReferenceError,
)


class RepoReference:
    """A reference in the repository, peeled only when asked.

    Peeling is deferred so that references in namespaces we aren't scanning
    are never looked up.
    """

    def __init__(self, repo: pygit2.Repository, name: str) -> None:
        self._repo = repo
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def peel(self) -> OidStr:
        try:
            reference = self._repo.references[self._name]
            commit = reference.peel(pygit2.Commit)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise UnresolvableReferenceError(self._name, str(e)) from e
        return str(commit.id)

    def __repr__(self) -> str:
        return f"<RepoReference {self._name}>"


class RepoReferences:
    """All references in the repository.

    Each iteration enumerates the repository afresh, in whatever order
    libgit2 lists them.
    """

    def __init__(self, repo: pygit2.Repository) -> None:
        self._repo = repo

    def __iter__(self) -> Iterator[RepoReference]:
        for name in self._iter_names():
            yield RepoReference(self._repo, name)

    def _iter_names(self) -> Iterator[str]:
        try:
            names = iter(self._repo.references)
        except pygit2.GitError as e:
            raise ReferenceEnumerationError(str(e)) from e
        while True:
            try:
                name = next(names)
            except StopIteration:
                return
            except pygit2.GitError as e:
                raise ReferenceEnumerationError(str(e)) from e
            yield name


class AncestryQuery:
    """Answer ancestor-of questions using libgit2's commit graph walk."""

    def __init__(self, repo: pygit2.Repository) -> None:
        self._repo = repo

    def __call__(self, ancestor: OidStr, descendant: OidStr) -> bool:
        """Determine whether `ancestor` is a strict ancestor of `descendant`.

        A commit is not considered its own ancestor.

        Raises:
          AncestryQueryError: If the commit graph could not be walked, such
            as when an object is missing.
        """
        try:
            return bool(
                self._repo.descendant_of(
                    pygit2.Oid(hex=descendant), pygit2.Oid(hex=ancestor)
                )
            )
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise AncestryQueryError(ancestor, descendant, str(e)) from e
