"""Check whether the current commit has been pushed.

# Why?

Before deleting a working copy, cutting a release, or letting a CI job
proceed, you often want to know whether the commit you have checked out
already exists on a remote. It's easy to forget to push the last couple of
commits, and `git status` only compares against the upstream of the current
branch (and says nothing at all when `HEAD` is detached).

# What counts as "pushed"

`HEAD` is considered pushed if either:

  * **Remote branch**: some remote-tracking branch (`refs/remotes/...`)
    points at `HEAD`, or at a descendant of `HEAD`. The branch has already
    incorporated the commit, possibly with further commits on top.
  * **Tag**: some tag (`refs/tags/...`) points at exactly `HEAD`. Tags mark
    fixed points in history, so a later tag does not make its ancestors count
    as pushed.

Only the references already present in the local repository are consulted.
You may want to run `git fetch` beforehand.
"""
import os

import pygit2

from .errors import HeadUnresolvableError, RepositoryNotFoundError

__version__ = "0.1.0"

OidStr = str
"""Represents a commit ID in the Git repository, as its full hex string.

We don't use `pygit2.Oid` directly so that the reachability logic can be
exercised without a repository on disk. Only exact equality is meaningful;
abbreviated hashes are never compared.
"""


def get_repo() -> pygit2.Repository:
    """Get the git repository associated with the current directory.

    The current directory may be anywhere inside the working copy; parent
    directories are searched as well.

    Returns:
      The repository object associated with the current directory.

    Raises:
      RepositoryNotFoundError: If the repository could not be found.
    """
    cwd = os.getcwd()
    repo_path = pygit2.discover_repository(cwd)
    if repo_path is None:
        raise RepositoryNotFoundError(cwd)
    try:
        return pygit2.Repository(repo_path)
    except pygit2.GitError as e:
        raise RepositoryNotFoundError(cwd) from e


def get_head_oid(repo: pygit2.Repository) -> OidStr:
    """Get the OID of the commit currently checked out.

    Works for both attached and detached `HEAD`. Annotated tags are peeled, in
    case `HEAD` was pointed at one directly.

    Args:
      repo: The Git repository.

    Returns:
      The full hex OID of the `HEAD` commit.

    Raises:
      HeadUnresolvableError: If `HEAD` is unborn or doesn't point to a commit.
    """
    try:
        if repo.head_is_unborn:
            raise HeadUnresolvableError("HEAD points to an unborn branch")
        head_commit = repo.head.peel(pygit2.Commit)
    except (pygit2.GitError, KeyError, ValueError) as e:
        raise HeadUnresolvableError(str(e)) from e
    return str(head_commit.id)
