"""
Ancestry distances along a first-parent history.

Both functions take the history as walked from HEAD (HEAD first) and do no
graph traversal of their own.
"""

from typing import Collection, Iterable

from flow_version.exceptions import CommitNotFoundError, NoCommonAncestorError
from flow_version.repository import Commit


def position_of(sha: str, commits: Iterable[Commit]) -> int:
    """
    Returns the index of the commit sha in the history, i.e. the number of
    commits strictly ahead of it.

    Raises:
        CommitNotFoundError: If sha is not in the history (truncated history or bad sha)
    """
    for index, commit in enumerate(commits):
        if commit.sha == sha:
            return index
    raise CommitNotFoundError(f"No commit found with sha: '{sha}'.", context={'sha': sha})


def count_until_any_of(shas: Collection[str], commits: Iterable[Commit]) -> int:
    """
    Counts the commits walked before reaching one of shas.

    Raises:
        NoCommonAncestorError: If the history does not contain any of shas
    """
    targets = set(shas)
    count = 0
    for commit in commits:
        if commit.sha in targets:
            return count
        count += 1
    raise NoCommonAncestorError("The history does not reach any of the target commits.")
