"""
Read-only view of a repository, as consumed by the version derivation.

A RepositoryView answers three queries: the first-parent commit sequence from
HEAD, the branches (each with its own first-parent commit sequence) and the
tags. HGit (flow_version.hgit) implements it on top of GitPython,
InMemoryRepository implements it from plain values.
"""

from dataclasses import dataclass, field
from typing import Protocol, Sequence, Tuple, runtime_checkable


@dataclass(frozen=True)
class Commit:
    "A commit, identified by its sha."
    sha: str


@dataclass(frozen=True)
class Tag:
    """
    A tag and the commit it points to.

    Attributes:
        friendly_name (str): Tag name (e.g., "1.4.0")
        sha (str): Sha of the target commit (peeled for annotated tags)
    """
    friendly_name: str
    sha: str

    @property
    def target_commit_hash(self) -> str:
        return self.sha


@dataclass(frozen=True)
class Branch:
    """
    A local or remote-tracking branch.

    Attributes:
        friendly_name (str): Branch name, remote prefix included (e.g., "origin/develop")
        is_remote (bool): True for a remote-tracking branch
        is_current_head (bool): True if HEAD is attached to this branch
        commits (Tuple[Commit, ...]): First-parent history, tip first
    """
    friendly_name: str
    is_remote: bool = False
    is_current_head: bool = False
    commits: Tuple[Commit, ...] = field(default=(), repr=False)

    def contains(self, sha: str) -> bool:
        "Returns True if the commit sha is part of the branch history."
        return any(commit.sha == sha for commit in self.commits)


@runtime_checkable
class RepositoryView(Protocol):
    "Read-only queries the derivation engine needs."

    @property
    def commits(self) -> Sequence[Commit]:
        "First-parent history from HEAD, HEAD first."
        ...

    @property
    def branches(self) -> Sequence[Branch]:
        ...

    @property
    def tags(self) -> Sequence[Tag]:
        ...


class InMemoryRepository:
    """
    RepositoryView built from plain values.

    Example:
        >>> repo = InMemoryRepository(
        ...     commits=['c2', 'c1', 'c0'],
        ...     branches=[Branch('develop', is_current_head=True,
        ...                      commits=commits_of('c2', 'c1', 'c0'))],
        ...     tags=[Tag('1.0.0', 'c0')])
    """
    def __init__(self, commits=(), branches=(), tags=()):
        self.__commits = tuple(
            commit if isinstance(commit, Commit) else Commit(commit) for commit in commits)
        self.__branches = tuple(branches)
        self.__tags = tuple(tags)

    @property
    def commits(self) -> Tuple[Commit, ...]:
        return self.__commits

    @property
    def branches(self) -> Tuple[Branch, ...]:
        return self.__branches

    @property
    def tags(self) -> Tuple[Tag, ...]:
        return self.__tags


def commits_of(*shas: str) -> Tuple[Commit, ...]:
    "Helper: builds a commit sequence from shas, HEAD first."
    return tuple(Commit(sha) for sha in shas)
