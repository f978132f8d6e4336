"Provides the HGit class, the GitPython backed RepositoryView"

import os
from typing import List, Tuple

import git
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from flow_version import utils
from flow_version.exceptions import InvalidRepositoryPathError, NotARepositoryError
from flow_version.repository import Branch, Commit, Tag


class HGit:
    """
    Reads the commits, branches and tags of a git repository.

    Everything is read once at construction, the instance is a snapshot.
    Histories are first-parent walks, tip first.

    Args:
        git_repo (git.Repo): The repository to read
    """
    def __init__(self, git_repo: git.Repo):
        self.__git_repo = git_repo
        self.__commits = self.__first_parent_commits('HEAD') if self.__head_is_valid() else ()
        self.__branches = self.__read_branches()
        self.__tags = self.__read_tags()

    @classmethod
    def load(cls, path: str) -> 'HGit':
        """
        Opens the repository containing path.

        Raises:
            InvalidRepositoryPathError: If path is empty or does not exist
            NotARepositoryError: If path is not in a git repository
        """
        if not path:
            raise InvalidRepositoryPathError("The path should not be null or empty.")
        if not os.path.exists(path):
            raise InvalidRepositoryPathError(
                f"The path '{path}' does not exist.", context={'path': path})
        try:
            git_repo = git.Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as err:
            raise NotARepositoryError(
                f"The path: '{path}' is not the root of or in a git repository.",
                context={'path': path}) from err
        return cls(git_repo)

    def __str__(self):
        res = ['[Git]']
        res.append(f'- base dir: {self.base_dir}')
        res.append(f'- current branch: {self.branch or utils.Color.red("detached HEAD")}')
        res.append(f'- head: {self.__commits[0].sha[0:8] if self.__commits else "no commit"}')
        res.append(f'- branches: {len(self.__branches)}, tags: {len(self.__tags)}')
        return '\n'.join(res)

    @property
    def base_dir(self) -> str:
        "Returns the working tree root (the git dir for a bare repository)"
        return self.__git_repo.working_tree_dir or self.__git_repo.git_dir

    @property
    def branch(self):
        "Returns the active branch name, None on a detached HEAD"
        if self.__git_repo.head.is_detached:
            return None
        return self.__git_repo.head.ref.name

    @property
    def remote_names(self) -> List[str]:
        return [remote.name for remote in self.__git_repo.remotes]

    @property
    def commits(self) -> Tuple[Commit, ...]:
        return self.__commits

    @property
    def branches(self) -> Tuple[Branch, ...]:
        return self.__branches

    @property
    def tags(self) -> Tuple[Tag, ...]:
        return self.__tags

    def __head_is_valid(self) -> bool:
        "False for an unborn HEAD (no commit yet)"
        return self.__git_repo.head.is_valid()

    def __first_parent_commits(self, rev) -> Tuple[Commit, ...]:
        return tuple(
            Commit(commit.hexsha)
            for commit in self.__git_repo.iter_commits(rev, first_parent=True))

    def __read_branches(self) -> Tuple[Branch, ...]:
        active = self.branch
        branches: List[Branch] = [
            Branch(
                friendly_name=head.name,
                is_remote=False,
                is_current_head=head.name == active,
                commits=self.__first_parent_commits(head.path))
            for head in self.__git_repo.heads
        ]
        for remote in self.__git_repo.remotes:
            for ref in remote.refs:
                if ref.remote_head == 'HEAD':
                    continue
                branches.append(Branch(
                    friendly_name=ref.name,
                    is_remote=True,
                    is_current_head=False,
                    commits=self.__first_parent_commits(ref.path)))
        return tuple(branches)

    def __read_tags(self) -> Tuple[Tag, ...]:
        tags = []
        for tag_ref in self.__git_repo.tags:
            try:
                sha = tag_ref.commit.hexsha
            except ValueError:
                # tag on a tree or a blob
                continue
            tags.append(Tag(tag_ref.name, sha))
        return tuple(tags)
