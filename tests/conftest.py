"""
Shared pytest fixtures for flow_version tests.
"""

import os
import shutil
import tempfile

import git
import pytest

from flow_version.repository import Branch, InMemoryRepository, Tag, commits_of


class GitHistory:
    """
    Builds a real git repository commit by commit.

    The repository starts on an unborn 'develop' branch.
    """
    def __init__(self, path):
        self.path = path
        self.repo = git.Repo.init(path)
        with self.repo.config_writer() as config:
            config.set_value('user', 'name', 'Flow Version')
            config.set_value('user', 'email', 'flow-version@example.com')
        self.repo.git.checkout('-b', 'develop')
        self.__count = 0

    def commit(self, message=None) -> str:
        "Commits a new file and returns the sha, branches merge without conflict"
        self.__count += 1
        file_ = os.path.join(self.path, f'commit_{self.__count}.txt')
        with open(file_, 'w', encoding='utf-8') as commit_file:
            commit_file.write(f"{self.__count}\n")
        self.repo.index.add([file_])
        return self.repo.index.commit(message or f"commit {self.__count}").hexsha

    def commits(self, count) -> list:
        return [self.commit() for _ in range(count)]

    def tag(self, name, ref='HEAD', message=None):
        self.repo.create_tag(name, ref=ref, message=message)

    def branch(self, name):
        "Creates branch name on HEAD and switches to it"
        self.repo.git.checkout('-b', name)

    def checkout(self, ref):
        self.repo.git.checkout(ref)

    def merge(self, branch, message=None):
        self.repo.git.merge('--no-ff', branch, '-m', message or f"Merge {branch}")
        return self.repo.head.commit.hexsha

    def config(self, content):
        "Writes the .flow-version/config file"
        config_dir = os.path.join(self.path, '.flow-version')
        os.makedirs(config_dir, exist_ok=True)
        with open(os.path.join(config_dir, 'config'), 'w', encoding='utf-8') as config:
            config.write(content)


@pytest.fixture
def git_history():
    """
    Provide an empty GitHistory in a temporary directory.
    """
    temp_dir = tempfile.mkdtemp()
    history = GitHistory(temp_dir)

    yield history

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def develop_repository():
    """
    In-memory repository on develop, three commits after release 1.0.0.

        d3 (HEAD, develop) - d2 - d1 - d0 (1.0.0)
    """
    commits = commits_of('d3', 'd2', 'd1', 'd0')
    return InMemoryRepository(
        commits=commits,
        branches=[Branch('develop', is_current_head=True, commits=commits)],
        tags=[Tag('1.0.0', 'd0')],
    )


@pytest.fixture
def release_repository():
    """
    In-memory repository on release/1.1, branched off develop at d2.

        r2 (HEAD, release/1.1) - r1 - d2 - d1 - d0 (1.0.0)
        d4 (develop, origin/develop) - d3 - d2
    """
    release = commits_of('r2', 'r1', 'd2', 'd1', 'd0')
    develop = commits_of('d4', 'd3', 'd2', 'd1', 'd0')
    return InMemoryRepository(
        commits=release,
        branches=[
            Branch('develop', commits=develop),
            Branch('origin/develop', is_remote=True, commits=develop),
            Branch('release/1.1', is_current_head=True, commits=release),
        ],
        tags=[
            Tag('1.0.0', 'd0'),
            Tag('1.1.0-rc.1', 'd2'),
            Tag('1.1.0-rc.2', 'r1'),
            Tag('1.2.0-rc.7', 'd4'),
        ],
    )
