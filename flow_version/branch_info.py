#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Branch classification for the GitFlow branching model.

Branch & naming convention (delimiter and develop name are configurable):
- Development: develop
- Release candidates: release/<major>.<minor> (e.g., release/1.4)
- Features: feature/<name>
- Hotfixes: hotfix/<name>
- Support: support/<name>
- Anything else is an "other" branch

Examples:
    >>> classifier = BranchClassifier()
    >>> classifier.classify("release/2.1")
    ReleaseCandidateBranchInfo(short_name='release/2.1', version_from_name=(2, 1))
    >>> classifier.classify("feature/xyz").branch_type
    <BranchType.FEATURE: 'feature'>
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from flow_version.exceptions import (
    AmbiguousBranchNameError,
    BranchNotFoundError,
    DetachedHeadAmbiguousError,
    DetachedHeadUnresolvableError,
    EmptyRepositoryError,
)
from flow_version.repository import Branch, RepositoryView
from flow_version.settings import REMOTE_DELIMITER, Settings


class BranchType(Enum):
    """
    Semantic role of a branch in the GitFlow workflow.
    """
    DEVELOP = "develop"
    RELEASE = "release"
    FEATURE = "feature"
    HOTFIX = "hotfix"
    SUPPORT = "support"
    OTHER = "other"


@dataclass(frozen=True)
class BranchInfo:
    """
    Classified branch. short_name never carries a remote prefix.
    """
    short_name: str

    branch_type = BranchType.OTHER

    def __str__(self) -> str:
        return self.short_name


@dataclass(frozen=True)
class DevelopBranchInfo(BranchInfo):
    branch_type = BranchType.DEVELOP


@dataclass(frozen=True)
class ReleaseCandidateBranchInfo(BranchInfo):
    """
    Release branch, carries the (major, minor) parsed from its name.
    """
    version_from_name: Tuple[int, int] = (0, 0)

    branch_type = BranchType.RELEASE

    @property
    def release_line(self) -> str:
        "Returns the version as written in the branch name (e.g., '1.4')"
        major, minor = self.version_from_name
        return f"{major}.{minor}"


@dataclass(frozen=True)
class FeatureBranchInfo(BranchInfo):
    branch_type = BranchType.FEATURE


@dataclass(frozen=True)
class HotfixBranchInfo(BranchInfo):
    branch_type = BranchType.HOTFIX


@dataclass(frozen=True)
class SupportBranchInfo(BranchInfo):
    branch_type = BranchType.SUPPORT


@dataclass(frozen=True)
class OtherBranchInfo(BranchInfo):
    branch_type = BranchType.OTHER


_PREFIXED_TYPES = {
    BranchType.FEATURE: FeatureBranchInfo,
    BranchType.HOTFIX: HotfixBranchInfo,
    BranchType.SUPPORT: SupportBranchInfo,
}


class BranchClassifier:
    """
    Maps branch names to BranchInfo and finds the branch to compute a version for.

    Args:
        settings (Settings): Naming conventions (develop name, delimiter, remote)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        delimiter = re.escape(self.settings.branch_delimiter)
        self.release_pattern = re.compile(
            rf'^{BranchType.RELEASE.value}{delimiter}(?P<major>\d+)\.(?P<minor>\d+)$')
        self.prefixed_patterns = {
            branch_type: re.compile(rf'^{branch_type.value}{delimiter}.+$')
            for branch_type in _PREFIXED_TYPES
        }
        self.branch_type_pattern = re.compile(
            rf'^(?:(?P<develop>{re.escape(self.settings.develop_branch)})$|'
            rf'(?P<release>release){delimiter}\d+\.\d+$|'
            rf'(?P<branch_type>feature|hotfix|support){delimiter}.+$)')

    def classify(self, short_name: str) -> BranchInfo:
        """
        Classify a branch name, first match wins: develop, release, feature,
        hotfix, support. Unrecognized names give an OtherBranchInfo.
        """
        if short_name == self.settings.develop_branch:
            return DevelopBranchInfo(short_name)
        match = self.release_pattern.match(short_name)
        if match:
            return ReleaseCandidateBranchInfo(
                short_name, (int(match.group('major')), int(match.group('minor'))))
        for branch_type, pattern in self.prefixed_patterns.items():
            if pattern.match(short_name):
                return _PREFIXED_TYPES[branch_type](short_name)
        return OtherBranchInfo(short_name)

    def trim_remote_name(self, branch: Branch) -> str:
        "Strips 'origin/' (text up to the first '/') from remote-tracking branches."
        if not branch.is_remote:
            return branch.friendly_name
        _, _, short_name = branch.friendly_name.partition(REMOTE_DELIMITER)
        return short_name

    def classify_branch(self, branch: Branch) -> BranchInfo:
        return self.classify(self.trim_remote_name(branch))

    def branch_type_of(self, friendly_name: str) -> Optional[str]:
        """
        Returns the branch type segment of a recognizable branch name or None.

        The name is tested as is, then without its first segment, so that
        remote-tracking names ("origin/feature/x") are recognized too.
        """
        candidates = [friendly_name]
        if REMOTE_DELIMITER in friendly_name:
            candidates.append(friendly_name.split(REMOTE_DELIMITER, 1)[1])
        for candidate in candidates:
            match = self.branch_type_pattern.match(candidate)
            if match:
                return (match.group('release') or match.group('branch_type')
                        or BranchType.DEVELOP.value)
        return None

    def find_branch(self, repository: RepositoryView, branch_name: str) -> Branch:
        """
        Find a branch by exact name, or by the end of its name.

        Raises:
            BranchNotFoundError: If no recognizable branch ends with branch_name
            AmbiguousBranchNameError: If the matches are of different branch types
        """
        branches = list(repository.branches)
        for branch in branches:
            if branch.friendly_name == branch_name:
                return branch

        matches = [
            branch for branch in branches
            if branch.friendly_name.endswith(branch_name)
            and self.branch_type_of(branch.friendly_name) is not None
        ]
        if not matches:
            raise BranchNotFoundError(
                f"The branch '{branch_name}' could not be found in the repository, "
                "or it was not of any of the supported types.",
                context={'branch': branch_name})

        distinct_types = {self.branch_type_of(branch.friendly_name) for branch in matches}
        if len(distinct_types) > 1:
            raise AmbiguousBranchNameError(
                f"This partial branch name: '{branch_name}' is not unique in the repository.",
                context={'branch': branch_name,
                         'candidates': [branch.friendly_name for branch in matches]})
        return matches[0]

    def branch_for_repository_head(self, repository: RepositoryView) -> Branch:
        """
        Find the branch HEAD is attached to. On a detached HEAD, find the only
        branch whose history contains the HEAD commit.

        Candidates are compared by their short name: a local branch and its
        remote-tracking counterpart (develop, origin/develop) are one candidate,
        so a CI checkout of a pushed branch is not reported as ambiguous.

        Raises:
            EmptyRepositoryError: If there is no commit to look for
            DetachedHeadUnresolvableError: If no branch contains the HEAD commit
            DetachedHeadAmbiguousError: If several branches contain it
        """
        for branch in repository.branches:
            if branch.is_current_head:
                return branch

        commits = repository.commits
        if not commits:
            raise EmptyRepositoryError("Git repositories without commits are not supported.")
        head_sha = commits[0].sha

        candidates: List[Branch] = []
        short_names: List[str] = []
        for branch in repository.branches:
            if branch.contains(head_sha):
                candidates.append(branch)
                # origin/x and x are the same candidate
                short_name = self.trim_remote_name(branch)
                if short_name not in short_names:
                    short_names.append(short_name)

        if not candidates:
            raise DetachedHeadUnresolvableError(
                "The repository is on a detached HEAD and no branch contains the HEAD commit, "
                "please specify the name of the branch with the --branch option.",
                context={'sha': head_sha})
        if len(short_names) > 1:
            raise DetachedHeadAmbiguousError(
                "The repository is on a detached HEAD contained in several branches, "
                "please specify the name of the branch with the --branch option.",
                context={'sha': head_sha, 'candidates': short_names})
        return candidates[0]

    def find_current_branch(self, repository: RepositoryView, branch_name: str = '') -> Branch:
        if branch_name and branch_name.strip():
            return self.find_branch(repository, branch_name)
        return self.branch_for_repository_head(repository)

    def resolve_current_branch(self, repository: RepositoryView, branch_name: str = '') -> BranchInfo:
        "Returns the classification of the branch to compute a version for."
        return self.classify_branch(self.find_current_branch(repository, branch_name))
