#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Version derivation engine

Reads a RepositoryView once and exposes the facts a version number is built
from: the HEAD commit, the classified current branch, the governing release
version and the ancestry distances.

Usage:
    >>> engine = VersionDerivationEngine(HGit.load('.'))
    >>> engine.current_branch
    DevelopBranchInfo(short_name='develop')
    >>> str(engine.current_release_version), engine.commit_count_since_last_release_version
    ('1.4.0', 12)
"""

from typing import Optional

from flow_version import ancestry, tag_selector
from flow_version.branch_info import BranchClassifier, BranchInfo, ReleaseCandidateBranchInfo
from flow_version.exceptions import (
    DevelopBranchEmptyError,
    DevelopBranchNotFoundError,
    EmptyRepositoryError,
    InvalidBranchStateError,
    NoCommonAncestorError,
)
from flow_version.repository import Branch, RepositoryView, Tag
from flow_version.settings import Settings
from flow_version.version_number import VersionNumber


class VersionDerivationEngine:
    """
    Derives the version facts of the current position in a repository.

    Everything but the two on-demand values is computed in the constructor;
    any failure aborts construction.

    Args:
        repository (RepositoryView): Read-only repository snapshot
        branch_name (str): Branch to compute the version for, a partial name is
            accepted. Empty means the branch HEAD is on.
        settings (Settings): Naming conventions

    Raises:
        EmptyRepositoryError: If the repository has no commits
        BranchNotFoundError, AmbiguousBranchNameError, DetachedHeadUnresolvableError,
        DetachedHeadAmbiguousError: If the current branch cannot be resolved
        NoReleaseTagError: If no release tag is visible from the current branch
        CommitNotFoundError: If the governing tag is not in HEAD's history
    """

    def __init__(self, repository: RepositoryView, branch_name: str = '',
                 settings: Optional[Settings] = None):
        self._repository = repository
        self._settings = settings or Settings()
        self._classifier = BranchClassifier(self._settings)

        commits = list(repository.commits)
        if not commits:
            raise EmptyRepositoryError("Git repositories without commits are not supported.")

        branch = self._classifier.find_current_branch(repository, branch_name)
        self._current_branch = self._classifier.classify_branch(branch)
        self._visible_tags = tag_selector.visible_tags(repository.tags, branch.commits)
        release_tag = tag_selector.highest_release_version_lowest_patch_tag(self._visible_tags)
        self._current_release_version = VersionNumber.parse(release_tag.friendly_name)
        self._commit_count_since_last_release_version = ancestry.position_of(
            release_tag.sha, commits)
        self._head_commit_hash = commits[0].sha

    @property
    def head_commit_hash(self) -> str:
        return self._head_commit_hash

    @property
    def current_branch(self) -> BranchInfo:
        return self._current_branch

    @property
    def current_release_version(self) -> VersionNumber:
        return self._current_release_version

    @property
    def commit_count_since_last_release_version(self) -> int:
        return self._commit_count_since_last_release_version

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def latest_patch_release_version(self) -> VersionNumber:
        "Returns the highest patch release of the current release line (1.4.2 for 1.4.0)"
        return VersionNumber.parse(self._latest_patch_release_tag().friendly_name)

    @property
    def commit_count_since_latest_patch_release(self) -> int:
        return ancestry.position_of(
            self._latest_patch_release_tag().sha, self._repository.commits)

    def _latest_patch_release_tag(self) -> Tag:
        release = self._current_release_version
        return tag_selector.highest_patch_tag(self._visible_tags, release.major, release.minor)

    @property
    def highest_matching_tag_for_release_candidate(self) -> Optional[VersionNumber]:
        """
        Returns the highest <major>.<minor>.0-rc tag of the current release branch,
        None if the release line has no candidate tag yet.

        Raises:
            InvalidBranchStateError: If the current branch is not a release branch
        """
        current = self._current_branch
        if not isinstance(current, ReleaseCandidateBranchInfo):
            raise InvalidBranchStateError(
                "Determining the highest matching tag for release candidates is only possible "
                f"if the current branch is a 'release' branch, the current branch is '{current}'.",
                context={'branch': current.short_name})
        prefix = (f"{current.release_line}.0"
                  f"{self._settings.pre_release_delimiter}{self._settings.release_candidate_label}")
        tag_name = tag_selector.highest_matching_tag(self._repository.tags, prefix)
        return None if tag_name is None else VersionNumber.parse(tag_name)

    @property
    def commit_count_since_branch_off_from_develop(self) -> int:
        """
        Returns the number of commits between HEAD and the first commit it
        shares with the develop branch.

        Raises:
            DevelopBranchNotFoundError, DevelopBranchEmptyError, NoCommonAncestorError
        """
        develop = self._develop_branch()
        try:
            return ancestry.count_until_any_of(
                [commit.sha for commit in develop.commits], self._repository.commits)
        except NoCommonAncestorError as err:
            raise NoCommonAncestorError(
                "Git repository does not contain a common ancestor between "
                f"'{develop.friendly_name}' and the current HEAD.",
                context={'branch': develop.friendly_name}) from err

    def _develop_branch(self) -> Branch:
        "Returns origin/develop, or develop when there is no remote-tracking one."
        settings = self._settings
        branches = list(self._repository.branches)
        develop = next(
            (branch for branch in branches
             if branch.is_remote and branch.friendly_name == settings.remote_develop_branch),
            None)
        if develop is None:
            develop = next(
                (branch for branch in branches if branch.friendly_name == settings.develop_branch),
                None)
        if develop is None:
            raise DevelopBranchNotFoundError(
                f"Git repository does not contain a branch named '{settings.develop_branch}' "
                f"or '{settings.remote_develop_branch}'.")
        if not develop.commits:
            raise DevelopBranchEmptyError(
                f"Git repository does not contain any commits on '{develop.friendly_name}'.")
        return develop
