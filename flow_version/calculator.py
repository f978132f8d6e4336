"""
Assembles the version string of the current position from the engine facts.

With a governing release M.m.p, c_rel commits since that release and c_dev
commits since the branch-off from develop:

    develop         M.(m+1).0-dev.<c_rel>
    release/x.y     x.y.0-rc.<n>.<c_dev>      n: highest x.y.0-rc.N tag + 1, or 1
    feature/name    M.(m+1).0-a.<c_rel - c_dev>.<name>.<c_dev>
    hotfix/name     M.m.(q+1)-hotfix.<c_q>
    support/name    M.m.(q+1)-support.<c_q>
    other           as feature, with the whole branch name

q is the highest patch released on the M.m line and c_q the commits since
that release, so a hotfix always sorts above the releases before it.

Outside release branches, a HEAD carrying the release tag itself gets M.m.p.
"""

import re
from typing import Optional, Tuple

from flow_version.branch_info import BranchType
from flow_version.engine import VersionDerivationEngine

_INVALID_IDENTIFIER_CHARS = re.compile(r'[^0-9A-Za-z-]')

DEVELOP_LABEL = 'dev'
FEATURE_LABEL = 'a'


def sanitize(name: str) -> str:
    "Makes a branch name usable as a pre-release identifier."
    return _INVALID_IDENTIFIER_CHARS.sub('-', name)


class VersionCalculator:
    """
    Computes the semantic version of the engine's current position.

    Example:
        >>> calculator = VersionCalculator(VersionDerivationEngine(HGit.load('.')))
        >>> calculator.semver
        '1.5.0-dev.12'
        >>> calculator.full_semver
        '1.5.0-dev.12+3f2a9c1'
    """
    def __init__(self, engine: VersionDerivationEngine):
        self._engine = engine
        self._base, self._pre_release = self._compute()

    def _compute(self) -> Tuple[Tuple[int, int, int], Optional[str]]:
        engine = self._engine
        settings = engine.settings
        branch = engine.current_branch
        release = engine.current_release_version
        since_release = engine.commit_count_since_last_release_version

        if branch.branch_type is BranchType.RELEASE:
            major, minor = branch.version_from_name
            highest = engine.highest_matching_tag_for_release_candidate
            number = 1
            if highest is not None and highest.pre_release_number is not None:
                number = highest.pre_release_number + 1
            since_develop = engine.commit_count_since_branch_off_from_develop
            return (major, minor, 0), f"{settings.release_candidate_label}.{number}.{since_develop}"

        if branch.branch_type in (BranchType.HOTFIX, BranchType.SUPPORT):
            latest = engine.latest_patch_release_version
            since_latest = engine.commit_count_since_latest_patch_release
            if since_latest == 0:
                return latest.base_version, None
            return ((latest.major, latest.minor, latest.patch + 1),
                    f"{branch.branch_type.value}.{since_latest}")

        if since_release == 0:
            return release.base_version, None

        if branch.branch_type is BranchType.DEVELOP:
            return (release.major, release.minor + 1, 0), f"{DEVELOP_LABEL}.{since_release}"

        name = branch.short_name
        if branch.branch_type is BranchType.FEATURE:
            name = name.split(settings.branch_delimiter, 1)[1]
        since_develop = engine.commit_count_since_branch_off_from_develop
        develop_count = max(since_release - since_develop, 0)
        return ((release.major, release.minor + 1, 0),
                f"{FEATURE_LABEL}.{develop_count}.{sanitize(name)}.{since_develop}")

    @property
    def base_version(self) -> Tuple[int, int, int]:
        return self._base

    @property
    def pre_release(self) -> Optional[str]:
        return self._pre_release

    @property
    def semver(self) -> str:
        res = '.'.join(str(part) for part in self._base)
        if self._pre_release is not None:
            res += f"{self._engine.settings.pre_release_delimiter}{self._pre_release}"
        return res

    @property
    def full_semver(self) -> str:
        "semver with the abbreviated head sha as build metadata"
        return f"{self.semver}+{self._engine.head_commit_hash[0:7]}"

    def as_dict(self) -> dict:
        engine = self._engine
        major, minor, patch = self._base
        return {
            'SemVer': self.semver,
            'FullSemVer': self.full_semver,
            'Major': major,
            'Minor': minor,
            'Patch': patch,
            'PreReleaseTag': self._pre_release or '',
            'BranchName': engine.current_branch.short_name,
            'BranchType': engine.current_branch.branch_type.value,
            'Sha': engine.head_commit_hash,
            'CommitsSinceRelease': engine.commit_count_since_last_release_version,
        }
