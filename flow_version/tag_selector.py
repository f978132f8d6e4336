"""
Tag selection: visible tags, governing release tag, highest release candidate tag.

Tags that do not follow the version grammars are ignored, foreign tags never
block a computation.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from flow_version.exceptions import MalformedVersionError, NoReleaseTagError
from flow_version.repository import Commit, Tag
from flow_version.version_number import RELEASE_VERSION_TAG, VALID_VERSION_NUMBER, VersionNumber


def visible_tags(tags: Iterable[Tag], commits: Sequence[Commit]) -> List[Tag]:
    "Returns the tags whose target commit is in commits, in their original order."
    shas = {commit.sha for commit in commits}
    return [tag for tag in tags if tag.sha in shas]


def _parsed(tags: Iterable[Tag], pattern) -> List[Tuple[Tag, VersionNumber]]:
    res = []
    for tag in tags:
        if not pattern.match(tag.friendly_name):
            continue
        try:
            res.append((tag, VersionNumber.parse(tag.friendly_name)))
        except MalformedVersionError:
            # 01.2.3 passes the release tag pattern but is not a version
            continue
    return res


def highest_release_version_lowest_patch_tag(tags: Iterable[Tag]) -> Tag:
    """
    Select the release tag governing the current release line.

    Among the <major>.<minor>.<patch> tags, take the highest major.minor and
    return the tag with the lowest patch in that group: the first release of a
    minor line is the baseline, later patches are already released increments.

        {1.3.0, 1.3.1, 1.4.0} -> 1.4.0
        {1.4.0, 1.4.2, 1.4.1} -> 1.4.0

    Raises:
        NoReleaseTagError: If no tag has the <major>.<minor>.<patch> format
    """
    releases = _parsed(tags, RELEASE_VERSION_TAG)
    if not releases:
        raise NoReleaseTagError(
            "There is no tag in the '<major>.<minor>.<patch>' format in this "
            f"repository looking from the HEAD down: {RELEASE_VERSION_TAG.pattern}")

    highest = max(version for _, version in releases)
    same_line = [
        (tag, version) for tag, version in releases
        if version.major == highest.major and version.minor == highest.minor
    ]
    # min() keeps the first of equal versions (same name on two refs)
    return min(same_line, key=lambda pair: pair[1])[0]


def highest_matching_tag(tags: Iterable[Tag], required_prefix: str) -> Optional[str]:
    """
    Returns the name of the highest version tag starting with required_prefix
    (e.g., "1.4.0-rc"), None if there is none.
    """
    candidates = [
        (tag, version) for tag, version in _parsed(tags, VALID_VERSION_NUMBER)
        if tag.friendly_name.startswith(required_prefix)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda pair: pair[1])[0].friendly_name


def highest_patch_tag(tags: Iterable[Tag], major: int, minor: int) -> Tag:
    """
    Returns the <major>.<minor>.<patch> tag with the highest patch of the
    major.minor line, the last release a hotfix builds on.

        {1.4.0, 1.4.2, 1.4.1}, 1.4 -> 1.4.2

    Raises:
        NoReleaseTagError: If the line has no release tag
    """
    same_line = [
        (tag, version) for tag, version in _parsed(tags, RELEASE_VERSION_TAG)
        if version.major == major and version.minor == minor
    ]
    if not same_line:
        raise NoReleaseTagError(
            f"There is no release tag of the '{major}.{minor}' line in this repository "
            "looking from the HEAD down.",
            context={'line': f"{major}.{minor}"})
    return max(same_line, key=lambda pair: pair[1])[0]
