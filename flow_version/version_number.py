#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Version numbers for flow-version

Provides the immutable VersionNumber value used for release tags, release
candidate tags and computed versions.

Grammar:
- Release: <major>.<minor>.<patch> (e.g., 1.4.0)
- Pre-release: <major>.<minor>.<patch>-<label>[.<number>] (e.g., 1.4.0-rc.2)

Ordering:
- (major, minor, patch) ascending
- a release is greater than every pre-release of the same triple
- pre-releases compare by label (lexically) then by number (numerically,
  so rc.2 < rc.10); a missing number sorts before any number

Examples:
    >>> VersionNumber.parse("1.0.0-rc.2") < VersionNumber.parse("1.0.0-rc.10")
    True
    >>> VersionNumber.parse("1.0.0") > VersionNumber.parse("1.0.0-rc.10")
    True
    >>> str(VersionNumber.parse("2.1.3-beta"))
    '2.1.3-beta'
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

from flow_version.exceptions import MalformedVersionError
from flow_version.settings import PRE_RELEASE_DELIMITER

# Release tags: no pre-release suffix.
RELEASE_VERSION_TAG = re.compile(r'^\d+\.\d+\.\d+$')

_UINT = r'(?:0|[1-9]\d*)'

VALID_VERSION_NUMBER = re.compile(
    rf'^(?P<major>{_UINT})\.(?P<minor>{_UINT})\.(?P<patch>{_UINT})'
    rf'(?:{re.escape(PRE_RELEASE_DELIMITER)}(?P<label>[0-9A-Za-z-]+)'
    rf'(?:\.(?P<number>{_UINT}))?)?$'
)


@total_ordering
@dataclass(frozen=True)
class VersionNumber:
    """
    Semantic version major.minor.patch[-label[.number]].

    Attributes:
        major (int): Major version number
        minor (int): Minor version number
        patch (int): Patch version number
        pre_release_label (Optional[str]): Pre-release label (e.g., "rc", "dev")
        pre_release_number (Optional[int]): Numeric suffix of the label (e.g., 2 in "rc.2")
    """
    major: int
    minor: int
    patch: int
    pre_release_label: Optional[str] = None
    pre_release_number: Optional[int] = None

    def __post_init__(self):
        for name in ('major', 'minor', 'patch'):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise MalformedVersionError(
                    f"{name} must be a non-negative integer, got {value!r}")
        if self.pre_release_label is None and self.pre_release_number is not None:
            raise MalformedVersionError("A pre-release number requires a pre-release label")
        if self.pre_release_number is not None and self.pre_release_number < 0:
            raise MalformedVersionError(
                f"pre_release_number must be non-negative, got {self.pre_release_number!r}")
        if self.pre_release_label == '':
            raise MalformedVersionError("The pre-release label cannot be empty")

    @classmethod
    def parse(cls, version: str) -> 'VersionNumber':
        """
        Parse a version string. The whole string must match, whitespace included.

        Raises:
            MalformedVersionError: If version does not follow the grammar
        """
        if not isinstance(version, str):
            raise MalformedVersionError(
                f"Version must be a string, got {type(version).__name__}")
        match = VALID_VERSION_NUMBER.match(version)
        if match is None:
            raise MalformedVersionError(
                f"Invalid version format: '{version}'. "
                f"Expected <major>.<minor>.<patch>[{PRE_RELEASE_DELIMITER}<label>[.<number>]]",
                context={'version': version})
        number = match.group('number')
        return cls(
            major=int(match.group('major')),
            minor=int(match.group('minor')),
            patch=int(match.group('patch')),
            pre_release_label=match.group('label'),
            pre_release_number=int(number) if number is not None else None,
        )

    @staticmethod
    def compare(version1: 'VersionNumber', version2: 'VersionNumber') -> int:
        """
        Compare two versions.

        Returns:
            int: -1 if version1 < version2, 0 if equal, 1 if version1 > version2
        """
        key1, key2 = version1._sort_key(), version2._sort_key()
        if key1 < key2:
            return -1
        if key1 > key2:
            return 1
        return 0

    @property
    def is_pre_release(self) -> bool:
        return self.pre_release_label is not None

    @property
    def base_version(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def format(self) -> str:
        "Inverse of parse."
        res = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release_label is not None:
            res += f"{PRE_RELEASE_DELIMITER}{self.pre_release_label}"
            if self.pre_release_number is not None:
                res += f".{self.pre_release_number}"
        return res

    def _sort_key(self):
        if self.pre_release_label is None:
            return (self.major, self.minor, self.patch, 1, '', -1)
        number = -1 if self.pre_release_number is None else self.pre_release_number
        return (self.major, self.minor, self.patch, 0, self.pre_release_label, number)

    def __lt__(self, other):
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.format()
