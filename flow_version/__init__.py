"""
flow-version: deterministic semantic versions for GitFlow repositories.

Main Classes:
- VersionDerivationEngine: Facts of the current position (branch, release, counts)
- VersionCalculator: Version string assembled from those facts
- HGit: GitPython backed repository view
- InMemoryRepository: Repository view built from plain values
"""

__version__ = '0.1.0'

from flow_version.version_number import VersionNumber
from flow_version.branch_info import BranchClassifier, BranchInfo, BranchType
from flow_version.repository import Branch, Commit, InMemoryRepository, RepositoryView, Tag
from flow_version.settings import Config, Settings
from flow_version.engine import VersionDerivationEngine
from flow_version.calculator import VersionCalculator
from flow_version.hgit import HGit
from flow_version.exceptions import FlowVersionError

__all__ = [
    'VersionNumber',
    'BranchClassifier',
    'BranchInfo',
    'BranchType',
    'Branch',
    'Commit',
    'InMemoryRepository',
    'RepositoryView',
    'Tag',
    'Config',
    'Settings',
    'VersionDerivationEngine',
    'VersionCalculator',
    'HGit',
    'FlowVersionError',
]
