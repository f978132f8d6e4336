#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
flow-version Exception Hierarchy

Every failure of a version derivation is synchronous, typed and final: the
computation runs once over an already loaded repository snapshot, so nothing
is ever retried.

Exception Hierarchy:
    FlowVersionError (base)
    ├── ConfigurationError (bad path, not a repository, bad config file)
    │   ├── InvalidRepositoryPathError
    │   └── NotARepositoryError
    ├── AmbiguityError (the user has to disambiguate)
    │   ├── AmbiguousBranchNameError
    │   └── DetachedHeadAmbiguousError
    ├── MissingDataError (a precondition on the history is not met)
    │   ├── BranchNotFoundError
    │   ├── DetachedHeadUnresolvableError
    │   ├── NoReleaseTagError
    │   ├── CommitNotFoundError
    │   ├── NoCommonAncestorError
    │   ├── DevelopBranchNotFoundError
    │   ├── DevelopBranchEmptyError
    │   └── EmptyRepositoryError
    ├── MalformedVersionError (string does not follow the version grammar)
    └── InvalidBranchStateError (API misuse)

Usage:
    >>> try:
    ...     engine = VersionDerivationEngine(repository)
    ... except AmbiguityError as e:
    ...     print(e.context['candidates'])
"""


class FlowVersionError(Exception):
    """
    Base exception for all flow-version operations.

    Attributes:
        message (str): Human-readable error message
        context (dict): Additional context information (candidate names, shas...)
        error_code (str): Specific error code for programmatic handling
    """

    default_error_code = "FLOW_VERSION_ERROR"

    def __init__(self, message: str, context: dict = None, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.error_code = error_code or self.default_error_code

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(FlowVersionError):
    """Raised when the tool is pointed at something it cannot work with."""
    default_error_code = "CONFIGURATION_ERROR"


class InvalidRepositoryPathError(ConfigurationError):
    """Raised when the repository path is empty or does not exist"""
    default_error_code = "INVALID_REPOSITORY_PATH"


class NotARepositoryError(ConfigurationError):
    """Raised when the path is not the root of, or inside, a git repository"""
    default_error_code = "NOT_A_REPOSITORY"


class AmbiguityError(FlowVersionError):
    """Raised when several candidates match and the user has to choose."""
    default_error_code = "AMBIGUITY_ERROR"


class AmbiguousBranchNameError(AmbiguityError):
    """Raised when a partial branch name matches branches of different types"""
    default_error_code = "AMBIGUOUS_BRANCH_NAME"


class DetachedHeadAmbiguousError(AmbiguityError):
    """Raised when the detached HEAD commit belongs to several branches"""
    default_error_code = "DETACHED_HEAD_AMBIGUOUS"


class MissingDataError(FlowVersionError):
    """Raised when the history does not contain what the derivation needs."""
    default_error_code = "MISSING_DATA"


class BranchNotFoundError(MissingDataError):
    """Raised when an explicitly named branch cannot be found"""
    default_error_code = "BRANCH_NOT_FOUND"


class DetachedHeadUnresolvableError(MissingDataError):
    """Raised when the detached HEAD commit belongs to no branch at all"""
    default_error_code = "DETACHED_HEAD_UNRESOLVABLE"


class NoReleaseTagError(MissingDataError):
    """Raised when no <major>.<minor>.<patch> tag is visible from HEAD"""
    default_error_code = "NO_RELEASE_TAG"


class CommitNotFoundError(MissingDataError):
    """Raised when a commit is absent from the walked history"""
    default_error_code = "COMMIT_NOT_FOUND"


class NoCommonAncestorError(MissingDataError):
    """Raised when HEAD and the develop branch share no commit"""
    default_error_code = "NO_COMMON_ANCESTOR"


class DevelopBranchNotFoundError(MissingDataError):
    """Raised when neither the remote nor the local develop branch exists"""
    default_error_code = "DEVELOP_BRANCH_NOT_FOUND"


class DevelopBranchEmptyError(MissingDataError):
    """Raised when the develop branch has no commits"""
    default_error_code = "DEVELOP_BRANCH_EMPTY"


class EmptyRepositoryError(MissingDataError):
    """Raised when the repository has no commits"""
    default_error_code = "EMPTY_REPOSITORY"


class MalformedVersionError(FlowVersionError, ValueError):
    """Raised when a string does not follow the version grammar"""
    default_error_code = "MALFORMED_VERSION"


class InvalidBranchStateError(FlowVersionError):
    """Raised when an operation is requested on the wrong kind of branch"""
    default_error_code = "INVALID_BRANCH_STATE"
