"""Git operations module."""

from gitbaseline.git._internal import RepoAccess
from gitbaseline.git.accessor import acquire, has_git_metadata, open_repository
from gitbaseline.git.baseline import (
    BranchMatchPolicy,
    CommitHistory,
    compute_changes,
    resolve_baseline,
    resolve_branch_head,
)
from gitbaseline.git.credentials import (
    BaselineCallbacks,
    CallableCredentialCallback,
    SystemCredentialCallback,
    UserPassCallback,
    callbacks_from_config,
    get_default_callbacks,
)
from gitbaseline.git.errors import (
    AmbiguousBranchError,
    AuthenticationError,
    BaselineNotFoundError,
    BranchNotFoundError,
    GitError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteError,
    RepositoryUnavailableError,
    TagExistsError,
    UnbornHeadError,
)
from gitbaseline.git.models import (
    BaselineDiff,
    ChangeSet,
    CommitInfo,
    DiffFile,
    Signature,
    TagInfo,
)

__all__ = [
    # Repository access
    "RepoAccess",
    "acquire",
    "has_git_metadata",
    "open_repository",
    # Baseline diff
    "BranchMatchPolicy",
    "CommitHistory",
    "compute_changes",
    "resolve_baseline",
    "resolve_branch_head",
    # Models
    "BaselineDiff",
    "ChangeSet",
    "CommitInfo",
    "DiffFile",
    "Signature",
    "TagInfo",
    # Credentials
    "BaselineCallbacks",
    "CallableCredentialCallback",
    "SystemCredentialCallback",
    "UserPassCallback",
    "callbacks_from_config",
    "get_default_callbacks",
    # Errors
    "GitError",
    "NotARepositoryError",
    "RepositoryUnavailableError",
    "RefNotFoundError",
    "BaselineNotFoundError",
    "BranchNotFoundError",
    "AmbiguousBranchError",
    "TagExistsError",
    "UnbornHeadError",
    "AuthenticationError",
    "RemoteError",
]
