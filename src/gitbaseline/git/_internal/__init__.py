"""Internal components for git operations - not part of public API."""

from gitbaseline.git._internal.access import RepoAccess
from gitbaseline.git._internal.errors import ErrorMapper, git_operation
from gitbaseline.git._internal.parsing import (
    delete_tag_refspec,
    make_tag_ref,
    push_tag_refspec,
    remote_of,
)

__all__ = [
    "ErrorMapper",
    "RepoAccess",
    "delete_tag_refspec",
    "git_operation",
    "make_tag_ref",
    "push_tag_refspec",
    "remote_of",
]
