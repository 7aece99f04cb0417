"""Centralized error mapping for pygit2 exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from gitbaseline.git.errors import AuthenticationError, GitError, RemoteError

# pygit2 raises KeyError for GIT_ENOTFOUND and ValueError for GIT_EEXISTS and friends
_PYGIT2_ERRORS = (pygit2.GitError, KeyError, ValueError)


def _is_auth_failure(message: str) -> bool:
    msg = message.lower()
    return "authentication" in msg or "credential" in msg or "401" in msg


class ErrorMapper:
    """Maps pygit2 exceptions to domain errors."""

    @staticmethod
    @contextmanager
    def guard(operation: str, *, remote: str | None = None) -> Iterator[None]:
        """Context manager for consistent exception translation."""
        try:
            yield
        except _PYGIT2_ERRORS as e:
            if remote and _is_auth_failure(str(e)):
                raise AuthenticationError(remote, operation) from e
            if remote:
                raise RemoteError(remote, f"{operation} failed: {e}") from e
            raise GitError(f"{operation} failed: {e}") from e


def git_operation(operation: str, *, remote: str | None = None) -> AbstractContextManager[None]:
    """Shorthand for ErrorMapper.guard."""
    return ErrorMapper.guard(operation, remote=remote)
