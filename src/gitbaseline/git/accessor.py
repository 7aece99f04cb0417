"""Repository acquisition: open a local checkout or bare-clone a mirror."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pygit2
import structlog

from gitbaseline.config.constants import GIT_DIRECTORY, INDEX_FILE
from gitbaseline.git._internal import RepoAccess
from gitbaseline.git.credentials import BaselineCallbacks
from gitbaseline.git.errors import RepositoryUnavailableError

log = structlog.get_logger()


def has_git_metadata(path: Path | str) -> bool:
    """True when path is a checkout whose .git directory carries an index."""
    return (Path(path) / GIT_DIRECTORY / INDEX_FILE).is_file()


def acquire(
    local_path: Path | str,
    remote_url: str | None = None,
    callbacks: pygit2.RemoteCallbacks | None = None,
) -> RepoAccess:
    """Return a repository handle for local_path.

    An existing checkout is opened directly. Otherwise remote_url is
    bare-cloned into local_path; the caller makes sure local_path is empty.

    Raises:
        RepositoryUnavailableError: No local metadata and no remote URL.
        AuthenticationError, RemoteError: Clone failed.
    """
    path = Path(local_path)
    if has_git_metadata(path):
        access = RepoAccess(path)
        log.info("repository_opened", path=str(path))
        return access

    if not remote_url:
        raise RepositoryUnavailableError(str(path))

    log.info("repository_clone_started", url=remote_url, path=str(path))
    if isinstance(callbacks, BaselineCallbacks):
        callbacks.reset()
    access = RepoAccess.clone_bare(remote_url, path, callbacks)
    log.info("repository_clone_finished", url=remote_url, path=str(path))
    return access


@contextmanager
def open_repository(
    local_path: Path | str,
    remote_url: str | None = None,
    callbacks: pygit2.RemoteCallbacks | None = None,
) -> Iterator[RepoAccess]:
    """Scoped acquire(): the handle is closed however the block exits."""
    access = acquire(local_path, remote_url, callbacks)
    try:
        yield access
    finally:
        access.close()
