"""Repository access layer - owns pygit2.Repository and exposes computed facts."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from types import TracebackType
from typing import Any

import pygit2

from gitbaseline.git._internal.constants import DIFF_FIND_RENAMES, SORT_NEWEST_FIRST
from gitbaseline.git._internal.errors import git_operation
from gitbaseline.git._internal.parsing import make_tag_ref
from gitbaseline.git.errors import (
    NotARepositoryError,
    RefNotFoundError,
    RemoteError,
    UnbornHeadError,
)

_FALLBACK_SIGNATURE = ("gitbaseline", "gitbaseline@localhost")


class RepoAccess:
    """Owns pygit2.Repository and provides normalized access to repo state.

    One instance backs exactly one diff or tag operation. Use it as a context
    manager (or call close()) so libgit2 file handles are released on every
    exit path.
    """

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo: pygit2.Repository | None = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @classmethod
    def clone_bare(
        cls,
        url: str,
        destination: Path | str,
        callbacks: pygit2.RemoteCallbacks | None = None,
    ) -> RepoAccess:
        """Bare-clone url into destination and open the result."""
        with git_operation("clone", remote=url):
            cloned = pygit2.clone_repository(url, str(destination), bare=True, callbacks=callbacks)
        cloned_path = cloned.path
        cloned.free()
        return cls(cloned_path)

    # =========================================================================
    # Lifetime
    # =========================================================================

    def close(self) -> None:
        """Release the underlying repository. Safe to call twice."""
        if self._repo is not None:
            self._repo.free()
            self._repo = None

    @property
    def closed(self) -> bool:
        return self._repo is None

    def __enter__(self) -> RepoAccess:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def repo(self) -> pygit2.Repository:
        if self._repo is None:
            raise ValueError(f"Repository at {self._path} is closed")
        return self._repo

    @property
    def is_bare(self) -> bool:
        return self.repo.is_bare

    # =========================================================================
    # Repository State Facts
    # =========================================================================

    @property
    def is_unborn(self) -> bool:
        return self.repo.head_is_unborn

    def head_commit(self) -> pygit2.Commit | None:
        if self.is_unborn:
            return None
        return self.repo.head.peel(pygit2.Commit)

    def must_head_commit(self) -> pygit2.Commit:
        commit = self.head_commit()
        if commit is None:
            raise UnbornHeadError("read HEAD")
        return commit

    def head_shorthand(self) -> str | None:
        """Short name of the branch HEAD points to, None if detached or unborn."""
        if self.is_unborn or self.repo.head_is_detached:
            return None
        return self.repo.head.shorthand

    @property
    def signature(self) -> pygit2.Signature:
        """Configured user signature, or a fixed one on agents without user config."""
        try:
            return self.repo.default_signature
        except (KeyError, pygit2.GitError):
            return pygit2.Signature(*_FALLBACK_SIGNATURE)

    # =========================================================================
    # Resolution Helpers
    # =========================================================================

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        try:
            obj, _ = self.repo.resolve_refish(ref)
        except (pygit2.GitError, KeyError) as e:
            raise RefNotFoundError(ref) from e
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(f"{ref} is not a commit")
        return obj

    def get_object(self, oid: pygit2.Oid) -> pygit2.Object | None:
        return self.repo.get(oid)

    # =========================================================================
    # Tag Access
    # =========================================================================

    def tag_target(self, name: str) -> pygit2.Object | None:
        """Object the tag ref points to: a commit, or a pygit2.Tag for annotated tags."""
        ref = self.repo.references.get(make_tag_ref(name))
        if ref is None:
            return None
        return self.repo.get(ref.resolve().target)

    def has_tag(self, name: str) -> bool:
        return make_tag_ref(name) in self.repo.references

    def create_annotated_tag(self, name: str, target: pygit2.Oid, message: str) -> pygit2.Oid:
        return self.repo.create_tag(
            name, target, pygit2.enums.ObjectType.COMMIT, self.signature, message
        )

    def create_lightweight_tag(self, name: str, target: pygit2.Oid) -> None:
        self.repo.references.create(make_tag_ref(name), target)

    def delete_tag(self, name: str) -> None:
        self.repo.references.delete(make_tag_ref(name))

    # =========================================================================
    # Branch Access
    # =========================================================================

    def iter_branches(self) -> Iterator[pygit2.Branch]:
        """Local branches, then remote-tracking branches, each sorted by name.

        Symbolic refs such as 'origin/HEAD' are skipped.
        """
        for collection in (self.repo.branches.local, self.repo.branches.remote):
            for name in sorted(collection):
                branch = collection[name]
                if isinstance(branch.target, str):
                    continue
                yield branch

    def branch_names(self) -> list[str]:
        return [b.shorthand for b in self.iter_branches()]

    # =========================================================================
    # History and Diff
    # =========================================================================

    def walk_range(
        self, include: pygit2.Oid, exclude: pygit2.Oid | None = None
    ) -> list[pygit2.Commit]:
        """Commits reachable from include but not from exclude, newest first."""
        walker = self.repo.walk(include, SORT_NEWEST_FIRST)
        if exclude is not None:
            walker.hide(exclude)
        return list(walker)

    def walk_commits(self, start: pygit2.Oid) -> pygit2.Walker:
        return self.repo.walk(start, SORT_NEWEST_FIRST)

    def get_empty_tree(self) -> pygit2.Tree:
        """Get an empty tree to diff root commits against."""
        builder = self.repo.TreeBuilder()
        empty_tree_oid = builder.write()
        return self.repo.get(empty_tree_oid)  # type: ignore[return-value]

    def diff_trees(self, old: pygit2.Tree, new: pygit2.Tree) -> pygit2.Diff:
        """Tree-to-tree diff with rename detection applied."""
        diff = self.repo.diff(old, new)
        diff.find_similar(flags=DIFF_FIND_RENAMES)
        return diff

    # =========================================================================
    # Remote Operations (centralized error handling)
    # =========================================================================

    def get_remote(self, name: str) -> pygit2.Remote:
        if name not in [r.name for r in self.repo.remotes]:
            raise RemoteError(name, "Remote not found")
        return self.repo.remotes[name]

    def run_remote_operation(
        self,
        remote_name: str,
        op_name: str,
        operation: Callable[[pygit2.Remote], Any],
    ) -> Any:
        """
        Run a remote operation with centralized error mapping.

        Args:
            remote_name: Name of the remote (e.g., "origin")
            op_name: Human-readable operation name for error messages (e.g., "push")
            operation: Callable that takes a pygit2.Remote and performs the operation.

        Error mapping:
            - Authentication/credential errors -> AuthenticationError(remote_name, op_name)
            - Other pygit2.GitError -> RemoteError(remote_name, "{op_name} failed: {msg}")
        """
        remote = self.get_remote(remote_name)
        with git_operation(op_name, remote=remote_name):
            return operation(remote)
