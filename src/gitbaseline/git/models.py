"""Serializable data models for baseline diffs and tag operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

import pygit2

DeltaStatus = Literal[
    "added", "deleted", "modified", "renamed", "copied", "typechange", "unknown"
]
DiffOutcome = Literal["changes", "no_commits"]

_DELTA_STATUS_MAP: dict[int, DeltaStatus] = {
    pygit2.GIT_DELTA_ADDED: "added",
    pygit2.GIT_DELTA_DELETED: "deleted",
    pygit2.GIT_DELTA_MODIFIED: "modified",
    pygit2.GIT_DELTA_RENAMED: "renamed",
    pygit2.GIT_DELTA_COPIED: "copied",
    pygit2.GIT_DELTA_TYPECHANGE: "typechange",
}


@dataclass(frozen=True, slots=True)
class Signature:
    """Git author/committer signature."""

    name: str
    email: str
    time: datetime

    @classmethod
    def from_pygit2(cls, sig: pygit2.Signature) -> Signature:
        return cls(sig.name, sig.email, datetime.fromtimestamp(sig.time, tz=UTC))


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Git commit information."""

    sha: str
    short_sha: str
    message: str
    author: Signature
    parent_shas: tuple[str, ...]

    @classmethod
    def from_pygit2(cls, commit: pygit2.Commit) -> CommitInfo:
        sha = str(commit.id)
        return cls(
            sha=sha,
            short_sha=sha[:7],
            message=commit.message,
            author=Signature.from_pygit2(commit.author),
            parent_shas=tuple(str(p) for p in commit.parent_ids),
        )

    @property
    def summary(self) -> str:
        return self.message.splitlines()[0] if self.message else ""


@dataclass(frozen=True, slots=True)
class TagInfo:
    """Result of a tag operation."""

    name: str
    target_sha: str | None
    is_annotated: bool = False
    pushed_to: str | None = None


@dataclass(frozen=True, slots=True)
class DiffFile:
    """Single path in a change set."""

    old_path: str | None
    new_path: str | None
    status: DeltaStatus

    @property
    def path(self) -> str:
        """Path on the new side, or the old one for deletions."""
        if self.status == "deleted" or not self.new_path:
            return self.old_path or ""
        return self.new_path


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Paths that differ between two tree snapshots."""

    files: tuple[DiffFile, ...] = field(default_factory=tuple)

    @classmethod
    def from_pygit2(cls, diff: pygit2.Diff) -> ChangeSet:
        return cls(
            files=tuple(
                DiffFile(
                    old_path=delta.old_file.path if delta.old_file else None,
                    new_path=delta.new_file.path if delta.new_file else None,
                    status=_DELTA_STATUS_MAP.get(delta.status, "unknown"),
                )
                for delta in diff.deltas
            )
        )

    def _paths(self, status: DeltaStatus) -> tuple[str, ...]:
        return tuple(f.path for f in self.files if f.status == status)

    @property
    def added(self) -> tuple[str, ...]:
        return self._paths("added")

    @property
    def modified(self) -> tuple[str, ...]:
        return self._paths("modified")

    @property
    def deleted(self) -> tuple[str, ...]:
        return self._paths("deleted")

    @property
    def renamed(self) -> tuple[tuple[str, str], ...]:
        """(old_path, new_path) pairs."""
        return tuple(
            (f.old_path or "", f.new_path or "") for f in self.files if f.status == "renamed"
        )

    @property
    def paths(self) -> tuple[str, ...]:
        """Every touched path, both sides of renames included."""
        seen: dict[str, None] = {}
        for f in self.files:
            for p in (f.old_path, f.new_path):
                if p:
                    seen.setdefault(p, None)
        return tuple(seen)

    def __len__(self) -> int:
        return len(self.files)

    def __bool__(self) -> bool:
        return bool(self.files)


@dataclass(frozen=True, slots=True)
class BaselineDiff:
    """Outcome of diffing a branch against a baseline tag.

    outcome is "no_commits" when the branch has nothing beyond the baseline;
    changes is None in that case, which is distinct from an empty ChangeSet.
    """

    outcome: DiffOutcome
    baseline: str
    branch: str | None
    baseline_sha: str
    head_sha: str
    old_sha: str | None = None
    commits: tuple[CommitInfo, ...] = field(default_factory=tuple)
    changes: ChangeSet | None = None

    @property
    def has_changes(self) -> bool:
        return self.outcome == "changes" and bool(self.changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "outcome": self.outcome,
            "baseline": self.baseline,
            "branch": self.branch,
            "baseline_sha": self.baseline_sha,
            "head_sha": self.head_sha,
            "old_sha": self.old_sha,
            "commits": [c.sha for c in self.commits],
            "changes": (
                [
                    {"status": f.status, "old_path": f.old_path, "new_path": f.new_path}
                    for f in self.changes.files
                ]
                if self.changes is not None
                else None
            ),
        }
