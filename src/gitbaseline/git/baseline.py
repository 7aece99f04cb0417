"""Baseline-to-branch change detection.

Resolves a baseline tag and a branch head inside one repository, computes the
commits the branch has beyond the baseline and diffs the trees that bound
them. Works on bare mirrors whose history may stop at the baseline.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import pygit2
import structlog

from gitbaseline.config.models import BaselineConfig, BranchMatch
from gitbaseline.git._internal import RepoAccess, remote_of
from gitbaseline.git.errors import (
    AmbiguousBranchError,
    BaselineNotFoundError,
    BranchNotFoundError,
    UnbornHeadError,
)
from gitbaseline.git.models import BaselineDiff, ChangeSet, CommitInfo

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class BranchMatchPolicy:
    """How a short branch name picks among branches that end with it.

    mode "first" takes the first candidate in listing order (local branches,
    then remote-tracking ones, each sorted by name). mode "unique" raises
    AmbiguousBranchError instead. preferred_remote narrows several candidates
    to those tracked from that remote before either rule applies.
    """

    mode: BranchMatch = "first"
    preferred_remote: str | None = None

    @classmethod
    def from_config(cls, config: BaselineConfig) -> BranchMatchPolicy:
        return cls(mode=config.branch_match, preferred_remote=config.preferred_remote)

    def select(self, name: str, candidates: Sequence[pygit2.Branch]) -> pygit2.Branch | None:
        if not candidates:
            return None
        if len(candidates) > 1 and self.preferred_remote:
            preferred = [b for b in candidates if remote_of(b.name) == self.preferred_remote]
            if preferred:
                candidates = preferred
        if len(candidates) > 1 and self.mode == "unique":
            raise AmbiguousBranchError(name, [b.shorthand for b in candidates])
        return candidates[0]


DEFAULT_POLICY = BranchMatchPolicy()


class CommitHistory:
    """A branch head and the history behind it, newest first."""

    def __init__(self, access: RepoAccess, head: pygit2.Commit, name: str | None) -> None:
        self._access = access
        self.head = head
        self.name = name

    def __iter__(self) -> Iterator[pygit2.Commit]:
        return iter(self._access.walk_commits(self.head.id))

    def __repr__(self) -> str:
        return f"CommitHistory(name={self.name!r}, head={str(self.head.id)[:7]})"


def resolve_baseline(access: RepoAccess, baseline_name: str) -> pygit2.Commit | None:
    """Commit a baseline tag marks, or None.

    Annotated tags are followed one level to the object they annotate.
    """
    target = access.tag_target(baseline_name)
    if isinstance(target, pygit2.Tag):
        target = access.get_object(target.target)
    if isinstance(target, pygit2.Commit):
        return target
    return None


def branch_matches(branch: pygit2.Branch, branch_name: str) -> bool:
    return branch.shorthand.lower().endswith(branch_name.lower())


def resolve_branch_head(
    access: RepoAccess,
    branch_name: str | None = None,
    policy: BranchMatchPolicy = DEFAULT_POLICY,
) -> CommitHistory | None:
    """History of the named branch, or of HEAD when no name is given.

    The name matches any local or remote-tracking branch whose short name
    ends with it, case-insensitively ('release' matches 'origin/release').
    """
    if not branch_name:
        head = access.head_commit()
        if head is None:
            return None
        return CommitHistory(access, head, access.head_shorthand())

    candidates = [b for b in access.iter_branches() if branch_matches(b, branch_name)]
    branch = policy.select(branch_name, candidates)
    if branch is None:
        return None
    return CommitHistory(access, branch.peel(pygit2.Commit), branch.shorthand)


def _old_endpoint(
    access: RepoAccess,
    commit_range: list[pygit2.Commit],
    baseline: pygit2.Commit,
) -> tuple[pygit2.Tree, str | None]:
    """Tree (and its commit sha) the diff starts from.

    A single-commit range diffs from that commit's first parent; a longer range
    diffs from its oldest commit.
    """
    if len(commit_range) > 1:
        oldest = commit_range[-1]
        return oldest.tree, str(oldest.id)

    only = commit_range[0]
    if not only.parent_ids:
        return access.get_empty_tree(), None
    parent = access.get_object(only.parent_ids[0])
    if not isinstance(parent, pygit2.Commit):
        # Shallow mirror without the parent object; the baseline bounds the range
        log.warning(
            "parent_commit_missing",
            commit=str(only.id),
            parent=str(only.parent_ids[0]),
            fallback=str(baseline.id),
        )
        return baseline.tree, str(baseline.id)
    return parent.tree, str(parent.id)


def compute_changes(
    access: RepoAccess,
    baseline_name: str,
    branch_name: str | None = None,
    policy: BranchMatchPolicy = DEFAULT_POLICY,
) -> BaselineDiff:
    """Diff the branch (or HEAD) against the baseline tag.

    Raises:
        BaselineNotFoundError: The tag is missing or does not mark a commit.
        BranchNotFoundError: No branch matches branch_name (or HEAD is unborn).
        AmbiguousBranchError: Several branches match under the "unique" policy.
    """
    baseline = resolve_baseline(access, baseline_name)
    if baseline is None:
        raise BaselineNotFoundError(baseline_name)

    history = resolve_branch_head(access, branch_name, policy)
    if history is None:
        if not branch_name:
            raise UnbornHeadError("diff from baseline")
        raise BranchNotFoundError(branch_name, access.branch_names())

    head = history.head
    commit_range = access.walk_range(head.id, baseline.id)
    log.info(
        "baseline_range_resolved",
        baseline=baseline_name,
        baseline_sha=str(baseline.id),
        head_sha=str(head.id),
        branch=history.name,
        commits=len(commit_range),
    )

    if not commit_range:
        log.info("no_commits_found", baseline=baseline_name, branch=history.name)
        return BaselineDiff(
            outcome="no_commits",
            baseline=baseline_name,
            branch=history.name,
            baseline_sha=str(baseline.id),
            head_sha=str(head.id),
        )

    old_tree, old_sha = _old_endpoint(access, commit_range, baseline)
    changes = ChangeSet.from_pygit2(access.diff_trees(old_tree, head.tree))
    log.info(
        "baseline_diff_computed",
        old_sha=old_sha,
        new_sha=str(head.id),
        files_changed=len(changes),
    )
    return BaselineDiff(
        outcome="changes",
        baseline=baseline_name,
        branch=history.name,
        baseline_sha=str(baseline.id),
        head_sha=str(head.id),
        old_sha=old_sha,
        commits=tuple(CommitInfo.from_pygit2(c) for c in commit_range),
        changes=changes,
    )
