"""Test fixtures for git module."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pygit2
import pytest

from gitbaseline.git import RepoAccess
from tests.helpers import BaselineRepo


@pytest.fixture
def access(baseline_repo: BaselineRepo) -> Generator[RepoAccess, None, None]:
    """RepoAccess on the baseline checkout."""
    with RepoAccess(baseline_repo.path) as handle:
        yield handle


@pytest.fixture
def mirror_access(
    baseline_repo: BaselineRepo, tmp_path: Path
) -> Generator[RepoAccess, None, None]:
    """RepoAccess on a bare clone of the baseline checkout, as built on CI agents."""
    with RepoAccess.clone_bare(str(baseline_repo.path), tmp_path / "mirror") as handle:
        yield handle


@pytest.fixture
def release_branches(baseline_repo: BaselineRepo) -> BaselineRepo:
    """Two remote-tracking branches sharing the 'release' suffix, at different commits."""
    refs = baseline_repo.repo.references
    refs.create("refs/remotes/upstream/release", baseline_repo.c)
    refs.create("refs/remotes/origin/release", baseline_repo.d)
    return baseline_repo


@pytest.fixture
def annotated_baseline(baseline_repo: BaselineRepo) -> BaselineRepo:
    """Adds annotated tag 'baseline-annotated' at commit A."""
    baseline_repo.repo.create_tag(
        "baseline-annotated",
        baseline_repo.a,
        pygit2.enums.ObjectType.COMMIT,
        pygit2.Signature("Test User", "test@example.com"),
        "Baseline release",
    )
    return baseline_repo
