"""Tests for gbl tag commands."""

from __future__ import annotations

import json
from pathlib import Path

import pygit2
from click.testing import CliRunner

from gitbaseline.cli.main import cli
from tests.helpers import BaselineRepo

runner = CliRunner(env={"GITBASELINE__LOGGING__LEVEL": "ERROR"})


def _remote_tag(remote: pygit2.Repository, name: str) -> pygit2.Oid | None:
    ref = remote.references.get(f"refs/tags/{name}")
    return None if ref is None else remote.get(ref.target).peel(pygit2.Commit).id


class TestTagCommands:
    """gbl tag create/delete/reset tests."""

    def test_create(self, baseline_repo: BaselineRepo, remote_repo: pygit2.Repository) -> None:
        result = runner.invoke(cli, ["tag", "create", "release-1", str(baseline_repo.path)])

        assert result.exit_code == 0, result.output
        short = str(baseline_repo.c)[:7]
        assert f"Tag release-1 created at {short} on origin" in result.output
        assert _remote_tag(remote_repo, "release-1") == baseline_repo.c

    def test_create_annotated_json(
        self, baseline_repo: BaselineRepo, remote_repo: pygit2.Repository
    ) -> None:
        result = runner.invoke(
            cli,
            [
                "tag",
                "create",
                "release-2",
                str(baseline_repo.path),
                "--ref",
                "feature",
                "-m",
                "Second release",
                "--json",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data == {
            "action": "created",
            "tag": "release-2",
            "target_sha": str(baseline_repo.d),
            "annotated": True,
            "remote": "origin",
        }

    def test_create_existing_tag_fails(
        self, baseline_repo: BaselineRepo, remote_repo: pygit2.Repository
    ) -> None:
        result = runner.invoke(cli, ["tag", "create", "baseline", str(baseline_repo.path)])

        assert result.exit_code == 1
        assert "Tag already exists: baseline" in result.output

    def test_delete(self, baseline_repo: BaselineRepo, remote_repo: pygit2.Repository) -> None:
        runner.invoke(cli, ["tag", "create", "release-1", str(baseline_repo.path)])

        result = runner.invoke(cli, ["tag", "delete", "release-1", str(baseline_repo.path)])

        assert result.exit_code == 0, result.output
        assert "Tag release-1 deleted on origin" in result.output
        assert _remote_tag(remote_repo, "release-1") is None

    def test_reset(self, baseline_repo: BaselineRepo, remote_repo: pygit2.Repository) -> None:
        runner.invoke(cli, ["tag", "create", "stable", str(baseline_repo.path)])

        result = runner.invoke(
            cli, ["tag", "reset", "stable", str(baseline_repo.path), "--ref", "feature"]
        )

        assert result.exit_code == 0, result.output
        assert _remote_tag(remote_repo, "stable") == baseline_repo.d

    def test_missing_remote_fails(self, baseline_repo: BaselineRepo) -> None:
        result = runner.invoke(cli, ["tag", "create", "release-1", str(baseline_repo.path)])

        assert result.exit_code == 1
        assert "Remote not found" in result.output

    def test_diff_then_reset_on_agent_needs_clean_mirror(
        self, baseline_repo: BaselineRepo, tmp_path: Path
    ) -> None:
        """The mirror left by diff blocks the tag clone until --clean-mirror is given."""
        agent = tmp_path / "agent"
        agent.mkdir()
        url = str(baseline_repo.path)

        diffed = runner.invoke(
            cli, ["diff", str(agent), "-b", "baseline", "--branch", "feature", "--url", url]
        )
        assert diffed.exit_code == 0, diffed.output

        blocked = runner.invoke(cli, ["tag", "reset", "baseline", str(agent), "--url", url])
        assert blocked.exit_code == 1

        result = runner.invoke(
            cli, ["tag", "reset", "baseline", str(agent), "--url", url, "--clean-mirror"]
        )
        assert result.exit_code == 0, result.output
        assert _remote_tag(baseline_repo.repo, "baseline") == baseline_repo.c
