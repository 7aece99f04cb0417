"""gbl diff command - list changes since a baseline tag."""

import json
from pathlib import Path

import click

from gitbaseline.cli.utils import cli_errors, load_cli_config
from gitbaseline.config.models import CIConfig
from gitbaseline.git.models import BaselineDiff, DiffFile
from gitbaseline.tasks import diff_from_baseline

_STATUS_LETTER = {
    "added": "A",
    "modified": "M",
    "deleted": "D",
    "renamed": "R",
    "copied": "C",
    "typechange": "T",
}


def _format_file(f: DiffFile) -> str:
    letter = _STATUS_LETTER.get(f.status, "?")
    if f.status in ("renamed", "copied"):
        return f"{letter}\t{f.old_path} -> {f.new_path}"
    return f"{letter}\t{f.path}"


def _echo_result(result: BaselineDiff) -> None:
    if result.outcome == "no_commits" or result.changes is None:
        click.echo(f"No commits found since baseline {result.baseline!r}")
        return
    click.echo(
        f"{len(result.commits)} commit(s) since {result.baseline!r} "
        f"({result.old_sha and result.old_sha[:7]}..{result.head_sha[:7]})"
    )
    for f in result.changes.files:
        click.echo(_format_file(f))


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("-b", "--baseline", required=True, help="Baseline tag to diff against")
@click.option("--branch", default=None, help="Branch to diff (suffix match); default HEAD")
@click.option("--url", default=None, help="Repository URL to mirror when PATH has no .git")
@click.option("--clean-mirror", is_flag=True, help="Empty the mirror directory before cloning")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def diff_command(
    ctx: click.Context,
    path: Path,
    baseline: str,
    branch: str | None,
    url: str | None,
    clean_mirror: bool,
    as_json: bool,
) -> None:
    """Show files changed on a branch since a baseline tag.

    PATH is the project root (default: current directory).
    """
    project = path.resolve()
    config = load_cli_config(ctx, project)
    ci = CIConfig(vcs_root_url=url, branch=config.ci.branch) if url else None

    with cli_errors():
        result = diff_from_baseline(
            project, baseline, branch, ci=ci, config=config, clean_mirror=clean_mirror
        )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _echo_result(result)
