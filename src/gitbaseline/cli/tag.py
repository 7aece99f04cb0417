"""gbl tag commands - create, delete and reset a tag on the remote."""

import json
from pathlib import Path

import click

from gitbaseline.cli.utils import cli_errors, load_cli_config
from gitbaseline.git.models import TagInfo
from gitbaseline.tasks import create_tag, delete_tag, reset_tag

_path_argument = click.argument(
    "path", default=".", type=click.Path(exists=True, path_type=Path)
)
_url_option = click.option(
    "--url", default=None, help="Repository URL to mirror when PATH has no .git"
)
_json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")
_clean_mirror_option = click.option(
    "--clean-mirror", is_flag=True, help="Empty the mirror directory before cloning"
)


def _echo_tag(action: str, info: TagInfo, as_json: bool) -> None:
    if as_json:
        click.echo(
            json.dumps(
                {
                    "action": action,
                    "tag": info.name,
                    "target_sha": info.target_sha,
                    "annotated": info.is_annotated,
                    "remote": info.pushed_to,
                }
            )
        )
        return
    target = f" at {info.target_sha[:7]}" if info.target_sha else ""
    click.echo(f"Tag {info.name} {action}{target} on {info.pushed_to}")


@click.group()
def tag_group() -> None:
    """Manage a tag on the remote."""


@tag_group.command("create")
@click.argument("tag")
@_path_argument
@_url_option
@click.option("--ref", default="HEAD", show_default=True, help="Commit to tag")
@click.option("-m", "--message", default=None, help="Create an annotated tag")
@_clean_mirror_option
@_json_option
@click.pass_context
def create_command(
    ctx: click.Context,
    tag: str,
    path: Path,
    url: str | None,
    ref: str,
    message: str | None,
    clean_mirror: bool,
    as_json: bool,
) -> None:
    """Create TAG and push it."""
    project = path.resolve()
    config = load_cli_config(ctx, project)
    with cli_errors():
        info = create_tag(
            tag,
            project,
            url,
            ref=ref,
            message=message,
            config=config,
            clean_mirror=clean_mirror,
        )
    _echo_tag("created", info, as_json)


@tag_group.command("delete")
@click.argument("tag")
@_path_argument
@_url_option
@_clean_mirror_option
@_json_option
@click.pass_context
def delete_command(
    ctx: click.Context,
    tag: str,
    path: Path,
    url: str | None,
    clean_mirror: bool,
    as_json: bool,
) -> None:
    """Delete TAG locally and on the remote."""
    project = path.resolve()
    config = load_cli_config(ctx, project)
    with cli_errors():
        info = delete_tag(tag, project, url, config=config, clean_mirror=clean_mirror)
    _echo_tag("deleted", info, as_json)


@tag_group.command("reset")
@click.argument("tag")
@_path_argument
@_url_option
@click.option("--ref", default="HEAD", show_default=True, help="Commit to move the tag to")
@click.option("-m", "--message", default=None, help="Recreate as an annotated tag")
@_clean_mirror_option
@_json_option
@click.pass_context
def reset_command(
    ctx: click.Context,
    tag: str,
    path: Path,
    url: str | None,
    ref: str,
    message: str | None,
    clean_mirror: bool,
    as_json: bool,
) -> None:
    """Move TAG to REF and force-push it."""
    project = path.resolve()
    config = load_cli_config(ctx, project)
    with cli_errors():
        info = reset_tag(
            tag,
            project,
            url,
            ref=ref,
            message=message,
            config=config,
            clean_mirror=clean_mirror,
        )
    _echo_tag("reset", info, as_json)
