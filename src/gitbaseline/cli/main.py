"""gitbaseline CLI - gbl command."""

import click

from gitbaseline import __version__
from gitbaseline.cli.diff import diff_command
from gitbaseline.cli.tag import tag_group
from gitbaseline.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="gbl")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gitbaseline - baseline tag diffs and tag management for build scripts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(diff_command, name="diff")
cli.add_command(tag_group, name="tag")


if __name__ == "__main__":
    cli()
