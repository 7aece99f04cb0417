"""Shared CLI helpers."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from gitbaseline.config import GitBaselineConfig, load_config
from gitbaseline.core.errors import GitBaselineError
from gitbaseline.core.logging import configure_logging, set_run_id
from gitbaseline.git.errors import GitError


def load_cli_config(ctx: click.Context, project_path: Path) -> GitBaselineConfig:
    """Load config for the project and apply its logging section.

    Raises:
        click.ClickException: Config is invalid.
    """
    try:
        config = load_config(project_path)
    except GitBaselineError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if ctx.obj and ctx.obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    set_run_id()
    return config


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn domain errors into a one-line CLI error and exit status 1."""
    try:
        yield
    except GitBaselineError as e:
        raise click.ClickException(e.message) from e
    except (GitError, ValueError) as e:
        raise click.ClickException(str(e)) from e
