"""``proctools which``."""

from __future__ import annotations

import click

from proctools.cli.state import CliState, fail, pass_state
from proctools.errors import ExecutableNotFoundError, ProcToolsError
from proctools.which import which


@click.command("which")
@click.argument("name")
@click.option(
    "-p",
    "--path",
    "paths",
    multiple=True,
    help="Directory to search before PATH (repeatable)",
)
@click.option("--no-cache", is_flag=True, help="Ignore previously resolved locations")
@pass_state
def which_cmd(state: CliState, name: str, paths: tuple[str, ...], no_cache: bool) -> None:
    """Print the full path of executable NAME.

    Falls back to the install locations configured for NAME when it is
    not on the search path.
    """
    use_cache = state.config.which.use_cache and not no_cache
    try:
        location = which(name, [*paths, *state.extra_paths()], use_cache)
        if location is None:
            location = state.registry.find(name)
    except ProcToolsError as exc:
        raise fail(exc) from exc

    if not location:
        raise fail(ExecutableNotFoundError(name))
    click.echo(location)
