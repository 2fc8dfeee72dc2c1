"""Root CLI group."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from proctools.cli.commands.args import split, to_args
from proctools.cli.commands.config import config
from proctools.cli.commands.exec import age, exec_cmd
from proctools.cli.commands.which import which_cmd
from proctools.cli.state import CliState
from proctools.config import ProcToolsConfig
from proctools.debug_log import setup_logging
from proctools.version import get_version


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log resolver and process activity to stderr")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (defaults to the user config directory)",
)
@click.version_option(get_version(), prog_name="proctools")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Locate executables, build argument vectors and run processes."""
    setup_logging(verbose)
    try:
        loaded = ProcToolsConfig.load(config_path)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    state = CliState(config=loaded, config_path=config_path)
    loaded.apply(state.registry)
    ctx.obj = state


cli.add_command(which_cmd)
cli.add_command(split)
cli.add_command(to_args)
cli.add_command(exec_cmd)
cli.add_command(age)
cli.add_command(config)
