"""``proctools config``."""

from __future__ import annotations

import click
from rich.console import Console
from rich.syntax import Syntax

from proctools.cli.state import CliState, pass_state
from proctools.config import ProcToolsConfig
from proctools.paths import get_config_path


@click.group()
def config() -> None:
    """Inspect or create the configuration file."""


@config.command()
@pass_state
def show(state: CliState) -> None:
    """Print the effective configuration as TOML."""
    Console().print(Syntax(state.config.to_toml(), "toml", background_color="default"))


@config.command()
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@pass_state
def init(state: CliState, force: bool) -> None:
    """Write a default configuration file."""
    path = state.config_path or get_config_path()
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    ProcToolsConfig().save(path)
    click.echo(f"Wrote {path}")
