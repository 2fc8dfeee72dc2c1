"""Shared state handed to CLI commands through ``click.Context.obj``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click

from proctools import env
from proctools.config import ProcToolsConfig
from proctools.errors import ProcToolsError
from proctools.finder import ExecutableRegistry, default_registry


@dataclass
class CliState:
    config: ProcToolsConfig = field(default_factory=ProcToolsConfig)
    config_path: Path | None = None
    registry: ExecutableRegistry = field(default_factory=default_registry)

    def extra_paths(self) -> list[str]:
        return [env.expand(path) for path in self.config.which.extra_paths]


pass_state = click.make_pass_decorator(CliState, ensure=True)


def fail(exc: ProcToolsError) -> click.ClickException:
    """Wrap a library error for click's error reporting."""
    return click.ClickException(str(exc))
