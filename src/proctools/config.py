"""Configuration loaded from ``config.toml``.

Example::

    [general]
    default_shell = { windows = "pwsh", "*" = "bash" }

    [which]
    use_cache = true
    extra_paths = ["${HOME}/.local/bin"]

    [executables.age]
    linux = ["/usr/local/bin/age", "${HOME}/go/bin/age"]
    windows = ["%ProgramFiles%\\\\age\\\\age.exe"]
"""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

import tomlkit
from pydantic import BaseModel, Field, field_validator

from proctools.atomic import atomic_write
from proctools.env import current_platform
from proctools.finder import ExecutableLookup
from proctools.paths import get_config_path
from proctools.shells import SHELLS

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from proctools.finder import ExecutableRegistry

OS_KEYS = frozenset({"windows", "linux", "darwin", "*"})


def get_os_value[T](matrix: Mapping[str, T]) -> T | None:
    """Return the value for the current platform, or the ``"*"`` wildcard."""
    return matrix.get(current_platform()) or matrix.get("*")


class GeneralConfig(BaseModel):
    """General settings."""

    default_shell: dict[str, str] = Field(
        default_factory=lambda: {"windows": "powershell", "*": "bash"},
        description="Interpreter used by `exec` per platform ('*' matches any)",
    )

    @field_validator("default_shell")
    @classmethod
    def validate_default_shell(cls, value: dict[str, str]) -> dict[str, str]:
        unknown_os = set(value) - OS_KEYS
        if unknown_os:
            raise ValueError(f"unknown platform keys: {', '.join(sorted(unknown_os))}")
        unknown_shells = {shell for shell in value.values() if shell not in SHELLS}
        if unknown_shells:
            raise ValueError(f"unsupported shells: {', '.join(sorted(unknown_shells))}")
        return value

    def shell(self) -> str | None:
        return get_os_value(self.default_shell)


class WhichConfig(BaseModel):
    """Executable resolution settings."""

    use_cache: bool = Field(default=True, description="Cache successful lookups")
    extra_paths: list[str] = Field(
        default_factory=list,
        description="Directories searched before PATH (environment references allowed)",
    )


class ExecutableConfig(BaseModel):
    """Known location and fallback install locations for one executable."""

    path: str | None = None
    windows: list[str] = Field(default_factory=list)
    linux: list[str] = Field(default_factory=list)
    darwin: list[str] = Field(default_factory=list)


class ProcToolsConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    which: WhichConfig = Field(default_factory=WhichConfig)
    executables: dict[str, ExecutableConfig] = Field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Path | None = None) -> ProcToolsConfig:
        """Load configuration from TOML, or return defaults when the file is missing."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    def apply(self, registry: ExecutableRegistry) -> None:
        """Register every configured executable in *registry*."""
        for name, exe in self.executables.items():
            registry.register(
                ExecutableLookup(
                    exe=name,
                    path=exe.path,
                    windows=list(exe.windows),
                    linux=list(exe.linux),
                    darwin=list(exe.darwin),
                )
            )

    def to_toml(self) -> str:
        doc = tomlkit.document()

        general_table = tomlkit.table()
        general_table["default_shell"] = dict(self.general.default_shell)
        doc["general"] = general_table

        which_table = tomlkit.table()
        for key, value in self.which.model_dump().items():
            which_table[key] = value
        doc["which"] = which_table

        if self.executables:
            executables_table = tomlkit.table()
            for name, exe in self.executables.items():
                exe_table = tomlkit.table()
                for key, value in exe.model_dump().items():
                    if value is not None and value != []:
                        exe_table[key] = value
                executables_table[name] = exe_table
            doc["executables"] = executables_table

        return tomlkit.dumps(doc)

    def save(self, path: Path) -> None:
        """Serialize the configuration to *path* (created if missing)."""
        atomic_write(path, self.to_toml())
