"""``proctools exec`` and ``proctools age``."""

from __future__ import annotations

import click

from proctools.cli.state import CliState, fail
from proctools.errors import ProcToolsError
from proctools.shells import SHELLS, exec_script
from proctools.tools.age import age as run_age


@click.command("exec")
@click.argument("script")
@click.option(
    "-s",
    "--shell",
    type=click.Choice(sorted(SHELLS)),
    default=None,
    help="Interpreter (defaults to the configured shell for this platform)",
)
@click.option("--capture", is_flag=True, help="Capture output and print it when done")
@click.pass_context
def exec_cmd(ctx: click.Context, script: str, shell: str | None, capture: bool) -> None:
    """Run SCRIPT with a scripting interpreter and exit with its code."""
    state = ctx.find_object(CliState) or CliState()
    shell = shell or state.config.general.shell()
    mode = "piped" if capture else "inherit"
    try:
        result = exec_script(script, shell, stdout=mode, stderr=mode)
    except ProcToolsError as exc:
        raise fail(exc) from exc
    except FileNotFoundError as exc:
        raise click.ClickException(f"Interpreter not found: {exc.filename}") from exc

    if capture:
        click.echo(result.stdout_text, nl=False)
        click.echo(result.stderr_text, nl=False, err=True)
    ctx.exit(result.code)


@click.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def age(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run the age encryption tool with ARGS passed through unchanged."""
    try:
        result = run_age(list(args), stdin="inherit", stdout="inherit", stderr="inherit")
    except ProcToolsError as exc:
        raise fail(exc) from exc
    ctx.exit(result.code)
