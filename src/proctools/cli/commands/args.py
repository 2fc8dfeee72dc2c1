"""``proctools split`` and ``proctools to-args``."""

from __future__ import annotations

import json

import click

from proctools.args import ArgsConversionOptions, convert_to_args
from proctools.cli.state import fail
from proctools.errors import ProcToolsError
from proctools.lex import split_arguments


@click.command()
@click.argument("command_line")
def split(command_line: str) -> None:
    """Split COMMAND_LINE into tokens and print them as a JSON array."""
    click.echo(json.dumps(split_arguments(command_line)))


def _parse_mapping(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected FIELD=FLAG, got {item!r}")
        mapping[key] = value
    return mapping


@click.command("to-args")
@click.argument("fields_json")
@click.option("--prefix", default="--", show_default=True, help="Flag prefix")
@click.option("--exclude", multiple=True, help="Field to skip (repeatable)")
@click.option("--map", "rename", multiple=True, callback=_parse_mapping, help="FIELD=FLAG rename")
@click.option("--append", "append_", multiple=True, help="Field emitted positionally first")
@click.option("--prepend", multiple=True, help="Field emitted positionally last")
@click.option("--concat", multiple=True, help="Array field joined into one value")
@click.option("--delimiter", default=",", show_default=True, help="Join delimiter for --concat")
def to_args(
    fields_json: str,
    prefix: str,
    exclude: tuple[str, ...],
    rename: dict[str, str],
    append_: tuple[str, ...],
    prepend: tuple[str, ...],
    concat: tuple[str, ...],
    delimiter: str,
) -> None:
    """Convert a JSON object of fields into argv and print it as a JSON array.

    \b
    Examples:
        proctools to-args '{"maxRetries": 3, "verbose": true}'
        proctools to-args '{"tags": ["a", "b"]}' --concat tags
    """
    try:
        fields = json.loads(fields_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(str(exc), param_hint="FIELDS_JSON") from exc
    if not isinstance(fields, dict):
        raise click.BadParameter("expected a JSON object", param_hint="FIELDS_JSON")

    options = ArgsConversionOptions(
        prefix=prefix,
        exclude=exclude,
        map=rename,
        append=append_,
        prepend=prepend,
        concat_args=concat,
        concat_delimiter=delimiter,
    )
    try:
        args = convert_to_args(fields, options)
    except ProcToolsError as exc:
        raise fail(exc) from exc
    click.echo(json.dumps(list(args)))
