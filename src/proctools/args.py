"""Process argument lists and structured-to-CLI argument conversion."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from proctools.errors import TypeConversionError
from proctools.lex import split_arguments

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable


@dataclass(frozen=True, slots=True)
class ArgsConversionOptions:
    """Controls how a mapping of fields becomes command-line arguments."""

    prefix: str = "--"
    exclude: Collection[str] = ()
    map: Mapping[str, str] = field(default_factory=dict)
    transform_key: Callable[[str], str] | None = None
    # Values of these fields become positional tokens at the front of the result.
    append: Collection[str] = ()
    # Values of these fields become positional tokens at the end of the result.
    prepend: Collection[str] = ()
    concat_args: Collection[str] = ()
    concat_delimiter: str = ","


@dataclass(frozen=True, slots=True)
class Raw:
    """A free-form command line that still needs tokenizing."""

    text: str


@dataclass(frozen=True, slots=True)
class Tokens:
    """Arguments that are already split."""

    items: Sequence[object]


@dataclass(frozen=True, slots=True)
class Fields:
    """Structured fields converted with :func:`convert_to_args`."""

    values: Mapping[str, object]
    options: ArgsConversionOptions | None = None


type ArgSource = Raw | Tokens | Fields


def as_source(value: object) -> ArgSource:
    """Classify a plain Python value as an argument source."""
    match value:
        case Raw() | Tokens() | Fields():
            return value
        case str():
            return Raw(value)
        case Mapping():
            return Fields(value)
        case bytes() | bytearray() | memoryview():
            raise TypeConversionError(value)
        case Sequence():
            return Tokens(value)
        case _:
            raise TypeConversionError(value)


def kebab_case(key: str) -> str:
    """Default key transform: ``maxRetries`` -> ``max-retries``."""
    parts: list[str] = []
    for char in key:
        if char.isupper():
            parts.append("-")
            parts.append(char.lower())
        else:
            parts.append(char)
    return "".join(parts)


def stringify(value: object) -> str:
    """Render a scalar the way command-line tools expect it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ProcessArgs(list[str]):
    """Ordered list of already-unescaped argument tokens.

    ``append`` and ``push`` tokenize strings on the way in; ``extend``,
    ``insert`` and item assignment keep plain ``list`` behaviour.
    """

    def __init__(self, *args: str | Iterable[str]) -> None:
        if len(args) == 1 and not isinstance(args[0], str):
            super().__init__(stringify(item) for item in args[0])
        else:
            super().__init__(stringify(item) for item in args)

    def append(self, value: object) -> ProcessArgs:  # type: ignore[override]
        """Append *value*, tokenizing strings and flattening mappings."""
        match value:
            case str():
                self.extend(split_arguments(value))
            case Mapping():
                for key, item in value.items():
                    self.extend((str(key), stringify(item)))
            case bytes() | bytearray() | memoryview():
                raise TypeConversionError(value)
            case Sequence():
                self.extend(stringify(item) for item in value)
            case _:
                raise TypeConversionError(value)
        return self

    def push(self, *values: str) -> int:
        """Tokenize each value and append every token; return the number pushed."""
        count = 0
        for value in values:
            tokens = split_arguments(value)
            self.extend(tokens)
            count += len(tokens)
        return count

    @classmethod
    def from_values(cls, *values: object) -> ProcessArgs:
        """Build a list by appending each value in turn."""
        args = cls()
        for value in values:
            args.append(value)
        return args

    @classmethod
    def convert(
        cls,
        source: ArgSource | ProcessArgs | str | Sequence[object] | Mapping[str, object] | None,
        options: ArgsConversionOptions | None = None,
    ) -> ProcessArgs:
        """Normalize any supported argument source into a ``ProcessArgs``.

        Raises:
            TypeConversionError: *source* has an unsupported type.
        """
        if source is None:
            return cls()
        if isinstance(source, ProcessArgs):
            return source

        match as_source(source):
            case Raw(text):
                return cls().append(text)
            case Tokens(items):
                return cls(items)  # type: ignore[arg-type]
            case Fields(values, field_options):
                return convert_to_args(values, field_options or options)
        raise TypeConversionError(source)


def _positional(value: object) -> list[str]:
    if isinstance(value, Mapping):
        raise TypeConversionError(value)
    if isinstance(value, (list, tuple)):
        return [stringify(item) for item in value]
    return [stringify(value)]


def convert_to_args(
    fields: Mapping[str, object],
    options: ArgsConversionOptions | None = None,
) -> ProcessArgs:
    """Convert a mapping of fields into flags and values.

    Booleans become bare flags (omitted when false), sequences repeat the
    flag per item unless listed in ``concat_args``, and ``None`` values are
    skipped. Values of ``append`` fields end up first and values of
    ``prepend`` fields end up last, one positional token per list item.
    """
    o = options or ArgsConversionOptions()
    transform = o.transform_key or kebab_case
    args = ProcessArgs()
    leading: list[str] = []
    trailing: list[str] = []

    for key, value in fields.items():
        if value is None or key in o.exclude:
            continue

        if key in o.append:
            leading.extend(_positional(value))
            continue

        if key in o.prepend:
            trailing.extend(_positional(value))
            continue

        flag = o.prefix + transform(o.map.get(key) or key)

        if isinstance(value, bool):
            if value:
                args.extend((flag,))
            continue

        if isinstance(value, Mapping):
            raise TypeConversionError(value)

        if isinstance(value, (list, tuple)):
            if key in o.concat_args:
                args.extend((flag, o.concat_delimiter.join(stringify(item) for item in value)))
                continue
            for item in value:
                args.extend((flag, stringify(item)))
            continue

        args.extend((flag, stringify(value)))

    if leading:
        args[0:0] = leading
    if trailing:
        args.extend(trailing)

    return args


__all__ = [
    "ArgSource",
    "ArgsConversionOptions",
    "Fields",
    "ProcessArgs",
    "Raw",
    "Tokens",
    "as_source",
    "convert_to_args",
    "kebab_case",
    "stringify",
]
