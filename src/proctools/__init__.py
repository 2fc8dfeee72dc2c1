"""proctools: locate executables, build argument vectors and run processes."""

from proctools.args import (
    ArgsConversionOptions,
    Fields,
    ProcessArgs,
    Raw,
    Tokens,
    convert_to_args,
)
from proctools.errors import (
    ArgumentError,
    EnvExpansionError,
    ExecutableNotFoundError,
    ProcessFailureError,
    ProcToolsError,
    TypeConversionError,
    UnsupportedShellError,
)
from proctools.finder import ExecutableLookup, ExecutableRegistry, find, find_or_raise, register
from proctools.lex import join_args, quote_arg, split_arguments
from proctools.process import (
    InvocationWrapper,
    call,
    call_async,
    output,
    output_async,
    run,
    run_async,
)
from proctools.result import ProcessResult, StartInfo
from proctools.shells import exec_script, exec_script_async
from proctools.which import ResolverContext, which, which_async, which_or_raise

__version__ = "0.1.0"

__all__ = [
    "ArgsConversionOptions",
    "ArgumentError",
    "EnvExpansionError",
    "ExecutableLookup",
    "ExecutableNotFoundError",
    "ExecutableRegistry",
    "Fields",
    "InvocationWrapper",
    "ProcToolsError",
    "ProcessArgs",
    "ProcessFailureError",
    "ProcessResult",
    "Raw",
    "ResolverContext",
    "StartInfo",
    "Tokens",
    "TypeConversionError",
    "UnsupportedShellError",
    "call",
    "call_async",
    "convert_to_args",
    "exec_script",
    "exec_script_async",
    "find",
    "find_or_raise",
    "join_args",
    "output",
    "output_async",
    "quote_arg",
    "register",
    "run",
    "run_async",
    "split_arguments",
    "which",
    "which_async",
    "which_or_raise",
]
