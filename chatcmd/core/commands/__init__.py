"""Command text parsing: scanning, argument/flag resolution and dispatch."""

from .context import ParsedContext
from .dispatcher import (
    CommandDispatcher,
    Invocation,
    ProcessedMessage,
    is_command,
    process_message,
    render_help,
)
from .parser import (
    NAN,
    coerce_flag_value,
    escape_param_value,
    process_params,
    resolve_args,
    resolve_flags,
    sanitize,
)
from .registry import CommandRegistry
from .scanner import ParamToken, iter_param_tokens, next_param_value, scan_param_value

__all__ = [
    "ParsedContext",
    "CommandDispatcher",
    "Invocation",
    "ProcessedMessage",
    "is_command",
    "process_message",
    "render_help",
    "NAN",
    "coerce_flag_value",
    "escape_param_value",
    "process_params",
    "resolve_args",
    "resolve_flags",
    "sanitize",
    "CommandRegistry",
    "ParamToken",
    "iter_param_tokens",
    "next_param_value",
    "scan_param_value",
]
