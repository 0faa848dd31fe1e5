"""Argument and flag resolution for parsed command text.

Escaping, sanitizing, coercion and the two resolvers are separate pure
functions. ``resolve_args`` and ``resolve_flags`` each walk the parameter
string on their own, so positional values and flags may be interleaved freely.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, Mapping, NamedTuple, Optional

from ..models import ArgDef, CommandSpec, FlagDef, FlagType
from .context import ParsedContext
from .scanner import QUOTE_CHARS, ParamToken, iter_param_tokens

NAN = float("nan")

MASS_MENTION = re.compile(r"@+(everyone|here)")
ESCAPED_QUOTES = (("\\'", "'"), ('\\"', '"'))

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_LONG_MARKER = re.compile(r"--[^\s-][^\s]*")


def escape_param_value(raw: str) -> str:
    """Strip wrapping quotes from ``raw`` and unescape inner quotes.

    Unquoted values are returned unchanged. A trailing quote is stripped
    whether or not it matches the opening one.
    """
    if not raw or raw[0] not in QUOTE_CHARS:
        return raw

    body = raw[1:]
    if body and body[-1] in QUOTE_CHARS:
        body = body[:-1]
    for escaped, plain in ESCAPED_QUOTES:
        body = body.replace(escaped, plain)
    return body


def sanitize(text: str) -> str:
    """Disarm ``@everyone``/``@here`` mentions by dropping their ``@`` run."""
    return MASS_MENTION.sub(r"\1", text)


def parse_int(value: str) -> float | int:
    match = _INT_PREFIX.match(value)
    if not match:
        return NAN
    try:
        return int(match.group(1))
    except ValueError:
        # Past the interpreter's int digit limit; saturate to +/-inf.
        return float(match.group(1))


def parse_float(value: str) -> float:
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return NAN
    return float(match.group(1))


def coerce_flag_value(flag: FlagDef, value: str) -> Any:
    """Convert an escaped flag value to the flag's declared type.

    Failed numeric conversions give NaN instead of raising, leaving
    validation to the command body.
    """
    if flag.type is FlagType.INT:
        return parse_int(value)
    if flag.type is FlagType.FLOAT:
        return parse_float(value)
    if flag.type is FlagType.BOOLEAN:
        return True
    return value


def _flag_lookup(spec: CommandSpec) -> Dict[str, FlagDef]:
    return {marker: flag for flag in spec.flags for marker in flag.markers}


def _is_marker(token: ParamToken, lookup: Mapping[str, FlagDef]) -> bool:
    if token.is_literal:
        return False
    return token.raw in lookup or bool(_LONG_MARKER.fullmatch(token.raw))


class Segment(NamedTuple):
    """One positional token, or one flag marker with its value token."""

    token: ParamToken
    is_flag: bool = False
    flag: Optional[FlagDef] = None
    value: Optional[ParamToken] = None


def iter_segments(spec: CommandSpec, params: str) -> Iterator[Segment]:
    """Split ``params`` into positional and flag segments, left to right.

    An undeclared ``--name`` is yielded as a flag segment with ``flag`` None.
    Non-boolean flags take the next token as their value unless that token is
    itself a flag marker.
    """
    lookup = _flag_lookup(spec)
    tokens = iter_param_tokens(params)
    pending: Optional[ParamToken] = None

    while True:
        token = pending or next(tokens, None)
        pending = None
        if token is None:
            return
        if not _is_marker(token, lookup):
            yield Segment(token)
            continue

        flag = lookup.get(token.raw)
        if flag is None or flag.type is FlagType.BOOLEAN:
            yield Segment(token, is_flag=True, flag=flag)
            continue

        value = next(tokens, None)
        if value is not None and _is_marker(value, lookup):
            pending = value
            value = None
        yield Segment(token, is_flag=True, flag=flag, value=value)


def _resolve_flag_value(flag: FlagDef, value: Optional[ParamToken]) -> Any:
    if flag.type is FlagType.BOOLEAN:
        return True
    if value is None:
        return None
    return coerce_flag_value(flag, escape_param_value(value.raw))


def resolve_flags(spec: CommandSpec, params: str) -> Dict[str, Any]:
    """Resolve every declared flag of ``spec`` against ``params``.

    Flags missing from ``params`` keep their default. When a flag is given
    more than once the last occurrence wins.
    """
    flags = {flag.name: flag.default for flag in spec.flags}
    for segment in iter_segments(spec, params):
        if segment.flag is None:
            continue
        flags[segment.flag.name] = _resolve_flag_value(segment.flag, segment.value)
    return flags


def _clean_arg(spec: CommandSpec, raw: str) -> str:
    value = escape_param_value(raw)
    if spec.sanitize_args is not False:
        value = sanitize(value)
    return value


def resolve_args(spec: CommandSpec, params: str) -> Dict[str, Any]:
    """Resolve the positional args of ``spec`` against ``params``.

    A greedy final arg takes the raw remainder of ``params`` starting at its
    first token, whitespace and newlines included.
    """
    positional = [segment.token for segment in iter_segments(spec, params) if not segment.is_flag]

    args: Dict[str, Any] = {}
    for index, arg in enumerate(spec.args):
        if index >= len(positional):
            args[arg.name] = arg.default
        elif _is_greedy_tail(spec, arg, index):
            args[arg.name] = _clean_arg(spec, params[positional[index].start :])
        else:
            args[arg.name] = _clean_arg(spec, positional[index].raw)
    return args


def _is_greedy_tail(spec: CommandSpec, arg: ArgDef, index: int) -> bool:
    return arg.greedy and index == len(spec.args) - 1


def process_params(spec: CommandSpec, params: str) -> ParsedContext:
    """Build the args/flags context for one invocation of ``spec``."""
    return ParsedContext(args=resolve_args(spec, params), flags=resolve_flags(spec, params))
