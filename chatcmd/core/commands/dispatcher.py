"""Prefix detection and the parse pipeline built on the registry."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..errors import PrefixMismatch
from ..models import CommandSpec
from .context import ParsedContext
from .parser import process_params
from .registry import CommandRegistry

LOGGER = logging.getLogger(__name__)

COMMAND_SPLIT = re.compile(r"\s+")


@dataclass(frozen=True)
class ProcessedMessage:
    prefix: str
    command_name: str
    params_string: str


@dataclass(frozen=True)
class Invocation:
    spec: CommandSpec
    prefix: str
    command_name: str
    params_string: str
    context: ParsedContext


def _match_prefix(text: str, prefixes: Iterable[str]) -> Optional[str]:
    for prefix in prefixes:
        if prefix and text.startswith(prefix):
            return prefix
    return None


def is_command(text: str, prefixes: Iterable[str]) -> bool:
    """Return True if ``text`` starts with one of ``prefixes``."""
    return _match_prefix(text, prefixes) is not None


def process_message(text: str, prefixes: Iterable[str]) -> ProcessedMessage:
    """Split a prefixed message into command name and parameter string.

    The parameter string is everything after the first whitespace run that
    follows the command name, untrimmed. Whitespace straight after the
    prefix gives an empty command name.
    """
    prefix = _match_prefix(text, prefixes)
    if prefix is None:
        raise PrefixMismatch()

    parts = COMMAND_SPLIT.split(text[len(prefix) :], maxsplit=1)
    params_string = parts[1] if len(parts) > 1 else ""
    return ProcessedMessage(prefix=prefix, command_name=parts[0], params_string=params_string)


def render_help(spec: CommandSpec, prefix: str = "!") -> list[str]:
    """Render the help text for a single command."""
    lines = [spec.name]
    if spec.description:
        lines.append(spec.description)
    lines.append(f"Usage: {spec.usage(prefix)}")

    arg_lines = []
    for arg in spec.args:
        if not arg.show_in_help:
            continue
        if arg.required:
            arg_lines.append(f"**{arg.name}**: {arg.description}")
        else:
            arg_lines.append(f"**{arg.name}** (optional): {arg.description}")
    if arg_lines:
        lines.append("Arguments:")
        lines.extend(arg_lines)

    flag_lines = []
    for flag in spec.flags:
        if not flag.show_in_help:
            continue
        alias_part = f" ( -{flag.short_alias} )" if flag.short_alias else ""
        if flag.required:
            flag_lines.append(f"**--{flag.name}**{alias_part}: {flag.description}")
        else:
            flag_lines.append(f"*--{flag.name}*{alias_part}: (optional) {flag.description}")
    if flag_lines:
        lines.append("Flags:")
        lines.extend(flag_lines)
    return lines


class CommandDispatcher:
    """Turns raw message text into an :class:`Invocation`."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def parse(self, text: str, prefixes: Sequence[str]) -> Invocation:
        """Parse ``text`` into an invocation of a registered command.

        Raises PrefixMismatch if no prefix matches, CommandNotFound if the
        command name is not registered.
        """
        processed = process_message(text, prefixes)
        spec = self._registry.require(processed.command_name)
        context = process_params(spec, processed.params_string)
        LOGGER.debug(
            "Parsed command %s with args=%s flags=%s",
            spec.name,
            context.args,
            context.flags,
        )
        return Invocation(
            spec=spec,
            prefix=processed.prefix,
            command_name=processed.command_name,
            params_string=processed.params_string,
            context=context,
        )

    def build_help_lines(self, prefix: str = "!") -> list[str]:
        """Render help text for all commands."""
        lines = ["Available commands:"]
        for spec in self._registry.specs:
            if not spec.show_in_help:
                continue
            lines.append(f"- `{spec.usage(prefix)}` – {spec.description}{spec.alias_display(prefix)}")
        return lines
