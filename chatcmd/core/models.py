"""Domain models for chatcmd."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple

from .errors import InvalidCommandSpec


class FlagType(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ArgDef:
    name: str
    description: str = ""
    required: bool = False
    default: Any = None
    greedy: bool = False
    show_in_help: bool = True


@dataclass(frozen=True)
class FlagDef:
    name: str
    short_alias: Optional[str] = None
    type: FlagType = FlagType.STRING
    description: str = ""
    default: Any = None
    required: bool = False
    show_in_help: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", FlagType(self.type))

    @property
    def markers(self) -> Tuple[str, ...]:
        """Return the literal tokens that introduce this flag."""
        if self.short_alias:
            return (f"--{self.name}", f"-{self.short_alias}")
        return (f"--{self.name}",)


HELP_FLAG = FlagDef(
    name="help",
    short_alias="h",
    type=FlagType.BOOLEAN,
    description="Display help for this command",
    default=False,
    show_in_help=False,
)


@dataclass(frozen=True)
class CommandSpec:
    """Metadata describing a single chat command.

    Built once at registration time and never mutated afterwards. Every spec
    carries the boolean ``help`` flag, appended here rather than by the parser.
    """

    name: str
    description: str = ""
    args: Tuple[ArgDef, ...] = ()
    flags: Tuple[FlagDef, ...] = ()
    admin_only: bool = False
    sanitize_args: bool = True
    scope: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    show_in_help: bool = True
    enabled_by_default: bool = True

    def __post_init__(self) -> None:
        args = tuple(self.args)
        flags = tuple(self.flags)
        _validate_args(self.name, args)
        _validate_flags(self.name, flags)

        if not any(flag.name == HELP_FLAG.name for flag in flags):
            taken = {flag.short_alias for flag in flags if flag.short_alias}
            help_flag = HELP_FLAG if HELP_FLAG.short_alias not in taken else replace(HELP_FLAG, short_alias=None)
            flags = flags + (help_flag,)

        object.__setattr__(self, "args", args)
        object.__setattr__(self, "flags", flags)
        object.__setattr__(self, "aliases", tuple(self.aliases))

    @property
    def all_names(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)

    @property
    def required_args(self) -> Tuple[ArgDef, ...]:
        return tuple(arg for arg in self.args if arg.required)

    def get_flag(self, name: str) -> Optional[FlagDef]:
        for flag in self.flags:
            if flag.name == name:
                return flag
        return None

    def usage(self, prefix: str = "!") -> str:
        """Return a one-line usage string such as ``!ban [--days] <user> <reason>``."""
        parts = [f"{prefix}{self.name}"]
        for flag in self.flags:
            if not flag.show_in_help:
                continue
            parts.append(f"--{flag.name}" if flag.required else f"[--{flag.name}]")
        for arg in self.args:
            if not arg.show_in_help:
                continue
            parts.append(f"<{arg.name}>" if arg.required else f"[{arg.name}]")
        return " ".join(parts)

    def alias_display(self, prefix: str = "!") -> str:
        """Return formatted alias hint for help output."""
        if not self.aliases:
            return ""
        rendered = ", ".join(f"{prefix}{alias}" for alias in self.aliases)
        return f" (aliases: {rendered})"


def _validate_args(command_name: str, args: Tuple[ArgDef, ...]) -> None:
    seen = set()
    for index, arg in enumerate(args):
        if arg.name in seen:
            raise InvalidCommandSpec(f"Command {command_name} declares arg {arg.name} twice")
        seen.add(arg.name)
        if arg.greedy and index != len(args) - 1:
            raise InvalidCommandSpec(
                f"Command {command_name}: greedy arg {arg.name} must be the last arg"
            )


def _validate_flags(command_name: str, flags: Tuple[FlagDef, ...]) -> None:
    names = set()
    aliases = set()
    for flag in flags:
        if flag.name in names:
            raise InvalidCommandSpec(f"Command {command_name} declares flag {flag.name} twice")
        names.add(flag.name)
        if flag.short_alias:
            if flag.short_alias in aliases:
                raise InvalidCommandSpec(
                    f"Command {command_name} reuses short alias -{flag.short_alias}"
                )
            aliases.add(flag.short_alias)
