"""Core domain logic for chatcmd."""

from .config import Config, load_config
from .errors import (
    ChatCmdError,
    CommandNotFound,
    ConfigError,
    InvalidCommandSpec,
    PrefixMismatch,
)
from .models import ArgDef, CommandSpec, FlagDef, FlagType

__all__ = [
    "Config",
    "load_config",
    "ChatCmdError",
    "CommandNotFound",
    "ConfigError",
    "InvalidCommandSpec",
    "PrefixMismatch",
    "ArgDef",
    "CommandSpec",
    "FlagDef",
    "FlagType",
]
