"""Configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml
from dotenv import load_dotenv

from .commands.registry import CommandRegistry
from .errors import ConfigError, InvalidCommandSpec
from .models import ArgDef, CommandSpec, FlagDef, FlagType

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.chatcmd").expanduser()
DEFAULT_PREFIXES: Tuple[str, ...] = ("!",)
ENV_FILE_NAME = ".env"
COMMANDS_FILE = "commands.yaml"

ARG_KEYS = {"name", "description", "required", "default", "greedy", "show_in_help"}
FLAG_KEYS = {"name", "short_alias", "type", "description", "default", "required", "show_in_help"}
COMMAND_KEYS = {
    "description",
    "aliases",
    "scope",
    "admin_only",
    "sanitize_args",
    "show_in_help",
    "enabled_by_default",
    "args",
    "flags",
}


@dataclass
class Config:
    prefixes: Tuple[str, ...] = DEFAULT_PREFIXES
    scope_prefixes: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    commands: Tuple[CommandSpec, ...] = ()
    config_dir: Path | None = None

    def get_prefixes(self, scope: str | None = None) -> Tuple[str, ...]:
        """Return the prefixes active in ``scope``, falling back to the defaults."""
        if scope is not None and str(scope) in self.scope_prefixes:
            return self.scope_prefixes[str(scope)]
        return self.prefixes

    def build_registry(self) -> CommandRegistry:
        try:
            return CommandRegistry(self.commands)
        except InvalidCommandSpec as exc:
            raise ConfigError(str(exc)) from exc


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Resolve and validate the directory containing .env + commands.yaml."""
    raw = config_dir or os.getenv("CHATCMD_CONFIG_DIR")
    target = (Path(raw).expanduser() if raw else DEFAULT_CONFIG_DIR).resolve()
    if not target.exists():
        raise ConfigError(
            f"Config directory {target} does not exist. "
            "Create it and add commands.yaml (and optionally .env)."
        )
    if not target.is_dir():
        raise ConfigError(f"Config directory {target} is not a directory")
    return target


def load_config(config_dir: Path | str | None = None) -> Config:
    """Load chatcmd configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    return _load_config_from_root(root)


def _load_config_from_root(root: Path) -> Config:
    _load_env_file(root / ENV_FILE_NAME)
    data = _read_yaml(root / COMMANDS_FILE)

    prefixes = _load_env_prefixes() or _parse_prefix_list(data.get("prefixes"), "prefixes")
    scopes = data.get("scopes") or {}
    if not isinstance(scopes, dict):
        raise ConfigError("scopes must be a mapping of scope id to prefixes")
    scope_prefixes = {
        str(scope): _parse_prefix_list(value, f"scopes.{scope}") for scope, value in scopes.items()
    }
    empty = [scope for scope, values in scope_prefixes.items() if not values]
    if empty:
        raise ConfigError(f"scopes.{empty[0]} must list at least one prefix")

    commands_raw = data.get("commands") or {}
    if not isinstance(commands_raw, dict):
        raise ConfigError("commands must be a mapping of command name to definition")
    commands = tuple(parse_command_spec(name, cfg) for name, cfg in commands_raw.items())
    if not commands:
        LOGGER.warning("No commands configured in %s", root / COMMANDS_FILE)

    return Config(
        prefixes=prefixes or DEFAULT_PREFIXES,
        scope_prefixes=scope_prefixes,
        commands=commands,
        config_dir=root,
    )


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.debug("No .env file found at %s; relying on shell environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"{COMMANDS_FILE} not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        LOGGER.warning("%s is empty", path)
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {COMMANDS_FILE} structure at {path}")
    return data


def _load_env_prefixes() -> Tuple[str, ...]:
    raw_value = os.getenv("CHATCMD_PREFIXES") or ""
    return tuple(prefix.strip() for prefix in raw_value.split(",") if prefix.strip())


def _parse_prefix_list(value: Any, key: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
        raise ConfigError(f"{key} must be a list of non-empty strings")
    return tuple(value)


def parse_command_spec(name: str, cfg: Mapping[str, Any] | None) -> CommandSpec:
    """Build a CommandSpec from one entry of the ``commands`` mapping."""
    cfg = cfg or {}
    if not isinstance(cfg, Mapping):
        raise ConfigError(f"Command {name} must be a mapping")
    unknown = set(cfg) - COMMAND_KEYS
    if unknown:
        raise ConfigError(f"Command {name} has unknown keys: {', '.join(sorted(unknown))}")

    args = tuple(_parse_arg(name, item) for item in _as_list(name, "args", cfg.get("args")))
    flags = tuple(_parse_flag(name, item) for item in _as_list(name, "flags", cfg.get("flags")))
    aliases = cfg.get("aliases") or ()
    if isinstance(aliases, str):
        aliases = (aliases,)

    try:
        return CommandSpec(
            name=str(name),
            description=str(cfg.get("description") or ""),
            args=args,
            flags=flags,
            admin_only=bool(cfg.get("admin_only", False)),
            sanitize_args=cfg.get("sanitize_args", True) is not False,
            scope=cfg.get("scope"),
            aliases=tuple(str(alias) for alias in aliases),
            show_in_help=bool(cfg.get("show_in_help", True)),
            enabled_by_default=bool(cfg.get("enabled_by_default", True)),
        )
    except InvalidCommandSpec as exc:
        raise ConfigError(str(exc)) from exc


def _as_list(command: str, key: str, value: Any) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{key} for command {command} must be a list")
    return value


def _parse_arg(command: str, item: Any) -> ArgDef:
    if not isinstance(item, dict) or not item.get("name"):
        raise ConfigError(f"Every arg of command {command} must be a mapping with a name")
    unknown = set(item) - ARG_KEYS
    if unknown:
        raise ConfigError(f"Arg {item['name']} of command {command} has unknown keys: {', '.join(sorted(unknown))}")
    return ArgDef(**item)


def _parse_flag(command: str, item: Any) -> FlagDef:
    if not isinstance(item, dict) or not item.get("name"):
        raise ConfigError(f"Every flag of command {command} must be a mapping with a name")
    unknown = set(item) - FLAG_KEYS
    if unknown:
        raise ConfigError(f"Flag {item['name']} of command {command} has unknown keys: {', '.join(sorted(unknown))}")
    try:
        flag_type = FlagType(str(item.get("type", FlagType.STRING.value)).lower())
    except ValueError as exc:
        raise ConfigError(f"Unsupported flag type {item.get('type')} for {command} --{item['name']}") from exc
    return FlagDef(**{**item, "type": flag_type})
