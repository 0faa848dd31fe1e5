"""CLI entry point."""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
from typing import Any, Dict, Sequence

from .core import ChatCmdError, Config, load_config
from .core.commands import CommandDispatcher, render_help

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="chatcmd",
        description="chatcmd - parse chat-bot command text into args and flags",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding commands.yaml and .env (default: ~/.chatcmd)",
    )
    parser.add_argument(
        "--scope",
        help="Scope (e.g. guild) id used to pick the active prefixes",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a message and print the resolved args and flags as JSON",
    )
    parse_parser.add_argument("text", help="Raw message text, prefix included")

    help_parser = subparsers.add_parser(
        "help",
        help="List configured commands or show help for one command",
    )
    help_parser.add_argument("name", nargs="?", help="Command name or alias")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    _configure_logging()
    try:
        config = load_config(args.config_dir)
        dispatcher = CommandDispatcher(config.build_registry())
        if args.command == "parse":
            return _run_parse(dispatcher, config, args.text, args.scope)
        return _run_help(dispatcher, config, args.name, args.scope)
    except ChatCmdError as exc:
        LOGGER.error("%s", exc)
        return 1


def _configure_logging() -> None:
    log_level_name = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run_parse(dispatcher: CommandDispatcher, config: Config, text: str, scope: str | None) -> int:
    invocation = dispatcher.parse(text, config.get_prefixes(scope))
    payload = {
        "command": invocation.spec.name,
        "args": _json_values(invocation.context.args),
        "flags": _json_values(invocation.context.flags),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False))
    return 0


def _json_values(values: Dict[str, Any]) -> Dict[str, Any]:
    """NaN and infinite numbers have no JSON form; they print as null."""
    return {
        key: None if isinstance(value, float) and not math.isfinite(value) else value
        for key, value in values.items()
    }


def _run_help(dispatcher: CommandDispatcher, config: Config, name: str | None, scope: str | None) -> int:
    prefix = config.get_prefixes(scope)[0]
    if name:
        lines = render_help(dispatcher.registry.require(name), prefix)
    else:
        lines = dispatcher.build_help_lines(prefix)
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
