"""Shared fixtures for chatcmd tests."""

from __future__ import annotations

import pytest

from chatcmd.core.models import ArgDef, CommandSpec, FlagDef, FlagType

COMMANDS_YAML = """
prefixes: ["!"]
scopes:
  "1234": ["?", "!!"]
commands:
  ban:
    description: Ban a user from the server
    admin_only: true
    args:
      - name: user
        description: The user to ban, by mention or user id
        required: true
      - name: reason
        description: The reason for the ban
        required: true
        greedy: true
    flags:
      - name: days
        short_alias: d
        description: Number of days of messages to delete
        type: int
        default: 2
  repeat:
    description: Repeat the input
    sanitize_args: false
    aliases: [echo]
    args:
      - name: input
        greedy: true
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell settings out of config tests."""
    for name in ("CHATCMD_PREFIXES", "CHATCMD_CONFIG_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ban_spec() -> CommandSpec:
    return CommandSpec(
        name="ban",
        description="Ban a user from the server",
        admin_only=True,
        args=(
            ArgDef(name="user", description="The user to ban, by mention or user id", required=True),
            ArgDef(name="reason", description="The reason for the ban", required=True, greedy=True),
        ),
        flags=(
            FlagDef(
                name="days",
                short_alias="d",
                type=FlagType.INT,
                description="Number of days of messages to delete",
                default=2,
            ),
        ),
    )


@pytest.fixture
def repeat_spec() -> CommandSpec:
    return CommandSpec(
        name="repeat",
        description="Repeat the input",
        sanitize_args=False,
        aliases=("echo",),
        args=(ArgDef(name="input", greedy=True),),
    )


@pytest.fixture
def config_dir(tmp_path):
    """Config directory holding a commands.yaml with ban and repeat."""
    (tmp_path / "commands.yaml").write_text(COMMANDS_YAML, encoding="utf-8")
    return tmp_path
