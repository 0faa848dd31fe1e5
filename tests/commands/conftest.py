"""Shared fixtures for command layer tests."""

from __future__ import annotations

import pytest

from chatcmd.core.commands.dispatcher import CommandDispatcher
from chatcmd.core.commands.registry import CommandRegistry
from chatcmd.core.models import CommandSpec


@pytest.fixture
def ping_spec() -> CommandSpec:
    return CommandSpec(name="ping", description="Check the bot is alive", show_in_help=False)


@pytest.fixture
def registry(ban_spec, repeat_spec, ping_spec) -> CommandRegistry:
    return CommandRegistry([ban_spec, repeat_spec, ping_spec])


@pytest.fixture
def dispatcher(registry) -> CommandDispatcher:
    return CommandDispatcher(registry)
