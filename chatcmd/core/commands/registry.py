"""Registry of commands known to the bot."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence

from ..errors import CommandNotFound, InvalidCommandSpec
from ..models import CommandSpec

LOGGER = logging.getLogger(__name__)


class CommandRegistry:
    """Maps command names and aliases to their specs."""

    def __init__(self, specs: Iterable[CommandSpec] = ()) -> None:
        self._specs: list[CommandSpec] = []
        self._lookup: Dict[str, CommandSpec] = {}
        self.register(*specs)

    def register(self, *specs: CommandSpec) -> None:
        """Add one or more commands. Names and aliases must be unique."""
        for spec in specs:
            keys = [name.lower() for name in spec.all_names]
            dupes = [key for key in keys if key in self._lookup]
            if dupes or len(set(keys)) != len(keys):
                raise InvalidCommandSpec(f"Duplicate command name or alias {(dupes or keys)[0]!r}")
            self._lookup.update((key, spec) for key in keys)
            self._specs.append(spec)
            LOGGER.debug("Registered command %s (aliases: %s)", spec.name, ", ".join(spec.aliases) or "none")

    @property
    def specs(self) -> Sequence[CommandSpec]:
        return tuple(self._specs)

    def get(self, name: str) -> Optional[CommandSpec]:
        """Return the command spec for a given name or alias."""
        return self._lookup.get(name.lower())

    def require(self, name: str) -> CommandSpec:
        spec = self.get(name)
        if spec is None:
            raise CommandNotFound(name)
        return spec

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._lookup

    def __len__(self) -> int:
        return len(self._specs)
