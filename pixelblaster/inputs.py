"""Input sources for headless hosts.

A real host turns keyboard or touch events into ``InputIntents`` once per tick.
The sources here do the same from code, for tests, demos and replays.
"""

from __future__ import annotations

from typing import Dict, Mapping, Protocol

from pixelblaster.environment import Direction
from pixelblaster.schemas import ArenaState, InputIntents


def hold(*directions: Direction, place_bomb: bool = False) -> InputIntents:
    """Shorthand for building an ``InputIntents``."""
    return InputIntents(held=frozenset(directions), place_bomb=place_bomb)


class InputSource(Protocol):
    """Protocol for per-tick input providers."""

    async def next_intents(self, state: ArenaState) -> InputIntents:
        """Return the intents for the tick that follows ``state``."""
        ...


class IdleInput:
    """Never presses anything."""

    async def next_intents(self, state: ArenaState) -> InputIntents:
        return InputIntents()


class ScriptedInput:
    """Replays intents keyed by the tick number they apply to.

    Ticks missing from the script get empty intents.
    """

    def __init__(self, script: Mapping[int, InputIntents]):
        self.script: Dict[int, InputIntents] = dict(script)

    async def next_intents(self, state: ArenaState) -> InputIntents:
        return self.script.get(state.tick + 1, InputIntents())
