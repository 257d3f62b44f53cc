"""Tests for the bundled input sources."""

import pytest

from pixelblaster.environment import Direction
from pixelblaster.inputs import IdleInput, ScriptedInput, hold
from pixelblaster.schemas import ArenaState, InputIntents


def test_hold_builds_frozen_intents():
    intents = hold(Direction.UP, Direction.LEFT, place_bomb=True)
    assert intents.held == frozenset({Direction.UP, Direction.LEFT})
    assert intents.place_bomb is True
    with pytest.raises(Exception):
        intents.place_bomb = False


@pytest.mark.asyncio
async def test_idle_input():
    assert await IdleInput().next_intents(ArenaState()) == InputIntents()


@pytest.mark.asyncio
async def test_scripted_input_keys_by_upcoming_tick():
    source = ScriptedInput({3: hold(Direction.DOWN)})

    assert await source.next_intents(ArenaState(tick=1)) == InputIntents()
    assert (await source.next_intents(ArenaState(tick=2))).held == frozenset({Direction.DOWN})
