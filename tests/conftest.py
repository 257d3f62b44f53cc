"""Shared fixtures: scripted randomness and small hand-built arenas."""

import random
from typing import Iterable, Optional

import pytest

from pixelblaster.environment import ArenaGridState, TileKind
from pixelblaster.schemas import ArenaState, PlayerState, SessionContext, SessionPhase


class ScriptedRandom(random.Random):
    """``random.Random`` whose draws come from fixed lists.

    ``random()`` pops from ``randoms`` (0.99 once exhausted, so no drops and no
    random enemy bombs). ``choice``/``randrange`` pop indices from ``picks``
    (0 once exhausted).
    """

    def __init__(self, randoms: Iterable[float] = (), picks: Iterable[int] = ()):
        super().__init__(0)
        self.randoms = list(randoms)
        self.picks = list(picks)

    def random(self) -> float:
        return self.randoms.pop(0) if self.randoms else 0.99

    def _pick(self, n: int) -> int:
        value = self.picks.pop(0) if self.picks else 0
        return value % n

    def choice(self, seq):
        return seq[self._pick(len(seq))]

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start, stop = 0, start
        return start + self._pick(stop - start)


def open_grid(size: int = 11) -> ArenaGridState:
    """Border walls only; every interior cell empty."""
    grid = ArenaGridState.filled(size, size)
    for i in range(size):
        grid.set_tile(i, 0, TileKind.INDESTRUCTIBLE)
        grid.set_tile(i, size - 1, TileKind.INDESTRUCTIBLE)
        grid.set_tile(0, i, TileKind.INDESTRUCTIBLE)
        grid.set_tile(size - 1, i, TileKind.INDESTRUCTIBLE)
    return grid


def build_state(
    grid: Optional[ArenaGridState] = None, *, x: int = 1, y: int = 1, **player_fields
) -> ArenaState:
    """A PLAYING state on ``grid`` (open 11x11 by default) with no enemies."""
    return ArenaState(
        session=SessionContext(phase=SessionPhase.PLAYING),
        grid=grid or open_grid(),
        player=PlayerState(x=x, y=y, **player_fields),
    )


@pytest.fixture
def make_state():
    return build_state


@pytest.fixture
def make_grid():
    return open_grid


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
