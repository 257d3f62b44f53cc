"""Arena map generation.

Every level gets a fresh map: an indestructible border ring, an indestructible
pillar on every interior cell with two even coordinates, and a random scatter of
destructible walls that never covers the protected starting corner.
"""

from __future__ import annotations

import random

from pixelblaster.constants import (
    DESTRUCTIBLE_CHANCE,
    GRID_SIZE,
    MIN_GRID_SIZE,
    PROTECTED_ZONE_MAX,
)

from .schemas import ArenaGridState, TileKind


def is_protected_cell(x: int, y: int) -> bool:
    """True for cells in the starting corner kept free of destructible walls."""
    return x <= PROTECTED_ZONE_MAX and y <= PROTECTED_ZONE_MAX


def build_arena_grid(rng: random.Random, size: int = GRID_SIZE) -> ArenaGridState:
    """Generate a new arena map using ``rng`` for the destructible scatter.

    Raises:
        ValueError: If ``size`` is below ``MIN_GRID_SIZE``
    """

    if size < MIN_GRID_SIZE:
        raise ValueError(f"Arena size must be at least {MIN_GRID_SIZE}, got {size}")

    grid = ArenaGridState.filled(size, size)

    for i in range(size):
        grid.set_tile(i, 0, TileKind.INDESTRUCTIBLE)
        grid.set_tile(i, size - 1, TileKind.INDESTRUCTIBLE)
        grid.set_tile(0, i, TileKind.INDESTRUCTIBLE)
        grid.set_tile(size - 1, i, TileKind.INDESTRUCTIBLE)

    for y in range(2, size - 2, 2):
        for x in range(2, size - 2, 2):
            grid.set_tile(x, y, TileKind.INDESTRUCTIBLE)

    for y in range(1, size - 1):
        for x in range(1, size - 1):
            # One roll per empty interior cell, protected cells included.
            if grid.get_tile(x, y) == TileKind.EMPTY and rng.random() < DESTRUCTIBLE_CHANCE:
                if not is_protected_cell(x, y):
                    grid.set_tile(x, y, TileKind.DESTRUCTIBLE)

    return grid
