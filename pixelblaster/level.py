"""Level setup: fresh arena, baseline player, a new enemy batch."""

from __future__ import annotations

import random
from typing import List

from pixelblaster.constants import (
    BASE_ENEMY_COUNT,
    ENEMY_BASE_MAX_BOMBS,
    ENEMY_BOMB_RANGE,
    ENEMY_INITIAL_BOMB_TIMER_MAX,
    GRID_SIZE,
)
from pixelblaster.environment import ArenaGridState, Direction, build_arena_grid, is_protected_cell
from pixelblaster.schemas import ArenaState, EnemyState, PlayerState


def enemy_count_for_level(level: int) -> int:
    return BASE_ENEMY_COUNT + level


def spawn_enemies(grid: ArenaGridState, level: int, rng: random.Random) -> List[EnemyState]:
    """Place ``3 + level`` enemies on random empty cells outside the start corner.

    Raises ValueError when the grid has no such cell.
    """

    if not any(
        grid.is_empty(x, y) and not is_protected_cell(x, y)
        for y in range(1, grid.height - 1)
        for x in range(1, grid.width - 1)
    ):
        raise ValueError("Arena has no empty cell outside the start corner for enemies")

    enemies: List[EnemyState] = []
    for enemy_id in range(enemy_count_for_level(level)):
        while True:
            x = rng.randint(1, grid.width - 2)
            y = rng.randint(1, grid.height - 2)
            if grid.is_empty(x, y) and not is_protected_cell(x, y):
                break
        enemies.append(
            EnemyState(
                id=enemy_id,
                x=x,
                y=y,
                direction=Direction(rng.randrange(4)),
                move_timer=0,
                bomb_timer=rng.randrange(ENEMY_INITIAL_BOMB_TIMER_MAX),
                bomb_count=0,
                max_bombs=ENEMY_BASE_MAX_BOMBS + level // 2,
                bomb_range=ENEMY_BOMB_RANGE,
            )
        )
    return enemies


def initialize_level(state: ArenaState, rng: random.Random, size: int = GRID_SIZE) -> ArenaState:
    """Replace the map and every entity collection for ``state.session.level``.

    Score, level and phase are left alone; the session decides those.
    """

    grid = build_arena_grid(rng, size)
    state.grid = grid
    state.player = PlayerState()
    state.enemies = spawn_enemies(grid, state.session.level, rng)
    state.bombs = []
    state.explosions = []
    state.power_ups = []
    return state
