"""Reactive enemy behaviour.

Each enemy runs two independent cadences off its own tick counters:

- every ``ENEMY_BOMB_INTERVAL`` ticks it considers dropping a bomb, always when
  the player is close, occasionally otherwise
- every ``ENEMY_MOVE_INTERVAL`` ticks it steps to a random open neighbour,
  preferring cells outside the blast path of bombs that are about to go off

There is no pathfinding and no lookahead past the next step.
"""

from __future__ import annotations

import random
from typing import Set

from pixelblaster.bombs import place_bomb
from pixelblaster.constants import (
    DANGER_TIMER_THRESHOLD,
    ENEMY_AGGRO_DISTANCE,
    ENEMY_BOMB_INTERVAL,
    ENEMY_MOVE_INTERVAL,
    ENEMY_RANDOM_BOMB_CHANCE,
)
from pixelblaster.environment import Direction, blast_footprint, manhattan_distance, open_neighbours
from pixelblaster.environment.helpers import Cell
from pixelblaster.schemas import ArenaState, BombOwner, EnemyState


def danger_cells(state: ArenaState) -> Set[Cell]:
    """Cells inside the projected blast of any bomb close to detonation."""

    cells: Set[Cell] = set()
    for bomb in state.bombs:
        if bomb.timer > DANGER_TIMER_THRESHOLD:
            continue
        cells.update(blast_footprint(state.grid, bomb.cell, bomb.effective_range))
    return cells


def should_place_bomb(state: ArenaState, enemy: EnemyState, rng: random.Random) -> bool:
    if enemy.bomb_count >= enemy.max_bombs:
        return False
    if state.bomb_at(enemy.x, enemy.y) is not None:
        return False
    if manhattan_distance(enemy.cell, state.player.cell) <= ENEMY_AGGRO_DISTANCE:
        return True
    return rng.random() < ENEMY_RANDOM_BOMB_CHANCE


def try_enemy_bomb(state: ArenaState, enemy: EnemyState, rng: random.Random) -> bool:
    if not should_place_bomb(state, enemy, rng):
        return False
    bomb = place_bomb(
        state,
        enemy.x,
        enemy.y,
        bomb_range=enemy.bomb_range,
        owner=BombOwner.ENEMY,
        owner_id=enemy.id,
    )
    if bomb is None:
        return False
    enemy.bomb_count += 1
    return True


def choose_move(state: ArenaState, enemy: EnemyState, rng: random.Random) -> bool:
    """Move ``enemy`` one cell. Returns ``False`` if it had nowhere to go."""

    candidates = open_neighbours(state.grid, enemy.cell)
    if not candidates:
        enemy.direction = Direction(rng.randrange(4))
        return False

    dangerous = danger_cells(state)
    safe = [move for move in candidates if move[1] not in dangerous]
    direction, (x, y) = rng.choice(safe or candidates)
    enemy.x, enemy.y = x, y
    enemy.direction = direction
    return True


def update_enemies(state: ArenaState, rng: random.Random) -> None:
    for enemy in state.enemies:
        enemy.move_timer += 1
        enemy.bomb_timer += 1

        if enemy.bomb_timer >= ENEMY_BOMB_INTERVAL:
            enemy.bomb_timer = 0
            try_enemy_bomb(state, enemy, rng)

        if enemy.move_timer >= ENEMY_MOVE_INTERVAL:
            enemy.move_timer = 0
            choose_move(state, enemy, rng)
