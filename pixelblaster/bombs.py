"""Bomb placement, countdown and detonation.

Detonation rules:
- the bomb's own cell always burns
- each direction is walked up to the bomb's effective range; indestructible
  tiles stop the blast before it enters them, a destructible tile is burned,
  cleared and stops the blast
- bombs caught in a blast are left alone and keep counting down on their own
- explosions last a fixed number of ticks and exist only for drawing and
  collision checks
"""

from __future__ import annotations

import random
from typing import List, Optional

from pixelblaster.constants import BOMB_TIMER_TICKS, EXPLOSION_TIMER_TICKS, SCORE_WALL
from pixelblaster.environment import TileKind, blast_footprint
from pixelblaster.environment.helpers import Cell
from pixelblaster.powerups import maybe_spawn_power_up
from pixelblaster.schemas import (
    ArenaState,
    BombOwner,
    BombState,
    EventCategory,
    ExplosionState,
)


def place_bomb(
    state: ArenaState,
    x: int,
    y: int,
    *,
    bomb_range: int,
    owner: BombOwner,
    owner_id: Optional[int] = None,
    is_mega: bool = False,
) -> Optional[BombState]:
    """Put a bomb on ``(x, y)``. Returns ``None`` if the cell already holds one.

    Owner bomb counters are the caller's business.
    """

    if state.bomb_at(x, y) is not None:
        return None
    bomb = BombState(
        id=state.allocate_id(),
        x=x,
        y=y,
        timer=BOMB_TIMER_TICKS,
        range=bomb_range,
        is_mega=is_mega,
        owner=owner,
        owner_id=owner_id,
    )
    state.bombs.append(bomb)
    state.emit(
        EventCategory.BOMB_PLACED,
        f"{owner.value} bomb placed",
        cell=(x, y),
        bomb_id=bomb.id,
        is_mega=is_mega,
    )
    return bomb


def detonate(state: ArenaState, bomb: BombState, rng: random.Random) -> List[Cell]:
    """Resolve one bomb's blast against the live grid and return its footprint."""

    grid = state.grid
    footprint = blast_footprint(grid, bomb.cell, bomb.effective_range)

    for x, y in footprint:
        if grid.get_tile(x, y) == TileKind.DESTRUCTIBLE:
            grid.set_tile(x, y, TileKind.EMPTY)
            state.add_score(
                SCORE_WALL,
                EventCategory.WALL_DESTROYED,
                "Destructible wall cleared",
                cell=(x, y),
            )
            maybe_spawn_power_up(state, x, y, rng)

    for x, y in footprint:
        state.explosions.append(
            ExplosionState(id=state.allocate_id(), x=x, y=y, timer=EXPLOSION_TIMER_TICKS)
        )

    if bomb.owner == BombOwner.PLAYER:
        state.player.bomb_count = max(0, state.player.bomb_count - 1)
    else:
        # The owner may already have been killed; its counter went with it.
        owner = state.enemy_by_id(bomb.owner_id)
        if owner is not None:
            owner.bomb_count = max(0, owner.bomb_count - 1)

    state.bombs = [b for b in state.bombs if b.id != bomb.id]
    state.emit(
        EventCategory.BOMB_DETONATED,
        f"{bomb.owner.value} bomb detonated",
        cell=bomb.cell,
        bomb_id=bomb.id,
        cells=len(footprint),
    )
    return footprint


def update_bombs(state: ArenaState, rng: random.Random) -> None:
    """Count every bomb down by one tick and detonate those that reach zero."""

    for bomb in state.bombs:
        bomb.timer -= 1

    expired = [bomb for bomb in state.bombs if bomb.timer <= 0]
    for bomb in expired:
        detonate(state, bomb, rng)


def age_explosions(state: ArenaState) -> None:
    for explosion in state.explosions:
        explosion.timer -= 1
    state.explosions = [e for e in state.explosions if e.timer > 0]
