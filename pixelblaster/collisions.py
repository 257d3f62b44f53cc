"""Explosion collision checks, damage and the player's escape relocation.

A hit player does not teleport mid-tick. The escape procedure records a
``PendingRelocation`` on the player, and ``resolve_pending_relocation`` applies
it at the start of a later tick. While a relocation is pending the player
cannot be hit again, so one blast costs one life.
"""

from __future__ import annotations

from typing import Optional

from pixelblaster.constants import ESCAPE_DISTANCE, SCORE_ENEMY, START_CELL
from pixelblaster.environment import ArenaGridState, Direction, clamp_cell, step
from pixelblaster.environment.helpers import Cell
from pixelblaster.schemas import ArenaState, EscapePolicy, EventCategory, PendingRelocation

ESCAPE_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


def find_escape_cell(grid: ArenaGridState, cell: Cell) -> Optional[Cell]:
    """First empty cell two steps away, trying left, right, up, down."""

    for direction in ESCAPE_ORDER:
        target = clamp_cell(grid, step(cell, direction, ESCAPE_DISTANCE))
        if grid.is_empty(*target):
            return target
    return None


def escape_target(
    grid: ArenaGridState, cell: Cell, policy: EscapePolicy
) -> Cell:
    if policy == EscapePolicy.NEAREST_SAFE:
        return find_escape_cell(grid, cell) or START_CELL
    return START_CELL


def start_escape(state: ArenaState, policy: EscapePolicy, delay_ticks: int = 0) -> PendingRelocation:
    x, y = escape_target(state.grid, state.player.cell, policy)
    relocation = PendingRelocation(x=x, y=y, delay_ticks=delay_ticks)
    state.player.pending_relocation = relocation
    return relocation


def resolve_pending_relocation(state: ArenaState) -> bool:
    """Apply the player's pending relocation once its delay has run out."""

    player = state.player
    relocation = player.pending_relocation
    if relocation is None:
        return False
    if relocation.delay_ticks > 0:
        relocation.delay_ticks -= 1
        return False

    player.x, player.y = relocation.x, relocation.y
    player.pending_relocation = None
    state.emit(
        EventCategory.PLAYER_RELOCATED,
        f"Player relocated to ({relocation.x}, {relocation.y})",
        cell=(relocation.x, relocation.y),
    )
    return True


def resolve_collisions(
    state: ArenaState,
    policy: EscapePolicy = EscapePolicy.RESET_TO_START,
    delay_ticks: int = 0,
) -> None:
    burning = {(e.x, e.y) for e in state.explosions}
    if not burning:
        return

    player = state.player
    if player.cell in burning and not player.has_shield and player.pending_relocation is None:
        player.lives = max(0, player.lives - 1)
        state.emit(
            EventCategory.PLAYER_HIT,
            f"Player caught in a blast, {player.lives} lives left",
            cell=player.cell,
            lives=player.lives,
        )
        start_escape(state, policy, delay_ticks)

    survivors = []
    for enemy in state.enemies:
        if enemy.cell in burning:
            state.add_score(
                SCORE_ENEMY,
                EventCategory.ENEMY_KILLED,
                f"Enemy {enemy.id} destroyed",
                cell=enemy.cell,
                enemy_id=enemy.id,
            )
        else:
            survivors.append(enemy)
    state.enemies = survivors
