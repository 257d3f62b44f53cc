"""Player controller: gated movement, shield decay and bomb placement.

Movement is the one real-time rule in the simulation. A step is allowed only
when enough wall-clock time has passed since the previous applied step, and the
gap shrinks with the player's ``speed``. Everything here rejects invalid input
by returning ``False`` and leaving the state untouched.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pixelblaster.bombs import place_bomb
from pixelblaster.constants import BASE_MOVE_DELAY_MS, MIN_MOVE_DELAY_MS, MOVE_DELAY_STEP_MS
from pixelblaster.environment import Direction, step
from pixelblaster.powerups import collect_power_up
from pixelblaster.schemas import ArenaState, BombOwner, PlayerState, PowerUpKind

# Vertical input wins over horizontal; within an axis the first listed wins.
_DIRECTION_PRIORITY = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def movement_delay_ms(speed: int) -> int:
    return max(MIN_MOVE_DELAY_MS, BASE_MOVE_DELAY_MS - (speed - 1) * MOVE_DELAY_STEP_MS)


def can_move_now(player: PlayerState, now_ms: float) -> bool:
    if player.last_move_ms is None:
        return True
    return now_ms - player.last_move_ms >= movement_delay_ms(player.speed)


def resolve_direction(held: Iterable[Direction]) -> Optional[Direction]:
    held = set(held)
    return next((d for d in _DIRECTION_PRIORITY if d in held), None)


def move_player(state: ArenaState, held: Iterable[Direction], now_ms: float) -> bool:
    """Step the player one cell in the held direction if the gate allows it."""

    player = state.player
    direction = resolve_direction(held)
    if direction is None or not can_move_now(player, now_ms):
        return False

    x, y = step(player.cell, direction)
    if not state.grid.is_empty(x, y):
        return False

    player.x, player.y = x, y
    player.last_move_ms = now_ms

    power_up = state.power_up_at(x, y)
    if power_up is not None:
        collect_power_up(state, power_up)
    return True


def update_shield(player: PlayerState) -> None:
    if player.has_shield and player.shield_timer > 0:
        player.has_shield = player.shield_timer > 1
        player.shield_timer -= 1


def has_mega_token_underfoot(state: ArenaState) -> bool:
    """True if an uncollected mega-bomb token lies on the player's cell."""
    x, y = state.player.cell
    return any(
        p.kind == PowerUpKind.MEGA_BOMB and p.x == x and p.y == y for p in state.power_ups
    )


def place_player_bomb(state: ArenaState) -> bool:
    player = state.player
    if player.bomb_count >= player.max_bombs:
        return False
    bomb = place_bomb(
        state,
        player.x,
        player.y,
        bomb_range=player.bomb_range,
        owner=BombOwner.PLAYER,
        is_mega=has_mega_token_underfoot(state),
    )
    if bomb is None:
        return False
    player.bomb_count += 1
    return True
