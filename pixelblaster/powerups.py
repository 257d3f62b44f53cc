"""Power-up spawning, aging and collection."""

from __future__ import annotations

import random
from typing import Optional

from pixelblaster.constants import (
    MAX_BOMB_RANGE,
    MAX_BOMBS_CAP,
    MAX_LIVES,
    MAX_SPEED,
    POWER_UP_DROP_CHANCE,
    POWER_UP_TIMER_TICKS,
    SCORE_POWER_UP,
    SHIELD_TICKS,
)
from pixelblaster.schemas import (
    ArenaState,
    EventCategory,
    PlayerState,
    PowerUpKind,
    PowerUpState,
)

POWER_UP_KINDS = list(PowerUpKind)


def maybe_spawn_power_up(
    state: ArenaState, x: int, y: int, rng: random.Random
) -> Optional[PowerUpState]:
    """Roll for a drop where a destructible wall was just cleared."""

    if rng.random() >= POWER_UP_DROP_CHANCE:
        return None
    power_up = PowerUpState(
        id=state.allocate_id(),
        x=x,
        y=y,
        kind=rng.choice(POWER_UP_KINDS),
        timer=POWER_UP_TIMER_TICKS,
    )
    state.power_ups.append(power_up)
    state.emit(
        EventCategory.POWER_UP_SPAWNED,
        f"{power_up.kind.value} dropped",
        cell=(x, y),
        kind=power_up.kind.value,
    )
    return power_up


def age_power_ups(state: ArenaState) -> None:
    for power_up in state.power_ups:
        power_up.timer -= 1
    state.power_ups = [p for p in state.power_ups if p.timer > 0]


def apply_power_up(player: PlayerState, kind: PowerUpKind) -> None:
    """Apply the stat change for ``kind``, saturating at the caps."""

    if kind == PowerUpKind.BOMB_COUNT:
        player.max_bombs = min(MAX_BOMBS_CAP, player.max_bombs + 1)
    elif kind == PowerUpKind.BOMB_RANGE:
        player.bomb_range = min(MAX_BOMB_RANGE, player.bomb_range + 1)
    elif kind == PowerUpKind.SPEED:
        player.speed = min(MAX_SPEED, player.speed + 1)
    elif kind == PowerUpKind.LIFE:
        player.lives = min(MAX_LIVES, player.lives + 1)
    elif kind == PowerUpKind.SHIELD:
        player.has_shield = True
        player.shield_timer = SHIELD_TICKS
    # MEGA_BOMB has no stat effect; it only matters while lying under the player


def collect_power_up(state: ArenaState, power_up: PowerUpState) -> None:
    apply_power_up(state.player, power_up.kind)
    state.power_ups = [p for p in state.power_ups if p.id != power_up.id]
    state.add_score(
        SCORE_POWER_UP,
        EventCategory.POWER_UP_COLLECTED,
        f"Collected {power_up.kind.value}",
        cell=(power_up.x, power_up.y),
        kind=power_up.kind.value,
    )
