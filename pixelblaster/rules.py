"""The standard arena rules: one tick of the full simulation pipeline."""

from __future__ import annotations

import random
from typing import Optional

from pixelblaster.bombs import age_explosions, update_bombs
from pixelblaster.collisions import resolve_collisions, resolve_pending_relocation
from pixelblaster.config import Config
from pixelblaster.constants import SCORE_LEVEL
from pixelblaster.enemy_ai import update_enemies
from pixelblaster.level import initialize_level
from pixelblaster.player import move_player, place_player_bomb, update_shield
from pixelblaster.powerups import age_power_ups
from pixelblaster.schemas import (
    ArenaState,
    EscapePolicy,
    EventCategory,
    InputIntents,
    SessionPhase,
)
from pixelblaster.simulation_rules import SimulationRules


class ArenaRules(SimulationRules):
    """Bomb arena physics.

    Tick order:
    0. apply a pending escape relocation
    1. player input (bomb first, then movement)
    2. shield decay
    3. enemy AI
    4. bomb countdown and detonation
    5. explosion aging
    6. power-up aging
    7. collisions and damage
    8. game over, otherwise level complete

    All randomness flows through ``rng`` so a seeded or scripted source replays
    a game exactly.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        escape_policy: Optional[EscapePolicy] = None,
        escape_delay_ticks: Optional[int] = None,
    ):
        self.rng = rng if rng is not None else random.Random(Config.RANDOM_SEED)
        self.escape_policy = escape_policy or EscapePolicy(Config.ESCAPE_POLICY)
        self.escape_delay_ticks = (
            Config.ESCAPE_DELAY_TICKS if escape_delay_ticks is None else escape_delay_ticks
        )

    def on_session_start(self, state: ArenaState) -> ArenaState:
        return initialize_level(state, self.rng)

    def apply_tick(
        self,
        state: ArenaState,
        tick: int,
        intents: InputIntents,
        now_ms: float,
    ) -> ArenaState:
        updated = state.model_copy(deep=True)
        updated.tick = tick
        updated.events = []

        resolve_pending_relocation(updated)

        if intents.place_bomb:
            place_player_bomb(updated)
        move_player(updated, intents.held, now_ms)
        update_shield(updated.player)

        update_enemies(updated, self.rng)
        update_bombs(updated, self.rng)
        age_explosions(updated)
        age_power_ups(updated)

        resolve_collisions(updated, self.escape_policy, self.escape_delay_ticks)

        self._check_terminal(updated)
        return updated

    def _check_terminal(self, state: ArenaState) -> None:
        if state.player.lives <= 0:
            state.session.phase = SessionPhase.GAME_OVER
            state.emit(
                EventCategory.GAME_OVER,
                f"Game over on level {state.session.level}",
                score=state.session.score,
            )
            return

        if not state.enemies:
            finished = state.session.level
            state.session.level += 1
            state.add_score(
                SCORE_LEVEL,
                EventCategory.LEVEL_COMPLETE,
                f"Level {finished} cleared",
                level=finished,
            )
            initialize_level(state, self.rng)
