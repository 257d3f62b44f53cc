"""
Render snapshot construction.

A renderer (canvas, terminal, test assertion) receives a ``RenderSnapshot``: a
frozen, deep-copied view of a completed tick with everything a drawing layer
and HUD need. Nothing done to a snapshot can reach the simulation state.

Usage:
    snapshot = build_render_snapshot(session.current_state, high_score=500)
    print(snapshot.to_ascii())
"""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from pixelblaster.environment import ArenaGridState, TileKind, render_ascii
from pixelblaster.environment.helpers import Cell
from pixelblaster.schemas import (
    ArenaState,
    BombOwner,
    BombState,
    EnemyState,
    ExplosionState,
    PlayerState,
    PowerUpKind,
    PowerUpState,
    SessionPhase,
)

POWER_UP_SYMBOLS: Dict[PowerUpKind, str] = {
    PowerUpKind.BOMB_COUNT: "+B",
    PowerUpKind.BOMB_RANGE: "R+",
    PowerUpKind.SPEED: "S+",
    PowerUpKind.LIFE: "<3",
    PowerUpKind.SHIELD: "[]",
    PowerUpKind.MEGA_BOMB: "MB",
}


class RenderSnapshot(BaseModel):
    """Read-only view of one completed tick."""

    model_config = ConfigDict(frozen=True)

    tick: int
    phase: SessionPhase
    score: int
    level: int
    high_score: int = 0
    width: int = 0
    height: int = 0
    tiles: Tuple[Tuple[TileKind, ...], ...] = ()
    player: PlayerState
    enemies: Tuple[EnemyState, ...] = ()
    bombs: Tuple[BombState, ...] = ()
    explosions: Tuple[ExplosionState, ...] = ()
    power_ups: Tuple[PowerUpState, ...] = ()
    escaping: bool = Field(False, description="Player has a relocation pending")

    def overlays(self) -> Dict[Cell, str]:
        """Two-character entity markers keyed by cell, later layers on top."""

        marks: Dict[Cell, str] = {}
        for power_up in self.power_ups:
            marks[(power_up.x, power_up.y)] = POWER_UP_SYMBOLS[power_up.kind]
        for explosion in self.explosions:
            marks[(explosion.x, explosion.y)] = "**"
        for bomb in self.bombs:
            if bomb.owner == BombOwner.ENEMY:
                marks[(bomb.x, bomb.y)] = "bE"
            else:
                marks[(bomb.x, bomb.y)] = "MB" if bomb.is_mega else "B "
        for enemy in self.enemies:
            marks[(enemy.x, enemy.y)] = "E "
        marks[(self.player.x, self.player.y)] = "P "
        return marks

    def to_ascii(self) -> str:
        if not self.tiles:
            return ""
        grid = ArenaGridState(
            width=self.width,
            height=self.height,
            tiles=[list(row) for row in self.tiles],
        )
        return render_ascii(grid, self.overlays())


def build_render_snapshot(state: ArenaState, *, high_score: int = 0) -> RenderSnapshot:
    """Copy ``state`` into a frozen snapshot for renderers.

    ``high_score`` comes from whichever collaborator tracks it; the core does
    not know it.
    """

    grid = state.grid
    return RenderSnapshot(
        tick=state.tick,
        phase=state.session.phase,
        score=state.session.score,
        level=state.session.level,
        high_score=max(high_score, state.session.score),
        width=grid.width if grid else 0,
        height=grid.height if grid else 0,
        tiles=tuple(tuple(row) for row in grid.tiles) if grid else (),
        player=state.player.model_copy(deep=True),
        enemies=tuple(e.model_copy(deep=True) for e in state.enemies),
        bombs=tuple(b.model_copy(deep=True) for b in state.bombs),
        explosions=tuple(e.model_copy(deep=True) for e in state.explosions),
        power_ups=tuple(p.model_copy(deep=True) for p in state.power_ups),
        escaping=state.player.pending_relocation is not None,
    )
