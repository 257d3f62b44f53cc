"""
Pydantic schemas for the Pixel Blaster simulation core.

All entity and session data structures live here.

Design Philosophy:
- One ``ArenaState`` holds everything a tick reads and writes; ticks work on a
  deep copy and publish it only once complete
- Entities are plain mutable models updated in place within a tick
- Session bookkeeping (score, level, phase) is an explicit ``SessionContext``,
  never module-level globals
- Everything serializes to JSON so states can be saved, diffed and replayed in tests
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pixelblaster.constants import (
    BASE_BOMB_RANGE,
    BASE_LIVES,
    BASE_MAX_BOMBS,
    BASE_SPEED,
    BOMB_TIMER_TICKS,
    EXPLOSION_TIMER_TICKS,
    MEGA_RANGE_BONUS,
    POWER_UP_TIMER_TICKS,
    START_CELL,
)
from pixelblaster.environment import ArenaGridState, Direction


# ============================================================================
# Enumerations
# ============================================================================


class BombOwner(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"


class PowerUpKind(str, Enum):
    BOMB_COUNT = "bomb_count"
    BOMB_RANGE = "bomb_range"
    SPEED = "speed"
    LIFE = "life"
    SHIELD = "shield"
    MEGA_BOMB = "mega_bomb"


class SessionPhase(str, Enum):
    """Session state machine phases."""

    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class EscapePolicy(str, Enum):
    """Where a hit player is relocated.

    ``RESET_TO_START`` reproduces the classic behaviour: whatever safe cell the
    escape search finds, the player ends up back on the start cell.
    ``NEAREST_SAFE`` keeps the safe cell and only falls back to the start cell
    when none is found.
    """

    RESET_TO_START = "reset_to_start"
    NEAREST_SAFE = "nearest_safe"


class EventCategory(str, Enum):
    BOMB_PLACED = "bomb_placed"
    BOMB_DETONATED = "bomb_detonated"
    WALL_DESTROYED = "wall_destroyed"
    POWER_UP_SPAWNED = "power_up_spawned"
    POWER_UP_COLLECTED = "power_up_collected"
    ENEMY_KILLED = "enemy_killed"
    PLAYER_HIT = "player_hit"
    PLAYER_RELOCATED = "player_relocated"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


# ============================================================================
# Entity Schemas
# ============================================================================


class PendingRelocation(BaseModel):
    """A deferred move of the player, resolved at the start of a later tick."""

    x: int
    y: int
    delay_ticks: int = Field(0, ge=0, description="Ticks to wait before applying")


class PlayerState(BaseModel):
    """The single player entity."""

    x: int = START_CELL[0]
    y: int = START_CELL[1]
    lives: int = Field(BASE_LIVES, ge=0)
    # Bombs owned by the player that have not detonated yet
    bomb_count: int = Field(0, ge=0)
    max_bombs: int = Field(BASE_MAX_BOMBS, ge=1)
    bomb_range: int = Field(BASE_BOMB_RANGE, ge=1)
    speed: int = Field(BASE_SPEED, ge=1)
    has_shield: bool = False
    shield_timer: int = Field(0, ge=0)
    # Wall-clock time (ms) of the last applied move; None until the first move
    last_move_ms: Optional[float] = None
    pending_relocation: Optional[PendingRelocation] = None

    @property
    def cell(self) -> Tuple[int, int]:
        return self.x, self.y


class EnemyState(BaseModel):
    """An AI-controlled opponent."""

    id: int
    x: int
    y: int
    direction: Direction = Direction.UP
    move_timer: int = 0
    bomb_timer: int = 0
    bomb_count: int = Field(0, ge=0)
    max_bombs: int = Field(2, ge=1)
    bomb_range: int = Field(2, ge=1)

    @property
    def cell(self) -> Tuple[int, int]:
        return self.x, self.y


class BombState(BaseModel):
    """A placed bomb counting down to detonation.

    Detonated bombs are removed from ``ArenaState.bombs``; there is no separate
    exploded flag.
    """

    id: int
    x: int
    y: int
    timer: int = BOMB_TIMER_TICKS
    range: int = Field(..., ge=1)
    is_mega: bool = False
    owner: BombOwner
    # Enemy id for enemy bombs, None for the player's
    owner_id: Optional[int] = None

    @model_validator(mode="after")
    def _check_owner(self) -> "BombState":
        if self.owner == BombOwner.ENEMY and self.owner_id is None:
            raise ValueError("Enemy bombs must carry the owning enemy id")
        return self

    @property
    def cell(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def effective_range(self) -> int:
        return self.range + MEGA_RANGE_BONUS if self.is_mega else self.range


class ExplosionState(BaseModel):
    """One blasted cell. Lives only to be drawn and collision-checked."""

    id: int
    x: int
    y: int
    timer: int = EXPLOSION_TIMER_TICKS


class PowerUpState(BaseModel):
    id: int
    x: int
    y: int
    kind: PowerUpKind
    timer: int = POWER_UP_TIMER_TICKS


# ============================================================================
# Session and Event Schemas
# ============================================================================


class GameEvent(BaseModel):
    """Something notable that happened during a tick.

    Events are rebuilt every tick. Any event with a non-zero ``score_delta`` is a
    score change and is forwarded to score listeners by the session.
    """

    tick: int = Field(..., ge=0)
    category: EventCategory
    description: str
    score_delta: int = 0
    x: Optional[int] = None
    y: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SessionContext(BaseModel):
    """Session-wide bookkeeping owned by the state machine."""

    phase: SessionPhase = SessionPhase.MENU
    score: int = Field(0, ge=0)
    level: int = Field(1, ge=1)


class InputIntents(BaseModel):
    """Player input for one tick, produced by the host input layer."""

    model_config = ConfigDict(frozen=True)

    held: FrozenSet[Direction] = Field(
        default_factory=frozenset, description="Directions currently held down"
    )
    place_bomb: bool = Field(False, description="Discrete place-bomb trigger")


class ArenaState(BaseModel):
    """Complete state of the simulation at the end of a tick.

    Immutable by convention: each tick deep copies the previous state, mutates
    the copy and hands it back. Observers only ever see completed ticks.
    """

    tick: int = Field(0, ge=0)
    session: SessionContext = Field(default_factory=SessionContext)
    # None until the first level has been initialized
    grid: Optional[ArenaGridState] = None
    player: PlayerState = Field(default_factory=PlayerState)
    enemies: List[EnemyState] = Field(default_factory=list)
    bombs: List[BombState] = Field(default_factory=list)
    explosions: List[ExplosionState] = Field(default_factory=list)
    power_ups: List[PowerUpState] = Field(default_factory=list)
    events: List[GameEvent] = Field(
        default_factory=list, description="Events emitted during this tick"
    )
    next_entity_id: int = Field(1, ge=1)

    def allocate_id(self) -> int:
        """Return a fresh id for a bomb, explosion or power-up."""
        entity_id = self.next_entity_id
        self.next_entity_id += 1
        return entity_id

    def emit(
        self,
        category: EventCategory,
        description: str,
        *,
        cell: Optional[Tuple[int, int]] = None,
        score_delta: int = 0,
        **metadata: Any,
    ) -> GameEvent:
        event = GameEvent(
            tick=self.tick,
            category=category,
            description=description,
            score_delta=score_delta,
            x=cell[0] if cell else None,
            y=cell[1] if cell else None,
            metadata=metadata,
        )
        self.events.append(event)
        return event

    def add_score(
        self,
        points: int,
        category: EventCategory,
        description: str,
        *,
        cell: Optional[Tuple[int, int]] = None,
        **metadata: Any,
    ) -> GameEvent:
        """Award points and record the change as an event."""
        self.session.score += points
        return self.emit(category, description, cell=cell, score_delta=points, **metadata)

    def bomb_at(self, x: int, y: int) -> Optional[BombState]:
        return next((b for b in self.bombs if b.x == x and b.y == y), None)

    def power_up_at(self, x: int, y: int) -> Optional[PowerUpState]:
        return next((p for p in self.power_ups if p.x == x and p.y == y), None)

    def enemy_by_id(self, enemy_id: int) -> Optional[EnemyState]:
        return next((e for e in self.enemies if e.id == enemy_id), None)
