"""
Pixel Blaster - grid-based bomb arena simulation core.

Deterministic tick engine for a single-player bomb arena: tile grid, bombs and
chain-free explosions, enemy AI, power-ups and the session state machine.

Rendering, keyboard handling and storage stay outside the core.
Hosts inject input sources, score stores and listeners.
"""

__version__ = "0.1.0"

# Session and host loop
from .session import GameSession
from .orchestrator import GameLoop, InputSourceError

# Core interfaces
from .simulation_rules import SimulationRules, format_status_generic
from .rules import ArenaRules
from .persistence import ScoreStore, InMemoryScoreStore, JsonScoreStore
from .inputs import InputSource, IdleInput, ScriptedInput, hold
from .snapshot import RenderSnapshot, build_render_snapshot
from .environment import (
    ArenaGridState,
    Direction,
    TileKind,
    build_arena_grid,
    blast_footprint,
    render_ascii,
)

# Core schemas
from .schemas import (
    ArenaState,
    BombOwner,
    BombState,
    EnemyState,
    EscapePolicy,
    EventCategory,
    ExplosionState,
    GameEvent,
    InputIntents,
    PendingRelocation,
    PlayerState,
    PowerUpKind,
    PowerUpState,
    SessionContext,
    SessionPhase,
)

# Scenario loader helpers
from .scenario import load_scenario, ScenarioLoader

__all__ = [
    # Session and loop
    "GameSession",
    "GameLoop",
    "InputSourceError",
    # Core interfaces
    "SimulationRules",
    "ArenaRules",
    "ScoreStore",
    "InMemoryScoreStore",
    "JsonScoreStore",
    "InputSource",
    "IdleInput",
    "ScriptedInput",
    "hold",
    "RenderSnapshot",
    "build_render_snapshot",
    # Grid
    "ArenaGridState",
    "Direction",
    "TileKind",
    "build_arena_grid",
    "blast_footprint",
    "render_ascii",
    # Schemas
    "ArenaState",
    "BombOwner",
    "BombState",
    "EnemyState",
    "EscapePolicy",
    "EventCategory",
    "ExplosionState",
    "GameEvent",
    "InputIntents",
    "PendingRelocation",
    "PlayerState",
    "PowerUpKind",
    "PowerUpState",
    "SessionContext",
    "SessionPhase",
    # Scenario helpers
    "load_scenario",
    "ScenarioLoader",
    # Utilities
    "format_status_generic",
]
