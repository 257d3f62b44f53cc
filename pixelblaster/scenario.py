"""
Scenario loading for JSON-defined arenas.

A scenario pins down everything that is normally random at level start: the
tile layout, where the player and enemies stand, and optionally bombs and
power-ups already on the board. Loaded scenarios start in the PLAYING phase so
a ``GameSession`` built from one ticks immediately without regenerating the
level.

Scenario file structure:
```json
{
  "name": "Open Arena",
  "description": "...",
  "tiles": ["#####", "#...#", "#.#.#", "#...#", "#####"],
  "player": {"x": 1, "y": 1, "lives": 3},
  "enemies": [{"x": 3, "y": 3, "direction": "left"}],
  "bombs": [{"x": 3, "y": 1, "timer": 30, "range": 2, "owner": "player"}],
  "power_ups": [{"kind": "shield", "x": 1, "y": 3}],
  "session": {"score": 0, "level": 1}
}
```

Tile legend: ``#`` indestructible wall, ``+`` destructible wall, ``.`` empty.
Enemies get ids 1..n in file order, so enemy bombs name their owner by that
number in ``owner_id``.

Usage:
    loader = ScenarioLoader()
    state = loader.load("open_arena")
    session = GameSession(state=state)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config
from .environment import ArenaGridState, Direction, TileKind
from .schemas import (
    ArenaState,
    BombOwner,
    BombState,
    EnemyState,
    PlayerState,
    PowerUpState,
    SessionContext,
    SessionPhase,
)

TILE_LEGEND: Dict[str, TileKind] = {
    "#": TileKind.INDESTRUCTIBLE,
    "+": TileKind.DESTRUCTIBLE,
    ".": TileKind.EMPTY,
}


class ScenarioLoader:
    """Load and validate arena scenarios from JSON files.

    Directory structure:
    - Default: Config.SCENARIOS_DIR ({PROJECT_ROOT}/examples/scenarios/)
    - Override via constructor: ScenarioLoader(Path("/custom/scenarios"))
    - Scenario files: {scenario_name}.json

    Raises ValueError for malformed scenarios: missing fields, ragged or
    unknown tile rows, unknown enemy directions, entities outside the arena or
    inside walls, and two bombs sharing a cell.
    """

    def __init__(self, scenarios_dir: Optional[Path] = None):
        self.scenarios_dir = scenarios_dir or Config.SCENARIOS_DIR

    def load(self, scenario_name: str) -> ArenaState:
        """Load a scenario by name (without the .json extension).

        Raises:
            FileNotFoundError: If the scenario file doesn't exist
            ValueError: If the scenario is malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        scenario_path = self.scenarios_dir / f"{scenario_name}.json"

        if not scenario_path.exists():
            raise FileNotFoundError(
                f"Scenario '{scenario_name}' not found at {scenario_path}"
            )

        data = json.loads(scenario_path.read_text())
        return self.from_dict(data)

    def from_dict(self, data: Dict[str, Any]) -> ArenaState:
        """Build an ``ArenaState`` from already-decoded scenario data."""
        self._validate_scenario(data)

        grid = self._parse_tiles(data["tiles"])
        session_data = data.get("session", {})
        state = ArenaState(
            session=SessionContext(
                phase=SessionPhase(session_data.get("phase", SessionPhase.PLAYING.value)),
                score=int(session_data.get("score", 0)),
                level=int(session_data.get("level", 1)),
            ),
            grid=grid,
            player=PlayerState(**data.get("player", {})),
        )
        self._check_walkable(grid, state.player.x, state.player.y, "player")

        for enemy_data in data.get("enemies", []):
            state.enemies.append(self._parse_enemy(state, enemy_data))

        for bomb_data in data.get("bombs", []):
            state.bombs.append(self._parse_bomb(state, bomb_data))
        state.player.bomb_count = sum(
            1 for bomb in state.bombs if bomb.owner == BombOwner.PLAYER
        )

        for power_up_data in data.get("power_ups", []):
            power_up = PowerUpState(id=state.allocate_id(), **power_up_data)
            self._check_walkable(grid, power_up.x, power_up.y, "power-up")
            state.power_ups.append(power_up)

        return state

    def _validate_scenario(self, data: Dict[str, Any]) -> None:
        required = ["name", "tiles"]
        missing = [field for field in required if field not in data]
        if missing:
            raise ValueError(f"Scenario missing required fields: {missing}")

        rows = data["tiles"]
        if not isinstance(rows, list) or not rows:
            raise ValueError("Scenario 'tiles' must be a non-empty list of strings")
        width = len(rows[0])
        for index, row in enumerate(rows):
            if not isinstance(row, str) or len(row) != width:
                raise ValueError(f"Tile row {index} must be a string of length {width}")
            unknown = set(row) - set(TILE_LEGEND)
            if unknown:
                raise ValueError(f"Tile row {index} has unknown symbols: {sorted(unknown)}")

    def _parse_tiles(self, rows: List[str]) -> ArenaGridState:
        return ArenaGridState(
            width=len(rows[0]),
            height=len(rows),
            tiles=[[TILE_LEGEND[symbol] for symbol in row] for row in rows],
        )

    def _parse_enemy(self, state: ArenaState, data: Dict[str, Any]) -> EnemyState:
        fields = dict(data)
        if isinstance(fields.get("direction"), str):
            try:
                fields["direction"] = Direction[fields["direction"].upper()]
            except KeyError:
                raise ValueError(
                    f"Unknown enemy direction {fields['direction']!r}; "
                    f"expected one of {[d.name.lower() for d in Direction]}"
                ) from None
        enemy = EnemyState(id=state.allocate_id(), **fields)
        self._check_walkable(state.grid, enemy.x, enemy.y, "enemy")
        return enemy

    def _parse_bomb(self, state: ArenaState, data: Dict[str, Any]) -> BombState:
        bomb = BombState(id=state.allocate_id(), **data)
        self._check_walkable(state.grid, bomb.x, bomb.y, "bomb")
        if state.bomb_at(bomb.x, bomb.y) is not None:
            raise ValueError(f"Scenario places two bombs at ({bomb.x}, {bomb.y})")
        if bomb.owner == BombOwner.ENEMY:
            owner = state.enemy_by_id(bomb.owner_id)
            if owner is not None:
                owner.bomb_count += 1
        return bomb

    def _check_walkable(self, grid: ArenaGridState, x: int, y: int, label: str) -> None:
        if not grid.is_empty(x, y):
            raise ValueError(f"Scenario places {label} at ({x}, {y}), which is not an empty tile")

    def list_scenarios(self) -> List[str]:
        """List available scenario names (files starting with '_' are skipped)."""
        if not self.scenarios_dir.exists():
            return []

        return sorted(
            f.stem for f in self.scenarios_dir.glob("*.json")
            if not f.name.startswith("_")
        )


def load_scenario(scenario_name: str) -> ArenaState:
    """Convenience function to load a scenario from ``Config.SCENARIOS_DIR``."""
    loader = ScenarioLoader()
    return loader.load(scenario_name)
