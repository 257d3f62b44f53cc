"""Arena grid model, generation and spatial helpers."""

from .schemas import ArenaGridState, Direction, TileKind
from .grid import build_arena_grid, is_protected_cell
from .helpers import (
    BLAST_DIRECTIONS,
    blast_footprint,
    clamp_cell,
    manhattan_distance,
    open_neighbours,
    render_ascii,
    step,
)

__all__ = [
    "ArenaGridState",
    "Direction",
    "TileKind",
    "build_arena_grid",
    "is_protected_cell",
    "BLAST_DIRECTIONS",
    "blast_footprint",
    "clamp_cell",
    "manhattan_distance",
    "open_neighbours",
    "render_ascii",
    "step",
]
