"""Utilities for walking the arena grid."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .schemas import ArenaGridState, Direction, TileKind

Cell = Tuple[int, int]

# Blast propagation and enemy move enumeration share this order.
BLAST_DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


def manhattan_distance(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def step(cell: Cell, direction: Direction, distance: int = 1) -> Cell:
    dx, dy = direction.vector
    return cell[0] + dx * distance, cell[1] + dy * distance


def open_neighbours(grid: ArenaGridState, cell: Cell) -> List[Tuple[Direction, Cell]]:
    """Return the in-bounds ``EMPTY`` neighbours of ``cell`` with their direction.

    Only tiles block; bombs, explosions and power-ups are ignored here.
    """

    moves: List[Tuple[Direction, Cell]] = []
    for direction in BLAST_DIRECTIONS:
        target = step(cell, direction)
        if grid.is_empty(*target):
            moves.append((direction, target))
    return moves


def blast_footprint(grid: ArenaGridState, origin: Cell, reach: int) -> List[Cell]:
    """Project the cells a blast from ``origin`` covers, without touching the grid.

    The origin is always included. Each direction is walked up to ``reach``
    cells: the walk stops before an indestructible tile or the map edge, and
    stops after including the first destructible tile.
    """

    cells: List[Cell] = [origin]
    for direction in BLAST_DIRECTIONS:
        for distance in range(1, reach + 1):
            target = step(origin, direction, distance)
            tile = grid.get_tile(*target)
            if tile is None or tile == TileKind.INDESTRUCTIBLE:
                break
            cells.append(target)
            if tile == TileKind.DESTRUCTIBLE:
                break
    return cells


def clamp_cell(grid: ArenaGridState, cell: Cell) -> Cell:
    x = max(0, min(grid.width - 1, cell[0]))
    y = max(0, min(grid.height - 1, cell[1]))
    return x, y


_DEFAULT_TILE_SYMBOLS: Dict[TileKind, str] = {
    TileKind.EMPTY: ". ",
    TileKind.INDESTRUCTIBLE: "██",
    TileKind.DESTRUCTIBLE: "▒▒",
}


def render_ascii(
    grid: ArenaGridState,
    overlays: Optional[Dict[Cell, str]] = None,
    *,
    symbols: Optional[Dict[TileKind, str]] = None,
) -> str:
    """Render the grid as text, top row first.

    ``overlays`` maps cells to two-character strings drawn instead of the tile
    (entities, blasts). Unknown tile kinds fall back to ``??``.
    """

    mapping = {**_DEFAULT_TILE_SYMBOLS}
    if symbols:
        mapping.update(symbols)
    overlays = overlays or {}

    lines: List[str] = []
    for y in range(grid.height):
        row_chars: List[str] = []
        for x in range(grid.width):
            if (x, y) in overlays:
                row_chars.append(overlays[(x, y)])
            else:
                row_chars.append(mapping.get(grid.tiles[y][x], "??"))
        lines.append("".join(row_chars))
    return "\n".join(lines)
