"""Pydantic schemas for the arena tile map.

The grid is stored as dense rows (``tiles[y][x]``) so that a whole-map snapshot
copies cheaply between ticks and serializes to plain JSON integers.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class TileKind(IntEnum):
    """Static content of a grid cell."""

    EMPTY = 0
    INDESTRUCTIBLE = 1
    DESTRUCTIBLE = 2


class Direction(IntEnum):
    """Cardinal directions, numbered the way enemies store their facing."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class ArenaGridState(BaseModel):
    """Dense 2D tile map. Rows are indexed by ``y``, columns by ``x``."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    tiles: List[List[TileKind]] = Field(
        ..., description="Row-major tile kinds: tiles[y][x]",
    )

    @model_validator(mode="after")
    def _check_shape(self) -> "ArenaGridState":
        if len(self.tiles) != self.height:
            raise ValueError(
                f"Grid has {len(self.tiles)} rows but height is {self.height}"
            )
        for y, row in enumerate(self.tiles):
            if len(row) != self.width:
                raise ValueError(
                    f"Grid row {y} has {len(row)} tiles but width is {self.width}"
                )
        return self

    @classmethod
    def filled(cls, width: int, height: int, kind: TileKind = TileKind.EMPTY) -> "ArenaGridState":
        return cls(
            width=width,
            height=height,
            tiles=[[kind for _ in range(width)] for _ in range(height)],
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[TileKind]:
        """Return the tile at ``(x, y)`` or ``None`` outside the map."""
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y][x]

    def set_tile(self, x: int, y: int, kind: TileKind) -> None:
        self.tiles[y][x] = kind

    def is_empty(self, x: int, y: int) -> bool:
        return self.get_tile(x, y) == TileKind.EMPTY

    def count(self, kind: TileKind) -> int:
        return sum(row.count(kind) for row in self.tiles)
