"""Maze grid model.

The grid is a read-only numpy array of cell codes, shape (height, width),
indexed as ``cells[y, x]``. Anything outside the grid counts as wall.
"""

import math
from enum import IntEnum
from typing import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidLayoutError
from .types import Position, Tile

# Fallbacks when the layout holds no spawn cells
DEFAULT_PLAYER_SPAWN = Tile(x=1, y=1)
DEFAULT_ENEMY_SPAWN = Tile(x=10, y=10)


class CellKind(IntEnum):
    """Grid cell codes."""

    PATH = 0
    WALL = 1
    ENEMY_SPAWN = 2
    PLAYER_SPAWN = 3


# Layout character -> cell code
LAYOUT_CHARS: dict[str, CellKind] = {
    ".": CellKind.PATH,
    "#": CellKind.WALL,
    "E": CellKind.ENEMY_SPAWN,
    "P": CellKind.PLAYER_SPAWN,
}


class Maze:
    """Immutable maze grid with geometry queries."""

    def __init__(self, cells: NDArray[np.integer]):
        if cells.ndim != 2 or cells.size == 0:
            raise InvalidLayoutError(f"Maze grid must be a non-empty 2D array, got shape {cells.shape}")
        valid = {int(kind) for kind in CellKind}
        unknown = set(np.unique(cells).tolist()) - valid
        if unknown:
            raise InvalidLayoutError(f"Unknown cell codes in maze: {sorted(unknown)}")

        self._cells = cells.astype(np.uint8, copy=True)
        self._cells.setflags(write=False)

    @classmethod
    def from_codes(cls, rows: Sequence[Sequence[int]]) -> "Maze":
        """Build a maze from rows of integer cell codes."""
        if not rows or not rows[0]:
            raise InvalidLayoutError("Maze must have at least one row and column")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise InvalidLayoutError(
                    f"Row {y} has {len(row)} cells, expected {width}"
                )
        # Kept at native integer width so out-of-range codes reach validation
        return cls(np.array(rows))

    @classmethod
    def from_layout(cls, lines: Iterable[str]) -> "Maze":
        """Build a maze from text rows (``.`` path, ``#`` wall, ``E``/``P`` spawns)."""
        rows: list[list[int]] = []
        for y, line in enumerate(lines):
            row = []
            for x, char in enumerate(line):
                if char not in LAYOUT_CHARS:
                    raise InvalidLayoutError(
                        f"Unknown layout character {char!r} at ({x}, {y})"
                    )
                row.append(int(LAYOUT_CHARS[char]))
            rows.append(row)
        return cls.from_codes(rows)

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cells(self) -> NDArray[np.uint8]:
        """Read-only view of the cell codes, shape (height, width)."""
        return self._cells

    def in_bounds(self, tile: Tile) -> bool:
        """Check if tile is within maze bounds."""
        return 0 <= tile.x < self.width and 0 <= tile.y < self.height

    def cell_at(self, tile: Tile) -> CellKind:
        """Cell code at tile; out-of-bounds tiles read as WALL."""
        if not self.in_bounds(tile):
            return CellKind.WALL
        return CellKind(int(self._cells[tile.y, tile.x]))

    def is_wall(self, x: float, y: float) -> bool:
        """Whether the cell containing continuous point (x, y) blocks movement."""
        cell_x = math.floor(x)
        cell_y = math.floor(y)
        if cell_y < 0 or cell_y >= self.height or cell_x < 0 or cell_x >= self.width:
            return True
        return int(self._cells[cell_y, cell_x]) == CellKind.WALL

    def is_wall_tile(self, tile: Tile) -> bool:
        return self.is_wall(tile.x, tile.y)

    def find_cells(self, kind: CellKind) -> list[Tile]:
        """All cells of the given kind in row-major order."""
        ys, xs = np.nonzero(self._cells == kind)
        # np.nonzero walks C-order, which is already row-major
        return [Tile(x=int(x), y=int(y)) for y, x in zip(ys, xs)]

    def player_spawn(self) -> Tile:
        """First player spawn cell, or the default when the layout has none."""
        spawns = self.find_cells(CellKind.PLAYER_SPAWN)
        return spawns[0] if spawns else DEFAULT_PLAYER_SPAWN

    def enemy_spawns(self, count: int) -> list[Tile]:
        """
        Spawn tile for each of count enemies, cycling spawn cells round-robin.

        A layout without ENEMY_SPAWN cells puts all count enemies on
        DEFAULT_ENEMY_SPAWN, stacked on the same tile, rather than
        spawning only one.
        """
        spawns = self.find_cells(CellKind.ENEMY_SPAWN) or [DEFAULT_ENEMY_SPAWN]
        return [spawns[i % len(spawns)] for i in range(count)]

    def scatter_corners(self) -> tuple[Position, Position, Position, Position]:
        """Corner targets inset one tile: top-left, top-right, bottom-left, bottom-right."""
        right = float(self.width - 2)
        bottom = float(self.height - 2)
        return (
            Position(x=1.0, y=1.0),
            Position(x=right, y=1.0),
            Position(x=1.0, y=bottom),
            Position(x=right, y=bottom),
        )

    def __repr__(self) -> str:
        return f"Maze(width={self.width}, height={self.height})"
