"""Core types for the maze simulation."""

import math
from enum import IntEnum

from pydantic import BaseModel

# Proximity threshold for player-enemy and player-item contact, in tiles
CAPTURE_RADIUS = 0.5


class Direction(IntEnum):
    """Cardinal movement directions, plus NONE for a stationary entity."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


# Direction deltas for movement calculation
# Coordinate system: +X is right (columns), +Y is down (rows)
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NONE: (0, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

OPPOSITE_DIRECTIONS: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Enumeration order for valid-move scans and search expansion
CARDINAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (not to even)."""
    return math.floor(value + 0.5)


def is_vertical(direction: Direction) -> bool:
    """Whether direction moves along the Y axis."""
    return direction in (Direction.UP, Direction.DOWN)


class Tile(BaseModel, frozen=True):
    """Immutable integer grid cell coordinate."""

    x: int
    y: int

    def offset(self, direction: Direction) -> "Tile":
        """Return the neighbouring tile in direction."""
        dx, dy = DIRECTION_DELTAS[direction]
        return Tile(x=self.x + dx, y=self.y + dy)

    def to_position(self) -> "Position":
        return Position(x=float(self.x), y=float(self.y))

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Position(BaseModel, frozen=True):
    """Immutable continuous coordinate in tile units (1.0 = one cell)."""

    x: float
    y: float

    def offset(self, direction: Direction, distance: float) -> "Position":
        """Return new position moved distance tiles along direction."""
        dx, dy = DIRECTION_DELTAS[direction]
        return Position(x=self.x + dx * distance, y=self.y + dy * distance)

    def tile(self) -> Tile:
        """Return the grid cell this position rounds to."""
        return Tile(x=round_half_up(self.x), y=round_half_up(self.y))

    def distance_to(self, other: "Position") -> float:
        """Euclidean distance in tiles."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def within(self, other: "Position", radius: float = CAPTURE_RADIUS) -> bool:
        """Whether other lies strictly inside radius of this position."""
        return self.distance_to(other) < radius

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"
