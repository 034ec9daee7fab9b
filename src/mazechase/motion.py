"""Continuous movement over the wall grid.

Two collision boxes are in use and they are not interchangeable:

- commit-time (``next_position``): a 0.7 tile square centred in the cell,
  inset 0.15 from each edge. Any corner in a wall rejects the whole move.
- decision-time (``is_valid_move``): margin 0.1, size 0.8, corners at
  ``x + 0.1`` and ``x + 0.7``. Slightly more permissive; only used to
  decide which directions look open, never to move anything.
"""

from .maze import Maze
from .types import CARDINAL_DIRECTIONS, Direction, Position

HITBOX_SIZE = 0.7
HITBOX_INSET = (1 - HITBOX_SIZE) / 2

DECISION_MARGIN = 0.1
DECISION_SIZE = 0.8


class MotionResolver:
    """Resolves axis-aligned movement against a maze."""

    def __init__(self, maze: Maze):
        self.maze = maze

    def _any_corner_in_wall(self, low_x: float, high_x: float, low_y: float, high_y: float) -> bool:
        is_wall = self.maze.is_wall
        return (
            is_wall(low_x, low_y)
            or is_wall(high_x, low_y)
            or is_wall(low_x, high_y)
            or is_wall(high_x, high_y)
        )

    def next_position(self, position: Position, direction: Direction, speed: float) -> Position:
        """
        Position after moving speed tiles along direction.

        Returns the input position unchanged when direction is NONE or when
        the hitbox at the candidate position touches a wall. There is no
        sliding along the blocked axis.
        """
        if direction == Direction.NONE:
            return position

        candidate = position.offset(direction, speed)
        if self._any_corner_in_wall(
            candidate.x + HITBOX_INSET,
            candidate.x + 1 - HITBOX_INSET,
            candidate.y + HITBOX_INSET,
            candidate.y + 1 - HITBOX_INSET,
        ):
            return position
        return candidate

    def is_valid_move(self, position: Position, direction: Direction, speed: float) -> bool:
        """Decision-time feasibility check for moving speed tiles along direction."""
        candidate = position.offset(direction, speed)
        return not self._any_corner_in_wall(
            candidate.x + DECISION_MARGIN,
            candidate.x + DECISION_SIZE - DECISION_MARGIN,
            candidate.y + DECISION_MARGIN,
            candidate.y + DECISION_SIZE - DECISION_MARGIN,
        )

    def valid_directions(self, position: Position, speed: float) -> list[Direction]:
        """Cardinal directions that pass is_valid_move, in enumeration order."""
        return [d for d in CARDINAL_DIRECTIONS if self.is_valid_move(position, d, speed)]
