"""Tests for commit-time and decision-time collision."""

import math

import pytest

from mazechase.maze import Maze
from mazechase.motion import HITBOX_INSET, MotionResolver
from mazechase.types import Direction, Position


def hitbox_corners(position: Position) -> list[tuple[float, float]]:
    low_x = position.x + HITBOX_INSET
    high_x = position.x + 1 - HITBOX_INSET
    low_y = position.y + HITBOX_INSET
    high_y = position.y + 1 - HITBOX_INSET
    return [(low_x, low_y), (high_x, low_y), (low_x, high_y), (high_x, high_y)]


class TestNextPosition:
    """Tests for the commit-time resolver."""

    def test_none_is_identity(self, corridor_maze: Maze):
        resolver = MotionResolver(corridor_maze)
        pos = Position(x=2.3, y=1.0)
        assert resolver.next_position(pos, Direction.NONE, 0.1) is pos

    def test_free_move(self, corridor_maze: Maze):
        resolver = MotionResolver(corridor_maze)
        moved = resolver.next_position(Position(x=2.0, y=1.0), Direction.RIGHT, 0.1)
        assert moved.x == pytest.approx(2.1)
        assert moved.y == 1.0

    def test_move_into_wall_rejected(self, corridor_maze: Maze):
        """Moving up out of the corridor leaves the entity where it was."""
        resolver = MotionResolver(corridor_maze)
        pos = Position(x=2.0, y=1.0)
        # Hitbox top edge would sit at 0.75 + 0.15 = 0.9, inside the wall row
        assert resolver.next_position(pos, Direction.UP, 0.25) == pos

    def test_small_move_within_cell_allowed(self, corridor_maze: Maze):
        """The 0.15 inset leaves room for sub-tile motion toward a wall."""
        resolver = MotionResolver(corridor_maze)
        moved = resolver.next_position(Position(x=2.0, y=1.0), Direction.UP, 0.1)
        assert moved.y == pytest.approx(0.9)

    def test_corridor_end_blocks(self, corridor_maze: Maze):
        """At the east end the far edge of the hitbox would cross into x=6."""
        resolver = MotionResolver(corridor_maze)
        pos = Position(x=5.2, y=1.0)
        assert resolver.next_position(pos, Direction.RIGHT, 0.1) == pos

    def test_all_or_nothing(self, corridor_maze: Maze):
        """A blocked move does not advance part of the way."""
        resolver = MotionResolver(corridor_maze)
        pos = Position(x=5.0, y=1.0)
        # 5.0 + 0.5 + 0.85 = 6.35 -> wall; 5.1 would have been fine
        assert resolver.next_position(pos, Direction.RIGHT, 0.5) == pos

    @pytest.mark.parametrize("direction", [Direction.LEFT, Direction.RIGHT])
    def test_corridor_walk_never_overlaps_wall(self, corridor_maze: Maze, direction: Direction):
        """Walking the corridor end to end keeps every hitbox corner off walls."""
        resolver = MotionResolver(corridor_maze)
        start_x = 1.0 if direction == Direction.RIGHT else 5.0
        for offset in (0.0, 0.03, 0.07):
            pos = Position(x=start_x, y=1.0 + offset)
            for _ in range(80):
                pos = resolver.next_position(pos, direction, 0.07)
                for x, y in hitbox_corners(pos):
                    assert not corridor_maze.is_wall(x, y)


class TestIsValidMove:
    """Tests for the decision-time feasibility check."""

    def test_open_direction(self, corridor_maze: Maze):
        resolver = MotionResolver(corridor_maze)
        assert resolver.is_valid_move(Position(x=2.0, y=1.0), Direction.RIGHT, 0.08)

    def test_blocked_direction(self, corridor_maze: Maze):
        resolver = MotionResolver(corridor_maze)
        # Top corner at 1.0 - 0.3 + 0.1 = 0.8 -> wall row
        assert not resolver.is_valid_move(Position(x=2.0, y=1.0), Direction.UP, 0.3)

    def test_decision_box_differs_from_commit_box(self, corridor_maze: Maze):
        """Near the east end, the decision box says open while the commit box blocks."""
        resolver = MotionResolver(corridor_maze)
        pos = Position(x=5.1, y=1.0)
        # decision corners: 5.2 + 0.1 = 5.3, 5.2 + 0.7 = 5.9 -> cell 5
        assert resolver.is_valid_move(pos, Direction.RIGHT, 0.1)
        # commit corners: 5.2 + 0.85 = 6.05 -> cell 6 (wall)
        assert resolver.next_position(pos, Direction.RIGHT, 0.1) == pos

    def test_valid_directions_order(self, cross_maze: Maze):
        """At a junction all four directions are open, in enumeration order."""
        resolver = MotionResolver(cross_maze)
        assert resolver.valid_directions(Position(x=2.0, y=2.0), 0.5) == [
            Direction.UP,
            Direction.DOWN,
            Direction.LEFT,
            Direction.RIGHT,
        ]

    def test_valid_directions_in_corridor_at_speed(self, corridor_maze: Maze):
        """With a large step only the corridor axis stays open."""
        resolver = MotionResolver(corridor_maze)
        assert resolver.valid_directions(Position(x=3.0, y=1.0), 0.5) == [
            Direction.LEFT,
            Direction.RIGHT,
        ]

    def test_no_valid_directions_in_sealed_cell(self):
        maze = Maze.from_layout(["###", "#.#", "###"])
        resolver = MotionResolver(maze)
        assert resolver.valid_directions(Position(x=1.0, y=1.0), 0.5) == []
        assert math.isclose(
            resolver.next_position(Position(x=1.0, y=1.0), Direction.LEFT, 0.5).x, 1.0
        )
