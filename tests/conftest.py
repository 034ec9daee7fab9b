"""Shared test fixtures for simulation tests."""

import random

import pytest

from mazechase.maze import Maze


class ScriptedRandom(random.Random):
    """Random source that replays fixed values.

    ``random()`` pops from values, then returns default. ``choice()``
    always picks the first element, so fallbacks are predictable.
    """

    def __init__(self, values: list[float] | None = None, default: float = 0.5):
        super().__init__(0)
        self.values = list(values or [])
        self.default = default

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def scripted_rng() -> ScriptedRandom:
    """Random source that never triggers any of the 5%/10% draws."""
    return ScriptedRandom()


@pytest.fixture
def corridor_maze() -> Maze:
    """7x3 maze with a single horizontal corridor at y=1, x in 1..5."""
    return Maze.from_layout([
        "#######",
        "#.....#",
        "#######",
    ])


@pytest.fixture
def cross_maze() -> Maze:
    """5x5 plus-shaped maze, junction at (2, 2).

        # # # # #
        # # . # #
        # . . . #
        # # . # #
        # # # # #
    """
    return Maze.from_layout([
        "#####",
        "##.##",
        "#...#",
        "##.##",
        "#####",
    ])


@pytest.fixture
def ring_maze() -> Maze:
    """5x5 maze with a loop around a single wall at (2, 2)."""
    return Maze.from_layout([
        "#####",
        "#...#",
        "#.#.#",
        "#...#",
        "#####",
    ])


@pytest.fixture
def split_maze() -> Maze:
    """7x3 maze with two corridors separated by a wall at x=3."""
    return Maze.from_layout([
        "#######",
        "#..#..#",
        "#######",
    ])


@pytest.fixture
def turn_maze() -> Maze:
    """7x4 maze: corridor at y=2 with a single exit up at (3, 1)."""
    return Maze.from_layout([
        "#######",
        "###.###",
        "#.....#",
        "#######",
    ])
