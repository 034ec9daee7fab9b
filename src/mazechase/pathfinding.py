"""Breadth-first search for the first step toward a target tile."""

import random
from collections import deque
from typing import Sequence

import structlog

from .maze import Maze
from .types import CARDINAL_DIRECTIONS, Direction, Position, Tile

logger = structlog.get_logger()


def best_direction(
    maze: Maze,
    start: Position,
    target: Position,
    current_direction: Direction,
    candidates: Sequence[Direction],
    rng: random.Random,
) -> Direction:
    """
    Pick the candidate direction that begins a shortest path to target.

    Search is a multi-source BFS over tiles: one seed per candidate (the
    neighbouring tile of the rounded start), each tagged with the candidate
    that produced it. The first dequeued tile equal to the target decides,
    so equal-length paths are broken by candidate order.

    Args:
        maze: Maze to search
        start: Current continuous position (rounded to a tile)
        target: Target continuous position (rounded to a tile)
        current_direction: Direction the entity is moving in now
        candidates: Directions the result must come from

    Returns:
        One of candidates. A random candidate when start and target share a
        tile or the target is unreachable; NONE if candidates is empty.
    """
    if not candidates:
        return Direction.NONE

    start_tile = start.tile()
    target_tile = target.tile()

    if start_tile == target_tile:
        return rng.choice(list(candidates))

    visited: set[Tile] = {start_tile}
    queue: deque[tuple[Tile, Direction]] = deque()

    for direction in candidates:
        seed = start_tile.offset(direction)
        if seed in visited or maze.is_wall_tile(seed):
            continue
        visited.add(seed)
        queue.append((seed, direction))

    while queue:
        tile, first_step = queue.popleft()
        if tile == target_tile:
            return first_step

        for direction in CARDINAL_DIRECTIONS:
            neighbour = tile.offset(direction)
            if neighbour in visited or maze.is_wall_tile(neighbour):
                continue
            visited.add(neighbour)
            queue.append((neighbour, first_step))

    logger.debug(
        "path_not_found",
        start=str(start_tile),
        target=str(target_tile),
        current_direction=current_direction.name,
    )
    return rng.choice(list(candidates))
