"""Enemy decision making: mode switching, intersections and pursuit."""

import random
from dataclasses import dataclass
from enum import Enum

import structlog

from .maze import Maze
from .motion import MotionResolver
from .pathfinding import best_direction
from .state import Enemy
from .types import (
    CAPTURE_RADIUS,
    CARDINAL_DIRECTIONS,
    OPPOSITE_DIRECTIONS,
    Direction,
    Position,
    round_half_up,
)

logger = structlog.get_logger()

# Distance from a tile centre (on both axes) that still counts as centred
CENTER_TOLERANCE = 0.1
# Chance of an unprompted re-decision when centred in a straight corridor
SPONTANEOUS_TURN_CHANCE = 0.05
# Chance a decision picks a random candidate instead of pathfinding
RANDOM_CHOICE_CHANCE = 0.05


class EnemyMode(str, Enum):
    """Shared enemy behaviour mode."""

    CHASE = "CHASE"
    SCATTER = "SCATTER"

    def toggled(self) -> "EnemyMode":
        return EnemyMode.SCATTER if self is EnemyMode.CHASE else EnemyMode.CHASE


@dataclass
class ModeTimer:
    """
    Tick-counting CHASE/SCATTER switch shared by every enemy.

    The session advances it once per active tick, so it stands still while
    the session is over. A new session gets a new timer starting in CHASE.
    """

    interval_ticks: int
    mode: EnemyMode = EnemyMode.CHASE
    elapsed_ticks: int = 0

    def advance(self) -> bool:
        """Count one tick. Returns True if the mode flipped on this tick."""
        self.elapsed_ticks += 1
        if self.elapsed_ticks < self.interval_ticks:
            return False
        self.elapsed_ticks = 0
        self.mode = self.mode.toggled()
        logger.info("mode_switched", mode=self.mode.value)
        return True


@dataclass(frozen=True)
class EnemyUpdate:
    """Result of advancing one enemy by one tick."""

    enemy: Enemy
    decided: bool
    caught_player: bool


def is_centered(position: Position) -> bool:
    """Whether position sits within CENTER_TOLERANCE of a tile centre on both axes."""
    return (
        abs(position.x - round_half_up(position.x)) < CENTER_TOLERANCE
        and abs(position.y - round_half_up(position.y)) < CENTER_TOLERANCE
    )


def is_intersection(valid: list[Direction]) -> bool:
    """Junctions (three or more exits) and corners (two non-opposite exits)."""
    if len(valid) > 2:
        return True
    return len(valid) == 2 and valid[0] != OPPOSITE_DIRECTIONS[valid[1]]


class EnemyController:
    """
    Per-tick enemy logic.

    Enemies keep their heading until a decision point: a rejected move, or
    being centred on a tile that is an intersection (or wins the
    spontaneous-turn draw). At a decision point they avoid reversing unless
    nothing else is open, then pathfind toward their target most of the
    time and pick a random open direction otherwise.
    """

    def __init__(self, maze: Maze, resolver: MotionResolver, rng: random.Random):
        self.maze = maze
        self.resolver = resolver
        self.rng = rng
        self._corners = maze.scatter_corners()

    def target_for(self, enemy: Enemy, player_position: Position, mode: EnemyMode) -> Position:
        """Player's exact position in CHASE, the enemy's assigned corner in SCATTER."""
        if mode is EnemyMode.SCATTER:
            return self._corners[enemy.index % len(self._corners)]
        return player_position

    def choose_direction(
        self,
        enemy: Enemy,
        valid: list[Direction],
        player_position: Position,
        mode: EnemyMode,
    ) -> Direction:
        """Pick a new heading at a decision point."""
        if not valid:
            logger.debug("enemy_stuck", enemy_id=enemy.enemy_id, position=str(enemy.position))
            return Direction.NONE

        reverse = OPPOSITE_DIRECTIONS.get(enemy.direction)
        forward = [d for d in valid if d != reverse]
        candidates = forward or valid

        target = self.target_for(enemy, player_position, mode)

        if self.rng.random() > RANDOM_CHOICE_CHANCE:
            return best_direction(
                self.maze,
                enemy.position,
                target,
                enemy.direction,
                candidates,
                self.rng,
            )
        return self.rng.choice(candidates)

    def update(self, enemy: Enemy, player_position: Position, mode: EnemyMode) -> EnemyUpdate:
        """
        Advance one enemy by one tick.

        Args:
            enemy: Enemy state at tick start
            player_position: Player position already updated for this tick
            mode: Shared enemy mode

        Returns:
            EnemyUpdate with the moved enemy and whether it caught the player
        """
        tentative = self.resolver.next_position(enemy.position, enemy.direction, enemy.speed)
        hit_wall = tentative == enemy.position
        centered = is_centered(enemy.position)

        valid = self.resolver.valid_directions(enemy.position, enemy.speed)
        should_decide = hit_wall or (
            centered
            and (is_intersection(valid) or self.rng.random() < SPONTANEOUS_TURN_CHANCE)
        )

        if should_decide:
            new_direction = self.choose_direction(enemy, valid, player_position, mode)
            if new_direction != enemy.direction:
                logger.debug(
                    "enemy_decision",
                    enemy_id=enemy.enemy_id,
                    mode=mode.value,
                    old=enemy.direction.name,
                    new=new_direction.name,
                    hit_wall=hit_wall,
                )
            enemy = enemy.with_direction(new_direction)

        moved = self.resolver.next_position(enemy.position, enemy.direction, enemy.speed)
        enemy = enemy.with_position(moved)

        caught = moved.distance_to(player_position) < CAPTURE_RADIUS
        return EnemyUpdate(enemy=enemy, decided=should_decide, caught_player=caught)


def spawn_enemies(maze: Maze, count: int, speed: float, rng: random.Random) -> list[Enemy]:
    """Create count enemies on the maze's spawn cells with random headings."""
    enemies = []
    for index, tile in enumerate(maze.enemy_spawns(count)):
        enemies.append(
            Enemy(
                enemy_id=f"enemy-{index}",
                index=index,
                position=tile.to_position(),
                direction=rng.choice(CARDINAL_DIRECTIONS),
                speed=speed,
            )
        )
    return enemies
