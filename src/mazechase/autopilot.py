"""Scripted player input for headless runs.

Stands in for the input layer: each tick it looks at the session and
writes a direction intent, exactly as a key press would.
"""

import random
from enum import Enum, auto

import structlog

from .pathfinding import best_direction
from .session import GameSession
from .types import CARDINAL_DIRECTIONS, Direction, Tile

logger = structlog.get_logger()


class AutopilotState(Enum):
    """States for the autopilot's state machine."""

    SEEK = auto()  # Heading for the nearest uncollected item
    WANDER = auto()  # Holding a random open direction until the tile changes


def manhattan_distance(a: Tile, b: Tile) -> int:
    """Calculate Manhattan distance between two tiles."""
    return abs(a.x - b.x) + abs(a.y - b.y)


class Autopilot:
    """Drives the player toward items, with occasional random detours.

    A detour (WANDER) picks a random open direction and holds it until the
    player leaves the tile it started on; otherwise the autopilot SEEKs the
    nearest uncollected item.
    """

    def __init__(self, rng: random.Random | None = None, wander_probability: float = 0.02):
        """
        Args:
            rng: Random source (separate from the session's)
            wander_probability: Chance per tick to start a random detour
        """
        self.rng = rng or random.Random()
        self.wander_probability = wander_probability
        self.state = AutopilotState.SEEK
        self._wander_tile: Tile | None = None
        self._wander_direction = Direction.NONE

    def open_directions(self, session: GameSession) -> list[Direction]:
        """Directions leading from the player's tile to a non-wall tile."""
        tile = session.player.position.tile()
        return [
            d for d in CARDINAL_DIRECTIONS if not session.maze.is_wall_tile(tile.offset(d))
        ]

    def _update_state(self, here: Tile, options: list[Direction]) -> None:
        """Update the state machine for the player's current tile."""
        previous = self.state

        if (
            self.state is AutopilotState.WANDER
            and here == self._wander_tile
            and self._wander_direction in options
        ):
            # Detour still under way
            return

        if self.rng.random() < self.wander_probability:
            self.state = AutopilotState.WANDER
            self._wander_tile = here
            self._wander_direction = self.rng.choice(options)
        else:
            self.state = AutopilotState.SEEK
            self._wander_tile = None

        if self.state is not previous:
            logger.debug("autopilot_state_changed", state=self.state.name, tile=str(here))

    def next_intent(self, session: GameSession) -> Direction:
        """Choose the direction to request this tick."""
        player = session.player
        options = self.open_directions(session)
        if not options:
            return Direction.NONE

        here = player.position.tile()
        self._update_state(here, options)

        if self.state is AutopilotState.WANDER:
            return self._wander_direction

        remaining = session.uncollected_items()
        if not remaining:
            return player.direction

        nearest = min(remaining, key=lambda item: manhattan_distance(here, item.position.tile()))
        return best_direction(
            session.maze,
            player.position,
            nearest.position,
            player.direction,
            options,
            self.rng,
        )

    async def __call__(self, session: GameSession) -> None:
        """Tick-start hook: write the chosen intent into the session."""
        session.set_direction(self.next_intent(session))
