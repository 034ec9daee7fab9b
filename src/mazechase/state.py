"""Entity and session state."""

from enum import Enum
from typing import Self

from pydantic import BaseModel

from .types import Direction, Position


class SessionStatus(str, Enum):
    """Lifecycle of one game session. GAME_OVER and VICTORY are terminal."""

    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"
    VICTORY = "VICTORY"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.PLAYING


class Entity(BaseModel, frozen=True):
    """Immutable moving entity: position, heading and per-tick speed."""

    position: Position
    direction: Direction = Direction.NONE
    speed: float

    def with_position(self, new_position: Position) -> Self:
        """Return copy with updated position."""
        return self.model_copy(update={"position": new_position})

    def with_direction(self, new_direction: Direction) -> Self:
        """Return copy with updated direction."""
        return self.model_copy(update={"direction": new_direction})


class Player(Entity, frozen=True):
    """The player-controlled entity."""

    name: str
    score: int = 0
    lives: int = 3  # Reserved, not consumed by the simulation

    def with_score(self, new_score: int) -> "Player":
        return self.model_copy(update={"score": new_score})


class Enemy(Entity, frozen=True):
    """An autonomous pursuer.

    ``index`` is the spawn order; it selects the scatter corner and fixes
    the order enemies are processed in each tick.
    """

    enemy_id: str
    index: int
