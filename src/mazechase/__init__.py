"""Maze chase simulation core."""

from .config import Config, config_to_maze, find_config, list_configs, load_config
from .enemies import EnemyController, EnemyMode, EnemyUpdate, ModeTimer
from .exceptions import (
    EntityNotFoundError,
    InvalidLayoutError,
    ItemNotFoundError,
    MazeChaseError,
)
from .items import (
    ITEM_VALUES,
    CollectionResult,
    Item,
    ItemSet,
    ItemType,
    process_collection_phase,
    spawn_items,
)
from .maze import CellKind, Maze
from .motion import MotionResolver
from .pathfinding import best_direction
from .session import GameSession, SessionSnapshot, TerminalEvent, TickResult
from .state import Enemy, Entity, Player, SessionStatus
from .tick import TickConfig, TickLoop, run_ticks
from .types import (
    CAPTURE_RADIUS,
    CARDINAL_DIRECTIONS,
    DIRECTION_DELTAS,
    OPPOSITE_DIRECTIONS,
    Direction,
    Position,
    Tile,
)

__all__ = [
    # Types
    "Direction",
    "Position",
    "Tile",
    "DIRECTION_DELTAS",
    "OPPOSITE_DIRECTIONS",
    "CARDINAL_DIRECTIONS",
    "CAPTURE_RADIUS",
    # Maze
    "CellKind",
    "Maze",
    # Motion
    "MotionResolver",
    # Pathfinding
    "best_direction",
    # Enemies
    "EnemyController",
    "EnemyMode",
    "EnemyUpdate",
    "ModeTimer",
    # Items
    "ItemType",
    "ITEM_VALUES",
    "Item",
    "ItemSet",
    "CollectionResult",
    "process_collection_phase",
    "spawn_items",
    # State
    "Entity",
    "Player",
    "Enemy",
    "SessionStatus",
    # Session
    "GameSession",
    "SessionSnapshot",
    "TerminalEvent",
    "TickResult",
    # Tick
    "TickConfig",
    "TickLoop",
    "run_ticks",
    # Config
    "Config",
    "load_config",
    "find_config",
    "list_configs",
    "config_to_maze",
    # Exceptions
    "MazeChaseError",
    "InvalidLayoutError",
    "EntityNotFoundError",
    "ItemNotFoundError",
]
