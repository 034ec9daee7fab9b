"""One game session: owned state plus the per-tick simulation step."""

import random
import time
from dataclasses import dataclass, field

import structlog
from pydantic import BaseModel

from .config import Config
from .enemies import EnemyController, EnemyMode, ModeTimer, spawn_enemies
from .exceptions import EntityNotFoundError
from .items import Item, ItemSet, process_collection_phase, spawn_items
from .maze import Maze
from .motion import MotionResolver
from .state import Enemy, Player, SessionStatus
from .types import Direction, Position, is_vertical

logger = structlog.get_logger()

# Max distance from the perpendicular axis at which a turn is honoured
TURN_TOLERANCE = 0.4


@dataclass(frozen=True)
class TerminalEvent:
    """Emitted once, on the tick the session ends."""

    status: SessionStatus
    final_score: int


@dataclass
class TickResult:
    """Result of one simulation step."""

    tick_id: int
    status: SessionStatus
    score: int
    mode: EnemyMode
    score_delta: int = 0
    collected: list[Item] = field(default_factory=list)
    mode_switched: bool = False
    terminal_event: TerminalEvent | None = None
    duration_ms: float = 0.0


class SessionSnapshot(BaseModel, frozen=True):
    """Read-only view of a session for presentation layers."""

    tick: int
    status: SessionStatus
    mode: EnemyMode
    score: int
    player: Player
    enemies: tuple[Enemy, ...]
    items: tuple[Item, ...]


class GameSession:
    """
    Owns the player, enemies, items and status for one game.

    Usage:
        session = GameSession.new(maze, "ada", config, rng=random.Random(1))
        session.set_direction(Direction.LEFT)   # from the input layer
        result = session.step()                 # once per frame
    """

    def __init__(
        self,
        maze: Maze,
        player: Player,
        enemies: list[Enemy],
        items: ItemSet,
        mode_interval_ticks: int = 900,
        rng: random.Random | None = None,
    ):
        self.maze = maze
        self.rng = rng or random.Random()
        self.resolver = MotionResolver(maze)
        self.enemy_controller = EnemyController(maze, self.resolver, self.rng)
        self.mode_timer = ModeTimer(interval_ticks=mode_interval_ticks)

        self._player = player
        self._enemies = sorted(enemies, key=lambda e: e.index)
        self._items = items
        self._status = SessionStatus.PLAYING
        self._pending_direction = Direction.NONE
        self._tick = 0

    @classmethod
    def new(
        cls,
        maze: Maze,
        player_name: str,
        config: Config | None = None,
        rng: random.Random | None = None,
    ) -> "GameSession":
        """Start a fresh session: spawn the player, enemies and items."""
        config = config or Config()
        if rng is None:
            rng = random.Random(config.seed)

        spawn = maze.player_spawn()
        player = Player(
            name=player_name,
            position=spawn.to_position(),
            speed=config.gameplay.player_speed,
            lives=config.gameplay.player_lives,
        )
        items = spawn_items(maze, rng)
        enemies = spawn_enemies(
            maze, config.gameplay.enemy_count, config.gameplay.enemy_speed, rng
        )

        logger.info(
            "session_started",
            player=player_name,
            maze=repr(maze),
            enemies=len(enemies),
            items=len(items),
        )

        return cls(
            maze,
            player,
            enemies,
            items,
            mode_interval_ticks=config.timing.mode_switch_interval_ticks,
            rng=rng,
        )

    # --- Accessors ---

    @property
    def player(self) -> Player:
        return self._player

    @property
    def enemies(self) -> list[Enemy]:
        return list(self._enemies)

    @property
    def items(self) -> tuple[Item, ...]:
        """All items, collected or not. Collection only happens inside step()."""
        return tuple(self._items)

    @property
    def score(self) -> int:
        return self._player.score

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def mode(self) -> EnemyMode:
        return self.mode_timer.mode

    @property
    def tick(self) -> int:
        """Number of active ticks processed so far."""
        return self._tick

    @property
    def is_active(self) -> bool:
        return self._status is SessionStatus.PLAYING

    @property
    def pending_direction(self) -> Direction:
        return self._pending_direction

    def uncollected_items(self) -> list[Item]:
        return self._items.uncollected()

    def get_enemy(self, enemy_id: str) -> Enemy:
        """Get enemy by ID.

        Raises:
            EntityNotFoundError: If no enemy has that ID.
        """
        for enemy in self._enemies:
            if enemy.enemy_id == enemy_id:
                return enemy
        raise EntityNotFoundError(f"Enemy {enemy_id} not found")

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            tick=self._tick,
            status=self._status,
            mode=self.mode,
            score=self.score,
            player=self._player,
            enemies=tuple(self._enemies),
            items=tuple(self._items),
        )

    # --- Input ---

    def set_direction(self, direction: Direction) -> None:
        """Record the latest requested player direction (last write wins)."""
        self._pending_direction = direction

    # --- Simulation step ---

    def step(self) -> TickResult:
        """
        Advance the session by one tick.

        Order: mode timer, player turn, player move, each enemy in spawn
        order, item collection. Once the session has ended this is a no-op.
        """
        if not self.is_active:
            return TickResult(
                tick_id=self._tick,
                status=self._status,
                score=self.score,
                mode=self.mode,
            )

        start = time.perf_counter()
        tick_id = self._tick
        result = TickResult(
            tick_id=tick_id,
            status=self._status,
            score=self.score,
            mode=self.mode,
        )

        result.mode_switched = self.mode_timer.advance()
        result.mode = self.mode

        self._resolve_turn()
        self._move_player()
        self._update_enemies(result)

        if self.is_active:
            self._collect_items(result)

        self._tick += 1
        result.status = self._status
        result.score = self.score
        result.duration_ms = (time.perf_counter() - start) * 1000
        return result

    def _resolve_turn(self) -> None:
        """Apply the pending direction if the player is close enough to the turn axis."""
        requested = self._pending_direction
        if requested == Direction.NONE:
            return

        position = self._player.position
        tile = position.tile()
        if self.maze.is_wall_tile(tile.offset(requested)):
            return

        vertical = is_vertical(requested)
        off_axis = abs(position.x - tile.x) if vertical else abs(position.y - tile.y)
        if off_axis >= TURN_TOLERANCE:
            return

        if vertical:
            snapped = Position(x=float(tile.x), y=position.y)
        else:
            snapped = Position(x=position.x, y=float(tile.y))

        self._player = self._player.with_position(snapped).with_direction(requested)
        self._pending_direction = Direction.NONE

    def _move_player(self) -> None:
        player = self._player
        if player.direction == Direction.NONE:
            return
        moved = self.resolver.next_position(player.position, player.direction, player.speed)
        self._player = player.with_position(moved)

    def _update_enemies(self, result: TickResult) -> None:
        player_position = self._player.position
        mode = self.mode

        for i, enemy in enumerate(self._enemies):
            update = self.enemy_controller.update(enemy, player_position, mode)
            self._enemies[i] = update.enemy
            if update.caught_player:
                logger.info(
                    "player_caught",
                    enemy_id=enemy.enemy_id,
                    position=str(update.enemy.position),
                    tick_id=self._tick,
                )
                self._end(SessionStatus.GAME_OVER, result)
                return

    def _collect_items(self, result: TickResult) -> None:
        collection = process_collection_phase(self._items, self._player.position)
        if not collection.collected:
            return

        result.collected = collection.collected
        result.score_delta = collection.score_delta
        self._player = self._player.with_score(self._player.score + collection.score_delta)

        if collection.all_collected:
            self._end(SessionStatus.VICTORY, result)

    def _end(self, status: SessionStatus, result: TickResult) -> None:
        self._status = status
        result.terminal_event = TerminalEvent(status=status, final_score=self.score)
        logger.info(
            "session_ended",
            status=status.value,
            final_score=self.score,
            tick_id=self._tick,
        )
