"""Tests for Parquet replay logging and run metadata."""

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from conftest import ScriptedRandom
from mazechase.__main__ import run_session
from mazechase.config import find_config, load_config
from mazechase.items import Item, ItemSet, ItemType
from mazechase.logging import LogWriter
from mazechase.maze import Maze
from mazechase.run_manager import RunManager
from mazechase.session import GameSession
from mazechase.state import Enemy, Player
from mazechase.types import Direction, Position


@pytest.fixture
def session(corridor_maze: Maze) -> GameSession:
    """Player walking right toward two pills, one enemy parked at the far end."""
    player = Player(
        name="ada",
        position=Position(x=1.0, y=1.0),
        direction=Direction.RIGHT,
        speed=0.1,
    )
    enemy = Enemy(
        enemy_id="enemy-0",
        index=0,
        position=Position(x=5.0, y=1.0),
        direction=Direction.NONE,
        speed=0.0001,
    )
    items = ItemSet([
        Item.create("item-0", ItemType.PILL, Position(x=1.0, y=1.0)),
        Item.create("item-1", ItemType.PILL, Position(x=3.0, y=1.0)),
    ])
    return GameSession(corridor_maze, player, [enemy], items, rng=ScriptedRandom())


class TestLogWriter:
    """Tests for LogWriter."""

    def test_writes_tables(self, tmp_path: Path, session: GameSession):
        writer = LogWriter(tmp_path)
        for _ in range(3):
            writer.log_tick(session.step(), session)
        writer.close()

        ticks = pq.read_table(tmp_path / "ticks.parquet")
        entities = pq.read_table(tmp_path / "entity_state.parquet")
        item_events = pq.read_table(tmp_path / "item_events.parquet")

        assert ticks.num_rows == 3
        assert entities.num_rows == 6
        assert item_events.num_rows == 1
        assert item_events.column("item_id").to_pylist() == ["item-0"]
        assert ticks.column("score").to_pylist() == [10, 10, 10]

    def test_flush_appends(self, tmp_path: Path, session: GameSession):
        """Small buffers flush repeatedly into the same files."""
        writer = LogWriter(tmp_path, buffer_size=2)
        for _ in range(5):
            writer.log_tick(session.step(), session)
        writer.close()

        ticks = pq.read_table(tmp_path / "ticks.parquet")
        assert ticks.column("tick_id").to_pylist() == [0, 1, 2, 3, 4]

    def test_close_without_ticks_writes_nothing(self, tmp_path: Path):
        LogWriter(tmp_path).close()
        assert not (tmp_path / "ticks.parquet").exists()


class TestRunManager:
    """Tests for RunManager."""

    def test_start_and_end_run(self, tmp_path: Path):
        manager = RunManager(base_dir=tmp_path)
        run_id = manager.start_run(
            config_name="small",
            player_name="ada",
            maze_width=9,
            maze_height=5,
            tick_rate_hz=60,
            seed=7,
            enemy_ids=["enemy-0", "enemy-1"],
            item_count=12,
        )

        assert manager.run_dir == tmp_path / run_id
        meta = json.loads((manager.run_dir / "meta.json").read_text())
        assert meta["player_name"] == "ada"
        assert meta["enemy_ids"] == ["enemy-0", "enemy-1"]
        assert "ended_at" not in meta

        manager.end_run(final_tick=120, status="VICTORY", final_score=140)

        meta = json.loads((manager.run_dir / "meta.json").read_text())
        assert meta["final_tick"] == 120
        assert meta["status"] == "VICTORY"
        assert meta["final_score"] == 140
        assert "ended_at" in meta

    def test_end_without_start_is_noop(self, tmp_path: Path):
        RunManager(base_dir=tmp_path).end_run(final_tick=0, status="PLAYING", final_score=0)
        assert list(tmp_path.iterdir()) == []


class TestRunSession:
    """End-to-end headless run with logging."""

    @pytest.mark.asyncio
    async def test_small_config_run(self, tmp_path: Path):
        config = load_config(find_config("small"))

        results = await run_session(
            config,
            config_name="small",
            player_name="ada",
            max_ticks=500,
            log_dir=tmp_path,
            realtime=False,
        )

        assert 0 < len(results) <= 500
        (run_dir,) = list(tmp_path.iterdir())
        meta = json.loads((run_dir / "meta.json").read_text())
        assert meta["config_name"] == "small"
        assert meta["final_tick"] == len(results)
        assert meta["status"] == results[-1].status.value
        assert meta["final_score"] == results[-1].score

        ticks = pq.read_table(run_dir / "ticks.parquet")
        assert ticks.num_rows == len(results)

    @pytest.mark.asyncio
    async def test_run_is_reproducible(self):
        config = load_config(find_config("small"))

        async def play():
            results = await run_session(
                config,
                config_name="small",
                player_name="ada",
                max_ticks=300,
                log_dir=None,
                realtime=False,
            )
            return [(r.status, r.score) for r in results]

        assert await play() == await play()

    @pytest.mark.asyncio
    async def test_entity_rows_follow_each_tick(self, tmp_path: Path):
        """Player rows record the position of their own tick, not the final one."""
        config = load_config(find_config("small"))

        results = await run_session(
            config,
            config_name="small",
            player_name="ada",
            max_ticks=200,
            log_dir=tmp_path,
            realtime=False,
        )

        (run_dir,) = list(tmp_path.iterdir())
        rows = pq.read_table(run_dir / "entity_state.parquet").to_pylist()
        player_rows = [row for row in rows if row["entity_type"] == "player"]

        assert [row["tick_id"] for row in player_rows] == [r.tick_id for r in results]
        assert len({(row["x"], row["y"]) for row in player_rows}) > 1
