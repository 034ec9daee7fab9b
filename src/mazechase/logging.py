"""Parquet logging for session replay."""

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
import structlog

from .session import GameSession, TickResult

logger = structlog.get_logger()


# Parquet schemas for each table
TICK_SCHEMA = pa.schema([
    ("tick_id", pa.int32()),
    ("status", pa.string()),
    ("mode", pa.string()),
    ("mode_switched", pa.bool_()),
    ("score", pa.int32()),
    ("score_delta", pa.int32()),
    ("duration_ms", pa.float64()),
])

ENTITY_STATE_SCHEMA = pa.schema([
    ("tick_id", pa.int32()),
    ("entity_id", pa.string()),
    ("entity_type", pa.string()),  # "player" or "enemy"
    ("x", pa.float64()),
    ("y", pa.float64()),
    ("direction", pa.string()),
])

ITEM_EVENT_SCHEMA = pa.schema([
    ("tick_id", pa.int32()),
    ("item_id", pa.string()),
    ("item_type", pa.string()),
    ("value", pa.int32()),
    ("x", pa.int32()),
    ("y", pa.int32()),
])


class LogWriter:
    """Writes per-tick session data to Parquet files.

    Accumulates rows in memory and writes them on flush or close.
    """

    def __init__(self, run_dir: Path, buffer_size: int = 600):
        """Initialize LogWriter.

        Args:
            run_dir: Directory to write Parquet files to
            buffer_size: Number of ticks to buffer before writing
        """
        self.run_dir = run_dir
        self.buffer_size = buffer_size

        self._tick_data: list[dict] = []
        self._entity_data: list[dict] = []
        self._item_data: list[dict] = []

        self._files_exist = False

    def log_tick(self, result: TickResult, session: GameSession) -> None:
        """Log a completed tick with the entity positions it produced."""
        self._tick_data.append({
            "tick_id": result.tick_id,
            "status": result.status.value,
            "mode": result.mode.value,
            "mode_switched": result.mode_switched,
            "score": result.score,
            "score_delta": result.score_delta,
            "duration_ms": result.duration_ms,
        })

        player = session.player
        self._entity_data.append({
            "tick_id": result.tick_id,
            "entity_id": player.name,
            "entity_type": "player",
            "x": player.position.x,
            "y": player.position.y,
            "direction": player.direction.name,
        })
        for enemy in session.enemies:
            self._entity_data.append({
                "tick_id": result.tick_id,
                "entity_id": enemy.enemy_id,
                "entity_type": "enemy",
                "x": enemy.position.x,
                "y": enemy.position.y,
                "direction": enemy.direction.name,
            })

        for item in result.collected:
            self._item_data.append({
                "tick_id": result.tick_id,
                "item_id": item.item_id,
                "item_type": item.item_type.value,
                "value": item.value,
                "x": int(item.position.x),
                "y": int(item.position.y),
            })

        if len(self._tick_data) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to Parquet files."""
        if not self._tick_data:
            return

        self._write_parquet("ticks.parquet", TICK_SCHEMA, self._tick_data)
        self._write_parquet("entity_state.parquet", ENTITY_STATE_SCHEMA, self._entity_data)
        self._write_parquet("item_events.parquet", ITEM_EVENT_SCHEMA, self._item_data)

        self._tick_data.clear()
        self._entity_data.clear()
        self._item_data.clear()

        self._files_exist = True
        logger.debug("log_flushed", run_dir=str(self.run_dir))

    def close(self) -> None:
        """Flush remaining data and finalize files."""
        self.flush()
        logger.info("log_writer_closed", run_dir=str(self.run_dir))

    def _write_parquet(self, filename: str, schema: pa.Schema, data: list[dict]) -> None:
        """Write data to a Parquet file, appending if it exists."""
        if not data:
            return

        filepath = self.run_dir / filename
        table = pa.Table.from_pylist(data, schema=schema)

        if self._files_exist and filepath.exists():
            existing = pq.read_table(filepath)
            table = pa.concat_tables([existing, table])

        pq.write_table(table, filepath)
