"""Run management for session replay logging."""

import json
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path


@dataclass
class RunMetadata:
    """Metadata for one recorded session."""

    run_id: str
    started_at: str
    config_name: str
    player_name: str
    maze_width: int
    maze_height: int
    tick_rate_hz: float
    seed: int | None = None
    enemy_ids: list[str] = field(default_factory=list)
    item_count: int = 0
    schema_version: int = 1


class RunManager:
    """Manages run directories and their meta.json."""

    def __init__(self, base_dir: Path | str = "runs"):
        self.base_dir = Path(base_dir)
        self._run_id: str | None = None
        self._run_dir: Path | None = None
        self._metadata: RunMetadata | None = None

    @property
    def run_id(self) -> str | None:
        """Current run ID, or None if not started."""
        return self._run_id

    @property
    def run_dir(self) -> Path | None:
        """Current run directory, or None if not started."""
        return self._run_dir

    def start_run(
        self,
        config_name: str,
        player_name: str,
        maze_width: int,
        maze_height: int,
        tick_rate_hz: float,
        seed: int | None,
        enemy_ids: list[str],
        item_count: int,
    ) -> str:
        """Start a new run and create the run directory.

        Returns:
            The generated run_id
        """
        self._run_id = self._generate_run_id()
        self._run_dir = self.base_dir / self._run_id
        self._run_dir.mkdir(parents=True, exist_ok=True)

        self._metadata = RunMetadata(
            run_id=self._run_id,
            started_at=datetime.now(timezone.utc).isoformat(),
            config_name=config_name,
            player_name=player_name,
            maze_width=maze_width,
            maze_height=maze_height,
            tick_rate_hz=tick_rate_hz,
            seed=seed,
            enemy_ids=enemy_ids,
            item_count=item_count,
        )

        self._write_metadata()
        return self._run_id

    def end_run(self, final_tick: int, status: str, final_score: int) -> None:
        """Record how the run ended in meta.json."""
        if self._run_dir is None or self._metadata is None:
            return

        meta_path = self._run_dir / "meta.json"
        with open(meta_path) as f:
            meta_dict = json.load(f)

        meta_dict["ended_at"] = datetime.now(timezone.utc).isoformat()
        meta_dict["final_tick"] = final_tick
        meta_dict["status"] = status
        meta_dict["final_score"] = final_score

        with open(meta_path, "w") as f:
            json.dump(meta_dict, f, indent=2)

    def _generate_run_id(self) -> str:
        """Generate a unique run ID.

        Format: YYYYMMDD_HHMMSS_<short-uuid>
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{timestamp}_{short_uuid}"

    def _write_metadata(self) -> None:
        if self._run_dir is None or self._metadata is None:
            return

        with open(self._run_dir / "meta.json", "w") as f:
            json.dump(asdict(self._metadata), f, indent=2)
