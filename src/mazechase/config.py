"""Game configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .maze import Maze

# 19x13 default maze. All path cells are connected; the four scatter
# corners (1,1), (17,1), (1,11), (17,11) are open.
DEFAULT_LAYOUT: list[str] = [
    "###################",
    "#........#........#",
    "#.##.###.#.###.##.#",
    "#.................#",
    "#.##.#.#####.#.##.#",
    "#....#...#...#....#",
    "####.###.#.###.####",
    "#.......EEE.......#",
    "#.##.#.#####.#.##.#",
    "#....#...P...#....#",
    "#.##.###.#.###.##.#",
    "#........#........#",
    "###################",
]


class MazeConfig(BaseModel):
    """Maze layout from TOML (``.`` path, ``#`` wall, ``E``/``P`` spawns)."""

    layout: list[str] = Field(default_factory=lambda: list(DEFAULT_LAYOUT))


class GameplayConfig(BaseModel):
    """Entity tuning, in tiles per tick."""

    player_speed: float = Field(default=0.1, gt=0)
    enemy_speed: float = Field(default=0.08, gt=0)
    enemy_count: int = Field(default=4, ge=0)
    player_lives: int = Field(default=3, ge=0)


class TimingConfig(BaseModel):
    """Tick cadence and enemy mode timing."""

    tick_rate_hz: int = Field(default=60, gt=0)
    mode_switch_interval_s: float = Field(default=15.0, gt=0)

    @property
    def mode_switch_interval_ticks(self) -> int:
        return max(1, round(self.mode_switch_interval_s * self.tick_rate_hz))


class Config(BaseModel):
    """Complete configuration for a game session."""

    seed: int | None = None
    maze: MazeConfig = Field(default_factory=MazeConfig)
    gameplay: GameplayConfig = Field(default_factory=GameplayConfig)
    timing: TimingConfig = Field(default_factory=TimingConfig)


def load_config(config_path: Path) -> Config:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return Config.model_validate(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def config_to_maze(config: Config) -> Maze:
    """Build the maze described by config.

    Raises:
        InvalidLayoutError: If the layout is ragged, empty or has unknown characters.
    """
    return Maze.from_layout(config.maze.layout)
