"""CLI entry point: run one headless session driven by the autopilot."""

import argparse
import asyncio
import random
from pathlib import Path

import structlog

from .autopilot import Autopilot
from .config import Config, config_to_maze, find_config, load_config
from .logging import LogWriter
from .run_manager import RunManager
from .session import GameSession, TickResult
from .tick import TickConfig, TickLoop, run_ticks


async def run_session(
    config: Config,
    config_name: str,
    player_name: str,
    max_ticks: int,
    log_dir: Path | None,
    realtime: bool,
) -> list[TickResult]:
    """Build a session from config and run it to completion or max_ticks."""
    logger = structlog.get_logger()

    maze = config_to_maze(config)
    rng = random.Random(config.seed)
    session = GameSession.new(maze, player_name, config, rng=rng)
    autopilot = Autopilot(rng=random.Random(rng.random()))

    run_manager: RunManager | None = None
    log_writer: LogWriter | None = None
    if log_dir is not None:
        run_manager = RunManager(base_dir=log_dir)
        run_id = run_manager.start_run(
            config_name=config_name,
            player_name=player_name,
            maze_width=maze.width,
            maze_height=maze.height,
            tick_rate_hz=config.timing.tick_rate_hz,
            seed=config.seed,
            enemy_ids=[e.enemy_id for e in session.enemies],
            item_count=len(session.items),
        )
        log_writer = LogWriter(run_manager.run_dir)
        logger.info("logging_started", run_id=run_id)

    async def on_tick_complete(result: TickResult) -> None:
        if log_writer is not None:
            log_writer.log_tick(result, session)

    try:
        if realtime:
            loop = TickLoop(
                session,
                TickConfig(tick_rate_hz=config.timing.tick_rate_hz),
                on_tick_complete=on_tick_complete,
                on_tick_start=autopilot,
            )
            results = await loop.run(max_ticks=max_ticks)
        else:
            results = await run_ticks(
                session,
                max_ticks,
                intent_callback=autopilot,
                on_tick_complete=on_tick_complete,
            )
    finally:
        if log_writer is not None:
            log_writer.close()
        if run_manager is not None:
            run_manager.end_run(
                final_tick=session.tick,
                status=session.status.value,
                final_score=session.score,
            )

    return results


def main() -> None:
    """Run a headless maze-chase session."""
    parser = argparse.ArgumentParser(
        description="Maze chase simulation - runs one session with a scripted player"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a TOML config file (default: built-in defaults)",
    )
    parser.add_argument("--name", type=str, default="player", help="Player name")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (overrides config)"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=36000,
        help="Stop after this many ticks (default: 36000, ten minutes at 60 Hz)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for Parquet replay logs (disabled if omitted)",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pace ticks at the configured tick rate instead of running flat out",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
    )

    logger = structlog.get_logger()

    config_name = "default"
    if args.config:
        try:
            config_path = find_config(args.config)
        except FileNotFoundError:
            logger.error("config_not_found", path=args.config)
            raise SystemExit(1)
        config = load_config(config_path)
        config_name = config_path.stem
        logger.info("config_loaded", path=str(config_path))
    else:
        config = Config()
        logger.info("using_default_config")

    if args.seed is not None:
        config.seed = args.seed

    results = asyncio.run(
        run_session(
            config,
            config_name=config_name,
            player_name=args.name,
            max_ticks=args.max_ticks,
            log_dir=Path(args.log_dir) if args.log_dir else None,
            realtime=args.realtime,
        )
    )

    final = results[-1] if results else None
    if final is None:
        print("No ticks were run")
        return

    print(f"Ticks: {len(results)}")
    print(f"Status: {final.status.value}")
    print(f"Score: {final.score}")


if __name__ == "__main__":
    main()
