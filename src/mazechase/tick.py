"""Async fixed-cadence tick loop driving a game session."""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

import structlog

from .session import GameSession, TickResult

logger = structlog.get_logger()


@dataclass
class TickConfig:
    """Configuration for tick loop timing."""

    tick_rate_hz: float = 60.0

    @property
    def tick_duration_ms(self) -> float:
        return 1000.0 / self.tick_rate_hz


# Type aliases for tick callbacks
TickCallback = Callable[[TickResult], Awaitable[None]]
TickStartCallback = Callable[[GameSession], Awaitable[None]]


class TickLoop:
    """
    Steps a session at a fixed cadence until it ends or is stopped.

    Usage:
        loop = TickLoop(session, TickConfig(tick_rate_hz=60))

        # From the input layer, at any time:
        session.set_direction(Direction.UP)

        await loop.run()
    """

    def __init__(
        self,
        session: GameSession,
        config: TickConfig | None = None,
        on_tick_complete: TickCallback | None = None,
        on_tick_start: TickStartCallback | None = None,
    ):
        self.session = session
        self.config = config or TickConfig()
        self.on_tick_complete = on_tick_complete
        self.on_tick_start = on_tick_start

        self._running = False
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        """Whether the tick loop is currently running."""
        return self._running

    async def run(self, max_ticks: int | None = None) -> list[TickResult]:
        """Run until the session ends, max_ticks is reached or stop() is called.

        Returns:
            Results of every tick processed
        """
        self._running = True
        self._stop_event.clear()
        results: list[TickResult] = []

        logger.info("tick_loop_started", tick_rate_hz=self.config.tick_rate_hz)

        try:
            while self._running and self.session.is_active:
                if max_ticks is not None and len(results) >= max_ticks:
                    break

                tick_start = time.time() * 1000

                if self.on_tick_start:
                    await self.on_tick_start(self.session)

                result = self.session.step()
                results.append(result)

                if self.on_tick_complete:
                    await self.on_tick_complete(result)

                if result.terminal_event is not None:
                    break

                # Wait for remainder of tick duration
                elapsed = time.time() * 1000 - tick_start
                remaining = self.config.tick_duration_ms - elapsed
                if remaining > 0:
                    try:
                        await asyncio.wait_for(
                            self._stop_event.wait(), timeout=remaining / 1000
                        )
                    except asyncio.TimeoutError:
                        pass  # Normal - tick duration elapsed

        finally:
            self._running = False
            logger.info("tick_loop_stopped", ticks=len(results))

        return results

    def stop(self) -> None:
        """Signal the tick loop to stop after the current tick."""
        self._running = False
        self._stop_event.set()


async def run_ticks(
    session: GameSession,
    num_ticks: int,
    intent_callback: TickStartCallback | None = None,
    on_tick_complete: TickCallback | None = None,
) -> list[TickResult]:
    """
    Run up to num_ticks back to back, without pacing (useful for testing).

    on_tick_complete runs right after each step, before the next intent,
    so it sees the session as that tick left it. Stops early on the tick
    the session ends.
    """
    results: list[TickResult] = []

    for _ in range(num_ticks):
        if not session.is_active:
            break

        if intent_callback:
            await intent_callback(session)

        result = session.step()
        results.append(result)

        if on_tick_complete:
            await on_tick_complete(result)

    return results
