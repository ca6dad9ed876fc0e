# Area: Session
"""
trivia_client._session.timer — Local countdown synchronized to the coordinator
==============================================================================

The coordinator owns the real question deadline. Between its pushes the
client runs a local once-per-second countdown so the remaining time can be
shown and used to gate answers.

Rules:
- ``sync()`` is the only way to raise ``time_left``; it always cancels the
  running countdown before seeding a new one.
- A tick decrements by exactly 1 and stops at 0. It never restarts itself.
- At most one countdown task exists at any moment. Every task carries a
  generation number, and a task whose generation is stale never touches
  ``time_left`` even if it wakes after being replaced.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger("trivia_client.session.timer")

TickCallback = Callable[[int], None]


class CountdownTimer:
    """
    Owned countdown handle for one session.

    Attributes:
        time_left: Current remaining seconds (authoritative seed minus ticks)
        interval: Seconds between ticks
    """

    def __init__(
        self,
        initial: int = 10,
        interval: float = 1.0,
        on_tick: Optional[TickCallback] = None,
    ) -> None:
        self.initial = initial
        self.interval = interval
        self.time_left = initial
        self._on_tick = on_tick
        self._task: Optional[asyncio.Task] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sync(self, value: int, run: bool = True) -> None:
        """
        Apply an authoritative remaining time.

        Cancels the current countdown, seeds ``time_left`` with ``value``
        (floored at 0) and, if ``run`` is set, starts a new countdown.
        Must be called from inside the running event loop when ``run`` is set.
        """
        self.cancel()
        self.time_left = max(0, int(value))
        logger.debug("Timer synced to %ds (run=%s)", self.time_left, run)
        if run:
            self.start()

    def start(self) -> None:
        """Start counting down from the current value. No-op if running or at 0."""
        if self.running or self.time_left <= 0:
            return
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(
            self._countdown(self._generation)
        )

    def cancel(self) -> None:
        """Cancel the running countdown. Idempotent."""
        self._generation += 1
        if self._task is not None:
            if not self._task.done():
                self._task.cancel()
                logger.debug("Countdown cancelled at %ds", self.time_left)
            self._task = None

    def reset(self, initial: Optional[int] = None) -> None:
        """Cancel and restore the configured initial value."""
        self.cancel()
        if initial is not None:
            self.initial = initial
        self.time_left = self.initial

    async def _countdown(self, generation: int) -> None:
        while self.time_left > 0:
            await asyncio.sleep(self.interval)
            if generation != self._generation:
                return
            self.time_left = max(0, self.time_left - 1)
            if self._on_tick is not None:
                self._on_tick(self.time_left)
        logger.debug("Countdown reached 0")
