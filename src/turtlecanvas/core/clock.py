"""Clock abstraction used to pace timed playback.

A :class:`Clock` supplies monotonic time and an awaitable ``sleep``. The
application uses :class:`RealClock`; tests inject :class:`ManualClock` and
advance it explicitly so timed playback becomes deterministic.

Manual clock usage:
    clock = ManualClock()
    task = asyncio.create_task(clock.sleep(0.5))
    clock.advance(0.5)  # wakes the sleeper
    await task
"""

from __future__ import annotations

import asyncio
import heapq
import time
from typing import Protocol

__all__ = [
    "Clock",
    "RealClock",
    "ManualClock",
]


class Clock(Protocol):
    def monotonic(self) -> float:
        """Return monotonic time in seconds."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the caller for ``seconds``."""
        ...


class RealClock:
    """System monotonic clock backed by :func:`asyncio.sleep`."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ManualClock:
    """Clock that only moves when told to.

    Sleepers are kept in a heap ordered by due time and are woken by
    :meth:`advance` or :meth:`advance_to`. Nothing polls.
    """

    def __init__(self, *, start: float = 0.0) -> None:
        self._now: float = float(start)
        # (due, seq, future); seq keeps ordering stable for equal due times
        self._sleepers: list[tuple[float, int, asyncio.Future[None]]] = []
        self._seq: int = 0

    def monotonic(self) -> float:
        return self._now

    def advance(self, dt: float) -> None:
        """Move time forward by ``dt`` seconds.

        Raises:
            ValueError: If ``dt`` is negative.
        """
        if dt < 0:
            raise ValueError(f"Cannot advance clock backwards: dt={dt}")
        self._now += dt
        self._wake()

    def advance_to(self, t: float) -> None:
        """Set absolute time (forward only).

        Raises:
            ValueError: If ``t`` is earlier than the current time.
        """
        if t < self._now:
            raise ValueError(f"Cannot move clock backwards: {t} < {self._now}")
        self._now = t
        self._wake()

    async def sleep(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Sleep duration must be non-negative: {seconds}")
        if seconds == 0:
            await asyncio.sleep(0)
            return

        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._seq += 1
        heapq.heappush(self._sleepers, (self._now + seconds, self._seq, fut))
        await fut

    def next_due(self) -> float | None:
        """Return the due time of the earliest pending sleeper, if any."""
        while self._sleepers and self._sleepers[0][2].done():
            # Cancelled sleepers leave finished futures behind
            heapq.heappop(self._sleepers)
        if not self._sleepers:
            return None
        return self._sleepers[0][0]

    def pending(self) -> int:
        return sum(1 for _, _, fut in self._sleepers if not fut.done())

    def _wake(self) -> None:
        while self._sleepers and self._sleepers[0][0] <= self._now:
            _due, _seq, fut = heapq.heappop(self._sleepers)
            if not fut.done():
                fut.set_result(None)
