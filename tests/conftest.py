from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable

import pytest

from turtlecanvas.core.clock import ManualClock
from turtlecanvas.core.engine import Turtle
from turtlecanvas.platform.display.memory_backend import MemorySurface


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    # Keep tests away from the real ~/.turtlecanvas
    home = tmp_path / "home"
    monkeypatch.setenv("TURTLECANVAS_HOME", str(home))
    return home


@pytest.fixture
def surface() -> MemorySurface:
    return MemorySurface(200, 200)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def make_turtle(
    surface: MemorySurface, clock: ManualClock
) -> Callable[..., Turtle]:
    def _make(**kwargs: object) -> Turtle:
        kwargs.setdefault("clock", clock)
        return Turtle(surface, 100, 100, 0.0, True, "#000000", **kwargs)  # type: ignore[arg-type]

    return _make


async def _settle(turns: int = 5) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def settle() -> Callable[..., Awaitable[None]]:
    """Let scheduled callbacks and woken tasks run."""
    return _settle


@pytest.fixture
def drain(clock: ManualClock) -> Callable[[Turtle], Awaitable[None]]:
    """Advance the manual clock until the turtle's timed playback ends."""

    async def _drain(turtle: Turtle, limit: int = 10_000) -> None:
        await _settle()
        for _ in range(limit):
            if not turtle.running:
                return
            nxt = clock.next_due()
            if nxt is not None:
                clock.advance_to(nxt)
            await _settle()
        raise AssertionError("timed playback did not finish")

    return _drain
