from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

import pytest

from turtlecanvas import __version__, cli
from turtlecanvas.app import demo
from turtlecanvas.core.commands import CommandKind
from turtlecanvas.core.engine import Turtle
from turtlecanvas.platform.display.memory_backend import MemorySurface

pytestmark = pytest.mark.usefixtures("isolated_home")


def test_cli_parse_args() -> None:
    args = cli.parse_args(["--headless", "--program", "star", "--rate", "20"])
    assert args.headless is True
    assert args.program == "star"
    assert args.rate == 20.0
    assert args.instant is False
    assert args.backend == "pygame"


def test_cli_rejects_unknown_program() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["--program", "spiral"])


def test_rosette_program_shape() -> None:
    t = Turtle(MemorySurface(400, 400))
    demo.rosette(t)
    kinds = [c.kind for c in t.commands]
    assert kinds[0] is CommandKind.SET_WIDTH
    assert kinds.count(CommandKind.MOVE_FORWARD) == 36 * 36
    assert kinds.count(CommandKind.SAVE_POSITION) == 36


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--version"])
    assert __version__ in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_instant_memory_backend(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="turtlecanvas"):
        await cli.run_async(
            ["--backend", "memory", "--instant", "--program", "square", "--history"]
        )
    assert "Recorded 9 steps for 'square'" in caplog.text
    assert "move_forward(150.0)" in caplog.text


@pytest.mark.asyncio
async def test_run_timed_memory_backend() -> None:
    await cli.run_async(
        ["--backend", "memory", "--program", "square", "--rate", "1000"]
    )


@pytest.mark.asyncio
async def test_run_invalid_rate_returns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="turtlecanvas.core.engine"):
        await cli.run_async(["--backend", "memory", "--rate", "0"])
    assert "greater than 0" in caplog.text


@pytest.mark.asyncio
async def test_headless_pygame_saves_png(tmp_path: Path) -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    out = tmp_path / "star.png"
    await cli.run_async(
        ["--headless", "--instant", "--program", "star", "--output", str(out)]
    )
    assert out.exists() and out.stat().st_size > 0


@pytest.mark.asyncio
async def test_failing_step_ends_timed_run(caplog: pytest.LogCaptureFixture) -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    argv = ["--headless", "--program", "square", "--rate", "1000", "--color", "bogus"]
    with caplog.at_level(logging.ERROR, logger="turtlecanvas.core.engine"):
        with pytest.raises(ValueError, match="invalid color"):
            await asyncio.wait_for(cli.run_async(argv), timeout=5.0)
    assert "Playback failed" in caplog.text
