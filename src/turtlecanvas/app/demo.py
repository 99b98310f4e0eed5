"""Demo turtle programs and the async application entry.

Each program records its commands onto a :class:`Turtle`; ``main_async``
then builds the surface, plays the recording back (instantly or paced) and
optionally saves the result.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Callable, Dict, Optional

from turtlecanvas.config import RuntimeConfig, make_runtime_config
from turtlecanvas.core.engine import Turtle
from turtlecanvas.platform.display.memory_backend import MemorySurface
from turtlecanvas.platform.display.pygame_backend import PygameDisplayBackend
from turtlecanvas.render.surface import DrawingSurface

logger = logging.getLogger(__name__)

_FRAME_INTERVAL_S = 1.0 / 30.0


def rosette(t: Turtle) -> None:
    """36 hue-shifted petals, each an arc of 36 short steps."""
    t.set_width(8)
    for i in range(36):
        t.set_color(f"hsl({10 * i}, 100%, 50%)")
        t.restore_position()
        t.rotate_clockwise(10)
        t.save_position()
        for _ in range(36):
            t.move_forward(5)
            t.rotate_clockwise(3)


def square(t: Turtle, side: float = 150.0) -> None:
    t.set_width(4)
    for _ in range(4):
        t.move_forward(side)
        t.rotate_clockwise(90)


def star(t: Turtle, size: float = 200.0) -> None:
    t.set_pen_down(False)
    t.move_backward(size / 2)
    t.rotate_counter_clockwise(18)
    t.set_pen_down(True)
    t.set_width(3)
    t.set_color("#d4a017")
    for _ in range(5):
        t.move_forward(size)
        t.rotate_clockwise(144)


PROGRAMS: Dict[str, Callable[[Turtle], None]] = {
    "rosette": rosette,
    "square": square,
    "star": star,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    """
    p = argparse.ArgumentParser(description="turtlecanvas demo player")
    p.add_argument(
        "--program",
        choices=sorted(PROGRAMS),
        default="rosette",
        help="Demo program to record and play (default: rosette)",
    )
    p.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Playback speed in steps per second (default from settings)",
    )
    p.add_argument(
        "--instant",
        action="store_true",
        help="Replay every step at once instead of pacing them",
    )
    p.add_argument(
        "--headless",
        action="store_true",
        help="Do not open a window (SDL dummy driver)",
    )
    p.add_argument(
        "--backend",
        choices=("pygame", "memory"),
        default="pygame",
        help="Drawing surface implementation (default: pygame)",
    )
    p.add_argument("--width", type=int, default=None, help="Canvas width in px")
    p.add_argument("--height", type=int, default=None, help="Canvas height in px")
    p.add_argument("--background", type=str, default=None, help="Canvas color")
    p.add_argument("--color", type=str, default=None, help="Initial pen color")
    p.add_argument(
        "--pen-width",
        dest="pen_width",
        type=float,
        default=None,
        help="Initial pen width in px",
    )
    p.add_argument(
        "--hide-turtle",
        dest="hide_turtle",
        action="store_true",
        help="Do not draw the turtle glyph",
    )
    p.add_argument(
        "--output",
        type=str,
        default=None,
        help="Save the final drawing as PNG (pygame backend only)",
    )
    p.add_argument(
        "--history",
        action="store_true",
        help="Log the recorded command queue before playback",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def _make_surface(
    args: argparse.Namespace, cfg: RuntimeConfig
) -> tuple[DrawingSurface, Optional[PygameDisplayBackend]]:
    if args.backend == "memory":
        return MemorySurface(cfg.width, cfg.height), None
    if args.headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    backend = PygameDisplayBackend(
        (cfg.width, cfg.height),
        background=cfg.background,
        create_window=not args.headless,
    )
    return backend.surface, backend


def _present(backend: Optional[PygameDisplayBackend]) -> bool:
    if backend is None:
        return True
    alive = backend.pump_events()
    backend.end_frame()
    return alive


async def main_async(args: argparse.Namespace) -> None:
    cfg = make_runtime_config(args=args)
    surface, backend = _make_surface(args, cfg)
    turtle = Turtle(
        surface,
        color=cfg.pen_color,
        width=cfg.pen_width,
        indicator=cfg.indicator,
        show_indicator=cfg.show_indicator,
    )
    PROGRAMS[args.program](turtle)
    logger.info("Recorded %d steps for %r", len(turtle.commands), args.program)
    if args.history:
        turtle.show_history()

    try:
        if args.instant:
            turtle.run_all()
        else:
            if not turtle.run_step_by_step(cfg.steps_per_second):
                return
            # Ends on completion or when a step raises
            while turtle.running:
                if not _present(backend):
                    turtle.cancel()
                    return
                await asyncio.sleep(_FRAME_INTERVAL_S)
            await turtle.wait()

        if backend is None:
            if args.output:
                logger.warning("--output needs the pygame backend; not saved")
            return
        _present(backend)
        if args.output:
            backend.save_png(args.output)
            logger.info("Saved drawing to %s", args.output)
        if not args.headless:
            # Keep the finished drawing on screen until the window is closed
            while _present(backend):
                await asyncio.sleep(_FRAME_INTERVAL_S)
    finally:
        if backend is not None:
            backend.close()
