"""Turtle engine: recorded commands replayed onto a drawing surface.

Pose and pen methods behave differently depending on the engine state:

- while idle, each call is appended to the command queue as a
  :class:`~turtlecanvas.core.commands.DeferredCommand` and nothing is drawn;
- while a playback is executing, the same calls mutate the pose and draw.

Playback is either instant (:meth:`Turtle.run_all`) or paced
(:meth:`Turtle.run_step_by_step`), the latter running as an asyncio task
timed by an injected :class:`~turtlecanvas.core.clock.Clock`.

Usage example:

    turtle = Turtle(surface, 100, 100)
    turtle.set_width(3)
    for _ in range(4):
        turtle.move_forward(50)
        turtle.rotate_clockwise(90)
    turtle.run_all()

The turtle glyph is kept off the permanent drawing with a snapshot of the
surface: the snapshot is taken after every permanent stroke and restored
before the glyph is redrawn.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Sequence, cast

from turtlecanvas.render.indicator import draw_indicator
from turtlecanvas.render.surface import DrawingSurface, Snapshot
from turtlecanvas.settings.values import INDICATOR_STYLE, IndicatorStyle

from .clock import Clock, RealClock
from .commands import CommandKind, DeferredCommand
from .geometry import Vector2, degrees_to_radians, radians_to_degrees, rotate

__all__ = [
    "EngineState",
    "PlaybackRejection",
    "Pose",
    "PenState",
    "Turtle",
]

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    IDLE = "idle"
    RUNNING_SYNC = "running_sync"
    RUNNING_TIMED = "running_timed"


class PlaybackRejection(str, Enum):
    """Why a playback request was refused."""

    INVALID_RATE = "invalid_rate"
    ALREADY_RUNNING = "already_running"


@dataclass(frozen=True, slots=True)
class Pose:
    position: Vector2
    heading: float  # radians


@dataclass(slots=True)
class PenState:
    down: bool
    color: str
    width: float


class Turtle:
    """Pen with a pose that records, then replays, drawing commands."""

    def __init__(
        self,
        surface: DrawingSurface,
        x: float | None = None,
        y: float | None = None,
        heading_deg: float = 0.0,
        pen_down: bool = True,
        color: str = "#000000",
        *,
        width: float = 1.0,
        clock: Clock | None = None,
        indicator: IndicatorStyle = INDICATOR_STYLE,
        show_indicator: bool = True,
    ) -> None:
        """Create a turtle on ``surface``.

        Args:
            surface: Drawing surface the turtle paints on
            x, y: Start position; each defaults to the surface center
            heading_deg: Start heading in degrees (0 points up the screen)
            pen_down: Whether moves draw initially
            color: Initial pen color
            width: Initial pen width in pixels
            clock: Clock pacing timed playback (RealClock by default)
            indicator: Glyph geometry and paint
            show_indicator: Whether the glyph is drawn initially
        """
        if x is None or y is None:
            w, h = surface.size()
            x = w / 2.0 if x is None else x
            y = h / 2.0 if y is None else y

        self._surface = surface
        self._clock: Clock = clock if clock is not None else RealClock()
        self._style = indicator

        self._start = Pose(Vector2(float(x), float(y)), degrees_to_radians(heading_deg))
        self._start_pen = PenState(bool(pen_down), str(color), float(width))

        self._position = self._start.position
        self._heading = self._start.heading
        self._pen = replace(self._start_pen)
        self._saved = self._start

        self._commands: list[DeferredCommand] = []
        self._state = EngineState.IDLE
        self._task: asyncio.Task[None] | None = None
        self.last_rejection: PlaybackRejection | None = None

        self._show = bool(show_indicator)
        self._snapshotting = True
        self._snapshot: Snapshot = surface.snapshot()
        self._draw_indicator()

    # Queries ---------------------------------------------------------------
    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def executing(self) -> bool:
        return self._state is not EngineState.IDLE

    @property
    def running(self) -> bool:
        """True while a timed playback is active."""
        return self._state is EngineState.RUNNING_TIMED

    @property
    def position(self) -> Vector2:
        return self._position

    @property
    def heading(self) -> float:
        """Live heading in radians."""
        return self._heading

    @property
    def pen(self) -> PenState:
        return replace(self._pen)

    @property
    def visible(self) -> bool:
        return self._show

    @property
    def start_pose(self) -> Pose:
        return self._start

    @property
    def saved_pose(self) -> Pose:
        return self._saved

    @property
    def commands(self) -> Sequence[DeferredCommand]:
        return tuple(self._commands)

    def get_heading_degrees(self) -> float:
        return radians_to_degrees(self._heading)

    def show_history(self) -> list[dict[str, Any]]:
        """Log the recorded queue and return it as plain dicts.

        Diagnostic only; the returned rows are a copy.
        """
        logger.info("Recorded %d command(s)", len(self._commands))
        for i, cmd in enumerate(self._commands):
            logger.info("%5d  %s", i, cmd)
        return [cmd.to_dict() for cmd in self._commands]

    # Recorded operations ---------------------------------------------------
    def move_forward(self, distance: float) -> None:
        if self._recorded(CommandKind.MOVE_FORWARD, float(distance)):
            return
        self._do_move_forward(float(distance))

    def move_backward(self, distance: float) -> None:
        self.move_forward(-distance)

    def move_to(self, x: float, y: float) -> None:
        """Jump to absolute coordinates without drawing."""
        self.move_to_point(Vector2(float(x), float(y)))

    def move_to_point(self, point: Vector2) -> None:
        """Jump to ``point`` without drawing."""
        if self._recorded(CommandKind.MOVE_TO, point):
            return
        self._do_move_to(point)

    def rotate_clockwise(self, degrees: float) -> None:
        if self._recorded(CommandKind.ROTATE_CLOCKWISE, float(degrees)):
            return
        self._do_rotate(degrees_to_radians(float(degrees)))

    def rotate_counter_clockwise(self, degrees: float) -> None:
        if self._recorded(CommandKind.ROTATE_COUNTER_CLOCKWISE, float(degrees)):
            return
        self._do_rotate(-degrees_to_radians(float(degrees)))

    def set_heading(self, degrees: float) -> None:
        if self._recorded(CommandKind.SET_HEADING, float(degrees)):
            return
        self._do_set_heading(degrees_to_radians(float(degrees)))

    def set_pen_down(self, down: bool) -> None:
        if self._recorded(CommandKind.SET_PEN_DOWN, bool(down)):
            return
        self._pen.down = bool(down)

    def set_color(self, color: str) -> None:
        if self._recorded(CommandKind.SET_COLOR, str(color)):
            return
        self._pen.color = str(color)

    def set_width(self, width: float) -> None:
        if self._recorded(CommandKind.SET_WIDTH, float(width)):
            return
        self._pen.width = float(width)

    def save_position(self) -> None:
        if self._recorded(CommandKind.SAVE_POSITION):
            return
        self._saved = Pose(self._position, self._heading)

    def restore_position(self) -> None:
        if self._recorded(CommandKind.RESTORE_POSITION):
            return
        self._position = self._saved.position
        self._heading = self._saved.heading

    # Immediate operations --------------------------------------------------
    def hide(self) -> None:
        self._show = False
        self._restore()

    def show(self) -> None:
        self._show = True
        self._draw_indicator()

    def reset(self) -> None:
        self.reset_actions()
        self.reset_canvas()
        self.reset_turtle()

    def reset_actions(self) -> None:
        self._commands.clear()

    def reset_canvas(self) -> None:
        w, h = self._surface.size()
        self._surface.clear_rect(0, 0, w, h)
        self._save()
        self._draw_indicator()

    def reset_turtle(self) -> None:
        self._position = self._start.position
        self._heading = self._start.heading
        self._draw_indicator()

    # Playback --------------------------------------------------------------
    def run_all(self) -> bool:
        """Replay the whole queue synchronously.

        The glyph and snapshotting are suspended during the replay and the
        glyph is drawn once at the end. The queue is kept, so calling this
        again replays the same program from the start pose.

        Returns:
            False if a playback is already active, True otherwise
        """
        if self._state is not EngineState.IDLE:
            self._reject(
                PlaybackRejection.ALREADY_RUNNING,
                "Turtle is already running; cannot replay all steps now",
            )
            return False
        self.last_rejection = None

        started = self._clock.monotonic()
        show = self._show
        # Lift the glyph off before drawing without snapshots
        self._restore()
        self._begin_playback(EngineState.RUNNING_SYNC)
        self._show = False
        self._snapshotting = False
        try:
            for cmd in list(self._commands):
                self._execute(cmd)
        finally:
            self._snapshotting = True
            self._show = show
            self._state = EngineState.IDLE
            self._save()
            self._draw_indicator()

        n = len(self._commands)
        elapsed_ms = (self._clock.monotonic() - started) * 1000.0
        logger.debug(
            "Replayed all %d steps in %.1f ms (%.3f ms per step)",
            n,
            elapsed_ms,
            elapsed_ms / n if n else 0.0,
        )
        return True

    def run_step_by_step(
        self,
        steps_per_second: float,
        on_complete: Optional[Callable[[], Any]] = None,
    ) -> bool:
        """Replay the queue at ``steps_per_second`` on the running loop.

        The first command runs on the next loop turn; each later one runs
        ``1 / steps_per_second`` seconds after the previous. ``on_complete``
        is called once, one interval after the last command. Must be called
        from a coroutine (a running event loop is required).

        Returns:
            True if playback started. False if the rate is not positive or a
            playback is already active; the reason is logged and stored in
            :attr:`last_rejection` and ``on_complete`` is never called.
        """
        if not steps_per_second > 0:
            self._reject(
                PlaybackRejection.INVALID_RATE,
                "Steps per second must be greater than 0 (got %r); aborting playback",
                steps_per_second,
            )
            return False
        if self._state is not EngineState.IDLE:
            self._reject(
                PlaybackRejection.ALREADY_RUNNING,
                "Turtle is already running; cannot start a new playback",
            )
            return False

        loop = asyncio.get_running_loop()
        self.last_rejection = None
        interval = 1.0 / float(steps_per_second)
        self._begin_playback(EngineState.RUNNING_TIMED)
        self._draw_indicator()
        self._task = loop.create_task(
            self._play(interval, on_complete), name="turtle_playback"
        )
        self._task.add_done_callback(_log_playback_failure)
        return True

    def cancel(self) -> bool:
        """Stop an active timed playback without calling its callback.

        Returns:
            True if a playback was cancelled
        """
        task = self._task
        if task is None or task.done():
            return False
        self._task = None
        self._state = EngineState.IDLE
        task.cancel()
        logger.info("Playback cancelled")
        return True

    async def wait(self) -> None:
        """Wait for the latest timed playback to finish.

        Re-raises an exception from the completion callback. Returns at once
        if nothing was started or the run was cancelled.
        """
        task = self._task
        if task is not None:
            await task

    async def _play(
        self, interval: float, on_complete: Optional[Callable[[], Any]]
    ) -> None:
        me = asyncio.current_task()
        index = 0
        try:
            # Length is read each step; reset_actions() ends the run early
            while index < len(self._commands):
                self._execute(self._commands[index])
                index += 1
                await self._clock.sleep(interval)
        finally:
            # A cancelled run may have been superseded by a newer one
            if self._task is me:
                self._state = EngineState.IDLE

        logger.debug("Playback finished after %d steps", index)
        if on_complete is not None:
            on_complete()

    # Internals -------------------------------------------------------------
    def _recorded(self, kind: CommandKind, arg: Any = None) -> bool:
        """Append a command when idle; return whether it was recorded."""
        if self.executing:
            return False
        self._commands.append(DeferredCommand(kind, arg))
        return True

    def _begin_playback(self, state: EngineState) -> None:
        # Every playback starts from the same pose so replays are repeatable
        self._position = self._start.position
        self._heading = self._start.heading
        self._pen = replace(self._start_pen)
        self._saved = self._start
        self._state = state

    def _execute(self, cmd: DeferredCommand) -> None:
        kind, arg = cmd.kind, cmd.arg
        if kind is CommandKind.MOVE_FORWARD:
            self._do_move_forward(cast(float, arg))
        elif kind is CommandKind.MOVE_TO:
            self._do_move_to(cast(Vector2, arg))
        elif kind is CommandKind.ROTATE_CLOCKWISE:
            self._do_rotate(degrees_to_radians(cast(float, arg)))
        elif kind is CommandKind.ROTATE_COUNTER_CLOCKWISE:
            self._do_rotate(-degrees_to_radians(cast(float, arg)))
        elif kind is CommandKind.SET_HEADING:
            self._do_set_heading(degrees_to_radians(cast(float, arg)))
        elif kind is CommandKind.SET_PEN_DOWN:
            self.set_pen_down(cast(bool, arg))
        elif kind is CommandKind.SET_COLOR:
            self.set_color(cast(str, arg))
        elif kind is CommandKind.SET_WIDTH:
            self.set_width(cast(float, arg))
        elif kind is CommandKind.SAVE_POSITION:
            self.save_position()
        elif kind is CommandKind.RESTORE_POSITION:
            self.restore_position()
        else:  # pragma: no cover - exhaustive over CommandKind
            raise ValueError(f"unknown command kind: {kind!r}")

    def _do_move_forward(self, distance: float) -> None:
        # Heading 0 faces up the screen, i.e. towards -y
        end = self._position + rotate(Vector2(0.0, -distance), self._heading)
        if self._pen.down:
            self._restore()
            s = self._surface
            s.begin_path()
            s.move_to(self._position.x, self._position.y)
            s.line_to(end.x, end.y)
            s.stroke(self._pen.color, self._pen.width)
            self._save()
        self._position = end
        self._draw_indicator()

    def _do_move_to(self, point: Vector2) -> None:
        self._position = point
        self._draw_indicator()

    def _do_rotate(self, radians: float) -> None:
        self._heading += radians
        self._draw_indicator()

    def _do_set_heading(self, radians: float) -> None:
        self._heading = radians
        self._draw_indicator()

    def _reject(self, reason: PlaybackRejection, msg: str, *args: Any) -> None:
        self.last_rejection = reason
        logger.error(msg, *args)

    def _save(self) -> None:
        if self._snapshotting:
            self._snapshot = self._surface.snapshot()

    def _restore(self) -> None:
        if self._snapshotting:
            self._surface.restore(self._snapshot)

    def _draw_indicator(self) -> None:
        if not self._show:
            return
        self._restore()
        draw_indicator(self._surface, self._position, self._heading, self._style)


def _log_playback_failure(task: "asyncio.Task[None]") -> None:
    # Marks the exception retrieved; wait() still re-raises it
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Playback failed: %s", exc, exc_info=exc)
