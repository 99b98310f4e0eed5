"""In-memory DrawingSurface that records paint operations.

Instead of rasterizing, every ``stroke``/``fill``/``clear_rect`` is appended
to an operation list. Snapshots are copies of that list, so snapshot/restore
behaves exactly like pixel copies would. This keeps engine tests
deterministic and free of SDL.

Example:
    surface = MemorySurface(200, 200)
    turtle = Turtle(surface, 100, 100)
    turtle.move_forward(50)
    turtle.run_all()
    surface.segments()  # [((100.0, 100.0), (100.0, 50.0))]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union

from turtlecanvas.render.surface import Color

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class StrokeOp:
    points: Tuple[Point, ...]
    closed: bool
    color: Color
    width: float


@dataclass(frozen=True, slots=True)
class FillOp:
    points: Tuple[Point, ...]
    color: Color


@dataclass(frozen=True, slots=True)
class ClearOp:
    rect: Tuple[float, float, float, float]


PaintOp = Union[StrokeOp, FillOp, ClearOp]


class MemorySurface:
    """Recording implementation of :class:`DrawingSurface`."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self._width, self._height = int(width), int(height)
        self._ops: List[PaintOp] = []
        self._subpaths: List[List[Point]] = []
        self._closed: List[bool] = []
        self.snapshots_taken = 0
        self.restores = 0

    # DrawingSurface ------------------------------------------------------
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def snapshot(self) -> Tuple[PaintOp, ...]:
        self.snapshots_taken += 1
        return tuple(self._ops)

    def restore(self, snapshot: Tuple[PaintOp, ...]) -> None:
        self.restores += 1
        self._ops = list(snapshot)

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        if x <= 0 and y <= 0 and x + w >= self._width and y + h >= self._height:
            # Nothing underneath survives a full clear
            self._ops = []
            return
        self._ops.append(ClearOp((x, y, w, h)))

    def begin_path(self) -> None:
        self._subpaths = []
        self._closed = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])
        self._closed.append(False)

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((x, y))

    def close_path(self) -> None:
        if self._closed:
            self._closed[-1] = True

    def stroke(self, color: Color, width: float = 1.0) -> None:
        for pts, closed in zip(self._subpaths, self._closed):
            if len(pts) > 1:
                self._ops.append(StrokeOp(tuple(pts), closed, color, float(width)))

    def fill(self, color: Color) -> None:
        for pts in self._subpaths:
            if len(pts) > 2:
                self._ops.append(FillOp(tuple(pts), color))

    # Inspection ----------------------------------------------------------
    @property
    def ops(self) -> Tuple[PaintOp, ...]:
        return tuple(self._ops)

    def strokes(self) -> List[StrokeOp]:
        return [op for op in self._ops if isinstance(op, StrokeOp)]

    def segments(self) -> List[Tuple[Point, Point]]:
        """Return open two-point strokes (pen lines) as (start, end) pairs."""
        return [
            (op.points[0], op.points[1])
            for op in self.strokes()
            if not op.closed and len(op.points) == 2
        ]
