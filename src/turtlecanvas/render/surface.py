"""Framework-agnostic drawing surface protocol.

The turtle engine draws only through this narrow interface so that
different rasterizers (pygame, the in-memory recorder used by tests) can be
plugged in. Paths are built with ``begin_path``/``move_to``/``line_to``/
``close_path`` and then painted with ``stroke`` and/or ``fill``; painting
does not consume the path.

Colors are CSS-style strings: ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, color
names and ``hsl(h, s%, l%)``.
"""

from __future__ import annotations

from typing import Any, Protocol, Tuple

Color = str
Snapshot = Any


class DrawingSurface(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def snapshot(self) -> Snapshot:
        """Capture a copy of the current pixel contents."""
        ...

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the pixel contents with a previous :meth:`snapshot`."""
        ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def stroke(self, color: Color, width: float = 1.0) -> None:
        ...

    def fill(self, color: Color) -> None:
        ...
