"""Pygame-based drawing surface with headless (offscreen) support.

This module implements :class:`DrawingSurface` on an opaque pygame surface
and a small display backend that owns it. It is suitable for deterministic,
headless use by setting the environment variable SDL_VIDEODRIVER=dummy
before importing pygame.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from turtlecanvas.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(400, 300))
    turtle = Turtle(backend.surface)
    turtle.move_forward(100)
    turtle.run_all()
    backend.save_png("/tmp/turtle.png")
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, List, Tuple

from turtlecanvas.render.surface import Color, DrawingSurface
from turtlecanvas.settings.values import CANVAS_DEFAULTS, PEN_DEFAULTS

logger = logging.getLogger(__name__)

pg: Any = None
try:  # pragma: no cover - import guard for environments without SDL
    import pygame as _pg

    pg = _pg
except Exception:  # pragma: no cover
    pg = None

_HSL_RE = re.compile(
    r"^hsla?\(\s*([-+\d.]+)(?:deg)?\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*"
    r"(?:,\s*([\d.]+)\s*)?\)$",
    re.IGNORECASE,
)
_SHORT_HEX_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)


def parse_color(color: Color) -> Any:
    """Convert a CSS-style color string to ``pygame.Color``.

    Supports ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, pygame color names and
    ``hsl(h, s%, l%)`` / ``hsla(h, s%, l%, a)``.

    Raises:
        ValueError: If the string is not a recognised color.
    """
    s = color.strip()
    m = _HSL_RE.match(s)
    if m:
        h, sat, light, alpha = m.groups()
        c = pg.Color(0, 0, 0, 255)
        a = 100.0 if alpha is None else min(1.0, float(alpha)) * 100.0
        c.hsla = (
            float(h) % 360.0,
            min(100.0, float(sat)),
            min(100.0, float(light)),
            a,
        )
        return c
    m = _SHORT_HEX_RE.match(s)
    if m:
        s = "#" + "".join(ch * 2 for ch in m.groups())
    try:
        return pg.Color(s)
    except ValueError:
        raise ValueError(f"invalid color: {color!r}") from None


class _PygameSurface(DrawingSurface):
    def __init__(
        self, surface: Any, background: Color, *, round_caps: bool = True
    ) -> None:
        self._surface = surface
        self._background = parse_color(background)
        self._round_caps = round_caps
        self._subpaths: List[List[Tuple[float, float]]] = []
        self._closed: List[bool] = []

    def size(self) -> Tuple[int, int]:
        w, h = self._surface.get_size()
        return int(w), int(h)

    def snapshot(self) -> Any:
        return self._surface.copy()

    def restore(self, snapshot: Any) -> None:
        # Opaque surfaces, so a plain blit replaces every pixel
        self._surface.blit(snapshot, (0, 0))

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._surface.fill(self._background, pg.Rect(int(x), int(y), int(w), int(h)))

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
        c = parse_color(color)
        px = max(1, int(round(width)))
        for pts, closed in zip(self._subpaths, self._closed):
            if len(pts) < 2:
                continue
            if px == 1:
                pg.draw.aalines(self._surface, c, closed, pts)
            else:
                pg.draw.lines(self._surface, c, closed, pts, px)
                if self._round_caps:
                    for p in pts:
                        pg.draw.circle(self._surface, c, p, px / 2.0)

    def fill(self, color: Color) -> None:
        c = parse_color(color)
        for pts in self._subpaths:
            if len(pts) > 2:
                pg.draw.polygon(self._surface, c, pts, 0)

    def get_at(self, pos: Tuple[int, int]) -> Tuple[int, int, int, int]:
        r, g, b, a = self._surface.get_at(pos)
        return int(r), int(g), int(b), int(a)


class PygameDisplayBackend:
    """Owns an offscreen pygame surface and, optionally, a window.

    Drawing always goes to the offscreen surface; :meth:`end_frame` copies
    it to the window when one exists.
    """

    def __init__(
        self,
        size: Tuple[int, int] = (
            int(CANVAS_DEFAULTS["width"]),
            int(CANVAS_DEFAULTS["height"]),
        ),
        *,
        background: Color = str(CANVAS_DEFAULTS["background"]),
        create_window: bool = False,
        title: str = "turtlecanvas",
    ) -> None:
        local_pg = pg
        if local_pg is None:
            raise RuntimeError(
                "pygame is not available. "
                "Ensure it is installed and that SDL is configured."
            )

        if os.environ.get("SDL_VIDEODRIVER") == "dummy":
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

        if not local_pg.get_init():
            local_pg.init()

        self._width, self._height = int(size[0]), int(size[1])
        self._window_surface = None
        if create_window and os.environ.get("SDL_VIDEODRIVER") != "dummy":
            try:
                self._window_surface = local_pg.display.set_mode(
                    (self._width, self._height)
                )
                local_pg.display.set_caption(title)
            except local_pg.error as e:
                logger.warning(
                    "Window creation failed (%s); falling back to offscreen", e
                )
                self._window_surface = None

        raw = local_pg.Surface((self._width, self._height))
        self._surface = _PygameSurface(
            raw, background, round_caps=PEN_DEFAULTS.get("line_cap") == "round"
        )
        self._raw = raw
        self._surface.clear_rect(0, 0, self._width, self._height)

    @property
    def surface(self) -> _PygameSurface:
        return self._surface

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def end_frame(self) -> None:
        local_pg = pg
        if self._window_surface is not None and local_pg is not None:
            self._window_surface.blit(self._raw, (0, 0))
            local_pg.display.flip()

    def pump_events(self) -> bool:
        """Process window events; return False once the window was closed."""
        if self._window_surface is None:
            return True
        for ev in pg.event.get():
            if ev.type == pg.QUIT:
                return False
        return True

    def save_png(self, path: str) -> None:
        local_pg = pg
        if local_pg is None:  # pragma: no cover - should not happen at runtime
            raise RuntimeError("pygame is not available")
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        local_pg.image.save(self._raw, path)

    def close(self) -> None:
        if self._window_surface is not None:
            pg.display.quit()
            self._window_surface = None
