"""Centralized value tables loaded from YAML.

The master source is ``values.yml`` in this package. On import the YAML is
parsed and merged over hard-coded fallbacks, so the application still runs
(with the historical defaults) if the file is missing or corrupt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_CANVAS = {"width": 800, "height": 600, "background": "#ffffff"}
_FALLBACK_PEN = {"color": "#000000", "width": 1.0, "line_cap": "round"}
_FALLBACK_PLAYBACK = {"steps_per_second": 100.0}
_FALLBACK_INDICATOR = {
    "points": [(-20.0, 0.0), (0.0, -20.0), (20.0, 0.0)],
    "fill": "#ffffff",
    "outline": "#999999",
    "outline_width": 0.6,
}
_LINE_CAPS = ("round", "butt")


@dataclass(frozen=True, slots=True)
class IndicatorStyle:
    """Geometry and paint of the turtle glyph."""

    points: Tuple[Tuple[float, float], ...]
    fill: str
    outline: str
    outline_width: float


# --- Load YAML -----------------------------------------------------------
_canvas: Dict[str, Any] = dict(_FALLBACK_CANVAS)
_pen: Dict[str, Any] = dict(_FALLBACK_PEN)
_playback: Dict[str, Any] = dict(_FALLBACK_PLAYBACK)
_indicator: Dict[str, Any] = dict(_FALLBACK_INDICATOR)


def _merge_numbers(dst: Dict[str, Any], src: Any, keys: Sequence[str]) -> None:
    if not isinstance(src, dict):
        return
    for k in keys:
        v = src.get(k)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            dst[k] = type(dst[k])(v)


def _merge_strings(dst: Dict[str, Any], src: Any, keys: Sequence[str]) -> None:
    if not isinstance(src, dict):
        return
    for k in keys:
        v = src.get(k)
        if isinstance(v, str) and v:
            dst[k] = v


if _YAML_PATH.exists():
    try:
        with _YAML_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        canvas = raw.get("canvas")
        _merge_numbers(_canvas, canvas, ("width", "height"))
        _merge_strings(_canvas, canvas, ("background",))

        pen = raw.get("pen")
        _merge_numbers(_pen, pen, ("width",))
        _merge_strings(_pen, pen, ("color",))
        if isinstance(pen, dict) and pen.get("line_cap") in _LINE_CAPS:
            _pen["line_cap"] = pen["line_cap"]

        _merge_numbers(_playback, raw.get("playback"), ("steps_per_second",))

        ind = raw.get("indicator")
        _merge_numbers(_indicator, ind, ("outline_width",))
        _merge_strings(_indicator, ind, ("fill", "outline"))
        if isinstance(ind, dict) and isinstance(ind.get("points"), list):
            pts = [(float(p[0]), float(p[1])) for p in ind["points"]]
            if len(pts) >= 3:
                _indicator["points"] = pts
    except (OSError, yaml.YAMLError, TypeError, ValueError, IndexError) as e:
        logger.warning("Ignoring unreadable value table %s: %s", _YAML_PATH, e)

# --- Public accessors ----------------------------------------------------
CANVAS_DEFAULTS: Dict[str, Any] = dict(_canvas)
PEN_DEFAULTS: Dict[str, Any] = dict(_pen)
PLAYBACK_DEFAULTS: Dict[str, float] = dict(_playback)
INDICATOR_STYLE = IndicatorStyle(
    points=tuple((float(x), float(y)) for x, y in _indicator["points"]),
    fill=str(_indicator["fill"]),
    outline=str(_indicator["outline"]),
    outline_width=float(_indicator["outline_width"]),
)

__all__ = [
    "IndicatorStyle",
    "CANVAS_DEFAULTS",
    "PEN_DEFAULTS",
    "PLAYBACK_DEFAULTS",
    "INDICATOR_STYLE",
]
