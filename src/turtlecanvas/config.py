"""Runtime configuration helpers.

Merges the defaults from ``settings.values``, the persisted Settings store
and CLI overrides (an argparse.Namespace-like object) into one
:class:`RuntimeConfig` used by the application entrypoints.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .settings.schema import Settings
from .settings.store import SettingsStore
from .settings.values import INDICATOR_STYLE, IndicatorStyle


@dataclass(slots=True)
class RuntimeConfig:
    width: int
    height: int
    background: str
    steps_per_second: float
    pen_color: str
    pen_width: float
    show_indicator: bool
    indicator: IndicatorStyle = INDICATOR_STYLE


def make_runtime_config(
    *, args: Optional[object] = None, settings: Optional[Settings] = None
) -> RuntimeConfig:
    """Build a RuntimeConfig from persisted settings and CLI overrides.

    Rules:
    - ``settings`` (or ``SettingsStore.load()`` when omitted) provides the
      user defaults.
    - Attributes on ``args`` that are present and not None override them for
      the current session: ``width``, ``height``, ``rate``, ``background``,
      ``color``, ``pen_width`` and ``hide_turtle``.
    """
    s = settings if settings is not None else SettingsStore.load()
    cfg = RuntimeConfig(
        width=s.canvas_width,
        height=s.canvas_height,
        background=s.background,
        steps_per_second=s.steps_per_second,
        pen_color=s.pen_color,
        pen_width=s.pen_width,
        show_indicator=s.show_indicator,
    )
    if args is None:
        return cfg

    overrides = {
        "width": "width",
        "height": "height",
        "rate": "steps_per_second",
        "background": "background",
        "color": "pen_color",
        "pen_width": "pen_width",
    }
    for arg_name, field in overrides.items():
        v = getattr(args, arg_name, None)
        if v is not None:
            setattr(cfg, field, type(getattr(cfg, field))(v))
    if getattr(args, "hide_turtle", False):
        cfg.show_indicator = False
    return cfg
