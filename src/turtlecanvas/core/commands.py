"""Tagged command representation for recorded turtle programs.

Each recorded call becomes a :class:`DeferredCommand` holding a
:class:`CommandKind` tag and the call's argument. Replay dispatches on the
tag, so a recorded program is plain data that can be inspected and logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .geometry import Vector2

__all__ = [
    "CommandKind",
    "CommandArg",
    "DeferredCommand",
]

CommandArg = Union[Vector2, float, bool, str, None]


class CommandKind(str, Enum):
    MOVE_FORWARD = "move_forward"
    MOVE_TO = "move_to"
    ROTATE_CLOCKWISE = "rotate_clockwise"
    ROTATE_COUNTER_CLOCKWISE = "rotate_counter_clockwise"
    SET_HEADING = "set_heading"
    SET_PEN_DOWN = "set_pen_down"
    SET_COLOR = "set_color"
    SET_WIDTH = "set_width"
    SAVE_POSITION = "save_position"
    RESTORE_POSITION = "restore_position"


@dataclass(frozen=True, slots=True)
class DeferredCommand:
    """One recorded operation and its argument."""

    kind: CommandKind
    arg: CommandArg = None

    def to_dict(self) -> dict[str, Any]:
        arg: Any = self.arg
        if isinstance(arg, Vector2):
            arg = {"x": arg.x, "y": arg.y}
        return {"kind": self.kind.value, "arg": arg}

    def __str__(self) -> str:
        if self.arg is None:
            return f"{self.kind.value}()"
        if isinstance(self.arg, Vector2):
            return f"{self.kind.value}({self.arg.x:g}, {self.arg.y:g})"
        return f"{self.kind.value}({self.arg!r})"
