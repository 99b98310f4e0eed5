"""Pydantic model for user settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .values import CANVAS_DEFAULTS, PEN_DEFAULTS, PLAYBACK_DEFAULTS


class Settings(BaseModel):
    """User settings persisted to disk.

    Parameters
    ----------
    canvas_width, canvas_height: Drawing surface size in pixels.
    background: Surface color used when the canvas is cleared.
    steps_per_second: Default pacing for timed playback.
    pen_color, pen_width: Initial pen for new turtles.
    show_indicator: Whether the turtle glyph is drawn at all.
    """

    model_config = ConfigDict(validate_assignment=True)

    canvas_width: int = Field(default=int(CANVAS_DEFAULTS["width"]))
    canvas_height: int = Field(default=int(CANVAS_DEFAULTS["height"]))
    background: str = Field(default=str(CANVAS_DEFAULTS["background"]))
    steps_per_second: float = Field(
        default=float(PLAYBACK_DEFAULTS["steps_per_second"])
    )
    pen_color: str = Field(default=str(PEN_DEFAULTS["color"]))
    pen_width: float = Field(default=float(PEN_DEFAULTS["width"]))
    show_indicator: bool = Field(default=True)

    @field_validator("canvas_width", "canvas_height")
    @classmethod
    def _chk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("canvas dimensions must be > 0 px")
        return v

    @field_validator("steps_per_second")
    @classmethod
    def _chk_rate(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("steps_per_second must be > 0")
        return v

    @field_validator("pen_width")
    @classmethod
    def _chk_width(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("pen_width must be > 0")
        return v

    @field_validator("background", "pen_color")
    @classmethod
    def _chk_color(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("color must be a non-empty string")
        return v
