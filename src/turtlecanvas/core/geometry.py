"""Planar geometry helpers for the turtle engine.

All angles are radians unless a name says otherwise. Screen coordinates are
used throughout: +x to the right, +y downward, so a positive rotation turns
clockwise on screen. Implementations use only the Python standard library
(math).
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, pi, sin
from typing import Iterator

__all__ = [
    "Vector2",
    "rotate",
    "degrees_to_radians",
    "radians_to_degrees",
]


@dataclass(frozen=True, slots=True, eq=False)
class Vector2:
    """Immutable 2-D vector.

    Equality is exact float comparison on both components, with no epsilon.
    Results of rounding-sensitive arithmetic should be compared with a
    tolerance instead.
    """

    x: float
    y: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def rotate(v: Vector2, angle: float) -> Vector2:
    """Rotate ``v`` about the origin by ``angle`` radians.

    Applies the standard rotation matrix::

        x' = x cos(a) - y sin(a)
        y' = x sin(a) + y cos(a)
    """
    c = cos(angle)
    s = sin(angle)
    return Vector2(v.x * c - v.y * s, v.x * s + v.y * c)


def degrees_to_radians(d: float) -> float:
    return d * pi / 180.0


def radians_to_degrees(r: float) -> float:
    return r * 180.0 / pi
