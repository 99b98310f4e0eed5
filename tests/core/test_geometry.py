from __future__ import annotations

from math import hypot, isclose, nan, pi

import hypothesis.strategies as st
from hypothesis import given, settings

from turtlecanvas.core.geometry import (
    Vector2,
    degrees_to_radians,
    radians_to_degrees,
    rotate,
)

coord = st.floats(min_value=-1e4, max_value=1e4, allow_nan=False, allow_infinity=False)
angle = st.floats(min_value=-4 * pi, max_value=4 * pi, allow_nan=False)


def test_equality_is_exact() -> None:
    assert Vector2(1.0, 2.0) == Vector2(1.0, 2.0)
    assert Vector2(1.0, 2.0) != Vector2(1.0, 2.0 + 1e-12)
    assert Vector2(0.1 + 0.2, 0.0) != Vector2(0.3, 0.0)


def test_nan_is_never_equal() -> None:
    v = Vector2(nan, 0.0)
    assert v != v


def test_y_defaults_to_zero() -> None:
    assert Vector2(3.0) == Vector2(3.0, 0.0)


def test_arithmetic_and_unpacking() -> None:
    a = Vector2(1.0, 2.0)
    b = Vector2(0.5, -4.0)
    assert a + b == Vector2(1.5, -2.0)
    assert a - b == Vector2(0.5, 6.0)
    x, y = a
    assert (x, y) == a.as_tuple() == (1.0, 2.0)


def test_hashable_value_semantics() -> None:
    assert len({Vector2(1.0, 1.0), Vector2(1.0, 1.0), Vector2(2.0, 1.0)}) == 2


def test_rotate_quarter_turn_is_clockwise_on_screen() -> None:
    # Screen y grows downward, so "up" rotated by +90 deg points right
    r = rotate(Vector2(0.0, -10.0), pi / 2)
    assert isclose(r.x, 10.0)
    assert isclose(r.y, 0.0, abs_tol=1e-12)


def test_rotate_by_zero_is_identity() -> None:
    assert rotate(Vector2(3.0, -7.0), 0.0) == Vector2(3.0, -7.0)


def test_angle_conversions() -> None:
    assert isclose(degrees_to_radians(180.0), pi)
    assert isclose(radians_to_degrees(pi / 2), 90.0)
    assert isclose(radians_to_degrees(degrees_to_radians(33.3)), 33.3)


@settings(deadline=None, max_examples=150)
@given(x=coord, y=coord, a=angle)
def test_rotation_preserves_length(x: float, y: float, a: float) -> None:
    r = rotate(Vector2(x, y), a)
    assert isclose(hypot(r.x, r.y), hypot(x, y), rel_tol=1e-9, abs_tol=1e-9)


@settings(deadline=None, max_examples=150)
@given(x=coord, y=coord, a=angle)
def test_rotation_inverse(x: float, y: float, a: float) -> None:
    back = rotate(rotate(Vector2(x, y), a), -a)
    assert isclose(back.x, x, abs_tol=1e-8)
    assert isclose(back.y, y, abs_tol=1e-8)
