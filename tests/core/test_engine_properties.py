from __future__ import annotations

from math import isclose
from typing import Any, Callable

import hypothesis.strategies as st
from hypothesis import given, settings

from turtlecanvas.core.commands import CommandKind
from turtlecanvas.core.engine import Turtle
from turtlecanvas.platform.display.memory_backend import MemorySurface

distance = st.floats(min_value=-500.0, max_value=500.0, allow_nan=False)
degrees = st.floats(min_value=-720.0, max_value=720.0, allow_nan=False)
colors = st.sampled_from(["#000000", "#ff0000", "hsl(200, 80%, 40%)", "teal"])


def angle_diff(a: float, b: float) -> float:
    d = (a - b) % 360.0
    if d > 180.0:
        d -= 360.0
    return abs(d)


Step = Callable[[Turtle], None]

step = st.one_of(
    distance.map(lambda d: (lambda t: t.move_forward(d))),
    distance.map(lambda d: (lambda t: t.move_backward(d))),
    degrees.map(lambda a: (lambda t: t.rotate_clockwise(a))),
    degrees.map(lambda a: (lambda t: t.rotate_counter_clockwise(a))),
    degrees.map(lambda a: (lambda t: t.set_heading(a))),
    st.tuples(distance, distance).map(lambda p: (lambda t: t.move_to(*p))),
    st.booleans().map(lambda b: (lambda t: t.set_pen_down(b))),
    colors.map(lambda c: (lambda t: t.set_color(c))),
    st.floats(min_value=0.5, max_value=20.0).map(lambda w: (lambda t: t.set_width(w))),
    st.just(lambda t: t.save_position()),
    st.just(lambda t: t.restore_position()),
)


def _turtle(**kwargs: Any) -> tuple[Turtle, MemorySurface]:
    surface = MemorySurface(400, 400)
    return Turtle(surface, 200, 200, **kwargs), surface


@settings(deadline=None, max_examples=80)
@given(program=st.lists(step, max_size=30), heading=degrees)
def test_replay_is_deterministic(program: list[Step], heading: float) -> None:
    t, surface = _turtle(heading_deg=heading)
    for s in program:
        s(t)

    t.run_all()
    pose = (t.position, t.heading, t.pen)
    first = surface.segments()

    t.run_all()
    assert (t.position, t.heading, t.pen) == pose
    assert surface.segments()[len(first):] == first


@settings(deadline=None, max_examples=120)
@given(start=degrees, deg=degrees)
def test_rotate_there_and_back(start: float, deg: float) -> None:
    t, _ = _turtle(heading_deg=start)
    t.rotate_clockwise(deg)
    t.rotate_counter_clockwise(deg)
    t.run_all()
    assert angle_diff(t.get_heading_degrees(), start) < 1e-9


@settings(deadline=None, max_examples=120)
@given(heading=degrees, d=distance)
def test_forward_and_back_returns_home(heading: float, d: float) -> None:
    t, _ = _turtle(heading_deg=heading)
    t.move_forward(d)
    t.move_forward(-d)
    t.run_all()
    assert isclose(t.position.x, 200.0, abs_tol=1e-9)
    assert isclose(t.position.y, 200.0, abs_tol=1e-9)


@settings(deadline=None, max_examples=80)
@given(
    prefix=st.lists(step, max_size=10),
    middle=st.lists(step, max_size=10),
)
def test_restore_returns_to_saved_pose(prefix: list[Step], middle: list[Step]) -> None:
    # Pose at the save point, computed by replaying the prefix alone
    ref, _ = _turtle()
    for s in prefix:
        s(ref)
    ref.save_position()
    ref.run_all()
    expected = ref.saved_pose

    t, _ = _turtle()
    for s in prefix:
        s(t)
    t.save_position()
    for s in middle:
        s(t)
    t.restore_position()
    t.run_all()

    # Middle steps may save again; only check when they did not
    later = t.commands[len(prefix) + 1 :]
    if not any(c.kind is CommandKind.SAVE_POSITION for c in later):
        assert t.position == expected.position
        assert t.heading == expected.heading
