from __future__ import annotations

from turtlecanvas.platform.display.memory_backend import ClearOp, MemorySurface, StrokeOp


def _line(s: MemorySurface, a: tuple[float, float], b: tuple[float, float]) -> None:
    s.begin_path()
    s.move_to(*a)
    s.line_to(*b)
    s.stroke("#000000", 2.0)


def test_stroke_records_open_segment() -> None:
    s = MemorySurface(100, 100)
    _line(s, (0.0, 0.0), (10.0, 5.0))
    assert s.ops == (StrokeOp(((0.0, 0.0), (10.0, 5.0)), False, "#000000", 2.0),)
    assert s.segments() == [((0.0, 0.0), (10.0, 5.0))]


def test_snapshot_and_restore_replace_contents() -> None:
    s = MemorySurface(100, 100)
    _line(s, (0.0, 0.0), (1.0, 1.0))
    snap = s.snapshot()
    _line(s, (2.0, 2.0), (3.0, 3.0))
    assert len(s.ops) == 2

    s.restore(snap)
    assert s.segments() == [((0.0, 0.0), (1.0, 1.0))]
    # Snapshot itself is not aliased to the live list
    _line(s, (4.0, 4.0), (5.0, 5.0))
    s.restore(snap)
    assert len(s.ops) == 1
    assert (s.snapshots_taken, s.restores) == (1, 2)


def test_clear_rect() -> None:
    s = MemorySurface(100, 100)
    _line(s, (0.0, 0.0), (1.0, 1.0))
    s.clear_rect(10, 10, 5, 5)
    assert isinstance(s.ops[-1], ClearOp)
    s.clear_rect(0, 0, 100, 100)
    assert s.ops == ()


def test_closed_path_and_single_points() -> None:
    s = MemorySurface(100, 100)
    s.begin_path()
    s.move_to(0.0, 0.0)
    s.line_to(10.0, 0.0)
    s.line_to(10.0, 10.0)
    s.close_path()
    s.move_to(50.0, 50.0)  # lone point paints nothing
    s.fill("red")
    s.stroke("blue")
    kinds = [type(op).__name__ for op in s.ops]
    assert kinds == ["FillOp", "StrokeOp"]
    assert s.strokes()[0].closed is True
    assert s.segments() == []
    assert s.size() == (100, 100)
