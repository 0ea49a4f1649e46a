""" Unit tests for points, bounds and Bezier segments. """

import math

import pytest

from vector_ink.core.geometry import BezierSegment, VectorBounds, VectorPoint


def test_pressure_is_clamped_on_construction() -> None:
    assert VectorPoint(0, 0, 1.7).pressure == 1.0
    assert VectorPoint(0, 0, -0.3).pressure == 0.0
    assert VectorPoint(0, 0, 0.4).pressure == 0.4


def test_distance_and_mid_point() -> None:
    a = VectorPoint(0, 0, 0.2, 100)
    b = VectorPoint(3, 4, 0.6, 200)
    assert a.distance_to(b) == 5.0
    mid = a.mid_point(b)
    assert (mid.x, mid.y) == (1.5, 2.0)
    assert mid.pressure == pytest.approx(0.4)
    assert mid.timestamp == 150


def test_lerp_clamps_parameter_and_interpolates_everything() -> None:
    a = VectorPoint(0, 0, 0.0, 0)
    b = VectorPoint(10, 20, 1.0, 100)
    quarter = a.lerp(b, 0.25)
    assert (quarter.x, quarter.y) == (2.5, 5.0)
    assert quarter.pressure == 0.25
    assert quarter.timestamp == 25
    assert a.lerp(b, 3.0) == b
    assert a.lerp(b, -1.0) == a


def test_point_dict_round_trip() -> None:
    p = VectorPoint(1.5, -2.0, 0.3, 42)
    assert VectorPoint.from_dict(p.to_dict()) == p
    with pytest.raises(KeyError):
        VectorPoint.from_dict({'y': 1.0})


def test_bounds_from_points() -> None:
    assert VectorBounds.from_points([]) is None
    b = VectorBounds.from_points([VectorPoint(1, 5), VectorPoint(-2, 3), VectorPoint(4, -1)])
    assert (b.left, b.top, b.right, b.bottom) == (-2, -1, 4, 5)
    assert b.width == 6 and b.height == 6
    assert (b.center_x, b.center_y) == (1.0, 2.0)


def test_bounds_containment_is_inclusive_and_intersection_strict() -> None:
    box = VectorBounds(0, 0, 10, 10)
    assert box.contains(0, 0) and box.contains(10, 10)
    assert not box.contains(10.01, 5)

    touching = VectorBounds(10, 0, 20, 10)
    overlapping = VectorBounds(9, 9, 20, 20)
    assert not box.intersects(touching)
    assert box.intersects(overlapping)
    assert overlapping.intersects(box)


def test_bounds_union_and_expand() -> None:
    a = VectorBounds(0, 0, 1, 1)
    b = VectorBounds(5, -2, 6, 0)
    assert a.union(b) == VectorBounds(0, -2, 6, 1)
    assert a.expand(2) == VectorBounds(-2, -2, 3, 3)


def _straight_segment() -> BezierSegment:
    start = VectorPoint(0, 0, 0.0, 0)
    end = VectorPoint(9, 0, 1.0, 90)
    return BezierSegment(start, start.lerp(end, 1 / 3), start.lerp(end, 2 / 3), end)


def test_bezier_endpoints_and_pressure() -> None:
    seg = _straight_segment()
    assert seg.point_at(0.0) == seg.start
    end = seg.point_at(1.0)
    assert (end.x, end.y, end.pressure, end.timestamp) == (9.0, 0.0, 1.0, 90)
    mid = seg.point_at(0.5)
    assert mid.x == pytest.approx(4.5)
    assert mid.pressure == pytest.approx(0.5)


def test_bezier_tangent_and_length() -> None:
    seg = _straight_segment()
    tangent = seg.tangent_at(0.5)
    assert tangent.x == pytest.approx(9.0)
    assert tangent.y == pytest.approx(0.0)
    assert seg.length() == pytest.approx(9.0)


def test_bezier_length_of_quarter_arc_is_close_to_circle() -> None:
    k = 0.5522847498
    seg = BezierSegment(VectorPoint(1, 0), VectorPoint(1, k), VectorPoint(k, 1), VectorPoint(0, 1))
    assert seg.length(steps=100) == pytest.approx(math.pi / 2, rel=1e-3)
