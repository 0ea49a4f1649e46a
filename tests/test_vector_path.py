""" Unit tests for the Bezier path builder. """

import pytest

from vector_ink.core.geometry import VectorPoint
from vector_ink.core.vector_path import VectorPath

from conftest import pts


def test_collinear_stroke_becomes_one_straight_segment() -> None:
    path = VectorPath(pts((0, 0), (5, 0), (10, 0)))
    path.generate_smooth_path(smoothing_factor=0.3, simplification_tolerance=2.0)

    assert path.segment_count == 1
    seg = path.segments[0]
    assert (seg.start.x, seg.start.y) == (0.0, 0.0)
    assert (seg.end.x, seg.end.y) == (10.0, 0.0)
    assert (seg.control1.x, seg.control1.y) == pytest.approx((3.3, 0.0))
    assert (seg.control2.x, seg.control2.y) == pytest.approx((6.7, 0.0))


def test_segments_chain_end_to_start() -> None:
    path = VectorPath(pts((0, 0), (10, 10), (20, 0), (30, 10), (40, 0)))
    path.generate_smooth_path(0.3, 0.5)
    segments = path.segments
    assert len(segments) == 4
    for a, b in zip(segments, segments[1:]):
        assert a.end == b.start


def test_mutation_marks_dirty_and_reads_rebuild() -> None:
    path = VectorPath()
    assert not path.is_dirty
    path.add_point(VectorPoint(0, 0))
    path.add_point(VectorPoint(10, 0))
    assert path.is_dirty
    assert path.segment_count == 1
    assert not path.is_dirty

    path.add_points(pts((20, 20), (30, 0)))
    assert path.is_dirty
    assert path.raw_point_count == 4
    assert [p.x for p in path.raw_points] == [0.0, 10.0, 20.0, 30.0]
    assert path.segments[-1].end.x == 30.0


def test_rebuild_reuses_last_parameters() -> None:
    path = VectorPath(pts((0, 0), (5, 1), (10, 0)))
    path.generate_smooth_path(0.3, 5.0)
    assert path.segment_count == 1
    path.add_point(VectorPoint(15, 1))
    assert path.segment_count == 1


def test_single_point_has_no_segments_but_a_path() -> None:
    path = VectorPath(pts((4, 4)))
    assert path.segments == ()
    qpath = path.to_path()
    assert qpath.elementCount() == 1
    assert path.length() == 0.0
    assert not path.is_empty()


def test_to_path_is_cubic_chain() -> None:
    path = VectorPath(pts((0, 0), (10, 0)))
    qpath = path.to_path()
    # moveTo plus one cubicTo (three elements)
    assert qpath.elementCount() == 4
    assert qpath.currentPosition().x() == pytest.approx(10.0)


def test_path_points_density() -> None:
    path = VectorPath(pts((0, 0), (10, 0)))
    assert len(path.path_points(density=1.0)) == 11
    # At least two steps per segment
    assert len(path.path_points(density=0.0)) == 3


def test_clear_resets_everything() -> None:
    path = VectorPath(pts((0, 0), (10, 0)))
    assert path.segment_count == 1
    path.clear()
    assert path.is_empty()
    assert path.bounds() is None
    assert path.segments == ()


def test_length_and_bounds() -> None:
    path = VectorPath(pts((0, 0), (3, 4)))
    assert path.length() == pytest.approx(5.0)
    bounds = path.bounds()
    assert (bounds.right, bounds.bottom) == (3.0, 4.0)
