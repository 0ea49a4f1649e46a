""" Unit tests for whole-stroke and partial erasing. """

from vector_ink.core.eraser import coverage, erase_partial_strokes, erase_whole_strokes
from vector_ink.core.geometry import VectorBounds
from vector_ink.core.vector_stroke import VectorStroke

from conftest import pts


def _line(y: float = 0.0, count: int = 10) -> VectorStroke:
    return VectorStroke.from_raw_points(pts(*[(x, y) for x in range(count)]), color="#FF0000")


def test_coverage() -> None:
    stroke = _line()
    assert coverage(stroke, VectorBounds(0, -1, 4, 1)) == 0.5
    assert coverage(VectorStroke(), VectorBounds(0, 0, 1, 1)) == 0.0


def test_whole_erase_uses_threshold() -> None:
    hit, missed = _line(0), _line(50)
    eraser = VectorBounds(-1, -1, 0.5, 1)
    # One point of ten inside: exactly at the default threshold, so kept
    assert erase_whole_strokes([hit, missed], eraser) == [hit, missed]
    assert erase_whole_strokes([hit, missed], VectorBounds(-1, -1, 1.5, 1)) == [missed]
    assert erase_whole_strokes([hit], eraser, coverage_threshold=0.0) == []


def test_partial_erase_splits_into_runs() -> None:
    stroke = _line()
    pieces = erase_partial_strokes([stroke], VectorBounds(3.5, -1, 5.5, 1))
    assert [[p.x for p in piece.path_points] for piece in pieces] == [
        [0, 1, 2, 3], [6, 7, 8, 9]]
    assert all(piece.id != stroke.id for piece in pieces)
    assert all(piece.color == stroke.color for piece in pieces)
    assert len({piece.id for piece in pieces}) == 2


def test_partial_erase_drops_single_point_runs_and_keeps_untouched() -> None:
    stroke = _line()
    far = _line(40)
    pieces = erase_partial_strokes([stroke, far], VectorBounds(0.5, -1, 8.5, 1))
    assert pieces == [far]

    untouched = erase_partial_strokes([stroke], VectorBounds(2.5, 0.5, 3.5, 1))
    assert untouched == [stroke]
