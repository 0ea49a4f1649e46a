"""
Ordered collection of vector strokes.
"""

from typing import Iterable, List, Optional, Tuple

from .geometry import VectorBounds
from .vector_stroke import VectorStroke


class VectorStrokeCollection:
    """Ordered stroke set with id lookup and region queries"""

    def __init__(self, strokes: Optional[Iterable[VectorStroke]] = None):
        self._strokes: List[VectorStroke] = []
        for stroke in strokes or ():
            self.add_stroke(stroke)

    def add_stroke(self, stroke: VectorStroke) -> bool:
        """Append stroke; returns False if its id is already present"""
        if self.find_stroke(stroke.id) is not None:
            return False
        self._strokes.append(stroke)
        return True

    def remove_stroke(self, stroke_id: str) -> bool:
        for i, stroke in enumerate(self._strokes):
            if stroke.id == stroke_id:
                del self._strokes[i]
                return True
        return False

    def replace_stroke(self, stroke: VectorStroke) -> bool:
        """Swap in an edited stroke with the same id, keeping its position"""
        for i, existing in enumerate(self._strokes):
            if existing.id == stroke.id:
                self._strokes[i] = stroke
                return True
        return False

    def find_stroke(self, stroke_id: str) -> Optional[VectorStroke]:
        for stroke in self._strokes:
            if stroke.id == stroke_id:
                return stroke
        return None

    def strokes(self) -> Tuple[VectorStroke, ...]:
        return tuple(self._strokes)

    def strokes_in_region(self, region: VectorBounds) -> List[VectorStroke]:
        return [s for s in self._strokes if s.intersects(region)]

    def clear(self):
        self._strokes.clear()

    def bounds(self) -> Optional[VectorBounds]:
        """Union of all stroke bounds, or None when nothing has geometry"""
        result = None
        for stroke in self._strokes:
            if stroke.bounds is None:
                continue
            result = stroke.bounds if result is None else result.union(stroke.bounds)
        return result

    def __len__(self) -> int:
        return len(self._strokes)

    def __iter__(self):
        return iter(tuple(self._strokes))


__all__ = ['VectorStrokeCollection']
