"""
Stroke renderer for painting vector strokes with a QPainter.

Constant-pressure strokes are drawn as one smoothed QPainterPath with a
styled pen. Strokes with varying pressure are stamped with circles so
both size and alpha follow the pressure.
"""

from typing import Dict, Iterable, Sequence

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QPen, QBrush, QColor, QPainter

from ..config import Config
from ..core.geometry import VectorPoint
from ..core.vector_stroke import VectorStroke, VectorStrokeStyle
from ..utils.color_utils import argb_to_qcolor


PEN_STYLES: Dict[VectorStrokeStyle, Qt.PenStyle] = {
    VectorStrokeStyle.SOLID: Qt.PenStyle.SolidLine,
    VectorStrokeStyle.DASHED: Qt.PenStyle.DashLine,
    VectorStrokeStyle.DOTTED: Qt.PenStyle.DotLine,
    VectorStrokeStyle.DASH_DOT: Qt.PenStyle.DashDotLine,
    VectorStrokeStyle.DASH_DOT_DOT: Qt.PenStyle.DashDotDotLine,
}


def make_pen(stroke: VectorStroke) -> QPen:
    """Round-capped pen for a stroke's color, opacity, width and style"""
    pen = QPen(argb_to_qcolor(stroke.color, stroke.opacity), stroke.width)
    pen.setStyle(PEN_STYLES[stroke.style])
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


def _stamp(painter: QPainter, x: float, y: float, pressure: float,
           brush_size: float, color: QColor, base_opacity: float):
    diameter = max(Config.MIN_STAMP_DIAMETER, brush_size * pressure)
    radius = diameter / 2.0
    stamp_color = QColor(color)
    stamp_color.setAlphaF(max(0.05, min(1.0, base_opacity * pressure)))
    painter.setBrush(QBrush(stamp_color))
    painter.drawEllipse(QPointF(x, y), radius, radius)


def render_pressure_stroke(painter: QPainter, points: Sequence[VectorPoint],
                           brush_size: float, color: QColor, base_opacity: float):
    """
    Render a pressure-sensitive stroke using circle stamping.

    Both size and opacity follow pressure. Stamps are spaced at a quarter
    of the local diameter along each span.

    Args:
        painter: Active painter
        points: Stroke points with pressure
        brush_size: Diameter at full pressure
        color: Stroke color (its alpha is replaced per stamp)
        base_opacity: Opacity at full pressure
    """
    if not points:
        return

    painter.save()
    painter.setPen(QPen(Qt.PenStyle.NoPen))

    first = points[0]
    _stamp(painter, first.x, first.y, first.pressure, brush_size, color, base_opacity)

    for last, current in zip(points, points[1:]):
        dx = current.x - last.x
        dy = current.y - last.y
        distance = (dx * dx + dy * dy) ** 0.5
        if distance <= 0.1:
            continue

        avg_pressure = (last.pressure + current.pressure) / 2.0
        avg_diameter = max(Config.MIN_STAMP_DIAMETER, brush_size * avg_pressure)
        spacing = max(1.0, avg_diameter * Config.STAMP_SPACING_RATIO)

        num_stamps = max(1, int(distance / spacing))
        for i in range(1, num_stamps + 1):
            t = i / num_stamps
            _stamp(painter,
                   last.x + dx * t,
                   last.y + dy * t,
                   last.pressure + (current.pressure - last.pressure) * t,
                   brush_size, color, base_opacity)

    painter.restore()


def render_stroke(painter: QPainter, stroke: VectorStroke):
    """Paint one stroke with the painter's current state"""
    if stroke.is_empty():
        return

    if stroke.pressure_enabled and stroke.has_varying_pressure():
        path_points = stroke.generate_smooth_path().path_points()
        render_pressure_stroke(painter, path_points or stroke.path_points, stroke.width,
                               argb_to_qcolor(stroke.color), stroke.opacity)
        return

    painter.save()
    painter.setPen(make_pen(stroke))
    painter.setBrush(Qt.BrushStyle.NoBrush)
    if stroke.point_count() == 1:
        point = stroke.path_points[0]
        painter.drawPoint(QPointF(point.x, point.y))
    else:
        painter.drawPath(stroke.to_path())
    painter.restore()


def render_strokes(painter: QPainter, strokes: Iterable[VectorStroke]):
    for stroke in strokes:
        render_stroke(painter, stroke)


__all__ = [
    'PEN_STYLES',
    'make_pen',
    'render_pressure_stroke',
    'render_stroke',
    'render_strokes',
]
