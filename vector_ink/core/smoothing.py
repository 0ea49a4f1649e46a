"""
Path smoothing algorithms.

Every function takes a sequence of VectorPoint and returns a new list.
Inputs are never modified, and interpolated pressure is always clamped
back into [0, 1] by VectorPoint itself.

Algorithms:
- Catmull-Rom spline (interpolating)
- B-spline (approximating, Cox-de Boor)
- Gaussian kernel convolution
- Moving average
- Adaptive (curvature-driven)
- Pressure-aware
"""

import logging
import math
from enum import Enum
from typing import Callable, Dict, List, Sequence

import numpy as np

from ..config import Config
from .geometry import VectorPoint

logger = logging.getLogger(__name__)


class SmoothingAlgorithm(Enum):
    """Available smoothing strategies"""
    CATMULL_ROM = "catmull_rom"
    B_SPLINE = "b_spline"
    GAUSSIAN = "gaussian"
    MOVING_AVERAGE = "moving_average"
    ADAPTIVE = "adaptive"
    PRESSURE_AWARE = "pressure_aware"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()


# ==================== CATMULL-ROM ====================

def catmull_rom_smooth(points: Sequence[VectorPoint],
                       tension: float = 0.5,
                       segments: int = Config.CATMULL_ROM_SEGMENTS) -> List[VectorPoint]:
    """
    Interpolate a Catmull-Rom spline through every input point.

    The first and last points are duplicated as virtual neighbours. Each
    original point is emitted verbatim followed by `segments - 1`
    interpolated points, giving (n - 1) * segments + 1 points in total.

    Args:
        points: Input points
        tension: Spline tension
        segments: Sub-divisions per input span

    Returns:
        Smoothed points (input copy when fewer than 2 points)
    """
    points = list(points)
    if len(points) < 2 or segments < 1:
        return points

    extended = [points[0]] + points + [points[-1]]
    result = []

    for i in range(1, len(extended) - 2):
        p0, p1, p2, p3 = extended[i - 1], extended[i], extended[i + 1], extended[i + 2]
        result.append(p1)
        for j in range(1, segments):
            result.append(_catmull_rom_point(p0, p1, p2, p3, j / segments, tension))

    result.append(points[-1])
    return result


def _catmull_rom_point(p0: VectorPoint, p1: VectorPoint, p2: VectorPoint,
                       p3: VectorPoint, t: float, tension: float) -> VectorPoint:
    t2 = t * t
    t3 = t2 * t

    f1 = -tension * t + 2 * tension * t2 - tension * t3
    f2 = 1 + (tension - 3) * t2 + (2 - tension) * t3
    f3 = tension * t + (3 - 2 * tension) * t2 + (tension - 2) * t3
    f4 = -tension * t2 + tension * t3

    return VectorPoint(
        f1 * p0.x + f2 * p1.x + f3 * p2.x + f4 * p3.x,
        f1 * p0.y + f2 * p1.y + f3 * p2.y + f4 * p3.y,
        f1 * p0.pressure + f2 * p1.pressure + f3 * p2.pressure + f4 * p3.pressure,
        int(round(p1.timestamp + (p2.timestamp - p1.timestamp) * t)),
    )


# ==================== B-SPLINE ====================

def b_spline_smooth(points: Sequence[VectorPoint],
                    degree: int = Config.BSPLINE_DEGREE,
                    segments: int = Config.CATMULL_ROM_SEGMENTS) -> List[VectorPoint]:
    """
    Approximate the points with a clamped uniform B-spline.

    The curve starts at the first point and ends at the last one, but does
    not generally pass through the interior points.

    Args:
        points: Control points
        degree: Spline degree (>= 1)
        segments: Samples per knot span

    Returns:
        segments * (n - degree + 1) + 1 sampled points, or the input copy
        when there are fewer than degree + 1 points
    """
    points = list(points)
    degree = max(1, degree)
    if len(points) < degree + 1 or segments < 1:
        return points

    n = len(points) - 1
    knots = _clamped_knots(n, degree)
    sample_count = segments * (n - degree + 1)
    u_start, u_end = knots[degree], knots[n + 1]

    result = []
    for i in range(sample_count + 1):
        if i == sample_count:
            # Half-open basis vanishes at the last knot
            last = points[-1]
            result.append(VectorPoint(last.x, last.y, last.pressure, last.timestamp))
            continue
        u = u_start + (u_end - u_start) * i / sample_count
        result.append(_evaluate_b_spline(points, knots, degree, u))

    return result


def _clamped_knots(n: int, degree: int) -> List[float]:
    m = n + degree + 1
    knots = [0.0] * (m + 1)
    for i in range(m - degree, m + 1):
        knots[i] = 1.0
    for i in range(degree + 1, m - degree):
        knots[i] = (i - degree) / (n - degree + 1)
    return knots


def _basis(i: int, p: int, u: float, knots: List[float]) -> float:
    """Cox-de Boor recursion"""
    if p == 0:
        return 1.0 if knots[i] <= u < knots[i + 1] else 0.0

    left = 0.0
    right = 0.0

    span = knots[i + p] - knots[i]
    if span != 0.0:
        left = (u - knots[i]) / span * _basis(i, p - 1, u, knots)

    span = knots[i + p + 1] - knots[i + 1]
    if span != 0.0:
        right = (knots[i + p + 1] - u) / span * _basis(i + 1, p - 1, u, knots)

    return left + right


def _evaluate_b_spline(points: List[VectorPoint], knots: List[float],
                       degree: int, u: float) -> VectorPoint:
    x = y = pressure = timestamp = 0.0
    for i, point in enumerate(points):
        weight = _basis(i, degree, u, knots)
        if weight == 0.0:
            continue
        x += weight * point.x
        y += weight * point.y
        pressure += weight * point.pressure
        timestamp += weight * point.timestamp
    return VectorPoint(x, y, pressure, int(round(timestamp)))


# ==================== GAUSSIAN ====================

def gaussian_kernel(size: int, sigma: float) -> np.ndarray:
    """Normalized 1-D Gaussian kernel of odd length"""
    half = size // 2
    x = np.arange(-half, half + 1, dtype=np.float64)
    kernel = np.exp(-(x * x) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def gaussian_smooth(points: Sequence[VectorPoint],
                    sigma: float = Config.GAUSSIAN_SIGMA,
                    kernel_size: int = Config.GAUSSIAN_KERNEL_SIZE) -> List[VectorPoint]:
    """
    Convolve coordinates and pressure with a Gaussian kernel.

    Window indices past either end replicate the edge point. An even
    kernel size is rounded up to the next odd size so the window stays
    centred. Timestamps are kept from the source points.

    Args:
        points: Input points
        sigma: Standard deviation of the kernel (> 0)
        kernel_size: Window length

    Returns:
        Smoothed points, or the input copy when shorter than the kernel
    """
    points = list(points)
    if kernel_size < 1 or len(points) < kernel_size:
        return points
    if sigma <= 0:
        logger.warning(f"Gaussian smoothing needs sigma > 0, got {sigma}")
        return points

    if kernel_size % 2 == 0:
        kernel_size += 1
        if len(points) < kernel_size:
            return points

    kernel = gaussian_kernel(kernel_size, sigma)
    half = kernel_size // 2

    data = np.array([[p.x, p.y, p.pressure] for p in points], dtype=np.float64)
    padded = np.pad(data, ((half, half), (0, 0)), mode='edge')
    smoothed = np.column_stack([
        np.convolve(padded[:, col], kernel, mode='valid') for col in range(3)
    ])

    return [
        VectorPoint(float(row[0]), float(row[1]), float(row[2]), src.timestamp)
        for row, src in zip(smoothed, points)
    ]


# ==================== MOVING AVERAGE ====================

def moving_average_smooth(points: Sequence[VectorPoint],
                          window_size: int = Config.MOVING_AVERAGE_WINDOW) -> List[VectorPoint]:
    """
    Symmetric moving average.

    Near the ends only in-range neighbours are averaged, so the window
    shrinks and the divisor follows it.
    """
    points = list(points)
    if window_size < 1 or len(points) < window_size:
        return points

    half = window_size // 2
    count = len(points)
    result = []

    for i, current in enumerate(points):
        lo = max(0, i - half)
        hi = min(count - 1, i + half)
        window = points[lo:hi + 1]
        size = len(window)
        result.append(VectorPoint(
            sum(p.x for p in window) / size,
            sum(p.y for p in window) / size,
            sum(p.pressure for p in window) / size,
            current.timestamp,
        ))

    return result


# ==================== ADAPTIVE ====================

def turn_angle(prev: VectorPoint, current: VectorPoint, nxt: VectorPoint) -> float:
    """Absolute heading change at current, in radians within [0, pi]"""
    angle_in = math.atan2(current.y - prev.y, current.x - prev.x)
    angle_out = math.atan2(nxt.y - current.y, nxt.x - current.x)
    delta = angle_out - angle_in
    while delta > math.pi:
        delta -= 2 * math.pi
    while delta < -math.pi:
        delta += 2 * math.pi
    return abs(delta)


def adaptive_smooth(points: Sequence[VectorPoint],
                    max_smoothing_strength: float = Config.ADAPTIVE_MAX_STRENGTH,
                    curvature_threshold: float = Config.ADAPTIVE_CURVATURE_THRESHOLD) -> List[VectorPoint]:
    """
    Smooth only where the path turns.

    Interior points whose turn angle c exceeds the threshold move toward
    the midpoint of their neighbours by max * c / (c + threshold). The
    first and last points are untouched.
    """
    points = list(points)
    if len(points) < 3:
        return points

    result = [points[0]]
    for prev, current, nxt in zip(points, points[1:], points[2:]):
        curvature = turn_angle(prev, current, nxt)
        if curvature > curvature_threshold:
            strength = max_smoothing_strength * (curvature / (curvature + curvature_threshold))
        else:
            strength = 0.0

        factor = strength * 0.5
        result.append(VectorPoint(
            current.x + (prev.x + nxt.x - 2 * current.x) * factor,
            current.y + (prev.y + nxt.y - 2 * current.y) * factor,
            current.pressure + (prev.pressure + nxt.pressure - 2 * current.pressure) * factor,
            current.timestamp,
        ))

    result.append(points[-1])
    return result


# ==================== PRESSURE-AWARE ====================

def pressure_aware_smooth(points: Sequence[VectorPoint],
                          base_smoothing_factor: float = Config.DEFAULT_SMOOTHING_FACTOR) -> List[VectorPoint]:
    """
    Smooth light-pressure sections more than firm ones.

    Each interior point is blended with its neighbours' midpoint using the
    weight base * (1 - pressure). Endpoints and pressures are unchanged.
    """
    points = list(points)
    if len(points) < 3:
        return points

    result = [points[0]]
    for prev, current, nxt in zip(points, points[1:], points[2:]):
        weight = base_smoothing_factor * (1.0 - current.pressure)
        result.append(VectorPoint(
            current.x * (1 - weight) + (prev.x + nxt.x) * weight * 0.5,
            current.y * (1 - weight) + (prev.y + nxt.y) * weight * 0.5,
            current.pressure,
            current.timestamp,
        ))

    result.append(points[-1])
    return result


# ==================== DISPATCH ====================

SMOOTHING_FUNCTIONS: Dict[SmoothingAlgorithm, Callable[..., List[VectorPoint]]] = {
    SmoothingAlgorithm.CATMULL_ROM: catmull_rom_smooth,
    SmoothingAlgorithm.B_SPLINE: b_spline_smooth,
    SmoothingAlgorithm.GAUSSIAN: gaussian_smooth,
    SmoothingAlgorithm.MOVING_AVERAGE: moving_average_smooth,
    SmoothingAlgorithm.ADAPTIVE: adaptive_smooth,
    SmoothingAlgorithm.PRESSURE_AWARE: pressure_aware_smooth,
}


def apply_smoothing(points: Sequence[VectorPoint], algorithm: SmoothingAlgorithm,
                    **params) -> List[VectorPoint]:
    """
    Run the smoothing function registered for algorithm.

    Args:
        points: Input points
        algorithm: Strategy tag
        **params: Keyword arguments forwarded to the strategy

    Returns:
        Smoothed points
    """
    return SMOOTHING_FUNCTIONS[algorithm](points, **params)


__all__ = [
    'SmoothingAlgorithm',
    'SMOOTHING_FUNCTIONS',
    'apply_smoothing',
    'catmull_rom_smooth',
    'b_spline_smooth',
    'gaussian_kernel',
    'gaussian_smooth',
    'moving_average_smooth',
    'adaptive_smooth',
    'pressure_aware_smooth',
    'turn_angle',
]
