"""Bezier flattening into polylines."""

from __future__ import annotations

from typing import List

import numpy as np

from ..domain.geometry import Point


def _to_points(xs: np.ndarray, ys: np.ndarray) -> List[Point]:
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def flatten_cubic(p0: Point, p1: Point, p2: Point, p3: Point, segments: int) -> List[Point]:
    """Sample a cubic Bezier at ``segments + 1`` evenly spaced parameters.

    The first point is ``p0`` and the last is exactly ``p3``.
    """
    t = np.linspace(0.0, 1.0, segments + 1)
    mt = 1.0 - t
    b0, b1, b2, b3 = mt ** 3, 3 * mt ** 2 * t, 3 * mt * t ** 2, t ** 3
    xs = b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x
    ys = b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y
    return _to_points(xs, ys)


def flatten_quadratic(p0: Point, p1: Point, p2: Point, segments: int) -> List[Point]:
    """Sample a quadratic Bezier at ``segments + 1`` evenly spaced parameters."""
    t = np.linspace(0.0, 1.0, segments + 1)
    mt = 1.0 - t
    b0, b1, b2 = mt ** 2, 2 * mt * t, t ** 2
    xs = b0 * p0.x + b1 * p1.x + b2 * p2.x
    ys = b0 * p0.y + b1 * p1.y + b2 * p2.y
    return _to_points(xs, ys)
