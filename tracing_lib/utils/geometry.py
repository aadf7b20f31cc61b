"""Arc-length utilities for polylines.

This module provides the arc-length sampler used by both proximity and
completeness checks. Every function accepts any of:

    - a GeometricPath (each sub-path measured separately, closing segments
      included),
    - a single SubPath,
    - a plain sequence of (x, y) pairs or Points, or an (N, 2) array,
      treated as one open polyline.

The module provides the following functions:
    point_distance: Euclidean distance between two points.
    cumulative_lengths: Running arc length along a polyline.
    total_length: Summed arc length over all sub-paths.
    point_at_distance: Point at a given arc length, clamped to the path.
    sample_points: Points at a fixed spacing along each sub-path.

Example usage:
    Measuring and sampling a path::

        from tracing_lib.utils.geometry import total_length, point_at_distance

        path = [(0, 0), (100, 0), (100, 100)]
        total_length(path)               # 200.0
        point_at_distance(path, 150)     # (Point(100.0, 50.0), True)
        point_at_distance(path, 500)     # (Point(100.0, 100.0), False)
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np

from ..domain.geometry import GeometricPath, Point, SubPath

logger = logging.getLogger(__name__)


def point_distance_squared(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    """Compute squared Euclidean distance between two points.

    Using squared distance avoids the sqrt computation, which is useful
    when comparing distances (the ordering is preserved).
    """
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return dx * dx + dy * dy


def point_distance(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    """Compute Euclidean distance between two points."""
    return point_distance_squared(p1, p2) ** 0.5


def as_polylines(path) -> List[np.ndarray]:
    """Normalize any supported path form into a list of (N, 2) arrays.

    Args:
        path: GeometricPath, SubPath, array, or sequence of points.

    Returns:
        One float array per sub-path, in drawing order. Closed sub-paths
        include their closing point. Empty inputs give an empty list.
    """
    if isinstance(path, GeometricPath):
        return [sp.to_array() for sp in path.subpaths]
    if isinstance(path, SubPath):
        return [path.to_array()] if len(path) else []

    pts = [p.to_tuple() if isinstance(p, Point) else (p[0], p[1]) for p in path]
    if not pts:
        return []
    return [np.asarray(pts, dtype=float).reshape(-1, 2)]


def cumulative_lengths(points: np.ndarray) -> np.ndarray:
    """Arc length from the start of a polyline to each of its vertices.

    Args:
        points: (N, 2) array of vertices, N >= 1.

    Returns:
        Array of N distances, starting at 0.0.
    """
    points = np.asarray(points, dtype=float)
    if len(points) < 2:
        return np.zeros(len(points))
    diffs = np.diff(points, axis=0)
    segment_lengths = np.sqrt((diffs ** 2).sum(axis=1))
    return np.concatenate([[0.0], np.cumsum(segment_lengths)])


def total_length(path) -> float:
    """Sum of segment lengths across all sub-paths."""
    return float(sum(cumulative_lengths(pts)[-1] for pts in as_polylines(path)))


def point_at_distance(path, distance: float) -> Tuple[Point, bool]:
    """Find the point at a given arc length along a path.

    Walks sub-paths in order, accumulating length until ``distance`` is
    reached, and interpolates linearly within the final segment. Sub-paths
    are not joined: the gap between one sub-path's end and the next one's
    start contributes no length.

    Args:
        path: Any supported path form.
        distance: Arc length from the start of the first sub-path.

    Returns:
        Tuple of (point, within_bounds). Distances before the start clamp to
        the first point and distances past the end clamp to the last point;
        ``within_bounds`` is False in both cases.

    Raises:
        ValueError: If the path has no points.
    """
    polylines = as_polylines(path)
    if not polylines:
        raise ValueError("Cannot sample an empty path")

    if distance < 0:
        first = polylines[0][0]
        return Point(float(first[0]), float(first[1])), False

    remaining = distance
    for pts in polylines:
        cum = cumulative_lengths(pts)
        if remaining <= cum[-1]:
            x = np.interp(remaining, cum, pts[:, 0])
            y = np.interp(remaining, cum, pts[:, 1])
            return Point(float(x), float(y)), True
        remaining -= cum[-1]

    last = polylines[-1][-1]
    return Point(float(last[0]), float(last[1])), False


def sample_points(path, step: float, include_end: bool = False) -> np.ndarray:
    """Sample each sub-path at a fixed arc-length spacing.

    Distance accumulation restarts at every sub-path, so each sub-path
    contributes samples at 0, step, 2*step, ... below its own length. A
    zero-length sub-path contributes its single point.

    Args:
        path: Any supported path form.
        step: Spacing between samples; must be positive.
        include_end: Also sample the final point of each sub-path when the
            spacing does not land on it exactly.

    Returns:
        (M, 2) array of sampled points; empty (0, 2) for an empty path.

    Example:
        >>> sample_points([(0, 0), (25, 0)], step=10).tolist()
        [[0.0, 0.0], [10.0, 0.0], [20.0, 0.0]]
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    chunks = []
    for pts in as_polylines(path):
        cum = cumulative_lengths(pts)
        length = cum[-1]
        if length <= 0:
            chunks.append(pts[:1])
            continue
        ds = np.arange(0.0, length, step)
        if include_end and ds[-1] < length:
            ds = np.append(ds, length)
        chunks.append(np.column_stack([np.interp(ds, cum, pts[:, 0]),
                                       np.interp(ds, cum, pts[:, 1])]))

    if not chunks:
        return np.empty((0, 2))
    samples = np.vstack(chunks)
    logger.debug("Sampled %d points at step %.2f", len(samples), step)
    return samples
