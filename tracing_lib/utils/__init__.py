"""Utility functions for glyph tracing.

Geometry utilities:
    point_distance: Euclidean distance between two points.
    cumulative_lengths: Running arc length along a polyline.
    total_length: Arc length of a path across all sub-paths.
    point_at_distance: Point at a given arc length, clamped to the path.
    sample_points: Points at fixed spacing along each sub-path.

Example usage:
    Arc-length sampling::

        from tracing_lib.utils import sample_points, total_length

        stroke = [(0, 0), (100, 0)]
        total_length(stroke)                   # 100.0
        samples = sample_points(stroke, 10)    # 10 points, x = 0..90
"""

from .geometry import (
    as_polylines,
    cumulative_lengths,
    point_at_distance,
    point_distance,
    point_distance_squared,
    sample_points,
    total_length,
)

__all__ = [
    'point_distance', 'point_distance_squared',
    'as_polylines', 'cumulative_lengths', 'total_length',
    'point_at_distance', 'sample_points',
]
