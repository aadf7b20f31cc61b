"""Proximity of points to a template stroke.

A template stroke is sampled at a fixed arc-length step (restarting at each
sub-path) and a point counts as near when its distance to the closest sample
is within the threshold. This is an approximation of true point-to-curve
distance whose error is bounded by half the sampling step, which is well
below the width of a drawn stroke.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.spatial import cKDTree

from ..config import FEEDBACK_DISTANCE_THRESHOLD, TEMPLATE_SAMPLE_STEP
from ..domain.geometry import Point
from ..utils.geometry import sample_points

logger = logging.getLogger(__name__)


def _xy(point) -> tuple[float, float]:
    if isinstance(point, Point):
        return point.to_tuple()
    return (float(point[0]), float(point[1]))


class ProximityIndex:
    """Nearest-sample lookup for one template stroke.

    Samples the stroke once and answers distance queries with a KD-tree, so
    per-point live feedback does not resample the template.

    Attributes:
        samples: (M, 2) array of sampled template points.
        step: Sampling step used.

    Example:
        >>> index = ProximityIndex(GeometricPath.from_points([(0, 0), (100, 0)]))
        >>> index.distance((50, 30))
        30.0
        >>> index.is_near((50, 30), threshold=25)
        False
    """

    def __init__(self, stroke, step: float = TEMPLATE_SAMPLE_STEP):
        self.step = step
        self.samples = sample_points(stroke, step)
        self._tree = cKDTree(self.samples) if len(self.samples) else None
        logger.debug("Proximity index built from %d samples", len(self.samples))

    @property
    def is_empty(self) -> bool:
        return self._tree is None

    def distance(self, point) -> float:
        """Distance from point to the closest sample; inf for an empty stroke."""
        if self._tree is None:
            return float('inf')
        dist, _ = self._tree.query(_xy(point))
        return float(dist)

    def nearest_distances(self, points: Sequence) -> np.ndarray:
        """Vectorized ``distance`` for an (N, 2) array or list of points."""
        pts = np.array([_xy(p) for p in points], dtype=float).reshape(-1, 2)
        if self._tree is None:
            return np.full(len(pts), np.inf)
        if len(pts) == 0:
            return np.empty(0)
        dists, _ = self._tree.query(pts)
        return np.asarray(dists, dtype=float)

    def is_near(self, point, threshold: float = FEEDBACK_DISTANCE_THRESHOLD) -> bool:
        """True iff the point is within ``threshold`` of some sample."""
        return self.distance(point) <= threshold


def is_near(point, template_stroke, threshold: float = FEEDBACK_DISTANCE_THRESHOLD,
            step: float = TEMPLATE_SAMPLE_STEP) -> bool:
    """Check whether a point lies within ``threshold`` of a template stroke.

    Args:
        point: Point or (x, y) pair.
        template_stroke: GeometricPath or point sequence.
        threshold: Maximum accepted distance.
        step: Template sampling step.

    Returns:
        False for an empty template, otherwise whether the closest sampled
        template point is within the threshold.
    """
    return ProximityIndex(template_stroke, step).is_near(point, threshold)
