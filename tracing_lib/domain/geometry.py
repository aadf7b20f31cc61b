"""Geometric value objects for glyph tracing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def lerp(self, other: Point, t: float) -> Point:
        """Linear interpolation towards another point (t=0 -> self)."""
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def reflect_about(self, center: Point) -> Point:
        """Mirror this point through a center point."""
        return Point(2 * center.x - self.x, 2 * center.y - self.y)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_list(self) -> List[float]:
        """Convert to list for JSON serialization."""
        return [float(self.x), float(self.y)]

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> Point:
        """Create from tuple or any 2-item sequence."""
        return cls(float(t[0]), float(t[1]))


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class BBox:
    """Immutable bounding box."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Point:
        return Point(
            (self.x_min + self.x_max) / 2,
            (self.y_min + self.y_max) / 2
        )

    @property
    def is_degenerate(self) -> bool:
        """True when the box has no width or no height."""
        return self.width <= 0 or self.height <= 0

    def contains(self, point: Point, tolerance: float = 0.0) -> bool:
        """Check if point is inside bounding box."""
        return (self.x_min - tolerance <= point.x <= self.x_max + tolerance and
                self.y_min - tolerance <= point.y <= self.y_max + tolerance)

    def contains_bbox(self, other: BBox, tolerance: float = 0.0) -> bool:
        """Check if another box lies entirely inside this one."""
        return (self.contains(Point(other.x_min, other.y_min), tolerance) and
                self.contains(Point(other.x_max, other.y_max), tolerance))

    def union(self, other: BBox) -> BBox:
        """Smallest box containing both boxes."""
        return BBox(
            min(self.x_min, other.x_min), min(self.y_min, other.y_min),
            max(self.x_max, other.x_max), max(self.y_max, other.y_max),
        )

    def padded(self, amount: float) -> BBox:
        """Grow the box by ``amount`` on every side."""
        return BBox(self.x_min - amount, self.y_min - amount,
                    self.x_max + amount, self.y_max + amount)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to tuple for compatibility."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def to_dict(self) -> dict:
        return {'x_min': self.x_min, 'y_min': self.y_min,
                'x_max': self.x_max, 'y_max': self.y_max}

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> BBox:
        """Create bounding box containing all points."""
        points = list(points)
        if not points:
            return cls(0, 0, 0, 0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def union_all(cls, boxes: Iterable[BBox]) -> BBox:
        """Union of several boxes; the empty box when there are none."""
        result = None
        for box in boxes:
            result = box if result is None else result.union(box)
        return result if result is not None else cls(0, 0, 0, 0)


@dataclass(frozen=True)
class ViewTransform:
    """Uniform scale followed by a translation.

    Maps template coordinates into region coordinates:
    ``x' = x * scale + translate_x``.
    """
    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    def apply(self, point: Point) -> Point:
        return Point(point.x * self.scale + self.translate_x,
                     point.y * self.scale + self.translate_y)

    def apply_array(self, points: np.ndarray) -> np.ndarray:
        """Transform an (N, 2) array of points."""
        points = np.asarray(points, dtype=float)
        return points * self.scale + np.array([self.translate_x, self.translate_y])

    def invert(self, point: Point) -> Point:
        """Map a region point back into template coordinates."""
        return Point((point.x - self.translate_x) / self.scale,
                     (point.y - self.translate_y) / self.scale)

    def apply_bbox(self, bbox: BBox) -> BBox:
        lo = self.apply(Point(bbox.x_min, bbox.y_min))
        hi = self.apply(Point(bbox.x_max, bbox.y_max))
        return BBox(lo.x, lo.y, hi.x, hi.y)

    def to_dict(self) -> dict:
        return {'scale': self.scale, 'translate_x': self.translate_x,
                'translate_y': self.translate_y}

    @classmethod
    def identity(cls) -> ViewTransform:
        return cls()


@dataclass(frozen=True)
class SubPath:
    """A connected polyline within a stroke.

    A closed sub-path stores each vertex once; the segment from the last
    point back to the first is implied by ``closed``.
    """
    points: Tuple[Point, ...]
    closed: bool = False

    def __post_init__(self):
        # Lists would make the value mutable through aliasing
        object.__setattr__(self, 'points', tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        """Where a pen tracing this sub-path stops."""
        return self.points[0] if self.closed else self.points[-1]

    @property
    def bbox(self) -> BBox:
        return BBox.from_points(self.points)

    def polyline(self) -> Tuple[Point, ...]:
        """Vertices in drawing order, with the closing point when closed."""
        if self.closed and len(self.points) > 1 and self.points[-1] != self.points[0]:
            return self.points + (self.points[0],)
        return self.points

    def length(self) -> float:
        """Arc length including the implied closing segment."""
        pts = self.polyline()
        total = 0.0
        for i in range(1, len(pts)):
            total += pts[i].distance_to(pts[i - 1])
        return total

    def to_array(self) -> np.ndarray:
        """Polyline as an (N, 2) float array."""
        return np.array([p.to_tuple() for p in self.polyline()], dtype=float).reshape(-1, 2)

    def transformed(self, view: ViewTransform) -> SubPath:
        return SubPath(tuple(view.apply(p) for p in self.points), self.closed)

    def to_dict(self) -> dict:
        return {'points': [p.to_list() for p in self.points], 'closed': self.closed}


@dataclass(frozen=True)
class GeometricPath:
    """Ordered sub-paths making up one stroke's geometry.

    Example:
        >>> path = GeometricPath.from_points([(0, 0), (30, 40)])
        >>> path.length()
        50.0
    """
    subpaths: Tuple[SubPath, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'subpaths', tuple(sp for sp in self.subpaths if len(sp) > 0))

    def __len__(self) -> int:
        return len(self.subpaths)

    def __iter__(self) -> Iterator[SubPath]:
        return iter(self.subpaths)

    def __getitem__(self, idx) -> SubPath:
        return self.subpaths[idx]

    @property
    def is_empty(self) -> bool:
        return not self.subpaths

    @property
    def start(self) -> Point:
        return self.subpaths[0].start

    @property
    def end(self) -> Point:
        return self.subpaths[-1].end

    @property
    def bbox(self) -> BBox:
        return BBox.union_all(sp.bbox for sp in self.subpaths)

    @property
    def point_count(self) -> int:
        return sum(len(sp) for sp in self.subpaths)

    def length(self) -> float:
        """Total arc length across all sub-paths."""
        return sum(sp.length() for sp in self.subpaths)

    def transformed(self, view: ViewTransform) -> GeometricPath:
        return GeometricPath(tuple(sp.transformed(view) for sp in self.subpaths))

    def to_list(self) -> List[dict]:
        """Convert to nested structure for JSON serialization."""
        return [sp.to_dict() for sp in self.subpaths]

    @classmethod
    def from_points(cls, points: Iterable, closed: bool = False) -> GeometricPath:
        """Single open polyline from points or (x, y) pairs."""
        pts = tuple(p if isinstance(p, Point) else Point.from_tuple(p) for p in points)
        return cls((SubPath(pts, closed),))

    @classmethod
    def from_list(cls, lst: List[dict]) -> GeometricPath:
        """Create from the structure produced by ``to_list``."""
        return cls(tuple(
            SubPath(tuple(Point.from_tuple(p) for p in d['points']), d.get('closed', False))
            for d in lst
        ))
