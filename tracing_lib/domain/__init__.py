"""Domain objects for glyph tracing.

This module provides the value objects shared by every layer of the package:
geometric primitives, parsed stroke geometry, and the transform that fits a
glyph into a display region.

The module exports the following classes:
    Point: Immutable 2D point with vector operations.
    BBox: Immutable bounding box with union and padding.
    SubPath: Connected polyline with a closed flag.
    GeometricPath: Ordered sub-paths forming one stroke.
    ViewTransform: Uniform scale plus translation.

Example usage:
    Working with geometry::

        from tracing_lib.domain import GeometricPath, ViewTransform

        path = GeometricPath.from_points([(0, 0), (10, 0), (10, 10)])
        print(path.length(), path.bbox.to_tuple())

        view = ViewTransform(scale=2.0, translate_x=5, translate_y=5)
        scaled = path.transformed(view)
"""

from .geometry import BBox, GeometricPath, Point, SubPath, ViewTransform

__all__ = ['Point', 'BBox', 'SubPath', 'GeometricPath', 'ViewTransform']
