"""Glyph templates and region fitting."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

from ..config import EXTRA_PADDING, FILL_FRACTION, STROKE_HALF_WIDTH
from ..domain.geometry import BBox, GeometricPath, ViewTransform
from ..errors import DegenerateGeometryError, PathParseError
from ..parsing.interpreter import PathInterpreter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateStroke:
    """One stroke of a glyph with its precomputed measurements."""
    path: GeometricPath
    bbox: BBox
    length: float
    source: str = ''

    @classmethod
    def from_path(cls, path: GeometricPath, source: str = '') -> TemplateStroke:
        return cls(path=path, bbox=path.bbox, length=path.length(), source=source)

    def transformed(self, view: ViewTransform) -> TemplateStroke:
        return TemplateStroke.from_path(self.path.transformed(view), self.source)

    def to_dict(self) -> dict:
        return {
            'subpaths': self.path.to_list(),
            'bbox': self.bbox.to_dict(),
            'length': self.length,
        }


@dataclass(frozen=True)
class SkippedStroke:
    """A stroke whose path data could not be parsed, or parsed to nothing."""
    index: int
    source: str
    error: PathParseError | None = None

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'source': self.source,
            'error': self.error.to_dict() if self.error else None,
        }


@dataclass(frozen=True)
class Template:
    """Reference geometry for one glyph.

    Stroke order is the required tracing order. Templates are immutable;
    fitting produces a new Template via ``scaled``.

    Attributes:
        name: Glyph identifier.
        strokes: Usable strokes in tracing order.
        skipped: Strokes dropped while loading, with their source index.
        view: Transform already applied to the strokes (identity when
            unscaled).
    """
    name: str
    strokes: Tuple[TemplateStroke, ...] = ()
    skipped: Tuple[SkippedStroke, ...] = ()
    view: ViewTransform = field(default_factory=ViewTransform.identity)

    def __len__(self) -> int:
        return len(self.strokes)

    def __iter__(self) -> Iterator[TemplateStroke]:
        return iter(self.strokes)

    def __getitem__(self, idx) -> TemplateStroke:
        return self.strokes[idx]

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    @property
    def bbox(self) -> BBox:
        """Combined bounding box of every stroke."""
        return BBox.union_all(s.bbox for s in self.strokes)

    @property
    def paths(self) -> Tuple[GeometricPath, ...]:
        return tuple(s.path for s in self.strokes)

    def scaled(self, view: ViewTransform) -> Template:
        """Return a copy with ``view`` applied to every stroke."""
        return Template(
            name=self.name,
            strokes=tuple(s.transformed(view) for s in self.strokes),
            skipped=self.skipped,
            view=view,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'strokes': [s.to_dict() for s in self.strokes],
            'skipped': [s.to_dict() for s in self.skipped],
            'bbox': self.bbox.to_dict(),
            'view': self.view.to_dict(),
        }


def load_template(strokes: Iterable[str], name: str = '',
                  interpreter: PathInterpreter | None = None) -> Template:
    """Parse one path string per stroke into a Template.

    Strokes that fail to parse, or parse to no points, are skipped and
    recorded on ``Template.skipped`` so the rest of the glyph stays usable.

    Args:
        strokes: Path-description strings in tracing order.
        name: Glyph identifier.
        interpreter: Interpreter to use; defaults to standard curve resolution.

    Returns:
        Unscaled Template.
    """
    interpreter = interpreter or PathInterpreter()
    kept = []
    skipped = []
    for i, source in enumerate(strokes):
        result = interpreter.parse(source)
        if result.path.is_empty:
            logger.warning("Skipping stroke %d of %r: %s", i, name,
                           result.error if result.error else 'no geometry')
            skipped.append(SkippedStroke(i, source, result.error))
            continue
        kept.append(TemplateStroke.from_path(result.path, source))

    template = Template(name=name, strokes=tuple(kept), skipped=tuple(skipped))
    logger.info("Loaded template %r: %d strokes, %d skipped", name, len(kept), len(skipped))
    return template


def fit_to_region(
    template: Template,
    region_width: float,
    region_height: float,
    reserved_fraction: float = FILL_FRACTION,
    stroke_half_width: float = STROKE_HALF_WIDTH,
    extra_padding: float = EXTRA_PADDING,
) -> ViewTransform:
    """Compute the transform that centers a template inside a region.

    The combined bounding box is padded by ``stroke_half_width +
    extra_padding`` on all sides, scaled uniformly so the padded box fills at
    most ``reserved_fraction`` of the region in both dimensions, and centered.

    Args:
        template: Unscaled template.
        region_width: Width of the target region.
        region_height: Height of the target region.
        reserved_fraction: Fraction of the region the glyph may fill.
        stroke_half_width: Half the drawn stroke width.
        extra_padding: Fixed padding beyond the stroke half-width.

    Returns:
        ViewTransform mapping template coordinates into the region.

    Raises:
        DegenerateGeometryError: If the template has no strokes, its combined
            bounding box has zero width or zero height, or the region is
            empty.
    """
    if not template.strokes:
        raise DegenerateGeometryError(f"Template {template.name!r} has no strokes")
    if region_width <= 0 or region_height <= 0:
        raise DegenerateGeometryError(
            f"Region {region_width}x{region_height} has no area")

    bounds = template.bbox
    if bounds.is_degenerate:
        raise DegenerateGeometryError(
            f"Template {template.name!r} bounds {bounds.width}x{bounds.height} have no area")

    padded = bounds.padded(stroke_half_width + extra_padding)
    scale = min(region_width * reserved_fraction / padded.width,
                region_height * reserved_fraction / padded.height)
    translate_x = (region_width - padded.width * scale) / 2 - padded.x_min * scale
    translate_y = (region_height - padded.height * scale) / 2 - padded.y_min * scale

    logger.debug("Fitted %r to %sx%s: scale=%.4f translate=(%.2f, %.2f)",
                 template.name, region_width, region_height, scale, translate_x, translate_y)
    return ViewTransform(scale, translate_x, translate_y)
