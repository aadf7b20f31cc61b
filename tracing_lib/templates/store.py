"""Template store for glyph templates.

This module provides the TemplateStore class, which owns the parsed templates
of a glyph set and the transforms that fit them into a display region.

The store provides:
    - Central storage for all glyph templates, keyed by glyph name
    - Parsing of path strings on registration
    - Per-glyph region fitting, recomputed whenever the region size changes
    - Factory method for bulk loading from dictionaries

Example usage:
    Basic store operations::

        from tracing_lib.templates.store import TemplateStore

        store = TemplateStore()
        store.register('L', ['M 10 10 V 90', 'M 10 90 H 60'])

        template = store.get('L')
        fitted = store.scaled('L', 800, 600)

    Bulk loading from dictionaries::

        store = TemplateStore.from_dict({
            'T': ['M 0 0 H 100', 'M 50 0 V 120'],
            'O': ['M 50 0 Q 100 0 100 50 T 50 100 T 0 50 T 50 0 Z'],
        })
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Tuple

from ..config import TracingConfig
from ..domain.geometry import ViewTransform
from ..errors import DegenerateGeometryError
from ..parsing.interpreter import PathInterpreter
from .template import Template, fit_to_region, load_template

logger = logging.getLogger(__name__)


class TemplateStore:
    """Store for glyph templates.

    Templates are immutable once registered. Fitted transforms are cached per
    glyph together with the region size they were computed for, and
    recomputed when asked for a different size.

    Attributes:
        config: Parameters for parsing and fitting.

    Example:
        >>> store = TemplateStore()
        >>> store.register('I', ['M 50 0 V 100'])
        >>> store.names()
        ['I']
    """

    def __init__(self, config: TracingConfig | None = None):
        """Initialize an empty template store.

        Args:
            config: Parsing and fitting parameters. Defaults to
                TracingConfig().
        """
        self.config = config or TracingConfig()
        self._interpreter = PathInterpreter(self.config.curve_segments)
        self._templates: Dict[str, Template] = {}
        self._views: Dict[str, Tuple[Tuple[float, float], ViewTransform]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def register(self, name: str, strokes: Iterable[str]) -> Template:
        """Parse and store a glyph's strokes.

        Replaces any template previously registered under ``name``.

        Args:
            name: Glyph identifier.
            strokes: One path-description string per stroke, in tracing
                order.

        Returns:
            The unscaled Template.
        """
        template = load_template(strokes, name=name, interpreter=self._interpreter)
        self.add(template)
        return template

    def add(self, template: Template) -> None:
        """Store an already built template under its name."""
        self._templates[template.name] = template
        self._views.pop(template.name, None)

    def get(self, name: str) -> Template | None:
        """Get the unscaled template for a glyph, or None if unknown."""
        return self._templates.get(name)

    def names(self) -> list[str]:
        """Glyph names in registration order."""
        return list(self._templates)

    def view_for(self, name: str, region_width: float, region_height: float) -> ViewTransform:
        """Get the transform fitting a glyph into a region.

        Raises:
            KeyError: If no template is registered under ``name``.
            DegenerateGeometryError: If the glyph cannot be fitted.
        """
        template = self._templates[name]
        size = (region_width, region_height)
        cached = self._views.get(name)
        if cached is not None and cached[0] == size:
            return cached[1]

        cfg = self.config
        view = fit_to_region(template, region_width, region_height,
                             reserved_fraction=cfg.fill_fraction,
                             stroke_half_width=cfg.stroke_half_width,
                             extra_padding=cfg.extra_padding)
        self._views[name] = (size, view)
        return view

    def scaled(self, name: str, region_width: float, region_height: float) -> Template | None:
        """Get a glyph's template fitted to a region.

        Returns:
            The fitted Template, or None if the glyph is unknown or its
            geometry is degenerate (the caller should keep it hidden).
        """
        template = self._templates.get(name)
        if template is None:
            logger.warning("No template registered for %r", name)
            return None
        try:
            view = self.view_for(name, region_width, region_height)
        except DegenerateGeometryError as e:
            logger.warning("Cannot fit %r to region: %s", name, e)
            return None
        return template.scaled(view)

    @classmethod
    def from_dict(cls, glyphs: Dict[str, Iterable[str]],
                  config: TracingConfig | None = None) -> TemplateStore:
        """Create a store from a mapping of glyph name to stroke strings.

        Example:
            >>> store = TemplateStore.from_dict({'I': ['M 50 0 V 100']})
            >>> len(store)
            1
        """
        store = cls(config)
        for name, strokes in glyphs.items():
            store.register(name, strokes)
        return store
