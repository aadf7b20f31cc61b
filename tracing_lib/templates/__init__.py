"""Glyph templates and the template store.

A template is the reference geometry of one glyph: its strokes, in the order
they must be traced, each flattened to polylines with a precomputed bounding
box and arc length.

The module exports:
    Template: Immutable glyph geometry.
    TemplateStroke: One stroke with bbox and length.
    SkippedStroke: Record of a stroke that failed to load.
    load_template: Parse path strings into a Template.
    fit_to_region: Compute the ViewTransform fitting a template to a region.
    TemplateStore: Collection of templates with cached region fitting.

Example usage:
    Loading and fitting a glyph::

        from tracing_lib.templates import fit_to_region, load_template

        template = load_template(['M 0 0 L 100 0', 'M 50 0 L 50 100'], name='T')
        view = fit_to_region(template, 800, 600)
        fitted = template.scaled(view)
"""

from .store import TemplateStore
from .template import SkippedStroke, Template, TemplateStroke, fit_to_region, load_template

__all__ = [
    'Template', 'TemplateStroke', 'SkippedStroke',
    'load_template', 'fit_to_region', 'TemplateStore',
]
