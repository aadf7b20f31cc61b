"""Unit tests for tracing_lib.templates.

Tests:
    - load_template: stroke order, skipped strokes, measurements
    - fit_to_region: containment, centering, degenerate geometry
    - Template.scaled and serialization
    - TemplateStore: registration, lookup, cached fitting
"""

import unittest

import pytest

from tracing_lib.config import TracingConfig
from tracing_lib.domain.geometry import BBox, Point, ViewTransform
from tracing_lib.errors import DegenerateGeometryError, ErrorKind
from tracing_lib.parsing.interpreter import PathInterpreter
from tracing_lib.templates.store import TemplateStore
from tracing_lib.templates.template import Template, fit_to_region, load_template


class TestLoadTemplate(unittest.TestCase):
    """Tests for load_template."""

    def test_strokes_kept_in_order(self):
        template = load_template(['M 0 0 L 200 0', 'M 100 0 L 100 200'], name='T')
        self.assertEqual(template.name, 'T')
        self.assertEqual(template.stroke_count, 2)
        self.assertEqual(template[0].length, 200.0)
        self.assertEqual(template[1].path.start, Point(100, 0))

    def test_combined_bbox(self):
        template = load_template(['M 0 0 L 200 0', 'M 100 0 L 100 200'])
        self.assertEqual(template.bbox.to_tuple(), (0, 0, 200, 200))

    def test_bad_strokes_skipped(self):
        template = load_template(['M 0 0 L 10 10', 'L 5 5', 'M 0 0 L 5', ''])
        self.assertEqual(template.stroke_count, 1)
        self.assertEqual([s.index for s in template.skipped], [1, 2, 3])
        self.assertEqual(template.skipped[0].error.kind, ErrorKind.MALFORMED_GRAMMAR)
        self.assertEqual(template.skipped[1].error.kind, ErrorKind.OPERAND_UNDERFLOW)
        self.assertIsNone(template.skipped[2].error)

    def test_skipped_logged(self):
        with self.assertLogs('tracing_lib.templates.template', level='WARNING') as logs:
            load_template(['M 0 0 L 1', 'M 0 0 L 1 1'], name='x')
        self.assertIn('Skipping stroke 0', logs.output[0])

    def test_custom_interpreter(self):
        template = load_template(['M 0 0 Q 5 10 10 0'], interpreter=PathInterpreter(4))
        self.assertEqual(template[0].path.point_count, 5)

    def test_stroke_source_kept(self):
        template = load_template(['M 0 0 L 10 10'])
        self.assertEqual(template[0].source, 'M 0 0 L 10 10')

    def test_unscaled_view_is_identity(self):
        self.assertEqual(load_template(['M 0 0 L 1 1']).view, ViewTransform.identity())


class TestFitToRegion(unittest.TestCase):
    """Tests for fit_to_region."""

    def setUp(self):
        self.template = load_template(['M 0 0 L 200 0', 'M 100 0 L 100 200'], name='T')

    def test_fitted_bounds_inside_region(self):
        for width, height in [(800, 600), (600, 800), (300, 300), (1920, 200)]:
            view = fit_to_region(self.template, width, height)
            fitted = self.template.scaled(view).bbox
            self.assertTrue(BBox(0, 0, width, height).contains_bbox(fitted, tolerance=1e-9),
                            f"{fitted} outside {width}x{height}")

    def test_padded_box_fills_fraction_of_limiting_side(self):
        view = fit_to_region(self.template, 800, 600)
        padded = self.template.bbox.padded(12.5 + 50)
        self.assertAlmostEqual(padded.height * view.scale, 600 * 0.8)
        self.assertLess(padded.width * view.scale, 800 * 0.8 + 1e-9)

    def test_centered(self):
        view = fit_to_region(self.template, 800, 600)
        center = self.template.scaled(view).bbox.center
        self.assertAlmostEqual(center.x, 400)
        self.assertAlmostEqual(center.y, 300)

    def test_offset_glyph_centered(self):
        template = load_template(['M 1000 1000 L 1100 1050'])
        center = template.scaled(fit_to_region(template, 500, 500)).bbox.center
        self.assertAlmostEqual(center.x, 250)
        self.assertAlmostEqual(center.y, 250)

    def test_custom_padding(self):
        view = fit_to_region(self.template, 400, 400, reserved_fraction=1.0,
                             stroke_half_width=0, extra_padding=0)
        self.assertAlmostEqual(view.scale, 2.0)
        self.assertAlmostEqual(view.translate_x, 0.0)

    def test_scaled_template_keeps_order_and_view(self):
        view = fit_to_region(self.template, 800, 600)
        scaled = self.template.scaled(view)
        self.assertEqual(scaled.view, view)
        self.assertAlmostEqual(scaled[0].length, 200 * view.scale)
        self.assertEqual(scaled[1].path.start, view.apply(Point(100, 0)))

    def test_horizontal_line_is_degenerate(self):
        template = load_template(['M 0 0 L 100 0'])
        with self.assertRaises(DegenerateGeometryError) as ctx:
            fit_to_region(template, 800, 600)
        self.assertEqual(ctx.exception.kind, ErrorKind.DEGENERATE_GEOMETRY)

    def test_single_point_is_degenerate(self):
        with self.assertRaises(DegenerateGeometryError):
            fit_to_region(load_template(['M 5 5']), 800, 600)

    def test_no_strokes(self):
        with self.assertRaises(DegenerateGeometryError):
            fit_to_region(Template(name='empty'), 800, 600)

    def test_empty_region(self):
        with self.assertRaises(DegenerateGeometryError):
            fit_to_region(self.template, 0, 600)


class TestTemplateSerialization(unittest.TestCase):
    """Tests for Template.to_dict."""

    def test_to_dict(self):
        template = load_template(['M 0 0 L 10 10', 'oops'], name='g')
        d = template.to_dict()
        self.assertEqual(d['name'], 'g')
        self.assertEqual(len(d['strokes']), 1)
        self.assertEqual(d['strokes'][0]['subpaths'][0]['points'], [[0.0, 0.0], [10.0, 10.0]])
        self.assertEqual(d['skipped'][0]['index'], 1)
        self.assertEqual(d['view']['scale'], 1.0)


class TestTemplateStore(unittest.TestCase):
    """Tests for TemplateStore."""

    def setUp(self):
        self.store = TemplateStore.from_dict({
            'T': ['M 0 0 H 100', 'M 50 0 V 120'],
            'dash': ['M 0 0 H 100'],
        })

    def test_lookup(self):
        self.assertIn('T', self.store)
        self.assertNotIn('Q', self.store)
        self.assertEqual(len(self.store), 2)
        self.assertEqual(self.store.names(), ['T', 'dash'])
        self.assertEqual(self.store.get('T').stroke_count, 2)
        self.assertIsNone(self.store.get('Q'))

    def test_view_cached_for_same_size(self):
        first = self.store.view_for('T', 800, 600)
        self.assertIs(self.store.view_for('T', 800, 600), first)

    def test_view_recomputed_on_resize(self):
        small = self.store.view_for('T', 400, 300)
        large = self.store.view_for('T', 800, 600)
        self.assertAlmostEqual(large.scale, small.scale * 2)

    def test_register_replaces_and_clears_cache(self):
        before = self.store.view_for('T', 800, 600)
        self.store.register('T', ['M 0 0 H 50', 'M 25 0 V 60'])
        after = self.store.view_for('T', 800, 600)
        self.assertGreater(after.scale, before.scale)
        self.assertEqual(self.store.get('T')[0].length, 50.0)

    def test_scaled(self):
        scaled = self.store.scaled('T', 800, 600)
        self.assertEqual(scaled.stroke_count, 2)
        self.assertTrue(BBox(0, 0, 800, 600).contains_bbox(scaled.bbox))

    def test_scaled_unknown_glyph(self):
        self.assertIsNone(self.store.scaled('Q', 800, 600))

    def test_scaled_degenerate_glyph(self):
        with self.assertLogs('tracing_lib.templates.store', level='WARNING'):
            self.assertIsNone(self.store.scaled('dash', 800, 600))

    def test_view_for_unknown_glyph(self):
        with self.assertRaises(KeyError):
            self.store.view_for('Q', 800, 600)

    def test_config_curve_segments(self):
        store = TemplateStore(TracingConfig(curve_segments=4))
        template = store.register('c', ['M 0 0 Q 5 10 10 0'])
        self.assertEqual(template[0].path.point_count, 5)

    def test_config_fill_fraction(self):
        full = TemplateStore(TracingConfig(fill_fraction=1.0))
        full.register('T', ['M 0 0 H 100', 'M 50 0 V 120'])
        self.assertAlmostEqual(full.view_for('T', 800, 600).scale,
                               self.store.view_for('T', 800, 600).scale / 0.8)


@pytest.mark.parametrize("width,height", [(800, 600), (320, 480), (1000, 100)])
def test_fitted_template_within_region(t_template, width, height):
    fitted = t_template.scaled(fit_to_region(t_template, width, height))
    region = BBox(0, 0, width, height)
    for stroke in fitted:
        for subpath in stroke.path:
            for p in subpath:
                assert region.contains(p, tolerance=1e-9)
