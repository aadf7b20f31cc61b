"""Integration tests for tracing a glyph end to end.

These tests take glyph path data through parsing, fitting into a region,
and a full tracing session driven by pointer-style input, including curved
strokes, a rejected attempt and a region resize.
"""

import numpy as np
import pytest

from tracing_lib import (
    SessionState,
    TemplateStore,
    TracingConfig,
    TracingService,
    TracingSession,
    fit_to_region,
    load_template,
)
from tracing_lib.utils.geometry import sample_points

pytestmark = pytest.mark.integration

# Two-stroke glyph with a smooth cubic bowl and a closed quadratic loop
GLYPH = {
    'bowl': [
        'M 20 20 C 20 80 80 80 80 20 S 140 -40 140 20',
        'M 60 120 Q 90 90 120 120 T 180 120 Z',
    ],
    'T': ['M 0 0 H 100', 'M 50 0 V 120'],
}


def densify(path, step=2.0, jitter=0.0, seed=0):
    points = sample_points(path, step, include_end=True)
    if jitter:
        rng = np.random.default_rng(seed)
        points = points + rng.uniform(-jitter, jitter, size=points.shape)
    return [tuple(p) for p in points]


def trace(session, points):
    session.begin_stroke(points[0])
    live = [session.add_point(p) for p in points[1:-1]]
    return session.end_stroke(points[-1]), live


@pytest.fixture
def store():
    return TemplateStore.from_dict(GLYPH)


def test_curved_glyph_traced_with_jitter(store):
    template = store.scaled('bowl', 800, 600)
    assert template is not None
    session = TracingSession(template)

    for i, stroke in enumerate(template):
        result, live = trace(session, densify(stroke.path, jitter=8.0, seed=i))
        assert result.accepted, result.verdict
        assert all(live)

    assert session.state is SessionState.COMPLETE
    assert len(session.accepted_strokes) == 2


def test_closed_stroke_requires_closing_segment(store):
    template = store.scaled('bowl', 800, 600)
    session = TracingSession(template)
    trace(session, densify(template[0].path))

    loop = template[1].path
    points = densify(loop)
    open_trace = points[:len(points) * 2 // 3]
    result, _ = trace(session, open_trace)
    assert not result.accepted
    assert session.stroke_index == 1

    result, _ = trace(session, points)
    assert result.accepted
    assert session.is_complete


def test_wrong_order_then_correct_order(store):
    template = store.scaled('T', 800, 600)
    session = TracingSession(template)
    bar, stem = (densify(s.path) for s in template)

    result, live = trace(session, stem)
    assert not result.accepted
    assert not all(live)
    assert session.stroke_index == 0
    assert session.accepted_strokes == ()

    assert trace(session, bar)[0].accepted
    assert trace(session, stem)[0].accepted
    assert session.is_complete


def test_service_resize_mid_glyph():
    service = TracingService()
    service.load_glyph('T', GLYPH['T'], 1024, 768)
    bar = densify(service.session.template[0].path)
    service.pointer_down(*bar[0])
    for p in bar[1:-1]:
        service.pointer_move(*p)
    assert service.pointer_up(*bar[-1])['accepted'] is True

    response = service.resize(640, 480)
    assert response['visible'] is True
    assert response['stroke_index'] == 0

    region = response['template']['bbox']
    assert 0 <= region['x_min'] and region['x_max'] <= 640
    assert 0 <= region['y_min'] and region['y_max'] <= 480


@pytest.mark.slow
@pytest.mark.parametrize("width,height", [(320, 240), (800, 600), (1920, 1080), (600, 1200)])
@pytest.mark.parametrize("preset", ['default', 'lenient'])
def test_exact_trace_accepted_at_any_size(width, height, preset):
    config = TracingConfig.preset(preset).replace(touch_tolerance=0)
    template = load_template(GLYPH['bowl'], name='bowl')
    fitted = template.scaled(fit_to_region(template, width, height))
    session = TracingSession(fitted, config)
    for stroke in fitted:
        assert trace(session, densify(stroke.path, step=2.0))[0].accepted
    assert session.is_complete
