"""Shared pytest fixtures for the tracing_lib test suite.

Fixtures:
    horizontal_stroke: GeometricPath from (0, 0) to (100, 0)
    triangle_source: Path string for a closed right triangle
    two_stroke_sources: Path strings for a two-stroke "T" glyph
    t_template: Unscaled Template built from two_stroke_sources

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracing_lib.domain.geometry import GeometricPath
from tracing_lib.templates.template import load_template


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Geometry Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def horizontal_stroke():
    """Straight template stroke 100 units long along the x axis."""
    return GeometricPath.from_points([(0, 0), (100, 0)])


@pytest.fixture
def triangle_source():
    """Closed right triangle with legs of 10."""
    return 'M 0 0 L 10 0 L 10 10 Z'


@pytest.fixture
def two_stroke_sources():
    """A 'T': horizontal bar, then vertical stem."""
    return ['M 0 0 L 200 0', 'M 100 0 L 100 200']


@pytest.fixture
def t_template(two_stroke_sources):
    """Unscaled two-stroke template."""
    return load_template(two_stroke_sources, name='T')

