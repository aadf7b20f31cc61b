"""Glyph tracing package.

Parses glyph strokes written as path-description strings into flattened
template geometry, and judges freehand strokes traced over that geometry,
both point by point (live feedback) and per finished stroke.

Architecture Overview:
    The package is layered; each layer only imports the ones above it:

    - domain: value objects (Point, BBox, SubPath, GeometricPath,
      ViewTransform)
    - parsing: tokenizer, command stream and path interpreter
    - utils: arc-length measuring and sampling
    - evaluation: proximity and stroke correctness checks
    - templates: glyph templates, region fitting and the template store
    - session: the stroke-by-stroke tracing state machine
    - api: dictionary-returning service for UI integration

    Rendering, pointer capture, glyph navigation and loading glyph data from
    files are left to the embedding application.

Example usage:
    Tracing a glyph::

        from tracing_lib import TracingSession, fit_to_region, load_template

        template = load_template(['M 10 10 V 90', 'M 10 90 H 60'], name='L')
        fitted = template.scaled(fit_to_region(template, 800, 600))

        session = TracingSession(fitted)
        session.begin_stroke(first_point)
        for p in moves:
            on_track = session.add_point(p)
        result = session.end_stroke(last_point)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import TracingService
from .config import TracingConfig
from .domain import BBox, GeometricPath, Point, SubPath, ViewTransform
from .errors import (
    DegenerateGeometryError,
    ErrorKind,
    InvalidNumericLiteralError,
    MalformedGrammarError,
    OperandUnderflowError,
    PathParseError,
    TracingError,
)
from .evaluation import ProximityIndex, StrokeEvaluator, StrokeVerdict, evaluate, is_near
from .parsing import ParseResult, PathInterpreter, parse_path, parse_path_strict, tokenize
from .session import SessionState, StrokeResult, TracingSession
from .templates import Template, TemplateStore, fit_to_region, load_template
from .utils import point_at_distance, sample_points, total_length

__all__ = [
    # Domain objects
    'Point', 'BBox', 'SubPath', 'GeometricPath', 'ViewTransform',
    # Parsing
    'tokenize', 'PathInterpreter', 'ParseResult', 'parse_path', 'parse_path_strict',
    # Arc length
    'total_length', 'point_at_distance', 'sample_points',
    # Evaluation
    'is_near', 'ProximityIndex', 'evaluate', 'StrokeEvaluator', 'StrokeVerdict',
    # Templates
    'Template', 'TemplateStore', 'load_template', 'fit_to_region',
    # Session and services
    'TracingSession', 'SessionState', 'StrokeResult', 'TracingService',
    # Configuration and errors
    'TracingConfig', 'TracingError', 'ErrorKind', 'PathParseError',
    'MalformedGrammarError', 'OperandUnderflowError', 'InvalidNumericLiteralError',
    'DegenerateGeometryError',
]

__version__ = '1.0.0'
