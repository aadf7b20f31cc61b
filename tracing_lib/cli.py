#!/usr/bin/env python3
"""Command line for inspecting path data and replaying traced strokes.

Sub-commands:
    parse: Parse one path string and print its geometry.
    fit: Print the transform fitting a glyph's strokes into a region.
    check: Replay user strokes against a glyph and print each verdict.

Example:
    Parse a stroke::

        $ glyph-tracer parse "M 0 0 L 10 0 L 10 10 Z"

    Fit a two-stroke glyph into an 800x600 region::

        $ glyph-tracer fit "M 0 0 H 100" "M 50 0 V 120" --width 800 --height 600

    Replay strokes (coordinates in template units, no fitting)::

        $ glyph-tracer check --template "M 0 0 L 100 0" \\
              --stroke "[[0, 0], [50, 0], [100, 0]]"

Exit status is 0 on success (for ``check``: the glyph was completed), 1 when
``check`` ends incomplete, and 2 for bad input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import PRESETS, TracingConfig
from .errors import DegenerateGeometryError, PathParseError
from .log import configure_logging
from .parsing.interpreter import PathInterpreter
from .session.tracing import TracingSession
from .templates.template import fit_to_region, load_template

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INCOMPLETE = 1
EXIT_BAD_INPUT = 2


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def cmd_parse(args, config: TracingConfig) -> int:
    interpreter = PathInterpreter(config.curve_segments)
    try:
        path = interpreter.parse_strict(args.path_data)
    except PathParseError as e:
        print(f"error: {e.kind.value}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.json:
        _print_json({
            'subpaths': path.to_list(),
            'length': path.length(),
            'bbox': path.bbox.to_dict(),
        })
        return EXIT_OK

    for i, subpath in enumerate(path):
        kind = 'closed' if subpath.closed else 'open'
        print(f"subpath {i}: {len(subpath)} points, {kind}, length {subpath.length():.3f}")
    print(f"total length: {path.length():.3f}")
    print(f"bbox: {path.bbox.to_tuple()}")
    return EXIT_OK


def cmd_fit(args, config: TracingConfig) -> int:
    template = load_template(args.path_data, name='cli',
                             interpreter=PathInterpreter(config.curve_segments))
    try:
        view = fit_to_region(template, args.width, args.height,
                             reserved_fraction=config.fill_fraction,
                             stroke_half_width=config.stroke_half_width,
                             extra_padding=config.extra_padding)
    except DegenerateGeometryError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    _print_json({
        'view': view.to_dict(),
        'bbox': template.bbox.to_dict(),
        'fitted_bbox': view.apply_bbox(template.bbox).to_dict(),
        'skipped': [s.to_dict() for s in template.skipped],
    })
    return EXIT_OK


def _load_stroke(text: str) -> list:
    points = json.loads(text)
    if not isinstance(points, list) or not all(
            isinstance(p, (list, tuple)) and len(p) == 2 for p in points):
        raise ValueError(f"stroke must be a JSON list of [x, y] pairs: {text!r}")
    return [(float(x), float(y)) for x, y in points]


def cmd_check(args, config: TracingConfig) -> int:
    try:
        strokes = [_load_stroke(s) for s in args.stroke]
    except (ValueError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    template = load_template(args.template, name='cli',
                             interpreter=PathInterpreter(config.curve_segments))
    if args.width is not None:
        try:
            template = template.scaled(fit_to_region(
                template, args.width, args.height,
                reserved_fraction=config.fill_fraction,
                stroke_half_width=config.stroke_half_width,
                extra_padding=config.extra_padding))
        except DegenerateGeometryError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_BAD_INPUT

    session = TracingSession(template, config)
    logger.debug("Replaying %d strokes against %d template strokes",
                 len(strokes), session.stroke_count)
    results = []
    for points in strokes:
        if not points:
            continue
        session.begin_stroke(points[0])
        for p in points[1:-1]:
            session.add_point(p)
        result = session.end_stroke(points[-1] if len(points) > 1 else None)
        results.append(result.to_dict())

    _print_json({
        'results': results,
        'state': session.state.value,
        'stroke_index': session.stroke_index,
        'stroke_count': session.stroke_count,
        'skipped': [s.to_dict() for s in template.skipped],
    })
    return EXIT_OK if session.is_complete else EXIT_INCOMPLETE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='glyph-tracer',
        description='Parse glyph path data and check traced strokes')
    parser.add_argument('--log-level', default='WARNING',
                        help='Logging level (default: WARNING)')
    parser.add_argument('--preset', choices=sorted(PRESETS), default='default',
                        help='Evaluator parameter set (default: default)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    p_parse = subparsers.add_parser('parse', help='Parse one path string')
    p_parse.add_argument('path_data', help='Path-description string')
    p_parse.add_argument('--json', action='store_true', help='Print JSON')
    p_parse.set_defaults(func=cmd_parse)

    p_fit = subparsers.add_parser('fit', help='Fit strokes into a region')
    p_fit.add_argument('path_data', nargs='+', help='One path string per stroke')
    p_fit.add_argument('--width', type=float, required=True)
    p_fit.add_argument('--height', type=float, required=True)
    p_fit.set_defaults(func=cmd_fit)

    p_check = subparsers.add_parser('check', help='Replay strokes against a glyph')
    p_check.add_argument('--template', nargs='+', required=True,
                         help='One path string per template stroke')
    p_check.add_argument('--stroke', action='append', default=[],
                         help='User stroke as a JSON list of [x, y] pairs (repeatable)')
    p_check.add_argument('--width', type=float, default=None,
                         help='Fit the template to this region width first')
    p_check.add_argument('--height', type=float, default=None,
                         help='Fit the template to this region height first')
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'check' and (args.width is None) != (args.height is None):
        parser.error('check: --width and --height must be given together')
    configure_logging(args.log_level)
    config = TracingConfig.preset(args.preset)
    return args.func(args, config)


if __name__ == '__main__':
    sys.exit(main())
