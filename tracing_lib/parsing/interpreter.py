"""Path interpreter: command stream to GeometricPath.

The interpreter is a fold over ``PathCommand`` values. Each handler takes the
current ``ParserState`` and returns a new one; nothing is mutated in place.

State carried between commands:
    current: Current point.
    start: Start of the current sub-path, where ClosePath returns to.
    control: Last Bezier control point, tagged with the curve degree that
        produced it. Smooth commands reflect it only when the degree
        matches; any other command clears it.
    points: Vertices of the sub-path being built.
    subpaths: Sub-paths committed so far.

Simplifications:
    Curves are flattened into a fixed number of line segments as soon as
    they are read. Elliptical arcs become a single straight segment to the
    arc's endpoint.

Example usage:
    Tolerant parsing::

        from tracing_lib.parsing import parse_path

        result = parse_path('M 0 0 L 10 0 L 10 10 Z')
        result.path.length()     # 34.142...
        parse_path('L 5 5').ok   # False, path is empty
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Callable, Dict, Tuple

from ..config import CURVE_SEGMENTS
from ..domain.geometry import ORIGIN, GeometricPath, Point, SubPath
from ..errors import PathParseError
from .commands import CommandKind, PathCommand, iter_commands
from .flatten import flatten_cubic, flatten_quadratic

logger = logging.getLogger(__name__)


class CurveDegree(Enum):
    CUBIC = 3
    QUADRATIC = 2


@dataclass(frozen=True)
class ControlPoint:
    """Final control point of the previous curve and the curve's degree."""
    point: Point
    degree: CurveDegree


@dataclass(frozen=True)
class ParserState:
    """Accumulator threaded through the interpreter fold."""
    current: Point = ORIGIN
    start: Point = ORIGIN
    control: ControlPoint | None = None
    points: Tuple[Point, ...] = ()
    subpaths: Tuple[SubPath, ...] = ()

    def resolve(self, relative: bool, x: float, y: float) -> Point:
        """Make an operand pair absolute."""
        if relative:
            return Point(self.current.x + x, self.current.y + y)
        return Point(x, y)

    def reflected_control(self, degree: CurveDegree) -> Point:
        """First control point for a smooth curve of the given degree."""
        if self.control is not None and self.control.degree is degree:
            return self.control.point.reflect_about(self.current)
        return self.current

    def extend(self, new_points, end: Point, control: ControlPoint | None = None) -> ParserState:
        """Append drawn vertices, starting a sub-path at the current point if needed."""
        points = self.points or (self.current,)
        return replace(self, points=points + tuple(new_points), current=end, control=control)

    def commit(self, closed: bool = False) -> ParserState:
        """Move the in-progress vertices into the committed sub-paths."""
        if not self.points:
            return self
        return replace(self, points=(), subpaths=self.subpaths + (SubPath(self.points, closed),))


@dataclass(frozen=True)
class ParseResult:
    """Outcome of tolerant parsing.

    Attributes:
        path: Parsed geometry; empty when ``error`` is set.
        error: The parse error, or None on success.
    """
    path: GeometricPath
    error: PathParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


Handler = Callable[[ParserState, PathCommand], ParserState]


class PathInterpreter:
    """Interprets path-description strings into flattened geometry.

    Stateless between calls; one instance can parse any number of strings.

    Attributes:
        curve_segments: Line segments emitted per Bezier curve.

    Example:
        >>> interpreter = PathInterpreter(curve_segments=8)
        >>> path = interpreter.parse_strict('M 0 0 Q 50 100 100 0')
        >>> len(path[0].points)
        9
    """

    def __init__(self, curve_segments: int = CURVE_SEGMENTS):
        if curve_segments < 1:
            raise ValueError(f"curve_segments must be >= 1, got {curve_segments}")
        self.curve_segments = curve_segments
        self._handlers: Dict[CommandKind, Handler] = {
            CommandKind.MOVE_TO: self._move_to,
            CommandKind.LINE_TO: self._line_to,
            CommandKind.HORIZONTAL_LINE_TO: self._horizontal_line_to,
            CommandKind.VERTICAL_LINE_TO: self._vertical_line_to,
            CommandKind.CUBIC_CURVE_TO: self._cubic_to,
            CommandKind.SMOOTH_CUBIC_CURVE_TO: self._smooth_cubic_to,
            CommandKind.QUADRATIC_CURVE_TO: self._quadratic_to,
            CommandKind.SMOOTH_QUADRATIC_CURVE_TO: self._smooth_quadratic_to,
            CommandKind.ARC_TO: self._arc_to,
            CommandKind.CLOSE_PATH: self._close_path,
        }
        missing = set(CommandKind) - set(self._handlers)
        if missing:
            raise TypeError(f"No handler for {sorted(k.name for k in missing)}")

    def parse_strict(self, source: str | None) -> GeometricPath:
        """Parse a path string, raising on grammar errors.

        Raises:
            PathParseError: One of its subclasses, describing the failure.
        """
        state = reduce(self._step, iter_commands(source), ParserState())
        path = GeometricPath(state.commit().subpaths)
        logger.debug("Parsed %d sub-paths, %d points", len(path), path.point_count)
        return path

    def parse(self, source: str | None) -> ParseResult:
        """Parse a path string without raising.

        On any grammar error all progress for this string is discarded: the
        result holds an empty path and the error.
        """
        try:
            return ParseResult(self.parse_strict(source))
        except PathParseError as e:
            logger.warning("Discarding path data (%s): %s", e.kind.value, e)
            return ParseResult(GeometricPath(), e)

    # --- fold ---

    def _step(self, state: ParserState, command: PathCommand) -> ParserState:
        logger.debug("Command %s at offset %d", command, command.position)
        return self._handlers[command.kind](state, command)

    # --- handlers ---

    def _move_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        target = state.resolve(cmd.relative, *cmd.operands)
        state = state.commit()
        return replace(state, current=target, start=target, control=None, points=(target,))

    def _line_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        target = state.resolve(cmd.relative, *cmd.operands)
        return state.extend([target], target)

    def _horizontal_line_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        (x,) = cmd.operands
        target = Point(state.current.x + x if cmd.relative else x, state.current.y)
        return state.extend([target], target)

    def _vertical_line_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        (y,) = cmd.operands
        target = Point(state.current.x, state.current.y + y if cmd.relative else y)
        return state.extend([target], target)

    def _cubic_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        ops = cmd.operands
        c1 = state.resolve(cmd.relative, ops[0], ops[1])
        c2 = state.resolve(cmd.relative, ops[2], ops[3])
        end = state.resolve(cmd.relative, ops[4], ops[5])
        return self._emit_cubic(state, c1, c2, end)

    def _smooth_cubic_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        ops = cmd.operands
        c1 = state.reflected_control(CurveDegree.CUBIC)
        c2 = state.resolve(cmd.relative, ops[0], ops[1])
        end = state.resolve(cmd.relative, ops[2], ops[3])
        return self._emit_cubic(state, c1, c2, end)

    def _quadratic_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        ops = cmd.operands
        c = state.resolve(cmd.relative, ops[0], ops[1])
        end = state.resolve(cmd.relative, ops[2], ops[3])
        return self._emit_quadratic(state, c, end)

    def _smooth_quadratic_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        c = state.reflected_control(CurveDegree.QUADRATIC)
        end = state.resolve(cmd.relative, *cmd.operands)
        return self._emit_quadratic(state, c, end)

    def _arc_to(self, state: ParserState, cmd: PathCommand) -> ParserState:
        # Radii, rotation and flags are read but ignored: straight chord only
        end = state.resolve(cmd.relative, cmd.operands[5], cmd.operands[6])
        return state.extend([end], end)

    def _close_path(self, state: ParserState, cmd: PathCommand) -> ParserState:
        state = state.commit(closed=True)
        return replace(state, current=state.start, control=None)

    def _emit_cubic(self, state: ParserState, c1: Point, c2: Point, end: Point) -> ParserState:
        pts = flatten_cubic(state.current, c1, c2, end, self.curve_segments)
        return state.extend(pts[1:], end, ControlPoint(c2, CurveDegree.CUBIC))

    def _emit_quadratic(self, state: ParserState, c: Point, end: Point) -> ParserState:
        pts = flatten_quadratic(state.current, c, end, self.curve_segments)
        return state.extend(pts[1:], end, ControlPoint(c, CurveDegree.QUADRATIC))


_default_interpreter = PathInterpreter()


def parse_path(source: str | None) -> ParseResult:
    """Parse with the default interpreter; never raises for bad grammar."""
    return _default_interpreter.parse(source)


def parse_path_strict(source: str | None) -> GeometricPath:
    """Parse with the default interpreter, raising ``PathParseError``."""
    return _default_interpreter.parse_strict(source)
