"""Error kinds raised and reported by the tracing package.

Path parsing failures are recoverable per stroke: ``parse_path`` catches
them and returns an empty geometry together with the error, so a caller can
keep loading the rest of a glyph. ``parse_path_strict`` lets them propagate.

Degenerate geometry (a bounding box with no width or no height) is raised by
``fit_to_region``; callers skip scaling and keep the template hidden.

Example:
    Report a bad stroke without aborting::

        from tracing_lib.parsing import parse_path

        result = parse_path('L 5 5')
        if not result.ok:
            print(result.error.kind.value, result.error)
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Classification of recoverable tracing errors."""
    MALFORMED_GRAMMAR = 'malformed_grammar'
    OPERAND_UNDERFLOW = 'operand_underflow'
    INVALID_NUMERIC_LITERAL = 'invalid_numeric_literal'
    DEGENERATE_GEOMETRY = 'degenerate_geometry'


class TracingError(Exception):
    """Base class for all errors raised by tracing_lib."""
    kind: ErrorKind | None = None


class PathParseError(TracingError):
    """A path-description string could not be interpreted.

    Attributes:
        position: Character offset of the offending token in the source
            string, or None when the input ended early.
        command: Command letter active when the error occurred, if any.
    """

    def __init__(self, message: str, position: int | None = None, command: str | None = None):
        super().__init__(message)
        self.position = position
        self.command = command

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            'kind': self.kind.value if self.kind else None,
            'message': str(self),
            'position': self.position,
            'command': self.command,
        }


class MalformedGrammarError(PathParseError):
    """Unknown command letter, or an operand with no command to consume it."""
    kind = ErrorKind.MALFORMED_GRAMMAR


class OperandUnderflowError(PathParseError):
    """Tokens ran out before a command received all of its operands."""
    kind = ErrorKind.OPERAND_UNDERFLOW


class InvalidNumericLiteralError(PathParseError):
    """An operand slot held text that is not a usable number."""
    kind = ErrorKind.INVALID_NUMERIC_LITERAL


class DegenerateGeometryError(TracingError):
    """Geometry has zero width or height and cannot be fitted to a region."""
    kind = ErrorKind.DEGENERATE_GEOMETRY
