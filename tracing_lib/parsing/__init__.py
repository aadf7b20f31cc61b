"""Path-description parsing.

This module turns SVG-style path strings (``M m L l H h V v C c S s Q q T t
A a Z z``) into flattened ``GeometricPath`` geometry.

The module exports:
    tokenize: Split a string into command letters and numbers.
    iter_commands: Typed command stream with implicit commands expanded.
    PathInterpreter: Configurable interpreter (curve resolution).
    parse_path: Tolerant parse returning a ParseResult.
    parse_path_strict: Parse that raises PathParseError.

Example usage:
    Parsing a stroke::

        from tracing_lib.parsing import parse_path

        result = parse_path('M 10 80 C 40 10, 65 10, 95 80 S 150 150, 180 80')
        if result.ok:
            for subpath in result.path:
                print(len(subpath.points), subpath.closed)
"""

from .commands import CommandKind, PathCommand, iter_commands
from .interpreter import ParseResult, PathInterpreter, parse_path, parse_path_strict
from .tokenizer import Token, TokenKind, tokenize

__all__ = [
    'tokenize', 'Token', 'TokenKind',
    'iter_commands', 'CommandKind', 'PathCommand',
    'PathInterpreter', 'ParseResult', 'parse_path', 'parse_path_strict',
]
