"""Typed path commands and the command stream.

``iter_commands`` turns a token stream into ``PathCommand`` values, applying
the grammar rules that do not depend on geometry:

    - a number before any command letter is malformed,
    - the first command must be a move,
    - unknown letters are malformed,
    - numbers following a complete command repeat that command, except that
      extra pairs after MoveTo become LineTo (``M`` -> ``L``, ``m`` -> ``l``),
    - ClosePath takes no operands,
    - an operand slot must hold a finite number (arc flags must be 0 or 1).

Errors are raised lazily, when the offending command is reached.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from ..errors import (
    InvalidNumericLiteralError,
    MalformedGrammarError,
    OperandUnderflowError,
)
from .tokenizer import Token, tokenize

logger = logging.getLogger(__name__)


class CommandKind(Enum):
    """Path command, keyed by its upper-case letter and operand count."""
    MOVE_TO = ('M', 2)
    LINE_TO = ('L', 2)
    HORIZONTAL_LINE_TO = ('H', 1)
    VERTICAL_LINE_TO = ('V', 1)
    CUBIC_CURVE_TO = ('C', 6)
    SMOOTH_CUBIC_CURVE_TO = ('S', 4)
    QUADRATIC_CURVE_TO = ('Q', 4)
    SMOOTH_QUADRATIC_CURVE_TO = ('T', 2)
    ARC_TO = ('A', 7)
    CLOSE_PATH = ('Z', 0)

    def __init__(self, letter: str, operand_count: int):
        self.letter = letter
        self.operand_count = operand_count

    @classmethod
    def from_letter(cls, letter: str) -> CommandKind | None:
        return _BY_LETTER.get(letter.upper())


_BY_LETTER = {kind.letter: kind for kind in CommandKind}

# Operand indices of the large-arc and sweep flags
ARC_FLAG_INDICES = (3, 4)


@dataclass(frozen=True)
class PathCommand:
    """One command with its operands, as written (not yet made absolute)."""
    kind: CommandKind
    relative: bool
    operands: Tuple[float, ...] = ()
    position: int = 0

    @property
    def letter(self) -> str:
        return self.kind.letter.lower() if self.relative else self.kind.letter

    def __str__(self) -> str:
        return ' '.join([self.letter] + [f'{v:g}' for v in self.operands])


def _read_operands(tokens: List[Token], i: int, kind: CommandKind, letter: str) -> Tuple[Tuple[float, ...], int]:
    """Consume ``kind.operand_count`` numbers starting at token ``i``."""
    values = []
    for slot in range(kind.operand_count):
        if i >= len(tokens):
            raise OperandUnderflowError(
                f"Command '{letter}' needs {kind.operand_count} operands, got {len(values)}",
                position=None, command=letter,
            )
        tok = tokens[i]
        if tok.is_letter:
            raise InvalidNumericLiteralError(
                f"Expected a number for '{letter}' at offset {tok.position}, found '{tok.text}'",
                position=tok.position, command=letter,
            )
        value = float(tok.text)
        if not math.isfinite(value):
            raise InvalidNumericLiteralError(
                f"Operand '{tok.text}' at offset {tok.position} is out of range",
                position=tok.position, command=letter,
            )
        if kind is CommandKind.ARC_TO and slot in ARC_FLAG_INDICES and value not in (0.0, 1.0):
            raise InvalidNumericLiteralError(
                f"Arc flag must be 0 or 1, got '{tok.text}' at offset {tok.position}",
                position=tok.position, command=letter,
            )
        values.append(value)
        i += 1
    return tuple(values), i


def iter_commands(source: str | None) -> Iterator[PathCommand]:
    """Yield the commands of a path string with implicit commands expanded.

    Args:
        source: Path-description string.

    Yields:
        PathCommand values in source order. ``M 0 0 20 0`` yields a MoveTo
        followed by a LineTo.

    Raises:
        MalformedGrammarError: Unknown letter, operand before any command,
            a first command other than MoveTo, or operands after ClosePath.
        OperandUnderflowError: Input ended in the middle of a command.
        InvalidNumericLiteralError: An operand slot held a letter, a
            non-finite number, or an arc flag other than 0/1.
    """
    tokens = list(tokenize(source))
    kind: CommandKind | None = None
    letter = ''
    i = 0

    while i < len(tokens):
        tok = tokens[i]
        if tok.is_letter:
            kind = CommandKind.from_letter(tok.text)
            if kind is None:
                raise MalformedGrammarError(
                    f"Unknown command '{tok.text}' at offset {tok.position}",
                    position=tok.position, command=tok.text,
                )
            if letter == '' and kind is not CommandKind.MOVE_TO:
                raise MalformedGrammarError(
                    f"Path must begin with a move, found '{tok.text}' at offset {tok.position}",
                    position=tok.position, command=tok.text,
                )
            letter = tok.text
            i += 1
            if kind is CommandKind.CLOSE_PATH:
                yield PathCommand(kind, letter.islower(), (), tok.position)
                continue
        elif kind is None:
            raise MalformedGrammarError(
                f"Operand '{tok.text}' at offset {tok.position} appears before any command",
                position=tok.position,
            )
        elif kind is CommandKind.CLOSE_PATH:
            raise MalformedGrammarError(
                f"Close path '{letter}' takes no operands, found '{tok.text}' at offset {tok.position}",
                position=tok.position, command=letter,
            )

        operands, i = _read_operands(tokens, i, kind, letter)
        yield PathCommand(kind, letter.islower(), operands, tok.position)

        if kind is CommandKind.MOVE_TO:
            kind = CommandKind.LINE_TO
            letter = 'l' if letter == 'm' else 'L'
