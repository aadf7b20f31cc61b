"""Tokenizer for path-description strings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


# Command letter, or a decimal literal with optional sign, fraction and exponent.
# Anything else (whitespace, commas) separates tokens and is skipped.
TOKEN_RE = re.compile(r'([A-Za-z])|([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)')


class TokenKind(Enum):
    LETTER = 'letter'
    NUMBER = 'number'


@dataclass(frozen=True)
class Token:
    """A command letter or numeric literal, with its offset in the source."""
    kind: TokenKind
    text: str
    position: int

    @property
    def is_letter(self) -> bool:
        return self.kind is TokenKind.LETTER


class TokenStream:
    """Lazy, restartable token sequence over one path string.

    Each iteration rescans the source from the beginning, so the stream can
    be consumed any number of times.

    Example:
        >>> [t.text for t in TokenStream('M10,20 l-5.5e1 .5')]
        ['M', '10', '20', 'l', '-5.5e1', '.5']
    """

    def __init__(self, source: str | None):
        self.source = source or ''

    def __iter__(self) -> Iterator[Token]:
        for match in TOKEN_RE.finditer(self.source):
            if match.group(1) is not None:
                yield Token(TokenKind.LETTER, match.group(1), match.start())
            else:
                yield Token(TokenKind.NUMBER, match.group(2), match.start())

    def __repr__(self) -> str:
        return f"TokenStream({self.source!r})"


def tokenize(source: str | None) -> TokenStream:
    """Split a path-description string into letters and numbers.

    Empty, whitespace-only or None input yields no tokens.
    """
    return TokenStream(source)
