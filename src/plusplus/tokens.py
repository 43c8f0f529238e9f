"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    IDENTIFIER = auto()  # [A-Za-z0-9_]+
    SYMBOL = auto()  # exactly one ASCII punctuation character other than _


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single tokenizer token and the offset where it starts in the source."""

    value: str
    start: int
    type: TokenType

    @property
    def end(self) -> int:
        return self.start + len(self.value)


# Characters that end a statement
TERMINATORS = frozenset(";{}")

_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_PUNCTUATION = frozenset(string.punctuation) - {"_"}


def is_ident_char(ch: str) -> bool:
    """Return True if ch is an ASCII letter, digit, or underscore."""
    return ch in _IDENT_CHARS


def is_symbol_char(ch: str) -> bool:
    """Return True if ch is ASCII punctuation other than underscore."""
    return ch in _PUNCTUATION


def is_terminator(ch: str) -> bool:
    """Return True if ch ends a statement."""
    return ch in TERMINATORS
