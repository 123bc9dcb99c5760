"""
Tokenizer for the integer expression engine.

Converts an expression string into a sequence of categorized tokens.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto
from typing import NamedTuple

from exprengine.errors import LexError


class TokenCategory(StrEnum):
    """Token categories seen by the parser."""

    LITERAL = auto()
    OPERATOR = auto()
    COMMA = auto()


class Token(NamedTuple):
    """A single token from the expression tokenizer (immutable)."""

    text: str
    category: TokenCategory
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.category}, {self.text!r}, offset={self.offset})"


# Number pattern: digits with an optional fraction (rejected later by the parser)
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")
# Identifier: letter or underscore followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

_TWO_CHAR_OPERATORS = frozenset({"<<", ">>"})
_SINGLE_CHAR_OPERATORS = frozenset("+-*/%^&|<>()")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Empty or whitespace-only input yields an empty list.

    Raises:
        LexError: If the source contains a character outside the alphabet.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c in " \t\n\r":
            i += 1
            continue

        # Numbers
        if c in "0123456789":
            m = _NUMBER_RE.match(source, i)
            assert m is not None
            tokens.append(Token(m.group(0), TokenCategory.LITERAL, i))
            i = m.end()
            continue

        # Identifiers are literals too; the parser rejects them
        if c.isalpha() or c == "_":
            m = _IDENT_RE.match(source, i)
            if m is None:
                raise LexError(f"unexpected character: {c!r}", source, i)
            tokens.append(Token(m.group(0), TokenCategory.LITERAL, i))
            i = m.end()
            continue

        two = source[i : i + 2]
        if two in _TWO_CHAR_OPERATORS:
            tokens.append(Token(two, TokenCategory.OPERATOR, i))
            i += 2
            continue

        if c in _SINGLE_CHAR_OPERATORS:
            tokens.append(Token(c, TokenCategory.OPERATOR, i))
            i += 1
            continue

        if c == ",":
            tokens.append(Token(c, TokenCategory.COMMA, i))
            i += 1
            continue

        raise LexError(f"unexpected character: {c!r}", source, i)

    return tokens
