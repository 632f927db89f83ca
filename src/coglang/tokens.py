"""
Token types for the Cog lexer.

Token type categories follow the error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Runtime errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict, Optional


class TokenType(Enum):
    """All token types recognized by the Cog lexer."""

    # --- Literals ---
    INT_LITERAL = auto()        # 42, -7
    STRING_LITERAL = auto()     # "hello", 'hello'

    # --- Identifiers ---
    IDENTIFIER = auto()         # print, x, my-name

    # --- Operators ---
    PLUS = auto()               # +
    ASSIGN = auto()             # =

    # --- Operators recognized but not evaluated ---
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /
    DOUBLE_STAR = auto()        # **

    # --- Delimiters ---
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    COMMA = auto()              # ,

    # --- Special ---
    EOF = auto()                # end of statement text


# Operators the grammar reserves but the interpreter does not implement
UNSUPPORTED_OPERATORS: Dict[TokenType, str] = {
    TokenType.MINUS: "subtraction",
    TokenType.STAR: "multiplication",
    TokenType.SLASH: "division",
    TokenType.DOUBLE_STAR: "exponentiation",
}


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in source code."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number
    offset: int         # 0-indexed character offset from start of the line
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a range in source code."""
    start: SourceLocation
    end: SourceLocation


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: Any              # int for INT_LITERAL, str otherwise
    lexeme: str             # The original source text
    span: SourceSpan        # Location in source


IDENTIFIER_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
IDENTIFIER_CHARS = IDENTIFIER_START | frozenset("0123456789-")
DIGITS = frozenset("0123456789")


def is_identifier(text: str) -> bool:
    """Check if text is a well-formed Cog identifier."""
    return (
        bool(text)
        and text[0] in IDENTIFIER_START
        and all(ch in IDENTIFIER_CHARS for ch in text[1:])
    )
