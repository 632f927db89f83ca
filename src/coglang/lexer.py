"""
Lexer for Cog statements.

Converts the text of one statement into a list of tokens for the parser.
Supports:
- String literals in double or single quotes (no escape sequences)
- Integer literals with an optional leading minus sign
- Identifiers, which may contain '-' after the first character
- The operators and delimiters of the expression grammar

Comments never reach the lexer; the statement classifier handles them
on the raw line.
"""

from typing import List, Optional, Iterator
from .tokens import (
    Token, TokenType, SourceLocation, SourceSpan,
    IDENTIFIER_START, IDENTIFIER_CHARS, DIGITS,
)
from .integers import parse_decimal
from .errors import (
    error_unexpected_character,
    error_unterminated_string,
)


class Lexer:
    """
    Tokenizer for a single Cog statement.

    Usage:
        lexer = Lexer('print("hi")')
        tokens = lexer.tokenize()

    Or for streaming:
        lexer = Lexer(text)
        for token in lexer:
            process(token)
    """

    def __init__(self, source: str, filename: Optional[str] = None, line: int = 1):
        self.source = source
        self.filename = filename
        self.line = line        # Line number of the statement in its script
        self.pos = 0            # Current position in source

    def _location(self) -> SourceLocation:
        """Get current source location."""
        return SourceLocation(self.line, self.pos + 1, self.pos, self.filename)

    def _span(self, start: SourceLocation) -> SourceSpan:
        """Create a span from start to current position."""
        return SourceSpan(start, self._location())

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _match(self, expected: str) -> bool:
        """Consume character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _is_at_end(self) -> bool:
        """Check if we've reached end of source."""
        return self.pos >= len(self.source)

    def _skip_whitespace(self) -> None:
        """Skip spaces and tabs."""
        while self._peek() in ' \t':
            self._advance()

    def _make_token(self, token_type: TokenType, value, start: SourceLocation,
                    lexeme: Optional[str] = None) -> Token:
        """Create a token."""
        span = self._span(start)
        if lexeme is None:
            lexeme = self.source[start.offset:self.pos]
        return Token(token_type, value, lexeme, span)

    def _scan_string(self) -> Token:
        """Scan a string literal up to the first matching quote."""
        start = self._location()
        quote = self._advance()  # consume opening quote

        chars = []
        while not self._is_at_end() and self._peek() != quote:
            chars.append(self._advance())

        if self._is_at_end():
            raise error_unterminated_string(self._span(start), self.source)

        self._advance()  # consume closing quote
        return self._make_token(TokenType.STRING_LITERAL, ''.join(chars), start)

    def _scan_number(self) -> Token:
        """Scan an integer literal, including a leading '-' if present."""
        start = self._location()
        self._match('-')

        while self._peek() in DIGITS:
            self._advance()

        lexeme = self.source[start.offset:self.pos]
        return self._make_token(TokenType.INT_LITERAL, parse_decimal(lexeme), start, lexeme)

    def _scan_identifier(self) -> Token:
        """Scan an identifier."""
        start = self._location()

        self._advance()
        while self._peek() in IDENTIFIER_CHARS:
            self._advance()

        lexeme = self.source[start.offset:self.pos]
        return self._make_token(TokenType.IDENTIFIER, lexeme, start, lexeme)

    def _scan_token(self) -> Token:
        """Scan the next token."""
        self._skip_whitespace()

        if self._is_at_end():
            return self._make_token(TokenType.EOF, None, self._location(), "")

        start = self._location()
        ch = self._peek()

        if ch in '"\'':
            return self._scan_string()

        # A minus directly followed by a digit is part of the literal
        if ch in DIGITS or (ch == '-' and self._peek(1) in DIGITS):
            return self._scan_number()

        if ch in IDENTIFIER_START:
            return self._scan_identifier()

        self._advance()

        if ch == '*' and self._match('*'):
            return self._make_token(TokenType.DOUBLE_STAR, "**", start)

        single_char_tokens = {
            '+': TokenType.PLUS,
            '=': TokenType.ASSIGN,
            '(': TokenType.LPAREN,
            ')': TokenType.RPAREN,
            ',': TokenType.COMMA,
            '-': TokenType.MINUS,
            '*': TokenType.STAR,
            '/': TokenType.SLASH,
        }

        if ch in single_char_tokens:
            return self._make_token(single_char_tokens[ch], ch, start)

        raise error_unexpected_character(ch, self._span(start), self.source)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire statement, returning a list of tokens."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens."""
        while True:
            token = self._scan_token()
            yield token
            if token.type == TokenType.EOF:
                break


def tokenize(source: str, filename: Optional[str] = None, line: int = 1) -> List[Token]:
    """
    Convenience function to tokenize one statement.

    Args:
        source: The statement text to tokenize
        filename: Optional filename for error messages
        line: Line number of the statement in its script

    Returns:
        List of tokens ending with EOF

    Raises:
        LexerError: If tokenization fails
    """
    lexer = Lexer(source, filename, line)
    return lexer.tokenize()
