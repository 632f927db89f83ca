"""
Recursive descent parser for Cog statements.

Converts a token stream into an expression tree. The grammar encodes the
dispatch priority of the language directly:

    statement  := comment | expression EOF
    expression := IDENTIFIER '=' expression     assignment
                | operand '+' expression        addition
                | operand
                | <nothing>                     empty (whole text or call argument)
    operand    := IDENTIFIER '(' expression ')' call
                | STRING_LITERAL
                | INT_LITERAL
                | IDENTIFIER                    variable reference

Assignment binds loosest and nests to the right, so it can appear as a call
argument or as the right operand of '+'. Addition takes the smallest
possible left operand and the whole remainder as its right operand. A '+'
inside a call's parentheses always belongs to that call's argument.
"""

from typing import List, Optional
from .tokens import Token, TokenType, SourceSpan, SourceLocation, UNSUPPORTED_OPERATORS
from .ast import (
    Expression, Literal, Identifier, Empty, Assignment, BinaryOp, FunctionCall,
    Statement, Comment, ExpressionStatement,
)
from .lexer import tokenize
from .errors import (
    error_cannot_parse,
    error_unexpected_end,
    error_unsupported_operator,
    error_multiple_arguments,
)


COMMENT_MARKER = "//"


class Parser:
    """
    Recursive descent parser for one Cog expression.

    Usage:
        parser = Parser(tokens, source)
        expr = parser.parse()
    """

    def __init__(self, tokens: List[Token], source: Optional[str] = None):
        self.tokens = tokens
        self.source = source  # Original statement text for error messages
        self.pos = 0

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _peek(self, offset: int = 0) -> Token:
        """Peek at token at current position + offset."""
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[idx]

    def _is_at_end(self) -> bool:
        """Check if at end of tokens."""
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _check_any(self, *token_types: TokenType) -> bool:
        """Check if current token is any of given types."""
        return self._current().type in token_types

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        self._error(expected)

    def _match(self, *token_types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self._current().type in token_types:
            return self._advance()
        return None

    def _remaining_text(self, token: Token) -> str:
        """Source text from token to the end of the statement."""
        if self.source is not None:
            return self.source[token.span.start.offset:].rstrip()
        rest = self.tokens[self.tokens.index(token):]
        return " ".join(t.lexeme for t in rest if t.type != TokenType.EOF)

    def _error(self, expected: str) -> None:
        """Raise a parse failure at the current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            raise error_unexpected_end(expected, token.span, self.source)
        if token.type in UNSUPPORTED_OPERATORS:
            raise error_unsupported_operator(
                token.lexeme, UNSUPPORTED_OPERATORS[token.type], token.span, self.source
            )
        raise error_cannot_parse(
            self._remaining_text(token), expected, token.type.name, token.span, self.source
        )

    def _at_expression_end(self) -> bool:
        """Check if no expression text remains in the current context."""
        return self._check_any(TokenType.EOF, TokenType.RPAREN)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse an expression in priority order: assignment, addition, operand."""
        token = self._current()

        if token.type == TokenType.IDENTIFIER and self._peek(1).type == TokenType.ASSIGN:
            return self._parse_assignment()

        if self._at_expression_end():
            location = token.span.start
            return Empty(span=SourceSpan(location, location))

        left = self._parse_operand()

        if self._match(TokenType.PLUS):
            if self._at_expression_end():
                self._error("expression after '+'")
            right = self._parse_expression()
            return BinaryOp(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=TokenType.PLUS,
                right=right,
            )

        return left

    def _parse_assignment(self) -> Assignment:
        """Parse 'name = expression'."""
        start = self._advance()
        self._advance()  # consume '='
        if self._at_expression_end():
            self._error("expression after '='")
        value = self._parse_expression()
        return Assignment(
            span=SourceSpan(start.span.start, value.span.end),
            name=start.value,
            value=value,
        )

    def _parse_operand(self) -> Expression:
        """Parse a call, literal or variable reference."""
        token = self._current()

        if token.type in (TokenType.STRING_LITERAL, TokenType.INT_LITERAL):
            self._advance()
            return Literal(span=token.span, value=token.value, literal_type=token.type)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            callee = Identifier(span=token.span, name=token.value)
            if self._check(TokenType.LPAREN):
                return self._parse_call(callee)
            return callee

        self._error("expression")

    def _parse_call(self, callee: Identifier) -> FunctionCall:
        """Parse the single argument of a call."""
        self._consume(TokenType.LPAREN, "'('")
        argument = self._parse_expression()
        if self._check(TokenType.COMMA):
            raise error_multiple_arguments(callee.name, self._current().span, self.source)
        self._consume(TokenType.RPAREN, "')'")
        return FunctionCall(
            span=SourceSpan(callee.span.start, self.tokens[self.pos - 1].span.end),
            callee=callee,
            argument=argument,
        )

    def parse(self) -> Expression:
        """Parse the whole token stream as one expression."""
        expr = self._parse_expression()
        if not self._is_at_end():
            self._error("end of expression")
        return expr


def parse_expression(text: str, filename: Optional[str] = None, line: int = 1) -> Expression:
    """
    Tokenize and parse expression text.

    Raises:
        ParseFailure: If the text is not a valid expression
    """
    tokens = tokenize(text, filename, line)
    return Parser(tokens, text).parse()


def is_comment(line: str) -> bool:
    """A line is a comment when it contains '//' anywhere."""
    return COMMENT_MARKER in line


def parse_statement(line: str, filename: Optional[str] = None, line_number: int = 1) -> Statement:
    """
    Classify a source line and parse it.

    Args:
        line: One line of source, without its line terminator
        filename: Optional filename for error messages
        line_number: Line number of the statement in its script

    Returns:
        A Comment or an ExpressionStatement

    Raises:
        ParseFailure: If the line is not a comment and does not parse
    """
    if is_comment(line):
        span = SourceSpan(
            SourceLocation(line_number, 1, 0, filename),
            SourceLocation(line_number, len(line) + 1, len(line), filename),
        )
        return Comment(span=span, text=line)
    expr = parse_expression(line, filename, line_number)
    return ExpressionStatement(span=expr.span, expression=expr)
