"""
Abstract Syntax Tree (AST) node definitions for Cog statements.

A tree is built for one statement at a time, evaluated, and discarded.
"""

from dataclasses import dataclass
from typing import Union
from abc import ABC
from .tokens import SourceSpan, TokenType


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""
    span: SourceSpan  # Source location for error reporting


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Expression(AstNode):
    """Base class for all expressions."""
    pass


@dataclass
class Literal(Expression):
    """A literal value (string or integer)."""
    value: Union[int, str]
    literal_type: TokenType  # INT_LITERAL or STRING_LITERAL


@dataclass
class Identifier(Expression):
    """A variable or function name reference."""
    name: str


@dataclass
class Empty(Expression):
    """Absent expression text, e.g. the argument of 'print()'."""
    pass


@dataclass
class Assignment(Expression):
    """Binding of a name, itself an expression (e.g. x = 5)."""
    name: str
    value: Expression


@dataclass
class BinaryOp(Expression):
    """A binary operation (e.g. a + b)."""
    left: Expression
    operator: TokenType
    right: Expression


@dataclass
class FunctionCall(Expression):
    """A single-argument call of a named function (e.g. print(x))."""
    callee: Identifier
    argument: Expression


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Statement(AstNode):
    """Base class for statements."""
    pass


@dataclass
class Comment(Statement):
    """A line containing '//'. Never evaluated."""
    text: str


@dataclass
class ExpressionStatement(Statement):
    """A line evaluated as a single expression."""
    expression: Expression
