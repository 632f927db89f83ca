"""
Cog: a minimal line-oriented scripting language.

This package provides:
- Lexer: Tokenizes one statement
- Parser: Builds an expression tree from tokens
- Checker: Reports parse failures and names used before assignment
- Interpreter: Evaluates statements against a variable environment

Usage:
    from coglang import Interpreter, run_source

    interp = Interpreter()
    interp.execute_statement('x = 5')
    interp.execute_statement('print(x + 1)')     # writes "6"

    result = run_source('// greeting\\nprint("Hello world")')
    if not result.success:
        print(result.error_message)
"""

from .tokens import (
    Token,
    TokenType,
    SourceLocation,
    SourceSpan,
    is_identifier,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse_expression,
    parse_statement,
    is_comment,
)

from .ast import (
    AstNode,
    Expression,
    Literal,
    Identifier,
    Empty,
    Assignment,
    BinaryOp,
    FunctionCall,
    Statement,
    Comment,
    ExpressionStatement,
)

from .errors import (
    ErrorSeverity,
    Diagnostic,
    DiagnosticCollector,
    CogError,
    ParseFailure,
    LexerError,
    RuntimeFailure,
    UndefinedName,
    NotCallable,
    TypeMismatch,
    NotSummable,
)

from .checker import (
    Checker,
    CheckResult,
    check,
)

from .source import read_script_lines

from .runtime import (
    Value,
    StringValue,
    NoneValue,
    IntValue,
    FunctionValue,
    string_val,
    int_val,
    none_val,
    function_val,
    Environment,
    ExecutionContext,
    create_context,
    BuiltinFunction,
    BuiltinRegistry,
    Interpreter,
    ExecutionResult,
    run_source,
    run_file,
)

__version__ = "0.1.0"

__all__ = [
    # Tokens
    'Token', 'TokenType', 'SourceLocation', 'SourceSpan', 'is_identifier',
    # Lexer
    'Lexer', 'tokenize',
    # Parser
    'Parser', 'parse_expression', 'parse_statement', 'is_comment',
    # AST
    'AstNode', 'Expression', 'Literal', 'Identifier', 'Empty', 'Assignment',
    'BinaryOp', 'FunctionCall', 'Statement', 'Comment', 'ExpressionStatement',
    # Errors
    'ErrorSeverity', 'Diagnostic', 'DiagnosticCollector', 'CogError',
    'ParseFailure', 'LexerError', 'RuntimeFailure', 'UndefinedName',
    'NotCallable', 'TypeMismatch', 'NotSummable',
    # Checker
    'Checker', 'CheckResult', 'check',
    # Source
    'read_script_lines',
    # Runtime
    'Value', 'StringValue', 'NoneValue', 'IntValue', 'FunctionValue',
    'string_val', 'int_val', 'none_val', 'function_val',
    'Environment', 'ExecutionContext', 'create_context',
    'BuiltinFunction', 'BuiltinRegistry',
    'Interpreter', 'ExecutionResult', 'run_source', 'run_file',
]
