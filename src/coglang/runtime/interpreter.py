"""
Tree-walking interpreter for Cog scripts.

Each statement is parsed into a small expression tree, evaluated against the
interpreter's environment, and discarded.
"""

import logging
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from .values import Value, int_val, string_val, none_val
from .context import ExecutionContext, create_context
from ..ast import (
    Expression, Literal, Identifier, Empty, Assignment, BinaryOp, FunctionCall,
    Comment,
)
from ..errors import CogError, RuntimeFailure, Diagnostic, error_undefined_name
from ..parser import parse_expression, parse_statement
from ..source import read_script_lines, split_script_lines
from ..tokens import TokenType


logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Result of executing a script."""
    success: bool
    statements_executed: int = 0
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def error_message(self) -> Optional[str]:
        """Formatted text of the first error, if any."""
        if self.diagnostics:
            return self.diagnostics[0].format()
        return None


class Interpreter:
    """
    Tree-walking interpreter for Cog statements.

    Every failure raises a CogError. Whether a failure ends the run is
    decided by run(): by default the first error stops it, with
    keep_going=True errors are recorded and execution continues.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        filename: Optional[str] = None,
        keep_going: bool = False,
        max_errors: int = 20,
    ):
        """
        Initialize the interpreter.

        Args:
            output: Output sink for print and comment notices (default stdout)
            filename: Script name used in diagnostics
            keep_going: Continue with the next statement after an error
            max_errors: Stop a keep-going run after this many errors
        """
        self.ctx: ExecutionContext = create_context(output, filename, max_errors)
        self.keep_going = keep_going
        self._source_line: Optional[str] = None

    @property
    def environment(self):
        return self.ctx.environment

    # =========================================================================
    # Statements
    # =========================================================================

    def execute_statement(self, line: str, line_number: int = 1) -> Optional[Value]:
        """
        Execute one line of source.

        Returns the value of an expression statement, or None for a comment.

        Raises:
            CogError: If the line fails to parse or evaluate
        """
        self.ctx.line_number = line_number
        stmt = parse_statement(line, self.ctx.filename, line_number)

        if isinstance(stmt, Comment):
            self.ctx.write_line(f"Comment: {stmt.text}")
            return None

        self._source_line = line
        try:
            return self._evaluate(stmt.expression)
        finally:
            self._source_line = None

    def evaluate_expression(self, text: str) -> Value:
        """
        Parse and evaluate expression text.

        Raises:
            CogError: If the text fails to parse or evaluate
        """
        expr = parse_expression(text, self.ctx.filename, self.ctx.line_number or 1)
        self._source_line = text
        try:
            return self._evaluate(expr)
        finally:
            self._source_line = None

    def run(self, lines: Iterable[str]) -> ExecutionResult:
        """Execute lines in order, numbering them from 1."""
        for line_number, line in enumerate(lines, start=1):
            try:
                self.execute_statement(line, line_number)
            except CogError as e:
                self.ctx.add_error(e)
                if not self.keep_going or self.ctx.diagnostics.should_stop:
                    logger.debug("stopping at line %d: %s", line_number, e.diagnostic.message)
                    return self._result()
                logger.debug("continuing past line %d: %s", line_number, e.diagnostic.message)
            else:
                self.ctx.statements_executed += 1
        return self._result()

    def _result(self) -> ExecutionResult:
        return ExecutionResult(
            success=not self.ctx.has_errors,
            statements_executed=self.ctx.statements_executed,
            diagnostics=list(self.ctx.diagnostics.diagnostics),
        )

    # =========================================================================
    # Expressions
    # =========================================================================

    def _evaluate(self, expr: Expression) -> Value:
        """Evaluate an expression to produce a Value."""
        if isinstance(expr, Assignment):
            return self._eval_assignment(expr)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary_op(expr)
        elif isinstance(expr, FunctionCall):
            return self._eval_function_call(expr)
        elif isinstance(expr, Literal):
            return self._eval_literal(expr)
        elif isinstance(expr, Identifier):
            return self._eval_identifier(expr)
        elif isinstance(expr, Empty):
            return none_val()
        else:
            raise RuntimeError(f"Unknown expression type: {type(expr).__name__}")

    def _eval_assignment(self, assign: Assignment) -> Value:
        """Bind a clone of the value and return the value itself."""
        value = self._evaluate(assign.value)
        logger.debug("assign %s (%s)", assign.name, value.type_tag)
        self.ctx.set_variable(assign.name, value.clone())
        return value

    def _eval_binary_op(self, op: BinaryOp) -> Value:
        """Evaluate a binary operation."""
        left = self._evaluate(op.left)
        right = self._evaluate(op.right)

        if op.operator == TokenType.PLUS:
            try:
                return left.add(right)
            except RuntimeFailure as e:
                raise e.with_source(op.span, self._source_line)

        raise RuntimeError(f"Unknown operator: {op.operator}")

    def _eval_function_call(self, call: FunctionCall) -> Value:
        """Evaluate the argument, then look up and invoke the callee."""
        argument = self._evaluate(call.argument)

        func = self.ctx.get_variable(call.callee.name)
        if func is None:
            raise error_undefined_name(call.callee.name, call.callee.span, self._source_line)

        logger.debug("call %s(%s)", call.callee.name, argument.type_tag)
        try:
            return func.invoke(argument)
        except RuntimeFailure as e:
            raise e.with_source(call.span, self._source_line)

    def _eval_literal(self, lit: Literal) -> Value:
        """Evaluate a literal value."""
        if lit.literal_type == TokenType.INT_LITERAL:
            return int_val(lit.value)
        elif lit.literal_type == TokenType.STRING_LITERAL:
            return string_val(lit.value)
        else:
            raise RuntimeError(f"Unknown literal type: {lit.literal_type}")

    def _eval_identifier(self, ident: Identifier) -> Value:
        """Evaluate an identifier (variable lookup)."""
        value = self.ctx.get_variable(ident.name)
        if value is None:
            raise error_undefined_name(ident.name, ident.span, self._source_line)
        return value.clone()


def run_source(
    source: str,
    output: Optional[TextIO] = None,
    filename: Optional[str] = None,
    keep_going: bool = False,
    max_errors: int = 20,
) -> ExecutionResult:
    """
    Run Cog source text in a fresh interpreter.

        from coglang import run_source

        result = run_source('x = 5\\nprint(x)')
        if not result.success:
            print(result.error_message)
    """
    interpreter = Interpreter(output, filename, keep_going, max_errors)
    return interpreter.run(split_script_lines(source))


def run_file(
    path: Union[str, Path],
    output: Optional[TextIO] = None,
    encoding: str = "utf-8",
    keep_going: bool = False,
    max_errors: int = 20,
) -> ExecutionResult:
    """
    Run a Cog script file in a fresh interpreter.

    The file is closed when the run ends, including when it stops early.

    Raises:
        OSError: If the file cannot be opened
    """
    path = Path(path)
    interpreter = Interpreter(output, str(path), keep_going, max_errors)
    with closing(read_script_lines(path, encoding)) as lines:
        return interpreter.run(lines)
