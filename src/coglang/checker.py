"""
Static checker for Cog scripts.

Parses every statement without evaluating anything, collecting parse
failures, and flags names that are read before any earlier line could have
bound them.
"""

from typing import Iterable, List, Optional, Set
from dataclasses import dataclass

from .ast import (
    Expression, Assignment, BinaryOp, FunctionCall, Identifier,
    Comment, ExpressionStatement,
)
from .errors import (
    Diagnostic, DiagnosticCollector, ErrorSeverity, ParseFailure,
)
from .parser import parse_statement


BUILTIN_NAMES = frozenset({"print"})


@dataclass
class CheckResult:
    """Result of checking a script."""
    collector: DiagnosticCollector
    statement_count: int
    comment_count: int

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.collector.diagnostics

    @property
    def has_errors(self) -> bool:
        return self.collector.has_errors

    @property
    def has_warnings(self) -> bool:
        return self.collector.has_warnings

    def to_json(self) -> dict:
        """Diagnostics and counts for tooling integration."""
        data = self.collector.to_json()
        data["statements"] = self.statement_count
        data["comments"] = self.comment_count
        return data


class Checker:
    """
    Checker for Cog scripts.

    Reports:
    - Parse failures (errors)
    - Names used before any assignment to them (warnings)
    """

    def __init__(self, filename: Optional[str] = None, max_errors: int = 20):
        self.filename = filename
        self.diagnostics = DiagnosticCollector(max_errors=max_errors)
        self.known_names: Set[str] = set(BUILTIN_NAMES)
        self.statement_count = 0
        self.comment_count = 0

    def check(self, lines: Iterable[str]) -> CheckResult:
        """Check every line of a script."""
        for line_number, line in enumerate(lines, start=1):
            if self.diagnostics.should_stop:
                break
            self._check_line(line, line_number)

        return CheckResult(
            collector=self.diagnostics,
            statement_count=self.statement_count,
            comment_count=self.comment_count,
        )

    def _check_line(self, line: str, line_number: int) -> None:
        try:
            stmt = parse_statement(line, self.filename, line_number)
        except ParseFailure as e:
            self.diagnostics.add_error(e)
            return

        if isinstance(stmt, Comment):
            self.comment_count += 1
        elif isinstance(stmt, ExpressionStatement):
            self.statement_count += 1
            self._check_expression(stmt.expression, line)

    def _check_expression(self, expr: Expression, line: str) -> None:
        """Walk an expression in evaluation order."""
        if isinstance(expr, Assignment):
            self._check_expression(expr.value, line)
            self.known_names.add(expr.name)
        elif isinstance(expr, BinaryOp):
            self._check_expression(expr.left, line)
            self._check_expression(expr.right, line)
        elif isinstance(expr, FunctionCall):
            self._check_expression(expr.argument, line)
            self._check_name(expr.callee, line)
        elif isinstance(expr, Identifier):
            self._check_name(expr, line)

    def _check_name(self, ident: Identifier, line: str) -> None:
        if ident.name in self.known_names:
            return
        self.diagnostics.add(Diagnostic(
            code="W301",
            message=f"name '{ident.name}' is used before it is assigned",
            severity=ErrorSeverity.WARNING,
            span=ident.span,
            source_line=line,
        ))


def check(lines: Iterable[str], filename: Optional[str] = None, max_errors: int = 20) -> CheckResult:
    """
    Convenience function to check a script.

    Args:
        lines: Source lines, without line terminators
        filename: Optional filename for diagnostics
        max_errors: Maximum errors before stopping (default 20)

    Returns:
        CheckResult with diagnostics
    """
    checker = Checker(filename, max_errors)
    return checker.check(lines)
