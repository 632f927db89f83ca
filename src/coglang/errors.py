"""
Cog exceptions and error handling.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Runtime errors

Every error is raised as a ``CogError`` carrying a ``Diagnostic``. Whether a
failure aborts the whole run is decided by the statement driver, not here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List
from .tokens import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    span: Optional[SourceSpan] = None
    source_line: Optional[str] = None   # The actual line of source code
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        # Header: location: severity[code]: message
        if self.span is not None:
            parts.append(f"{self.span.start}: {self.severity.value}[{self.code}]: {self.message}")
        else:
            parts.append(f"{self.severity.value}[{self.code}]: {self.message}")

        # Source line with caret
        if show_source and self.source_line is not None and self.span is not None:
            parts.append("  |")
            line_num = str(self.span.start.line)
            parts.append(f"{line_num:>3} | {self.source_line}")

            col = self.span.start.column
            end_col = self.span.end.column if self.span.start.line == self.span.end.line else len(self.source_line) + 1
            underline_len = max(1, end_col - col)
            parts.append(f"    | {' ' * (col - 1)}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        result = {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "hints": self.hints,
        }
        if self.span is not None:
            result["range"] = {
                "start": {
                    "line": self.span.start.line,
                    "column": self.span.start.column,
                    "offset": self.span.start.offset,
                },
                "end": {
                    "line": self.span.end.line,
                    "column": self.span.end.column,
                    "offset": self.span.end.offset,
                },
            }
        return result


class CogError(Exception):
    """Base exception for Cog errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    def __str__(self) -> str:
        return self.diagnostic.format()

    def with_source(self, span: SourceSpan, source_line: Optional[str]) -> "CogError":
        """Attach a location to a diagnostic raised without one."""
        if self.diagnostic.span is None:
            self.diagnostic.span = span
        if self.diagnostic.source_line is None:
            self.diagnostic.source_line = source_line
        return self


class ParseFailure(CogError):
    """The text matches none of the recognized statement forms (E1xx)."""
    pass


class LexerError(ParseFailure):
    """Error during lexical analysis (E0xx)."""
    pass


class RuntimeFailure(CogError):
    """Error while evaluating an expression (E3xx)."""
    pass


class UndefinedName(RuntimeFailure):
    """An identifier has no binding in the environment."""
    pass


class NotCallable(RuntimeFailure):
    """Invocation attempted on a value that is not a function."""
    pass


class TypeMismatch(RuntimeFailure):
    """Addition attempted between values of different types."""
    pass


class NotSummable(RuntimeFailure):
    """Addition attempted between values whose type does not support it."""
    pass


# --- Lexer error codes ---

def error_unexpected_character(char: str, span: SourceSpan, source_line: str = None) -> LexerError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message=f"unexpected character '{char}'",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return LexerError(diag)


def error_unterminated_string(span: SourceSpan, source_line: str = None) -> LexerError:
    """E002: Unterminated string literal."""
    diag = Diagnostic(
        code="E002",
        message="unterminated string literal",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["string literals must be closed with matching quotes"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_cannot_parse(text: str, expected: str, found: str, span: SourceSpan,
                       source_line: str = None) -> ParseFailure:
    """E101: Text does not form a recognized expression."""
    diag = Diagnostic(
        code="E101",
        message=f"cannot parse expression '{text}': expected {expected}, found {found}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParseFailure(diag)


def error_unexpected_end(expected: str, span: SourceSpan, source_line: str = None) -> ParseFailure:
    """E102: Expression ended early."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of expression, expected {expected}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParseFailure(diag)


def error_unsupported_operator(operator: str, operation: str, span: SourceSpan,
                               source_line: str = None) -> ParseFailure:
    """E103: Operator reserved by the grammar but not implemented."""
    diag = Diagnostic(
        code="E103",
        message=f"operator '{operator}' ({operation}) is not supported",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["only '+' is evaluated"],
    )
    return ParseFailure(diag)


def error_multiple_arguments(name: str, span: SourceSpan, source_line: str = None) -> ParseFailure:
    """E104: Call with more than one argument."""
    diag = Diagnostic(
        code="E104",
        message=f"call to '{name}' has more than one argument",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["functions take exactly one argument"],
    )
    return ParseFailure(diag)


# --- Runtime error codes ---

def error_undefined_name(name: str, span: SourceSpan = None,
                         source_line: str = None) -> UndefinedName:
    """E301: Undefined name."""
    diag = Diagnostic(
        code="E301",
        message=f"undefined name '{name}'",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return UndefinedName(diag)


def error_not_callable(type_tag: str, span: SourceSpan = None,
                       source_line: str = None) -> NotCallable:
    """E302: Value is not callable."""
    diag = Diagnostic(
        code="E302",
        message=f"value of type '{type_tag}' is not callable",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return NotCallable(diag)


def error_type_mismatch(left: str, right: str, span: SourceSpan = None,
                        source_line: str = None) -> TypeMismatch:
    """E303: Operand types differ."""
    diag = Diagnostic(
        code="E303",
        message=f"type mismatch: cannot add '{right}' to '{left}'",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return TypeMismatch(diag)


def error_not_summable(type_tag: str, span: SourceSpan = None,
                       source_line: str = None) -> NotSummable:
    """E304: Operand type does not support addition."""
    diag = Diagnostic(
        code="E304",
        message=f"values of type '{type_tag}' cannot be added",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["only 'int' values support '+'"],
    )
    return NotSummable(diag)


class DiagnosticCollector:
    """
    Diagnostics gathered across the statements of a run or a check.

    Only errors count toward max_errors; warnings never end collection.
    """

    def __init__(self, max_errors: int = 20):
        self.max_errors = max_errors
        self.diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def add_error(self, error: CogError) -> None:
        """Record the diagnostic carried by a failed statement."""
        self.add(error.diagnostic)

    def _with_severity(self, severity: ErrorSeverity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    @property
    def errors(self) -> List[Diagnostic]:
        return self._with_severity(ErrorSeverity.ERROR)

    @property
    def warnings(self) -> List[Diagnostic]:
        return self._with_severity(ErrorSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def should_stop(self) -> bool:
        """True once max_errors errors have been recorded."""
        return len(self.errors) >= self.max_errors

    def summary(self) -> str:
        """Counts line such as '2 error(s), 1 warning(s)'; empty when clean."""
        counts = []
        if self.errors:
            counts.append(f"{len(self.errors)} error(s)")
        if self.warnings:
            counts.append(f"{len(self.warnings)} warning(s)")
        return ", ".join(counts)

    def format_all(self, show_source: bool = True) -> str:
        """Every diagnostic in recording order, separated by blank lines."""
        return "\n\n".join(d.format(show_source) for d in self.diagnostics)

    def to_json(self) -> dict:
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "errors": len(self.errors),
            "warnings": len(self.warnings),
        }
