"""
Execution context for the Cog interpreter.

Owns the variable environment, the output sink and the diagnostics of a run.
"""

import sys
from dataclasses import dataclass, field
from typing import Dict, Optional, TextIO

from .values import Value
from ..errors import CogError, DiagnosticCollector


@dataclass
class Environment:
    """
    Mapping from identifier to bound value.

    Later assignments overwrite earlier ones, including built-in bindings.
    """
    variables: Dict[str, Value] = field(default_factory=dict)

    def get(self, name: str) -> Optional[Value]:
        """Look up a variable."""
        return self.variables.get(name)

    def set(self, name: str, value: Value) -> None:
        """Bind a variable, replacing any previous binding."""
        self.variables[name] = value

    def contains(self, name: str) -> bool:
        """Check if a variable is bound."""
        return name in self.variables


@dataclass
class ExecutionContext:
    """
    The full execution context for interpreting Cog statements.

    Tracks:
    - Variable environment
    - Output sink used by print and comment notices
    - Diagnostics collected in keep-going mode
    - Source location of the statement being executed
    """
    environment: Environment = field(default_factory=Environment)
    output: TextIO = field(default_factory=lambda: sys.stdout)
    diagnostics: DiagnosticCollector = field(default_factory=DiagnosticCollector)

    # Source tracking for error messages
    filename: Optional[str] = None
    line_number: int = 0
    statements_executed: int = 0

    def get_variable(self, name: str) -> Optional[Value]:
        """Look up a variable in the environment."""
        return self.environment.get(name)

    def set_variable(self, name: str, value: Value) -> None:
        """Bind a variable in the environment."""
        self.environment.set(name, value)

    def write_line(self, text: str) -> None:
        """Write a line of text to the output sink."""
        self.output.write(text + "\n")

    def add_error(self, error: CogError) -> None:
        """Record a statement failure."""
        self.diagnostics.add_error(error)

    @property
    def has_errors(self) -> bool:
        """Check if any errors occurred."""
        return self.diagnostics.has_errors


def create_context(
    output: Optional[TextIO] = None,
    filename: Optional[str] = None,
    max_errors: int = 20,
) -> ExecutionContext:
    """
    Create a new execution context with the built-in functions bound.

    Args:
        output: Output sink (defaults to sys.stdout)
        filename: Script name used in diagnostics
        max_errors: Error limit for keep-going runs

    Returns:
        A fresh ExecutionContext whose environment holds the built-ins
    """
    from .builtins import BuiltinRegistry

    ctx = ExecutionContext(
        output=output if output is not None else sys.stdout,
        diagnostics=DiagnosticCollector(max_errors=max_errors),
        filename=filename,
    )
    BuiltinRegistry(ctx.write_line).install(ctx.environment)
    return ctx
