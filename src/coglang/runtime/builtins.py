"""
Built-in function registry for the Cog interpreter.

Built-ins are ordinary environment bindings: a script may alias them
(``p = print``) or shadow them (``print = 5``).
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .values import Value, FunctionValue, function_val, none_val
from .context import Environment


@dataclass
class BuiltinFunction:
    """
    A built-in function with its implementation.
    """
    name: str
    implementation: Callable[[Value], Value]

    def to_value(self) -> FunctionValue:
        return function_val(self.name, self.implementation)


class BuiltinRegistry:
    """
    Registry of all built-in functions.

    The registry is created per interpreter so that side-effecting
    built-ins write to that interpreter's output sink.
    """

    def __init__(self, write_line: Callable[[str], None]):
        self._write_line = write_line
        self._functions: Dict[str, BuiltinFunction] = {}
        self._register_all()

    def get_function(self, name: str) -> Optional[BuiltinFunction]:
        """Look up a function by name."""
        return self._functions.get(name)

    def register(self, func: BuiltinFunction) -> None:
        """Register a function."""
        self._functions[func.name] = func

    def install(self, environment: Environment) -> None:
        """Bind every registered function in an environment."""
        for func in self._functions.values():
            environment.set(func.name, func.to_value())

    def _register_all(self) -> None:
        """Register all built-in functions."""
        self._register_io_functions()

    # --- I/O Functions ---

    def _register_io_functions(self) -> None:
        """Register functions that talk to the output sink."""

        def _print(value: Value) -> Value:
            """Write the text form of a value followed by a newline."""
            self._write_line(value.stringify())
            return none_val()

        self.register(BuiltinFunction("print", _print))
