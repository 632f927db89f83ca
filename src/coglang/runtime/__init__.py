"""
Cog runtime - Tree-walking interpreter for Cog statements.

This module provides:
- Interpreter: Executes statements against an environment
- Value: Runtime values and their capability interface
- ExecutionContext: Environment, output sink and diagnostics
- BuiltinRegistry: Built-in function implementations
"""

from .values import (
    Value,
    StringValue,
    NoneValue,
    IntValue,
    FunctionValue,
    string_val,
    int_val,
    none_val,
    function_val,
)

from .context import (
    Environment,
    ExecutionContext,
    create_context,
)

from .builtins import (
    BuiltinFunction,
    BuiltinRegistry,
)

from .interpreter import (
    Interpreter,
    ExecutionResult,
    run_source,
    run_file,
)

__all__ = [
    # Values
    'Value',
    'StringValue',
    'NoneValue',
    'IntValue',
    'FunctionValue',
    'string_val',
    'int_val',
    'none_val',
    'function_val',

    # Context
    'Environment',
    'ExecutionContext',
    'create_context',

    # Builtins
    'BuiltinFunction',
    'BuiltinRegistry',

    # Interpreter
    'Interpreter',
    'ExecutionResult',
    'run_source',
    'run_file',
]
