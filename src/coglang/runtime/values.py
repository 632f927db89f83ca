"""
Runtime values for the Cog interpreter.

Every value implements the same small capability set: stringify, integer
coercion, invocation, cloning and addition, plus a fixed type tag. Variants
override only the capabilities that mean something for them; the base class
supplies the defaults.
"""

from dataclasses import dataclass, replace
from typing import Callable, ClassVar
from abc import ABC

from ..errors import error_not_callable, error_type_mismatch, error_not_summable
from ..integers import format_decimal


STRING = "string"
NONE = "none"
INT = "int"
FUNCTION = "function"


@dataclass
class Value(ABC):
    """
    A runtime value.

    Defaults: stringify gives "", coerce_to_int gives 0, invoke raises
    NotCallable, add raises TypeMismatch or NotSummable.
    """
    type_tag: ClassVar[str] = ""

    def stringify(self) -> str:
        """Text form of the value, as written by print."""
        return ""

    def coerce_to_int(self) -> int:
        """Integer reading of the value; 0 when there is no natural one."""
        return 0

    def invoke(self, argument: "Value") -> "Value":
        """Call the value with one argument."""
        raise error_not_callable(self.type_tag)

    def clone(self) -> "Value":
        """Independent copy with equal content."""
        return replace(self)

    def add(self, other: "Value") -> "Value":
        """Sum of two values of the same type."""
        if other.type_tag != self.type_tag:
            raise error_type_mismatch(self.type_tag, other.type_tag)
        return self._add_same_type(other)

    def _add_same_type(self, other: "Value") -> "Value":
        raise error_not_summable(self.type_tag)


@dataclass
class StringValue(Value):
    """A text value."""
    data: str
    type_tag: ClassVar[str] = STRING

    def stringify(self) -> str:
        return self.data


@dataclass
class NoneValue(Value):
    """The absence of a value; result of print and of empty expressions."""
    type_tag: ClassVar[str] = NONE

    def stringify(self) -> str:
        return "None"


@dataclass
class IntValue(Value):
    """A signed integer value of unbounded width."""
    data: int
    type_tag: ClassVar[str] = INT

    def stringify(self) -> str:
        return format_decimal(self.data)

    def coerce_to_int(self) -> int:
        return self.data

    def _add_same_type(self, other: Value) -> Value:
        return int_val(self.coerce_to_int() + other.coerce_to_int())


@dataclass
class FunctionValue(Value):
    """A native function taking one value and returning one value."""
    name: str
    implementation: Callable[[Value], Value]
    type_tag: ClassVar[str] = FUNCTION

    def stringify(self) -> str:
        return "Function"

    def invoke(self, argument: Value) -> Value:
        return self.implementation(argument)


# Convenience constructors

def string_val(s: str) -> StringValue:
    """Create a string value."""
    return StringValue(str(s))


def int_val(n: int) -> IntValue:
    """Create an integer value."""
    return IntValue(int(n))


def none_val() -> NoneValue:
    """Create a None value."""
    return NoneValue()


def function_val(name: str, implementation: Callable[[Value], Value]) -> FunctionValue:
    """Create a native function value."""
    return FunctionValue(name, implementation)
