"""
Brainrot Runtime Values

A runtime value is either a Number (64-bit float) or a String. Numbers and
strings only mix in ADD, where any string operand turns the addition into
concatenation of the text forms.
"""

import math
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from brainrot.bytecode import Constant
from brainrot.errors import DivisionByZeroError, TypeMismatchError


# Type constants, shared with the constant pool tags
TYPE_NUMBER = Constant.TYPE_NUMBER
TYPE_STRING = Constant.TYPE_STRING

TYPE_NAMES = {
    TYPE_NUMBER: 'number',
    TYPE_STRING: 'string',
}


def format_number(value: float) -> str:
    """
    Render a number the way PRINT shows it.
    
    Integral values print without a decimal point (``3``), everything else
    prints the shortest round-tripping digits in positional form
    (``2.5``, ``0.1``, ``0.00001``), never in exponent form.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer():
        return str(int(value))
    return np.format_float_positional(value, trim='-')


@dataclass(frozen=True)
class Value:
    """Python representation of a Brainrot runtime value."""
    
    type: int
    data: Union[float, str]
    
    @classmethod
    def number(cls, value: float) -> 'Value':
        """Create a number value."""
        return cls(TYPE_NUMBER, float(value))
    
    @classmethod
    def string(cls, value: str) -> 'Value':
        """Create a string value."""
        return cls(TYPE_STRING, str(value))
    
    @classmethod
    def from_constant(cls, constant: Constant) -> 'Value':
        if constant.type == TYPE_NUMBER:
            return cls.number(constant.value)
        return cls.string(constant.value)
    
    @classmethod
    def from_python(cls, value: Any) -> 'Value':
        """Convert a Python value to Value."""
        if isinstance(value, Value):
            return value
        if isinstance(value, bool):
            raise TypeError("Brainrot has no boolean type")
        if isinstance(value, (int, float)):
            return cls.number(value)
        if isinstance(value, str):
            return cls.string(value)
        raise TypeError(f"Cannot convert {type(value)} to Value")
    
    @property
    def type_name(self) -> str:
        return TYPE_NAMES[self.type]
    
    def is_number(self) -> bool:
        return self.type == TYPE_NUMBER
    
    def is_string(self) -> bool:
        return self.type == TYPE_STRING
    
    def is_truthy(self) -> bool:
        """Number 0 and the empty string are false, everything else is true."""
        if self.type == TYPE_NUMBER:
            return self.data != 0.0
        return self.data != ""
    
    def to_text(self) -> str:
        """Text form used by PRINT, prompts and concatenation."""
        if self.type == TYPE_NUMBER:
            return format_number(self.data)
        return self.data
    
    def __str__(self) -> str:
        return self.to_text()
    
    def __repr__(self) -> str:
        return f"Value({self.type_name}, {self.data!r})"
    
    # =========================================================================
    # Arithmetic
    # =========================================================================
    
    def add(self, other: 'Value') -> 'Value':
        if self.is_string() or other.is_string():
            return Value.string(self.to_text() + other.to_text())
        return Value.number(self.data + other.data)
    
    def sub(self, other: 'Value') -> 'Value':
        self._require_numbers('SUB', other)
        return Value.number(self.data - other.data)
    
    def mul(self, other: 'Value') -> 'Value':
        self._require_numbers('MUL', other)
        return Value.number(self.data * other.data)
    
    def div(self, other: 'Value') -> 'Value':
        self._require_numbers('DIV', other)
        if other.data == 0.0:
            raise DivisionByZeroError()
        return Value.number(self.data / other.data)
    
    def _require_numbers(self, op: str, other: 'Value') -> None:
        if not (self.is_number() and other.is_number()):
            raise TypeMismatchError(op, (self.type_name, other.type_name))


ZERO = Value.number(0.0)
