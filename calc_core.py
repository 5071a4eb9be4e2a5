"""
calc_core.py - Stateful accumulator calculator for accucalc
Holds the running value, a single memory register and the history of binary operations.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Dict, Any


class CalcErrorKind(Enum):
    DIVISION_BY_ZERO = "Division by zero"
    NEGATIVE_SQRT = "Cannot take square root of negative number"
    OVERFLOW = "Factorial overflow: n must be <= 20"


class CalcError(Exception):
    """
    Raised by a calculator operation that cannot produce a value.
    The calculator state is left exactly as it was before the failed call.
    """

    def __init__(self, kind: CalcErrorKind):
        super().__init__(kind.value)
        self.kind = kind

    def as_str(self) -> str:
        return self.kind.value

    def __eq__(self, other):
        if not isinstance(other, CalcError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self):
        return hash(self.kind)

    def __reduce__(self):
        # args holds the message, so rebuild from the kind for copy and pickle
        return (CalcError, (self.kind,))

    def __repr__(self):
        return f"CalcError({self.kind.name})"


class Operation(Enum):
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"

    @property
    def symbol(self) -> str:
        return _OPERATION_SYMBOLS[self]


_OPERATION_SYMBOLS = {
    Operation.ADD: '+',
    Operation.SUBTRACT: '-',
    Operation.MULTIPLY: '×',
    Operation.DIVIDE: '÷',
}


@dataclass(frozen=True)
class CalculationHistory:
    operand1: float
    operand2: float
    operation: Operation
    result: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operand1": self.operand1,
            "operand2": self.operand2,
            "operation": self.operation.value,
            "result": self.result,
        }


class Calculator:
    """
    Accumulator-style calculator.

    Only add, subtract, multiply and divide are recorded in the history.
    sqrt and power are state transitions on the running value and are not
    recorded, and neither are memory moves or clear().
    """

    def __init__(self):
        self.current_value: float = 0.0
        self.memory: float = 0.0
        self.history: List[CalculationHistory] = []

    @classmethod
    def default(cls) -> "Calculator":
        return cls()

    def __repr__(self):
        return (f"Calculator(current_value={self.current_value!r}, "
                f"memory={self.memory!r}, history_count={len(self.history)})")

    def add(self, value: float) -> float:
        result = self.current_value + value
        self._add_to_history(self.current_value, value, Operation.ADD, result)
        self.current_value = result
        return result

    def subtract(self, value: float) -> float:
        result = self.current_value - value
        self._add_to_history(self.current_value, value, Operation.SUBTRACT, result)
        self.current_value = result
        return result

    def multiply(self, value: float) -> float:
        result = self.current_value * value
        self._add_to_history(self.current_value, value, Operation.MULTIPLY, result)
        self.current_value = result
        return result

    def divide(self, value: float) -> float:
        """Divide the running value. Only an exact zero divisor fails; tiny divisors may yield inf."""
        if value == 0.0:
            raise CalcError(CalcErrorKind.DIVISION_BY_ZERO)
        result = self.current_value / value
        self._add_to_history(self.current_value, value, Operation.DIVIDE, result)
        self.current_value = result
        return result

    def sqrt(self) -> float:
        if self.current_value < 0.0:
            raise CalcError(CalcErrorKind.NEGATIVE_SQRT)
        self.current_value = math.sqrt(self.current_value)
        return self.current_value

    def power(self, exponent: float) -> float:
        self.current_value = powf(self.current_value, exponent)
        return self.current_value

    def get_value(self) -> float:
        return self.current_value

    def set_value(self, value: float):
        self.current_value = value

    def clear(self):
        # Memory and history survive a clear
        self.current_value = 0.0

    def memory_store(self):
        self.memory = self.current_value

    def memory_recall(self) -> float:
        self.current_value = self.memory
        return self.memory

    def memory_clear(self):
        self.memory = 0.0

    def memory_add(self):
        self.memory += self.current_value

    def get_memory(self) -> float:
        return self.memory

    def get_history(self) -> List[Dict[str, Any]]:
        """Return a serializable snapshot of the history in insertion order."""
        return [entry.to_dict() for entry in self.history]

    def clear_history(self):
        self.history.clear()

    def history_count(self) -> int:
        return len(self.history)

    def _add_to_history(self, operand1: float, operand2: float, operation: Operation, result: float):
        self.history.append(CalculationHistory(operand1, operand2, operation, result))


def powf(base: float, exponent: float) -> float:
    """
    IEEE-754 pow: never raises, never returns a complex number.
    Python's ** returns complex for a negative base with a fractional exponent
    and math.pow raises on overflow, so both cases are mapped here.
    """
    base = float(base)
    exponent = float(exponent)
    try:
        return math.pow(base, exponent)
    except ValueError:
        # Negative finite base with non-integer exponent, or 0 ** negative
        if base == 0.0:
            odd_integer = exponent.is_integer() and int(exponent) % 2 == 1
            return math.copysign(math.inf, base) if odd_integer else math.inf
        return math.nan
    except OverflowError:
        odd_integer = exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if (base < 0 and odd_integer) else math.inf
