"""
calc_bridge.py - Host boundary for the accucalc core.
Maps CalcError kinds onto native Python exceptions and serializes history snapshots.
"""

import json
import logging
from typing import List, Dict, Any

from calc_core import Calculator, CalcError, CalcErrorKind
from calc_utils import factorial

logger = logging.getLogger(__name__)

HOST_EXCEPTIONS = {
    CalcErrorKind.DIVISION_BY_ZERO: ZeroDivisionError,
    CalcErrorKind.NEGATIVE_SQRT: ValueError,
    CalcErrorKind.OVERFLOW: OverflowError,
}

# What a host has to catch around bridge calls
HOST_ERRORS = (ZeroDivisionError, ValueError, OverflowError)


def to_host_exception(err: CalcError) -> Exception:
    """Build the native exception for a CalcError, carrying the kind's message."""
    exc_class = HOST_EXCEPTIONS[err.kind]
    logger.debug(f"Mapping {err.kind.name} to {exc_class.__name__}")
    return exc_class(err.as_str())


def history_to_json(entries: List[Dict[str, Any]], indent=None) -> str:
    return json.dumps(entries, indent=indent, allow_nan=True)


class CalculatorBridge:
    """
    Exposes one Calculator to a host. Values pass through unchanged; the two
    fallible calculator methods and factorial raise native exceptions instead
    of CalcError.
    """

    def __init__(self, calculator: Calculator = None):
        self.calculator = calculator if calculator is not None else Calculator()

    def add(self, value: float) -> float:
        return self.calculator.add(value)

    def subtract(self, value: float) -> float:
        return self.calculator.subtract(value)

    def multiply(self, value: float) -> float:
        return self.calculator.multiply(value)

    def divide(self, value: float) -> float:
        try:
            return self.calculator.divide(value)
        except CalcError as e:
            raise to_host_exception(e) from e

    def sqrt(self) -> float:
        try:
            return self.calculator.sqrt()
        except CalcError as e:
            raise to_host_exception(e) from e

    def power(self, exponent: float) -> float:
        return self.calculator.power(exponent)

    def get_value(self) -> float:
        return self.calculator.get_value()

    def set_value(self, value: float):
        self.calculator.set_value(value)

    def clear(self):
        self.calculator.clear()

    def memory_store(self):
        self.calculator.memory_store()

    def memory_recall(self) -> float:
        return self.calculator.memory_recall()

    def memory_clear(self):
        self.calculator.memory_clear()

    def memory_add(self):
        self.calculator.memory_add()

    def get_memory(self) -> float:
        return self.calculator.get_memory()

    def get_history(self) -> List[Dict[str, Any]]:
        return self.calculator.get_history()

    def history_json(self, indent=None) -> str:
        return history_to_json(self.calculator.get_history(), indent=indent)

    def clear_history(self):
        self.calculator.clear_history()

    def history_count(self) -> int:
        return self.calculator.history_count()

    @staticmethod
    def factorial(n: int) -> int:
        try:
            return factorial(n)
        except CalcError as e:
            raise to_host_exception(e) from e
