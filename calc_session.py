"""
calc_session.py - Keypad-style front end for accucalc.
Drives a CalculatorBridge the way a calculator face does: an input buffer,
a pending binary operation, and a display transcript of everything computed.
"""

import logging
import math
import re
import sys
from typing import List, Optional

from calc_bridge import CalculatorBridge, HOST_ERRORS
from calc_config import DEFAULT_HISTORY_LIMIT
from calc_core import Operation
from calc_utils import compound_interest, format_number, percentage

logger = logging.getLogger(__name__)

BINARY_OPERATIONS = {
    'add': Operation.ADD,
    'subtract': Operation.SUBTRACT,
    'multiply': Operation.MULTIPLY,
    'divide': Operation.DIVIDE,
}

OPERATION_ALIASES = {
    '+': 'add', 'add': 'add',
    '-': 'subtract', 'sub': 'subtract', 'subtract': 'subtract',
    '*': 'multiply', 'x': 'multiply', '×': 'multiply', 'mul': 'multiply', 'multiply': 'multiply',
    '/': 'divide', '÷': 'divide', 'div': 'divide', 'divide': 'divide',
}

NUMBER_PATTERN = re.compile(r'^-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$')


class CalcSession:
    """
    One interactive calculator: an input buffer over a CalculatorBridge plus
    a transcript that, unlike the calculator history, also records sqrt,
    squares and factorials.
    """

    def __init__(self, bridge: Optional[CalculatorBridge] = None,
                 history_limit: int = DEFAULT_HISTORY_LIMIT, quiet: bool = False):
        self.bridge = bridge if bridge is not None else CalculatorBridge()
        self.history_limit = history_limit
        self.quiet = quiet
        self.current_input: str = '0'
        self.operation: Optional[str] = None
        self.waiting_for_operand: bool = False
        self.transcript: List[str] = []

    def _log(self, message: str, is_error: bool = False):
        if not self.quiet or is_error:
            level = "ERROR" if is_error else "INFO"
            print(f"CalcSession ({level}): {message}", file=sys.stderr)

    def _record(self, line: str):
        self.transcript.append(line)
        self._log(line)

    def _show_error(self, error: Exception):
        self.current_input = f"Error: {error}"
        self._log(str(error), is_error=True)

    def _input_value(self) -> float:
        # An error message in the buffer reads as NaN, like an unparsable display
        try:
            return float(self.current_input)
        except ValueError:
            return math.nan

    @property
    def display(self) -> str:
        return self.current_input

    @property
    def memory_display(self) -> str:
        return f"Memory: {format_number(self.bridge.get_memory())}"

    def append_number(self, digits: str):
        if self.waiting_for_operand or self.current_input.startswith("Error"):
            self.current_input = digits
            self.waiting_for_operand = False
        elif self.current_input == '0':
            self.current_input = digits
        else:
            # Only plain digits extend the buffer; a signed, decimal or
            # exponent token starts a new number
            candidate = self.current_input + digits
            if digits.isdigit() and NUMBER_PATTERN.match(candidate):
                self.current_input = candidate
            else:
                self.current_input = digits

    def set_operation(self, op: str):
        input_value = self._input_value()

        if op == 'sqrt':
            self.bridge.set_value(input_value)
            try:
                result = self.bridge.sqrt()
                self._record(f"√{format_number(input_value)} = {format_number(result)}")
                self.current_input = format_number(result)
            except HOST_ERRORS as e:
                self._show_error(e)
            return

        if op == 'square':
            self.bridge.set_value(input_value)
            result = self.bridge.power(2)
            self._record(f"{format_number(input_value)}² = {format_number(result)}")
            self.current_input = format_number(result)
            return

        if op not in BINARY_OPERATIONS:
            raise ValueError(f"Unknown operation '{op}'")

        if self.operation is not None:
            self.calculate()
        else:
            self.bridge.set_value(input_value)

        self.operation = op
        self.waiting_for_operand = True
        logger.debug(f"Pending operation '{op}'")

    def calculate(self):
        if self.operation is None:
            return

        input_value = self._input_value()
        previous_value = self.bridge.get_value()
        operation = BINARY_OPERATIONS[self.operation]

        try:
            result = getattr(self.bridge, self.operation)(input_value)
        except HOST_ERRORS as e:
            self._show_error(e)
            return

        self._record(f"{format_number(previous_value)} {operation.symbol} "
                     f"{format_number(input_value)} = {format_number(result)}")
        self.current_input = format_number(result)
        self.operation = None
        self.waiting_for_operand = True

    def clear(self):
        self.current_input = '0'
        self.operation = None
        self.waiting_for_operand = False
        self.bridge.clear()

    def memory_store(self):
        self.bridge.set_value(self._input_value())
        self.bridge.memory_store()

    def memory_recall(self):
        value = self.bridge.memory_recall()
        self.current_input = format_number(value)

    def memory_clear(self):
        self.bridge.memory_clear()

    def memory_add(self):
        self.bridge.set_value(self._input_value())
        self.bridge.memory_add()

    def clear_history(self):
        self.bridge.clear_history()
        self.transcript = []

    def calculate_factorial(self):
        # Truncates like parseInt on the display text
        try:
            n = math.trunc(float(self.current_input))
        except (ValueError, OverflowError):
            n = None

        if n is None or n < 0:
            self._show_error(ValueError("Invalid input"))
            return

        try:
            result = self.bridge.factorial(n)
        except HOST_ERRORS as e:
            self._show_error(e)
            return

        self._record(f"{n}! = {result}")
        self.current_input = str(result)

    def recent_history(self, limit: Optional[int] = None) -> List[str]:
        """Last `limit` transcript lines, most recent first."""
        if limit is None:
            limit = self.history_limit
        if limit <= 0:
            return []
        return list(reversed(self.transcript[-limit:]))

    def run_command(self, line: str) -> str:
        """
        Executes one textual command and returns what the display shows afterwards.

        Numbers are typed into the buffer; operators (+ - * / and their names)
        work like keypad keys, optionally followed by an operand ("add 5").
        Raises ValueError for anything it does not understand.
        """
        tokens = line.split()
        if not tokens:
            return self.display

        command, args = tokens[0].lower(), tokens[1:]

        if NUMBER_PATTERN.match(command) and not args:
            self.append_number(command)
            return self.display

        if command in OPERATION_ALIASES:
            self.set_operation(OPERATION_ALIASES[command])
            if args:
                self.append_number(self._number_arg(args[0]))
                self.calculate()
            return self.display

        if command == '=':
            self.calculate()
        elif command == 'sqrt':
            self.set_operation('sqrt')
        elif command in ('sq', 'square'):
            self.set_operation('square')
        elif command in ('pow', 'power'):
            exponent = float(self._number_arg(self._single_arg(command, args)))
            self.bridge.set_value(self._input_value())
            self.current_input = format_number(self.bridge.power(exponent))
        elif command in ('fact', '!'):
            self.calculate_factorial()
        elif command == 'ms':
            self.memory_store()
            return self.memory_display
        elif command == 'mr':
            self.memory_recall()
        elif command == 'mc':
            self.memory_clear()
            return self.memory_display
        elif command == 'm+':
            self.memory_add()
            return self.memory_display
        elif command in ('mem', 'memory'):
            return self.memory_display
        elif command in ('c', 'clear'):
            self.clear()
        elif command == 'ch':
            self.clear_history()
            return "History cleared"
        elif command == 'history':
            recent = self.recent_history()
            if not recent:
                return "No history yet"
            return '\n'.join(recent)
        elif command in ('pct', 'percentage'):
            if len(args) != 2:
                raise ValueError("pct requires VALUE PERCENT")
            value, percent = (float(self._number_arg(a)) for a in args)
            return format_number(percentage(value, percent))
        elif command in ('ci', 'compound'):
            if len(args) != 4:
                raise ValueError("ci requires PRINCIPAL RATE YEARS COMPOUNDS_PER_YEAR")
            principal, rate, years, per_year = (float(self._number_arg(a)) for a in args)
            return format_number(compound_interest(principal, rate, years, per_year))
        else:
            raise ValueError(f"Unknown command '{tokens[0]}'")

        return self.display

    @staticmethod
    def _number_arg(text: str) -> str:
        if not NUMBER_PATTERN.match(text):
            raise ValueError(f"Not a number: '{text}'")
        return text

    @staticmethod
    def _single_arg(command: str, args: List[str]) -> str:
        if len(args) != 1:
            raise ValueError(f"{command} requires exactly one argument")
        return args[0]
