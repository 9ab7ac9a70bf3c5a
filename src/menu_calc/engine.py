"""
Arithmetic engine for the Menu-Makers Calculator.

Owns all calculator state: the operand being typed, the accumulator and
pending operator, the result/error state, and the bounded history. The
dispatcher drives it one operation at a time; the presenter only reads.

State machine:
ENTRY -> (operator) -> PENDING_OP -> (digit) -> ENTRY -> (equals) -> RESULT
Any failure moves to the error state; the next input clears it first.
"""

import functools
import math
from typing import Callable

import structlog

from menu_calc.config import Settings, settings as default_settings
from menu_calc.errors import (
    CalculatorError,
    DivisionByZeroError,
    InputOverflowError,
    InvalidOperandError,
    MagnitudeOverflowError,
)
from menu_calc.models import (
    EngineSnapshot,
    Numeral,
    Operand,
    Operator,
    Sentinel,
    failure_operand,
)
from menu_calc.numeric import (
    MAX_SAFE_INTEGER,
    format_number,
    format_percent,
    is_numeral,
    parse_numeral,
    round_half_away,
)

logger = structlog.get_logger()


def _guarded(method: Callable) -> Callable:
    """Turn a CalculatorError raised by an operation into the error state."""

    @functools.wraps(method)
    def wrapper(self: "CalculatorEngine", *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except CalculatorError as e:
            self._fail(e)

    return wrapper


class CalculatorEngine:
    """
    Four-function calculator with financial operations and history.

    Every public mutating operation runs to completion and never raises a
    CalculatorError; failures surface as the ``Error`` / ``Undefined``
    display and a history entry.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings
        self._input: Operand = Numeral("0")
        self._accumulator: str = ""
        self._operator: Operator | None = None
        self._reset_pending = False
        self._showing_result = False
        self._history: list[str] = []

    # =========================================================================
    # Entry
    # =========================================================================

    @_guarded
    def add_number(self, token: str) -> None:
        """Append a digit (or a whole numeral) to the current operand."""
        self._recover_if_failed()
        token = str(token)

        if self._reset_pending or self._showing_result:
            self._check_entry(token)
            self._start_operand(token)
            return

        current = self._input_text()
        candidate = token if current == "0" else current + token
        self._check_entry(candidate)
        self._input = Numeral(candidate)

    @_guarded
    def add_decimal(self) -> None:
        """Add a decimal point unless the operand already has one."""
        self._recover_if_failed()

        if self._reset_pending or self._showing_result:
            self._start_operand("0.")
            return

        current = self._input_text()
        if "." in current:
            return
        if len(current) >= self.settings.max_input_length:
            raise InputOverflowError(f"Input exceeds {self.settings.max_input_length} characters")
        self._input = Numeral(current + ".")

    @_guarded
    def set_operator(self, op: Operator | str) -> None:
        """
        Record a pending operator.

        If an operator is already pending with a second operand entered, the
        pending pair is evaluated first, so ``2 + 3 +`` shows ``5 +``.
        """
        operator = Operator(op)

        if self.is_in_error_state():
            # Dropped rather than resuming a broken expression
            self._recover_if_failed()
            return

        if self._operator is not None and not self._reset_pending and not self._showing_result:
            logger.debug("Chained evaluation", operator=self._operator.value)
            self._evaluate()

        self._accumulator = self._input_text()
        self._operator = operator
        self._reset_pending = True
        self._showing_result = False

    @_guarded
    def calculate(self) -> None:
        """Apply the pending operator to the accumulator and current operand."""
        self._recover_if_failed()
        if self._operator is None or self._reset_pending:
            return
        self._evaluate()

    # =========================================================================
    # Financial operations
    # =========================================================================

    @_guarded
    def calculate_tax(self) -> None:
        """Replace the current amount with the tax due on it."""
        self._recover_if_failed()
        amount = self._financial_amount()
        rate = self.settings.tax_rate
        result = self._round_financial(amount * rate)
        self._finish_financial(
            f"Tax ({format_percent(rate)}%) on {format_number(amount)} = {format_number(result)}",
            result,
        )

    @_guarded
    def apply_discount(self) -> None:
        """Replace the current amount with the discounted amount."""
        self._recover_if_failed()
        amount = self._financial_amount()
        rate = self.settings.discount_rate
        result = self._round_financial(amount - amount * rate)
        self._finish_financial(
            f"{format_number(amount)} - {format_percent(rate)}% discount = {format_number(result)}",
            result,
        )

    @_guarded
    def calculate_tip(self) -> None:
        """Replace the current amount with the tip on it."""
        self._recover_if_failed()
        amount = self._financial_amount()
        rate = self.settings.tip_rate
        result = self._round_financial(amount * rate)
        self._finish_financial(
            f"Tip ({format_percent(rate)}%) on {format_number(amount)} = {format_number(result)}",
            result,
        )

    @_guarded
    def calculate_total(self) -> None:
        """Replace the current amount with amount + tax + tip."""
        self._recover_if_failed()
        amount = self._financial_amount()
        tax = amount * self.settings.tax_rate
        tip = amount * self.settings.tip_rate
        result = self._round_financial(amount + tax + tip)
        self._finish_financial(
            f"{format_number(amount)} + tax + tip = {format_number(result)}",
            result,
        )

    # =========================================================================
    # Editing
    # =========================================================================

    def backspace(self) -> None:
        """Remove the last character of the operand; a result is cleared."""
        if self._showing_result:
            self.clear()
            return

        remaining = self._input_text()[:-1]
        if remaining in ("", "-"):
            remaining = "0"
        self._input = Numeral(remaining)

    def clear_entry(self) -> None:
        """Reset the current operand only; a result is cleared."""
        if self._showing_result:
            self.clear()
            return

        self._input = Numeral("0")
        self._reset_pending = False

    def clear(self) -> None:
        """Reset the expression. History is kept."""
        self._input = Numeral("0")
        self._accumulator = ""
        self._operator = None
        self._reset_pending = False
        self._showing_result = False

    reset = clear

    # =========================================================================
    # History
    # =========================================================================

    def add_to_history(self, entry: str) -> None:
        """Record an entry, newest first, dropping the oldest past capacity."""
        self._history.insert(0, entry)
        del self._history[self.settings.history_capacity:]

    def clear_history(self) -> None:
        """Clear calculation history."""
        self._history.clear()

    # =========================================================================
    # Queries
    # =========================================================================

    def get_display_value(self) -> str:
        """Return the expression shown to the user, derived from state."""
        if self.is_in_error_state():
            return self._input.display()

        current = self._input_text()
        if self._showing_result:
            return current
        if self._operator is not None and self._accumulator:
            if self._reset_pending:
                return f"{self._accumulator} {self._operator.value}"
            return f"{self._accumulator} {self._operator.value} {current}"
        return current or "0"

    def get_history(self) -> list[str]:
        """Return calculation history, newest first."""
        return self._history.copy()

    def is_in_error_state(self) -> bool:
        return not isinstance(self._input, Numeral)

    def get_state(self) -> EngineSnapshot:
        """Return a diagnostic snapshot of the engine state."""
        return EngineSnapshot(
            input_buffer=self._input.display(),
            accumulator=self._accumulator,
            operator=self._operator,
            reset_pending=self._reset_pending,
            showing_result=self._showing_result,
            history_count=len(self._history),
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _input_text(self) -> str:
        return self._input.display()

    def _recover_if_failed(self) -> None:
        if self.is_in_error_state():
            logger.debug("Clearing error state", sentinel=self._input.display())
            self.clear()

    def _check_entry(self, text: str) -> None:
        if len(text) > self.settings.max_input_length:
            raise InputOverflowError(f"Input exceeds {self.settings.max_input_length} characters")
        if not is_numeral(text):
            raise InvalidOperandError(f"Not a number: {text!r}")

    def _start_operand(self, text: str) -> None:
        """Begin a fresh operand after an operator or a result."""
        if self._showing_result:
            self._accumulator = ""
            self._operator = None
            self._showing_result = False
        self._input = Numeral(text)
        self._reset_pending = False

    def _evaluate(self) -> None:
        operator = self._operator
        left = parse_numeral(self._accumulator)
        right = parse_numeral(self._input_text())

        if operator is Operator.DIV and right == 0:
            if left == 0:
                raise DivisionByZeroError("0 / 0 is undefined", Sentinel.UNDEFINED)
            raise DivisionByZeroError("Cannot divide by zero")

        try:
            result = operator.apply(left, right)
        except OverflowError as e:
            raise MagnitudeOverflowError(str(e)) from e

        if math.isnan(result):
            raise MagnitudeOverflowError("Result is not a number", Sentinel.UNDEFINED)
        if math.isinf(result) or abs(result) > MAX_SAFE_INTEGER:
            raise MagnitudeOverflowError("Result exceeds the safe integer range")

        result = round_half_away(result, self.settings.arithmetic_precision)
        text = format_number(result)
        expression = f"{format_number(left)} {operator.value} {format_number(right)}"

        self.add_to_history(f"{expression} = {text}")
        self._show_result(text)
        logger.info("Calculation complete", expression=expression, result=text)

    def _financial_amount(self) -> float:
        amount = parse_numeral(self._input_text())
        if amount < 0:
            raise InvalidOperandError("Amount cannot be negative")
        if amount > MAX_SAFE_INTEGER:
            raise InvalidOperandError("Amount exceeds the safe integer range")
        return amount

    def _round_financial(self, value: float) -> float:
        result = round_half_away(value, self.settings.financial_precision)
        if not math.isfinite(result):
            raise MagnitudeOverflowError("Financial result is not finite")
        return result

    def _finish_financial(self, entry: str, result: float) -> None:
        text = format_number(result)
        self.add_to_history(entry)
        self._show_result(text)
        logger.info("Financial operation complete", entry=entry)

    def _show_result(self, text: str) -> None:
        self._input = Numeral(text)
        self._accumulator = ""
        self._operator = None
        self._reset_pending = False
        self._showing_result = True

    def _fail(self, error: CalculatorError) -> None:
        self._input = failure_operand(error.kind, error.sentinel)
        self._accumulator = ""
        self._operator = None
        self._reset_pending = True
        self._showing_result = True
        self.add_to_history(f"Error: {error.sentinel.value}")
        logger.warning(
            "Calculation failed",
            kind=error.kind.value,
            sentinel=error.sentinel.value,
            reason=str(error),
        )
