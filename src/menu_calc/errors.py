"""
Exception hierarchy for engine failures.

These are raised inside the engine and converted into the error display
state at each public operation; they never reach the dispatcher.
"""

from menu_calc.models import ErrorKind, Sentinel


class CalculatorError(Exception):
    """Base exception for calculator errors."""

    kind: ErrorKind = ErrorKind.INVALID_OPERAND

    def __init__(self, message: str, sentinel: Sentinel = Sentinel.ERROR):
        super().__init__(message)
        self.sentinel = sentinel


class InputOverflowError(CalculatorError):
    """Raised when typed input would exceed the length cap."""
    kind = ErrorKind.OVERFLOW


class InvalidOperandError(CalculatorError):
    """Raised when an operand is not a usable number."""
    kind = ErrorKind.INVALID_OPERAND


class DivisionByZeroError(CalculatorError):
    """Raised when attempting to divide by zero."""
    kind = ErrorKind.DIVISION_BY_ZERO


class MagnitudeOverflowError(CalculatorError):
    """Raised when a result is not finite or exceeds the safe integer range."""
    kind = ErrorKind.MAGNITUDE_OVERFLOW


class UnknownTokenError(ValueError):
    """Raised by the strict dispatcher entry for tokens outside the vocabulary."""
