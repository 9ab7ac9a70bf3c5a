"""
Core data models for the Menu-Makers Calculator.

Defines the operator and error enums, the operand tagged union held in the
engine's input buffer, and the read-only snapshots handed to collaborators.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class Operator(str, Enum):
    """Binary operators the engine can hold as pending."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    def apply(self, left: float, right: float) -> float:
        """Apply the operator; division guards live in the engine."""
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUB:
            return left - right
        if self is Operator.MUL:
            return left * right
        if self is Operator.DIV:
            return left / right
        raise ValueError(f"Unhandled operator: {self!r}")


class ErrorKind(str, Enum):
    """Failure classes surfaced as display sentinels."""
    OVERFLOW = "overflow"  # Input exceeds the length cap
    INVALID_OPERAND = "invalid_operand"
    DIVISION_BY_ZERO = "division_by_zero"
    MAGNITUDE_OVERFLOW = "magnitude_overflow"  # Result not finite or not safe


class Sentinel(str, Enum):
    """Display text shown while the engine is in its error state."""
    ERROR = "Error"
    UNDEFINED = "Undefined"


# =============================================================================
# Operand
# =============================================================================

@dataclass(frozen=True)
class Numeral:
    """A (possibly partial) decimal numeral being typed or just computed."""
    text: str

    def display(self) -> str:
        return self.text


@dataclass(frozen=True)
class ErrorValue:
    """A failed operation that displays as ``Error``."""
    kind: ErrorKind

    def display(self) -> str:
        return Sentinel.ERROR.value


@dataclass(frozen=True)
class UndefinedValue:
    """An algebraically indeterminate result (0/0, NaN)."""
    kind: ErrorKind

    def display(self) -> str:
        return Sentinel.UNDEFINED.value


Operand = Union[Numeral, ErrorValue, UndefinedValue]


def failure_operand(kind: ErrorKind, sentinel: Sentinel) -> Operand:
    """Build the error operand matching a sentinel."""
    if sentinel is Sentinel.UNDEFINED:
        return UndefinedValue(kind)
    return ErrorValue(kind)


# =============================================================================
# Snapshots
# =============================================================================

class EngineSnapshot(BaseModel):
    """Read-only diagnostic view of engine state."""
    input_buffer: str
    accumulator: str = ""
    operator: Operator | None = None
    reset_pending: bool = False
    showing_result: bool = False
    history_count: int = 0


class ExportedResult(BaseModel):
    """Result export handed out by the dispatcher."""
    result: str
    last_calculation: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
