"""
Menu-Makers Calculator - Four-function calculator with financial operations

A calculator engine for restaurant menus and bills: chained four-function
arithmetic, fixed-rate tax, discount, tip and total calculations, and a
bounded calculation history. The engine owns all state; a dispatcher feeds
it input tokens and a presenter renders what it exposes.
"""

__version__ = "1.0.0"
__author__ = "Menu-Makers Development Team"

from menu_calc.engine import CalculatorEngine
from menu_calc.dispatcher import Dispatcher
from menu_calc.errors import CalculatorError
from menu_calc.models import EngineSnapshot, ErrorKind, Operator

__all__ = [
    "CalculatorEngine",
    "CalculatorError",
    "Dispatcher",
    "EngineSnapshot",
    "ErrorKind",
    "Operator",
]
