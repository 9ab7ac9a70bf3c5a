"""
Input dispatcher for the Menu-Makers Calculator.

Translates raw input tokens (button names, keystrokes) into engine calls.
The dispatcher holds exactly one engine and contains no arithmetic; it also
provides the import/paste/export conveniences that sit outside the engine.
"""

import re
from typing import Any, Callable, Iterable

import structlog

from menu_calc.engine import CalculatorEngine
from menu_calc.errors import UnknownTokenError
from menu_calc.models import ExportedResult, Operator

logger = structlog.get_logger()

DIGITS = "0123456789"
DECIMAL_TOKENS = (".", ",")
OPERATOR_TOKENS = tuple(op.value for op in Operator)

_PASTE_RE = re.compile(r"^-?\d*\.?\d*$")
_WORD_RE = re.compile(r"[a-z][a-z-]*")


class Dispatcher:
    """
    Routes input tokens to a single calculator engine.

    Accepted vocabulary: digits, ``.``/``,``, ``+ - * /``, the actions
    ``equals`` (``=``, ``enter``), ``clear`` (``escape``), ``clear-entry``,
    ``backspace``, ``clear-history``, and the specials ``tax``, ``discount``,
    ``tip``, ``total``.
    """

    def __init__(self, engine: CalculatorEngine | None = None):
        self.engine = engine or CalculatorEngine()
        self._actions: dict[str, Callable[[], None]] = {
            "=": self.engine.calculate,
            "equals": self.engine.calculate,
            "enter": self.engine.calculate,
            "clear": self.engine.clear,
            "escape": self.engine.clear,
            "clear-entry": self.engine.clear_entry,
            "backspace": self.engine.backspace,
            "clear-history": self.engine.clear_history,
            "tax": self.engine.calculate_tax,
            "discount": self.engine.apply_discount,
            "tip": self.engine.calculate_tip,
            "total": self.engine.calculate_total,
        }

    # =========================================================================
    # Token dispatch
    # =========================================================================

    def dispatch(self, token: str) -> bool:
        """Dispatch one token. Unknown tokens are rejected and logged."""
        try:
            self.dispatch_strict(token)
        except UnknownTokenError:
            logger.warning("Rejected input token", token=token)
            return False
        return True

    def dispatch_strict(self, token: str) -> None:
        """Dispatch one token, raising UnknownTokenError if it is not accepted."""
        if len(token) == 1 and token in DIGITS:
            self.engine.add_number(token)
        elif token in DECIMAL_TOKENS:
            self.engine.add_decimal()
        elif token in OPERATOR_TOKENS:
            self.engine.set_operator(token)
        elif token.lower() in self._actions:
            self._actions[token.lower()]()
        else:
            raise UnknownTokenError(f"Unknown input token: {token!r}")

    def feed(self, tokens: Iterable[str]) -> int:
        """Dispatch a sequence of tokens and return how many were accepted."""
        return sum(1 for token in tokens if self.dispatch(token))

    @staticmethod
    def tokenize(text: str) -> list[str]:
        """
        Split a keystroke string into tokens.

        Symbols are one token per character; runs of letters form word
        tokens, so ``"100 tax"`` gives ``["1", "0", "0", "tax"]``.
        """
        tokens = []
        position = 0
        lowered = text.lower()
        while position < len(text):
            char = text[position]
            if char.isspace():
                position += 1
                continue
            match = _WORD_RE.match(lowered, position)
            if match:
                tokens.append(match.group())
                position = match.end()
            else:
                tokens.append(char)
                position += 1
        return tokens

    # =========================================================================
    # Conveniences
    # =========================================================================

    def import_calculation(self, expression: str) -> bool:
        """
        Best-effort import of a single ``a <op> b`` expression.

        Splits on the last operator that is not the leading character, feeds
        both operands through the normal operations and evaluates. Without an
        operator the text is entered as a plain number. Returns whether an
        operator was found.
        """
        operator = None
        index = -1
        for position in range(len(expression) - 1, 0, -1):
            if expression[position] in OPERATOR_TOKENS:
                operator = expression[position]
                index = position
                break

        self.engine.clear()
        if operator is None:
            self.engine.add_number(expression.strip())
            return False

        self.engine.add_number(expression[:index].strip())
        self.engine.set_operator(operator)
        self.engine.add_number(expression[index + 1:].strip())
        self.engine.calculate()
        logger.info("Calculation imported", expression=expression)
        return True

    @staticmethod
    def validate_input(text: str) -> bool:
        """Return True if text looks like a number that can be pasted."""
        return bool(text) and any(c.isdigit() for c in text) and bool(_PASTE_RE.match(text))

    def paste(self, text: str) -> bool:
        """Replace the current expression with a pasted number."""
        text = text.strip()
        if not self.validate_input(text):
            logger.warning("Rejected pasted text", text=text)
            return False
        self.engine.clear()
        self.engine.add_number(text)
        return True

    def export_result(self) -> ExportedResult:
        """Export the displayed value and the most recent history entry."""
        history = self.engine.get_history()
        return ExportedResult(
            result=self.engine.get_display_value(),
            last_calculation=history[0] if history else None,
        )

    def state(self) -> dict[str, Any]:
        """Diagnostic view combining engine snapshot, display and history."""
        return {
            "model": self.engine.get_state().model_dump(),
            "display": self.engine.get_display_value(),
            "history": self.engine.get_history(),
        }
