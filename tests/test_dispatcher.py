"""
Tests for the input dispatcher.
"""

import pytest

from menu_calc.dispatcher import Dispatcher
from menu_calc.engine import CalculatorEngine
from menu_calc.errors import UnknownTokenError


class TestTokenize:
    """Test keystroke string splitting."""

    def test_symbols(self):
        assert Dispatcher.tokenize("12+3=") == ["1", "2", "+", "3", "="]

    def test_words(self):
        assert Dispatcher.tokenize("100 tax") == ["1", "0", "0", "tax"]

    def test_hyphenated_word_is_lowered(self):
        assert Dispatcher.tokenize("7 CLEAR-ENTRY") == ["7", "clear-entry"]

    def test_minus_stays_operator(self):
        assert Dispatcher.tokenize("9-4") == ["9", "-", "4"]


class TestDispatch:
    """Test token routing to the engine."""

    def setup_method(self):
        self.engine = CalculatorEngine()
        self.dispatcher = Dispatcher(self.engine)

    def test_arithmetic_sequence(self):
        accepted = self.dispatcher.feed(["5", "+", "3", "equals"])
        assert accepted == 4
        assert self.engine.get_display_value() == "8"

    @pytest.mark.parametrize("token", ["=", "equals", "Enter"])
    def test_equals_aliases(self, token):
        self.dispatcher.feed(["6", "*", "7", token])
        assert self.engine.get_display_value() == "42"

    def test_comma_is_decimal(self):
        self.dispatcher.feed(["1", ",", "5"])
        assert self.engine.get_display_value() == "1.5"

    @pytest.mark.parametrize("token,expected", [
        ("tax", "13"),
        ("discount", "85"),
        ("tip", "18"),
        ("total", "131"),
    ])
    def test_special_tokens(self, token, expected):
        self.dispatcher.feed(["1", "0", "0", token])
        assert self.engine.get_display_value() == expected

    def test_editing_tokens(self):
        self.dispatcher.feed(["1", "2", "3", "backspace"])
        assert self.engine.get_display_value() == "12"
        self.dispatcher.feed(["+", "4", "clear-entry"])
        assert self.engine.get_display_value() == "12 + 0"
        self.dispatcher.dispatch("escape")
        assert self.engine.get_display_value() == "0"

    def test_clear_history_token(self):
        self.dispatcher.feed(["1", "+", "1", "="])
        self.dispatcher.dispatch("clear-history")
        assert self.engine.get_history() == []
        assert self.engine.get_display_value() == "2"

    def test_unknown_token_rejected(self):
        self.dispatcher.dispatch("5")
        assert self.dispatcher.dispatch("%") is False
        assert self.dispatcher.dispatch("") is False
        assert self.engine.get_display_value() == "5"

    def test_strict_dispatch_raises(self):
        with pytest.raises(UnknownTokenError):
            self.dispatcher.dispatch_strict("sqrt")

    def test_feed_counts_accepted(self):
        assert self.dispatcher.feed(["1", "x", "2"]) == 2
        assert self.engine.get_display_value() == "12"

    def test_default_engine(self):
        dispatcher = Dispatcher()
        dispatcher.dispatch("9")
        assert dispatcher.engine.get_display_value() == "9"


class TestConveniences:
    """Test import, paste and export."""

    def setup_method(self):
        self.engine = CalculatorEngine()
        self.dispatcher = Dispatcher(self.engine)

    def test_import_expression(self):
        assert self.dispatcher.import_calculation("12 * 3") is True
        assert self.engine.get_display_value() == "36"
        assert self.engine.get_history()[0] == "12 * 3 = 36"

    def test_import_leading_negative(self):
        self.dispatcher.import_calculation("-5+3")
        assert self.engine.get_display_value() == "-2"

    def test_import_plain_number(self):
        assert self.dispatcher.import_calculation(" 42 ") is False
        assert self.engine.get_display_value() == "42"

    def test_import_division_by_zero(self):
        self.dispatcher.import_calculation("7/0")
        assert self.engine.get_display_value() == "Error"

    def test_paste_number(self):
        self.dispatcher.feed(["9", "+"])
        assert self.dispatcher.paste("3.14") is True
        assert self.engine.get_display_value() == "3.14"
        assert self.engine.get_state().operator is None

    @pytest.mark.parametrize("text", ["abc", "-", "", "1.2.3"])
    def test_paste_rejects_non_numbers(self, text):
        self.dispatcher.dispatch("7")
        assert self.dispatcher.paste(text) is False
        assert self.engine.get_display_value() == "7"

    def test_export_result(self):
        self.dispatcher.feed(["5", "+", "3", "="])
        exported = self.dispatcher.export_result()
        assert exported.result == "8"
        assert exported.last_calculation == "5 + 3 = 8"
        assert exported.timestamp is not None

    def test_export_without_history(self):
        assert self.dispatcher.export_result().last_calculation is None

    def test_state(self):
        self.dispatcher.feed(["5", "+"])
        state = self.dispatcher.state()
        assert state["display"] == "5 +"
        assert state["model"]["accumulator"] == "5"
        assert state["history"] == []
