"""
Tests for the command-line interface.
"""

from typer.testing import CliRunner

from menu_calc.cli import app

runner = CliRunner()


class TestRunCommand:
    """Test the run command."""

    def test_arithmetic(self):
        result = runner.invoke(app, ["run", "12", "+", "3", "="])
        assert result.exit_code == 0
        assert "15" in result.output
        assert "12 + 3 = 15" in result.output

    def test_keystroke_string(self):
        result = runner.invoke(app, ["run", "100 tax"])
        assert result.exit_code == 0
        assert "Tax (13%) on 100 = 13" in result.output

    def test_error_exits_nonzero(self):
        result = runner.invoke(app, ["run", "1/0="])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_input_reported(self):
        result = runner.invoke(app, ["run", "5", "%"])
        assert result.exit_code == 0
        assert "Ignored unknown input: %" in result.output

    def test_config_file(self, tmp_path):
        path = tmp_path / "calc.yaml"
        path.write_text("tax_rate: 0.1\n")
        result = runner.invoke(app, ["--config", str(path), "run", "50 tax"])
        assert result.exit_code == 0
        assert "Tax (10%) on 50 = 5" in result.output


class TestOtherCommands:
    """Test import-expr, repl and info."""

    def test_import_expr(self):
        result = runner.invoke(app, ["import-expr", "6 * 7"])
        assert result.exit_code == 0
        assert "42" in result.output

    def test_import_expr_undefined(self):
        result = runner.invoke(app, ["import-expr", "0/0"])
        assert result.exit_code == 1
        assert "Undefined" in result.output

    def test_repl(self):
        result = runner.invoke(app, ["repl"], input="5+3=\nhistory\nquit\n")
        assert result.exit_code == 0
        assert "5 + 3 = 8" in result.output

    def test_repl_ends_on_eof(self):
        result = runner.invoke(app, ["repl"], input="7\n")
        assert result.exit_code == 0

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "13%" in result.output
        assert "Menu-Makers Calculator" in result.output


class TestConfigurationErrors:
    """Test reporting of bad settings."""

    def test_unknown_log_level(self):
        result = runner.invoke(app, ["--log-level", "chatty", "info"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_invalid_yaml_value(self, tmp_path):
        path = tmp_path / "calc.yaml"
        path.write_text("financial_precision: 30\n")
        result = runner.invoke(app, ["--config", str(path), "info"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
