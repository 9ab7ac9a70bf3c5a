"""
Command-line interface for the Menu-Makers Calculator.

Provides commands for:
- Running a sequence of input tokens
- Importing a single expression
- An interactive calculator session
- Showing the active configuration
"""

from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from menu_calc import __version__
from menu_calc.config import Settings, load_settings
from menu_calc.dispatcher import Dispatcher
from menu_calc.engine import CalculatorEngine
from menu_calc.log import configure_logging
from menu_calc.numeric import format_percent
from menu_calc.presenter import show

app = typer.Typer(
    name="menu-calc",
    help="Menu-Makers Calculator - arithmetic with tax, discount, tip and totals",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level"),
):
    """Load settings and configure logging for every command."""
    try:
        settings = load_settings(config, log_level=log_level)
        configure_logging(settings.log_level)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/]")
        raise typer.Exit(1)
    ctx.obj = settings


def _dispatcher(ctx: typer.Context) -> Dispatcher:
    settings: Settings = ctx.obj or Settings()
    return Dispatcher(CalculatorEngine(settings))


# =============================================================================
# Calculation Commands
# =============================================================================

@app.command()
def run(
    ctx: typer.Context,
    keys: List[str] = typer.Argument(..., help="Input tokens, e.g. 12 + 3 = or '100 tax'"),
):
    """Feed input tokens to a fresh calculator and show the result."""
    dispatcher = _dispatcher(ctx)

    for key in keys:
        for token in dispatcher.tokenize(key):
            if not dispatcher.dispatch(token):
                console.print(f"[yellow]Ignored unknown input: {token}[/]")

    show(console, dispatcher.engine)

    if dispatcher.engine.is_in_error_state():
        raise typer.Exit(1)


@app.command()
def import_expr(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression such as '12.5 * 4'"),
):
    """Evaluate a single 'a <op> b' expression."""
    dispatcher = _dispatcher(ctx)
    dispatcher.import_calculation(expression)
    show(console, dispatcher.engine, history=False)

    if dispatcher.engine.is_in_error_state():
        raise typer.Exit(1)


@app.command()
def repl(ctx: typer.Context):
    """Start an interactive calculator session."""
    dispatcher = _dispatcher(ctx)
    console.print(f"[bold green]{dispatcher.engine.settings.app_name} v{__version__}[/]")
    console.print("[dim]Type keys (12+3=, 100 tax), 'history', 'state' or 'quit'[/]")

    while True:
        try:
            line = console.input("[cyan]calc>[/] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        command = line.lower()
        if command in ("quit", "exit"):
            break
        if command == "history":
            show(console, dispatcher.engine)
            continue
        if command == "state":
            console.print(dispatcher.state())
            continue

        for token in dispatcher.tokenize(line):
            if not dispatcher.dispatch(token):
                console.print(f"[yellow]Ignored unknown input: {token}[/]")
        show(console, dispatcher.engine, history=False)


# =============================================================================
# Configuration Commands
# =============================================================================

@app.command()
def info(ctx: typer.Context):
    """Show rates and limits in effect."""
    settings: Settings = ctx.obj or Settings()

    table = Table(title=settings.app_name)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Version", __version__)
    table.add_row("Tax rate", f"{format_percent(settings.tax_rate)}%")
    table.add_row("Discount rate", f"{format_percent(settings.discount_rate)}%")
    table.add_row("Tip rate", f"{format_percent(settings.tip_rate)}%")
    table.add_row("Max input length", str(settings.max_input_length))
    table.add_row("History capacity", str(settings.history_capacity))
    table.add_row("Arithmetic precision", str(settings.arithmetic_precision))
    table.add_row("Financial precision", str(settings.financial_precision))

    console.print(table)


if __name__ == "__main__":
    app()
