"""
Rich rendering of engine state for the terminal.
"""

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from menu_calc.engine import CalculatorEngine


def render_display(engine: CalculatorEngine) -> Panel:
    """Render the display value, red while the engine is in error."""
    style = "bold red" if engine.is_in_error_state() else "bold green"
    return Panel(
        Text(engine.get_display_value(), style=style, justify="right"),
        title="Display",
        width=40,
    )


def render_history(engine: CalculatorEngine) -> Table | Text:
    """Render history newest first."""
    history = engine.get_history()
    if not history:
        return Text("No history", style="dim")

    table = Table(title="History")
    table.add_column("#", style="dim")
    table.add_column("Calculation", style="cyan")
    for index, entry in enumerate(history, start=1):
        style = "red" if entry.startswith("Error:") else None
        table.add_row(str(index), Text(entry, style=style or ""))
    return table


def show(console: Console, engine: CalculatorEngine, history: bool = True) -> None:
    """Print the display and, optionally, the history."""
    if history:
        console.print(Group(render_display(engine), render_history(engine)))
    else:
        console.print(render_display(engine))
