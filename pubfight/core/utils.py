"""
Console helpers for the terminal driver.

All fight output goes through a single rich console, so sheets, tables and
menus share markup and width.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.rule import Rule

_console = Console(markup=True, width=120)


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints rich markup, tables or padded blocks to the fight console."""
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Prints a horizontal rule, used to separate fights and character sheets.

    Args:
        *args: Title of the rule, passed to ``rich.rule.Rule``.
        **kwargs: Style options, passed to ``rich.rule.Rule``.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Renders content to an ANSI string instead of printing it.

    The interactive menus need the rendered table as prompt text.

    Args:
        content (Any): Markup or a renderable, such as a rich table.

    Returns:
        str: The rendered text, escape codes included.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Draws a resource as a bar of filled and empty cells.

    Args:
        current (int): Current health, AP or shield.
        maximum (int): The cap of that resource.
        length (int): Number of cells. Defaults to 10.
        color (str): Markup color of the filled cells. Defaults to "white".

    Returns:
        str: The bar, as rich markup.

    """
    if maximum <= 0:
        return "[dim white]" + "▯" * length + "[/]"
    filled = max(0, min(length, int((current / maximum) * length)))
    bar = f"[{color}]" + "▮" * filled + "[/]"
    if filled < length:
        bar += "[dim white]" + "▯" * (length - filled) + "[/]"
    return bar


def percent(current: int, maximum: int) -> float:
    """Returns current/maximum as a percentage, 0 when maximum is not positive."""
    if maximum <= 0:
        return 0.0
    return current / maximum * 100.0
