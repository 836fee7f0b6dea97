"""
Rich console helpers for the totx CLI.
"""

from rich.console import Console
from rich.style import Style
from rich.text import Text

console = Console(highlight=False)

# Style definitions
STYLES = {
    "value": Style(color="bright_white", bold=True),
    "error": Style(color="red", bold=True),
    "muted": Style(color="bright_black"),
    "info": Style(color="cyan"),
}


def print_value(text: str) -> None:
    """Print an evaluation result."""
    console.print(Text(text, style=STYLES["value"]))


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(Text(message, style=STYLES["error"]))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(Text(message, style=STYLES["info"]))


def print_muted(message: str) -> None:
    console.print(Text(message, style=STYLES["muted"]))
