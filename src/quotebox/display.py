"""
Display port for Quotebox.

The core never renders anything itself; it calls back into a Display.
ConsoleDisplay is the terminal implementation used by the CLI.
"""

import os
import sys
from typing import Protocol, Sequence, TextIO

from quotebox.categories import ALL
from quotebox.models import Quote


class Display(Protocol):
    """What the core needs from a presentation layer."""

    def show_quote(self, quote: Quote) -> None: ...

    def show_quotes(self, quotes: Sequence[Quote], category: str) -> None: ...

    def show_categories(self, categories: Sequence[str], selected: str) -> None: ...

    def notify(self, message: str) -> None: ...


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[32m"
    BLUE = "\033[34m"
    BRIGHT_CYAN = "\033[96m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


def format_quote(quote: Quote) -> str:
    """Format a single quote with its category underneath."""
    return f"\"{quote.text}\"\n{c(f'Category: {quote.category}', Colors.DIM)}"


def format_quotes(quotes: Sequence[Quote], category: str = ALL) -> str:
    """Format a filtered quote list. An empty list is a normal state."""
    header_text = "QUOTES" if category == ALL else category.upper()
    lines = [c(f"━━━ {header_text} ━━━", Colors.BOLD, Colors.BLUE), ""]

    if not quotes:
        lines.append(c("No quotes found.", Colors.DIM))
        return "\n".join(lines)

    for i, quote in enumerate(quotes, start=1):
        seq_str = c(f"{i:>4}", Colors.BOLD)
        lines.append(f"{seq_str}  \"{quote.text}\" {c(f'[{quote.category}]', Colors.DIM)}")

    return "\n".join(lines)


def format_categories(categories: Sequence[str], selected: str) -> str:
    """Format the category index, marking the current selection."""
    lines = []
    for category in categories:
        if category == selected:
            lines.append(c(f"* {category}", Colors.BOLD, Colors.BRIGHT_CYAN))
        else:
            lines.append(f"  {category}")
    if selected not in categories:
        lines.append(c(f"* {selected} (no quotes yet)", Colors.DIM))
    return "\n".join(lines)


class ConsoleDisplay:
    """Prints to a text stream."""

    def __init__(self, out: TextIO | None = None):
        self.out = out or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def show_quote(self, quote: Quote) -> None:
        self._print(format_quote(quote))

    def show_quotes(self, quotes: Sequence[Quote], category: str) -> None:
        self._print(format_quotes(quotes, category))

    def show_categories(self, categories: Sequence[str], selected: str) -> None:
        self._print(format_categories(categories, selected))

    def notify(self, message: str) -> None:
        self._print(c(message, Colors.GREEN))
