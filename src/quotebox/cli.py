"""
CLI for Quotebox.

Minimal CLI using stdlib argument handling for fast startup.
Subcommands are imported lazily to avoid startup overhead.

Usage:
    quotebox add "quote text" --category Life
    quotebox list                   # List quotes in the saved category
    quotebox --help                 # Show help
"""

import sys


def print_help() -> None:
    """Print help message."""
    print("""quotebox - local-first quote keeper

Commands:
    quotebox add <text> --category <c>   Add a quote (and push it to the server)
    quotebox list [--category <c>]       List quotes in a category (default: saved filter)
    quotebox categories                  Show categories, marking the saved filter
    quotebox filter <category|all>       Save the category filter
    quotebox random                      Show a random quote
    quotebox last                        Show this session's last random quote
    quotebox sync                        Sync with the server now
    quotebox export [path]               Export quotes to JSON (default: quotes.json)
    quotebox import <path>               Import quotes from a JSON file
    quotebox watch                       Sync now and every interval until Ctrl-C

Options:
    quotebox --help, -h                  Show this help
    quotebox --version, -v               Show version

Examples:
    quotebox add "Simple is better than complex." --category Programming
    quotebox filter Programming
    quotebox list
    quotebox export ~/backup/quotes.json""")


def print_version() -> None:
    """Print version."""
    from quotebox import __version__
    print(f"quotebox {__version__}")


def _setup_logging(level: int) -> None:
    import logging

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )


def _open_app(display: bool = True):
    """Create and load an app over the on-disk storage."""
    from quotebox.app import QuoteApp
    from quotebox.config import ensure_dirs
    from quotebox.display import ConsoleDisplay

    _setup_logging(logging_level("WARNING"))
    ensure_dirs()
    app = QuoteApp.from_config(display=ConsoleDisplay() if display else None)
    app.open()
    return app


def cmd_add(args: list[str]) -> int:
    """Add a quote."""
    from quotebox.display import format_quote
    from quotebox.errors import QuoteboxError

    category = ""
    words = []

    # Parse arguments
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--category", "-c") and i + 1 < len(args):
            category = args[i + 1]
            i += 2
        else:
            words.append(arg)
            i += 1

    try:
        app = _open_app(display=False)
        quote = app.add_quote(" ".join(words), category)
        print(format_quote(quote))
        return 0
    except QuoteboxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_list(args: list[str]) -> int:
    """List quotes in the given or saved category."""
    from quotebox.categories import apply_filter
    from quotebox.display import format_quotes

    category = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--category", "-c") and i + 1 < len(args):
            category = args[i + 1]
            i += 2
        else:
            i += 1

    app = _open_app(display=False)
    category = category or app.selected
    print(format_quotes(apply_filter(app.store.quotes, category), category))
    return 0


def cmd_categories() -> int:
    """Show the category index."""
    from quotebox.display import format_categories

    app = _open_app(display=False)
    print(format_categories(app.categories(), app.selected))
    return 0


def cmd_filter(args: list[str]) -> int:
    """Save the category filter."""
    if not args:
        print("Usage: quotebox filter <category|all>", file=sys.stderr)
        return 1

    app = _open_app(display=False)
    category = " ".join(args)
    count = len(app.select_category(category))
    print(f"Filter: {category} ({count} quotes)")
    return 0


def cmd_random() -> int:
    """Show a random quote."""
    app = _open_app()
    app.show_random()
    return 0


def cmd_last() -> int:
    """Show the last viewed quote, falling back to a random one."""
    app = _open_app()
    app.show_last_viewed()
    return 0


def cmd_sync() -> int:
    """Sync with the server once."""
    app = _open_app(display=False)
    result = app.sync_now()
    if not result.ok:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1
    print(result.message)
    return 0


def cmd_export(args: list[str]) -> int:
    """Export quotes to a JSON file."""
    from pathlib import Path

    path = Path(args[0]).expanduser() if args else None
    try:
        app = _open_app(display=False)
        written = app.export_file(path)
        print(f"Exported {len(app.store)} quotes to {written}")
        return 0
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_import(args: list[str]) -> int:
    """Import quotes from a JSON file."""
    from pathlib import Path

    from quotebox.errors import FormatError

    if not args:
        print("Usage: quotebox import <path>", file=sys.stderr)
        return 1

    try:
        app = _open_app(display=False)
        result = app.import_file(Path(args[0]).expanduser())
        print(f"Quotes imported successfully! {result.added} new quotes")
        return 0
    except FormatError as e:
        print(f"Error importing quotes: Invalid file. {e}", file=sys.stderr)
        return 1


def cmd_watch() -> int:
    """Show quotes and keep syncing until interrupted."""
    import threading

    _setup_logging(logging_level("INFO"))

    from quotebox.app import QuoteApp
    from quotebox.config import ensure_dirs
    from quotebox.display import ConsoleDisplay

    ensure_dirs()
    app = QuoteApp.from_config(display=ConsoleDisplay())
    app.startup()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        app.shutdown()
    return 0


def logging_level(name: str) -> int:
    """Resolve a level name, honoring QUOTEBOX_LOG_LEVEL."""
    import logging
    import os

    level = logging.getLevelName(os.environ.get("QUOTEBOX_LOG_LEVEL", name).upper())
    return level if isinstance(level, int) else logging.WARNING


def main() -> int:
    """Main entry point."""
    args = sys.argv[1:]

    if not args:
        print_help()
        return 0

    first_arg = args[0]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return 0

    if first_arg in ("--version", "-v", "version"):
        print_version()
        return 0

    # Subcommands (lazy import to keep startup fast)
    if first_arg == "add":
        return cmd_add(args[1:])

    if first_arg == "list":
        return cmd_list(args[1:])

    if first_arg == "categories":
        return cmd_categories()

    if first_arg == "filter":
        return cmd_filter(args[1:])

    if first_arg == "random":
        return cmd_random()

    if first_arg == "last":
        return cmd_last()

    if first_arg == "sync":
        return cmd_sync()

    if first_arg == "export":
        return cmd_export(args[1:])

    if first_arg == "import":
        return cmd_import(args[1:])

    if first_arg == "watch":
        return cmd_watch()

    print(f"Unknown command: {first_arg}", file=sys.stderr)
    print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
