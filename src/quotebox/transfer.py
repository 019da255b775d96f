"""
File import/export for Quotebox.

Exports the whole store as a JSON document; imports route through the
same deduplicating merge the server sync uses.
"""

import logging
from pathlib import Path
from typing import Iterable

from quotebox.errors import FormatError
from quotebox.models import Quote
from quotebox.store import MergeResult, QuoteStore, decode_quotes, encode_quotes

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "quotes.json"


def export_quotes(quotes: Iterable[Quote]) -> str:
    """Serialize quotes as a pretty-printed JSON array."""
    return encode_quotes(quotes, indent=2) + "\n"


def export_to_file(quotes: Iterable[Quote], path: Path | None = None) -> Path:
    """Write an export document. Defaults to ./quotes.json."""
    path = path or Path(DEFAULT_EXPORT_NAME)
    if path.is_dir():
        path = path / DEFAULT_EXPORT_NAME
    path.write_text(export_quotes(quotes), encoding="utf-8")
    return path


def parse_import(text: str) -> list[Quote]:
    """
    Parse an import document.

    Raises FormatError unless the document is a JSON array whose every
    element is a valid quote.
    """
    return decode_quotes(text)


def import_from_file(store: QuoteStore, path: Path) -> MergeResult:
    """Merge the quotes from an import file into the store. All or nothing."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FormatError(f"Cannot read {path}: {e}") from e

    quotes = parse_import(text)
    result = store.merge(quotes)
    logger.info(f"Imported {path}: {result.added} of {len(quotes)} quotes were new")
    return result
