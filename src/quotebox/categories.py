"""
Category index and filter selection for Quotebox.
"""

from typing import Iterable

from quotebox.models import Quote
from quotebox.storage import CATEGORY_KEY, KeyValueStorage

ALL = "all"


def derive_categories(quotes: Iterable[Quote]) -> list[str]:
    """Return "all" followed by each distinct category in first-seen order."""
    categories = [ALL]
    seen: set[str] = set()
    for quote in quotes:
        if quote.category not in seen:
            seen.add(quote.category)
            categories.append(quote.category)
    return categories


def apply_filter(quotes: Iterable[Quote], category: str) -> tuple[Quote, ...]:
    """
    Return the quotes in the given category, preserving order.

    "all" returns everything. An unknown category returns an empty tuple.
    """
    if category == ALL:
        return tuple(quotes)
    return tuple(q for q in quotes if q.category == category)


class FilterState:
    """The persisted category selection."""

    def __init__(self, durable: KeyValueStorage):
        self.durable = durable

    def restore(self) -> str:
        """Return the saved selection, or "all" if none."""
        value = self.durable.get(CATEGORY_KEY)
        return value if value is not None else ALL

    def set(self, category: str) -> str:
        """Persist any category string, known or not."""
        self.durable.set(CATEGORY_KEY, category)
        return category
