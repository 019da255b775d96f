"""
Quote store for Quotebox.

An append-only, ordered collection of quotes. Every mutation is saved to
durable storage before the mutating call returns.
"""

import json
import logging
import random
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator

from quotebox.errors import FormatError
from quotebox.models import Quote
from quotebox.storage import LAST_VIEWED_KEY, QUOTES_KEY, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

SEED_QUOTES = (
    Quote(
        text="The only limit to our realization of tomorrow is our doubts of today.",
        category="Motivation",
    ),
    Quote(
        text="Life is what happens when you're busy making other plans.",
        category="Life",
    ),
    Quote(
        text="JavaScript is the language of the web.",
        category="Programming",
    ),
)


@dataclass(frozen=True)
class MergeResult:
    """Outcome of folding candidate quotes into the store."""

    added: int
    changed: bool


def _decode_array(raw: str) -> list:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise FormatError("Invalid JSON format: expected an array of quotes")
    return data


def decode_quotes(raw: str) -> list[Quote]:
    """Decode a JSON array of quote objects. Raises FormatError."""
    return [Quote.from_json(item) for item in _decode_array(raw)]


def decode_stored_quotes(raw: str) -> list[Quote]:
    """
    Decode the durable slot, keeping every valid quote.

    Invalid elements are logged and skipped. Raises FormatError only when
    the value is not a JSON array.
    """
    quotes = []
    for index, item in enumerate(_decode_array(raw)):
        try:
            quotes.append(Quote.from_json(item))
        except FormatError as e:
            logger.warning(f"Skipping stored quote #{index}: {e}")
    return quotes


def encode_quotes(quotes: Iterable[Quote], indent: int | None = None) -> str:
    """Encode quotes as a JSON array of {text, category} objects."""
    return json.dumps([q.to_json() for q in quotes], ensure_ascii=False, indent=indent)


class QuoteStore:
    """Ordered, append-only quote collection backed by key-value storage."""

    def __init__(
        self,
        durable: KeyValueStorage,
        session: KeyValueStorage | None = None,
    ):
        self.durable = durable
        self.session = session if session is not None else MemoryStorage()
        self._quotes: list[Quote] = []
        self._lock = threading.RLock()

    @property
    def quotes(self) -> tuple[Quote, ...]:
        """Snapshot of the current quotes, in insertion order."""
        with self._lock:
            return tuple(self._quotes)

    def __len__(self) -> int:
        return len(self.quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(self.quotes)

    def load(self) -> tuple[Quote, ...]:
        """
        Load quotes from durable storage.

        Falls back to the built-in seed if the slot is absent, malformed
        or empty. Never returns an empty collection.
        """
        quotes = self._read_stored()
        with self._lock:
            self._quotes = quotes or list(SEED_QUOTES)
            return tuple(self._quotes)

    def _read_stored(self) -> list[Quote]:
        raw = self.durable.get(QUOTES_KEY)
        if raw is None:
            return []
        try:
            return decode_stored_quotes(raw)
        except FormatError as e:
            logger.warning(f"Stored quotes unreadable, using seed quotes: {e}")
            return []

    def _catch_up(self) -> None:
        """
        Fold the durable slot into memory before a mutation.

        Another process may have saved since load(). Stored quotes come
        first, followed by any in-memory quotes the slot lacks.
        """
        stored = self._read_stored()
        if not stored:
            return
        stored_keys = {q.key for q in stored}
        self._quotes = stored + [q for q in self._quotes if q.key not in stored_keys]

    def save(self) -> None:
        """Write the full collection to durable storage."""
        with self._lock:
            self.durable.set(QUOTES_KEY, encode_quotes(self._quotes))

    def add(self, text: str, category: str) -> Quote:
        """
        Append a new quote and save.

        Raises ValidationError if text or category is blank after trimming.
        """
        quote = Quote.create(text, category)
        with self._lock:
            self._catch_up()
            self._quotes.append(quote)
            self.save()
        logger.info(f"Added quote in category {quote.category!r}")
        return quote

    def merge(self, candidates: Iterable[Quote]) -> MergeResult:
        """
        Append candidates that are not already in the store.

        Identity is checked against the whole current collection, including
        candidates appended earlier in the same call. Saves once if anything
        was appended.
        """
        added = 0
        with self._lock:
            self._catch_up()
            for candidate in candidates:
                if any(q.key == candidate.key for q in self._quotes):
                    continue
                self._quotes.append(candidate)
                added += 1
            if added:
                self.save()
        return MergeResult(added=added, changed=added > 0)

    def random_quote(self, rng: random.Random | None = None) -> Quote | None:
        """Pick a random quote and remember it as last viewed for this session."""
        quotes = self.quotes
        if not quotes:
            return None
        quote = (rng or random).choice(quotes)
        self.session.set(LAST_VIEWED_KEY, json.dumps(quote.to_json(), ensure_ascii=False))
        return quote

    def last_viewed(self) -> Quote | None:
        """Return the quote last shown by random_quote() this session, if any."""
        raw = self.session.get(LAST_VIEWED_KEY)
        if raw is None:
            return None
        try:
            return Quote.from_json(json.loads(raw))
        except (json.JSONDecodeError, FormatError) as e:
            logger.warning(f"Ignoring malformed last viewed quote: {e}")
            return None
