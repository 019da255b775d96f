"""
Application context for Quotebox.

QuoteApp owns one store, its filter selection, the reconciler and the
sync timer. Nothing here is module-level state, so several independent
apps can live in one process.
"""

import logging
from pathlib import Path
from typing import Any

from quotebox.categories import ALL, FilterState, apply_filter, derive_categories
from quotebox.config import DEFAULT_SYNC_INTERVAL_S, load_config
from quotebox.display import Display
from quotebox.models import Quote
from quotebox.remote import RemoteClient
from quotebox.storage import DurableStorage, KeyValueStorage, SessionStorage
from quotebox.store import MergeResult, QuoteStore
from quotebox.sync import Reconciler, SyncResult, SyncScheduler
from quotebox.transfer import export_to_file, import_from_file

logger = logging.getLogger(__name__)


class QuoteApp:
    """Wires the store, filter, reconciler and an optional display together."""

    def __init__(
        self,
        durable: KeyValueStorage,
        session: KeyValueStorage | None = None,
        remote: RemoteClient | None = None,
        display: Display | None = None,
        config: dict[str, Any] | None = None,
    ):
        self.config = config or load_config()
        self.display = display
        self.store = QuoteStore(durable, session)
        self.filter = FilterState(durable)
        self.selected = ALL
        self.remote = remote or RemoteClient(self.config)
        self.reconciler = Reconciler(
            self.store, self.remote, on_change=self.refresh, notify=self.notify
        )
        sync_config = self.config.get("sync", {})
        self.scheduler = SyncScheduler(
            self.reconciler,
            interval_s=float(sync_config.get("interval_s", DEFAULT_SYNC_INTERVAL_S)),
        )

    @classmethod
    def from_config(
        cls,
        display: Display | None = None,
        config: dict[str, Any] | None = None,
    ) -> "QuoteApp":
        """Build an app over the on-disk durable and session storage."""
        return cls(DurableStorage(), SessionStorage(), display=display, config=config)

    def open(self) -> None:
        """Load the store and restore the saved filter."""
        self.store.load()
        self.selected = self.filter.restore()

    def startup(self) -> None:
        """
        Full interactive startup.

        Loads state, renders the filtered list, shows the last viewed quote
        (or a random one), then starts periodic sync if enabled.
        """
        self.open()
        self.refresh()
        self.show_last_viewed()
        if self.config.get("sync", {}).get("enabled", True):
            self.scheduler.start()

    def shutdown(self) -> None:
        self.scheduler.stop()

    def categories(self) -> list[str]:
        return derive_categories(self.store.quotes)

    def visible_quotes(self) -> tuple[Quote, ...]:
        return apply_filter(self.store.quotes, self.selected)

    def refresh(self) -> None:
        """Recompute the category index and filtered list and render them."""
        categories = self.categories()
        visible = self.visible_quotes()
        if self.display:
            self.display.show_categories(categories, self.selected)
            self.display.show_quotes(visible, self.selected)

    def notify(self, message: str) -> None:
        if self.display:
            self.display.notify(message)

    def add_quote(self, text: str, category: str) -> Quote:
        """
        Add a quote, refresh dependent views, then push it to the server.

        Raises ValidationError without touching the store if either field
        is blank. A failed push leaves the local quote in place.
        """
        quote = self.store.add(text, category)
        self.refresh()
        self.reconciler.push_local(quote)
        return quote

    def select_category(self, category: str) -> tuple[Quote, ...]:
        self.selected = self.filter.set(category)
        self.refresh()
        return self.visible_quotes()

    def show_random(self) -> Quote | None:
        quote = self.store.random_quote()
        if quote and self.display:
            self.display.show_quote(quote)
        return quote

    def show_last_viewed(self) -> Quote | None:
        """Show this session's last random quote, or pick a new one."""
        quote = self.store.last_viewed()
        if quote is None:
            return self.show_random()
        if self.display:
            self.display.show_quote(quote)
        return quote

    def sync_now(self) -> SyncResult:
        return self.reconciler.reconcile()

    def import_file(self, path: Path) -> MergeResult:
        """Import quotes from a file. Raises FormatError on a bad document."""
        result = import_from_file(self.store, path)
        if result.changed:
            self.refresh()
        self.notify(f"Quotes imported successfully! {result.added} new quotes")
        return result

    def export_file(self, path: Path | None = None) -> Path:
        return export_to_file(self.store.quotes, path)
