"""
Remote reconciliation for Quotebox.

The Reconciler folds the remote collection into the local store; the
SyncScheduler runs it at startup and then on a fixed interval.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from quotebox.config import DEFAULT_SYNC_INTERVAL_S
from quotebox.errors import TransportError
from quotebox.models import Quote
from quotebox.remote import RemoteClient
from quotebox.store import QuoteStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one reconcile() call."""

    ok: bool
    added: int = 0
    skipped: bool = False
    message: str = ""

    @property
    def changed(self) -> bool:
        return self.added > 0


class Reconciler:
    """Merges remote quotes into a store. Never raises on transport failure."""

    def __init__(
        self,
        store: QuoteStore,
        remote: RemoteClient,
        on_change: Callable[[], None] | None = None,
        notify: Callable[[str], None] | None = None,
    ):
        self.store = store
        self.remote = remote
        self.on_change = on_change
        self.notify = notify
        self._running = threading.Lock()

    def _report(self, message: str) -> None:
        if self.notify:
            self.notify(message)

    def reconcile(self) -> SyncResult:
        """
        Fetch the remote collection and append novel quotes.

        A call made while another reconcile is in progress is skipped.
        """
        if not self._running.acquire(blocking=False):
            logger.info("Sync already in progress, skipping trigger")
            return SyncResult(ok=True, skipped=True, message="Sync already in progress")

        try:
            try:
                items = self.remote.fetch_remote()
            except TransportError as e:
                logger.warning(f"Sync failed: {e}")
                message = "Sync failed: could not reach server"
                self._report(message)
                return SyncResult(ok=False, message=message)

            result = self.store.merge(item.to_quote() for item in items)
            if not result.changed:
                logger.info(f"Synced {len(items)} remote items, no new quotes")
                return SyncResult(ok=True, message="Already up to date")

            if self.on_change:
                self.on_change()
            message = f"Synced, {result.added} new quotes"
            logger.info(message)
            self._report(message)
            return SyncResult(ok=True, added=result.added, message=message)
        finally:
            self._running.release()

    def push_local(self, quote: Quote) -> bool:
        """Best-effort upload of a newly added quote. Failures are only logged."""
        try:
            self.remote.push_quote(quote)
        except TransportError as e:
            logger.warning(f"Push failed, quote kept locally: {e}")
            return False
        logger.info("Pushed quote to server")
        return True


class SyncScheduler:
    """Runs reconcile() once at start, then every interval_s seconds."""

    def __init__(self, reconciler: Reconciler, interval_s: float = DEFAULT_SYNC_INTERVAL_S):
        self.reconciler = reconciler
        self.interval_s = interval_s
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background loop. No-op if already running."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="quotebox-sync", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Stop the loop and wait for an in-flight reconcile to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        self._tick()
        while not self._stop.wait(self.interval_s):
            self._tick()

    def _tick(self) -> None:
        try:
            self.reconciler.reconcile()
        except Exception:
            logger.exception("Unexpected error during scheduled sync")
