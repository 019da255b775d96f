from collections.abc import Callable, Sequence
from pathlib import Path

import httpx
import pytest

from quotebox.app import QuoteApp
from quotebox.errors import ValidationError
from quotebox.models import Quote
from quotebox.remote import RemoteClient
from quotebox.storage import MemoryStorage

from conftest import posts_handler

CONFIG = {"sync": {"enabled": False, "interval_s": 60}}


class RecordingDisplay:
    def __init__(self) -> None:
        self.quotes: list[Quote] = []
        self.lists: list[tuple[tuple[Quote, ...], str]] = []
        self.categories: list[list[str]] = []
        self.messages: list[str] = []

    def show_quote(self, quote: Quote) -> None:
        self.quotes.append(quote)

    def show_quotes(self, quotes: Sequence[Quote], category: str) -> None:
        self.lists.append((tuple(quotes), category))

    def show_categories(self, categories: Sequence[str], selected: str) -> None:
        self.categories.append(list(categories))

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def make_app(
    durable: MemoryStorage, display: RecordingDisplay, make_remote: Callable[..., RemoteClient]
) -> Callable[..., QuoteApp]:
    def _make(posts: object = (), handler: Callable | None = None) -> QuoteApp:
        remote = make_remote(handler or posts_handler(list(posts)))
        return QuoteApp(durable, MemoryStorage(), remote=remote, display=display, config=CONFIG)

    return _make


def test_startup_restores_filter_and_shows_random(
    durable: MemoryStorage, display: RecordingDisplay, make_app: Callable[..., QuoteApp]
) -> None:
    durable.set("selectedCategory", "Life")
    app = make_app()

    app.startup()

    assert app.selected == "Life"
    assert display.categories[-1] == ["all", "Motivation", "Life", "Programming"]
    assert display.lists[-1][1] == "Life"
    assert len(display.lists[-1][0]) == 1
    assert len(display.quotes) == 1
    assert not app.scheduler.running


def test_startup_prefers_last_viewed(make_app: Callable[..., QuoteApp], display: RecordingDisplay) -> None:
    app = make_app()
    app.open()
    picked = app.show_random()
    display.quotes.clear()

    app.startup()

    assert display.quotes == [picked]


def test_add_quote_refreshes_and_pushes(make_app: Callable[..., QuoteApp], display: RecordingDisplay) -> None:
    pushed: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        pushed.append(request.content)
        return httpx.Response(201, json={})

    app = make_app(handler=handler)
    app.open()
    app.select_category("Life")

    quote = app.add_quote("X", "Life")

    assert quote == Quote(text="X", category="Life")
    assert len(display.lists[-1][0]) == 2
    assert len(pushed) == 1


def test_add_quote_push_failure_keeps_quote(make_app: Callable[..., QuoteApp], durable: MemoryStorage) -> None:
    app = make_app(handler=lambda request: httpx.Response(500))
    app.open()

    quote = app.add_quote("X", "Life")

    reopened = QuoteApp(durable, config=CONFIG)
    reopened.open()
    assert reopened.store.quotes[-1] == quote


def test_add_quote_validation(make_app: Callable[..., QuoteApp], display: RecordingDisplay) -> None:
    app = make_app()
    app.open()
    with pytest.raises(ValidationError):
        app.add_quote("", "Life")
    assert len(app.store) == 3
    assert display.lists == []


def test_select_unknown_category_is_empty_not_reset(make_app: Callable[..., QuoteApp], durable: MemoryStorage) -> None:
    app = make_app([{"title": "Ode", "body": "Poetry"}])
    app.open()

    assert app.select_category("Poetry") == ()
    assert durable.get("selectedCategory") == "Poetry"

    result = app.sync_now()

    assert result.added == 1
    assert [q.text for q in app.visible_quotes()] == ["Ode"]


def test_sync_now_refreshes_display(make_app: Callable[..., QuoteApp], display: RecordingDisplay) -> None:
    app = make_app([{"title": "Ode", "body": "Poetry"}])
    app.open()

    app.sync_now()

    assert display.categories[-1][-1] == "Poetry"
    assert display.messages == ["Synced, 1 new quotes"]


def test_import_and_export(make_app: Callable[..., QuoteApp], tmp_path: Path) -> None:
    app = make_app()
    app.open()
    app.store.add("X", "Life")
    path = app.export_file(tmp_path / "quotes.json")

    other = QuoteApp(MemoryStorage(), config=CONFIG)
    other.open()
    assert other.import_file(path).added == 1
    assert other.import_file(path).added == 0
    assert other.store.quotes == app.store.quotes


def test_apps_are_isolated(make_app: Callable[..., QuoteApp]) -> None:
    first = make_app()
    first.open()
    second = QuoteApp(MemoryStorage(), config=CONFIG)
    second.open()

    first.store.add("X", "Life")

    assert len(second.store) == 3
