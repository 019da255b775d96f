from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from quotebox.remote import RemoteClient
from quotebox.storage import MemoryStorage
from quotebox.store import QuoteStore


@pytest.fixture(autouse=True)
def _isolate_dirs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("QUOTEBOX_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path / "run"))
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def durable() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(durable: MemoryStorage) -> QuoteStore:
    quote_store = QuoteStore(durable, MemoryStorage())
    quote_store.load()
    return quote_store


@pytest.fixture
def make_remote() -> Callable[..., RemoteClient]:
    """Build a RemoteClient answering from an httpx handler instead of the network."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RemoteClient:
        config = {"remote": {"url": "https://quotes.test/posts", "timeout": 1.0}}
        return RemoteClient(config=config, transport=httpx.MockTransport(handler))

    return _make


def posts_handler(posts: object, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Serve `posts` for GET and accept every POST."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201, json={"id": 101, **json.loads(request.content)})
        return httpx.Response(status, json=posts)

    return handler
