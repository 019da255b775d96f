"""
Remote quote source for Quotebox.

Fetches posts from a JSON endpoint and pushes newly added quotes back.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from quotebox.config import DEFAULT_REMOTE_URL, load_config
from quotebox.errors import TransportError
from quotebox.models import Quote, RemoteItem

logger = logging.getLogger(__name__)


class RemoteClient:
    """HTTP client for the remote quote endpoint."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config or load_config()
        remote_config = self.config.get("remote", {})
        self.url = remote_config.get("url", DEFAULT_REMOTE_URL)
        self.timeout = float(remote_config.get("timeout", 10.0))
        # Injected transport lets tests serve responses without a network
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport)

    def fetch_remote(self) -> list[RemoteItem]:
        """
        GET the remote collection.

        Raises TransportError on any network, status or payload failure.
        Array elements that are not objects are skipped.
        """
        try:
            with self._client() as client:
                response = client.get(self.url, headers={"Accept": "application/json"})
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise TransportError(f"Fetch from {self.url} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Non-JSON response from {self.url}") from e

        if not isinstance(data, list):
            raise TransportError(
                f"Unexpected payload from {self.url}: {type(data).__name__}"
            )

        items = []
        for raw in data:
            if not isinstance(raw, dict):
                continue
            try:
                items.append(RemoteItem.model_validate(raw))
            except ValidationError:
                continue
        return items

    def push_quote(self, quote: Quote) -> None:
        """POST a quote as JSON. Raises TransportError on failure."""
        try:
            with self._client() as client:
                response = client.post(
                    self.url,
                    headers={"Content-Type": "application/json"},
                    json=quote.to_json(),
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"Push to {self.url} failed: {e}") from e
