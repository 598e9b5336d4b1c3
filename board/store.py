"""
Store clients for the fact board.

``FactStore`` is the narrow capability the flows depend on: three async
operations against the persistent store.  ``HttpFactStore`` implements it on
top of ``httpx.AsyncClient`` against the service in ``api/``:

    GET  {base_url}/facts?category=<name>&limit=<n>
    POST {base_url}/facts                      body {text, source, category}
    POST {base_url}/facts/{id}/votes/{column}

Every failure (transport error, non-2xx status, malformed payload) surfaces
as ``StoreError``; nothing else escapes.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from board.errors import StoreError
from board.models import MAX_FETCH_LIMIT, Fact, validate_vote_column
from utils.config import BoardConfig

logger = logging.getLogger(__name__)


class FactStore(Protocol):
    """The three logical store operations the board consumes."""

    async def fetch_facts(self, category: str | None = None,
                          limit: int = MAX_FETCH_LIMIT) -> list[Fact]:
        ...

    async def insert_fact(self, text: str, source: str, category: str) -> Fact:
        ...

    async def increment_vote(self, fact_id: int, column: str) -> Fact:
        ...


def _error_detail(response: httpx.Response) -> str | None:
    """Extract the ``detail`` field of an API error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        detail = body.get("detail")
        if detail is None:
            return None
        return detail if isinstance(detail, str) else str(detail)
    return None


class HttpFactStore:
    """``FactStore`` backed by the fact API over HTTP.

    Args:
        base_url: API root including the version prefix,
            e.g. ``http://127.0.0.1:8000/api/v1``.
        client: Pre-built ``httpx.AsyncClient`` (tests pass one with a
            ``MockTransport``).  When omitted a client is created lazily and
            closed by ``aclose()``.
        timeout: Per-request timeout in seconds; None waits indefinitely.
    """

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None,
                 timeout: float | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_config(cls, config: BoardConfig) -> HttpFactStore:
        return cls(config.api_url, timeout=config.request_timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this store created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpFactStore:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # ── Request plumbing ──────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("store request failed method=%s url=%s error=%s",
                           method, url, exc)
            raise StoreError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            detail = _error_detail(response)
            logger.warning("store returned error method=%s url=%s status=%d detail=%s",
                           method, url, response.status_code, detail)
            raise StoreError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise StoreError(f"{method} {path} returned invalid JSON",
                             status_code=response.status_code) from exc

    @staticmethod
    def _to_fact(row: Any) -> Fact:
        try:
            return Fact.from_row(row)
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Malformed fact row: {row!r}") from exc

    # ── FactStore operations ──────────────────────────────────────────────────

    async def fetch_facts(self, category: str | None = None,
                          limit: int = MAX_FETCH_LIMIT) -> list[Fact]:
        params: dict[str, Any] = {"limit": limit}
        if category is not None:
            params["category"] = category
        rows = await self._request("GET", "/facts", params=params)
        if not isinstance(rows, list):
            raise StoreError("GET /facts returned a non-list payload")
        return [self._to_fact(row) for row in rows]

    async def insert_fact(self, text: str, source: str, category: str) -> Fact:
        row = await self._request(
            "POST", "/facts",
            json={"text": text, "source": source, "category": category},
        )
        return self._to_fact(row)

    async def increment_vote(self, fact_id: int, column: str) -> Fact:
        validate_vote_column(column)
        row = await self._request("POST", f"/facts/{fact_id}/votes/{column}")
        return self._to_fact(row)
