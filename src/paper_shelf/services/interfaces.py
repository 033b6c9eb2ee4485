"""Catalog transport interface + default adapters for dependency injection."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from paper_shelf.models import ARXIV_API_TIMEOUT, ARXIV_API_URL, ARXIV_API_USER_AGENT, LibraryConfig
from paper_shelf.services import catalog_service as _catalog


@runtime_checkable
class CatalogTransport(Protocol):
    """Network boundary: turn catalog query parameters into a raw feed document."""

    async def fetch(self, params: dict[str, Any]) -> str:
        """Return the raw response text for one catalog request."""
        ...


class DirectTransport:
    """Talks to the arXiv API directly."""

    def __init__(
        self,
        *,
        url: str = ARXIV_API_URL,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: int = ARXIV_API_TIMEOUT,
        user_agent: str = ARXIV_API_USER_AGENT,
    ) -> None:
        self.url = url
        self.client = client
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    async def fetch(self, params: dict[str, Any]) -> str:
        return await _catalog.fetch_feed(
            client=self.client,
            url=self.url,
            params=params,
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
        )


class ProxyTransport:
    """Routes catalog requests through a generic pass-through HTTP proxy."""

    def __init__(
        self,
        proxy_url: str,
        *,
        target_url: str = ARXIV_API_URL,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: int = ARXIV_API_TIMEOUT,
        user_agent: str = ARXIV_API_USER_AGENT,
    ) -> None:
        self.proxy_url = proxy_url
        self.target_url = target_url
        self.client = client
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    async def fetch(self, params: dict[str, Any]) -> str:
        return await _catalog.fetch_feed_via_proxy(
            client=self.client,
            proxy_url=self.proxy_url,
            target_url=self.target_url,
            params=params,
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
        )


def build_default_transport(
    config: LibraryConfig, client: httpx.AsyncClient | None = None
) -> CatalogTransport:
    """Pick the proxy transport when a proxy URL is configured, else go direct."""
    if config.proxy_url:
        return ProxyTransport(
            config.proxy_url,
            target_url=config.catalog_api_url,
            client=client,
            timeout_seconds=config.timeout_seconds,
            user_agent=config.user_agent,
        )
    return DirectTransport(
        url=config.catalog_api_url,
        client=client,
        timeout_seconds=config.timeout_seconds,
        user_agent=config.user_agent,
    )


__all__ = [
    "CatalogTransport",
    "DirectTransport",
    "ProxyTransport",
    "build_default_transport",
]
