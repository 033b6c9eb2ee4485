"""Internal catalog service helpers for request parameters and raw feed fetches."""

from __future__ import annotations

from typing import Any

import httpx

from paper_shelf.models import ARXIV_API_DEFAULT_MAX_RESULTS
from paper_shelf.parsing import build_catalog_search_query


def build_search_params(
    query: str, max_results: int = ARXIV_API_DEFAULT_MAX_RESULTS
) -> dict[str, Any]:
    """Build arXiv API query parameters: first page, relevance-descending."""
    return {
        "search_query": build_catalog_search_query(query),
        "start": 0,
        "max_results": max_results,
        "sortBy": "relevance",
        "sortOrder": "descending",
    }


def build_proxy_payload(target_url: str, params: dict[str, Any]) -> dict[str, Any]:
    """Describe a catalog GET request for a generic pass-through proxy."""
    url = httpx.URL(target_url)
    origin = url.host if url.port is None else f"{url.host}:{url.port}"
    return {
        "protocol": url.scheme,
        "origin": origin,
        "path": url.path,
        "method": "GET",
        "params": params,
    }


async def fetch_feed(
    *,
    client: httpx.AsyncClient | None,
    url: str,
    params: dict[str, Any],
    timeout_seconds: int,
    user_agent: str,
) -> str:
    """GET the catalog feed directly and return the raw document text."""
    headers = {"User-Agent": user_agent}

    if client is not None:
        response = await client.get(url, params=params, headers=headers, timeout=timeout_seconds)
    else:
        async with httpx.AsyncClient() as tmp_client:
            response = await tmp_client.get(
                url,
                params=params,
                headers=headers,
                timeout=timeout_seconds,
            )

    response.raise_for_status()
    return response.text


async def fetch_feed_via_proxy(
    *,
    client: httpx.AsyncClient | None,
    proxy_url: str,
    target_url: str,
    params: dict[str, Any],
    timeout_seconds: int,
    user_agent: str,
) -> str:
    """POST the catalog request to a pass-through proxy and return the raw text."""
    payload = build_proxy_payload(target_url, params)
    headers = {"User-Agent": user_agent}

    if client is not None:
        response = await client.post(
            proxy_url, json=payload, headers=headers, timeout=timeout_seconds
        )
    else:
        async with httpx.AsyncClient() as tmp_client:
            response = await tmp_client.post(
                proxy_url,
                json=payload,
                headers=headers,
                timeout=timeout_seconds,
            )

    response.raise_for_status()
    return response.text


__all__ = [
    "build_proxy_payload",
    "build_search_params",
    "fetch_feed",
    "fetch_feed_via_proxy",
]
