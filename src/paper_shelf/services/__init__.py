"""Internal service layer for reaching the external catalog."""

from paper_shelf.services.catalog_service import (
    build_proxy_payload,
    build_search_params,
    fetch_feed,
    fetch_feed_via_proxy,
)
from paper_shelf.services.interfaces import (
    CatalogTransport,
    DirectTransport,
    ProxyTransport,
    build_default_transport,
)

__all__ = [
    "CatalogTransport",
    "DirectTransport",
    "ProxyTransport",
    "build_default_transport",
    "build_proxy_payload",
    "build_search_params",
    "fetch_feed",
    "fetch_feed_via_proxy",
]
