"""Wiring of a :class:`SearchClient` from environment configuration."""

from __future__ import annotations

import httpx
from loguru import logger

from fts_client.config import Settings, get_settings
from fts_client.services.metrics import MetricsRegistry
from fts_client.services.nodes import StaticNodeLocator
from fts_client.services.search import SearchClient


def create_search_client(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    metrics_registry: MetricsRegistry | None = None,
) -> SearchClient:
    """Return a client targeting the nodes listed in ``SEARCH_NODES``."""
    settings = settings or get_settings()
    nodes = settings.search_nodes
    if not nodes:
        logger.warning("search.no_nodes_configured")
    return SearchClient(
        StaticNodeLocator.from_uris(nodes),
        transport=transport,
        timeout=settings.search_timeout,
        auth=settings.credentials,
        metrics_registry=metrics_registry,
    )


__all__ = ["create_search_client"]
