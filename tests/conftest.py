"""Test fixtures for fts_client."""

from __future__ import annotations

import copy
import os
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

os.environ.setdefault("SEARCH_NODES", "http://fts-1.local:8094")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from fts_client.schemas.queries import MatchPhraseQuery  # noqa: E402
from fts_client.schemas.search import SearchRequest  # noqa: E402
from fts_client.services.metrics import MetricsRegistry  # noqa: E402
from fts_client.services.nodes import Node, StaticNodeLocator  # noqa: E402
from fts_client.services.search import SearchClient  # noqa: E402

SEARCH_BASE = "http://fts-1.local:8094"

_SAMPLE_RESPONSE: dict[str, object] = {
    "status": {"total": 6, "failed": 0, "successful": 6},
    "request": {"query": {"match_phrase": "white wine"}, "size": 10, "from": 0},
    "hits": [
        {
            "index": "travel-index_6b1c_4c1c0c23",
            "id": "hotel_26223",
            "score": 1.2634,
            "locations": {"description": {"white": [{"pos": 5, "start": 21, "end": 26}]}},
            "fragments": {"description": ["pours a glass of <mark>white wine</mark>"]},
            "sort": ["_score"],
            "fields": None,
        },
        {
            "index": "travel-index_6b1c_4c1c0c23",
            "id": "hotel_10025",
            "score": 0.871,
            "sort": ["_score"],
        },
    ],
    "total_hits": 2,
    "max_score": 1.2634,
    "took": 1520351,
    "facets": None,
}


@pytest.fixture
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def sample_response() -> dict[str, object]:
    """Return a fresh copy of a representative search service response."""
    return copy.deepcopy(_SAMPLE_RESPONSE)


@pytest.fixture()
def search_node() -> Node:
    return Node.from_search_uri(SEARCH_BASE)


@pytest.fixture()
def metrics_registry() -> MetricsRegistry:
    return MetricsRegistry()


@pytest.fixture()
def search_request() -> SearchRequest:
    return SearchRequest(
        index="travel-index",
        query=MatchPhraseQuery("white wine").with_field("description"),
        limit=10,
        client_context_id="ctx-1234",
    )


@pytest.fixture()
def make_client(
    search_node: Node, metrics_registry: MetricsRegistry
) -> Callable[..., SearchClient]:
    """Return a factory building clients whose HTTP layer is ``handler``."""

    def _make(handler: Callable[[httpx.Request], object], **kwargs: object) -> SearchClient:
        return SearchClient(
            StaticNodeLocator([search_node]),
            transport=httpx.MockTransport(handler),  # type: ignore[arg-type]
            metrics_registry=metrics_registry,
            **kwargs,  # type: ignore[arg-type]
        )

    return _make
