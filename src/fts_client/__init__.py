"""Client for issuing full-text search queries against remote search nodes."""

from fts_client.factory import create_search_client
from fts_client.schemas.search import SearchHit, SearchRequest, SearchResult, SearchStatus
from fts_client.services.cancellation import CancellationToken
from fts_client.services.nodes import Node, NodeLocator, ServiceType, StaticNodeLocator
from fts_client.services.search import (
    MatchPhraseQuery,
    MatchQuery,
    SearchClient,
    SearchDataMapper,
    SearchQuery,
    TermQuery,
)
from fts_client.utils.errors import (
    AmbiguousTimeout,
    InvalidArgument,
    MappingError,
    NodeUnavailable,
    RequestCanceled,
    SearchClientError,
)

__all__ = [
    "AmbiguousTimeout",
    "CancellationToken",
    "InvalidArgument",
    "MappingError",
    "MatchPhraseQuery",
    "MatchQuery",
    "Node",
    "NodeLocator",
    "NodeUnavailable",
    "RequestCanceled",
    "SearchClient",
    "SearchClientError",
    "SearchDataMapper",
    "SearchHit",
    "SearchQuery",
    "SearchRequest",
    "SearchResult",
    "SearchStatus",
    "ServiceType",
    "StaticNodeLocator",
    "TermQuery",
    "create_search_client",
]
