"""Search execution against nodes running the full-text search service."""

from fts_client.schemas.queries import MatchPhraseQuery, MatchQuery, SearchQuery, TermQuery

from .client import JSON_CONTENT_TYPE, SearchClient
from .mapping import DataMapper, SearchDataMapper

__all__ = [
    "DataMapper",
    "JSON_CONTENT_TYPE",
    "MatchPhraseQuery",
    "MatchQuery",
    "SearchClient",
    "SearchDataMapper",
    "SearchQuery",
    "TermQuery",
]
