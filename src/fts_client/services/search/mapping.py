"""Mapping of raw search response bodies onto :class:`SearchResult` models."""

from __future__ import annotations

from typing import Protocol

from pydantic import ValidationError

from fts_client.schemas.search import SearchResult
from fts_client.utils.errors import MappingError


class DataMapper(Protocol):
    """Protocol describing how the executor turns a response body into a result."""

    def map(self, payload: bytes) -> SearchResult:
        """Return the mapped result or raise :class:`MappingError`."""


class SearchDataMapper:
    """Parse the JSON document returned by the search service with pydantic."""

    def map(self, payload: bytes) -> SearchResult:
        try:
            return SearchResult.model_validate_json(payload)
        except ValidationError as exc:
            raise MappingError(
                "Unable to map the search response",
                details={"errors": exc.error_count(), "first": exc.errors()[0]["msg"]},
            ) from exc


__all__ = ["DataMapper", "SearchDataMapper"]
