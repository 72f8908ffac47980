"""Exception hierarchy raised by the query model and the search executor."""

from __future__ import annotations

from typing import Optional

from fts_client.types import JSONDict, JSONValue
from fts_client.utils.logging import get_context_id


class SearchClientError(Exception):
    """Base exception carrying a machine-friendly code and structured details."""

    code = "search_error"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[JSONValue] = None,
        code: str | None = None,
    ) -> None:
        """Capture the human message, optional structured details and override code."""
        super().__init__(message)
        self.message = message
        self.details: JSONValue = details if details is not None else {}
        self.code = code or self.__class__.code

    def to_payload(self) -> JSONDict:
        """Return a JSON-friendly description of the failure."""
        return {
            "error": {"code": self.code, "message": self.message},
            "details": self.details,
            "context_id": get_context_id(),
        }


class InvalidArgument(SearchClientError, ValueError):
    """Raised synchronously when a query or request is built from invalid input."""

    code = "invalid_argument"


class NodeUnavailable(SearchClientError):
    """Raised when no node currently offers the search service."""

    code = "node_unavailable"


class AmbiguousTimeout(SearchClientError):
    """Raised when a query was cancelled or timed out while in flight.

    The server may or may not have executed the request; callers must weigh
    idempotency before resubmitting it.
    """

    code = "ambiguous_timeout"


class RequestCanceled(SearchClientError):
    """Raised when the network failed before the server could act on the request.

    The request is known not to have completed server side so it is safe to
    retry.
    """

    code = "request_canceled"


class MappingError(SearchClientError):
    """Raised when a response body cannot be mapped onto a search result."""

    code = "mapping_error"


__all__ = [
    "SearchClientError",
    "InvalidArgument",
    "NodeUnavailable",
    "AmbiguousTimeout",
    "RequestCanceled",
    "MappingError",
]
