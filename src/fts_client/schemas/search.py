"""Pydantic models describing a search request document and its result."""

from __future__ import annotations

import json
import uuid
from typing import Dict, List, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    InstanceOf,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from fts_client.schemas.queries import SearchQuery
from fts_client.types import JSONDict
from fts_client.utils.errors import InvalidArgument

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429})
"""HTTP statuses the search service uses to signal it is overloaded."""


class SearchRequest(BaseModel):
    """One query against one index plus the options controlling its execution."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    index: str = Field(..., min_length=1, description="Name of the full-text index to query.")
    query: InstanceOf[SearchQuery] = Field(..., description="Clause selecting the matching documents.")
    limit: int | None = Field(default=None, ge=0, description="Maximum number of hits (``size``).")
    skip: int | None = Field(default=None, ge=0, description="Number of hits to skip (``from``).")
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Server and client side timeout in seconds; the client default applies when unset.",
    )
    explain: bool = Field(default=False, description="Ask the server to explain each hit's score.")
    fields: List[str] = Field(default_factory=list, description="Stored fields to return with each hit.")
    highlight_style: Literal["html", "ansi"] | None = Field(default=None)
    highlight_fields: List[str] = Field(default_factory=list)
    sort: List[str] = Field(default_factory=list, description="Sort keys, ``-`` prefix for descending.")
    client_context_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        min_length=1,
        description="Identifier correlating client logs with the server query log.",
    )

    def __init__(self, **data: object) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidArgument(
                "Invalid search request",
                details=[
                    {"loc": [str(part) for part in error["loc"]], "msg": error["msg"]}
                    for error in exc.errors()
                ],
            ) from exc

    def with_options(self, **changes: object) -> "SearchRequest":
        """Return a validated copy with ``changes`` applied."""
        current = {name: getattr(self, name) for name in type(self).model_fields}
        current.update(changes)
        return SearchRequest(**current)

    def to_dict(self) -> JSONDict:
        """Return the request document, omitting options never set."""
        document: JSONDict = {"query": self.query.export()}
        if self.limit is not None:
            document["size"] = self.limit
        if self.skip is not None:
            document["from"] = self.skip
        if self.explain:
            document["explain"] = True
        if self.fields:
            document["fields"] = list(self.fields)
        if self.highlight_style is not None or self.highlight_fields:
            highlight: Dict[str, object] = {}
            if self.highlight_style is not None:
                highlight["style"] = self.highlight_style
            if self.highlight_fields:
                highlight["fields"] = list(self.highlight_fields)
            document["highlight"] = highlight
        if self.sort:
            document["sort"] = list(self.sort)
        ctl: Dict[str, object] = {}
        if self.timeout is not None:
            ctl["timeout"] = max(1, round(self.timeout * 1000))
        ctl["client_context_id"] = self.client_context_id
        document["ctl"] = ctl
        return document

    def to_json(self) -> str:
        """Return :meth:`to_dict` as compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


class SearchStatus(BaseModel):
    """Per-partition execution summary reported by the service."""

    total: int = 0
    failed: int = 0
    successful: int = 0
    errors: Dict[str, str] = Field(default_factory=dict)

    @field_validator("errors", mode="before")
    @classmethod
    def normalise_errors(cls, value: object) -> object:
        """Accept ``null`` and the list form some service versions emit."""
        if value is None:
            return {}
        if isinstance(value, list):
            return {str(position): str(message) for position, message in enumerate(value)}
        return value


class SearchHit(BaseModel):
    """Single document matched by the query."""

    index: str = ""
    id: str
    score: float = 0.0
    fields: Dict[str, object] = Field(default_factory=dict)
    fragments: Dict[str, List[str]] = Field(default_factory=dict)
    locations: Dict[str, object] = Field(default_factory=dict)
    explanation: Dict[str, object] | None = None
    sort: List[str] = Field(default_factory=list)

    @field_validator("fields", "fragments", "locations", "sort", mode="before")
    @classmethod
    def null_as_empty(cls, value: object, info: ValidationInfo) -> object:
        """The service emits ``null`` for collections it has nothing to report in."""
        if value is None:
            return [] if info.field_name == "sort" else {}
        return value


class SearchResult(BaseModel):
    """Mapped search response plus the transport metadata of the attempt."""

    status: SearchStatus = Field(default_factory=SearchStatus)
    hits: List[SearchHit] = Field(default_factory=list)
    total_hits: int = 0
    max_score: float = 0.0
    took: int = Field(default=0, description="Server side execution time in nanoseconds.")
    facets: Dict[str, object] = Field(default_factory=dict)
    http_status_code: int | None = None
    diagnostic: str | None = Field(
        default=None,
        description="Body of a non-success response, kept verbatim for troubleshooting.",
    )

    @field_validator("status", "hits", "facets", mode="before")
    @classmethod
    def null_as_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            return [] if info.field_name == "hits" else {}
        return value

    @property
    def success(self) -> bool:
        """Return whether the call completed on every index partition."""
        code = self.http_status_code
        return code is not None and 200 <= code < 300 and self.status.failed == 0

    @property
    def retry_reason(self) -> str | None:
        """Explain why :meth:`should_retry` is true, ``None`` otherwise."""
        code = self.http_status_code
        if code is None:
            return None
        if code in RETRYABLE_STATUS_CODES:
            return "too_many_requests"
        if 200 <= code < 300 and self.status.failed > 0:
            return "partial_failure"
        return None

    def should_retry(self) -> bool:
        """Return whether resubmitting the same request is worthwhile."""
        return self.retry_reason is not None


__all__ = ["RETRYABLE_STATUS_CODES", "SearchHit", "SearchRequest", "SearchResult", "SearchStatus"]
