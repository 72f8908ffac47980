"""Tests for the search request document and the result model."""

from __future__ import annotations

import json

import pytest

from fts_client.schemas.queries import MatchPhraseQuery, TermQuery
from fts_client.schemas.search import SearchRequest, SearchResult
from fts_client.services.search import SearchDataMapper
from fts_client.utils.errors import InvalidArgument, MappingError


def test_request_document_contains_only_set_options() -> None:
    request = SearchRequest(index="travel", query=MatchPhraseQuery("phrase"), client_context_id="abc")

    assert request.to_dict() == {
        "query": {"match_phrase": "phrase"},
        "ctl": {"client_context_id": "abc"},
    }


def test_request_document_serialises_every_option() -> None:
    request = SearchRequest(
        index="travel",
        query=TermQuery("sushi").with_field("reviews.content"),
        limit=5,
        skip=10,
        timeout=2,
        explain=True,
        fields=["name", "city"],
        highlight_style="html",
        highlight_fields=["reviews.content"],
        sort=["-_score", "name"],
        client_context_id="abc",
    )

    assert json.loads(request.to_json()) == {
        "query": {"term": "sushi", "field": "reviews.content"},
        "size": 5,
        "from": 10,
        "explain": True,
        "fields": ["name", "city"],
        "highlight": {"style": "html", "fields": ["reviews.content"]},
        "sort": ["-_score", "name"],
        "ctl": {"timeout": 2000, "client_context_id": "abc"},
    }


def test_request_generates_client_context_id() -> None:
    first = SearchRequest(index="travel", query=MatchPhraseQuery("phrase"))
    second = SearchRequest(index="travel", query=MatchPhraseQuery("phrase"))

    assert first.client_context_id
    assert first.client_context_id != second.client_context_id


@pytest.mark.parametrize(("timeout", "expected"), [(0.0004, 1), (0.0016, 2), (1.2345, 1234)])
def test_request_timeout_rounds_to_whole_milliseconds(timeout: float, expected: int) -> None:
    """Sub-millisecond timeouts must never reach the server as ``0``."""
    request = SearchRequest(index="travel", query=MatchPhraseQuery("phrase"), timeout=timeout)

    assert request.to_dict()["ctl"]["timeout"] == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"index": ""},
        {"query": "match_phrase: phrase"},
        {"limit": -1},
        {"skip": -5},
        {"timeout": 0},
        {"highlight_style": "markdown"},
    ],
)
def test_invalid_request_raises_invalid_argument(overrides: dict[str, object]) -> None:
    data: dict[str, object] = {"index": "travel", "query": MatchPhraseQuery("phrase")}
    data.update(overrides)

    with pytest.raises(InvalidArgument) as exc_info:
        SearchRequest(**data)

    assert exc_info.value.details


def test_with_options_revalidates() -> None:
    request = SearchRequest(index="travel", query=MatchPhraseQuery("phrase"))

    assert request.with_options(limit=3).limit == 3
    assert request.limit is None
    with pytest.raises(InvalidArgument):
        request.with_options(limit=-3)


def test_mapper_builds_result_from_service_document(sample_response) -> None:
    result = SearchDataMapper().map(json.dumps(sample_response).encode("utf-8"))

    assert result.status.successful == 6
    assert result.took == 1520351
    assert result.facets == {}
    assert result.hits[0].fields == {}
    assert result.hits[1].fragments == {}
    assert result.http_status_code is None


def test_mapper_rejects_invalid_documents() -> None:
    with pytest.raises(MappingError):
        SearchDataMapper().map(b'{"hits": [{"score": "high"}]}')


def test_status_errors_accept_list_form() -> None:
    result = SearchResult.model_validate(
        {"status": {"total": 2, "failed": 1, "successful": 1, "errors": ["pindex timed out"]}}
    )

    assert result.status.errors == {"0": "pindex timed out"}


@pytest.mark.parametrize(
    ("status_code", "failed", "expected"),
    [
        (200, 0, None),
        (200, 2, "partial_failure"),
        (429, 0, "too_many_requests"),
        (500, 0, None),
        (None, 3, None),
    ],
)
def test_retry_reason(status_code: int | None, failed: int, expected: str | None) -> None:
    result = SearchResult.model_validate({"status": {"total": 6, "failed": failed}})
    result.http_status_code = status_code

    assert result.retry_reason == expected
    assert result.should_retry() is (expected is not None)
