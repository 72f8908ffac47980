"""Tests for the client settings helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fts_client.config import Settings


def test_search_nodes_are_split_and_cleaned(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_NODES", " http://a:8094/ ,, http://b:8094 ")
    settings = Settings()
    assert settings.search_nodes == ["http://a:8094", "http://b:8094"]


def test_empty_credentials_are_treated_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank ``SEARCH_USERNAME`` entries must not enable basic auth."""
    monkeypatch.setenv("SEARCH_USERNAME", "")
    monkeypatch.setenv("SEARCH_PASSWORD", "")
    settings = Settings()
    assert settings.search_username is None
    assert settings.credentials is None


def test_credentials_pair(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_USERNAME", "Administrator")
    monkeypatch.setenv("SEARCH_PASSWORD", "password")
    assert Settings().credentials == ("Administrator", "password")


def test_timeout_bounds_are_enforced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_TIMEOUT", "0")
    with pytest.raises(ValidationError):
        Settings()
