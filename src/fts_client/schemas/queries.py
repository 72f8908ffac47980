"""Immutable query clauses exported as full-text search JSON documents.

Clauses are frozen dataclasses. The ``with_*`` helpers return a modified copy
through :func:`dataclasses.replace`, which re-runs ``__post_init__`` so every
copy is validated like a freshly constructed clause. Options set through a
``with_*`` helper are exported after constructor options, in the order they
were applied::

    query = MatchPhraseQuery("white wine").with_field("description").with_boost(1.5)
    query.export()
    # {"match_phrase": "white wine", "field": "description", "boost": 1.5}
"""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from dataclasses import field as dataclass_field
from typing import TypeVar

from fts_client.types import JSONDict
from fts_client.utils.errors import InvalidArgument

_Q = TypeVar("_Q", bound="SearchQuery")


def _require_text(name: str, value: object) -> str:
    """Return ``value`` when it is a non-empty string, raise otherwise."""
    if value is None:
        raise InvalidArgument(f"{name} must not be None", details={"argument": name})
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string", details={"argument": name})
    if value == "":
        raise InvalidArgument(f"{name} must not be empty", details={"argument": name})
    return value


def _require_non_negative(name: str, value: float | int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"{name} must be a number", details={"argument": name})
    # ``not >=`` also rejects NaN.
    if not value >= 0 or math.isinf(value):
        raise InvalidArgument(
            f"{name} must be a finite number greater than or equal to 0",
            details={"argument": name, "value": str(value)},
        )


@dataclass(frozen=True, kw_only=True)
class SearchQuery(ABC):
    """Options shared by every leaf clause: a field restriction and a boost."""

    field: str | None = None
    boost: float | None = None
    _applied: tuple[str, ...] = dataclass_field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        # ``with_field`` only rejects None; the constructor wants real text.
        if self.field is not None and "field" not in self._applied:
            _require_text("field", self.field)
        _require_non_negative("boost", self.boost)

    def _apply(self: _Q, option: str, value: object) -> _Q:
        """Return a copy with ``option`` set and moved last in export order."""
        applied = tuple(name for name in self._applied if name != option) + (option,)
        return replace(self, _applied=applied, **{option: value})

    def with_field(self: _Q, name: str) -> _Q:
        """Return a copy restricted to the field ``name``."""
        if name is None:
            raise InvalidArgument("field must not be None", details={"argument": "field"})
        return self._apply("field", name)

    def with_boost(self: _Q, factor: float) -> _Q:
        """Return a copy weighted by ``factor`` relative to sibling clauses."""
        _require_non_negative("boost", factor)
        return self._apply("boost", factor)

    @abstractmethod
    def _head(self) -> JSONDict:
        """Return the clause-defining key, e.g. ``{"match_phrase": text}``."""

    def _options(self) -> JSONDict:
        return {}

    def export(self) -> JSONDict:
        """Return the clause as a JSON object, omitting options never set."""
        options: JSONDict = {}
        if self.field is not None:
            options["field"] = self.field
        options.update(self._options())
        if self.boost is not None:
            options["boost"] = self.boost
        document = self._head()
        document.update((name, value) for name, value in options.items() if name not in self._applied)
        document.update((name, options[name]) for name in self._applied if name in options)
        return document

    def to_json(self) -> str:
        """Return :meth:`export` as compact JSON text."""
        return json.dumps(self.export(), separators=(",", ":"))


@dataclass(frozen=True)
class MatchPhraseQuery(SearchQuery):
    """Match documents containing the analysed terms of ``match`` in order."""

    match: str

    def __post_init__(self) -> None:
        _require_text("match", self.match)
        super().__post_init__()

    def _head(self) -> JSONDict:
        return {"match_phrase": self.match}


@dataclass(frozen=True)
class MatchQuery(SearchQuery):
    """Match analysed terms of ``match`` in any order, optionally fuzzily."""

    match: str
    analyzer: str | None = None
    fuzziness: int | None = None
    prefix_length: int | None = None

    def __post_init__(self) -> None:
        _require_text("match", self.match)
        if self.analyzer is not None:
            _require_text("analyzer", self.analyzer)
        _require_non_negative("fuzziness", self.fuzziness)
        _require_non_negative("prefix_length", self.prefix_length)
        super().__post_init__()

    def with_analyzer(self, analyzer: str) -> "MatchQuery":
        return self._apply("analyzer", analyzer)

    def with_fuzziness(self, fuzziness: int) -> "MatchQuery":
        _require_non_negative("fuzziness", fuzziness)
        return self._apply("fuzziness", fuzziness)

    def with_prefix_length(self, prefix_length: int) -> "MatchQuery":
        _require_non_negative("prefix_length", prefix_length)
        return self._apply("prefix_length", prefix_length)

    def _head(self) -> JSONDict:
        return {"match": self.match}

    def _options(self) -> JSONDict:
        options: JSONDict = {}
        if self.analyzer is not None:
            options["analyzer"] = self.analyzer
        if self.fuzziness is not None:
            options["fuzziness"] = self.fuzziness
        if self.prefix_length is not None:
            options["prefix_length"] = self.prefix_length
        return options


@dataclass(frozen=True)
class TermQuery(SearchQuery):
    """Match the exact, unanalysed ``term``."""

    term: str
    fuzziness: int | None = None
    prefix_length: int | None = None

    def __post_init__(self) -> None:
        _require_text("term", self.term)
        _require_non_negative("fuzziness", self.fuzziness)
        _require_non_negative("prefix_length", self.prefix_length)
        super().__post_init__()

    def with_fuzziness(self, fuzziness: int) -> "TermQuery":
        _require_non_negative("fuzziness", fuzziness)
        return self._apply("fuzziness", fuzziness)

    def with_prefix_length(self, prefix_length: int) -> "TermQuery":
        _require_non_negative("prefix_length", prefix_length)
        return self._apply("prefix_length", prefix_length)

    def _head(self) -> JSONDict:
        return {"term": self.term}

    def _options(self) -> JSONDict:
        options: JSONDict = {}
        if self.fuzziness is not None:
            options["fuzziness"] = self.fuzziness
        if self.prefix_length is not None:
            options["prefix_length"] = self.prefix_length
        return options


__all__ = ["SearchQuery", "MatchPhraseQuery", "MatchQuery", "TermQuery"]
