"""Node descriptors and the strategies used to pick one for a request."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Protocol, Sequence

from fts_client.utils.errors import InvalidArgument, NodeUnavailable


class ServiceType(str, Enum):
    """Services a cluster node may expose."""

    SEARCH = "search"
    QUERY = "query"
    ANALYTICS = "analytics"


@dataclass(eq=False)
class Node:
    """A cluster node and the base URIs of the services it runs."""

    hostname: str
    search_uri: str | None = None
    services: frozenset[ServiceType] = field(default_factory=frozenset)
    last_activity: float | None = None

    def __post_init__(self) -> None:
        if self.search_uri is not None:
            self.search_uri = self.search_uri.rstrip("/")
            if ServiceType.SEARCH not in self.services:
                self.services = self.services | {ServiceType.SEARCH}

    @classmethod
    def from_search_uri(cls, uri: str) -> "Node":
        """Build a search node from its base URI (e.g. ``http://10.0.0.4:8094``)."""
        cleaned = uri.strip()
        if not cleaned:
            raise InvalidArgument("search node URI must not be empty")
        hostname = cleaned.split("://", 1)[-1].split("/", 1)[0]
        return cls(hostname=hostname, search_uri=cleaned)

    def supports(self, service: ServiceType) -> bool:
        """Return whether the node exposes ``service``."""
        return service in self.services

    def update_last_activity(self) -> None:
        """Record that the node just served a request.

        Concurrent writers may race; the timestamp only feeds idle detection so
        the last write wins.
        """
        self.last_activity = time.monotonic()

    def idle_for(self) -> float | None:
        """Return seconds since the node was last used, ``None`` if never used."""
        if self.last_activity is None:
            return None
        return time.monotonic() - self.last_activity


class NodeLocator(Protocol):
    """Protocol describing how the executor obtains a node for a service."""

    def pick_node(self, service: ServiceType) -> Node:
        """Return a node offering ``service`` or raise :class:`NodeUnavailable`."""


class StaticNodeLocator:
    """Pick a random node offering the requested service from a fixed list."""

    def __init__(self, nodes: Iterable[Node], *, rng: random.Random | None = None) -> None:
        self._nodes: List[Node] = list(nodes)
        self._rng = rng or random.Random()

    @classmethod
    def from_uris(cls, uris: Sequence[str]) -> "StaticNodeLocator":
        """Build a locator whose nodes all run the search service."""
        return cls(Node.from_search_uri(uri) for uri in uris)

    @property
    def nodes(self) -> List[Node]:
        """Return a copy of the known nodes."""
        return list(self._nodes)

    def pick_node(self, service: ServiceType) -> Node:
        """Return a random node exposing ``service``."""
        candidates = [node for node in self._nodes if node.supports(service)]
        if not candidates:
            raise NodeUnavailable(
                f"No node is available for the {service.value} service",
                details={"service": service.value, "known_nodes": len(self._nodes)},
            )
        return self._rng.choice(candidates)


__all__ = ["Node", "NodeLocator", "ServiceType", "StaticNodeLocator"]
