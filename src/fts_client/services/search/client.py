"""Executor sending search requests to a search node over HTTP.

A call resolves to exactly one of:

* a :class:`SearchResult`, including non-success and retry-worthy statuses.
  Retrying is left to the caller, guided by :meth:`SearchResult.should_retry`;
* :class:`AmbiguousTimeout` when the request was cancelled or ran out of time
  in flight, so the server may or may not have executed it;
* :class:`RequestCanceled` when the network failed underneath the request,
  which is therefore known not to have completed;
* :class:`NodeUnavailable` or :class:`MappingError` from the collaborators.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable
from urllib.parse import quote

import httpx
from loguru import logger

from fts_client.schemas.search import SearchRequest, SearchResult
from fts_client.services.cancellation import CancellationToken
from fts_client.services.metrics import MetricsRegistry, metrics
from fts_client.services.nodes import Node, NodeLocator, ServiceType
from fts_client.services.search.mapping import DataMapper, SearchDataMapper
from fts_client.utils.errors import (
    AmbiguousTimeout,
    NodeUnavailable,
    RequestCanceled,
    SearchClientError,
)
from fts_client.utils.logging import bind_context_id, get_context_id, log_stage, set_query_metadata

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class SearchClient:
    """Send :class:`SearchRequest` documents to nodes running the search service.

    Collaborators are injected: ``locator`` picks the node, ``mapper`` turns
    the response body into a result and the HTTP layer is either a shared
    ``http_client`` or, when none is given, a short-lived client built per call
    from ``transport``, ``timeout`` and ``auth``.
    """

    def __init__(
        self,
        locator: NodeLocator,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        mapper: DataMapper | None = None,
        timeout: float = 75.0,
        auth: tuple[str, str] | None = None,
        metrics_registry: MetricsRegistry | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._locator = locator
        self._http_client = http_client
        self._transport = transport
        self._mapper: DataMapper = mapper or SearchDataMapper()
        self._timeout = timeout
        self._auth = auth
        self._metrics = metrics_registry or metrics

    @staticmethod
    def build_uri(node: Node, index: str) -> str:
        """Return the query endpoint of ``index`` on ``node``."""
        if not node.search_uri:
            raise NodeUnavailable(
                f"Node {node.hostname} does not expose a search endpoint",
                details={"hostname": node.hostname},
            )
        return f"{node.search_uri}/api/index/{quote(index, safe='')}/query"

    def query(self, request: SearchRequest) -> SearchResult:
        """Blocking variant of :meth:`query_async` running on a fresh event loop.

        Must not be called from a running event loop; use the coroutine there.
        """
        return asyncio.run(self.query_async(request))

    async def query_async(
        self,
        request: SearchRequest,
        *,
        cancellation: CancellationToken | None = None,
    ) -> SearchResult:
        """Execute ``request`` against a search node and map the response."""
        with bind_context_id(request.client_context_id):
            set_query_metadata(index=request.index)
            started = time.perf_counter()
            try:
                with log_stage("search.query"):
                    node = self._locator.pick_node(ServiceType.SEARCH)
                    set_query_metadata(node=node.search_uri)
                    result = await self._query_node(node, request, cancellation)
            except SearchClientError as exc:
                self._metrics.record_request(exc.code, time.perf_counter() - started)
                raise
            self._metrics.record_request(self._outcome(result), time.perf_counter() - started)
            return result

    async def _query_node(
        self,
        node: Node,
        request: SearchRequest,
        cancellation: CancellationToken | None,
    ) -> SearchResult:
        uri = self.build_uri(node, request.index)
        body = request.to_json().encode("utf-8")
        timeout = request.timeout or self._timeout
        response = await self._transmit(uri, body, timeout, cancellation)

        if response.is_success:
            result = self._mapper.map(response.content)
        else:
            result = SearchResult(diagnostic=response.text or None)
            logger.bind(
                context_id=get_context_id(),
                status_code=response.status_code,
                node=node.search_uri,
                index=request.index,
                body=response.text[:512],
            ).warning("search.http_error")
        result.http_status_code = response.status_code

        if result.should_retry():
            logger.bind(
                context_id=get_context_id(),
                status_code=response.status_code,
                reason=result.retry_reason,
                node=node.search_uri,
            ).warning("search.retry")
        node.update_last_activity()
        return result

    async def _transmit(
        self,
        uri: str,
        body: bytes,
        timeout: float,
        cancellation: CancellationToken | None,
    ) -> httpx.Response:
        """POST ``body`` and translate transport failures into classified errors."""
        try:
            if cancellation is None:
                return await self._post(uri, body, timeout)
            return await self._race(self._post(uri, body, timeout), cancellation, uri)
        except asyncio.CancelledError as exc:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                # The caller's own task is being cancelled; honour it.
                raise
            raise AmbiguousTimeout(
                "The query was cancelled before a response was received.",
                details={"uri": uri},
            ) from exc
        except httpx.TimeoutException as exc:
            raise AmbiguousTimeout(
                f"The query timed out after {timeout}s.",
                details={"uri": uri, "timeout": timeout, "reason": exc.__class__.__name__},
            ) from exc
        except httpx.TransportError as exc:
            raise RequestCanceled(
                f"The query was canceled: {exc}",
                details={"uri": uri, "reason": exc.__class__.__name__},
            ) from exc

    @staticmethod
    async def _race(
        operation: Awaitable[httpx.Response],
        cancellation: CancellationToken,
        uri: str,
    ) -> httpx.Response:
        """Await ``operation`` unless ``cancellation`` fires first."""
        request_task = asyncio.ensure_future(operation)
        signal_task = asyncio.ensure_future(cancellation.wait())
        try:
            done, _ = await asyncio.wait(
                {request_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            signal_task.cancel()
            if not request_task.done():
                request_task.cancel()
                await asyncio.wait({request_task})
        if request_task not in done:
            raise AmbiguousTimeout(
                f"The query was cancelled while in flight ({cancellation.reason}).",
                details={"uri": uri, "reason": cancellation.reason},
            )
        return request_task.result()

    async def _post(self, uri: str, body: bytes, timeout: float) -> httpx.Response:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if self._http_client is not None:
            return await self._http_client.post(uri, content=body, headers=headers, timeout=timeout)
        async with httpx.AsyncClient(
            timeout=timeout, transport=self._transport, auth=self._auth
        ) as http_client:
            return await http_client.post(uri, content=body, headers=headers)

    @staticmethod
    def _outcome(result: SearchResult) -> str:
        if result.should_retry():
            return "retry"
        if result.http_status_code is not None and not 200 <= result.http_status_code < 300:
            return "http_error"
        return "success"


__all__ = ["JSON_CONTENT_TYPE", "SearchClient"]
