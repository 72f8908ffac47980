"""Structured logging utilities leveraging loguru.

Every search call runs under a client context id, the same identifier the
request document carries in ``ctl.client_context_id``. Binding it to a
context variable lets log records and error payloads be correlated with the
server-side query log without threading the id through each call.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from loguru import logger

from fts_client.config import get_settings


@dataclass
class QueryLogContext:
    """State carried across one search call for logging.

    Attributes
    ----------
    index:
        Name of the index being queried.
    node:
        Search base URI of the node the request was sent to. ``None`` until a
        node has been picked.
    stage:
        Name of the logical stage currently executing.
    stage_started_at:
        ``time.perf_counter`` value recorded when the active stage began.

    """

    index: str | None = None
    node: str | None = None
    stage: str | None = None
    stage_started_at: float | None = None


_CONTEXT_ID: ContextVar[str] = ContextVar("context_id", default="unknown")
_QUERY_CONTEXT: ContextVar[QueryLogContext | None] = ContextVar("query_context", default=None)


def configure_logging() -> None:
    """Configure loguru to output JSON logs at the configured level."""
    settings = get_settings()
    logger.remove()
    logger.add(sys.stdout, level=settings.log_level.upper(), serialize=True)


def get_context_id() -> str:
    """Return the client context id of the active query."""
    return _CONTEXT_ID.get()


def get_query_context() -> QueryLogContext:
    """Return the current structured logging context."""
    context = _QUERY_CONTEXT.get()
    if context is None:
        context = QueryLogContext()
        _QUERY_CONTEXT.set(context)
    return context


def set_query_metadata(*, index: str | None = None, node: str | None = None) -> None:
    """Enrich the structured context with index and node information."""
    context = get_query_context()
    if index is not None:
        context.index = index
    if node is not None:
        context.node = node


@contextmanager
def bind_context_id(context_id: str) -> Iterator[None]:
    """Scope ``context_id`` and a fresh log context to the enclosed block."""
    id_token = _CONTEXT_ID.set(context_id)
    context_token = _QUERY_CONTEXT.set(QueryLogContext())
    try:
        yield
    finally:
        _QUERY_CONTEXT.reset(context_token)
        _CONTEXT_ID.reset(id_token)


def _elapsed_ms(context: QueryLogContext) -> float:
    if context.stage_started_at is None:
        return 0.0
    return (time.perf_counter() - context.stage_started_at) * 1000


@contextmanager
def log_stage(stage: str) -> Iterator[None]:
    """Context manager logging stage completion/failure with latency."""
    context = get_query_context()
    previous_stage = context.stage
    previous_started_at = context.stage_started_at
    context.stage = stage
    context.stage_started_at = time.perf_counter()
    try:
        yield
    except Exception:
        logger.bind(
            context_id=get_context_id(),
            stage=stage,
            latency_ms=_elapsed_ms(context),
            index=context.index,
            node=context.node,
        ).exception("stage.failed")
        raise
    else:
        logger.bind(
            context_id=get_context_id(),
            stage=stage,
            latency_ms=_elapsed_ms(context),
            index=context.index,
            node=context.node,
        ).info("stage.completed")
    finally:
        context.stage = previous_stage
        context.stage_started_at = previous_started_at


__all__ = [
    "QueryLogContext",
    "bind_context_id",
    "configure_logging",
    "get_context_id",
    "get_query_context",
    "log_stage",
    "set_query_metadata",
]
