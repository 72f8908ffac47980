"""Tests for the cooperative cancellation token."""

from __future__ import annotations

import asyncio

import pytest

from fts_client.services.cancellation import CancellationToken


@pytest.mark.anyio
async def test_cancel_releases_waiters_and_keeps_first_reason() -> None:
    token = CancellationToken()
    waiter = asyncio.ensure_future(token.wait())

    token.cancel("shutdown")
    token.cancel("second call")
    await asyncio.wait_for(waiter, timeout=1.0)

    assert token.cancelled
    assert token.reason == "shutdown"


@pytest.mark.anyio
async def test_with_timeout_fires_after_deadline() -> None:
    token = CancellationToken.with_timeout(0.01)

    await asyncio.wait_for(token.wait(), timeout=1.0)

    assert token.reason == "deadline exceeded"


@pytest.mark.anyio
async def test_explicit_cancel_disarms_deadline() -> None:
    token = CancellationToken.with_timeout(0.01)
    token.cancel()
    await asyncio.sleep(0.03)

    assert token.reason == "cancelled by caller"
