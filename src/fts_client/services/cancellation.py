"""Cooperative cancellation signal handed to in-flight search calls."""

from __future__ import annotations

import asyncio


class CancellationToken:
    """Caller-owned signal aborting the requests it is passed to.

    ``cancel()`` may be called from any coroutine on the same event loop. A
    deadline set through :meth:`with_timeout` fires the same signal, so a
    timeout and an explicit cancellation are indistinguishable to the
    executor.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._deadline: asyncio.TimerHandle | None = None
        self.reason: str | None = None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Return a token that cancels itself after ``seconds``.

        Must be called while an event loop is running.
        """
        token = cls()
        loop = asyncio.get_running_loop()
        token._deadline = loop.call_later(seconds, token.cancel, "deadline exceeded")
        return token

    @property
    def cancelled(self) -> bool:
        """Return whether the signal has fired."""
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Fire the signal; later calls keep the first reason."""
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    async def wait(self) -> None:
        """Block until the signal fires."""
        await self._event.wait()


__all__ = ["CancellationToken"]
