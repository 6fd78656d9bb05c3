"""Live application stream with reconnection.

State machine::

    DISCONNECTED -> CONNECTING -> STREAMING -> DISCONNECTED (error / EOF)
          any state --stop()--> STOPPED (terminal)

One asyncio task owns the connection, the line buffer and every store
mutation. Reconnects back off exponentially: ``min(base * 2**attempt, max)``
with the attempt counter reset only after a connection reaches STREAMING.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, suppress

import httpx

from argoflow.constants.enums import StreamState
from argoflow.constants.timeouts import (
    STREAM_RECONNECT_BASE_DELAY,
    STREAM_RECONNECT_MAX_DELAY,
)
from argoflow.controllers.applications.fetchers.api_client import (
    ApiError,
    summarize_http_error,
)
from argoflow.controllers.applications.parsers import (
    ApplicationParser,
    LineFrameDecoder,
    StreamEvent,
)
from argoflow.controllers.applications.store import ApplicationStore
from argoflow.models.core.application_info import ApplicationInfo

logger = logging.getLogger(__name__)

OpenStreamFunc = Callable[[], AbstractAsyncContextManager[AsyncIterator[str]]]
SleepFunc = Callable[[float], Awaitable[None]]

_STREAM_CLOSED_MESSAGE = "Stream closed by server"
_TRANSPORT_ERRORS = (ApiError, httpx.HTTPError, OSError, UnicodeDecodeError)


def backoff_delay(
    attempt: int,
    base_delay: float = STREAM_RECONNECT_BASE_DELAY,
    max_delay: float = STREAM_RECONNECT_MAX_DELAY,
) -> float:
    """Reconnect delay for the given zero-based attempt."""
    return min(base_delay * (2 ** max(0, attempt)), max_delay)


class ApplicationStream:
    """Keeps an ``ApplicationStore`` in sync with the watch stream.

    Args:
        store: Store mutated by decoded events.
        open_stream_func: Returns an async context manager yielding text chunks.
        parser: Application parser used by the frame decoder.
        on_change: Called once per chunk that applied at least one event.
        on_state_change: Called with the new ``StreamState`` on each transition.
        base_delay: First reconnect delay in seconds.
        max_delay: Reconnect delay cap in seconds.
        sleep_func: Awaitable sleep, replaceable in tests.
    """

    def __init__(
        self,
        store: ApplicationStore,
        open_stream_func: OpenStreamFunc,
        *,
        parser: ApplicationParser | None = None,
        on_change: Callable[[], None] | None = None,
        on_state_change: Callable[[StreamState], None] | None = None,
        base_delay: float = STREAM_RECONNECT_BASE_DELAY,
        max_delay: float = STREAM_RECONNECT_MAX_DELAY,
        sleep_func: SleepFunc = asyncio.sleep,
    ) -> None:
        self._store = store
        self._open_stream = open_stream_func
        self._parser = parser or ApplicationParser()
        self._on_change = on_change
        self._on_state_change = on_state_change
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._sleep = sleep_func

        self._state = StreamState.DISCONNECTED
        self._attempt = 0
        self._connected = False
        self._last_error: str | None = None
        self._stopped = False
        self._task: asyncio.Task[None] | None = None

    # =========================================================================
    # Observable state
    # =========================================================================

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def attempt(self) -> int:
        return self._attempt

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def snapshot(self) -> dict[str, list[ApplicationInfo]]:
        return self._store.snapshot_grouped_by_category()

    def next_delay(self) -> float:
        return backoff_delay(self._attempt, self._base_delay, self._max_delay)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> asyncio.Task[None]:
        """Start the stream task; returns the running task if already started."""
        if self._stopped:
            raise RuntimeError("Application stream was stopped and cannot restart")
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run(), name="application-stream")
        return self._task

    async def stop(self) -> None:
        """Cancel the connection, any pending reconnect, and all future updates."""
        if self._stopped:
            return
        self._stopped = True
        self._connected = False
        self._state = StreamState.STOPPED
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        logger.debug("Application stream stopped")

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_state(self, state: StreamState) -> None:
        if self._stopped or state == self._state:
            return
        self._state = state
        if self._on_state_change is not None:
            try:
                self._on_state_change(state)
            except Exception:
                logger.exception("Stream state callback failed")

    def _mark_connected(self) -> None:
        self._attempt = 0
        self._last_error = None
        self._connected = True
        self._set_state(StreamState.STREAMING)
        logger.info("Application stream connected")

    def _mark_disconnected(self, error: str) -> None:
        self._connected = False
        self._last_error = error
        self._set_state(StreamState.DISCONNECTED)

    def _apply(self, events: list[StreamEvent]) -> None:
        """Apply one decoded batch and notify once."""
        for event in events:
            if event.is_delete:
                self._store.remove(event.application.name)
            else:
                self._store.upsert(event.application)
        if self._on_change is not None:
            try:
                self._on_change()
            except Exception:
                logger.exception("Stream change callback failed")

    async def _consume(self) -> None:
        decoder = LineFrameDecoder(self._parser)
        async with self._open_stream() as chunks:
            if self._stopped:
                return
            self._mark_connected()
            async for chunk in chunks:
                if self._stopped:
                    return
                events = decoder.feed(chunk)
                if events:
                    self._apply(events)

    async def _run(self) -> None:
        while not self._stopped:
            self._set_state(StreamState.CONNECTING)
            try:
                await self._consume()
                error = _STREAM_CLOSED_MESSAGE
            except _TRANSPORT_ERRORS as exc:
                error = summarize_http_error(exc)
            if self._stopped:
                return

            self._mark_disconnected(error)
            delay = self.next_delay()
            self._attempt += 1
            logger.warning(
                "Application stream disconnected (%s); reconnecting in %.1fs (attempt %d)",
                error,
                delay,
                self._attempt,
            )
            await self._sleep(delay)
