"""Applications controller.

Owns the API client, the application store and the live stream, and exposes
the observable surface the presentation layer reads:

- ``snapshot()``: applications grouped by category
- ``connected``: whether live data is flowing
- ``last_error``: most recent transport failure, if any

Live updates come from the watch stream. When the stream cannot connect
before it has ever delivered data, the controller loads the application
listing once so the dashboard is not empty while reconnecting. With
streaming disabled it polls the listing instead.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager, suppress
from typing import Any

from argoflow.constants.enums import StreamState
from argoflow.constants.values import APPLICATIONS_STREAM_PATH
from argoflow.controllers.applications.fetchers import (
    ApiError,
    ApplicationFetcher,
    ArgoApiClient,
    ResourceTreeFetcher,
)
from argoflow.controllers.applications.parsers import ApplicationParser
from argoflow.controllers.applications.store import ApplicationStore
from argoflow.controllers.applications.stream import ApplicationStream, SleepFunc
from argoflow.controllers.base import BaseController, WorkerResult
from argoflow.models.core.application_info import ApplicationInfo
from argoflow.models.core.resource_info import ResourceNodeInfo
from argoflow.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)


class ApplicationsController(BaseController):
    """Argo CD application data with live updates."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        client: ArgoApiClient | None = None,
        on_change: Callable[[], None] | None = None,
        on_state_change: Callable[[StreamState], None] | None = None,
        sleep_func: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the applications controller.

        Args:
            settings: Connection and refresh settings.
            client: Optional pre-built API client (tests inject a mock transport).
            on_change: Called after every batch of store changes.
            on_state_change: Called with each stream state transition.
            sleep_func: Awaitable sleep used for backoff and polling.
        """
        self.settings = settings
        self._client = client or ArgoApiClient(settings)
        self._parser = ApplicationParser(settings.category_label_key)
        self._store = ApplicationStore()
        self._on_change = on_change
        self._on_state_change = on_state_change
        self._sleep = sleep_func

        self._application_fetcher = ApplicationFetcher(self._client.get_json)
        self._resource_tree_fetcher = ResourceTreeFetcher(self._client.get_json)
        self._stream = ApplicationStream(
            self._store,
            self._open_application_stream,
            parser=self._parser,
            on_change=self._notify_change,
            on_state_change=self._handle_stream_state,
            base_delay=settings.reconnect_base_delay,
            max_delay=settings.reconnect_max_delay,
            sleep_func=sleep_func,
        )

        self._poll_task: asyncio.Task[None] | None = None
        self._cold_start_task: asyncio.Task[WorkerResult] | None = None
        self._has_streamed = False
        self._listing_loaded = False
        self._poll_connected = False
        self._poll_error: str | None = None
        self._stopped = False

    # =========================================================================
    # Observable surface
    # =========================================================================

    @property
    def store(self) -> ApplicationStore:
        return self._store

    @property
    def stream(self) -> ApplicationStream:
        return self._stream

    @property
    def connected(self) -> bool:
        if self.settings.use_stream:
            return self._stream.connected
        return self._poll_connected

    @property
    def last_error(self) -> str | None:
        if self.settings.use_stream:
            return self._stream.last_error
        return self._poll_error

    @property
    def has_data(self) -> bool:
        return self._has_streamed or self._listing_loaded

    def snapshot(self) -> dict[str, list[ApplicationInfo]]:
        return self._store.snapshot_grouped_by_category()

    def set_callbacks(
        self,
        *,
        on_change: Callable[[], None] | None = None,
        on_state_change: Callable[[StreamState], None] | None = None,
    ) -> None:
        """Attach observers after construction (screens exist after the controller)."""
        self._on_change = on_change
        self._on_state_change = on_state_change

    # =========================================================================
    # BaseController
    # =========================================================================

    async def check_connection(self) -> bool:
        """Check if the API server answers the application listing."""
        try:
            await self._application_fetcher.fetch_applications_raw()
        except ApiError as exc:
            logger.info("Argo CD API not reachable: %s", exc)
            return False
        return True

    async def fetch_all(self, *, cold_start: bool = False) -> dict[str, Any]:
        """Load the full application listing into the store.

        The listing is not applied while the stream is live or after
        ``stop()``. A cold-start listing is also dropped once the stream has
        delivered events.

        Args:
            cold_start: True for the one-shot listing issued before the
                stream first connected.
        """
        payload = await self._application_fetcher.fetch_applications_raw()
        applications = self._parser.parse_application_list(payload)
        if cold_start and self._has_streamed:
            logger.debug("Dropping cold-start listing; stream data is newer")
        elif not self._stopped and not self._stream.connected:
            self._store.replace_all(applications)
            self._listing_loaded = True
            self._notify_change()
        return {"applications": applications}

    async def refresh(self, *, cold_start: bool = False) -> WorkerResult:
        """Run ``fetch_all`` and report the outcome instead of raising."""
        start = time.monotonic()
        try:
            data = await self.fetch_all(cold_start=cold_start)
        except ApiError as exc:
            return WorkerResult(
                success=False,
                error=str(exc),
                duration_ms=(time.monotonic() - start) * 1000,
            )
        return WorkerResult(
            success=True,
            data=data,
            duration_ms=(time.monotonic() - start) * 1000,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Begin live updates (stream) or the polling fallback."""
        if self._stopped:
            raise RuntimeError("Applications controller was stopped")
        if self.settings.use_stream:
            self._stream.start()
        elif self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.create_task(
                self._poll_loop(), name="application-poll"
            )

    async def stop(self) -> None:
        """Stop all background work; no store or state change happens afterwards."""
        if self._stopped:
            return
        self._stopped = True
        await self._stream.stop()
        for task in (self._poll_task, self._cold_start_task):
            if task is not None and not task.done():
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task
        await self._client.aclose()

    async def fetch_resource_nodes(self, app_name: str, app_namespace: str) -> list[ResourceNodeInfo]:
        """Fetch and parse the resource tree of one application."""
        payload = await self._resource_tree_fetcher.fetch_resource_tree_raw(
            app_name, app_namespace
        )
        return self._parser.parse_resource_nodes(payload)

    # =========================================================================
    # Internals
    # =========================================================================

    @asynccontextmanager
    async def _open_application_stream(self) -> AsyncIterator[AsyncIterator[str]]:
        async with self._client.open_stream(APPLICATIONS_STREAM_PATH) as response:
            yield response.aiter_text()

    def _notify_change(self) -> None:
        if self._stopped or self._on_change is None:
            return
        try:
            self._on_change()
        except Exception:
            logger.exception("Application change callback failed")

    def _handle_stream_state(self, state: StreamState) -> None:
        if state == StreamState.STREAMING:
            self._has_streamed = True
        elif (
            state == StreamState.DISCONNECTED
            and not self._has_streamed
            and not self._listing_loaded
            and self._cold_start_task is None
            and not self._stopped
        ):
            logger.info("Stream unavailable; loading application listing once")
            self._cold_start_task = asyncio.create_task(
                self.refresh(cold_start=True), name="application-cold-start"
            )

        if self._on_state_change is not None and not self._stopped:
            try:
                self._on_state_change(state)
            except Exception:
                logger.exception("Application state callback failed")

    async def _poll_loop(self) -> None:
        while not self._stopped:
            result = await self.refresh()
            if self._stopped:
                return
            self._poll_connected = result.success
            if result.success:
                self._poll_error = None
            else:
                self._poll_error = result.error
                logger.warning("Application listing failed: %s", result.error)
            await self._sleep(self.settings.poll_interval)
