"""On-demand, cancellable resource tree loading per application.

Each application gets at most one in-flight fetch task. Loads run
independently of the live stream and of each other; cancelling one (for
example when its detail view collapses) abandons it without touching any
state afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from dataclasses import dataclass

from argoflow.constants.enums import FetchState
from argoflow.controllers.applications.fetchers.api_client import ApiError
from argoflow.controllers.resources.aggregator import ResourceAggregator
from argoflow.models.core.resource_info import ResourceNodeInfo, ResourceRollup

logger = logging.getLogger(__name__)

FetchNodesFunc = Callable[[str, str], Awaitable[list[ResourceNodeInfo]]]


@dataclass(frozen=True)
class ResourceLoadState:
    """Loading state of one application's resource rollup."""

    state: FetchState = FetchState.IDLE
    rollup: ResourceRollup | None = None
    error: str | None = None


_IDLE = ResourceLoadState()


class ResourceTreeLoader:
    """Loads and aggregates resource trees on demand.

    Args:
        fetch_nodes_func: Async function ``(app_name, app_namespace) -> nodes``.
        aggregator: Aggregator used to summarise fetched nodes.
        on_update: Called with the application name after its state changes.
    """

    def __init__(
        self,
        fetch_nodes_func: FetchNodesFunc,
        aggregator: ResourceAggregator | None = None,
        on_update: Callable[[str], None] | None = None,
    ) -> None:
        self._fetch_nodes = fetch_nodes_func
        self._aggregator = aggregator or ResourceAggregator()
        self._on_update = on_update
        self._states: dict[str, ResourceLoadState] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}

    def get_state(self, app_name: str) -> ResourceLoadState:
        return self._states.get(app_name, _IDLE)

    def is_loading(self, app_name: str) -> bool:
        task = self._tasks.get(app_name)
        return task is not None and not task.done()

    def load(self, app_name: str, app_namespace: str) -> asyncio.Task[None]:
        """Start (or restart) loading ``app_name``; returns the fetch task."""
        self._cancel_task(app_name)
        previous = self.get_state(app_name)
        self._states[app_name] = ResourceLoadState(
            state=FetchState.LOADING, rollup=previous.rollup
        )
        task = asyncio.create_task(
            self._load(app_name, app_namespace), name=f"resource-tree:{app_name}"
        )
        self._tasks[app_name] = task
        self._notify(app_name)
        return task

    def cancel(self, app_name: str) -> None:
        """Abandon any in-flight load and forget the application's state."""
        self._cancel_task(app_name)
        self._states.pop(app_name, None)

    async def cancel_all(self) -> None:
        tasks = list(self._tasks.values())
        self._tasks.clear()
        self._states.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task

    def _cancel_task(self, app_name: str) -> None:
        task = self._tasks.pop(app_name, None)
        if task is not None and not task.done():
            task.cancel()

    def _is_current(self, app_name: str) -> bool:
        return self._tasks.get(app_name) is asyncio.current_task()

    def _notify(self, app_name: str) -> None:
        if self._on_update is None:
            return
        try:
            self._on_update(app_name)
        except Exception:
            logger.exception("Resource update callback failed for %s", app_name)

    def _finish(self, app_name: str, state: ResourceLoadState) -> None:
        self._states[app_name] = state
        self._tasks.pop(app_name, None)
        self._notify(app_name)

    async def _load(self, app_name: str, app_namespace: str) -> None:
        try:
            nodes = await self._fetch_nodes(app_name, app_namespace)
            rollup = self._aggregator.summarize(app_name, nodes)
        except ApiError as exc:
            if self._is_current(app_name):
                logger.info("Resource tree for %s failed: %s", app_name, exc)
                self._finish(app_name, ResourceLoadState(state=FetchState.ERROR, error=str(exc)))
            return
        except Exception as exc:
            if self._is_current(app_name):
                logger.exception("Unexpected error loading resource tree for %s", app_name)
                self._finish(
                    app_name,
                    ResourceLoadState(state=FetchState.ERROR, error=str(exc) or type(exc).__name__),
                )
            return

        if self._is_current(app_name):
            self._finish(app_name, ResourceLoadState(state=FetchState.SUCCESS, rollup=rollup))
