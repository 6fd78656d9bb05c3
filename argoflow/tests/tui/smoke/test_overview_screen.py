"""Runtime smoke tests for the overview screen.

Runs the real Textual app against a mocked Argo CD API:
1. Stream events reach the store and the rendered topology
2. Selecting an application loads its resource tree
3. Exiting the app stops the controller
4. Repeated updates keep the mounted stage widgets and the highlight
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from textual.widgets import OptionList

from argoflow.app import ArgoFlowApp
from argoflow.controllers.applications import ApplicationsController
from argoflow.controllers.applications.fetchers import ArgoApiClient
from argoflow.models.state.app_settings import AppSettings
from argoflow.models.state.config_manager import ConfigManager
from argoflow.screens import OverviewScreen
from argoflow.screens.overview.presenter import ApplicationsChanged


def _frame(name: str, category: str) -> bytes:
    application = {
        "metadata": {
            "name": name,
            "namespace": "argocd",
            "labels": {"jeebon.ai/category": category},
        },
        "status": {"sync": {"status": "OutOfSync"}, "health": {"status": "Progressing"}},
    }
    payload = {"result": {"type": "ADDED", "application": application}}
    return f"data: {json.dumps(payload)}\n".encode()


class _OpenStream(httpx.AsyncByteStream):
    def __init__(self, *chunks: bytes) -> None:
        self._chunks = chunks

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        await asyncio.Event().wait()


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/api/v1/stream/applications":
        return httpx.Response(
            200, stream=_OpenStream(_frame("postgres", "database"), _frame("keycloak", "auth"))
        )
    if path.endswith("/resource-tree"):
        nodes: list[dict[str, Any]] = [
            {"kind": "StatefulSet", "name": "postgres", "health": {"status": "Healthy"}},
            {"kind": "Pod", "name": "postgres-0", "health": {"status": "Progressing"}},
        ]
        return httpx.Response(200, json={"nodes": nodes})
    return httpx.Response(200, json={"items": []})


def _make_app() -> tuple[ArgoFlowApp, ApplicationsController]:
    settings = AppSettings(server_url="http://argocd.test")
    client = ArgoApiClient(settings, transport=httpx.MockTransport(_handler))
    controller = ApplicationsController(settings, client=client)
    return ArgoFlowApp(settings, ConfigManager.load_layers(), controller=controller), controller


async def _settle(pilot: Any, predicate: Any, rounds: int = 50) -> None:
    for _ in range(rounds):
        if predicate():
            return
        await pilot.pause(0.02)
    raise AssertionError("condition not reached")


class TestOverviewScreenRuntime:
    """Overview screen behavior with a live event loop."""

    @pytest.mark.asyncio
    @pytest.mark.smoke
    async def test_stream_events_render(self) -> None:
        app, controller = _make_app()

        async with app.run_test() as pilot:
            await _settle(pilot, lambda: len(controller.store) == 2)
            await pilot.pause()

            screen = app.screen
            assert isinstance(screen, OverviewScreen)
            options = screen.query_one("#overview-apps", OptionList)
            assert options.option_count == 2
            assert controller.connected is True
            assert screen.presenter.topology.layer("database").active is True

        assert controller.stream.is_running is False

    @pytest.mark.asyncio
    @pytest.mark.smoke
    async def test_select_application_loads_resources(self) -> None:
        app, controller = _make_app()

        async with app.run_test() as pilot:
            await _settle(pilot, lambda: len(controller.store) == 2)
            await pilot.pause()

            screen = app.screen
            assert isinstance(screen, OverviewScreen)
            options = screen.query_one("#overview-apps", OptionList)
            options.focus()
            options.highlighted = options.get_option_index("postgres")
            await pilot.press("enter")
            await _settle(pilot, lambda: screen.loader.get_state("postgres").rollup is not None)
            await pilot.pause()

            rollup = screen.loader.get_state("postgres").rollup
            assert [summary.kind for summary in rollup.kinds] == ["StatefulSet", "Pod"]
            assert "postgres" in screen.presenter.expanded

    @pytest.mark.asyncio
    @pytest.mark.smoke
    async def test_updates_keep_widgets_and_highlight(self) -> None:
        app, controller = _make_app()

        async with app.run_test() as pilot:
            await _settle(pilot, lambda: len(controller.store) == 2)
            await pilot.pause()

            screen = app.screen
            assert isinstance(screen, OverviewScreen)
            options = screen.query_one("#overview-apps", OptionList)
            options.highlighted = options.get_option_index("keycloak")
            stages_before = list(screen.query(".overview-stage"))
            assert stages_before

            screen.post_message(ApplicationsChanged())
            await pilot.pause()
            await pilot.pause()

            assert list(screen.query(".overview-stage")) == stages_before
            assert options.option_count == 2
            assert options.highlighted == options.get_option_index("keycloak")
