"""Main application class for the argoflow TUI."""

from __future__ import annotations

import logging

from textual.app import App
from textual.binding import Binding

from argoflow.constants import APP_TITLE
from argoflow.controllers.applications import ApplicationsController
from argoflow.controllers.topology import StageTopologyBuilder
from argoflow.models.state.app_settings import AppSettings
from argoflow.models.topology.stage_info import LayerConfig

logger = logging.getLogger(__name__)


class ArgoFlowApp(App[None]):
    """Terminal dashboard for Argo CD application rollouts."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = [
        Binding("q", "quit", "Quit"),
    ]

    settings: AppSettings

    def __init__(
        self,
        settings: AppSettings,
        layers: list[LayerConfig],
        controller: ApplicationsController | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.settings = settings
        self.layers = layers
        self.controller = controller or ApplicationsController(settings)
        self.sub_title = settings.server_url

    def on_mount(self) -> None:
        """Called when app is mounted."""
        from argoflow.screens import OverviewScreen

        logger.info("Watching %s", self.settings.server_url)
        self.push_screen(OverviewScreen(self.controller, StageTopologyBuilder(self.layers)))

    async def on_unmount(self) -> None:
        """Stop live updates when the app shuts down."""
        await self.controller.stop()
