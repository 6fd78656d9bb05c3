"""Overview screen: live stage topology."""

from argoflow.screens.overview.overview_screen import OverviewScreen
from argoflow.screens.overview.presenter import (
    ApplicationRow,
    ApplicationsChanged,
    ConnectionChanged,
    OverviewPresenter,
    ResourcesChanged,
)

__all__ = [
    "ApplicationRow",
    "ApplicationsChanged",
    "ConnectionChanged",
    "OverviewPresenter",
    "OverviewScreen",
    "ResourcesChanged",
]
