"""Base controller with async patterns shared by argoflow controllers.

Controllers are driven from Textual workers on the app's event loop, so the
API calls they make must never block.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class WorkerResult:
    """Result wrapper for worker operations."""

    success: bool
    data: Any | None = None
    error: str | None = None
    duration_ms: float = 0.0


class BaseController(ABC):
    """Base controller class.

    Subclasses implement the abstract methods to provide specific data
    fetching functionality.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...

    @abstractmethod
    async def fetch_all(self) -> dict[str, Any]:
        """Fetch all data from the source.

        Returns:
            Dictionary containing all fetched data
        """
        ...
