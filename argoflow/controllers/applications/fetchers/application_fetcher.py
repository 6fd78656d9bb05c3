"""Application fetcher - pulls the application listing from the API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from argoflow.constants.values import APPLICATIONS_PATH

logger = logging.getLogger(__name__)

GetJsonFunc = Callable[..., Awaitable[Any]]


class ApplicationFetcher:
    """Fetches raw application listings."""

    def __init__(self, get_json_func: GetJsonFunc) -> None:
        """Initialize with a JSON GET function.

        Args:
            get_json_func: Async function taking a path and optional params
        """
        self._get_json = get_json_func

    async def fetch_applications_raw(self) -> dict[str, Any]:
        """Fetch ``{items: [...]}``; a non-object body yields an empty listing."""
        payload = await self._get_json(APPLICATIONS_PATH)
        if not isinstance(payload, dict):
            logger.warning("Application listing is not an object; ignoring it")
            return {"items": []}
        return payload
