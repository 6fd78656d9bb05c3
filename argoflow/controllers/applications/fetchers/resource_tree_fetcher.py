"""Resource tree fetcher - pulls the resources owned by one application."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from argoflow.constants.values import RESOURCE_TREE_PATH_TEMPLATE
from argoflow.controllers.applications.fetchers.application_fetcher import GetJsonFunc

logger = logging.getLogger(__name__)


class ResourceTreeFetcher:
    """Fetches raw resource trees."""

    def __init__(self, get_json_func: GetJsonFunc) -> None:
        self._get_json = get_json_func

    async def fetch_resource_tree_raw(self, app_name: str, app_namespace: str) -> dict[str, Any]:
        """Fetch ``{nodes: [...]}`` for ``app_name`` in ``app_namespace``."""
        path = RESOURCE_TREE_PATH_TEMPLATE.format(name=quote(app_name, safe=""))
        payload = await self._get_json(path, params={"appNamespace": app_namespace})
        if not isinstance(payload, dict):
            logger.warning("Resource tree for %s is not an object; ignoring it", app_name)
            return {"nodes": []}
        return payload
