"""HTTP fetchers for the Argo CD API."""

from argoflow.controllers.applications.fetchers.api_client import (
    ApiError,
    ArgoApiClient,
    summarize_http_error,
)
from argoflow.controllers.applications.fetchers.application_fetcher import (
    ApplicationFetcher,
)
from argoflow.controllers.applications.fetchers.resource_tree_fetcher import (
    ResourceTreeFetcher,
)

__all__ = [
    "ApiError",
    "ApplicationFetcher",
    "ArgoApiClient",
    "ResourceTreeFetcher",
    "summarize_http_error",
]
