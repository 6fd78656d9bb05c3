"""Applications domain: store, stream, fetchers and parsers."""

from argoflow.controllers.applications.controller import ApplicationsController
from argoflow.controllers.applications.store import ApplicationStore
from argoflow.controllers.applications.stream import ApplicationStream, backoff_delay

__all__ = [
    "ApplicationStore",
    "ApplicationStream",
    "ApplicationsController",
    "backoff_delay",
]
