"""In-memory application store keyed by application name."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from argoflow.models.core.application_info import ApplicationInfo

logger = logging.getLogger(__name__)


class ApplicationStore:
    """Latest known record per application.

    Mutations never await, so on a single event loop every reader sees the
    state after some prefix of applied mutations. Snapshots are independent
    copies; callers may keep or modify them freely.
    """

    def __init__(self) -> None:
        self._apps: dict[str, ApplicationInfo] = {}

    def __len__(self) -> int:
        return len(self._apps)

    def __contains__(self, name: object) -> bool:
        return name in self._apps

    def get(self, name: str) -> ApplicationInfo | None:
        return self._apps.get(name)

    def names(self) -> list[str]:
        return list(self._apps)

    def upsert(self, app: ApplicationInfo) -> None:
        """Store ``app``, replacing any previous record with the same name."""
        self._apps[app.name] = app

    def remove(self, name: str) -> bool:
        """Delete ``name``; returns False when it was not stored."""
        return self._apps.pop(name, None) is not None

    def replace_all(self, apps: Iterable[ApplicationInfo]) -> None:
        """Replace the whole store with a fresh listing."""
        self._apps = {app.name: app for app in apps}
        logger.debug("Store resynchronised with %d applications", len(self._apps))

    def clear(self) -> None:
        self._apps.clear()

    def snapshot_grouped_by_category(self) -> dict[str, list[ApplicationInfo]]:
        """Return ``category -> applications`` as a fresh copy."""
        grouped: dict[str, list[ApplicationInfo]] = {}
        for app in self._apps.values():
            grouped.setdefault(app.category, []).append(app)
        return grouped
