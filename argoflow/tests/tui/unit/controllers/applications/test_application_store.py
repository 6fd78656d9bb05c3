"""Tests for the in-memory application store."""

from __future__ import annotations

import pytest

from argoflow.constants.enums import SyncStatusCode
from argoflow.controllers.applications.store import ApplicationStore
from argoflow.models.core.application_info import ApplicationInfo


def _app(name: str, category: str = "database", **kwargs) -> ApplicationInfo:
    return ApplicationInfo(name=name, category=category, **kwargs)


@pytest.mark.unit
class TestApplicationStore:
    """Tests for ApplicationStore."""

    @pytest.fixture
    def store(self) -> ApplicationStore:
        return ApplicationStore()

    def test_upsert_then_get(self, store: ApplicationStore) -> None:
        app = _app("redis")
        store.upsert(app)
        assert store.get("redis") == app
        assert "redis" in store
        assert len(store) == 1

    def test_upsert_replaces_by_name(self, store: ApplicationStore) -> None:
        store.upsert(_app("redis", sync_status=SyncStatusCode.OUT_OF_SYNC))
        store.upsert(_app("redis", sync_status=SyncStatusCode.SYNCED))
        assert len(store) == 1
        assert store.get("redis").sync_status == SyncStatusCode.SYNCED

    def test_upsert_is_idempotent(self, store: ApplicationStore) -> None:
        app = _app("redis")
        store.upsert(app)
        first = store.snapshot_grouped_by_category()
        store.upsert(app)
        assert store.snapshot_grouped_by_category() == first

    def test_upsert_can_move_category(self, store: ApplicationStore) -> None:
        store.upsert(_app("redis", "database"))
        store.upsert(_app("redis", "secrets"))
        snapshot = store.snapshot_grouped_by_category()
        assert "database" not in snapshot
        assert [a.name for a in snapshot["secrets"]] == ["redis"]

    def test_remove(self, store: ApplicationStore) -> None:
        store.upsert(_app("redis"))
        assert store.remove("redis") is True
        assert store.get("redis") is None
        assert store.snapshot_grouped_by_category() == {}

    def test_remove_unknown_is_noop(self, store: ApplicationStore) -> None:
        store.upsert(_app("redis"))
        assert store.remove("missing") is False
        assert store.names() == ["redis"]

    def test_replace_all(self, store: ApplicationStore) -> None:
        store.upsert(_app("old"))
        store.replace_all([_app("a"), _app("b", "auth")])
        assert sorted(store.names()) == ["a", "b"]
        assert "old" not in store

    def test_snapshot_groups_by_category(self, store: ApplicationStore) -> None:
        store.upsert(_app("pg", "database"))
        store.upsert(_app("redis", "database"))
        store.upsert(_app("keycloak", "auth"))

        snapshot = store.snapshot_grouped_by_category()

        assert set(snapshot) == {"database", "auth"}
        assert {a.name for a in snapshot["database"]} == {"pg", "redis"}

    def test_snapshot_is_independent_copy(self, store: ApplicationStore) -> None:
        store.upsert(_app("pg"))
        snapshot = store.snapshot_grouped_by_category()
        snapshot["database"].clear()
        snapshot["other"] = []
        store.upsert(_app("redis"))

        assert {a.name for a in store.snapshot_grouped_by_category()["database"]} == {
            "pg",
            "redis",
        }
        assert snapshot["database"] == []

    def test_clear(self, store: ApplicationStore) -> None:
        store.upsert(_app("pg"))
        store.clear()
        assert len(store) == 0
