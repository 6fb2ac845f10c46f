"""Tests for the update history stores."""

import json

from storage.update_store import InMemoryUpdateStore, JsonUpdateStore
from versioning.models import UpdateRecord


class TestInMemoryUpdateStore:
    """Test upsert-by-package semantics."""

    def test_upsert_replaces_by_package(self):
        store = InMemoryUpdateStore()
        store.upsert(UpdateRecord("vendor/a", "1.0.0", "1.1.0"))
        store.upsert(UpdateRecord("vendor/a", "1.0.0", "1.2.0"))

        assert len(store.all()) == 1
        assert store.get("vendor/a").available == "1.2.0"

    def test_checked_at_is_stamped(self):
        record = InMemoryUpdateStore().upsert(UpdateRecord("vendor/a", "1.0.0", "1.1.0"))
        assert record.checked_at is not None
        assert record.checked_at.endswith("Z")

    def test_existing_timestamp_kept(self):
        record = UpdateRecord("vendor/a", "1.0.0", "1.1.0", checked_at="2024-01-01T00:00:00Z")
        assert InMemoryUpdateStore().upsert(record).checked_at == "2024-01-01T00:00:00Z"

    def test_get_unknown(self):
        assert InMemoryUpdateStore().get("vendor/none") is None


class TestJsonUpdateStore:
    """Test the file-backed store."""

    def test_writes_on_upsert(self, tmp_path):
        path = tmp_path / "history" / "updates.json"
        store = JsonUpdateStore(str(path))
        store.upsert(UpdateRecord("vendor/a", "1.0.0", "1.1.0"))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data) == 1
        assert data[0]["package"] == "vendor/a"
        assert data[0]["available"] == "1.1.0"

    def test_reload_and_replace(self, tmp_path):
        path = tmp_path / "updates.json"
        JsonUpdateStore(str(path)).upsert(UpdateRecord("vendor/a", "1.0.0", "1.1.0"))
        JsonUpdateStore(str(path)).upsert(UpdateRecord("vendor/b", "2.0.0", "2.0.1"))

        store = JsonUpdateStore(str(path))
        store.upsert(UpdateRecord("vendor/a", "1.0.0", "1.2.0"))

        reloaded = JsonUpdateStore(str(path))
        assert sorted(r.package for r in reloaded.all()) == ["vendor/a", "vendor/b"]
        assert reloaded.get("vendor/a").available == "1.2.0"

    def test_corrupt_file_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "updates.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonUpdateStore(str(path))

        assert store.all() == []
        assert "Couldn't read update history" in caplog.text

    def test_non_list_file_is_ignored(self, tmp_path):
        path = tmp_path / "updates.json"
        path.write_text('{"package": "vendor/a"}', encoding="utf-8")
        assert JsonUpdateStore(str(path)).all() == []
