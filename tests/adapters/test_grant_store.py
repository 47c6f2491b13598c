"""Tests for JsonGrantStore persistence."""

import json

from direct_calling.adapters.storage.grant_store import JsonGrantStore


class TestJsonGrantStore:
    def test_default_not_granted(self, tmp_path):
        store = JsonGrantStore(storage_dir=str(tmp_path))
        assert store.is_granted("CALL_PHONE") is False

    def test_grant_persists_across_instances(self, tmp_path):
        JsonGrantStore(storage_dir=str(tmp_path)).set_granted("CALL_PHONE", True)
        assert JsonGrantStore(storage_dir=str(tmp_path)).is_granted("CALL_PHONE") is True

    def test_revoke(self, tmp_path):
        store = JsonGrantStore(storage_dir=str(tmp_path))
        store.set_granted("CALL_PHONE", True)
        store.set_granted("CALL_PHONE", False)
        assert store.is_granted("CALL_PHONE") is False

    def test_file_format(self, tmp_path):
        store = JsonGrantStore(storage_dir=str(tmp_path))
        store.set_granted("CALL_PHONE", True)
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["CALL_PHONE"]["granted"] is True
        assert data["CALL_PHONE"]["updated_at"]

    def test_corrupt_file_reads_as_not_granted(self, tmp_path):
        store = JsonGrantStore(storage_dir=str(tmp_path))
        store.path.write_text("{not json", encoding="utf-8")
        assert store.is_granted("CALL_PHONE") is False
        store.set_granted("CALL_PHONE", True)
        assert store.is_granted("CALL_PHONE") is True
