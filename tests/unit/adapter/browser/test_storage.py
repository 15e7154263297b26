"""Unit tests for client-local stores."""

import json
import os
import stat

import pytest

from invoicer.adapter.browser import InMemoryStore, JsonFileStore


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    def test_set_get_delete(self):
        store = InMemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"

        store.delete("k")
        assert store.get("k") is None
        # Deleting again is a no-op
        store.delete("k")

    def test_clear(self):
        store = InMemoryStore()
        store.set("a", "1")
        store.set("b", "2")
        store.clear()
        assert store.get("a") is None
        assert store.get("b") is None


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    @pytest.fixture
    def path(self, tmp_path):
        return tmp_path / "nested" / "storage.json"

    def test_values_survive_reopen(self, path):
        store = JsonFileStore(path)
        store.set("access_token", "tok")
        store.set("user", '{"id": "u"}')

        reopened = JsonFileStore(path)
        assert reopened.get("access_token") == "tok"
        assert reopened.get("user") == '{"id": "u"}'

    def test_delete_is_persisted(self, path):
        store = JsonFileStore(path)
        store.set("access_token", "tok")
        store.delete("access_token")

        assert JsonFileStore(path).get("access_token") is None
        assert json.loads(path.read_text()) == {}

    def test_file_is_owner_only(self, path):
        store = JsonFileStore(path)
        store.set("access_token", "tok")

        if os.name == "posix":
            mode = stat.S_IMODE(path.stat().st_mode)
            assert mode == 0o600
        assert not path.with_name(path.name + ".tmp").exists()

    def test_unreadable_file_starts_empty(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        store = JsonFileStore(path)
        assert store.get("access_token") is None

        # The next write replaces the broken file
        store.set("access_token", "tok")
        assert json.loads(path.read_text()) == {"access_token": "tok"}

    def test_non_object_file_starts_empty(self, path):
        path.parent.mkdir(parents=True)
        path.write_text('["a", "b"]')

        assert JsonFileStore(path).get("a") is None
