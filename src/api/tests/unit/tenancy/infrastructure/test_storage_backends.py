"""Unit tests for key/value storage backends."""

import json
from pathlib import Path

import pytest

from tenancy.infrastructure.storage import InMemoryKeyValueBackend, JsonFileKeyValueBackend
from tenancy.ports.persistence import KeyValueBackend, StorageChange


class TestInMemoryKeyValueBackend:
    """Tests for the process-local backend."""

    def test_implements_protocol(self):
        assert isinstance(InMemoryKeyValueBackend(), KeyValueBackend)

    def test_initial_values(self):
        backend = InMemoryKeyValueBackend({"selectedClient": "bunge"})
        assert backend.get("selectedClient") == "bunge"

    def test_set_publishes_change(self):
        backend = InMemoryKeyValueBackend({"selectedClient": "gcpl"})
        changes: list[StorageChange] = []
        backend.subscribe(changes.append)

        backend.set("selectedClient", "bunge", origin="tab-a")

        assert changes == [
            StorageChange(
                key="selectedClient", old_value="gcpl", new_value="bunge", origin="tab-a"
            )
        ]

    def test_remove_missing_key_is_silent(self):
        backend = InMemoryKeyValueBackend()
        changes: list[StorageChange] = []
        backend.subscribe(changes.append)

        backend.remove("selectedClient")

        assert changes == []


class TestJsonFileKeyValueBackend:
    """Tests for the durable JSON file backend."""

    @pytest.fixture
    def path(self, tmp_path: Path) -> Path:
        return tmp_path / "state" / "selection.json"

    def test_implements_protocol(self, path: Path):
        assert isinstance(JsonFileKeyValueBackend(path), KeyValueBackend)

    def test_missing_file_reads_none(self, path: Path):
        assert JsonFileKeyValueBackend(path).get("selectedClient") is None

    def test_set_creates_file(self, path: Path):
        JsonFileKeyValueBackend(path).set("selectedClient", "samsonite")

        assert json.loads(path.read_text()) == {"selectedClient": "samsonite"}

    def test_values_survive_a_new_instance(self, path: Path):
        JsonFileKeyValueBackend(path).set("selectedClient", "bowlers")
        assert JsonFileKeyValueBackend(path).get("selectedClient") == "bowlers"

    def test_set_keeps_other_keys(self, path: Path):
        backend = JsonFileKeyValueBackend(path)
        backend.set("theme", "dark")
        backend.set("selectedClient", "gcpl")

        assert json.loads(path.read_text()) == {"selectedClient": "gcpl", "theme": "dark"}

    def test_no_temporary_files_left_behind(self, path: Path):
        JsonFileKeyValueBackend(path).set("selectedClient", "gcpl")
        assert [p.name for p in path.parent.iterdir()] == ["selection.json"]

    def test_non_object_file_raises_value_error(self, path: Path):
        path.parent.mkdir(parents=True)
        path.write_text("[1, 2]")

        with pytest.raises(ValueError):
            JsonFileKeyValueBackend(path).get("selectedClient")

    def test_invalid_json_raises_value_error(self, path: Path):
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        with pytest.raises(ValueError):
            JsonFileKeyValueBackend(path).get("selectedClient")

    def test_set_publishes_change(self, path: Path):
        backend = JsonFileKeyValueBackend(path)
        changes: list[StorageChange] = []
        backend.subscribe(changes.append)

        backend.set("selectedClient", "bunge", origin="proc-a")

        assert changes == [
            StorageChange(key="selectedClient", old_value=None, new_value="bunge", origin="proc-a")
        ]

    def test_poll_detects_write_from_another_process(self, path: Path):
        mine = JsonFileKeyValueBackend(path)
        theirs = JsonFileKeyValueBackend(path)
        mine.set("selectedClient", "gcpl")
        changes: list[StorageChange] = []
        mine.subscribe(changes.append)

        theirs.set("selectedClient", "samsonite", origin="proc-b")
        detected = mine.poll()

        expected = StorageChange(key="selectedClient", old_value="gcpl", new_value="samsonite")
        assert detected == [expected]
        assert changes == [expected]

    def test_poll_without_changes_is_empty(self, path: Path):
        backend = JsonFileKeyValueBackend(path)
        backend.set("selectedClient", "gcpl")

        assert backend.poll() == []

    def test_first_poll_only_takes_a_snapshot(self, path: Path):
        JsonFileKeyValueBackend(path).set("selectedClient", "gcpl")

        assert JsonFileKeyValueBackend(path).poll() == []
