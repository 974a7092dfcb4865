"""Tests for the persistence gateways."""

import json

import pytest

from conftest import FIXED_TODAY, sequential_ids

from lifehub.config import StorageSettings
from lifehub.models import Store
from lifehub.services.storage import (
    InMemoryStoreGateway,
    JsonFileStoreGateway,
    StorageError,
    StorageWriteError,
    snapshot_payload,
)


@pytest.fixture
def settings(tmp_path):
    return StorageSettings(_env_file=None, data_dir=tmp_path / "data", save_retry_attempts=2)


@pytest.fixture
def gateway(settings):
    return JsonFileStoreGateway(settings)


@pytest.fixture
def busy_store(mutator, store):
    """A Store touching every collection."""
    s = mutator.add_transaction(store, "2026-10-01", "expense", "Rent", 812.5, note="Oct")
    s = mutator.add_health_entry(s, "2026-10-20", weight_kg=71.2, mood="😀")
    s = mutator.add_meal(s, "2026-10-20", "Breakfast", "Oats", calories=350)
    s = mutator.add_task(s, "Renew passport", due="2026-12-01", recur="weekly", area="Life")
    s = mutator.add_note(s, "Ask about overtime", pinned=True)
    s = mutator.set_budget(s, "Holiday", 150)
    s = mutator.toggle_habit(s, "swim", 2)
    s = mutator.set_water(s, 2, 7)
    return mutator.set_night_shift_mode(s, False)


class TestSnapshotPayload:

    def test_uses_saved_keys(self, store):
        payload = snapshot_payload(store)
        assert "txns" in payload
        assert "weeklyHabits" in payload
        assert payload["weeklyHabits"]["weekStart"] == "2026-10-19"

    def test_is_json_ready(self, busy_store):
        json.dumps(snapshot_payload(busy_store))


class TestJsonFileStoreGateway:
    """Tests for the JSON file backend."""

    def test_path_from_settings(self, gateway, tmp_path):
        assert gateway.path == tmp_path / "data" / "lifehub.v2.json"

    def test_load_missing_file(self, gateway):
        assert gateway.load() is None

    def test_save_creates_directory(self, gateway, store):
        gateway.save(store)
        assert gateway.path.exists()

    def test_round_trip(self, gateway, busy_store):
        """Test a saved Store comes back unchanged through Store.initial."""
        gateway.save(busy_store)
        restored = Store.initial(
            gateway.load(), FIXED_TODAY, id_factory=sequential_ids("other")
        )
        assert restored == busy_store

    def test_save_replaces_previous(self, gateway, mutator, store):
        gateway.save(store)
        gateway.save(mutator.adjust_emergency_fund_balance(store, 40))
        assert gateway.load()["emergencyFundBalance"] == 40

    def test_no_temp_files_left(self, gateway, store):
        gateway.save(store)
        gateway.save(store)
        assert [p.name for p in gateway.path.parent.iterdir()] == ["lifehub.v2.json"]

    def test_file_is_readable_json(self, gateway, busy_store):
        gateway.save(busy_store)
        text = gateway.path.read_text(encoding="utf-8")
        assert "😀" in text
        assert json.loads(text)["txns"][0]["type"] == "expense"

    def test_corrupt_file_loads_as_nothing(self, gateway, store):
        gateway.path.parent.mkdir(parents=True)
        gateway.path.write_text("{not json", encoding="utf-8")
        assert gateway.load() is None
        assert Store.initial(
            gateway.load(), FIXED_TODAY, id_factory=sequential_ids("book")
        ) == store

    def test_non_object_loads_as_nothing(self, gateway):
        gateway.path.parent.mkdir(parents=True)
        gateway.path.write_text("[1, 2, 3]", encoding="utf-8")
        assert gateway.load() is None

    def test_write_is_retried(self, gateway, store, monkeypatch):
        """Test a transient OS error is retried and the save succeeds."""
        real_write = gateway._write
        calls = []

        def flaky_write(text):
            calls.append(text)
            if len(calls) == 1:
                raise OSError("disk busy")
            real_write(text)

        monkeypatch.setattr(gateway, "_write", flaky_write)
        gateway.save(store)
        assert len(calls) == 2
        assert gateway.load() is not None

    def test_write_failure_raises(self, gateway, store, monkeypatch):
        """Test persistent failures surface as StorageWriteError after every attempt."""
        calls = []

        def broken_write(text):
            calls.append(text)
            raise OSError("read-only file system")

        monkeypatch.setattr(gateway, "_write", broken_write)
        with pytest.raises(StorageWriteError, match="read-only file system") as exc_info:
            gateway.save(store)
        assert len(calls) == 2
        assert isinstance(exc_info.value, StorageError)
        assert isinstance(exc_info.value.__cause__, OSError)


class TestInMemoryStoreGateway:
    """Tests for the in-memory backend."""

    def test_empty(self):
        assert InMemoryStoreGateway().load() is None

    def test_initial_payload(self):
        gateway = InMemoryStoreGateway({"emergencyFundBalance": 10})
        assert gateway.load() == {"emergencyFundBalance": 10}

    def test_load_returns_copies(self):
        gateway = InMemoryStoreGateway({"budgets": {"Rent": 800}})
        gateway.load()["budgets"]["Rent"] = 1
        assert gateway.load()["budgets"]["Rent"] == 800

    def test_save_counts(self, store):
        gateway = InMemoryStoreGateway()
        gateway.save(store)
        gateway.save(store)
        assert gateway.save_count == 2
        assert gateway.load() == snapshot_payload(store)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
