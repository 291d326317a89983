"""
Tests for persisting layouts to the JSON key-value file.
"""

import json
from unittest.mock import patch

import pytest

from models.errors import StorageError
from models.part import Component, LayoutState, Sheet
from storage.store import LayoutStore


class TestLayoutStore:
    """Save, load and clear of the named entry."""

    def test_load_without_file(self, store):
        assert store.load() is None

    def test_round_trip(self, store, sample_state):
        store.save(sample_state)
        loaded = store.load()
        assert loaded == sample_state
        assert loaded.tolerance == 2.5
        assert loaded.sheets[1].length == 2500.5

    def test_round_trip_awkward_floats(self, store):
        state = LayoutState(sheets=(Sheet(0.1 + 0.2, 1 / 3, 1e-9),),
                            components=(Component(123456789.123, 2 ** -20),),
                            tolerance=0.1)
        store.save(state)
        assert store.load() == state

    def test_saved_under_key(self, store, sample_state):
        store.save(sample_state)
        with open(store.path, encoding="utf-8") as f:
            data = json.load(f)
        assert list(data) == ["knapsackData"]
        assert data["knapsackData"]["tolerance"] == 2.5

    def test_other_keys_preserved(self, tmp_path, sample_state):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"other": {"keep": True}}), encoding="utf-8")
        store = LayoutStore(str(path))
        store.save(sample_state)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["other"] == {"keep": True}

    def test_values_stored_as_text(self, tmp_path):
        path = tmp_path / "state.json"
        entry = {
            "sheets": [{"length": "1000", "width": "500", "thickness": "18"}],
            "components": [{"length": "200.5", "width": "100"}],
            "tolerance": "3"
        }
        path.write_text(json.dumps({"knapsackData": json.dumps(entry)}), encoding="utf-8")
        state = LayoutStore(str(path)).load()
        assert state == LayoutState(sheets=(Sheet(1000, 500, 18),),
                                    components=(Component(200.5, 100),),
                                    tolerance=3.0)

    def test_missing_thickness_and_tolerance_default(self, tmp_path):
        path = tmp_path / "state.json"
        entry = {"sheets": [{"length": 10, "width": 10}], "components": []}
        path.write_text(json.dumps({"knapsackData": entry}), encoding="utf-8")
        state = LayoutStore(str(path)).load()
        assert state.sheets[0].thickness == 0.0
        assert state.tolerance == 0.0

    def test_creates_parent_directory(self, tmp_path, sample_state):
        store = LayoutStore(str(tmp_path / "nested" / "dir" / "state.json"))
        store.save(sample_state)
        assert store.load() == sample_state

    def test_clear(self, store, sample_state):
        store.save(sample_state)
        store.clear()
        assert store.load() is None

    def test_custom_key(self, tmp_path, sample_state):
        path = str(tmp_path / "state.json")
        LayoutStore(path, key="a").save(sample_state)
        assert LayoutStore(path, key="b").load() is None
        assert LayoutStore(path, key="a").load() == sample_state

    @pytest.mark.parametrize("content", [
        "not json",
        json.dumps([1, 2, 3]),
        json.dumps({"knapsackData": "{broken"}),
        json.dumps({"knapsackData": {"sheets": [{"length": "abc", "width": 1}]}}),
        json.dumps({"knapsackData": {"sheets": [{"width": 1}]}}),
        json.dumps({"knapsackData": {"sheets": "nope"}}),
    ])
    def test_corrupt_state(self, tmp_path, content):
        path = tmp_path / "state.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(StorageError):
            LayoutStore(str(path)).load()

    def test_save_over_corrupt_file(self, tmp_path, sample_state):
        path = tmp_path / "state.json"
        path.write_text("not json", encoding="utf-8")
        store = LayoutStore(str(path))
        with pytest.raises(StorageError):
            store.load()
        store.save(sample_state)
        assert store.load() == sample_state

    def test_failed_write_leaves_no_temp_file(self, tmp_path, sample_state):
        store = LayoutStore(str(tmp_path / "state.json"))
        store.save(sample_state)
        with patch("storage.store.json.dump", side_effect=TypeError("not serializable")):
            with pytest.raises(TypeError):
                store.save(sample_state)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["state.json"]
        assert store.load() == sample_state

    def test_blank_rows_from_older_saves_skipped(self, tmp_path):
        path = tmp_path / "state.json"
        entry = {
            "sheets": [{"length": "1000", "width": "500", "thickness": "18"},
                       {"length": "", "width": "", "thickness": ""}],
            "components": [{"length": "", "width": ""}],
            "tolerance": ""
        }
        path.write_text(json.dumps({"knapsackData": json.dumps(entry)}), encoding="utf-8")
        state = LayoutStore(str(path)).load()
        assert state == LayoutState(sheets=(Sheet(1000, 500, 18),), components=(), tolerance=0.0)

    def test_partly_filled_row_still_rejected(self, tmp_path):
        path = tmp_path / "state.json"
        entry = {"sheets": [], "components": [{"length": "10", "width": ""}]}
        path.write_text(json.dumps({"knapsackData": entry}), encoding="utf-8")
        with pytest.raises(StorageError):
            LayoutStore(str(path)).load()
