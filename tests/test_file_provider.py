"""Tests for loading snapshot files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from idle_advisor.providers import SnapshotFileError, load_snapshot

SNAPSHOT = {
    "currency": 120.5,
    "rate": 3.2,
    "buildings": [{"name": "Cursor", "owned": 2, "cost": 17, "unit_rate": 0.1}],
    "upgrades": [],
}


class TestLoadSnapshot:
    """JSON and YAML snapshot files."""

    def test_loads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text(json.dumps(SNAPSHOT))

        assert load_snapshot(path) == SNAPSHOT

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_loads_yaml(self, tmp_path: Path, suffix: str) -> None:
        path = tmp_path / f"state{suffix}"
        path.write_text(yaml.safe_dump(SNAPSHOT))

        assert load_snapshot(str(path)) == SNAPSHOT

    def test_unknown_suffix_parsed_as_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "state.txt"
        path.write_text(json.dumps(SNAPSHOT))

        assert load_snapshot(path) == SNAPSHOT

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotFileError, match="not found"):
            load_snapshot(tmp_path / "missing.json")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotFileError):
            load_snapshot(tmp_path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("{not json")

        with pytest.raises(SnapshotFileError, match="Cannot parse"):
            load_snapshot(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text("currency: [1, 2\n")

        with pytest.raises(SnapshotFileError, match="Cannot parse"):
            load_snapshot(path)

    def test_invalid_utf8_is_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_bytes(b'{"currency": 1, "rate": 1, "buildings": [], "upgrades": ["\xff"]}')

        with pytest.raises(SnapshotFileError, match="Cannot read"):
            load_snapshot(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(SnapshotFileError, match="mapping"):
            load_snapshot(path)
