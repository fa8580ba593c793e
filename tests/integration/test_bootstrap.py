"""Integration test: empty directory -> load_config -> open_store on the configured path."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from canvasd.config import load_config
from canvasd.storage import open_store


def test_first_run_materializes_config_and_database(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    config = load_config("cfg/app.json")

    cfg_file = tmp_path / "cfg" / "app.json"
    assert cfg_file.is_file()
    text = cfg_file.read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    assert json.loads(text) == {
        "network": {"interface": "0.0.0.0", "port": 3250},
        "database_path": "database.db",
    }

    with open_store(config.database_path) as store:
        assert (tmp_path / "database.db").is_file()
        assert store.table_columns("users") == ["username", "password_hash", "salt", "permissions"]

    # Second startup: same config, schema untouched
    assert load_config("cfg/app.json") == config
    assert cfg_file.read_text(encoding="utf-8") == text
    with open_store(config.database_path) as store:
        assert store.tables() == ["users"]


def test_edited_config_points_store_elsewhere(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()
    Path("config.json").write_text(
        """{
  // moved the database into data/
  "network": { "interface": "localhost", "port": 8443 },
  "database_path": "data/canvas.db",
}
""",
        encoding="utf-8",
    )
    config = load_config("config.json")
    with open_store(config.database_path) as store:
        assert store.path == Path("data/canvas.db")
    assert (tmp_path / "data" / "canvas.db").is_file()
    assert not (tmp_path / "database.db").exists()
