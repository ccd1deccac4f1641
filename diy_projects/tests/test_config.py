from __future__ import annotations

import os

from diy_projects import db
from diy_projects.config import DEFAULTS, read_config


def test_read_config_missing_file_gives_defaults(tmp_path):
    assert read_config(str(tmp_path / "nope.yaml")) == DEFAULTS


def test_read_config_overrides_and_ignores_blanks(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: ' data/p.db '\ntest_db_path: ''\nlog_level: DEBUG\nunknown: 1\n", encoding="utf-8")
    out = read_config(str(cfg))
    assert out["db_path"] == "data/p.db"
    assert out["test_db_path"] == DEFAULTS["test_db_path"]
    assert out["log_level"] == "DEBUG"
    assert "unknown" not in out


def test_env_path_wins(tmp_db_path):
    assert db.get_db_path() == tmp_db_path


def test_test_db_path_used_under_pytest(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    target = tmp_path / "nested" / "t.db"
    cfg.write_text(f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {target}\n", encoding="utf-8")
    monkeypatch.setenv("DIY_PROJECTS_CONFIG", str(cfg))
    monkeypatch.delenv("DIY_PROJECTS_DB_PATH")
    assert db.get_db_path() == str(target)
    assert os.path.isdir(target.parent)
