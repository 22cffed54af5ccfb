import pytest

from review_backend import db as db_module
from review_backend.config import DEFAULTS, get_config
from review_backend.db import get_db_path
from review_backend.errors import DatabaseInitError


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("REVIEW_DB_PATH", raising=False)
    monkeypatch.delenv("REVIEW_LOG_LEVEL", raising=False)
    cfg = get_config(str(tmp_path / "missing.yaml"))
    assert cfg["db_path"] == DEFAULTS["db_path"]
    assert cfg["busy_timeout_ms"] == 5000
    assert cfg["log_level"] == "INFO"


def test_yaml_values_applied(tmp_path, monkeypatch):
    monkeypatch.delenv("REVIEW_DB_PATH", raising=False)
    monkeypatch.delenv("REVIEW_LOG_LEVEL", raising=False)
    p = tmp_path / "config.yaml"
    p.write_text("db_path: /srv/review.db\nlog_level: debug\nbusy_timeout_ms: 250\n", encoding="utf-8")
    cfg = get_config(str(p))
    assert cfg["db_path"] == "/srv/review.db"
    assert cfg["log_level"] == "DEBUG"
    assert cfg["busy_timeout_ms"] == 250


def test_environment_beats_yaml(tmp_path, monkeypatch):
    p = tmp_path / "config.yaml"
    p.write_text("db_path: /srv/review.db\nlog_level: info\n", encoding="utf-8")
    monkeypatch.setenv("REVIEW_DB_PATH", "/tmp/env.db")
    monkeypatch.setenv("REVIEW_LOG_LEVEL", "warning")
    cfg = get_config(str(p))
    assert cfg["db_path"] == "/tmp/env.db"
    assert cfg["log_level"] == "WARNING"


def test_broken_yaml_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("REVIEW_DB_PATH", raising=False)
    p = tmp_path / "config.yaml"
    p.write_text("db_path: [unclosed\n", encoding="utf-8")
    assert get_config(str(p))["db_path"] == DEFAULTS["db_path"]


def test_explicit_db_path_wins(tmp_path):
    target = tmp_path / "nested" / "explicit.db"
    assert get_db_path(str(target)) == str(target)
    assert target.parent.is_dir()


def test_bad_numeric_yaml_values_fall_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("REVIEW_DB_PATH", raising=False)
    p = tmp_path / "config.yaml"
    p.write_text("busy_timeout_ms: fast\nsession_duration_seconds: -5\nlog_level: warning\n", encoding="utf-8")
    cfg = get_config(str(p))
    assert cfg["busy_timeout_ms"] == DEFAULTS["busy_timeout_ms"]
    assert cfg["session_duration_seconds"] == DEFAULTS["session_duration_seconds"]
    assert cfg["log_level"] == "WARNING"


def test_open_db_reports_config_errors_as_init_errors(tmp_path, monkeypatch):
    def broken_config():
        raise ValueError("invalid literal for int() with base 10: 'fast'")

    monkeypatch.setattr(db_module, "get_config", broken_config)
    with pytest.raises(DatabaseInitError) as ei:
        db_module.open_db(str(tmp_path / "x.db"))
    assert isinstance(ei.value.__cause__, ValueError)
