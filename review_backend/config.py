from __future__ import annotations

# review_backend/config.py
import os
from typing import Any

import yaml

# Resolution order for every key:
# 1) environment variable (when one exists for the key)
# 2) config.yaml at the project root
# 3) DEFAULTS below
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.yaml")
SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schema.sql")

DEFAULTS: dict[str, Any] = {
    "db_path": os.path.join(PROJECT_ROOT, "submissions.db"),
    "test_db_path": None,
    "log_level": "INFO",
    "busy_timeout_ms": 5000,
    "session_duration_seconds": 30 * 24 * 3600,
}

_ENV_OVERRIDES = {
    "db_path": "REVIEW_DB_PATH",
    "log_level": "REVIEW_LOG_LEVEL",
}

_INT_KEYS = ("busy_timeout_ms", "session_duration_seconds")


def _as_non_negative_int(v: Any) -> int | None:
    # bad values fall back to the default rather than breaking startup
    if isinstance(v, bool):
        return None
    try:
        n = int(v)
    except (TypeError, ValueError):
        return None
    return n if n >= 0 else None


def _read_config_yaml(path: str = CONFIG_PATH) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in DEFAULTS:
        v = cfg.get(k)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                continue
        if v is None:
            continue
        if k in _INT_KEYS:
            v = _as_non_negative_int(v)
            if v is None:
                continue
        out[k] = v
    return out


def is_test_env() -> bool:
    return os.environ.get("APP_ENV") == "test" or os.environ.get("PYTEST_CURRENT_TEST") is not None


def get_config(path: str = CONFIG_PATH) -> dict[str, Any]:
    """Merged configuration: defaults, then config.yaml, then environment."""
    cfg = dict(DEFAULTS)
    cfg.update(_read_config_yaml(path))
    for key, env in _ENV_OVERRIDES.items():
        val = os.environ.get(env)
        if val:
            cfg[key] = val
    cfg["busy_timeout_ms"] = int(cfg["busy_timeout_ms"])
    cfg["session_duration_seconds"] = int(cfg["session_duration_seconds"])
    cfg["log_level"] = str(cfg["log_level"]).upper()
    return cfg
