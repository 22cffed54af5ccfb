from __future__ import annotations

import logging

from .config import get_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging; level falls back to config `log_level`."""
    lvl = (level or get_config()["log_level"]).upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format=LOG_FORMAT)
