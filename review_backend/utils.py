from __future__ import annotations

import datetime as dt
from typing import Optional

from .constants import AVATAR_BASE_URL


def format_avatar_url(uid: int, avatar: str) -> str:
    return f"{AVATAR_BASE_URL}/{uid}/{avatar}"


def to_unix(ts: dt.datetime) -> int:
    """Naive datetimes are taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return int(ts.timestamp())


def from_unix(sec: Optional[int]) -> Optional[dt.datetime]:
    if sec is None:
        return None
    return dt.datetime.fromtimestamp(int(sec), tz=dt.timezone.utc)


def split_lines(message: Optional[str]) -> list[str]:
    if not message:
        return []
    return message.split("\n")
