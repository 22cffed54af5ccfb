import os
import sqlite3
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from review_backend.constants import VALIDATOR_ID
from review_backend.db import open_db
from review_backend.models import DiscordUser
from review_backend.store import Store


class FakeClock:
    def __init__(self, now: float = 1_700_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "review_test.db"
    os.environ["REVIEW_DB_PATH"] = str(path)
    return str(path)


@pytest.fixture(scope="session")
def db(tmp_db_path):
    return open_db(tmp_db_path)


@pytest.fixture(autouse=True)
def _clean_db(db, tmp_db_path):
    # Safety: only ever wipe the temp DB
    assert db.path == tmp_db_path, "Refusing to clean non-temp DB"
    tables = ["comment", "curation_meta", "submission_file", "submission", "authorization", "session"]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.execute("DELETE FROM discord_user WHERE id != ?", (VALIDATOR_ID,))
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(db, clock):
    return Store(db, clock=clock, session_duration_seconds=3600)


@pytest.fixture()
def users(store):
    """Three plain users: alice (1), bob (2), carol (3)."""
    out = {}
    for uid, name in ((1, "alice"), (2, "bob"), (3, "carol")):
        u = DiscordUser(id=uid, username=name, avatar=f"{name}hash", discriminator="0001",
                        public_flags=0, flags=0, locale="en-US", mfa_enabled=False)
        store.store_discord_user(u)
        out[name] = u
    return out
