import pytest

from review_backend.errors import ConstraintViolationError, NotFoundError


def _expires_at(db, key):
    with db.connect() as conn:
        return conn.execute("SELECT expires_at FROM session WHERE secret=?", (key,)).fetchone()["expires_at"]


def test_session_valid_until_expiry(db, store, clock):
    t0 = int(clock.now)
    store.store_session("s1", 42, 60)
    assert _expires_at(db, "s1") == t0 + 60

    assert store.get_uid_from_session("s1") == (42, True)
    clock.now = t0 + 59
    assert store.get_uid_from_session("s1") == (42, True)

    clock.now = t0 + 60
    assert store.get_uid_from_session("s1") == (None, False)
    clock.now = t0 + 61
    assert store.get_uid_from_session("s1") == (None, False)

    # expired sessions are not purged or touched by reads
    assert _expires_at(db, "s1") == t0 + 60


def test_default_duration_comes_from_store(db, store, clock):
    store.store_session("s2", 7)
    assert _expires_at(db, "s2") == int(clock.now) + 3600


def test_unknown_session_not_found(store):
    with pytest.raises(NotFoundError):
        store.get_uid_from_session("nope")


def test_duplicate_session_key_rejected(store):
    store.store_session("dup", 1, 60)
    with pytest.raises(ConstraintViolationError):
        store.store_session("dup", 2, 60)
    assert store.get_uid_from_session("dup") == (1, True)


def test_delete_session(store):
    store.store_session("gone", 5, 60)
    store.delete_session("gone")
    with pytest.raises(NotFoundError):
        store.get_uid_from_session("gone")


def test_delete_missing_session_is_noop(store):
    store.delete_session("never-existed")
    store.delete_session("never-existed")
