from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def upsert_discord_user(
    conn: Connection,
    uid: int,
    username: str,
    avatar: Optional[str],
    discriminator: Optional[str],
    public_flags: Optional[int],
    flags: Optional[int],
    locale: Optional[str],
    mfa_enabled: Optional[bool],
) -> None:
    # INSERT OR REPLACE rewrites the whole row: columns not given end up NULL
    conn.execute(
        "INSERT OR REPLACE INTO discord_user(id, username, avatar, discriminator, public_flags, flags, locale, mfa_enabled) "
        "VALUES(?,?,?,?,?,?,?,?)",
        (
            int(uid), username, avatar, discriminator, public_flags, flags, locale,
            None if mfa_enabled is None else (1 if mfa_enabled else 0),
        ),
    )


def get_discord_user(conn: Connection, uid: int):
    return conn.execute(
        "SELECT id, username, avatar, discriminator, public_flags, flags, locale, mfa_enabled "
        "FROM discord_user WHERE id=?",
        (int(uid),),
    ).fetchone()


def upsert_authorization(conn: Connection, uid: int, authorized: bool) -> None:
    conn.execute(
        "INSERT OR REPLACE INTO authorization(fk_uid, authorized) VALUES(?,?)",
        (int(uid), 1 if authorized else 0),
    )


def get_authorization(conn: Connection, uid: int):
    return conn.execute(
        "SELECT authorized FROM authorization WHERE fk_uid=?", (int(uid),)
    ).fetchone()
