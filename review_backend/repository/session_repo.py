from __future__ import annotations

from sqlite3 import Connection


def insert_session(conn: Connection, secret: str, uid: int, expires_at: int) -> None:
    conn.execute(
        "INSERT INTO session(secret, uid, expires_at) VALUES(?,?,?)",
        (secret, int(uid), int(expires_at)),
    )


def delete_session(conn: Connection, secret: str) -> int:
    cur = conn.execute("DELETE FROM session WHERE secret=?", (secret,))
    return cur.rowcount


def get_session(conn: Connection, secret: str):
    return conn.execute(
        "SELECT uid, expires_at FROM session WHERE secret=?", (secret,)
    ).fetchone()
