from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def insert_comment(
    conn: Connection,
    author_id: int,
    submission_id: int,
    message: Optional[str],
    action: str,
    created_at: int,
) -> int:
    # unknown action name -> subquery yields NULL -> NOT NULL constraint fails
    cur = conn.execute(
        'INSERT INTO comment(fk_author_id, fk_submission_id, message, fk_action_id, created_at) '
        'VALUES(?, ?, ?, (SELECT id FROM "action" WHERE name=?), ?)',
        (int(author_id), int(submission_id), message, action, int(created_at)),
    )
    return int(cur.lastrowid)


def list_extended_for_submission(conn: Connection, submission_id: int):
    return conn.execute(
        'SELECT discord_user.id AS author_id, discord_user.username, discord_user.avatar, '
        'comment.message, "action".name AS action, comment.created_at '
        'FROM comment '
        'JOIN discord_user ON discord_user.id = comment.fk_author_id '
        'JOIN "action" ON "action".id = comment.fk_action_id '
        'WHERE comment.fk_submission_id=? '
        'ORDER BY comment.created_at ASC, comment.id ASC',
        (int(submission_id),),
    ).fetchall()
