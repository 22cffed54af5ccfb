from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

from ..constants import ACTION_COMMENT


def insert_submission(conn: Connection) -> int:
    cur = conn.execute("INSERT INTO submission DEFAULT VALUES")
    return int(cur.lastrowid)


def insert_submission_file(
    conn: Connection,
    uploader_id: int,
    submission_id: int,
    original_filename: str,
    current_filename: str,
    size: int,
    uploaded_at: int,
) -> int:
    cur = conn.execute(
        "INSERT INTO submission_file(fk_uploader_id, fk_submission_id, original_filename, current_filename, size, uploaded_at) "
        "VALUES(?,?,?,?,?,?)",
        (int(uploader_id), int(submission_id), original_filename, current_filename, int(size), int(uploaded_at)),
    )
    return int(cur.lastrowid)


def search_submissions(
    conn: Connection,
    validator_id: int,
    submission_id: Optional[int] = None,
    submitter_id: Optional[int] = None,
):
    """
    One row per submission, most recently updated first.

    - oldest / newest: the revisions at MIN / MAX(uploaded_at); same-second
      ties go to the lowest / highest file id
    - bot_comment: an action posted by the validator; with several of them
      SQLite returns one arbitrarily
    - latest_action: newest non-"comment" action by anyone but the validator;
      the bare `action` column is taken from the MAX(created_at) row
    - submissions without files come through with NULL file columns
    """
    sql = """
    SELECT submission.id AS submission_id,
           uploader.id AS uploader_id, uploader.username AS uploader_username, uploader.avatar AS uploader_avatar,
           updater.id AS updater_id, updater.username AS updater_username, updater.avatar AS updater_avatar,
           newest.id AS submission_file_id, newest.original_filename, newest.current_filename, newest.size,
           bounds.uploaded_at, bounds.updated_at,
           meta.title, meta.alternate_titles, meta.launch_command,
           bot_comment.action AS bot_action,
           latest_action.action AS latest_action
    FROM submission
    LEFT JOIN
        (SELECT fk_submission_id AS submission_id,
                MIN(uploaded_at) AS uploaded_at, MAX(uploaded_at) AS updated_at
         FROM submission_file
         GROUP BY fk_submission_id)
        AS bounds ON bounds.submission_id = submission.id
    LEFT JOIN submission_file oldest ON oldest.id =
        (SELECT MIN(f.id) FROM submission_file f
         WHERE f.fk_submission_id = submission.id AND f.uploaded_at = bounds.uploaded_at)
    LEFT JOIN submission_file newest ON newest.id =
        (SELECT MAX(f.id) FROM submission_file f
         WHERE f.fk_submission_id = submission.id AND f.uploaded_at = bounds.updated_at)
    LEFT JOIN discord_user uploader ON uploader.id = oldest.fk_uploader_id
    LEFT JOIN discord_user updater ON updater.id = newest.fk_uploader_id
    LEFT JOIN curation_meta meta ON meta.fk_submission_file_id = newest.id
    LEFT JOIN
        (SELECT comment.fk_submission_id AS submission_id, "action".name AS action
         FROM comment JOIN "action" ON "action".id = comment.fk_action_id
         WHERE comment.fk_author_id = ?
         GROUP BY comment.fk_submission_id)
        AS bot_comment ON bot_comment.submission_id = submission.id
    LEFT JOIN
        (SELECT comment.fk_submission_id AS submission_id, MAX(comment.created_at) AS created_at,
                "action".name AS action
         FROM comment JOIN "action" ON "action".id = comment.fk_action_id
         WHERE "action".name != ? AND comment.fk_author_id != ?
         GROUP BY comment.fk_submission_id)
        AS latest_action ON latest_action.submission_id = submission.id
    """
    params: list = [int(validator_id), ACTION_COMMENT, int(validator_id)]

    where = []
    if submission_id is not None:
        where.append("submission.id = ?")
        params.append(int(submission_id))
    if submitter_id is not None:
        where.append("uploader.id = ?")
        params.append(int(submitter_id))
    if where:
        sql += " WHERE " + " AND ".join(where)

    sql += " GROUP BY submission.id ORDER BY bounds.updated_at DESC, submission.id DESC"
    return conn.execute(sql, params).fetchall()
