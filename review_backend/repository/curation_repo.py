from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Mapping, Sequence


def insert_curation_meta(
    conn: Connection, submission_file_id: int, fields: Sequence[str], values: Mapping[str, Any]
) -> int:
    cols = ", ".join(["fk_submission_file_id", *fields])
    marks = ",".join(["?"] * (len(fields) + 1))
    cur = conn.execute(
        f"INSERT INTO curation_meta({cols}) VALUES({marks})",
        (int(submission_file_id), *[values.get(f) for f in fields]),
    )
    return int(cur.lastrowid)


def get_by_submission_file_id(conn: Connection, submission_file_id: int, fields: Sequence[str]):
    cols = ", ".join(f"curation_meta.{f}" for f in fields)
    return conn.execute(
        f"SELECT submission_file.fk_submission_id AS submission_id, {cols} "
        "FROM curation_meta JOIN submission_file ON curation_meta.fk_submission_file_id = submission_file.id "
        "WHERE curation_meta.fk_submission_file_id=?",
        (int(submission_file_id),),
    ).fetchone()
