import datetime as dt
import json

from review_backend.cli import main
from review_backend.models import SubmissionFile


def test_init_db(tmp_db_path, capsys):
    assert main(["--db", tmp_db_path, "init-db"]) == 0
    assert tmp_db_path in capsys.readouterr().out


def test_init_db_fails_on_unusable_path(tmp_path):
    assert main(["--db", str(tmp_path), "init-db"]) == 1


def test_search_prints_json_lines(db, store, users, tmp_db_path, capsys):
    with db.transaction() as tx:
        sid = store.store_submission(tx)
        store.store_submission_file(tx, SubmissionFile(
            submitter_id=1, submission_id=sid, original_filename="a.zip", current_filename="b.zip",
            size=1, uploaded_at=dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc),
        ))
    capsys.readouterr()

    assert main(["--db", tmp_db_path, "search", "--submitter-id", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    row = json.loads(lines[0])
    assert row["submission_id"] == sid
    assert row["submitter_username"] == "alice"
