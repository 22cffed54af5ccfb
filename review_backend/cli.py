#!/usr/bin/env python3
"""
Maintenance commands for the submission store.

  review-db init-db [--db PATH]
  review-db search [--submission-id N] [--submitter-id N] [--db PATH]
"""
from __future__ import annotations

import argparse
import logging
import sys

from .db import open_db
from .errors import DatabaseInitError, StoreError
from .logs import setup_logging
from .models import SubmissionsFilter
from .store import Store

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="review-db", description="Submission store maintenance")
    ap.add_argument("--db", default=None, help="SQLite file (overrides config / REVIEW_DB_PATH)")
    ap.add_argument("--log-level", default=None)
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="open the store and apply schema.sql")

    sp = sub.add_parser("search", help="print extended submissions as JSON lines")
    sp.add_argument("--submission-id", type=int, default=None)
    sp.add_argument("--submitter-id", type=int, default=None)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        db = open_db(args.db)
    except DatabaseInitError as e:
        logger.error("startup aborted: %s", e)
        return 1

    if args.command == "init-db":
        print(f"Database initialized: {db.path}")
        return 0

    store = Store(db)
    try:
        rows = store.search_submissions(
            SubmissionsFilter(submission_id=args.submission_id, submitter_id=args.submitter_id)
        )
    except StoreError as e:
        logger.error("search failed: %s", e)
        return 2
    for r in rows:
        print(r.model_dump_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
