"""
Store: typed facade over the repositories.

Reads check out their own connection from the Database handle. Writes that
must be atomic with other writes take the caller's transaction connection
(`tx`, from `Database.transaction()`); the Store never commits or rolls back.
"""
from __future__ import annotations

import logging
import time
from sqlite3 import Connection
from typing import Callable, List, Optional, Tuple

from .config import get_config
from .constants import VALIDATOR_ID
from .db import Database
from .errors import NotFoundError, translate_errors
from .models import (
    CURATION_META_FIELDS,
    Comment,
    CurationMeta,
    DiscordUser,
    ExtendedComment,
    ExtendedSubmission,
    SubmissionFile,
    SubmissionsFilter,
)
from .repository import comment_repo, curation_repo, session_repo, submission_repo, user_repo
from .utils import format_avatar_url, from_unix, split_lines, to_unix

logger = logging.getLogger(__name__)

AvatarFormatter = Callable[[int, str], str]


class Store:
    def __init__(
        self,
        db: Database,
        avatar_formatter: AvatarFormatter = format_avatar_url,
        clock: Callable[[], float] = time.time,
        validator_id: int = VALIDATOR_ID,
        session_duration_seconds: int | None = None,
    ):
        self.db = db
        self.avatar_formatter = avatar_formatter
        self.clock = clock
        self.validator_id = validator_id
        if session_duration_seconds is None:
            session_duration_seconds = get_config()["session_duration_seconds"]
        self.session_duration_seconds = session_duration_seconds

    def _avatar_url(self, uid: Optional[int], avatar: Optional[str]) -> Optional[str]:
        if uid is None or avatar is None:
            return None
        return self.avatar_formatter(uid, avatar)

    # ---- sessions ----

    def store_session(self, key: str, uid: int, duration_seconds: int | None = None) -> None:
        if duration_seconds is None:
            duration_seconds = self.session_duration_seconds
        expires_at = int(self.clock() + duration_seconds)
        with translate_errors("store session"), self.db.connect() as conn:
            session_repo.insert_session(conn, key, uid, expires_at)
        logger.debug("session stored for uid=%s, expires_at=%s", uid, expires_at)

    def delete_session(self, secret: str) -> None:
        with translate_errors("delete session"), self.db.connect() as conn:
            session_repo.delete_session(conn, secret)

    def get_uid_from_session(self, key: str) -> Tuple[Optional[int], bool]:
        """
        (uid, True) for a live session, (None, False) once expired.
        Expired rows are left in place.
        """
        with translate_errors("get session"), self.db.connect() as conn:
            row = session_repo.get_session(conn, key)
        if row is None:
            raise NotFoundError("session not found")
        if row["expires_at"] <= int(self.clock()):
            return None, False
        return int(row["uid"]), True

    # ---- discord users ----

    def store_discord_user(self, user: DiscordUser) -> None:
        with translate_errors("store discord user"), self.db.connect() as conn:
            user_repo.upsert_discord_user(
                conn, user.id, user.username, user.avatar, user.discriminator,
                user.public_flags, user.flags, user.locale, user.mfa_enabled,
            )
        logger.debug("discord user %s stored", user.id)

    def get_discord_user(self, uid: int) -> DiscordUser:
        with translate_errors("get discord user"), self.db.connect() as conn:
            row = user_repo.get_discord_user(conn, uid)
        if row is None:
            raise NotFoundError(f"discord user {uid} not found")
        d = dict(row)
        if d["mfa_enabled"] is not None:
            d["mfa_enabled"] = bool(d["mfa_enabled"])
        return DiscordUser(**d)

    def store_discord_user_authorization(self, uid: int, is_authorized: bool) -> None:
        with translate_errors("store authorization"), self.db.connect() as conn:
            user_repo.upsert_authorization(conn, uid, is_authorized)
        logger.debug("authorization for %s set to %s", uid, is_authorized)

    def is_discord_user_authorized(self, uid: int) -> bool:
        with translate_errors("get authorization"), self.db.connect() as conn:
            row = user_repo.get_authorization(conn, uid)
        if row is None:
            raise NotFoundError(f"no authorization record for user {uid}")
        return row["authorized"] == 1

    # ---- submissions ----

    def store_submission(self, tx: Connection) -> int:
        with translate_errors("store submission"):
            sid = submission_repo.insert_submission(tx)
        logger.debug("submission %s created", sid)
        return sid

    def store_submission_file(self, tx: Connection, file: SubmissionFile) -> int:
        with translate_errors("store submission file"):
            fid = submission_repo.insert_submission_file(
                tx, file.submitter_id, file.submission_id, file.original_filename,
                file.current_filename, file.size, to_unix(file.uploaded_at),
            )
        logger.debug("submission file %s stored for submission %s", fid, file.submission_id)
        return fid

    def search_submissions(self, filter: Optional[SubmissionsFilter] = None) -> List[ExtendedSubmission]:
        f = filter or SubmissionsFilter()
        with translate_errors("search submissions"), self.db.connect() as conn:
            rows = submission_repo.search_submissions(
                conn, self.validator_id, submission_id=f.submission_id, submitter_id=f.submitter_id,
            )

        out: List[ExtendedSubmission] = []
        for r in rows:
            out.append(ExtendedSubmission(
                submission_id=r["submission_id"],
                submitter_id=r["uploader_id"],
                submitter_username=r["uploader_username"],
                submitter_avatar_url=self._avatar_url(r["uploader_id"], r["uploader_avatar"]),
                updater_id=r["updater_id"],
                updater_username=r["updater_username"],
                updater_avatar_url=self._avatar_url(r["updater_id"], r["updater_avatar"]),
                file_id=r["submission_file_id"],
                original_filename=r["original_filename"],
                current_filename=r["current_filename"],
                size=r["size"],
                uploaded_at=from_unix(r["uploaded_at"]),
                updated_at=from_unix(r["updated_at"]),
                curation_title=r["title"],
                curation_alternate_titles=r["alternate_titles"],
                curation_launch_command=r["launch_command"],
                bot_action=r["bot_action"],
                latest_action=r["latest_action"],
            ))
        return out

    # ---- curation meta ----

    def store_curation_meta(self, tx: Connection, meta: CurationMeta) -> None:
        with translate_errors("store curation meta"):
            curation_repo.insert_curation_meta(
                tx, meta.submission_file_id, CURATION_META_FIELDS, meta.model_dump(),
            )
        logger.debug("curation meta stored for submission file %s", meta.submission_file_id)

    def get_curation_meta_by_submission_file_id(self, sfid: int) -> CurationMeta:
        with translate_errors("get curation meta"), self.db.connect() as conn:
            row = curation_repo.get_by_submission_file_id(conn, sfid, CURATION_META_FIELDS)
        if row is None:
            raise NotFoundError(f"no curation meta for submission file {sfid}")
        return CurationMeta(submission_file_id=sfid, **dict(row))

    # ---- comments ----

    def store_comment(self, tx: Connection, comment: Comment) -> None:
        msg = comment.message.strip() if comment.message is not None else None
        with translate_errors("store comment"):
            comment_repo.insert_comment(
                tx, comment.author_id, comment.submission_id, msg, comment.action,
                to_unix(comment.created_at),
            )
        logger.debug("comment '%s' stored on submission %s", comment.action, comment.submission_id)

    def get_extended_comments_by_submission_id(self, sid: int) -> List[ExtendedComment]:
        with translate_errors("get comments"), self.db.connect() as conn:
            rows = comment_repo.list_extended_for_submission(conn, sid)
        return [
            ExtendedComment(
                author_id=r["author_id"],
                submission_id=sid,
                username=r["username"],
                avatar_url=self._avatar_url(r["author_id"], r["avatar"]),
                message=split_lines(r["message"]),
                action=r["action"],
                created_at=from_unix(r["created_at"]),
            )
            for r in rows
        ]
