"""
Typed records passed in and out of the Store.
Timestamps are timezone-aware UTC datetimes; the database keeps Unix seconds.
"""
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field


class DiscordUser(BaseModel):
    id: int
    username: str
    avatar: Optional[str] = None
    discriminator: Optional[str] = None
    public_flags: Optional[int] = None
    flags: Optional[int] = None
    locale: Optional[str] = None
    mfa_enabled: Optional[bool] = None


class SubmissionFile(BaseModel):
    submitter_id: int
    submission_id: int
    original_filename: str
    current_filename: str
    size: int
    uploaded_at: dt.datetime


class CurationMeta(BaseModel):
    submission_file_id: int
    submission_id: Optional[int] = None  # filled in on read
    application_path: Optional[str] = None
    developer: Optional[str] = None
    extreme: Optional[str] = None
    game_notes: Optional[str] = None
    languages: Optional[str] = None
    launch_command: Optional[str] = None
    original_description: Optional[str] = None
    play_mode: Optional[str] = None
    platform: Optional[str] = None
    publisher: Optional[str] = None
    release_date: Optional[str] = None
    series: Optional[str] = None
    source: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[str] = None
    tag_categories: Optional[str] = None
    title: Optional[str] = None
    alternate_titles: Optional[str] = None
    library: Optional[str] = None
    version: Optional[str] = None
    curation_notes: Optional[str] = None
    mount_parameters: Optional[str] = None


# column order shared by insert and select
CURATION_META_FIELDS = (
    "application_path", "developer", "extreme", "game_notes", "languages",
    "launch_command", "original_description", "play_mode", "platform", "publisher",
    "release_date", "series", "source", "status", "tags", "tag_categories", "title",
    "alternate_titles", "library", "version", "curation_notes", "mount_parameters",
)


class Comment(BaseModel):
    author_id: int
    submission_id: int
    message: Optional[str] = None
    action: str
    created_at: dt.datetime


class ExtendedComment(BaseModel):
    author_id: int
    submission_id: int
    username: str
    avatar_url: Optional[str] = None
    message: List[str] = Field(default_factory=list)
    action: str
    created_at: dt.datetime


class ExtendedSubmission(BaseModel):
    submission_id: int
    submitter_id: Optional[int] = None
    submitter_username: Optional[str] = None
    submitter_avatar_url: Optional[str] = None
    updater_id: Optional[int] = None
    updater_username: Optional[str] = None
    updater_avatar_url: Optional[str] = None
    file_id: Optional[int] = None
    original_filename: Optional[str] = None
    current_filename: Optional[str] = None
    size: Optional[int] = None
    uploaded_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    curation_title: Optional[str] = None
    curation_alternate_titles: Optional[str] = None
    curation_launch_command: Optional[str] = None
    bot_action: Optional[str] = None
    latest_action: Optional[str] = None


class SubmissionsFilter(BaseModel):
    submission_id: Optional[int] = None
    submitter_id: Optional[int] = None
