from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator


class StoreError(Exception):
    """Base class for everything the store raises."""


class NotFoundError(StoreError):
    """A lookup matched no row."""


class ConstraintViolationError(StoreError):
    """Uniqueness, NOT NULL or foreign key failure on write."""


class TransientStoreError(StoreError):
    """Locked database, I/O failure, interrupted query and the like."""


class DatabaseInitError(StoreError):
    """The store could not be opened or its schema applied."""


@contextmanager
def translate_errors(op: str) -> Iterator[None]:
    """Re-raise sqlite3 failures as StoreError subclasses, keeping the cause."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        raise ConstraintViolationError(f"{op}: {e}") from e
    except sqlite3.Error as e:
        raise TransientStoreError(f"{op}: {e}") from e
