"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so the Store avoids SQL strings.
"""
from __future__ import annotations
