"""Read-only access to a FyningTime SQLite database."""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterator, Optional

from errors import AnalysisError, LegacyConnectionError
from models import LegacyVacation, LegacyWorkday, LegacyWorktime

logger = logging.getLogger(__name__)

# --- LEGACY SCHEMA ---
LEGACY_TABLES = ("workdays", "worktimes", "vacations")

WORKDAYS_QUERY = "SELECT id, date, target_hours, break_time FROM workdays ORDER BY id"
WORKTIMES_QUERY = "SELECT id, workday_id, type, timestamp FROM worktimes ORDER BY id"
VACATIONS_QUERY = "SELECT id, start_date, end_date FROM vacations ORDER BY id"


class LegacyReader:
    """Owns at most one read-only connection to a legacy database.

    Use as a context manager so the file handle is released on every exit
    path. ``read_*`` methods re-query on each call and yield raw tuples in
    the legacy column order.
    """

    def __init__(self):
        self._conn: Optional[sqlite3.Connection] = None
        self.path: Optional[str] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self, path) -> None:
        """Open ``path`` read-only, replacing any open connection."""
        self.close()

        path = os.fspath(path)
        if not os.path.isfile(path):
            raise LegacyConnectionError(f"Legacy database file not found: {path}")

        uri = Path(path).resolve().as_uri() + "?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            raise LegacyConnectionError(f"Could not open {path} read-only: {exc}") from exc

        try:
            rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        except sqlite3.DatabaseError as exc:
            conn.close()
            raise LegacyConnectionError(
                f"Not a valid FyningTime database: {path} ({exc})"
            ) from exc

        missing = [t for t in LEGACY_TABLES if t not in {name for (name,) in rows}]
        if missing:
            conn.close()
            raise LegacyConnectionError(
                f"Not a valid FyningTime database: {path} (missing tables: {', '.join(missing)})"
            )

        self._conn = conn
        self.path = path
        logger.info("Connected to legacy database %s", path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            logger.debug("Closed legacy database %s", self.path)
        self._conn = None
        self.path = None

    def _rows(self, query: str) -> Iterator[tuple]:
        if self._conn is None:
            raise LegacyConnectionError("No legacy database is connected")
        for row in self._conn.execute(query):
            yield tuple(row)

    def read_workdays(self) -> Iterator[tuple]:
        return self._rows(WORKDAYS_QUERY)

    def read_worktimes(self) -> Iterator[tuple]:
        return self._rows(WORKTIMES_QUERY)

    def read_vacations(self) -> Iterator[tuple]:
        return self._rows(VACATIONS_QUERY)


# --- ROW DECODING ---
def _text(value) -> str:
    return "" if value is None else str(value)


def _unpack(row, table: str, width: int) -> tuple:
    if len(row) != width:
        raise AnalysisError(f"Unexpected {table} row shape: expected {width} columns, got {len(row)}")
    return tuple(row)


def _legacy_id(value, table: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise AnalysisError(f"Non-integer id {value!r} in legacy table {table}") from exc


def decode_workday(row) -> LegacyWorkday:
    rid, day, target, brk = _unpack(row, "workdays", 4)
    return LegacyWorkday(_legacy_id(rid, "workdays"), _text(day), _text(target), _text(brk))


def decode_worktime(row) -> LegacyWorktime:
    rid, workday_id, kind, stamp = _unpack(row, "worktimes", 4)
    return LegacyWorktime(
        _legacy_id(rid, "worktimes"),
        _legacy_id(workday_id, "worktimes"),
        _text(kind),
        _text(stamp),
    )


def decode_vacation(row) -> LegacyVacation:
    rid, start, end = _unpack(row, "vacations", 3)
    return LegacyVacation(_legacy_id(rid, "vacations"), _text(start), _text(end))
