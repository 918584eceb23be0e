import sqlite3

import pytest

LEGACY_SCHEMA = """
    CREATE TABLE workdays (id INTEGER PRIMARY KEY, date TEXT, target_hours TEXT, break_time TEXT);
    CREATE TABLE worktimes (id INTEGER PRIMARY KEY, workday_id INTEGER, type TEXT, timestamp TEXT);
    CREATE TABLE vacations (id INTEGER PRIMARY KEY, start_date TEXT, end_date TEXT);
"""


@pytest.fixture
def make_legacy_db(tmp_path):
    """Build a FyningTime database file from row lists."""

    def _make(workdays=(), worktimes=(), vacations=(), name="fyningtime.db"):
        path = tmp_path / name
        conn = sqlite3.connect(path)
        conn.executescript(LEGACY_SCHEMA)
        conn.executemany("INSERT INTO workdays VALUES (?, ?, ?, ?)", workdays)
        conn.executemany("INSERT INTO worktimes VALUES (?, ?, ?, ?)", worktimes)
        conn.executemany("INSERT INTO vacations VALUES (?, ?, ?)", vacations)
        conn.commit()
        conn.close()
        return path

    return _make


@pytest.fixture
def sample_db(make_legacy_db):
    return make_legacy_db(
        workdays=[(1, "2023-05-15", "8h0m0s", "30m")],
        worktimes=[
            (1, 1, "start", "2023-05-15 09:30:00+0200"),
            (2, 1, "end", "2023-05-15 17:45:00+0200"),
        ],
        vacations=[(1, "2023-07-01", "2023-07-14")],
    )
