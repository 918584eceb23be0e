import logging
import sqlite3

from config import DB_PATH

logger = logging.getLogger(__name__)


# --- STORAGE SETUP ---
# Mirrors the KTime tables (CurrentDays, WorkTimes, Vacations, Settings).
SCHEMA = """
    CREATE TABLE IF NOT EXISTS CurrentDays (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        date VARCHAR(10) NOT NULL,
        is_work_day BOOLEAN NOT NULL,
        target_hours REAL NOT NULL,
        notes VARCHAR(255) NULL
    );
    CREATE TABLE IF NOT EXISTS WorkTimes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        current_day_id INT NOT NULL REFERENCES CurrentDays(id),
        start_time VARCHAR(5) NOT NULL,
        end_time VARCHAR(5) NOT NULL,
        break_duration INT NOT NULL,
        notes VARCHAR(255) NULL
    );
    CREATE TABLE IF NOT EXISTS Vacations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        current_day_id INT NOT NULL REFERENCES CurrentDays(id),
        end_date VARCHAR(10) NULL,
        type VARCHAR(50) NOT NULL,
        notes VARCHAR(255) NULL
    );
    CREATE TABLE IF NOT EXISTS Settings (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        "key" VARCHAR(50) NOT NULL,
        value VARCHAR(255) NOT NULL
    );
    CREATE UNIQUE INDEX IF NOT EXISTS Settings_key_unique ON Settings ("key");
"""


def _connect(db_path):
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path=DB_PATH):
    """Ensure the KTime tables exist."""
    conn = _connect(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def apply_script(script, db_path=DB_PATH):
    """Run a migration script in one transaction: all rows or none."""
    init_db(db_path)
    conn = _connect(db_path)
    try:
        conn.executescript(script)
    except sqlite3.Error:
        if conn.in_transaction:
            conn.rollback()
        logger.exception("Migration script failed, rolled back")
        raise
    finally:
        conn.close()
    logger.info("Applied migration script to %s", db_path)


def _fetch(db_path, query):
    conn = _connect(db_path)
    rows = [dict(r) for r in conn.execute(query).fetchall()]
    conn.close()
    return rows


def fetch_days(db_path=DB_PATH):
    """Return all days, oldest first."""
    return _fetch(db_path, "SELECT * FROM CurrentDays ORDER BY date, id")


def fetch_work_times(db_path=DB_PATH):
    """Return work times joined with their day's date."""
    return _fetch(db_path, """
        SELECT w.*, d.date AS date FROM WorkTimes w
        JOIN CurrentDays d ON d.id = w.current_day_id
        ORDER BY d.date, w.start_time, w.id
    """)


def fetch_vacations(db_path=DB_PATH):
    """Return vacations with their start date taken from the linked day."""
    return _fetch(db_path, """
        SELECT v.*, d.date AS start_date FROM Vacations v
        JOIN CurrentDays d ON d.id = v.current_day_id
        ORDER BY d.date, v.id
    """)


def save_setting(key, value, db_path=DB_PATH):
    """Insert or update a setting and return its row id."""
    conn = _connect(db_path)
    conn.execute(
        'INSERT INTO Settings("key", value) VALUES(?, ?) '
        'ON CONFLICT("key") DO UPDATE SET value = excluded.value',
        (key, str(value))
    )
    row = conn.execute('SELECT id FROM Settings WHERE "key" = ?', (key,)).fetchone()
    conn.commit()
    conn.close()
    return row["id"]


def fetch_settings(db_path=DB_PATH):
    """Return settings as a {key: value} dict."""
    return {r["key"]: r["value"] for r in _fetch(db_path, 'SELECT "key", value FROM Settings')}
