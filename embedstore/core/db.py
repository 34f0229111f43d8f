"""
SQLite foundation for document stores: connection handling and schema.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

SCHEMA_SQL = '''
    CREATE TABLE IF NOT EXISTS documents (
        id TEXT PRIMARY KEY,
        text TEXT NOT NULL,
        embedding TEXT NOT NULL
    );

    -- Indexes for id lookups and existence checks
    CREATE INDEX IF NOT EXISTS idx_documents_id ON documents(id);
    CREATE INDEX IF NOT EXISTS idx_documents_text ON documents(text);
'''

REQUIRED_TABLES = ['documents']


def open_connection(db_path: Path) -> sqlite3.Connection:
    """Open a long-lived connection owned by a single store instance.

    The store serializes all access with its own lock, so the connection
    may be used from whichever thread holds that lock.
    """
    return sqlite3.connect(str(db_path), check_same_thread=False)


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the documents table and its indexes."""
    conn.executescript(SCHEMA_SQL)
    conn.commit()


@contextmanager
def get_db(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Get a short-lived SQLite connection for inspection tasks."""
    conn = sqlite3.connect(str(db_path))
    try:
        yield conn
    finally:
        conn.close()


def health_check(db_path: Path) -> bool:
    """Check that a store file exists and carries the expected schema."""
    if not Path(db_path).exists():
        return False

    try:
        with get_db(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            table_names = [row[0] for row in cursor.fetchall()]
            return all(table in table_names for table in REQUIRED_TABLES)
    except sqlite3.Error:
        return False
