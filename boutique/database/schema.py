import sqlite3

from ..constants import TABLE_COLLECTIONS, TABLE_SCHEMA_VERSION, SCHEMA_VERSION

SQL = f"""
/* ======================== CORE TABLES ======================== */

/* -------- one row per logical collection (whole-collection JSON payload) -------- */
CREATE TABLE IF NOT EXISTS {TABLE_COLLECTIONS} (
    name       TEXT PRIMARY KEY,
    payload    TEXT NOT NULL DEFAULT '[]' CHECK (json_valid(payload)),
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

/* -------- schema version (single row) -------- */
CREATE TABLE IF NOT EXISTS {TABLE_SCHEMA_VERSION} (
    id      INTEGER PRIMARY KEY CHECK (id = 1),
    version TEXT NOT NULL
);

DROP TRIGGER IF EXISTS trg_collections_touch;
CREATE TRIGGER trg_collections_touch
AFTER UPDATE OF payload ON {TABLE_COLLECTIONS}
FOR EACH ROW
BEGIN
    UPDATE {TABLE_COLLECTIONS} SET updated_at = CURRENT_TIMESTAMP WHERE name = NEW.name;
END;
"""


def _ensure_version(conn: sqlite3.Connection) -> None:
    row = conn.execute(
        f"SELECT version FROM {TABLE_SCHEMA_VERSION} WHERE id=1;"
    ).fetchone()
    if row is None:
        conn.execute(
            f"INSERT INTO {TABLE_SCHEMA_VERSION}(id, version) VALUES (1, ?);",
            (SCHEMA_VERSION,),
        )


def get_current_version(conn: sqlite3.Connection) -> str | None:
    row = conn.execute(
        f"SELECT version FROM {TABLE_SCHEMA_VERSION} WHERE id=1;"
    ).fetchone()
    return row[0] if row else None


def apply_schema(conn: sqlite3.Connection) -> None:
    """Idempotent: CREATE IF NOT EXISTS / DROP TRIGGER IF EXISTS only."""
    conn.executescript(SQL)
    _ensure_version(conn)
