"""Creation, versioning and migration of the browser's SQLite database."""

from __future__ import annotations

import logging
import os
import sqlite3

DB_NAME = "sailfish-browser.sqlite"
DB_USER_VERSION = 1
MAX_BROWSER_HISTORY_SIZE = 2000

_log = logging.getLogger(__name__)

CREATE_TABLE_TAB = (
    "CREATE TABLE tab (tab_id INTEGER PRIMARY KEY,\n"
    "tab_history_id INTEGER\n"
    ");\n"
)

CREATE_TABLE_LINK = (
    "CREATE TABLE link (link_id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "url TEXT,\n"
    "title TEXT,\n"
    "thumb_path TEXT\n"
    ");\n"
)

CREATE_TABLE_BROWSER_HISTORY = (
    "CREATE TABLE browser_history (id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "url TEXT UNIQUE,\n"
    "title TEXT,\n"
    "favorite_icon TEXT,\n"
    "visited_count INTEGER DEFAULT 1,\n"
    "date INTEGER"
    ");\n"
)

CREATE_TABLE_TAB_HISTORY = (
    "CREATE TABLE tab_history (id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "tab_id INTEGER,\n"
    "link_id INTEGER,\n"
    "date INT"
    ");\n"
)

CREATE_TABLE_SETTINGS = (
    "CREATE TABLE settings (name TEXT PRIMARY KEY,\n"
    "value TEXT\n"
    ");\n"
)

SCHEMA = (
    CREATE_TABLE_TAB,
    CREATE_TABLE_TAB_HISTORY,
    CREATE_TABLE_LINK,
    CREATE_TABLE_BROWSER_HISTORY,
    CREATE_TABLE_SETTINGS,
)


def _table_exists(connection: sqlite3.Connection, name: str) -> bool:
    row = connection.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (name,)
    ).fetchone()
    return row is not None


def user_version(connection: sqlite3.Connection) -> int:
    """The schema version stored in the database header."""
    row = connection.execute("PRAGMA user_version;").fetchone()
    return int(row[0]) if row else 0


def set_user_version(connection: sqlite3.Connection, version: int) -> None:
    """Store ``version`` as the schema version."""
    if isinstance(version, bool) or not isinstance(version, int):
        raise TypeError("schema version must be an integer")
    connection.execute(f"PRAGMA user_version = {version};")


def create_schema(connection: sqlite3.Connection) -> None:
    """Create every table of a fresh database and mark it as the current version."""
    for statement in SCHEMA:
        connection.execute(statement)
    set_user_version(connection, DB_USER_VERSION)


def trim_history(connection: sqlite3.Connection) -> int:
    """Keep only the newest browsing-history entries; return how many were removed."""
    cursor = connection.execute(
        "DELETE FROM browser_history WHERE id NOT IN (SELECT id from browser_history"
        f" ORDER BY date DESC LIMIT {MAX_BROWSER_HISTORY_SIZE});"
    )
    return max(cursor.rowcount, 0)


def migrate_to_1(connection: sqlite3.Connection) -> None:
    """Move entries of the old ``history`` table into ``browser_history``."""
    if not _table_exists(connection, "browser_history"):
        connection.execute(CREATE_TABLE_BROWSER_HISTORY)

    if _table_exists(connection, "history"):
        connection.execute(
            "INSERT INTO browser_history (url, title, date) select "
            "link.url, link.title, history.date from link, history where "
            "history.link_id = link.link_id and NULLIF(link.title, '') IS NOT NULL and "
            "link.link_id in (select MAX(link_id) from link group by url);"
        )
        connection.execute("DROP TABLE history;")

    set_user_version(connection, 1)


def open_database(path: str | os.PathLike[str]) -> sqlite3.Connection:
    """Open the database at ``path``, creating or migrating its schema as needed.

    The connection works in autocommit mode.
    """
    location = os.fspath(path)
    existed = location != ":memory:" and os.path.exists(location)
    connection = sqlite3.connect(location, isolation_level=None, check_same_thread=False)

    if not existed:
        create_schema(connection)
    else:
        try:
            trim_history(connection)
        except sqlite3.Error:
            _log.warning("Failed to clear older history items")

    if user_version(connection) == 0:
        migrate_to_1(connection)

    return connection