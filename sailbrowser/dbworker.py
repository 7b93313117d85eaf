"""Tab, tab-history, browsing-history and settings storage on SQLite."""

from __future__ import annotations

import datetime
import logging
import os
import sqlite3
import time
from pathlib import Path
from typing import Any, Sequence

from .events import Signal
from .link import Link
from .paths import data_location
from .schema import DB_NAME, open_database
from .tab import Tab

_log = logging.getLogger(__name__)

HISTORY_QUERY_LIMIT = 20

_UPDATE_THUMB_PATH = (
    "UPDATE link SET thumb_path = ? "
    "WHERE link_id IN (SELECT link.link_id "
    "FROM tab_history INNER JOIN link ON tab_history.link_id=link.link_id "
    "WHERE tab_history.tab_id = ?);"
)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _now() -> int:
    return int(time.time())


class DBWorker:
    """Runs the browser's storage queries and announces results through signals.

    Signals:
      ``tabs_available(tabs)``, ``thumb_path_changed(tab_id, path)``,
      ``title_changed(url, title)``,
      ``tab_history_available(tab_id, links, current_link_id)``,
      ``history_available(links)`` and ``error(statement)``.
    Failed statements are logged and reported on ``error``; the operation
    then stops quietly, as the storage layer is used fire-and-forget.
    """

    def __init__(self, database_path: str | os.PathLike[str] | None = None) -> None:
        if database_path is None:
            directory = data_location()
            if directory is None:
                raise OSError("no writable data location for the database")
            database_path = Path(directory) / DB_NAME
        self.tabs_available = Signal()
        self.thumb_path_changed = Signal()
        self.title_changed = Signal()
        self.tab_history_available = Signal()
        self.history_available = Signal()
        self.error = Signal()
        self._connection: sqlite3.Connection | None = open_database(database_path)

    def __enter__(self) -> DBWorker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @property
    def _db(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("database is closed")
        return self._connection

    def _execute(
        self, statement: str, parameters: Sequence[Any] | dict[str, Any] = ()
    ) -> sqlite3.Cursor | None:
        try:
            return self._db.execute(statement, parameters)
        except sqlite3.Error as exc:
            _log.warning("failed to execute query %r: %s", statement, exc)
            self.error.emit(statement)
            return None

    def _integer_query(self, statement: str) -> int:
        cursor = self._execute(statement)
        if cursor is None:
            return 0
        row = cursor.fetchone()
        return _int(row[0]) if row else 0

    def _tab_count(self) -> int:
        return self._integer_query("SELECT COUNT(*) FROM tab;")

    def _create_link(self, url: str, title: str = "", thumb_path: str = "") -> int:
        cursor = self._execute(
            "INSERT INTO link (url, title, thumb_path) VALUES (?, ?, ?);",
            (url, title, thumb_path),
        )
        if cursor is None or cursor.lastrowid is None:
            _log.warning("unable to fetch last inserted id")
            return 0
        return cursor.lastrowid

    def _add_to_tab_history(self, tab_id: int, link_id: int) -> int:
        cursor = self._execute(
            "INSERT INTO tab_history (tab_id, link_id, date) VALUES (?, ?, ?);",
            (tab_id, link_id, _now()),
        )
        if cursor is None or cursor.lastrowid is None:
            return 0
        return cursor.lastrowid

    def _update_tab(self, tab_id: int, tab_history_id: int) -> None:
        self._execute(
            "UPDATE tab SET tab_history_id = ? WHERE tab_id = ?;",
            (tab_history_id, tab_id),
        )

    def _current_link(self, tab_id: int) -> Link:
        cursor = self._execute(
            "SELECT link.link_id, link.url, link.thumb_path, link.title "
            "FROM tab "
            "INNER JOIN tab_history ON tab_history.id = tab.tab_history_id "
            "INNER JOIN link ON tab_history.link_id = link.link_id "
            "WHERE tab.tab_id = ?;",
            (tab_id,),
        )
        row = cursor.fetchone() if cursor is not None else None
        if row is None:
            return Link()
        return Link(_int(row[0]), _text(row[1]), _text(row[2]), _text(row[3]))

    def _clear_deprecated_tab_history(self, tab_id: int, current_link_id: int) -> None:
        self._execute(
            "DELETE FROM tab_history WHERE tab_id = ? AND link_id > ?;",
            (tab_id, current_link_id),
        )

    def _append_to_tab(self, tab_id: int, url: str, title: str, path: str) -> None:
        link_id = self._create_link(url, title, path)
        history_id = self._add_to_tab_history(tab_id, link_id)
        if history_id > 0:
            self._update_tab(tab_id, history_id)
        else:
            _log.warning("failed to add url to tab history %s", url)

    def create_tab(self, tab: Tab) -> None:
        """Store a new tab and, when it has a url, its first history entry."""
        self._execute(
            "INSERT INTO tab (tab_id, tab_history_id) VALUES (?,?);", (tab.tab_id, 0)
        )
        if not tab.url:
            return
        self._append_to_tab(tab.tab_id, tab.url, tab.title, tab.thumbnail_path)

    def remove_tab(self, tab_id: int) -> None:
        """Remove a tab and its history; announce an empty tab list if none remain."""
        self._execute("DELETE FROM tab WHERE tab_id = ?;", (tab_id,))
        self._execute("DELETE FROM tab_history WHERE tab_id = ?;", (tab_id,))
        if not self._tab_count():
            self.tabs_available.emit([])

    def remove_all_tabs(self, no_feedback: bool = False) -> None:
        """Remove every tab with its history and links.

        Unless ``no_feedback`` is set, an empty tab list is announced when
        there were tabs before.
        """
        old_tab_count = 0 if no_feedback else self._tab_count()
        self._execute("DELETE FROM tab;")
        self._execute(
            "DELETE FROM link WHERE link_id IN (SELECT DISTINCT link_id FROM tab_history)"
        )
        self._execute("DELETE FROM tab_history;")
        if old_tab_count != 0:
            self.tabs_available.emit([])

    def get_all_tabs(self) -> list[Tab]:
        """Every tab that has a current link, announced and returned."""
        cursor = self._execute(
            "SELECT tab.tab_id, link.url, link.title, link.thumb_path "
            "FROM tab "
            "INNER JOIN tab_history ON tab_history.id = tab.tab_history_id "
            "INNER JOIN link ON tab_history.link_id = link.link_id;"
        )
        if cursor is None:
            return []
        tabs = [
            Tab(_int(row[0]), _text(row[1]), _text(row[2]), _text(row[3]))
            for row in cursor
        ]
        self.tabs_available.emit(tabs)
        return tabs

    def get_max_tab_id(self) -> int:
        """The largest stored tab id, 0 when there are no tabs."""
        return self._integer_query("SELECT MAX(tab_id) FROM tab;")

    def navigate_to(self, tab_id: int, url: str, title: str = "", path: str = "") -> None:
        """Make ``url`` the tab's current link, dropping its forward history."""
        if not url:
            return
        current = self._current_link(tab_id)
        if current.is_valid() and current.url == url:
            return
        self._clear_deprecated_tab_history(tab_id, current.link_id)
        self._append_to_tab(tab_id, url, title, path)

    def _step(self, tab_id: int, statement: str) -> None:
        cursor = self._execute(statement, (tab_id, tab_id))
        if cursor is None:
            return
        row = cursor.fetchone()
        history_id = _int(row[0]) if row else 0
        if history_id > 0:
            self._update_tab(tab_id, history_id)

    def go_forward(self, tab_id: int) -> None:
        """Move the tab to the next entry of its history, if any."""
        self._step(
            tab_id,
            "SELECT id FROM tab_history WHERE tab_id = ? AND id > "
            "(SELECT tab_history_id FROM tab WHERE tab_id = ?) ORDER BY id ASC LIMIT 1;",
        )

    def go_back(self, tab_id: int) -> None:
        """Move the tab to the previous entry of its history, if any."""
        self._step(
            tab_id,
            "SELECT id FROM tab_history WHERE tab_id = ? AND id < "
            "(SELECT tab_history_id FROM tab WHERE tab_id = ?) ORDER BY id DESC LIMIT 1;",
        )

    def add_history_entry(self, url: str, title: str) -> None:
        """Record a visit to ``url``; ``about:`` pages are never recorded."""
        if url.startswith("about:"):
            return
        cursor = self._execute("SELECT 1 FROM browser_history WHERE url = ?;", (url,))
        if cursor is None:
            return
        if cursor.fetchone() is not None:
            if not title:
                self._execute(
                    "UPDATE browser_history SET date = ?, "
                    "visited_count = visited_count + 1  WHERE url = ?;",
                    (_now(), url),
                )
            else:
                self._execute(
                    "UPDATE browser_history SET date = ?, title = ?, "
                    "visited_count = visited_count + 1  WHERE url = ?;",
                    (_now(), title, url),
                )
        else:
            self._execute(
                "INSERT INTO browser_history (url, title, date) VALUES (?, ?, ?);",
                (url, title, _now()),
            )

    def clear_history(self) -> None:
        """Delete browsing history, all tabs and all links."""
        self._execute("DELETE FROM browser_history;")
        self.remove_all_tabs()
        self._execute("DELETE FROM link;")
        self.history_available.emit([])

    def get_history(self, filter: str = "") -> list[Link]:
        """The newest browsing-history entries, optionally matching ``filter``."""
        parameters: dict[str, Any] = {}
        if filter:
            condition = "(url LIKE :search OR title LIKE :search)"
            order = "date DESC, visited_count DESC, LENGTH(url), title"
            parameters["search"] = f"%{filter}%"
        else:
            condition = "1"
            order = "date DESC"
        statement = (
            "SELECT id, url, title, date, visited_count FROM browser_history "
            f"WHERE url NOT LIKE 'about:%' AND {condition} "
            f"ORDER BY {order} LIMIT {HISTORY_QUERY_LIMIT};"
        )
        cursor = self._execute(statement, parameters)
        if cursor is None:
            return []
        links = [
            Link(
                _int(row[0]),
                _text(row[1]),
                "",
                _text(row[2]),
                datetime.date.fromtimestamp(_int(row[3])),
            )
            for row in cursor
        ]
        self.history_available.emit(links)
        return links

    def get_tab_history(self, tab_id: int) -> tuple[list[Link], int]:
        """The tab's links newest first and the id of its current link (-1 if none)."""
        cursor = self._execute(
            "SELECT link.link_id, link.url, link.thumb_path, link.title, "
            "(tab_history.id == tab.tab_history_id) AS current "
            "FROM tab_history "
            "INNER JOIN tab ON tab.tab_id = tab_history.tab_id "
            "INNER JOIN link ON tab_history.link_id = link.link_id "
            "WHERE tab_history.tab_id = ? "
            "ORDER BY tab_history.id DESC;",
            (tab_id,),
        )
        if cursor is None:
            return [], -1
        links: list[Link] = []
        current_link_id = -1
        for row in cursor:
            link_id = _int(row[0])
            links.append(Link(link_id, _text(row[1]), _text(row[2]), _text(row[3])))
            if row[4]:
                current_link_id = link_id
        self.tab_history_available.emit(tab_id, links, current_link_id)
        return links, current_link_id

    def remove_history_entry(self, link_id: int) -> None:
        """Delete the browsing-history entry with this id."""
        self._execute("DELETE FROM browser_history WHERE id = ?", (link_id,))

    def remove_history_entry_by_url(self, url: str) -> None:
        """Delete the browsing-history entry for this url."""
        self._execute("DELETE FROM browser_history WHERE url = ?", (url,))

    def update_thumb_path(self, tab_id: int, path: str) -> None:
        """Set the thumbnail path of every link in the tab's history."""
        if self._execute(_UPDATE_THUMB_PATH, (path, tab_id)) is not None:
            self.thumb_path_changed.emit(tab_id, path)

    def update_title(self, tab_id: int, url: str, title: str) -> None:
        """Set the title of the tab's current link and of ``url`` in history."""
        cursor = self._execute(
            "SELECT link.link_id, link.url, link.title FROM tab "
            "INNER JOIN tab_history ON tab.tab_history_id = tab_history.id "
            "INNER JOIN link ON tab_history.link_id = link.link_id "
            "WHERE tab_history.tab_id = ?;",
            (tab_id,),
        )
        if cursor is None:
            _log.warning("No link found for tabId %s", tab_id)
            return

        history_updated = False
        row = cursor.fetchone()
        if row is not None:
            link_id, old_url, old_title = _int(row[0]), _text(row[1]), _text(row[2])
            if link_id > 0 and old_url and old_title != title:
                if self._execute(
                    "UPDATE link SET title = ? WHERE link_id = ?;", (title, link_id)
                ) is not None:
                    history_updated = True
                else:
                    _log.warning("Failed to update link's title")

        if self._execute(
            "UPDATE browser_history SET title = ? WHERE url = ?;", (title, url)
        ) is not None:
            history_updated = True
        else:
            _log.warning("Failed to add title to browser history")

        if history_updated:
            self.title_changed.emit(url, title)

    def save_setting(self, name: str, value: str) -> None:
        """Store a setting, replacing any earlier value."""
        cursor = self._execute("SELECT value FROM settings WHERE name = ?;", (name,))
        if cursor is None:
            return
        if cursor.fetchone() is not None:
            self._execute("UPDATE settings SET value = ? WHERE name = ?;", (value, name))
        else:
            self._execute(
                "INSERT INTO settings (name, value) VALUES (?, ?);", (name, value)
            )

    def get_settings(self) -> dict[str, str]:
        """All stored settings, sorted by name."""
        cursor = self._execute("SELECT name,value FROM settings;")
        if cursor is None:
            return {}
        return dict(sorted((_text(name), _text(value)) for name, value in cursor))

    def delete_setting(self, name: str) -> None:
        """Remove a stored setting."""
        self._execute("DELETE FROM settings WHERE name = ?", (name,))