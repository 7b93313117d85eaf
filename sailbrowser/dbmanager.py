"""Thread-backed front end to the browser's storage worker."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, ClassVar

from .dbworker import DBWorker
from .events import Signal
from .link import Link
from .tab import Tab

_log = logging.getLogger(__name__)


def _log_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        _log.error("storage task failed: %s", exc)


class DBManager:
    """Runs every storage operation on a single worker thread.

    Queued operations return a :class:`~concurrent.futures.Future`; blocking
    ones wait for the worker and return its result. The signals
    ``tabs_available``, ``history_available``, ``tab_history_available``,
    ``title_changed`` and ``thumb_path_changed`` are emitted from the worker
    thread; ``settings_changed`` is emitted from the calling thread.
    Settings are cached so that :meth:`get_setting` never waits.
    """

    _instance: ClassVar[DBManager | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, database_path: str | os.PathLike[str] | None = None) -> None:
        self.tabs_available = Signal()
        self.history_available = Signal()
        self.tab_history_available = Signal()
        self.thumb_path_changed = Signal()
        self.title_changed = Signal()
        self.settings_changed = Signal()

        self._closed = False
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dbworker")
        try:
            self._worker: DBWorker = self._executor.submit(DBWorker, database_path).result()
        except BaseException:
            self._executor.shutdown(wait=False)
            self._closed = True
            raise

        self._worker.tabs_available.connect(self.tabs_available.emit)
        self._worker.history_available.connect(self.history_available.emit)
        self._worker.tab_history_available.connect(self.tab_history_available.emit)
        self._worker.title_changed.connect(self.title_changed.emit)
        self._worker.thumb_path_changed.connect(self.thumb_path_changed.emit)

        self._settings: dict[str, str] = self._call(self._worker.get_settings)

    @classmethod
    def instance(cls, database_path: str | os.PathLike[str] | None = None) -> DBManager:
        """The shared manager, created on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(database_path)
            return cls._instance

    def __enter__(self) -> DBManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Finish queued work, close the database and stop the worker thread."""
        if self._closed:
            return
        self._closed = True
        try:
            self._executor.submit(self._worker.close).result()
        finally:
            self._executor.shutdown(wait=True)
            with DBManager._instance_lock:
                if DBManager._instance is self:
                    DBManager._instance = None

    def _queue(self, function: Callable[..., Any], *args: Any) -> Future:
        if self._closed:
            raise RuntimeError("storage manager is closed")
        future = self._executor.submit(function, *args)
        future.add_done_callback(_log_failure)
        return future

    def _call(self, function: Callable[..., Any], *args: Any) -> Any:
        if self._closed:
            raise RuntimeError("storage manager is closed")
        return self._executor.submit(function, *args).result()

    def wait(self) -> None:
        """Block until every operation queued so far has run."""
        self._call(lambda: None)

    def create_tab(self, tab: Tab) -> Future:
        """Queue storing a new tab."""
        return self._queue(self._worker.create_tab, tab)

    def get_all_tabs(self) -> Future:
        """Queue loading all tabs; the result is also sent on ``tabs_available``."""
        return self._queue(self._worker.get_all_tabs)

    def remove_tab(self, tab_id: int) -> Future:
        """Queue removing a tab."""
        return self._queue(self._worker.remove_tab, tab_id)

    def remove_all_tabs(self) -> None:
        """Remove every tab, without announcing the empty tab list."""
        self._call(self._worker.remove_all_tabs, True)

    def navigate_to(self, tab_id: int, url: str, title: str = "", path: str = "") -> Future:
        """Queue making ``url`` the tab's current link."""
        return self._queue(self._worker.navigate_to, tab_id, url, title, path)

    def go_forward(self, tab_id: int) -> None:
        """Move the tab forward in its history."""
        self._call(self._worker.go_forward, tab_id)

    def go_back(self, tab_id: int) -> None:
        """Move the tab back in its history."""
        self._call(self._worker.go_back, tab_id)

    def update_thumb_path(self, tab_id: int, path: str) -> Future:
        """Queue setting the tab's thumbnail path."""
        return self._queue(self._worker.update_thumb_path, tab_id, path)

    def update_title(self, tab_id: int, url: str, title: str) -> Future:
        """Queue setting the title of the tab's link and of ``url`` in history."""
        return self._queue(self._worker.update_title, tab_id, url, title)

    def remove_history_entry(self, link_id: int) -> Future:
        """Queue deleting a browsing-history entry by id."""
        return self._queue(self._worker.remove_history_entry, link_id)

    def remove_history_entry_by_url(self, url: str) -> Future:
        """Queue deleting a browsing-history entry by url."""
        return self._queue(self._worker.remove_history_entry_by_url, url)

    def add_history_entry(self, url: str, title: str) -> Future:
        """Queue recording a visit."""
        return self._queue(self._worker.add_history_entry, url, title)

    def clear_history(self) -> Future:
        """Queue deleting all history, tabs and links."""
        return self._queue(self._worker.clear_history)

    def get_history(self, filter: str = "") -> Future:
        """Queue a history query; the links are also sent on ``history_available``."""
        return self._queue(self._worker.get_history, filter)

    def get_tab_history(self, tab_id: int) -> Future:
        """Queue a tab-history query; also sent on ``tab_history_available``."""
        return self._queue(self._worker.get_tab_history, tab_id)

    def save_setting(self, name: str, value: str) -> None:
        """Store a setting and announce the change."""
        self._settings[name] = value
        self.settings_changed.emit()
        self._call(self._worker.save_setting, name, value)

    def get_setting(self, name: str) -> str:
        """The cached value of a setting, "" when it is not set."""
        return self._settings.get(name, "")

    def delete_setting(self, name: str) -> None:
        """Remove a setting if it is set, and announce the change."""
        if name in self._settings:
            del self._settings[name]
            self.settings_changed.emit()
            self._call(self._worker.delete_setting, name)

    def get_max_tab_id(self) -> int:
        """The largest stored tab id, 0 when there are none."""
        return self._call(self._worker.get_max_tab_id)

    @property
    def settings(self) -> dict[str, str]:
        """A copy of the cached settings."""
        return dict(self._settings)


__all__ = ["DBManager", "Link", "Tab"]