"""Layout of the browser's backup and conversion of old-style backups."""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

_log = logging.getLogger(__name__)

BROWSER_DIR = ".local/share/org.sailfishos/browser"
MOZ_DIR = BROWSER_DIR + "/.mozilla"
CACHE_DIR = ".cache/org.sailfishos/browser"

BOOKMARKS = "/bookmarks.json"
DATABASE = "/sailfish-browser.sqlite"
KEYS = "/key3.db"
SIGNONS = "/signons.sqlite"

OLD_BROWSER_DIR = ".local/share/org.sailfishos/sailfish-browser"
OLD_MOZ_DIR = ".mozilla/mozembed"
OLD_CACHE_DIR = ".cache/org.sailfishos/sailfish-browser"

_INFO: dict[str, Any] = {
    "home": {
        "data": [BROWSER_DIR + BOOKMARKS],
        "bin": [
            MOZ_DIR + KEYS,
            BROWSER_DIR + DATABASE,
            CACHE_DIR,
            MOZ_DIR + SIGNONS,
        ],
    },
    "options": {"overwrite": True},
}


def backup_info() -> dict[str, Any]:
    """The files to back up, relative to home, and the unit's options."""
    return copy.deepcopy(_INFO)


def _rename(source: Path, dest: Path) -> bool:
    if dest.exists():
        return False
    try:
        os.rename(source, dest)
    except OSError:
        return False
    return True


def fix(
    common: str | os.PathLike[str], file: str, old_path: str, new_path: str
) -> bool:
    """Move ``common/old_path/file`` to ``common/new_path/file`` if it exists.

    Returns whether the file was moved.
    """
    base = os.fspath(common)
    source = Path(f"{base}/{old_path}/{file}")
    if not source.exists():
        return False
    dest = Path(f"{base}/{new_path}/{file}").absolute()
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    if not _rename(source, dest):
        _log.warning("Moving %s to %s failed", source, dest)
        return False
    return True


def fix_dir(common: str | os.PathLike[str], old_path: str, new_path: str) -> bool:
    """Rename the directory ``old_path`` to ``new_path`` inside ``common``.

    Returns whether it was renamed.
    """
    base = Path(os.fspath(common))
    source = base / old_path
    if not source.exists():
        return False
    if not _rename(source, base / new_path):
        _log.warning("Moving %s to %s failed", old_path, new_path)
        return False
    return True


def fix_import(
    data_dir: str | os.PathLike[str], bin_dir: str | os.PathLike[str]
) -> None:
    """Convert an old-style backup in place to the current layout."""
    fix(data_dir, BOOKMARKS, OLD_BROWSER_DIR, BROWSER_DIR)
    fix(bin_dir, DATABASE, OLD_BROWSER_DIR, BROWSER_DIR)
    fix(bin_dir, KEYS, OLD_MOZ_DIR, MOZ_DIR)
    fix(bin_dir, SIGNONS, OLD_MOZ_DIR, MOZ_DIR)
    fix_dir(bin_dir, OLD_CACHE_DIR, CACHE_DIR)