"""Command-line switches and the browser's standard writable locations."""

from __future__ import annotations

import grp
import logging
import os
import pwd
import sys
from pathlib import Path
from typing import Sequence

ORGANIZATION = "org.sailfishos"
APPLICATION = "browser"

_log = logging.getLogger(__name__)


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv if argv is None else argv)


def captive_portal(argv: Sequence[str] | None = None) -> bool:
    """Whether the browser runs in captive-portal mode."""
    return "-captiveportal" in _arguments(argv)


def _xdg_dir(variable: str, default: str) -> Path:
    value = os.environ.get(variable)
    if value and os.path.isabs(value):
        return Path(value)
    return Path.home() / default


def _app_data_dir() -> Path:
    return _xdg_dir("XDG_DATA_HOME", ".local/share") / ORGANIZATION / APPLICATION


def profile_name(argv: Sequence[str] | None = None) -> str:
    """The value after ``-profile``, or the application data location."""
    args = _arguments(argv)
    if "-profile" in args:
        index = args.index("-profile")
        if index + 1 < len(args):
            return args[index + 1]
    return str(_app_data_dir())


def _location(path: Path) -> str | None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        _log.warning("Can't create directory %s", path)
        return None
    return str(path)


def download_location() -> str | None:
    """The download directory, created if missing; None if it can't be."""
    return _location(_xdg_dir("XDG_DOWNLOAD_DIR", "Downloads"))


def pictures_location() -> str | None:
    """The pictures directory, created if missing; None if it can't be."""
    return _location(_xdg_dir("XDG_PICTURES_DIR", "Pictures"))


def data_location() -> str | None:
    """The application data directory, created if missing; None if it can't be."""
    return _location(_app_data_dir())


def applications_location() -> str | None:
    """The directory for desktop entries, created if missing; None if it can't be."""
    return _location(_xdg_dir("XDG_DATA_HOME", ".local/share") / "applications")


def cache_location() -> str | None:
    """The application cache directory, created if missing; None if it can't be."""
    return _location(_xdg_dir("XDG_CACHE_HOME", ".cache") / ORGANIZATION / APPLICATION)


def create_directory(path: str | os.PathLike[str]) -> bool:
    """Create ``path`` owned by the user and the user's group, mode 0770.

    Returns False only when the directory is missing and can't be made.
    """
    directory = Path(path)
    if directory.is_dir():
        return True
    try:
        directory.mkdir(parents=True)
    except OSError:
        return False
    uid = os.getuid()
    try:
        # The group is assumed to share the user's name.
        gid = grp.getgrnam(pwd.getpwuid(uid).pw_name).gr_gid
        os.chown(directory, uid, gid)
    except (KeyError, OSError):
        pass
    try:
        os.chmod(directory, 0o770)
    except OSError:
        pass
    return True