"""Discovery of OpenSearch description files and their engine names."""

from __future__ import annotations

import functools
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable

EMBEDLITE_CONTENT_PATH = "/usr/lib/mozembedlite/chrome/embedlite/content/"
_USER_OPENSEARCH_SUFFIX = "/.local/share/org.sailfishos/browser/searchEngines/"


def user_opensearch_path(home: str | os.PathLike[str]) -> str:
    """The directory holding the user's own OpenSearch files."""
    return f"{os.fspath(home)}{_USER_OPENSEARCH_SUFFIX}"


def _short_name(file_path: str) -> str | None:
    """The last ShortName text in the file, "" if none, None if unreadable."""
    try:
        root = ET.parse(file_path).getroot()
    except (ET.ParseError, OSError):
        return None
    name = ""
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.rpartition("}")[2] == "ShortName":
            if element.text is not None:
                name = element.text
    return name


class OpenSearchConfigs:
    """Search engines described by the ``*.xml`` files in a list of directories."""

    def __init__(self, search_paths: Iterable[str | os.PathLike[str]]) -> None:
        self.search_paths = [os.fspath(path) for path in search_paths]

    def available_configs(self) -> dict[str, str]:
        """Map each engine name to its file; later directories win on clashes."""
        configs: dict[str, str] = {}
        for directory in self.search_paths:
            try:
                names = sorted(
                    entry.name
                    for entry in Path(directory).iterdir()
                    if entry.name.lower().endswith(".xml")
                )
            except OSError:
                continue
            for file_name in names:
                file_path = os.path.join(directory, file_name)
                engine = _short_name(file_path)
                if engine is not None:
                    configs[engine] = file_path
        return dict(sorted(configs.items()))

    def search_engine_list(self) -> list[str]:
        """The sorted names of the available search engines."""
        return list(self.available_configs())


@functools.lru_cache(maxsize=None)
def default_configs() -> OpenSearchConfigs:
    """The shared instance over the built-in and the user's directories."""
    return OpenSearchConfigs([EMBEDLITE_CONTENT_PATH, user_opensearch_path(Path.home())])