"""A browser tab as stored in the tab table."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Tab:
    """A tab: id, current url, title, thumbnail path and desktop-mode flag."""

    tab_id: int = 0
    url: str = ""
    title: str = ""
    thumbnail_path: str = ""
    desktop_mode: bool = field(default=False, compare=False)

    def is_valid(self) -> bool:
        """A tab is valid when its id is positive."""
        return self.tab_id > 0