"""A visited link, as stored in tab and browsing history."""

from __future__ import annotations

import datetime
from dataclasses import dataclass


@dataclass
class Link:
    """One history entry: id, url, thumbnail path, title and visit date."""

    link_id: int = 0
    url: str = ""
    thumb_path: str = ""
    title: str = ""
    date: datetime.date | None = None

    def is_valid(self) -> bool:
        """A link is valid when it has a positive id and a non-empty url."""
        return self.link_id > 0 and len(self.url) > 0