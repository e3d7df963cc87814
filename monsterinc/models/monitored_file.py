"""Records describing monitored files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class MonitoredFile:
    """A file being monitored."""

    url: str
    last_hash: str = ""
    last_checked: datetime | None = None
    content_type: str = ""


@dataclass
class MonitoredFileUpdate:
    """Result of fetching and processing a monitored file."""

    url: str
    new_hash: str
    content_type: str
    fetched_at: datetime
    content: bytes = b""