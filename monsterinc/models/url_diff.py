"""Results of comparing URL sets between scans."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from monsterinc.models.probe_result import ProbeResult


class URLStatus(str, Enum):
    """Status of a URL relative to the previous scan."""

    NEW = "new"
    OLD = "old"
    EXISTING = "existing"


@dataclass
class DiffedURL:
    """A compared URL; its status lives in the probe result."""

    probe_result: ProbeResult


@dataclass
class URLDiffResult:
    """URL diff outcome for one root target."""

    root_target_url: str = ""
    results: list[DiffedURL] = field(default_factory=list)
    new: int = 0
    old: int = 0
    existing: int = 0
    error: str = ""

    def count_statuses(self, status: URLStatus | str) -> int:
        """Count results whose URL status matches ``status``."""
        wanted = status.value if isinstance(status, URLStatus) else status
        return sum(1 for item in self.results if item.probe_result.url_status == wanted)