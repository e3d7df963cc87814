"""Assets discovered while crawling, and scan targets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class AssetType(str, Enum):
    """Kind of asset, named after the HTML tag it came from."""

    LINK = "a"
    SCRIPT = "script"
    STYLE = "link"
    IMAGE = "img"
    IFRAME = "iframe"
    FORM = "form"
    OBJECT = "object"
    EMBED = "embed"


@dataclass(frozen=True)
class URLSource:
    """Tag and attribute a URL was extracted from."""

    tag: str
    attribute: str


@dataclass
class Asset:
    """A generic asset discovered by the crawler."""

    absolute_url: str
    source_tag: str = ""
    source_attr: str = ""
    type: AssetType | None = None
    discovered_at: datetime | None = None
    discovered_from: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; empty optional fields are left out."""
        data: dict[str, Any] = {"absolute_url": self.absolute_url}
        if self.source_tag:
            data["source_tag"] = self.source_tag
        if self.source_attr:
            data["source_attr"] = self.source_attr
        if self.type is not None:
            data["type"] = self.type.value
        if self.discovered_at is not None:
            data["discovered_at"] = self.discovered_at.isoformat()
        if self.discovered_from:
            data["discovered_from"] = self.discovered_from
        return data


@dataclass
class Target:
    """A URL to scan, as given and as normalised."""

    original_url: str
    normalized_url: str = ""