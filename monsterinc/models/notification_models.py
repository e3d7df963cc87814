"""Notification payloads and scan summaries."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from monsterinc.models.findings import ExtractedPath, SecretFinding
from monsterinc.models.report_data import SecretStats


def _compact(obj: Any, required: tuple[str, ...] = ()) -> dict[str, Any]:
    """Mapping of a flat dataclass, leaving out empty fields not in ``required``."""
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if f.name in required or value:
            out[f.name] = list(value) if isinstance(value, list) else value
    return out


@dataclass
class AllowedMentions:
    """How mentions in a message are handled."""

    parse: list[str] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    users: list[str] = field(default_factory=list)
    replied_user: bool = False


@dataclass
class DiscordEmbedFooter:
    """Footer of an embed."""

    text: str = ""
    icon_url: str = ""


@dataclass
class DiscordEmbedImage:
    """Image of an embed."""

    url: str = ""


@dataclass
class DiscordEmbedThumbnail:
    """Thumbnail of an embed."""

    url: str = ""


@dataclass
class DiscordEmbedAuthor:
    """Author of an embed."""

    name: str = ""
    url: str = ""
    icon_url: str = ""


@dataclass
class DiscordEmbedField:
    """A field inside an embed."""

    name: str = ""
    value: str = ""
    inline: bool = False


@dataclass
class DiscordEmbed:
    """A rich embed in a webhook message."""

    title: str = ""
    description: str = ""
    url: str = ""
    timestamp: str = ""
    color: int = 0
    footer: DiscordEmbedFooter | None = None
    image: DiscordEmbedImage | None = None
    thumbnail: DiscordEmbedThumbnail | None = None
    author: DiscordEmbedAuthor | None = None
    fields: list[DiscordEmbedField] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; empty fields are left out."""
        data: dict[str, Any] = {}
        for key in ("title", "description", "url", "timestamp", "color"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.footer is not None:
            data["footer"] = _compact(self.footer, required=("text",))
        if self.image is not None:
            data["image"] = _compact(self.image, required=("url",))
        if self.thumbnail is not None:
            data["thumbnail"] = _compact(self.thumbnail, required=("url",))
        if self.author is not None:
            data["author"] = _compact(self.author, required=("name",))
        if self.fields:
            data["fields"] = [_compact(f, required=("name", "value")) for f in self.fields]
        return data


@dataclass
class DiscordMessagePayload:
    """The JSON body sent to a Discord webhook."""

    content: str = ""
    username: str = ""
    avatar_url: str = ""
    tts: bool = False
    embeds: list[DiscordEmbed] = field(default_factory=list)
    allowed_mentions: AllowedMentions | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; empty fields are left out."""
        data: dict[str, Any] = {}
        for key in ("content", "username", "avatar_url", "tts"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.embeds:
            data["embeds"] = [embed.to_dict() for embed in self.embeds]
        if self.allowed_mentions is not None:
            data["allowed_mentions"] = _compact(self.allowed_mentions)
        return data


@dataclass
class ProbeStats:
    """Statistics of the probing phase."""

    total_probed: int = 0
    successful_probes: int = 0
    failed_probes: int = 0
    discoverable_items: int = 0


@dataclass
class DiffStats:
    """Statistics of the diffing phase."""

    new: int = 0
    old: int = 0
    existing: int = 0
    changed: int = 0


class ScanStatus(str, Enum):
    """Possible states of a scan."""

    STARTED = "STARTED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CRITICAL_ERROR = "CRITICAL_ERROR"
    PARTIAL_COMPLETE = "PARTIAL_COMPLETE"
    INTERRUPTED = "INTERRUPTED"
    UNKNOWN = "UNKNOWN"
    NO_TARGETS = "NO_TARGETS"
    COMPLETED_WITH_ISSUES = "COMPLETED_WITH_ISSUES"


@dataclass
class ScanSummaryData:
    """Everything about a scan that a notification reports."""

    scan_session_id: str = ""
    target_source: str = ""
    scan_mode: str = ""
    targets: list[str] = field(default_factory=list)
    total_targets: int = 0
    probe_stats: ProbeStats = field(default_factory=ProbeStats)
    diff_stats: DiffStats = field(default_factory=DiffStats)
    secret_stats: SecretStats = field(default_factory=SecretStats)
    scan_duration: timedelta = field(default_factory=timedelta)
    report_path: str = ""
    status: str = ""
    error_messages: list[str] = field(default_factory=list)
    component: str = ""
    retries_attempted: int = 0


@dataclass
class FileChangeInfo:
    """A single detected file change."""

    url: str
    old_hash: str = ""
    new_hash: str = ""
    content_type: str = ""
    change_time: datetime | None = None
    diff_report_path: str | None = None
    extracted_paths: list[ExtractedPath] = field(default_factory=list)
    secret_findings: list[SecretFinding] = field(default_factory=list)


@dataclass
class MonitorFetchErrorInfo:
    """An error met while fetching or processing a monitored file."""

    url: str
    error: str
    source: str
    occurred_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping."""
        return {
            "url": self.url,
            "error": self.error,
            "source": self.source,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass
class MonitorAggregatedStats:
    """Aggregated counts for monitor notifications."""

    total_changes: int = 0
    total_paths: int = 0
    total_secrets: int = 0
    high_severity_count: int = 0


@dataclass
class MonitorCycleCompleteData:
    """Data for the end-of-cycle monitor notification."""

    changed_urls: list[str] = field(default_factory=list)
    file_changes: list[FileChangeInfo] = field(default_factory=list)
    report_path: str = ""
    total_monitored: int = 0
    timestamp: datetime | None = None


def default_scan_summary_data() -> ScanSummaryData:
    """A scan summary with the standard placeholder values."""
    return ScanSummaryData(
        scan_session_id="",
        target_source="Unknown",
        scan_mode="Unknown",
        targets=[],
        total_targets=0,
        status=ScanStatus.UNKNOWN.value,
    )