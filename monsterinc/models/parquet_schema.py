"""Row layout for probe results stored in columnar files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from monsterinc.models.probe_result import ProbeResult, Technology
from monsterinc.models.time_utils import unix_milli_to_time_optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def time_to_unix_milli_optional(t: datetime | None) -> int | None:
    """Unix milliseconds for ``t``, or None when absent. Naive times are taken as UTC."""
    if t is None:
        return None
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return (t - _EPOCH) // timedelta(milliseconds=1)


def string_from_optional(value: str | None) -> str:
    """The string, or '' when absent."""
    return "" if value is None else value


def int_from_optional(value: int | None) -> int:
    """The integer, or 0 when absent."""
    return 0 if value is None else value


@dataclass
class ParquetProbeResult:
    """A stored probe result row; maps are kept as JSON text."""

    original_url: str
    scan_timestamp: int = 0
    final_url: str | None = None
    status_code: int | None = None
    content_length: int | None = None
    content_type: str | None = None
    title: str | None = None
    web_server: str | None = None
    technologies: list[str] = field(default_factory=list)
    ip_address: list[str] = field(default_factory=list)
    root_target_url: str | None = None
    probe_error: str | None = None
    method: str | None = None
    headers_json: str | None = None
    diff_status: str | None = None
    first_seen_timestamp: int | None = None
    last_seen_timestamp: int | None = None

    def to_probe_result(self) -> ProbeResult:
        """Convert the row back to a probe result; unreadable headers become empty."""
        headers: dict[str, str] = {}
        if self.headers_json:
            try:
                parsed = json.loads(self.headers_json)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, dict):
                headers = {str(k): str(v) for k, v in parsed.items()}

        return ProbeResult(
            input_url=self.original_url,
            final_url=string_from_optional(self.final_url),
            method=string_from_optional(self.method),
            timestamp=unix_milli_to_time_optional(self.last_seen_timestamp),
            error=string_from_optional(self.probe_error),
            root_target_url=string_from_optional(self.root_target_url),
            status_code=int_from_optional(self.status_code),
            content_length=int_from_optional(self.content_length),
            content_type=string_from_optional(self.content_type),
            headers=headers,
            title=string_from_optional(self.title),
            web_server=string_from_optional(self.web_server),
            ips=list(self.ip_address),
            technologies=[Technology(name=name) for name in self.technologies],
            url_status=string_from_optional(self.diff_status),
            oldest_scan_timestamp=unix_milli_to_time_optional(self.first_seen_timestamp),
        )