"""Paths extracted from content and secrets found in it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


def _time_to_json(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _time_from_json(value: str | None) -> datetime | None:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class ExtractedPath:
    """A URL or path found within content."""

    source_url: str = ""
    extracted_raw_path: str = ""
    extracted_absolute_url: str = ""
    context: str = ""
    type: str = ""
    discovery_timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping."""
        return {
            "source_url": self.source_url,
            "extracted_raw_path": self.extracted_raw_path,
            "extracted_absolute_url": self.extracted_absolute_url,
            "context": self.context,
            "type": self.type,
            "discovery_timestamp": _time_to_json(self.discovery_timestamp),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExtractedPath:
        """Build from a mapping as produced by ``to_dict``."""
        return cls(
            source_url=data.get("source_url", ""),
            extracted_raw_path=data.get("extracted_raw_path", ""),
            extracted_absolute_url=data.get("extracted_absolute_url", ""),
            context=data.get("context", ""),
            type=data.get("type", ""),
            discovery_timestamp=_time_from_json(data.get("discovery_timestamp")),
        )


@dataclass
class SecretFinding:
    """A secret found by a detection tool."""

    rule_id: str = ""
    secret_text: str = ""
    source_url: str = ""
    file_path_in_archive: str = ""
    description: str = ""
    severity: str = ""
    line_number: int = 0
    timestamp: datetime | None = None
    tool_name: str = ""
    verification_state: str = ""
    extra_data_json: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping."""
        return {
            "source_url": self.source_url,
            "file_path_in_archive": self.file_path_in_archive,
            "rule_id": self.rule_id,
            "description": self.description,
            "severity": self.severity,
            "secret_text": self.secret_text,
            "line_number": self.line_number,
            "timestamp": _time_to_json(self.timestamp),
            "tool_name": self.tool_name,
            "verification_state": self.verification_state,
            "extra_data_json": self.extra_data_json,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SecretFinding:
        """Build from a mapping as produced by ``to_dict``."""
        return cls(
            rule_id=data.get("rule_id", ""),
            secret_text=data.get("secret_text", ""),
            source_url=data.get("source_url", ""),
            file_path_in_archive=data.get("file_path_in_archive", ""),
            description=data.get("description", ""),
            severity=data.get("severity", ""),
            line_number=int(data.get("line_number", 0) or 0),
            timestamp=_time_from_json(data.get("timestamp")),
            tool_name=data.get("tool_name", ""),
            verification_state=data.get("verification_state", ""),
            extra_data_json=data.get("extra_data_json", ""),
        )