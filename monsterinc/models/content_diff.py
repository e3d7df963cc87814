"""Structured results of content diffing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping

from monsterinc.models.findings import ExtractedPath, SecretFinding


class DiffOperation(IntEnum):
    """Kind of change for a diff segment."""

    DELETE = -1
    EQUAL = 0
    INSERT = 1


@dataclass
class ContentDiff:
    """A single segment of a diff."""

    operation: DiffOperation
    text: str

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping."""
        return {"operation": int(self.operation), "text": self.text}


@dataclass
class ContentDiffResult:
    """Outcome of comparing two versions of some content."""

    timestamp: int = 0
    content_type: str = ""
    diffs: list[ContentDiff] = field(default_factory=list)
    lines_added: int = 0
    lines_deleted: int = 0
    lines_changed: int = 0
    is_identical: bool = False
    error_message: str = ""
    processing_time_ms: int = 0
    old_hash: str = ""
    new_hash: str = ""
    extracted_paths: list[ExtractedPath] = field(default_factory=list)
    secret_findings: list[SecretFinding] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; empty optional fields are left out."""
        data: dict[str, Any] = {
            "timestamp": self.timestamp,
            "content_type": self.content_type,
            "diffs": [d.to_dict() for d in self.diffs],
            "lines_added": self.lines_added,
            "lines_deleted": self.lines_deleted,
            "lines_changed": self.lines_changed,
            "is_identical": self.is_identical,
        }
        if self.error_message:
            data["error_message"] = self.error_message
        data["processing_time_ms"] = self.processing_time_ms
        if self.old_hash:
            data["old_hash"] = self.old_hash
        if self.new_hash:
            data["new_hash"] = self.new_hash
        if self.extracted_paths:
            data["extracted_paths"] = [p.to_dict() for p in self.extracted_paths]
        if self.secret_findings:
            data["secret_findings"] = [s.to_dict() for s in self.secret_findings]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContentDiffResult:
        """Build from a mapping as produced by ``to_dict``."""
        return cls(
            timestamp=data.get("timestamp", 0),
            content_type=data.get("content_type", ""),
            diffs=[
                ContentDiff(DiffOperation(d["operation"]), d.get("text", ""))
                for d in data.get("diffs") or []
            ],
            lines_added=data.get("lines_added", 0),
            lines_deleted=data.get("lines_deleted", 0),
            lines_changed=data.get("lines_changed", 0),
            is_identical=data.get("is_identical", False),
            error_message=data.get("error_message", ""),
            processing_time_ms=data.get("processing_time_ms", 0),
            old_hash=data.get("old_hash", ""),
            new_hash=data.get("new_hash", ""),
            extracted_paths=[
                ExtractedPath.from_dict(p) for p in data.get("extracted_paths") or []
            ],
            secret_findings=[
                SecretFinding.from_dict(s) for s in data.get("secret_findings") or []
            ],
        )