"""The central record of a single HTTP probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Technology:
    """A technology detected on a probed host."""

    name: str
    version: str = ""
    category: str = ""


@dataclass
class TLSData:
    """Basic TLS certificate information."""

    subject_cn: str = ""
    issuer_cn: str = ""
    sans: list[str] = field(default_factory=list)
    not_before: datetime | None = None
    not_after: datetime | None = None
    certificate: str = ""


@dataclass
class ProbeResult:
    """Result of probing one URL."""

    input_url: str = ""
    method: str = ""
    timestamp: datetime | None = None
    duration: float = 0.0
    error: str = ""
    root_target_url: str = ""

    status_code: int = 0
    content_length: int = 0
    content_type: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    title: str = ""
    web_server: str = ""

    final_url: str = ""

    ips: list[str] = field(default_factory=list)
    cnames: list[str] = field(default_factory=list)
    asn: int = 0
    asn_org: str = ""

    technologies: list[Technology] = field(default_factory=list)

    tls_version: str = ""
    tls_cipher: str = ""
    tls_cert_issuer: str = ""
    tls_cert_expiry: datetime | None = None

    url_status: str = ""
    oldest_scan_timestamp: datetime | None = None

    def has_technologies(self) -> bool:
        """True if any technologies were detected."""
        return bool(self.technologies)