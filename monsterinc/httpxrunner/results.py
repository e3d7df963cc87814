"""Helpers for inspecting and resetting probe results."""

from __future__ import annotations

from monsterinc.models.probe_result import ProbeResult


def set_probe_error(result: ProbeResult | None, message: str) -> None:
    """Record ``message`` as the probe's error and clear the data that is no longer reliable."""
    if result is None:
        return
    result.error = message
    result.status_code = 0
    result.content_length = 0
    result.content_type = ""
    result.headers = {}
    result.body = ""
    result.title = ""
    result.web_server = ""
    result.final_url = ""
    result.ips = []
    result.cnames = []
    result.asn = 0
    result.asn_org = ""
    result.technologies = []
    result.tls_version = ""
    result.tls_cipher = ""
    result.tls_cert_issuer = ""
    result.tls_cert_expiry = None
    result.duration = 0.0


def is_probe_success(result: ProbeResult | None) -> bool:
    """True if the probe reported no error."""
    return result is not None and not result.error


def probe_has_technologies(result: ProbeResult | None) -> bool:
    """True if any technologies were detected."""
    return result is not None and bool(result.technologies)


def probe_has_tls(result: ProbeResult | None) -> bool:
    """True if a TLS version is known for the probe."""
    return result is not None and bool(result.tls_version)