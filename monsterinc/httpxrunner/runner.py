"""Probe runner: option setup, result mapping and result collection."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Mapping

from monsterinc.models.probe_result import ProbeResult, Technology

_log = logging.getLogger("monsterinc.httpxrunner")

_INT_RE = re.compile(r"[+-]?\d+")

ResultCallback = Callable[[Mapping[str, Any]], None]
Enumerator = Callable[["ProbeOptions", ResultCallback], None]


@dataclass
class RunnerConfig:
    """User-facing probe configuration."""

    targets: list[str] = field(default_factory=list)
    method: str = ""
    request_uris: list[str] = field(default_factory=list)
    follow_redirects: bool = False
    timeout: int = 0
    retries: int = 0
    threads: int = 0
    rate_limit: int = 0
    output_format: str = ""
    verbose: bool = False
    custom_headers: dict[str, str] = field(default_factory=dict)
    proxy: str = ""
    tech_detect: bool = False
    extract_title: bool = False
    extract_status_code: bool = False
    extract_location: bool = False
    extract_content_length: bool = False
    extract_server_header: bool = False
    extract_content_type: bool = False
    extract_ips: bool = False
    extract_body: bool = False
    extract_headers: bool = False
    extract_cnames: bool = False
    extract_asn: bool = False
    extract_tls_data: bool = False


@dataclass
class ProbeOptions:
    """Options handed to the probing engine."""

    methods: str = "GET"
    follow_redirects: bool = True
    timeout: int = 10
    retries: int = 1
    threads: int = 25
    max_redirects: int = 10
    respect_hsts: bool = True
    no_color: bool = True
    silent: bool = True
    verbose: bool = False
    omit_body: bool = False
    response_headers_in_stdout: bool = True
    tech_detect: bool = True
    output_ip: bool = True
    status_code: bool = True
    content_length: bool = True
    output_content_type: bool = True
    extract_title: bool = True
    output_server_header: bool = True
    location: bool = True
    rate_limit: int = 0
    output_cname: bool = True
    asn: bool = True
    tls_probe: bool = True
    input_target_host: list[str] = field(default_factory=list)
    request_uri: str = ""
    custom_headers: list[str] = field(default_factory=list)
    proxy: str = ""


def _header_line(name: str, value: str) -> str:
    line = f"{name}: {value}"
    if not name.strip():
        raise ValueError(f"invalid header {line!r}")
    return line


def configure_options(config: RunnerConfig | None) -> ProbeOptions:
    """Build engine options from ``config``; None gives the defaults."""
    options = ProbeOptions()
    if config is None:
        return options

    options.verbose = config.verbose
    options.silent = not config.verbose
    options.input_target_host = list(config.targets)
    if config.method:
        options.methods = config.method
    if config.request_uris:
        options.request_uri = config.request_uris[0]
    options.follow_redirects = config.follow_redirects
    if config.timeout > 0:
        options.timeout = config.timeout
    if config.retries >= 0:
        options.retries = config.retries
    if config.threads > 0:
        options.threads = config.threads
    if config.rate_limit > 0:
        options.rate_limit = config.rate_limit
    if config.custom_headers:
        headers = []
        for name, value in config.custom_headers.items():
            try:
                headers.append(_header_line(name, value))
            except ValueError as exc:
                _log.warning("Failed to set custom header: %s", exc)
        options.custom_headers = headers
    if config.proxy:
        options.proxy = config.proxy

    options.tech_detect = config.tech_detect
    options.extract_title = config.extract_title
    options.status_code = config.extract_status_code
    options.location = config.extract_location
    options.content_length = config.extract_content_length
    options.output_server_header = config.extract_server_header
    options.output_content_type = config.extract_content_type
    options.output_ip = config.extract_ips
    options.omit_body = not config.extract_body
    options.response_headers_in_stdout = config.extract_headers
    options.output_cname = config.extract_cnames
    options.asn = config.extract_asn
    options.tls_probe = config.extract_tls_data
    return options


def _parse_time(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _header_value(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(item for item in value if isinstance(item, str))
    return None


def map_result(raw: Mapping[str, Any], root_url: str) -> ProbeResult:
    """Convert one raw engine result (JSON-shaped mapping) to a ProbeResult.

    Recognised keys: input, method, timestamp, status_code, content_length,
    content_type, error, url, title, webserver, body, time, header, tech, a,
    cname, asn {as_number, as_name}, tls {tls_version, cipher,
    certificate {issuer_cn, not_after}}.
    """
    result = ProbeResult(
        input_url=raw.get("input", "") or "",
        method=raw.get("method", "") or "",
        timestamp=_parse_time(raw.get("timestamp")),
        status_code=int(raw.get("status_code", 0) or 0),
        content_length=int(raw.get("content_length", 0) or 0),
        content_type=raw.get("content_type", "") or "",
        error=raw.get("error", "") or "",
        final_url=raw.get("url", "") or "",
        title=raw.get("title", "") or "",
        web_server=raw.get("webserver", "") or "",
        body=raw.get("body", "") or "",
        root_target_url=root_url,
    )

    response_time = raw.get("time") or ""
    if response_time:
        text = response_time[:-1] if response_time.endswith("s") else response_time
        try:
            result.duration = float(text)
        except ValueError:
            pass

    headers = raw.get("header") or {}
    for name, value in headers.items():
        text = _header_value(value)
        if text is not None:
            result.headers[name] = text

    result.technologies = [Technology(name=name) for name in raw.get("tech") or []]
    result.ips = list(raw.get("a") or [])
    result.cnames = list(raw.get("cname") or [])

    asn = raw.get("asn")
    if asn:
        number = (asn.get("as_number") or "").replace("AS", "")
        if _INT_RE.fullmatch(number):
            result.asn = int(number)
        result.asn_org = asn.get("as_name", "") or ""

    tls = raw.get("tls")
    if tls:
        result.tls_version = tls.get("tls_version", "") or ""
        result.tls_cipher = tls.get("cipher", "") or ""
        cert = tls.get("certificate")
        if cert:
            if cert.get("issuer_cn"):
                result.tls_cert_issuer = cert["issuer_cn"]
            expiry = _parse_time(cert.get("not_after"))
            if expiry is not None:
                result.tls_cert_expiry = expiry
    return result


class Runner:
    """Runs a probe enumeration for one root target and collects its results."""

    def __init__(self, config: RunnerConfig, root_target_url: str) -> None:
        if config is None:
            raise ValueError("httpxrunner: config cannot be None")
        self.config = config
        self.root_target_url = root_target_url
        self.options = configure_options(config)
        self._results: list[ProbeResult] = []
        self._lock = threading.Lock()
        self._log = logging.LoggerAdapter(_log, {"root_target": root_target_url})

    def on_result(self, raw: Mapping[str, Any]) -> None:
        """Map one raw result and store it; safe to call from worker threads."""
        result = map_result(raw, self.root_target_url)
        with self._lock:
            self._results.append(result)

    def run(self, enumerate_targets: Enumerator) -> None:
        """Run ``enumerate_targets(options, on_result)`` over the configured targets."""
        if not self.config.targets:
            self._log.info("No targets configured. Nothing to do.")
            return
        self._log.info("Starting enumeration of %d targets", len(self.config.targets))
        enumerate_targets(self.options, self.on_result)
        self._log.info("Probing finished with %d results", len(self._results))

    def results(self) -> list[ProbeResult]:
        """A copy of all results collected so far."""
        with self._lock:
            return list(self._results)