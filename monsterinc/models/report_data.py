"""Data shaped for rendering HTML scan and diff reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from monsterinc.models.content_diff import ContentDiff
from monsterinc.models.findings import ExtractedPath, SecretFinding
from monsterinc.models.probe_result import ProbeResult
from monsterinc.models.time_utils import format_time_optional
from monsterinc.models.url_diff import URLDiffResult

DATE_LAYOUT = "%Y-%m-%d"
DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S %Z"


def _now_formatted() -> str:
    return datetime.now().astimezone().strftime(DATETIME_LAYOUT)


@dataclass
class ProbeResultDisplay:
    """A probe result reshaped for the HTML report."""

    input_url: str = ""
    final_url: str = ""
    method: str = ""
    status_code: int = 0
    content_length: int = 0
    content_type: str = ""
    title: str = ""
    web_server: str = ""
    technologies: list[str] = field(default_factory=list)
    ips: list[str] = field(default_factory=list)
    cnames: list[str] = field(default_factory=list)
    asn: int = 0
    asn_org: str = ""
    tls_version: str = ""
    tls_cipher: str = ""
    tls_cert_issuer: str = ""
    tls_cert_expiry: str = ""
    duration: float = 0.0
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    error: str = ""
    timestamp: str = ""
    is_success: bool = False
    has_technologies: bool = False
    has_tls: bool = False
    has_asn: bool = False
    has_cnames: bool = False
    has_ips: bool = False
    root_target_url: str = ""
    url_status: str = ""


@dataclass
class ReporterConfigForTemplate:
    """Reporter settings the template needs."""

    items_per_page: int = 0


@dataclass
class DiffSummaryEntry:
    """Diff counts for one root target."""

    new_count: int = 0
    old_count: int = 0
    existing_count: int = 0
    changed_count: int = 0


@dataclass
class SecretStats:
    """Statistics about secret detection findings."""

    total_findings: int = 0
    high_severity: int = 0
    medium_severity: int = 0
    low_severity: int = 0
    unknown_severity: int = 0
    unique_rules: int = 0
    unique_source_urls: int = 0


@dataclass
class ReportPageData:
    """Everything needed to render the scan report page."""

    report_title: str = ""
    generated_at: str = ""
    probe_results: list[ProbeResultDisplay] = field(default_factory=list)
    total_results: int = 0
    success_results: int = 0
    failed_results: int = 0
    config: ReporterConfigForTemplate | None = None
    unique_status_codes: list[int] = field(default_factory=list)
    unique_content_types: list[str] = field(default_factory=list)
    unique_technologies: list[str] = field(default_factory=list)
    unique_root_targets: list[str] = field(default_factory=list)
    custom_css: str = ""
    report_js: str = ""
    url_diffs: dict[str, URLDiffResult] = field(default_factory=dict)
    theme: str = ""
    filter_placeholders: dict[str, str] = field(default_factory=dict)
    table_headers: list[str] = field(default_factory=list)
    items_per_page: int = 0
    enable_data_tables: bool = False
    show_timeline_view: bool = False
    error_message: str = ""
    favicon_base64: str = ""
    probe_results_json: str = ""
    diff_summary_data: dict[str, DiffSummaryEntry] = field(default_factory=dict)
    secret_findings: list[SecretFinding] = field(default_factory=list)
    secret_findings_json: str = ""
    secret_stats: SecretStats = field(default_factory=SecretStats)
    report_part_info: str = ""


@dataclass
class DiffResultDisplay:
    """A content diff result reshaped for the diff report."""

    url: str = ""
    content_type: str = ""
    timestamp: datetime | None = None
    is_identical: bool = False
    diffs: list[ContentDiff] = field(default_factory=list)
    error_message: str = ""
    diff_html: str = ""
    old_hash: str = ""
    new_hash: str = ""
    summary: str = ""
    full_content: str = ""
    extracted_paths: list[ExtractedPath] = field(default_factory=list)
    secret_findings: list[SecretFinding] = field(default_factory=list)
    secret_stats: SecretStats = field(default_factory=SecretStats)


@dataclass
class DiffReportPageData:
    """Everything needed to render the diff report page."""

    report_title: str = ""
    generated_at: str = ""
    diff_results: list[DiffResultDisplay] = field(default_factory=list)
    total_diffs: int = 0
    items_per_page: int = 0
    enable_data_tables: bool = False
    report_type: str = ""
    favicon_base64: str = ""


def to_probe_result_display(result: ProbeResult) -> ProbeResultDisplay:
    """Reshape a probe result for display; 2xx and 3xx without error count as success."""
    is_success = not result.error and 200 <= result.status_code < 400
    technologies = [tech.name for tech in result.technologies]
    return ProbeResultDisplay(
        input_url=result.input_url,
        final_url=result.final_url,
        method=result.method,
        status_code=result.status_code,
        content_length=result.content_length,
        content_type=result.content_type,
        title=result.title,
        web_server=result.web_server,
        technologies=technologies,
        ips=list(result.ips),
        cnames=list(result.cnames),
        asn=result.asn,
        asn_org=result.asn_org,
        tls_version=result.tls_version,
        tls_cipher=result.tls_cipher,
        tls_cert_issuer=result.tls_cert_issuer,
        tls_cert_expiry=format_time_optional(result.tls_cert_expiry, DATE_LAYOUT),
        duration=result.duration,
        headers=dict(result.headers),
        body=result.body,
        error=result.error,
        timestamp=format_time_optional(result.timestamp, DATETIME_LAYOUT),
        is_success=is_success,
        has_technologies=bool(technologies),
        has_tls=bool(result.tls_version),
        has_asn=result.asn != 0,
        has_cnames=bool(result.cnames),
        has_ips=bool(result.ips),
        root_target_url=result.root_target_url,
        url_status=result.url_status,
    )


def default_report_page_data() -> ReportPageData:
    """Scan report page data with the standard defaults."""
    return ReportPageData(
        report_title="MonsterInc Scan Report",
        generated_at=_now_formatted(),
        theme="light",
        filter_placeholders={
            "globalSearch": "Search all fields...",
            "titleSearch": "Filter by Title...",
            "techSearch": "Filter by Technology...",
            "finalUrlSearch": "Filter by Final URL...",
        },
        table_headers=[
            "Input URL",
            "Final URL",
            "Status",
            "Title",
            "Technologies",
            "Web Server",
            "Content Type",
            "Length",
            "IPs",
        ],
        items_per_page=10,
        enable_data_tables=True,
        secret_stats=SecretStats(),
    )


def default_diff_report_page_data() -> DiffReportPageData:
    """Diff report page data with the standard defaults."""
    return DiffReportPageData(
        report_title="Content Difference Report",
        generated_at=_now_formatted(),
        diff_results=[],
        items_per_page=25,
        enable_data_tables=True,
    )