"""Orchestration of file monitoring: checks, change detection, aggregation and reports."""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Iterable

from monsterinc.models.content_diff import ContentDiffResult
from monsterinc.models.file_history import FileHistoryRecord, FileHistoryStore
from monsterinc.models.findings import ExtractedPath, SecretFinding
from monsterinc.models.monitored_file import MonitoredFileUpdate
from monsterinc.models.notification_models import (
    FileChangeInfo,
    MonitorCycleCompleteData,
    MonitorFetchErrorInfo,
    ScanStatus,
    ScanSummaryData,
)
from monsterinc.monitor.fetcher import Fetcher, FetchError, FetchResult
from monsterinc.monitor.processor import Processor
from monsterinc.monitor.state import EventAggregator, URLRegistry

_log = logging.getLogger("monsterinc.monitor.service")


class Notifier(ABC):
    """Receives the notifications the monitoring service emits."""

    @abstractmethod
    def send_initial_monitored_urls(self, urls: list[str]) -> None:
        """Announce the URLs monitored at start-up."""

    @abstractmethod
    def send_scan_completion(self, summary: ScanSummaryData) -> None:
        """Report the end (or interruption) of the monitoring service."""

    @abstractmethod
    def send_aggregated_errors(self, errors: list[MonitorFetchErrorInfo]) -> None:
        """Report errors collected since the last report."""

    @abstractmethod
    def send_cycle_complete(self, data: MonitorCycleCompleteData) -> None:
        """Report the end of a monitoring cycle."""


class ContentDiffer(ABC):
    """Computes the difference between two versions of a file."""

    @abstractmethod
    def generate_diff(
        self,
        old_content: bytes,
        new_content: bytes,
        content_type: str,
        old_hash: str,
        new_hash: str,
    ) -> ContentDiffResult:
        """Diff ``old_content`` against ``new_content``."""


class DiffReporter(ABC):
    """Writes HTML diff reports."""

    @abstractmethod
    def generate_single_diff_report(
        self,
        url: str,
        diff_result: ContentDiffResult,
        old_hash: str,
        new_hash: str,
        content: bytes,
    ) -> str:
        """Write a report for one change and return its path."""

    @abstractmethod
    def generate_diff_report(self, urls: list[str]) -> str:
        """Write an aggregated report for ``urls`` and return its path."""


class PathExtractor(ABC):
    """Finds URLs and paths inside file content."""

    @abstractmethod
    def extract_paths(
        self, url: str, content: bytes, content_type: str
    ) -> list[ExtractedPath]:
        """Paths found in ``content`` fetched from ``url``."""


def _is_javascript(content_type: str) -> bool:
    return "javascript" in content_type


class MonitoringService:
    """Monitors HTML/JS files for changes and reports them."""

    def __init__(
        self,
        history_store: FileHistoryStore | None,
        fetcher: Fetcher,
        processor: Processor | None = None,
        *,
        notifier: Notifier | None = None,
        differ: ContentDiffer | None = None,
        diff_reporter: DiffReporter | None = None,
        path_extractor: PathExtractor | None = None,
        store_full_content_on_change: bool = False,
        aggregation_interval: float = 0,
    ) -> None:
        self._store = history_store
        self._fetcher = fetcher
        self._processor = processor if processor is not None else Processor()
        self._notifier = notifier
        self._differ = differ
        self._diff_reporter = diff_reporter
        self._path_extractor = path_extractor
        self._store_full_content = store_full_content_on_change

        self._registry = URLRegistry()
        self._events = EventAggregator()
        self._shutting_down = threading.Event()
        self._stop_worker = threading.Event()
        self._stopped = False
        self._stop_lock = threading.Lock()
        self._worker: threading.Thread | None = None

        if aggregation_interval <= 0:
            _log.warning(
                "Aggregation interval %s is not positive; aggregation worker not started",
                aggregation_interval,
            )
        else:
            self._worker = threading.Thread(
                target=self._aggregation_loop,
                args=(aggregation_interval,),
                name="monitor-aggregation",
                daemon=True,
            )
            self._worker.start()

    # URL management

    def add_target_url(self, url: str) -> None:
        """Start monitoring ``url``; empty URLs are ignored."""
        if self._registry.add(url):
            _log.info("Added new target URL for monitoring: %s", url)

    def remove_target_url(self, url: str) -> None:
        """Stop monitoring ``url``."""
        if self._registry.remove(url):
            _log.info("Removed target URL from monitoring: %s", url)

    def monitored_urls(self) -> list[str]:
        """A copy of the currently monitored URLs."""
        return self._registry.urls()

    # Lifecycle

    def start(self, initial_urls: Iterable[str] = ()) -> None:
        """Add ``initial_urls``, check every monitored URL once and report the cycle."""
        for url in initial_urls:
            self.add_target_url(url)
        urls = self.monitored_urls()
        if urls and self._notifier is not None:
            self._notifier.send_initial_monitored_urls(urls)
        if urls:
            _log.info("Performing initial check of %d monitored URLs", len(urls))
            for url in urls:
                self.check_url(url)
            self.trigger_cycle_end_report()
        _log.info("MonitoringService started")

    def stop(self) -> None:
        """Shut down: notify the interruption and stop the aggregation worker."""
        with self._stop_lock:
            if self._stopped:
                return
            self._stopped = True
        self._shutting_down.set()
        urls = self.monitored_urls()
        if self._notifier is not None and urls:
            summary = ScanSummaryData(
                scan_session_id=datetime.now().strftime("%Y%m%d-%H%M%S-monitor"),
                target_source="monitor_service",
                targets=urls,
                total_targets=len(urls),
                status=ScanStatus.INTERRUPTED.value,
                error_messages=["Monitor service was stopped/interrupted"],
                component="MonitorService",
            )
            self._notifier.send_scan_completion(summary)
        self._stop_worker.set()
        if self._worker is not None:
            self._worker.join()
        _log.info("MonitoringService stopped")

    def _aggregation_loop(self, interval: float) -> None:
        while not self._stop_worker.wait(interval):
            self._flush_changes()
            self._send_aggregated_errors()
        _log.info("Aggregation worker stopped")

    def _flush_changes(self) -> None:
        if self._shutting_down.is_set():
            return
        changes = self._events.drain_changes()
        if changes:
            _log.info("Aggregated %d file changes; cleared event list", len(changes))

    def _send_aggregated_errors(self) -> None:
        errors = self._events.drain_errors()
        if not errors:
            return
        for index, info in enumerate(errors, start=1):
            _log.info(
                "Aggregated monitor error %d: %s [%s] %s", index, info.url, info.source, info.error
            )
        if self._notifier is not None:
            self._notifier.send_aggregated_errors(errors)

    # Checking

    def check_url(self, url: str) -> None:
        """Fetch ``url``, detect changes against history and store the new version."""
        with self._registry.lock_for(url):
            try:
                fetched = self._fetcher.fetch(url)
            except FetchError as exc:
                _log.error("Failed to fetch %s: %s", url, exc)
                self._events.record_error(url, exc, "fetch")
                return

            try:
                update = self._processor.process_content(
                    url, fetched.content, fetched.content_type
                )
            except Exception as exc:
                _log.error("Failed to process %s: %s", url, exc)
                self._events.record_error(url, exc, "process")
                return

            secret_findings: list[SecretFinding] = []
            change, diff_result = self._detect_changes(url, update, fetched, secret_findings)

            try:
                self._store_record(url, update, fetched, diff_result)
            except Exception as exc:
                _log.error("Failed to store record for %s: %s", url, exc)
                self._events.record_error(url, exc, "store_history")
                return

            if change is not None:
                _log.info("Change detected: %s", url)
                self._events.record_change(change)

    def _last_record(self, url: str) -> FileHistoryRecord | None:
        if self._store is None:
            return None
        try:
            return self._store.get_last_known_record(url)
        except Exception as exc:
            _log.debug("No previous record for %s: %s", url, exc)
            return None

    def _extract_paths(self, url: str, fetched: FetchResult) -> list[ExtractedPath]:
        if self._path_extractor is None or not _is_javascript(fetched.content_type):
            return []
        try:
            return list(
                self._path_extractor.extract_paths(url, fetched.content, fetched.content_type)
            )
        except Exception as exc:
            _log.error("Failed to extract paths from %s: %s", url, exc)
            return []

    def _detect_changes(
        self,
        url: str,
        update: MonitoredFileUpdate,
        fetched: FetchResult,
        secret_findings: list[SecretFinding],
    ) -> tuple[FileChangeInfo | None, ContentDiffResult | None]:
        last = self._last_record(url)
        if last is None:
            _log.info("New file detected: %s (%s)", url, update.new_hash)
            return (
                FileChangeInfo(
                    url=url,
                    old_hash="",
                    new_hash=update.new_hash,
                    content_type=fetched.content_type,
                    change_time=update.fetched_at,
                    extracted_paths=self._extract_paths(url, fetched),
                    secret_findings=list(secret_findings),
                ),
                None,
            )

        old_hash = last.hash
        if old_hash == update.new_hash:
            return None, None

        _log.info("Change detected for %s: %s -> %s", url, old_hash, update.new_hash)
        extracted = self._extract_paths(url, fetched)
        change = FileChangeInfo(
            url=url,
            old_hash=old_hash,
            new_hash=update.new_hash,
            content_type=fetched.content_type,
            change_time=update.fetched_at,
            extracted_paths=extracted,
            secret_findings=list(secret_findings),
        )

        diff_result: ContentDiffResult | None = None
        if self._differ is not None and self._store_full_content:
            try:
                diff_result = self._differ.generate_diff(
                    last.content, fetched.content, fetched.content_type, old_hash, update.new_hash
                )
            except Exception as exc:
                _log.error("Failed to generate content diff for %s: %s", url, exc)
                diff_result = None
            if diff_result is not None:
                diff_result.extracted_paths = extracted
                diff_result.secret_findings = list(secret_findings)
                if self._diff_reporter is not None:
                    try:
                        change.diff_report_path = self._diff_reporter.generate_single_diff_report(
                            url, diff_result, old_hash, update.new_hash, fetched.content
                        )
                    except Exception as exc:
                        _log.error("Failed to generate diff report for %s: %s", url, exc)
        return change, diff_result

    def _store_record(
        self,
        url: str,
        update: MonitoredFileUpdate,
        fetched: FetchResult,
        diff_result: ContentDiffResult | None,
    ) -> None:
        diff_json = json.dumps(diff_result.to_dict()) if diff_result is not None else None
        paths_json = None
        if diff_result is not None and diff_result.extracted_paths:
            paths_json = json.dumps([p.to_dict() for p in diff_result.extracted_paths])
        if self._store is None:
            _log.warning("History store is not set; cannot store record for %s", url)
            return
        self._store.store_file_record(
            FileHistoryRecord(
                url=url,
                timestamp=int(update.fetched_at.timestamp()),
                hash=update.new_hash,
                content_type=fetched.content_type,
                content=fetched.content,
                etag=fetched.etag,
                last_modified=fetched.last_modified,
                diff_result_json=diff_json,
                extracted_paths_json=paths_json,
            )
        )

    # Reporting

    def trigger_cycle_end_report(self) -> MonitorCycleCompleteData:
        """Close the current cycle: report errors, write the aggregated report and notify."""
        _log.info("Monitoring cycle complete")
        self._registry.prune_locks()
        changes = self._events.drain_changes()
        self._send_aggregated_errors()
        changed_urls = self._events.drain_changed_urls()

        report_path = ""
        urls = self.monitored_urls()
        if self._diff_reporter is not None:
            if urls:
                try:
                    report_path = self._diff_reporter.generate_diff_report(urls)
                except Exception as exc:
                    _log.error("Failed to generate aggregated diff report: %s", exc)
                    report_path = ""
            else:
                _log.info("No URLs monitored; skipping aggregated diff report")
        else:
            _log.warning("No diff reporter; aggregated diff report not generated")

        data = MonitorCycleCompleteData(
            changed_urls=changed_urls,
            file_changes=changes,
            report_path=report_path,
            total_monitored=len(urls),
            timestamp=datetime.now(timezone.utc),
        )
        if self._notifier is not None:
            self._notifier.send_cycle_complete(data)
        return data