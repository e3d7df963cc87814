"""Thread-safe bookkeeping for the monitoring service."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from monsterinc.models.notification_models import FileChangeInfo, MonitorFetchErrorInfo


class URLRegistry:
    """The set of monitored URLs, plus one lock per URL being checked."""

    def __init__(self) -> None:
        self._urls: dict[str, None] = {}
        self._urls_lock = threading.RLock()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_lock = threading.Lock()

    def add(self, url: str) -> bool:
        """Start monitoring ``url``; True if it was not monitored before."""
        if not url:
            return False
        with self._urls_lock:
            if url in self._urls:
                return False
            self._urls[url] = None
            return True

    def remove(self, url: str) -> bool:
        """Stop monitoring ``url``; True if it was monitored."""
        with self._urls_lock:
            return self._urls.pop(url, 0) is None

    def urls(self) -> list[str]:
        """A copy of the monitored URLs."""
        with self._urls_lock:
            return list(self._urls)

    def __contains__(self, url: object) -> bool:
        with self._urls_lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._urls_lock:
            return len(self._urls)

    def lock_for(self, url: str) -> threading.Lock:
        """The lock that serialises checks of ``url``."""
        with self._locks_lock:
            lock = self._locks.get(url)
            if lock is None:
                lock = self._locks[url] = threading.Lock()
            return lock

    def prune_locks(self) -> None:
        """Drop the locks of URLs that are no longer monitored."""
        monitored = set(self.urls())
        with self._locks_lock:
            for url in [u for u in self._locks if u not in monitored]:
                del self._locks[url]


class EventAggregator:
    """Collects file changes, fetch errors and changed URLs between reports."""

    def __init__(self) -> None:
        self._changes: list[FileChangeInfo] = []
        self._changes_lock = threading.Lock()
        self._errors: list[MonitorFetchErrorInfo] = []
        self._errors_lock = threading.Lock()
        self._changed_urls: dict[str, None] = {}
        self._changed_lock = threading.Lock()

    def record_change(self, change: FileChangeInfo) -> None:
        """Remember a detected change and mark its URL as changed in this cycle."""
        with self._changes_lock:
            self._changes.append(change)
        with self._changed_lock:
            self._changed_urls[change.url] = None

    def record_error(
        self, url: str, error: BaseException | str, source: str
    ) -> MonitorFetchErrorInfo:
        """Remember an error met at stage ``source`` (fetch, process, store_history)."""
        info = MonitorFetchErrorInfo(
            url=url,
            error=str(error),
            source=source,
            occurred_at=datetime.now(timezone.utc),
        )
        with self._errors_lock:
            self._errors.append(info)
        return info

    def drain_changes(self) -> list[FileChangeInfo]:
        """Return and clear the recorded changes."""
        with self._changes_lock:
            changes, self._changes = self._changes, []
        return changes

    def drain_errors(self) -> list[MonitorFetchErrorInfo]:
        """Return and clear the recorded errors."""
        with self._errors_lock:
            errors, self._errors = self._errors, []
        return errors

    def drain_changed_urls(self) -> list[str]:
        """Return and clear the URLs that changed, in first-seen order."""
        with self._changed_lock:
            urls, self._changed_urls = list(self._changed_urls), {}
        return urls