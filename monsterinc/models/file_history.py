"""History records of monitored files and the store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from monsterinc.models.content_diff import ContentDiffResult


class RecordNotFoundError(LookupError):
    """Raised when a record is not found in the store."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


@dataclass
class FileHistoryRecord:
    """One stored version of a monitored file."""

    url: str
    timestamp: int
    hash: str
    content_type: str = ""
    content: bytes = b""
    etag: str = ""
    last_modified: str = ""
    diff_result_json: str | None = None
    extracted_paths_json: str | None = None


class FileHistoryStore(ABC):
    """Storage and retrieval of file history."""

    @abstractmethod
    def get_last_known_record(self, url: str) -> FileHistoryRecord | None:
        """The most recent record for ``url``, or None."""

    def get_last_known_hash(self, url: str) -> str:
        """Hash of the most recent record for ``url``, or '' when there is none."""
        record = self.get_last_known_record(url)
        return record.hash if record is not None else ""

    @abstractmethod
    def store_file_record(self, record: FileHistoryRecord) -> None:
        """Store a new version of a monitored file."""

    def get_latest_record(self, url: str) -> FileHistoryRecord | None:
        """The latest record for ``url``, or None."""
        return self.get_last_known_record(url)

    @abstractmethod
    def get_records_for_url(self, url: str, limit: int) -> list[FileHistoryRecord]:
        """Up to ``limit`` records for ``url``, newest first."""

    @abstractmethod
    def get_all_records_with_diff(self) -> list[FileHistoryRecord]:
        """All records that carry a diff result."""

    @abstractmethod
    def get_hostnames_with_history(self) -> list[str]:
        """Unique hostnames that have history records."""

    @abstractmethod
    def get_all_latest_diff_results_for_urls(
        self, urls: list[str]
    ) -> dict[str, ContentDiffResult]:
        """The latest diff result for each of ``urls`` that has one."""

    @abstractmethod
    def get_all_diff_results(self) -> list[ContentDiffResult]:
        """Every stored diff result."""