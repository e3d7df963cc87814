import json
from urllib.parse import urlsplit

import pytest

from monsterinc.models.content_diff import ContentDiffResult
from monsterinc.models.file_history import (
    FileHistoryRecord,
    FileHistoryStore,
    RecordNotFoundError,
)


class _MemoryStore(FileHistoryStore):
    def __init__(self):
        self._records = []

    def get_last_known_record(self, url):
        matching = [r for r in self._records if r.url == url]
        return max(matching, key=lambda r: r.timestamp) if matching else None

    def store_file_record(self, record):
        self._records.append(record)

    def get_records_for_url(self, url, limit):
        matching = sorted((r for r in self._records if r.url == url), key=lambda r: -r.timestamp)
        return matching[:limit]

    def get_all_records_with_diff(self):
        return [r for r in self._records if r.diff_result_json]

    def get_hostnames_with_history(self):
        return sorted({urlsplit(r.url).hostname for r in self._records})

    def get_all_latest_diff_results_for_urls(self, urls):
        out = {}
        for url in urls:
            record = self.get_last_known_record(url)
            if record and record.diff_result_json:
                out[url] = ContentDiffResult.from_dict(json.loads(record.diff_result_json))
        return out

    def get_all_diff_results(self):
        return [ContentDiffResult.from_dict(json.loads(r.diff_result_json)) for r in self.get_all_records_with_diff()]


URL = "https://example.com/app.js"


def test_store_is_abstract():
    with pytest.raises(TypeError):
        FileHistoryStore()


def test_last_known_hash_empty_without_record():
    store = _MemoryStore()
    store.store_file_record(FileHistoryRecord(url="https://example.com/other.js", timestamp=1, hash="zzz"))
    assert store.get_last_known_hash(URL) == ""
    assert store.get_last_known_hash("https://example.com/other.js") == "zzz"


def test_last_known_hash_is_newest():
    store = _MemoryStore()
    store.store_file_record(FileHistoryRecord(url=URL, timestamp=1, hash="aaa"))
    store.store_file_record(FileHistoryRecord(url=URL, timestamp=2, hash="bbb"))
    assert store.get_last_known_hash(URL) == "bbb"


def test_latest_record_matches_last_known():
    store = _MemoryStore()
    record = FileHistoryRecord(url=URL, timestamp=5, hash="h", content=b"x")
    store.store_file_record(record)
    assert store.get_latest_record(URL) is record
    assert store.get_latest_record("https://example.com/other.js") is None


def test_record_defaults():
    record = FileHistoryRecord(url=URL, timestamp=1, hash="h")
    assert record.diff_result_json is None
    assert record.extracted_paths_json is None
    assert record.content == b""


def test_record_not_found_error():
    err = RecordNotFoundError()
    assert str(err) == "record not found"
    with pytest.raises(LookupError):
        raise err


def test_diff_results_round_trip_through_store():
    store = _MemoryStore()
    diff = ContentDiffResult(content_type="text/html", lines_added=2, old_hash="a", new_hash="b")
    store.store_file_record(
        FileHistoryRecord(url=URL, timestamp=3, hash="b", diff_result_json=json.dumps(diff.to_dict()))
    )
    assert store.get_all_latest_diff_results_for_urls([URL]) == {URL: diff}
    assert store.get_hostnames_with_history() == ["example.com"]