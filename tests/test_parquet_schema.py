import json
from datetime import datetime, timezone

import pytest

from monsterinc.models.parquet_schema import (
    ParquetProbeResult,
    int_from_optional,
    string_from_optional,
    time_to_unix_milli_optional,
)
from monsterinc.models.probe_result import Technology
from monsterinc.models.time_utils import unix_milli_to_time_optional


def test_time_none_gives_none():
    assert time_to_unix_milli_optional(None) is None


def test_epoch_is_zero():
    assert time_to_unix_milli_optional(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0


@pytest.mark.parametrize("ms", [0, 1, 1_700_000_000_123, 86_400_000])
def test_millis_round_trip(ms):
    assert time_to_unix_milli_optional(unix_milli_to_time_optional(ms)) == ms


def test_naive_time_treated_as_utc():
    aware = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    naive = datetime(2024, 5, 1, 12, 0)
    assert time_to_unix_milli_optional(naive) == time_to_unix_milli_optional(aware)


def test_optional_helpers():
    assert string_from_optional(None) == ""
    assert string_from_optional("abc") == "abc"
    assert int_from_optional(None) == 0
    assert int_from_optional(42) == 42


def test_to_probe_result_full():
    headers = {"Server": "nginx", "Content-Type": "text/html"}
    row = ParquetProbeResult(
        original_url="http://example.com",
        scan_timestamp=1_700_000_000_000,
        final_url="https://example.com/",
        status_code=200,
        content_length=512,
        content_type="text/html",
        title="Home",
        web_server="nginx",
        technologies=["nginx", "PHP"],
        ip_address=["192.0.2.1"],
        root_target_url="http://example.com",
        method="GET",
        headers_json=json.dumps(headers),
        diff_status="existing",
        first_seen_timestamp=1_600_000_000_000,
        last_seen_timestamp=1_700_000_000_000,
    )
    result = row.to_probe_result()
    assert result.input_url == "http://example.com"
    assert result.final_url == "https://example.com/"
    assert result.status_code == 200
    assert result.content_length == 512
    assert result.headers == headers
    assert result.technologies == [Technology("nginx"), Technology("PHP")]
    assert result.ips == ["192.0.2.1"]
    assert result.url_status == "existing"
    assert result.method == "GET"
    assert time_to_unix_milli_optional(result.timestamp) == 1_700_000_000_000
    assert time_to_unix_milli_optional(result.oldest_scan_timestamp) == 1_600_000_000_000


def test_to_probe_result_minimal():
    result = ParquetProbeResult(original_url="http://example.com").to_probe_result()
    assert result.input_url == "http://example.com"
    assert result.final_url == ""
    assert result.status_code == 0
    assert result.headers == {}
    assert result.technologies == []
    assert result.timestamp is None
    assert result.oldest_scan_timestamp is None


def test_invalid_headers_json_gives_empty_headers():
    row = ParquetProbeResult(original_url="http://example.com", headers_json="{not json")
    assert row.to_probe_result().headers == {}


def test_error_is_carried():
    row = ParquetProbeResult(original_url="http://example.com", probe_error="timeout")
    assert row.to_probe_result().error == "timeout"