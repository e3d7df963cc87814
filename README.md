# monsterinc

Data models for web probe results, helpers that turn raw probe output into
those models, and a service that watches files over HTTP, records every
version it sees and reports what changed. The package has no third-party
dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Contents

- `monsterinc.models` — dataclasses shared by the package:
  - `probe_result`: `ProbeResult`, `Technology`, `TLSData`.
  - `url_diff`: `URLStatus` (`new`, `old`, `existing`), `DiffedURL`,
    `URLDiffResult` with `count_statuses()`.
  - `content_diff`: `DiffOperation`, `ContentDiff`, `ContentDiffResult`
    (`to_dict()` / `from_dict()`).
  - `findings`: `ExtractedPath`, `SecretFinding` (`to_dict()` / `from_dict()`).
  - `assets`: `AssetType`, `URLSource`, `Asset`, `Target`.
  - `monitored_file`: `MonitoredFile`, `MonitoredFileUpdate`.
  - `file_history`: `FileHistoryRecord`, the abstract `FileHistoryStore`,
    `RecordNotFoundError`.
  - `notification_models`: Discord webhook payloads (`DiscordMessagePayload`,
    `DiscordEmbed` and its parts, each serialising with empty fields left
    out), `ScanSummaryData`, `ScanStatus`, `FileChangeInfo`,
    `MonitorFetchErrorInfo`, `MonitorCycleCompleteData`,
    `default_scan_summary_data()`.
  - `report_data`: page data for HTML reports (`ReportPageData`,
    `DiffReportPageData`, `ProbeResultDisplay`, `SecretStats`, ...),
    `to_probe_result_display()`, `default_report_page_data()`,
    `default_diff_report_page_data()`.
  - `parquet_schema`: `ParquetProbeResult`, a flat row form of a probe result
    with `to_probe_result()`, plus `time_to_unix_milli_optional()`.
  - `time_utils`: `unix_milli_to_time_optional()`, `format_time_optional()`.
- `monsterinc.httpxrunner`
  - `runner`: `RunnerConfig`, `ProbeOptions`, `configure_options()`,
    `map_result()` and `Runner`.
  - `results`: `set_probe_error()`, `is_probe_success()`,
    `probe_has_technologies()`, `probe_has_tls()`.
- `monsterinc.monitor`
  - `fetcher`: `Fetcher` — conditional GET (`If-None-Match`,
    `If-Modified-Since`) with a size limit; raises `NotModifiedError` on 304,
    `HTTPStatusError` on other non-200 answers, `NetworkError` when the
    request fails and `ContentTooLargeError` above the limit, all subclasses
    of `FetchError`.
  - `processor`: `Processor` — SHA-256 of the content as a
    `MonitoredFileUpdate`.
  - `state`: `URLRegistry` and `EventAggregator`, thread-safe bookkeeping.
  - `service`: `MonitoringService` and the abstract collaborators
    `Notifier`, `ContentDiffer`, `DiffReporter`, `PathExtractor`.
- `monsterinc.logging_setup` — `create_logger(LogConfig(...))`.

## Monitoring files

```python
from monsterinc.monitor.fetcher import Fetcher
from monsterinc.monitor.processor import Processor
from monsterinc.monitor.service import MonitoringService

service = MonitoringService(
    history_store,                       # your FileHistoryStore subclass
    Fetcher(max_content_size=5 * 1024 * 1024, timeout=30),
    Processor(),
    notifier=None,
    differ=None,
    diff_reporter=None,
    path_extractor=None,
    store_full_content_on_change=True,
    aggregation_interval=0,
)

service.start(["https://example.com/static/app.js"])
service.check_url("https://example.com/static/app.js")
data = service.trigger_cycle_end_report()
service.stop()
```

`check_url()` fetches the file, hashes it, compares the hash with the
store's last known record and stores the new version. A URL with no
previous record, or with a different hash, becomes a `FileChangeInfo`.
For JavaScript content types the path extractor, if given, fills
`extracted_paths`. When the file changed, a differ is given and
`store_full_content_on_change` is true, a `ContentDiffResult` is computed,
stored with the record as JSON, and handed to the diff reporter for a
single-change report.

Fetch, processing and storage failures are collected as
`MonitorFetchErrorInfo` entries. `trigger_cycle_end_report()` sends the
collected errors to the notifier, asks the diff reporter for an aggregated
report over all monitored URLs, sends a `MonitorCycleCompleteData` to the
notifier and returns it.

With `aggregation_interval > 0` a background thread runs every that many
seconds: it sends collected errors and clears collected change events
(logging only their count), so changes recorded before a tick do not reach
the next cycle report. `stop()` sends an `INTERRUPTED` `ScanSummaryData`
to the notifier and stops that thread.

## Probe results

`map_result()` takes one probe result as a JSON-shaped mapping. It reads
the keys `input`, `method`, `timestamp`, `status_code`, `content_length`,
`content_type`, `error`, `url`, `title`, `webserver`, `body`, `time`,
`header`, `tech`, `a`, `cname`, `asn` and `tls`.

```python
from monsterinc.httpxrunner.runner import map_result
from monsterinc.httpxrunner.results import is_probe_success

result = map_result(
    {"input": "example.com", "url": "https://example.com/", "status_code": 200,
     "time": "0.25s", "tech": ["Nginx"]},
    root_url="https://example.com",
)
assert is_probe_success(result)
assert result.has_technologies()
assert result.duration == 0.25
```

`Runner(config, root_target_url)` builds `ProbeOptions` from a
`RunnerConfig` and collects results. `run(enumerate_targets)` calls
`enumerate_targets(options, on_result)` once when targets are configured;
the callable does the probing and passes each raw result to `on_result`.
`results()` returns what was collected.

## Logging

```python
from monsterinc.logging_setup import LogConfig, create_logger

log = create_logger(LogConfig(log_level="debug", log_format="json",
                              log_file="logs/monsterinc.log"))
```

Levels: `trace`, `debug`, `info`, `warn`, `error`, `fatal`, `panic`,
`disabled`; an unknown level falls back to `info`. Formats: `console`
(coloured), `text` (plain) and `json`; an unknown format falls back to
`console`. Output goes to stderr and, when `log_file` is set, also to a
rotating file (`max_log_size_mb`, 100 when unset; `max_log_backups`).

## What the package does not do

- It has no command-line program.
- It does not probe hosts itself: `Runner.run()` needs a callable that does
  the probing.
- It ships no `FileHistoryStore` implementation and reads or writes no
  columnar files; `ParquetProbeResult` is only the row shape.
- It sends no notifications, renders no HTML reports and computes no
  content diffs; `Notifier`, `DiffReporter` and `ContentDiffer` are
  interfaces to implement.
- It does not scan content for secrets; the `secret_findings` of the
  changes the monitor records stay empty.