import threading
from datetime import datetime, timezone

from monsterinc.models.notification_models import FileChangeInfo
from monsterinc.monitor.state import EventAggregator, URLRegistry

A = "https://example.com/a.js"
B = "https://example.com/b.js"


def test_add_reports_newness_and_ignores_empty():
    registry = URLRegistry()
    assert registry.add(A) is True
    assert registry.add(A) is False
    assert registry.add("") is False
    assert registry.urls() == [A]


def test_remove():
    registry = URLRegistry()
    registry.add(A)
    registry.add(B)
    assert registry.remove(A) is True
    assert registry.remove(A) is False
    assert registry.urls() == [B]
    assert A not in registry
    assert len(registry) == 1


def test_urls_returns_a_copy():
    registry = URLRegistry()
    registry.add(A)
    urls = registry.urls()
    urls.append(B)
    assert registry.urls() == [A]


def test_lock_for_is_stable_per_url():
    registry = URLRegistry()
    assert registry.lock_for(A) is registry.lock_for(A)
    assert registry.lock_for(A) is not registry.lock_for(B)


def test_prune_drops_locks_of_unmonitored_urls():
    registry = URLRegistry()
    registry.add(A)
    kept = registry.lock_for(A)
    dropped = registry.lock_for(B)
    registry.prune_locks()
    assert registry.lock_for(A) is kept
    assert registry.lock_for(B) is not dropped


def test_concurrent_adds_keep_every_url():
    registry = URLRegistry()
    urls = [f"https://example.com/{n}.js" for n in range(50)]
    threads = [threading.Thread(target=registry.add, args=(u,)) for u in urls]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(registry.urls()) == sorted(urls)


def test_changes_drain_and_clear():
    events = EventAggregator()
    first = FileChangeInfo(url=A, new_hash="h1")
    second = FileChangeInfo(url=B, new_hash="h2")
    events.record_change(first)
    events.record_change(second)
    assert events.drain_changes() == [first, second]
    assert events.drain_changes() == []


def test_changed_urls_are_unique_and_drained_separately():
    events = EventAggregator()
    events.record_change(FileChangeInfo(url=A))
    events.record_change(FileChangeInfo(url=B))
    events.record_change(FileChangeInfo(url=A))
    events.drain_changes()
    assert events.drain_changed_urls() == [A, B]
    assert events.drain_changed_urls() == []


def test_record_error_builds_info():
    events = EventAggregator()
    before = datetime.now(timezone.utc)
    info = events.record_error(A, RuntimeError("boom"), "fetch")
    assert info.url == A
    assert info.error == "boom"
    assert info.source == "fetch"
    assert info.occurred_at >= before
    assert events.drain_errors() == [info]
    assert events.drain_errors() == []


def test_record_error_accepts_text():
    events = EventAggregator()
    events.record_error(B, "disk full", "store_history")
    drained = events.drain_errors()
    assert [(e.url, e.error, e.source) for e in drained] == [(B, "disk full", "store_history")]


def test_concurrent_changes_are_all_recorded():
    events = EventAggregator()

    def worker(n):
        events.record_change(FileChangeInfo(url=f"https://example.com/{n}.js"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(40)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(events.drain_changes()) == 40
    assert len(events.drain_changed_urls()) == 40