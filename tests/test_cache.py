from __future__ import annotations

import threading
import time
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from chronofmt.lib.cache import FormatterCache
from chronofmt.lib.errors import InvalidPattern, UnknownLocale
from chronofmt.lib.handle import FormatterHandle, compile_handle
from chronofmt.lib.types import FormatPattern


def test_get_returns_same_handle_for_same_pattern(cache: FormatterCache) -> None:
    first = cache.get("d MMM 'of' yyyy")
    second = cache.get("d MMM 'of' yyyy")
    instant = datetime(1992, 6, 23, 17, 6, tzinfo=UTC)

    assert first is second
    assert first.render(instant) == second.render(instant) == "23 Jun of 1992"
    assert len(cache) == 1


def test_format_renders_through_cached_handle(cache: FormatterCache) -> None:
    assert cache.format("yyyy/MM/dd @ HH:mm", datetime(1992, 6, 23, 4, 56)) == (
        "1992/06/23 @ 04:56"
    )
    assert "yyyy/MM/dd @ HH:mm" in cache


def test_distinct_patterns_are_independent(cache: FormatterCache) -> None:
    first = cache.get("HH:mm")
    cache.get("dd MMM @ HH:mm")

    assert cache.get("HH:mm") is first
    assert first.pattern == "HH:mm"
    assert cache.patterns() == ("HH:mm", "dd MMM @ HH:mm")


def test_textually_different_patterns_are_separate_entries(cache: FormatterCache) -> None:
    assert cache.get("yyyy") is not cache.get("YYYY")
    assert len(cache) == 2


def test_handles_bound_to_cache_locale_and_zone() -> None:
    cache = FormatterCache(locale="de_DE", zone=ZoneInfo("Europe/Berlin"))

    handle = cache.get("d MMMM yyyy HH:mm")

    assert handle.locale == cache.locale
    assert handle.zone == cache.zone
    assert handle.render(datetime(1992, 6, 23, 4, 56, tzinfo=UTC)) == "23 Juni 1992 06:56"


def test_invalid_pattern_propagates_and_is_not_stored(cache: FormatterCache) -> None:
    for _ in range(2):
        with pytest.raises(InvalidPattern):
            cache.get("d MMM 'of yyyy")

    assert len(cache) == 0
    assert "d MMM 'of yyyy" not in cache


def test_unrenderable_field_rejected_before_caching(cache: FormatterCache) -> None:
    with pytest.raises(InvalidPattern, match="unsupported field"):
        cache.get("g")

    assert "g" not in cache
    assert cache.patterns() == ()


def test_unknown_locale_fails_at_construction() -> None:
    with pytest.raises(UnknownLocale):
        FormatterCache(locale="not_a_locale")


def test_separate_caches_do_not_share_entries() -> None:
    first = FormatterCache()
    second = FormatterCache()

    assert first.get("HH:mm") is not second.get("HH:mm")


def test_factory_called_once_per_pattern() -> None:
    built: list[str] = []

    def factory(pattern: FormatPattern) -> FormatterHandle:
        built.append(pattern)
        return compile_handle(pattern)

    cache = FormatterCache(factory=factory)
    for _ in range(3):
        cache.get("HH:mm")
        cache.get("d MMM 'of' yyyy")

    assert built == ["HH:mm", "d MMM 'of' yyyy"]


def test_concurrent_first_use_builds_one_handle() -> None:
    workers = 16
    built: list[str] = []
    built_lock = threading.Lock()
    barrier = threading.Barrier(workers)

    def slow_factory(pattern: FormatPattern) -> FormatterHandle:
        with built_lock:
            built.append(pattern)
        time.sleep(0.05)
        return compile_handle(pattern)

    cache = FormatterCache(factory=slow_factory)
    results: list[FormatterHandle] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        handle = cache.get("yyyy/MM/dd @ HH:mm")
        with results_lock:
            results.append(handle)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert built == ["yyyy/MM/dd @ HH:mm"]
    assert len(results) == workers
    assert all(handle is results[0] for handle in results)
