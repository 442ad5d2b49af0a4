# src/e2e/test_engine.py

import json
import logging
import threading
from pathlib import Path

import pytest

import limbu_suggest
import limbu_suggest.engine as E
from limbu_suggest.engine import Engine
from limbu_suggest.errors import BuildFailure
from limbu_suggest.models import DictionaryEntry

A, KA, KHA, HA = "ᤀ", "ᤁ", "ᤂ", "ᤜ"


def _rec(form, id=None, **extra):
    r = {"id": id or f"id-{form}", "limbu": form, "phonetic": "", "meaning": {"en": "", "ne": ""}, "status": "draft"}
    r.update(extra)
    return r


OLD = [_rec(A + KA, "old-1"), _rec(KA + A, "old-2")]
NEW = [_rec(A + KHA, "new-1"), _rec(HA, "new-2"), _rec(A + HA, "new-3")]


def _forms(rows):
    return [r.script_form for r in rows]


def test_no_dictionary_yet_means_empty_results():
    eng = Engine()
    assert eng.ready is False
    assert eng.get_suggestions(A, 5) == []
    assert eng.suggest_for_input(A) == []
    assert eng.lookup(A) is None


def test_submit_publishes_snapshot():
    eng = Engine()
    idx = eng.submit_dictionary(OLD)
    assert idx is not None and eng.index is idx
    assert eng.ready and eng.wait_ready(0)
    assert _forms(eng.get_suggestions(A)) == [A + KA]
    assert eng.lookup(KA + A).id == "old-2"


def test_submit_drops_record_without_limbu():
    eng = Engine()
    idx = eng.submit_dictionary([_rec(A), {"id": "bad", "phonetic": "x"}])
    assert idx.stats.dropped == 1
    assert [e.id for e in eng.get_suggestions(A, 10)] == [f"id-{A}"]
    assert eng.lookup("") is None


def test_entry_with_non_string_form_is_dropped_not_fatal():
    eng = Engine()
    idx = eng.submit_dictionary([
        DictionaryEntry(id="bad", script_form=5),
        DictionaryEntry(id="empty", script_form=""),
        {"id": "2", "limbu": A},
    ])
    assert idx is not None
    assert [e.id for e in eng.get_suggestions(A, 10)] == ["2"]
    assert idx.stats.dropped == 2
    assert idx.stats.indexed == 1


@pytest.mark.parametrize("raw", [None, "ᤀᤁ", {"limbu": A}, 12])
def test_unparseable_input_is_build_failure(raw):
    eng = Engine()
    eng.submit_dictionary(OLD)
    with pytest.raises(BuildFailure):
        eng.submit_dictionary(raw)
    assert _forms(eng.get_suggestions(A)) == [A + KA]


def test_reload_replaces_snapshot_wholesale():
    eng = Engine()
    first = eng.submit_dictionary(OLD)
    second = eng.submit_dictionary(NEW)
    assert eng.index is second and first is not second
    assert eng.lookup(A + KA) is None
    assert _forms(eng.get_suggestions(A)) == [A + KHA, A + HA]
    # the old snapshot itself is untouched
    assert _forms(first.suggest(A)) == [A + KA]


def test_failed_load_keeps_previous_snapshot(tmp_path: Path, caplog):
    eng = Engine()
    eng.submit_dictionary(OLD)
    with caplog.at_level(logging.WARNING, logger="limbu_suggest.engine"):
        with pytest.raises(BuildFailure):
            eng.load(str(tmp_path / "missing.json"))
    assert "keeping current snapshot" in caplog.text
    assert _forms(eng.get_suggestions(A)) == [A + KA]


def test_load_from_file(tmp_path: Path):
    p = tmp_path / "data.json"
    p.write_text(json.dumps(NEW, ensure_ascii=False), encoding="utf-8")
    eng = Engine()
    idx = eng.load(str(p))
    assert len(idx) == 3
    assert eng.lookup(HA).id == "new-2"


def test_suggest_for_input_uses_trailing_word():
    eng = Engine()
    eng.submit_dictionary(OLD + NEW)
    assert _forms(eng.suggest_for_input(f"{HA} {KA}")) == [KA + A]
    assert eng.suggest_for_input(f"{A} ") == []
    long_text = "x" * 200 + " " + A + KA
    assert _forms(eng.suggest_for_input(long_text)) == [A + KA]


def test_load_async_failure_is_logged_not_raised(monkeypatch, caplog):
    def boom(source=None, timeout=None):
        raise BuildFailure("offline")

    monkeypatch.setattr(E, "fetch_records", boom)
    eng = Engine()
    with caplog.at_level(logging.WARNING, logger="limbu_suggest.engine"):
        t = eng.load_async("https://example.org/data.json")
        t.join(5)
    assert not t.is_alive()
    assert eng.ready is False
    assert eng.get_suggestions(A) == []
    assert "offline" in caplog.text


@pytest.mark.e2e
def test_stale_build_is_discarded(monkeypatch):
    """A load that started earlier but finishes later must not overwrite newer data."""
    release = threading.Event()
    slow_started = threading.Event()

    def fake_fetch(source=None, timeout=None):
        if source == "slow":
            slow_started.set()
            release.wait(5)
            return OLD
        return NEW

    monkeypatch.setattr(E, "fetch_records", fake_fetch)
    eng = Engine()
    t = eng.load_async("slow")
    assert slow_started.wait(5)
    # second background load is refused while one is running
    assert eng.load_async("fast") is None

    eng.load("fast")
    release.set()
    t.join(5)

    assert eng.lookup(A + KHA) is not None
    assert eng.lookup(A + KA) is None
    assert _forms(eng.get_suggestions(A)) == [A + KHA, A + HA]


@pytest.mark.e2e
def test_load_finishing_after_shutdown_does_not_publish(monkeypatch):
    release = threading.Event()
    started = threading.Event()

    def fake_fetch(source=None, timeout=None):
        started.set()
        release.wait(5)
        return NEW

    monkeypatch.setattr(E, "fetch_records", fake_fetch)
    eng = Engine()
    t = eng.load_async("slow")
    assert started.wait(5)
    eng.shutdown(timeout=0.05)

    release.set()
    t.join(5)
    assert not t.is_alive()
    assert eng.ready is False
    assert eng.get_suggestions(A) == []
    assert eng.lookup(HA) is None

    # the engine is still usable afterwards
    assert eng.submit_dictionary(OLD) is not None
    assert _forms(eng.get_suggestions(A)) == [A + KA]


@pytest.mark.e2e
def test_concurrent_load_async_starts_one_thread(monkeypatch):
    release = threading.Event()

    def fake_fetch(source=None, timeout=None):
        release.wait(5)
        return OLD

    monkeypatch.setattr(E, "fetch_records", fake_fetch)
    eng = Engine()
    barrier = threading.Barrier(8)
    started = []

    def caller():
        barrier.wait(5)
        started.append(eng.load_async("x"))

    callers = [threading.Thread(target=caller) for _ in range(8)]
    for c in callers:
        c.start()
    for c in callers:
        c.join(5)
    try:
        assert len([t for t in started if t is not None]) == 1
    finally:
        release.set()
        eng.shutdown(timeout=5)


@pytest.mark.e2e
def test_readers_only_see_complete_snapshots():
    eng = Engine()
    eng.submit_dictionary(OLD)
    expected = ({A + KA}, {A + KHA, A + HA})
    errors = []
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            got = set(_forms(eng.get_suggestions(A, 10)))
            if got not in expected:
                errors.append(got)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for r in readers:
        r.start()
    try:
        for i in range(50):
            eng.submit_dictionary(NEW if i % 2 == 0 else OLD)
    finally:
        stop.set()
        for r in readers:
            r.join(5)
    assert errors == []


def test_module_level_surface():
    eng = limbu_suggest.default_engine()
    try:
        limbu_suggest.submit_dictionary(OLD)
        assert _forms(limbu_suggest.get_suggestions(A, 5)) == [A + KA]
        assert limbu_suggest.lookup(KA + A).id == "old-2"
    finally:
        eng.shutdown()
    assert limbu_suggest.get_suggestions(A, 5) == []
