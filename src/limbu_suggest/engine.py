# limbu_suggest/engine.py
from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, List, Optional

from . import config as CFG
from .errors import BuildFailure
from .index import SuggestionIndex
from .loader import decode_records, fetch_records
from .models import DictionaryEntry
from .text import current_word, text_before_cursor_window

log = logging.getLogger(__name__)


class Engine:
    """
    Owns the currently published SuggestionIndex snapshot.

    Public API (used by the keyboard glue, CLI and Flask):
      * submit_dictionary(raw_records): decode -> build -> publish
      * load(source) / load_async(source): fetch once, then submit_dictionary
      * get_suggestions(text, limit):     prefix query on the current snapshot
      * lookup(word):                     exact match on the current snapshot

    Readers never lock: they grab self._index once and work on that immutable
    snapshot. Builds are serialized by _build_lock. Each load takes a
    generation number when it starts; a finished build is published only if
    no later-started load has already published, so stale data never
    replaces fresher data.
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self._index: Optional[SuggestionIndex] = None
        self._build_lock = threading.Lock()
        self._gen_lock = threading.Lock()
        self._next_gen = 0
        self._published_gen = 0
        self._ready = threading.Event()
        self._loading_thread: Optional[threading.Thread] = None

    @property
    def index(self) -> Optional[SuggestionIndex]:
        return self._index

    @property
    def ready(self) -> bool:
        return self._index is not None

    @property
    def loading(self) -> bool:
        t = self._loading_thread
        return t is not None and t.is_alive()

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until some snapshot is published (for CLIs and tests, never the query path)."""
        return self._ready.wait(timeout)

    # ------------- ingest -------------

    # /* ~~~ Build a new snapshot from decoded JSON records and publish it ~~~ */
    def submit_dictionary(
        self,
        raw_records: Iterable[Any],
        *,
        generation: Optional[int] = None,
    ) -> Optional[SuggestionIndex]:
        """
        Returns the published index, or None when the build was discarded
        because a later-started load already published.
        """
        if raw_records is None or isinstance(raw_records, (str, bytes, dict)):
            raise BuildFailure(f"expected a sequence of records, got {type(raw_records).__name__}")
        gen = self._start_generation() if generation is None else generation

        with self._build_lock:
            try:
                entries, dropped = decode_records(raw_records)
            except TypeError as exc:
                raise BuildFailure(f"dictionary records are not iterable: {exc}") from exc
            idx = SuggestionIndex.build(entries, dropped=dropped)
            return self._publish(idx, gen)

    # /* ~~~ Fetch once (URL or file) and submit; keeps the old snapshot on failure ~~~ */
    def load(
        self,
        source: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        verbose: bool = False,
    ) -> Optional[SuggestionIndex]:
        if verbose or CFG.VERBOSE:
            logging.basicConfig(level=logging.INFO)

        gen = self._start_generation()
        try:
            raw = fetch_records(source, timeout=timeout)
        except BuildFailure as exc:
            log.warning("Dictionary load failed (%s); keeping current snapshot", exc)
            raise
        return self.submit_dictionary(raw, generation=gen)

    def load_async(
        self,
        source: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Optional[threading.Thread]:
        """
        Start load() on a daemon thread. Returns the thread, or None if a
        load is already running.
        """
        with self._gen_lock:
            if self.loading:
                log.info("A dictionary load is already running; ignoring request")
                return None
            t = threading.Thread(
                target=self._load_worker, args=(source, timeout),
                name="limbu-dictionary-load", daemon=True,
            )
            self._loading_thread = t
            t.start()
        return t

    # ------------- query -------------

    def get_suggestions(self, current_text: str, limit: int = CFG.TOP_K) -> List[DictionaryEntry]:
        idx = self._index
        if idx is None:
            return []
        return idx.suggest(current_text, limit)

    # /* ~~~ Keystroke path: text before cursor -> trailing word -> suggestions ~~~ */
    def suggest_for_input(self, text_before_cursor: str, limit: int = CFG.TOP_K) -> List[DictionaryEntry]:
        word = current_word(text_before_cursor_window(text_before_cursor))
        return self.get_suggestions(word, limit)

    def lookup(self, word: str) -> Optional[DictionaryEntry]:
        idx = self._index
        if idx is None:
            return None
        return idx.lookup(word)

    # ------------- teardown -------------

    def shutdown(self, timeout: Optional[float] = 1.0) -> None:
        t = self._loading_thread
        if t is not None and t.is_alive():
            t.join(timeout)
        with self._gen_lock:
            # loads still in flight become stale and will not publish
            self._published_gen = self._next_gen
            self._loading_thread = None
            self._index = None
            self._ready.clear()
        log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _start_generation(self) -> int:
        with self._gen_lock:
            self._next_gen += 1
            return self._next_gen

    def _publish(self, idx: SuggestionIndex, gen: int) -> Optional[SuggestionIndex]:
        with self._gen_lock:
            if gen <= self._published_gen:
                log.warning(
                    "Discarding stale dictionary build (generation %d, published %d)",
                    gen, self._published_gen,
                )
                return None
            self._index = idx  # single reference swap; readers see old or new
            self._published_gen = gen
            self._ready.set()
        log.info("Published dictionary snapshot: %d words (generation %d)", len(idx), gen)
        return idx

    def _load_worker(self, source: Optional[str], timeout: Optional[float]) -> None:
        try:
            self.load(source, timeout=timeout)
        except BuildFailure:
            # already logged in load(); suggestions stay empty or stale
            return
        except Exception:
            log.exception("Unexpected error while loading dictionary")
