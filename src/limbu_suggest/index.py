from __future__ import annotations
import bisect
import logging
import time
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .collation import sort_key, CharKey
from .config import TOP_K
from .models import BuildStats, DictionaryEntry

log = logging.getLogger(__name__)


class SuggestionIndex:
    """
    Immutable snapshot of the dictionary.

    Two views over the same entries:
      * _entries / _keys: entries sorted by script_form under the Limbu
        collation, with their precomputed sort keys (for bisect);
      * _exact: script_form -> entry for O(1) exact lookups.

    Build with SuggestionIndex.build(entries); never mutated afterwards, so
    any number of readers can share one instance without locking.
    """

    __slots__ = ("_entries", "_keys", "_exact", "stats")

    def __init__(self) -> None:
        self._entries: Tuple[DictionaryEntry, ...] = ()
        self._keys: List[Tuple[CharKey, ...]] = []
        self._exact: Dict[str, DictionaryEntry] = {}
        self.stats = BuildStats()

    # ---- Build (once per dictionary load) ----
    @classmethod
    def build(cls, entries: Iterable[DictionaryEntry], *, dropped: int = 0) -> "SuggestionIndex":
        """
        Sort and index entries. Entries without a script_form are skipped and
        counted; `dropped` adds records the decoder already rejected.

        Ties on script_form keep input order (sorted() is stable). In the
        exact-match map the last duplicate in sort order wins.
        """
        t0 = time.perf_counter()
        received = 0
        keyed: List[Tuple[Tuple[CharKey, ...], DictionaryEntry]] = []
        for e in entries:
            received += 1
            if not isinstance(e.script_form, str) or not e.script_form:
                dropped += 1
                continue
            keyed.append((sort_key(e.script_form), e))
        keyed.sort(key=lambda ke: ke[0])

        inst = cls()
        inst._keys = [k for k, _ in keyed]
        inst._entries = tuple(e for _, e in keyed)
        duplicates = 0
        for e in inst._entries:
            if e.script_form in inst._exact:
                duplicates += 1
            inst._exact[e.script_form] = e
        inst.stats = BuildStats(
            received=received,
            indexed=len(inst._entries),
            dropped=dropped,
            duplicates=duplicates,
            seconds=time.perf_counter() - t0,
        )
        log.info(
            "Suggestion index built: indexed=%d dropped=%d duplicates=%d (%.3fs)",
            inst.stats.indexed, inst.stats.dropped, inst.stats.duplicates, inst.stats.seconds,
        )
        return inst

    # ---- Query ----
    def suggest(self, prefix: str, limit: int = TOP_K) -> List[DictionaryEntry]:
        """
        Up to `limit` entries whose script_form starts with `prefix`, in
        collated order. An empty prefix never matches.

        Words sharing a prefix form one contiguous run in collated order, and
        the prefix itself sorts at or before the first of them, so the run
        starts at bisect_left(prefix).
        """
        if not prefix or limit <= 0 or not self._entries:
            return []
        i = bisect.bisect_left(self._keys, sort_key(prefix))
        out: List[DictionaryEntry] = []
        n = len(self._entries)
        while i < n and len(out) < limit:
            e = self._entries[i]
            if not e.script_form.startswith(prefix):
                break
            out.append(e)
            i += 1
        return out

    def lookup(self, word: str) -> Optional[DictionaryEntry]:
        return self._exact.get(word)

    # ---- Introspection ----
    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._exact
