"""
Limbu word-suggestion engine.

Indexes a Limbu dictionary under the Limbu alphabet order and answers
"top-k completions for this prefix" on every keystroke.

Main Functions:
    submit_dictionary(raw_records): build and publish a new snapshot
    get_suggestions(current_text, limit): prefix completions from the current snapshot
    lookup(word): exact match from the current snapshot
    load_async(source): fetch the dictionary in the background, then submit it

Example Usage:
    from limbu_suggest import load_async, get_suggestions

    load_async()                    # default remote dictionary
    for entry in get_suggestions("ᤀ"):
        print(entry.script_form, entry.phonetic, entry.meanings.en)

Until a dictionary has been published every query returns an empty result.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Optional
import threading

from .config import TOP_K
from .engine import Engine
from .errors import BuildFailure, MalformedRecord
from .index import SuggestionIndex
from .models import BuildStats, DictionaryEntry, Meaning

__version__ = "1.0.0"
__all__ = [
    "Engine", "SuggestionIndex", "DictionaryEntry", "Meaning", "BuildStats",
    "BuildFailure", "MalformedRecord",
    "submit_dictionary", "get_suggestions", "lookup", "load_async", "default_engine",
]

_engine = Engine()


def default_engine() -> Engine:
    return _engine


def submit_dictionary(raw_records: Iterable[Any]) -> Optional[SuggestionIndex]:
    return _engine.submit_dictionary(raw_records)


def get_suggestions(current_text: str, limit: int = TOP_K) -> List[DictionaryEntry]:
    return _engine.get_suggestions(current_text, limit)


def lookup(word: str) -> Optional[DictionaryEntry]:
    return _engine.lookup(word)


def load_async(source: Optional[str] = None) -> Optional[threading.Thread]:
    return _engine.load_async(source)
