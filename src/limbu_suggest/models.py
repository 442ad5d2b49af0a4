# src/limbu_suggest/models.py
"""
Data models for the Limbu suggestion engine.

This module defines small, focused data containers:

- Meaning: the two translations carried by every dictionary word.
- DictionaryEntry: one word of the dictionary, the unit we index and return.
- BuildStats: counters describing how a snapshot was built.

These classes do not contain business logic; ordering lives in collation.py
and indexing in index.py.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Meaning:
    """
    Translations of a word keyed by language code.

    Attributes
    ----------
    en : str
        Primary language (English).
    ne : str
        Secondary language (Nepali).
    """
    en: str = ""
    ne: str = ""

    def get(self, lang: str, default: Optional[str] = None) -> Optional[str]:
        if lang == "en":
            return self.en
        if lang == "ne":
            return self.ne
        return default

    def to_dict(self) -> dict[str, str]:
        return {"en": self.en, "ne": self.ne}


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """
    One dictionary word.

    Attributes
    ----------
    id : str
        Opaque identifier from the source data.
    script_form : str
        The word written in Limbu script. This is the only indexed field;
        entries with an empty script_form are never indexed.
    phonetic : str
        Latin transliteration, display only.
    meanings : Meaning
        Primary/secondary translations.
    group : Optional[str]
        Optional classification tag.
    status : str
        Review tag such as "verified" or "draft". Carried through untouched.
    """
    id: str
    script_form: str
    phonetic: str = ""
    meanings: Meaning = Meaning()
    group: Optional[str] = None
    status: str = ""

    def to_dict(self) -> dict:
        """JSON shape used by the HTTP API and the CLI (source field names)."""
        return {
            "id": self.id,
            "limbu": self.script_form,
            "phonetic": self.phonetic,
            "meaning": self.meanings.to_dict(),
            "group": self.group,
            "status": self.status,
        }


@dataclass(frozen=True, slots=True)
class BuildStats:
    received: int = 0     # records handed to build()
    indexed: int = 0      # entries in the sorted sequence
    dropped: int = 0      # malformed records (decode + empty script_form)
    duplicates: int = 0   # script forms overwritten in the exact-match map
    seconds: float = 0.0
