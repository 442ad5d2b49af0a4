"""
Limbu collation order.

The Limbu alphabet is not in code-point order, so words cannot be sorted or
range-searched with plain str comparison. Every character gets a key
(rank, code point): rank is the position in ALPHABET, or UNKNOWN_RANK for
anything else (vowel signs, digits, Latin...). Comparing the per-character key
tuples gives the same answer as compare(), including "a strict prefix sorts
first" and "empty string is the minimum", so sorted() and bisect can use
sort_key() directly.
"""

from __future__ import annotations
from typing import Dict, Tuple

# Canonical letter order used by the keyboard.
ALPHABET: Tuple[str, ...] = (
    "\u1900",  # A
    "\u1901",  # KA
    "\u1902",  # KHA
    "\u1903",  # GA
    "\u1904",  # GHA
    "\u1905",  # NGA
    "\u1906",  # CA
    "\u1907",  # CHA
    "\u1908",  # JA
    "\u190B",  # TA
    "\u190C",  # THA
    "\u190D",  # DA
    "\u190E",  # DHA
    "\u190F",  # NA
    "\u1910",  # PA
    "\u1911",  # PHA
    "\u1912",  # BA
    "\u1913",  # BHA
    "\u1914",  # MA
    "\u1915",  # YA
    "\u1916",  # RA
    "\u1917",  # LA
    "\u1918",  # WA
    "\u1919",  # SHA
    "\u191B",  # SA
    "\u191C",  # HA
)

_RANKS: Dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}

# Greater than any real rank: unknown characters sort after all letters.
UNKNOWN_RANK: int = len(ALPHABET)

CharKey = Tuple[int, int]


def rank(ch: str) -> int:
    """Position of ch in ALPHABET, or UNKNOWN_RANK."""
    return _RANKS.get(ch, UNKNOWN_RANK)


def char_key(ch: str) -> CharKey:
    # code point only separates characters that share UNKNOWN_RANK
    return (_RANKS.get(ch, UNKNOWN_RANK), ord(ch))


def sort_key(s: str) -> Tuple[CharKey, ...]:
    """Tuple key ordering strings exactly like compare()."""
    return tuple(char_key(ch) for ch in s)


def compare(a: str, b: str) -> int:
    """
    Three-way comparison under the Limbu order: -1, 0 or 1.

    Position by position; the first differing rank decides. When ranks tie on
    different characters (both unknown) the code point decides. If one string
    is a strict prefix of the other, the shorter one sorts first.
    """
    for ca, cb in zip(a, b):
        if ca == cb:
            continue
        ka, kb = char_key(ca), char_key(cb)
        return -1 if ka < kb else 1
    if len(a) == len(b):
        return 0
    return -1 if len(a) < len(b) else 1
