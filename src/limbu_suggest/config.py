from __future__ import annotations
import os

# Remote dictionary (JSON list of word records)
DICTIONARY_URL: str = os.environ.get(
    "LIMBU_DICTIONARY_URL",
    "https://raw.githubusercontent.com/ingsha09/limbu-dictionary-api/main/data.json?v=3",
)

# seconds; applies to the single fetch, no retries
FETCH_TIMEOUT: float = float(os.environ.get("LIMBU_FETCH_TIMEOUT", "15"))

# suggestions per keystroke
TOP_K: int = 5

# how much text before the cursor the keyboard hands us
TEXT_BEFORE_CURSOR: int = 50

# Progress logging (set LIMBU_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("LIMBU_VERBOSE") == "1"
