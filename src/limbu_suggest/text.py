from __future__ import annotations

from .config import TEXT_BEFORE_CURSOR


def text_before_cursor_window(text: str, size: int = TEXT_BEFORE_CURSOR) -> str:
    """Last `size` characters, mirroring what the keyboard can read back."""
    if size <= 0:
        return ""
    return text[-size:]


def current_word(text: str) -> str:
    """Trailing run of non-whitespace characters; "" if text ends in whitespace."""
    i = len(text)
    while i > 0 and not text[i - 1].isspace():
        i -= 1
    return text[i:]
