"""
Utilities for normalizing input text and rendering tokens for display.
"""

import unicodedata

import regex as re

_WHITESPACE = re.compile(r"\s+")


def _normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim both ends."""
    return _WHITESPACE.sub(" ", text).strip()


def _split_words(text: str) -> tuple[str, list[str]]:
    """Return the normalized text and its space-delimited words."""
    normalized = _normalize_whitespace(text)
    # "".split(" ") would yield [""]
    words = normalized.split(" ") if normalized else []
    return normalized, words


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)
