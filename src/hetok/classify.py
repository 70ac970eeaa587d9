"""
Word classifiers used to shortcut encoding of urls, emails, numbers and emoji.

All predicates expect a single whitespace-free word and are pure.
"""

from typing import Final, Literal

import regex as re

_URL_SCHEME: Final[re.Pattern[str]] = re.compile(r"https?://", re.IGNORECASE)
_URL_WWW: Final[re.Pattern[str]] = re.compile(r"www\.", re.IGNORECASE)
_EMAIL: Final[re.Pattern[str]] = re.compile(r"\S+@\S+\.\S+")
_NUMBER: Final[re.Pattern[str]] = re.compile(r"[-+]?[0-9]+(?:[.,][0-9]+)?")
# emoji code points plus the joiners, selectors and modifiers that glue them
_EMOJI_RUN: Final[re.Pattern[str]] = re.compile(r"[\p{Emoji}\p{Emoji_Component}]+")
_UPPER: Final[re.Pattern[str]] = re.compile(r"\p{Lu}")
_CODE_HINT: Final[re.Pattern[str]] = re.compile(r"function\s+|console\.|\{\}")

Category = Literal["url", "email", "num", "emoji"]
Domain = Literal["code", "general"]


def is_url(word: str) -> bool:
    """True if ``word`` starts with an http(s) scheme or contains ``www.``."""
    return _URL_SCHEME.match(word) is not None or _URL_WWW.search(word) is not None


def is_email(word: str) -> bool:
    """True if ``word`` looks like ``local@domain.tld``."""
    return _EMAIL.search(word) is not None


def is_number(word: str) -> bool:
    """True for an optionally signed integer with an optional ``.``/``,`` fraction."""
    return _NUMBER.fullmatch(word) is not None


def is_emoji_only(word: str) -> bool:
    """True if every code point of ``word`` belongs to an emoji sequence."""
    return _EMOJI_RUN.fullmatch(word) is not None


def has_uppercase(word: str) -> bool:
    return _UPPER.search(word) is not None


def classify_word(
    word: str,
    *,
    normalize_urls: bool = True,
    normalize_numbers: bool = True,
    emoji_as_single_token: bool = True,
) -> Category | None:
    """
    Return the shortcut category of ``word`` or ``None``.

    Categories are tested in priority order: url, email, number, emoji. The
    url flag also gates email detection.
    """
    if normalize_urls and is_url(word):
        return "url"
    if normalize_urls and is_email(word):
        return "email"
    if normalize_numbers and is_number(word):
        return "num"
    if emoji_as_single_token and is_emoji_only(word):
        return "emoji"
    return None


def detect_domain(text: str) -> Domain:
    """Coarse guess whether ``text`` is source code; auxiliary metadata only."""
    return "code" if _CODE_HINT.search(text) else "general"


__all__ = [
    "Category",
    "Domain",
    "is_url",
    "is_email",
    "is_number",
    "is_emoji_only",
    "has_uppercase",
    "classify_word",
    "detect_domain",
]
