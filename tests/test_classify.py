"""Unit tests for word classifiers."""

import pytest

from hetok.classify import (
    classify_word,
    detect_domain,
    has_uppercase,
    is_email,
    is_emoji_only,
    is_number,
    is_url,
)


@pytest.mark.parametrize(
    "word, expected",
    [
        ("http://example.com", True),
        ("HTTPS://example.com/x", True),
        ("www.example.com", True),
        ("see:www.example.com", True),
        ("example.com", False),
        ("ftp://example.com", False),
    ],
)
def test_is_url(word, expected):
    """Urls need an http(s) scheme prefix or a www. part."""
    assert is_url(word) is expected


@pytest.mark.parametrize(
    "word, expected",
    [
        ("test@example.com", True),
        ("a.b+c@sub.example.co.uk", True),
        ("test@example", False),
        ("@example.com", False),
    ],
)
def test_is_email(word, expected):
    """Emails need text around the @ and a dot after it."""
    assert is_email(word) is expected


@pytest.mark.parametrize(
    "word, expected",
    [
        ("123", True),
        ("-42", True),
        ("+3,14", True),
        ("123.45", True),
        ("1.2.3", False),
        ("12a", False),
        (".5", False),
        ("٣", False),
    ],
)
def test_is_number(word, expected):
    """Numbers are signed digit runs with an optional single fraction."""
    assert is_number(word) is expected


@pytest.mark.parametrize(
    "word, expected",
    [
        ("🎉", True),
        ("❤️", True),
        ("👍🏽", True),
        ("👨‍👩‍👧", True),
        ("🇫🇷", True),
        ("hi🎉", False),
        ("123", True),
        ("#", True),
        ("#a", False),
    ],
)
def test_is_emoji_only(word, expected):
    """Emoji words may carry joiners and modifiers; digits and '#' count as emoji."""
    assert is_emoji_only(word) is expected


def test_has_uppercase():
    """Any uppercase letter counts, not only the first."""
    assert has_uppercase("mcDonald")
    assert has_uppercase("Élan")
    assert not has_uppercase("hello")


def test_classify_priority():
    """Url beats email beats number beats emoji."""
    assert classify_word("http://user@example.com") == "url"
    assert classify_word("user@example.com") == "email"
    assert classify_word("42") == "num"
    assert classify_word("🎉") == "emoji"
    assert classify_word("word") is None


def test_classify_flags():
    """Disabled categories are skipped."""
    assert classify_word("user@example.com", normalize_urls=False) is None
    # digits are emoji code points, so a number falls through to emoji
    assert classify_word("42", normalize_numbers=False) == "emoji"
    assert classify_word("42", normalize_numbers=False, emoji_as_single_token=False) is None
    assert classify_word("🎉", emoji_as_single_token=False) is None


def test_detect_domain():
    """Code hints flag text as code."""
    assert detect_domain("function  foo") == "code"
    assert detect_domain("console.log(x)") == "code"
    assert detect_domain("const x = {}") == "code"
    assert detect_domain("functional programming") == "general"
