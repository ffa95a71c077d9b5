"""String inspection, transformation, extraction and validation helpers."""

from __future__ import annotations

import re
import secrets
import string
from typing import Mapping

import regex

_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
_WHITESPACE_SET = frozenset(_WHITESPACE)
_WHITESPACE_RE = re.compile("[" + re.escape(_WHITESPACE) + "]+")
_GRAPHEME_RE = regex.compile(r"\X")

_NUMBER_RE = re.compile(r"\d+")
_EMAIL_SEARCH_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b")
_URL_RE = re.compile(r"https?://[^\s]+")
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}")
_PHONE_CN_RE = re.compile(r"1[3-9]\d{9}")
_ID_CARD_CN_RE = re.compile(
    r"[1-9]\d{5}(18|19|20)\d{2}((0[1-9])|(1[0-2]))(([0-2][1-9])|10|20|30|31)\d{3}[0-9Xx]"
)
_HTML_TAG_RE = re.compile(r"<[^>]*>")

_ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits

_MASK64 = 2**64 - 1


def _graphemes(s: str) -> list[str]:
    return _GRAPHEME_RE.findall(s)


def _byte_len(s: str) -> int:
    return len(s.encode("utf-8"))


def _split_whitespace(s: str) -> list[str]:
    return [word for word in _WHITESPACE_RE.split(s) if word]


def is_blank(s: str) -> bool:
    """True if the string is empty or only whitespace."""
    return not s.strip(_WHITESPACE)


def is_not_blank(s: str) -> bool:
    return not is_blank(s)


def truncate(s: str, max_length: int) -> str:
    """Keep whole graphemes whose UTF-8 size totals at most max_length bytes."""
    kept: list[str] = []
    length = 0
    for grapheme in _graphemes(s):
        size = _byte_len(grapheme)
        if length + size > max_length:
            break
        kept.append(grapheme)
        length += size
    return "".join(kept)


def truncate_with_ellipsis(s: str, max_length: int) -> str:
    """Truncate to fit max_length bytes, ending with '...' when shortened."""
    if _byte_len(s) <= max_length:
        return s
    return truncate(s, max(max_length - 3, 0)) + "..."


def remove_whitespace(s: str) -> str:
    return "".join(ch for ch in s if ch not in _WHITESPACE_SET)


def camel_to_snake(s: str) -> str:
    """Convert camelCase to snake_case."""
    out: list[str] = []
    prev_lowercase = False
    for ch in s:
        if ch.isupper() and prev_lowercase:
            out.append("_")
        out.append(ch.lower()[:1] or ch)
        prev_lowercase = ch.islower()
    return "".join(out)


def snake_to_camel(s: str) -> str:
    """Convert snake_case to camelCase."""
    out: list[str] = []
    capitalize_next = False
    for ch in s:
        if ch == "_":
            capitalize_next = True
        elif capitalize_next:
            out.append(ch.upper()[:1] or ch)
            capitalize_next = False
        else:
            out.append(ch)
    return "".join(out)


def capitalize(s: str) -> str:
    """Upper-case the first character, leaving the rest unchanged."""
    if not s:
        return ""
    return s[0].upper() + s[1:]


def title_case(s: str) -> str:
    """Capitalise each whitespace-separated word, joining with single spaces."""
    return " ".join(capitalize(word) for word in _split_whitespace(s))


def reverse(s: str) -> str:
    """Reverse by grapheme clusters."""
    return "".join(reversed(_graphemes(s)))


def char_count(s: str) -> int:
    """Number of grapheme clusters."""
    return len(_graphemes(s))


def pad_left(s: str, width: int, pad_char: str = " ") -> str:
    missing = width - char_count(s)
    return s if missing <= 0 else pad_char * missing + s


def pad_right(s: str, width: int, pad_char: str = " ") -> str:
    missing = width - char_count(s)
    return s if missing <= 0 else s + pad_char * missing


def pad_center(s: str, width: int, pad_char: str = " ") -> str:
    missing = width - char_count(s)
    if missing <= 0:
        return s
    left = missing // 2
    return pad_char * left + s + pad_char * (missing - left)


def remove_prefix(s: str, prefix: str) -> str:
    return s.removeprefix(prefix)


def remove_suffix(s: str, suffix: str) -> str:
    return s.removesuffix(suffix)


def extract_numbers(s: str) -> list[str]:
    return _NUMBER_RE.findall(s)


def extract_emails(s: str) -> list[str]:
    return [m.group(0) for m in _EMAIL_SEARCH_RE.finditer(s)]


def extract_urls(s: str) -> list[str]:
    return _URL_RE.findall(s)


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def is_valid_phone_cn(phone: str) -> bool:
    """Check the shape of a mainland China mobile number."""
    return _PHONE_CN_RE.fullmatch(phone) is not None


def is_valid_id_card_cn(id_card: str) -> bool:
    """Check the shape of an 18-character mainland China ID number."""
    return _ID_CARD_CN_RE.fullmatch(id_card) is not None


def random_string(length: int) -> str:
    """Random ASCII letters and digits."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def random_numeric_string(length: int) -> str:
    """Random decimal digits."""
    return "".join(secrets.choice(string.digits) for _ in range(length))


def similarity(s1: str, s2: str) -> float:
    """1 minus the edit distance relative to the longer UTF-8 length."""
    distance = levenshtein_distance(s1, s2)
    max_len = max(_byte_len(s1), _byte_len(s2))
    if max_len == 0:
        return 1.0
    return 1.0 - distance / max_len


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance counted in characters."""
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def template_replace(template: str, variables: Mapping[str, str]) -> str:
    """Replace each '{key}' placeholder with its value."""
    result = template
    for key, value in variables.items():
        result = result.replace(f"{{{key}}}", value)
    return result


def strip_html(html: str) -> str:
    return _HTML_TAG_RE.sub("", html)


def escape_html(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def word_count(s: str) -> int:
    return len(_split_whitespace(s))


def _rotl(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & _MASK64


def _sip_round(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & _MASK64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _MASK64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _MASK64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def _siphash13(data: bytes) -> int:
    v0 = 0x736F6D6570736575
    v1 = 0x646F72616E646F6D
    v2 = 0x6C7967656E657261
    v3 = 0x7465646279746573
    tail_start = len(data) - len(data) % 8
    for start in range(0, tail_start, 8):
        m = int.from_bytes(data[start : start + 8], "little")
        v3 ^= m
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        v0 ^= m
    last = ((len(data) & 0xFF) << 56) | int.from_bytes(data[tail_start:], "little")
    v3 ^= last
    v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    v0 ^= last
    v2 ^= 0xFF
    for _ in range(3):
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    return v0 ^ v1 ^ v2 ^ v3


def hash_string(s: str) -> int:
    """Stable unsigned 64-bit hash (SipHash-1-3 with zero keys)."""
    return _siphash13(s.encode("utf-8") + b"\xff")