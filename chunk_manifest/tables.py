"""Decoding of the literal lookup tables embedded in chunk loaders.

Loader functions carry their chunk names and content hashes as minified object
literals such as ``{102:"xlsx",133:"pdfmake"}``.  The helpers here work purely
on text:

``decode_table``
    Turn one object-literal span into an ordered ``{id: value}`` mapping.

``iter_object_spans`` / ``extract_object_spans``
    Locate every top-level balanced ``{...}`` span inside a larger expression.
    Braces that appear inside quoted string literals are not counted.

Nothing in this module raises for malformed input; absent or broken data
decodes to an empty result.
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, List, Mapping, Tuple

__all__ = [
    "LookupTable",
    "MIN_HASH_LENGTH",
    "SHORT_HASH_MAX_LENGTH",
    "decode_table",
    "encode_table",
    "iter_object_spans",
    "extract_object_spans",
    "extract_string_literals",
    "skip_quoted",
    "looks_like_hash",
    "looks_like_short_hash",
]

LookupTable = Dict[str, str]

MIN_HASH_LENGTH = 8
SHORT_HASH_MAX_LENGTH = 10

_ENTRY_RE = re.compile(
    r"""(?<![\w$.])(?P<id>\d+)\s*:\s*(?:"(?P<dq>[^"]+)"|'(?P<sq>[^']+)')"""
)
_DOUBLE_QUOTED_RE = re.compile(r'"([^"]+)"')
_HASH_RE = re.compile(r"[0-9a-f]{%d,}" % MIN_HASH_LENGTH, re.IGNORECASE)
_HEX_RE = re.compile(r"[0-9a-f]+", re.IGNORECASE)
_QUOTES = frozenset({'"', "'", "`"})


def decode_table(span: str) -> LookupTable:
    """Decode ``{<int>:"<string>", ...}`` text into an ordered mapping.

    Keys keep their source text.  A key repeated in malformed input keeps its
    last value.  Values are taken literally; escape sequences are not
    interpreted.
    """

    table: LookupTable = {}
    if not span:
        return table
    for match in _ENTRY_RE.finditer(span):
        value = match.group("dq")
        if value is None:
            value = match.group("sq")
        table[match.group("id")] = value
    return table


def encode_table(mapping: Mapping[str, str]) -> str:
    """Render ``mapping`` as minified object-literal text."""

    body = ",".join(f'{key}:"{value}"' for key, value in mapping.items())
    return "{" + body + "}"


# ----------------------------------------------------------------------
def iter_object_spans(text: str) -> Iterator[Tuple[int, int]]:
    """Yield ``(start, end)`` offsets of every top-level balanced ``{...}``."""

    depth = 0
    start = -1
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]

        if ch in _QUOTES:
            i = skip_quoted(text, i)
            continue

        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield start, i + 1
                start = -1

        i += 1


def extract_object_spans(text: str) -> List[str]:
    """Return the text of every top-level balanced ``{...}`` span."""

    return [text[start:end] for start, end in iter_object_spans(text)]


def extract_string_literals(text: str) -> List[str]:
    """Return the contents of every non-empty double-quoted literal."""

    return _DOUBLE_QUOTED_RE.findall(text)


def skip_quoted(text: str, index: int) -> int:
    quote = text[index]
    i = index + 1
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return length


# ----------------------------------------------------------------------
def looks_like_hash(value: str) -> bool:
    """Return ``True`` for hex-only strings of at least eight characters."""

    return bool(_HASH_RE.fullmatch(value or ""))


def looks_like_short_hash(value: str) -> bool:
    """Return ``True`` for hex-only strings no longer than ten characters.

    Used to guess whether a lone table carries hashes or chunk names; short
    hex-looking names are misclassified.
    """

    if not value or len(value) > SHORT_HASH_MAX_LENGTH:
        return False
    return bool(_HEX_RE.fullmatch(value))
