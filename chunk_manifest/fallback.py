"""Loose extraction for loader expressions no shape matcher recognised.

When the loader body uses a form none of the structural templates know, the
scanner still looks inside every ``u = e => ...`` / ``u = function(e){...}``
assignment, decodes each object literal it can find there and keeps the table
values that look like content hashes.  Each such value becomes
``<value>.js``.  The result over-approximates on purpose; bare string
literals are collected for diagnostics only and never become paths.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set, Tuple

from .tables import (
    decode_table,
    extract_object_spans,
    extract_string_literals,
    looks_like_hash,
    skip_quoted,
)

LOGGER = logging.getLogger(__name__)

__all__ = [
    "FALLBACK_EXTENSION",
    "FALLBACK_EXTENT_LIMIT",
    "FallbackResult",
    "find_loader_assignments",
    "scan_fallback",
]

FALLBACK_EXTENSION = ".js"
FALLBACK_EXTENT_LIMIT = 4096

_ASSIGNMENT_HEAD_RE = re.compile(
    r"(?<![\w$])u\s*=\s*"
    r"(?:\(?\s*[A-Za-z_$][\w$]*\s*\)?\s*=>"
    r"|function\s*\(\s*[A-Za-z_$][\w$]*\s*\)\s*(?P<body>\{))"
)
_QUOTES = frozenset({'"', "'", "`"})
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


@dataclass
class FallbackResult:
    """Everything the loose scan found, paths plus diagnostics."""

    paths: Set[str] = field(default_factory=set)
    assignments: List[str] = field(default_factory=list)
    tables: List[Dict[str, str]] = field(default_factory=list)
    literals: List[str] = field(default_factory=list)


def _assignment_extent(text: str, start: int, in_body: bool) -> int:
    """Return the end offset of the loader expression beginning at ``start``.

    Arrow bodies end at the first top-level ``;`` or ``,`` or at a closing
    bracket with no opener.  Function bodies end at their closing brace.
    """

    limit = min(len(text), start + FALLBACK_EXTENT_LIMIT)
    depth = 1 if in_body else 0
    i = start
    while i < limit:
        ch = text[i]
        if ch in _QUOTES:
            i = skip_quoted(text, i)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            if depth == 0:
                return i
            depth -= 1
            if depth == 0 and in_body:
                return i + 1
        elif ch in ";," and depth == 0:
            return i
        i += 1
    return min(i, limit)


def _iter_loader_bodies(text: str) -> Iterator[Tuple[str, str]]:
    # Heads nested inside an extent already scanned are not scanned again.
    pos = 0
    while True:
        match = _ASSIGNMENT_HEAD_RE.search(text, pos)
        if match is None:
            return
        in_body = match.group("body") is not None
        body_start = match.end()
        end = _assignment_extent(text, body_start, in_body)
        body_end = end - 1 if in_body and text[end - 1 : end] == "}" else end
        yield text[match.start() : end], text[body_start:body_end]
        pos = max(end, match.end())


def find_loader_assignments(text: str) -> List[str]:
    """Return the source text of every loader assignment in ``text``."""

    if not text:
        return []
    return [assignment for assignment, _ in _iter_loader_bodies(text)]


def scan_fallback(text: str) -> FallbackResult:
    """Collect hash-looking table values from unrecognised loader assignments."""

    result = FallbackResult()
    if not text:
        return result
    for assignment, body in _iter_loader_bodies(text):
        result.assignments.append(assignment)
        spans = extract_object_spans(body)
        if not spans:
            LOGGER.debug("Loader assignment without object literals: %.80s", assignment)
            continue
        result.literals.extend(extract_string_literals(assignment))
        for span in spans:
            table = decode_table(span)
            if not table:
                continue
            result.tables.append(table)
            for value in table.values():
                if looks_like_hash(value):
                    result.paths.add(f"{value}{FALLBACK_EXTENSION}")

    if result.assignments:
        LOGGER.debug(
            "Fallback scan: %d assignment(s), %d table(s), %d path(s)",
            len(result.assignments),
            len(result.tables),
            len(result.paths),
        )
    return result
