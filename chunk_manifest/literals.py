"""Literal script references found anywhere in a bundle.

Separate from loader reconstruction: these patterns pick up file names that
appear verbatim in the source (``"123.abcd.chunk.js"``, ``import("./x.js")``,
``src="/static/js/main.js"``...).  The scan is noisy, so callers opt in.
"""

from __future__ import annotations

import logging
import re
from typing import Set, Tuple

LOGGER = logging.getLogger(__name__)

__all__ = ["LITERAL_PATTERNS", "scan_literal_references"]

LITERAL_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r'"([^"]+\.chunk\.js)"'),
    re.compile(r"'([^']+\.chunk\.js)'"),
    re.compile(r"""import\(\s*["']([^"']+\.js)["']\s*\)"""),
    re.compile(r"""["']([a-zA-Z0-9_-]+\.js)["']"""),
    re.compile(r"""src=["']([^"']+\.js)["']"""),
    re.compile(r"""href=["']([^"']+\.js)["']"""),
    re.compile(r"""\+\s*["']([^"']+\.js)["']"""),
    re.compile(r"""\{\d+:\s*["']([^"']+\.js)["']\}"""),
)

_SKIPPED_PREFIXES = ("data:", "http://", "https://")


def scan_literal_references(text: str) -> Set[str]:
    """Return root-relative paths for script names quoted in ``text``."""

    found: Set[str] = set()
    if not text:
        return found
    for pattern in LITERAL_PATTERNS:
        for match in pattern.finditer(text):
            reference = match.group(1)
            if reference.startswith(_SKIPPED_PREFIXES):
                continue
            if reference.startswith("./"):
                reference = reference[2:]
            if not reference.startswith("/"):
                reference = "/" + reference
            found.add(reference)
    LOGGER.debug("Literal scan found %d script reference(s)", len(found))
    return found
