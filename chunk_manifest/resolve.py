"""Helpers for the code that fetches what the engine finds.

The engine only returns paths.  Turning them into URLs and choosing which
scripts to inspect first belong to the caller; these pure helpers cover both.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence
from urllib.parse import urljoin, urlsplit

LOGGER = logging.getLogger(__name__)

__all__ = ["PRIORITY_KEYWORDS", "rank_bootstrap_candidates", "resolve_chunk_urls"]

# Script names that usually carry the runtime chunk loader.
PRIORITY_KEYWORDS: Sequence[str] = ("runtime", "main", "app", "vendor", "manifest", "bundle")


def resolve_chunk_urls(paths: Iterable[str], script_url: str) -> List[str]:
    """Resolve chunk ``paths`` against the URL of the script that listed them.

    Root-relative paths resolve against the script's origin, bare filenames
    against its directory.  ``data:`` URIs and paths that do not produce an
    http(s) URL are skipped.
    """

    resolved = set()
    for path in paths:
        if not path or path.startswith("data:"):
            continue
        try:
            url = urljoin(script_url, path)
            scheme = urlsplit(url).scheme
        except ValueError as exc:
            LOGGER.warning("Could not resolve chunk URL %s: %s", path, exc)
            continue
        if scheme not in ("http", "https"):
            LOGGER.warning("Could not resolve chunk URL %s against %s", path, script_url)
            continue
        resolved.add(url)
    return sorted(resolved)


def _keyword_score(name: str) -> int:
    lowered = name.lower()
    return sum(1 for keyword in PRIORITY_KEYWORDS if keyword in lowered)


def rank_bootstrap_candidates(names: Iterable[str]) -> List[str]:
    """Order script names so the likeliest loader hosts come first."""

    return sorted(names, key=_keyword_score, reverse=True)
