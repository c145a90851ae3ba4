"""Synthesis of concrete chunk paths from a recognised loader shape."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Set

from .exceptions import ShapeInvariantError
from .shapes import ChunkShapeTemplate, ShapeKind

LOGGER = logging.getLogger(__name__)

__all__ = ["ChunkPathEntry", "compose_entries", "compose_paths", "join_base_path", "paths_of", "tables_disjoint"]


@dataclass(frozen=True)
class ChunkPathEntry:
    """One synthesised chunk path and the identifier it was built for."""

    identifier: str
    path: str


def join_base_path(base_path: str, filename: str) -> str:
    """Return ``base_path + filename`` as a root-relative path.

    Leading slashes on the base literal collapse to exactly one, as do
    trailing ones at the base/filename boundary.  A base without a trailing
    slash is a filename prefix and is joined as is.  Absolute URLs
    (``https://cdn/...`` or protocol-relative ``//cdn/...``) are returned
    untouched.
    """

    if "://" in base_path or base_path.startswith("//"):
        return f"{base_path}{filename}"
    if base_path.endswith("/"):
        base_path = base_path.rstrip("/") + "/"
    combined = f"{base_path}{filename}"
    return "/" + combined.lstrip("/")


def _place(template: ChunkShapeTemplate, filename: str) -> str:
    if not template.has_base_path:
        return filename
    return join_base_path(template.base_path, filename)


def _union(*tables: Optional[Mapping[str, str]]) -> List[str]:
    seen: Dict[str, None] = {}
    for table in tables:
        if table:
            for identifier in table:
                seen.setdefault(identifier, None)
    return list(seen)


def tables_disjoint(names: Mapping[str, str], hashes: Mapping[str, str]) -> bool:
    """Return ``True`` when both tables are populated but share no chunk id."""

    return bool(names) and bool(hashes) and set(names).isdisjoint(hashes)


def compose_entries(
    template: ChunkShapeTemplate,
    names: Optional[Mapping[str, str]] = None,
    hashes: Optional[Mapping[str, str]] = None,
) -> List[ChunkPathEntry]:
    """Enumerate one path per usable identifier for ``template``.

    ``names`` is only consulted for the name+hash shape.  For the single-table
    shape ``hashes`` carries the lone table whatever its values are.
    Templates without a base path literal compose bare filenames.
    """

    names = names or {}
    hashes = hashes or {}
    kind = template.kind
    entries: List[ChunkPathEntry] = []

    if kind is ShapeKind.NAME_AND_HASH:
        if tables_disjoint(names, hashes):
            LOGGER.warning(
                "Name table (%d) and hash table (%d) share no chunk ids; skipping manifest",
                len(names),
                len(hashes),
            )
            return entries
        for identifier in _union(names, hashes):
            digest = hashes.get(identifier)
            if not digest:
                LOGGER.debug("Chunk %s has no hash entry; skipped", identifier)
                continue
            segment = names.get(identifier) or identifier
            filename = f"{segment}{template.separator}{digest}{template.extension}"
            entries.append(ChunkPathEntry(identifier, _place(template, filename)))
    elif kind is ShapeKind.HASH_ONLY:
        for identifier, digest in hashes.items():
            entries.append(ChunkPathEntry(identifier, f"{digest}{template.extension}"))
    elif kind is ShapeKind.IDENTIFIER_AND_HASH:
        for identifier, digest in hashes.items():
            filename = f"{identifier}{template.separator}{digest}{template.extension}"
            entries.append(ChunkPathEntry(identifier, _place(template, filename)))
    elif kind is ShapeKind.SINGLE_TABLE:
        for identifier, value in hashes.items():
            entries.append(ChunkPathEntry(identifier, f"{value}{template.extension}"))
    else:
        raise ShapeInvariantError(f"No composition rule for shape {kind!r}")

    return entries


def compose_paths(
    template: ChunkShapeTemplate,
    names: Optional[Mapping[str, str]] = None,
    hashes: Optional[Mapping[str, str]] = None,
) -> Set[str]:
    """Return the deduplicated path set for ``template``."""

    return paths_of(compose_entries(template, names, hashes))


def paths_of(entries: Iterable[ChunkPathEntry]) -> Set[str]:
    return {entry.path for entry in entries}
