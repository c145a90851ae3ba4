"""Reconstruct the chunk paths a bundler runtime can load.

``reconstruct`` is the entry point used by callers that only need the path
set; ``analyse`` performs the same work and keeps the intermediate results in
a :class:`~chunk_manifest.report.ManifestReport`.

Both functions are pure: they never touch the network or the filesystem, keep
no state between calls and never raise for malformed input text.
"""

from __future__ import annotations

import logging
from typing import Optional, Set, Union

from .composer import compose_entries, compose_paths, paths_of, tables_disjoint
from .fallback import scan_fallback
from .report import ManifestReport
from .shapes import ShapeKind, match_css_manifest, match_shape
from .tables import decode_table, looks_like_short_hash

LOGGER = logging.getLogger(__name__)

__all__ = ["analyse", "reconstruct"]

TextInput = Union[str, bytes, None]


def _coerce_text(text: TextInput) -> str:
    if text is None:
        return ""
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


def _note_stylesheets(text: str, report: ManifestReport) -> None:
    css = match_css_manifest(text)
    if css is None:
        return
    hashes = decode_table(css.hash_span or "")
    report.css_paths = compose_paths(css.template, None, hashes)
    LOGGER.info(
        "Stylesheet loader found with %d chunk(s); not part of the script manifest",
        len(hashes),
    )


def analyse(bootstrap_text: TextInput, source: Optional[str] = None) -> ManifestReport:
    """Recognise the loader in ``bootstrap_text`` and describe what it loads."""

    text = _coerce_text(bootstrap_text)
    report = ManifestReport(source=source)
    if not text:
        return report

    _note_stylesheets(text, report)

    match = match_shape(text)
    if match is not None:
        template = match.template
        names = decode_table(match.name_span or "")
        hashes = decode_table(match.hash_span or "")
        entries = compose_entries(template, names, hashes)

        report.shape = template.kind.value
        report.base_path = template.base_path
        report.separator = template.separator
        report.extension = template.extension
        report.name_count = len(names)
        report.hash_count = len(hashes)
        report.entries = entries
        report.paths = paths_of(entries)

        if template.kind is ShapeKind.SINGLE_TABLE and hashes:
            hashlike = all(looks_like_short_hash(value) for value in hashes.values())
            report.table_role = "hash" if hashlike else "name"
        if template.kind is ShapeKind.NAME_AND_HASH and tables_disjoint(names, hashes):
            report.warnings.append("name and hash tables share no chunk ids")

        LOGGER.info(
            "Matched %s loader: %d name(s), %d hash(es), %d path(s)",
            report.shape,
            len(names),
            len(hashes),
            len(report.paths),
        )
        return report

    LOGGER.debug("No known loader shape matched; trying fallback scan")
    fallback = scan_fallback(text)
    if fallback.assignments:
        report.shape = "fallback"
        report.fallback_tables = len(fallback.tables)
        report.fallback_literals = list(fallback.literals)
        report.paths = set(fallback.paths)
        LOGGER.info(
            "Fallback scan decoded %d table(s), %d path(s)",
            len(fallback.tables),
            len(fallback.paths),
        )
    return report


def reconstruct(bootstrap_text: TextInput) -> Set[str]:
    """Return every chunk path the loader in ``bootstrap_text`` can produce."""

    return set(analyse(bootstrap_text).paths)
