"""Command line entry point for chunk manifest reconstruction."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

from .engine import analyse
from .io_utils import read_text, write_json, write_text
from .literals import scan_literal_references
from .logging_config import close_trace_log, open_trace_log
from .resolve import rank_bootstrap_candidates, resolve_chunk_urls

LOGGER = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_EMPTY = 1
EXIT_UNREADABLE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunk-manifest",
        description=(
            "List the lazily loaded chunk files a bundler runtime can request, "
            "recovered statically from its chunk loader."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Runtime/bundle JavaScript files to inspect.",
    )
    parser.add_argument(
        "--base-url",
        help="URL of the inspected script; chunk paths are resolved against it.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit a JSON document with per-file reports instead of plain paths.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the result to this file instead of stdout.",
    )
    parser.add_argument(
        "--include-literals",
        action="store_true",
        help="Also add script names quoted verbatim in the source.",
    )
    parser.add_argument(
        "--include-css",
        action="store_true",
        help="Also add stylesheet chunks from a miniCssF loader.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a per-file summary of the recognised loader to stderr.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "--debug-log",
        type=Path,
        help="Write a DEBUG trace of the matchers to this file.",
    )
    return parser


def _collect(path: Path, args: argparse.Namespace) -> Dict[str, Any]:
    text = read_text(path)
    report = analyse(text, source=str(path))
    found: Set[str] = set(report.paths)
    if args.include_css:
        found |= report.css_paths
    if args.include_literals:
        found |= scan_literal_references(text)
    if args.summary:
        print(report.to_text(), file=sys.stderr)

    result: Dict[str, Any] = report.to_json()
    result["selected"] = sorted(found)
    if args.base_url:
        result["selected"] = resolve_chunk_urls(found, args.base_url)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(message)s",
    )

    trace_logger: Optional[logging.Logger] = None
    if args.debug_log:
        trace_logger = open_trace_log(args.debug_log)

    try:
        files: List[Dict[str, Any]] = []
        merged: Set[str] = set()
        unreadable = False

        ordered = rank_bootstrap_candidates(str(path) for path in args.paths)
        for name in ordered:
            path = Path(name)
            try:
                result = _collect(path, args)
            except OSError as exc:
                LOGGER.error("Could not read %s: %s", path, exc)
                unreadable = True
                continue
            files.append(result)
            merged.update(result["selected"])

        paths = sorted(merged)
        if args.json:
            document = {"files": files, "paths": paths}
            if args.output:
                write_json(args.output, document)
            else:
                print(json.dumps(document, indent=2))
        else:
            rendered = "\n".join(paths)
            if args.output:
                write_text(args.output, rendered + "\n" if rendered else "")
            elif rendered:
                print(rendered)

        LOGGER.info("Found %d chunk path(s) across %d file(s)", len(paths), len(files))
    finally:
        if trace_logger is not None:
            close_trace_log(trace_logger)

    if unreadable:
        return EXIT_UNREADABLE
    return EXIT_FOUND if paths else EXIT_EMPTY


if __name__ == "__main__":  # pragma: no cover - CLI wrapper
    raise SystemExit(main())
