"""Tests for URL resolution and candidate ranking helpers."""

from __future__ import annotations

from chunk_manifest.resolve import rank_bootstrap_candidates, resolve_chunk_urls

SCRIPT = "https://example.com/app/static/js/runtime-main.1a2b3c4d.js"


def test_root_relative_paths_resolve_against_origin() -> None:
    urls = resolve_chunk_urls(["/static/js/xlsx.d55488e0.chunk.js"], SCRIPT)
    assert urls == ["https://example.com/static/js/xlsx.d55488e0.chunk.js"]


def test_bare_filenames_resolve_against_script_directory() -> None:
    urls = resolve_chunk_urls(["4618cca8a574facf2276.c.js"], SCRIPT)
    assert urls == ["https://example.com/app/static/js/4618cca8a574facf2276.c.js"]


def test_data_uris_and_duplicates_are_dropped() -> None:
    urls = resolve_chunk_urls(
        ["data:text/javascript,1", "/a.js", "/a.js", "", "https://cdn.example.org/b.js"],
        SCRIPT,
    )
    assert urls == ["https://cdn.example.org/b.js", "https://example.com/a.js"]


def test_non_http_base_is_skipped(caplog) -> None:
    assert resolve_chunk_urls(["a.js"], "runtime.js") == []
    assert "Could not resolve chunk URL a.js" in caplog.text


def test_runtime_scripts_rank_first() -> None:
    names = [
        "https://example.com/static/js/787.12ab34cd.chunk.js",
        "https://example.com/static/js/main.aa11bb22.js",
        "https://example.com/static/js/runtime-main.1a2b3c4d.js",
        "https://example.com/static/js/polyfill.js",
    ]
    assert rank_bootstrap_candidates(names) == [
        "https://example.com/static/js/runtime-main.1a2b3c4d.js",
        "https://example.com/static/js/main.aa11bb22.js",
        "https://example.com/static/js/787.12ab34cd.chunk.js",
        "https://example.com/static/js/polyfill.js",
    ]
