"""Tests for path synthesis from matched templates."""

from __future__ import annotations

import pytest

from chunk_manifest.composer import (
    ChunkPathEntry,
    compose_entries,
    compose_paths,
    join_base_path,
)
from chunk_manifest.exceptions import ShapeInvariantError
from chunk_manifest.shapes import ChunkShapeTemplate, HashSource, NameSource, ShapeKind


def _template(kind: ShapeKind, base_path: str = "static/js/", **overrides) -> ChunkShapeTemplate:
    values = dict(
        kind=kind,
        base_path=base_path,
        name_source=NameSource.TABLE,
        separator=".",
        hash_source=HashSource.TABLE,
        extension=".chunk.js",
    )
    values.update(overrides)
    return ChunkShapeTemplate(**values)


def test_name_and_hash_uses_identifier_when_unnamed() -> None:
    template = _template(ShapeKind.NAME_AND_HASH)
    entries = compose_entries(
        template,
        names={"102": "xlsx"},
        hashes={"13": "552027bd", "102": "d55488e0"},
    )
    assert entries == [
        ChunkPathEntry("102", "/static/js/xlsx.d55488e0.chunk.js"),
        ChunkPathEntry("13", "/static/js/13.552027bd.chunk.js"),
    ]


def test_name_and_hash_skips_identifiers_without_hash() -> None:
    template = _template(ShapeKind.NAME_AND_HASH)
    paths = compose_paths(
        template,
        names={"1": "admin", "2": "reports"},
        hashes={"1": "ab12cd34", "3": "ef56ab78"},
    )
    assert paths == {"/static/js/admin.ab12cd34.chunk.js", "/static/js/3.ef56ab78.chunk.js"}


def test_name_and_hash_with_disjoint_tables_composes_nothing() -> None:
    template = _template(ShapeKind.NAME_AND_HASH)
    assert compose_paths(template, names={"5": "vendor"}, hashes={"9": "abc12345"}) == set()


def test_name_and_hash_without_name_table() -> None:
    template = _template(ShapeKind.NAME_AND_HASH)
    assert compose_paths(template, names={}, hashes={"9": "abc12345"}) == {
        "/static/js/9.abc12345.chunk.js"
    }


def test_identical_paths_collapse() -> None:
    template = _template(ShapeKind.SINGLE_TABLE, base_path="", has_base_path=False, extension=".js")
    assert compose_paths(template, hashes={"1": "shared", "2": "shared"}) == {"shared.js"}


def test_hash_only_paths_are_bare_filenames() -> None:
    template = _template(
        ShapeKind.HASH_ONLY,
        base_path="",
        name_source=NameSource.NONE,
        separator="",
        extension=".c.js",
        has_base_path=False,
    )
    assert compose_paths(template, hashes={"29": "4618cca8a574facf2276"}) == {
        "4618cca8a574facf2276.c.js"
    }


def test_identifier_and_hash_is_root_relative() -> None:
    template = _template(ShapeKind.IDENTIFIER_AND_HASH, name_source=NameSource.IDENTIFIER)
    assert compose_paths(template, hashes={"13": "552027bd"}) == {"/static/js/13.552027bd.chunk.js"}


@pytest.mark.parametrize(
    "base_path, filename, expected",
    [
        ("static/js/", "a.js", "/static/js/a.js"),
        ("/static/js/", "a.js", "/static/js/a.js"),
        ("//static/js/", "a.js", "//static/js/a.js"),
        ("static/js//", "a.js", "/static/js/a.js"),
        ("js/chunk-", "a.js", "/js/chunk-a.js"),
        ("", "a.js", "/a.js"),
        ("https://cdn.example.com/js/", "a.js", "https://cdn.example.com/js/a.js"),
    ],
)
def test_join_base_path(base_path: str, filename: str, expected: str) -> None:
    assert join_base_path(base_path, filename) == expected


def test_unknown_template_kind_is_an_invariant_violation() -> None:
    template = _template(ShapeKind.NAME_AND_HASH)
    broken = ChunkShapeTemplate(
        kind="bogus",  # type: ignore[arg-type]
        base_path=template.base_path,
        name_source=template.name_source,
        separator=template.separator,
        hash_source=template.hash_source,
        extension=template.extension,
    )
    with pytest.raises(ShapeInvariantError):
        compose_entries(broken, hashes={"1": "ab12cd34"})


def test_template_without_base_path_composes_bare_filenames() -> None:
    template = _template(ShapeKind.IDENTIFIER_AND_HASH, base_path="", has_base_path=False, extension=".js")
    assert compose_paths(template, hashes={"4": "ab12cd34"}) == {"4.ab12cd34.js"}
    template = _template(ShapeKind.NAME_AND_HASH, base_path="", has_base_path=False, extension=".js")
    assert compose_paths(template, names={"4": "app"}, hashes={"4": "ab12cd34"}) == {"app.ab12cd34.js"}
