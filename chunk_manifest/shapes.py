"""Structural recognisers for chunk loader expressions.

A bundler runtime composes each lazily loaded chunk's URL inside a one
parameter loader function, usually assigned to ``__webpack_require__.u``
(minified to ``n.u``, ``r.u``...).  The body is a concatenation of literal
strings and lookups into object literals keyed by chunk id.  Four body shapes
are recognised, tried in this order:

1. ``"static/js/"+({102:"xlsx"}[e]||e)+"."+{102:"d55488e0"}[e]+".chunk.js"``
2. ``({29:"4618cca8a574facf2276"}[e]+".c.js")``
3. ``"static/js/"+e+"."+{13:"552027bd"}[e]+".chunk.js"``
4. ``{29:"4618cca8"}[e]+".js"``

The order matters: later shapes are looser and would swallow the earlier ones.
Matchers only slice out the raw table text; decoding happens in
:mod:`chunk_manifest.tables`.

The ``miniCssF``/``cssF`` stylesheet loader is recognised separately by
:func:`match_css_manifest` so its tables never mix with the script chunks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

__all__ = [
    "ShapeKind",
    "NameSource",
    "HashSource",
    "ChunkShapeTemplate",
    "ShapeMatch",
    "ShapeMatcher",
    "SHAPE_MATCHERS",
    "CSS_MATCHERS",
    "match_shape",
    "match_css_manifest",
]


class ShapeKind(Enum):
    NAME_AND_HASH = "name+hash"
    HASH_ONLY = "hash-only"
    IDENTIFIER_AND_HASH = "identifier+hash"
    SINGLE_TABLE = "single-table"


class NameSource(Enum):
    NONE = "none"
    TABLE = "table"
    IDENTIFIER = "identifier"


class HashSource(Enum):
    NONE = "none"
    TABLE = "table"


@dataclass(frozen=True)
class ChunkShapeTemplate:
    """How one recognised loader form composes a chunk path."""

    kind: ShapeKind
    base_path: str
    name_source: NameSource
    separator: str
    hash_source: HashSource
    extension: str
    has_base_path: bool = True

    @property
    def requires_hash(self) -> bool:
        return self.hash_source is HashSource.TABLE


@dataclass(frozen=True)
class ShapeMatch:
    """A recognised loader expression and the raw text of its tables."""

    template: ChunkShapeTemplate
    name_span: Optional[str]
    hash_span: Optional[str]
    start: int
    end: int
    parameter: str
    asset: str = "js"

    @property
    def kind(self) -> ShapeKind:
        return self.template.kind

    @property
    def text_span(self) -> Tuple[int, int]:
        return self.start, self.end


# ----------------------------------------------------------------------
# Pattern fragments.  Every fragment tolerates whitespace between tokens so
# both minified and pretty-printed runtimes are accepted.

_IDENT = r"[A-Za-z_$][\w$]*"
_PLUS = r"\s*\+\s*"


def _head(prop: str) -> str:
    return (
        rf"(?<![\w$]){prop}\s*=\s*"
        rf"(?:\(?\s*(?P<bparam>{_IDENT})\s*\)?\s*=>\s*\{{\s*return\b"
        rf"|\(?\s*(?P<param>{_IDENT})\s*\)?\s*=>"
        rf"|function\s*\(\s*(?P<fparam>{_IDENT})\s*\)\s*\{{\s*return\b)\s*"
    )


def _string(name: str) -> str:
    return rf"""(?:"(?P<{name}>[^"]*)"|'(?P<{name}_sq>[^']*)')"""


def _table(name: str) -> str:
    return rf"(?P<{name}>\{{[^{{}}]*\}})"


def _index(name: str) -> str:
    return rf"\[\s*(?P<{name}>{_IDENT})\s*\]"


def _echo(name: str) -> str:
    return rf"(?P<{name}>{_IDENT})"


def _literal(match: re.Match[str], name: str) -> str:
    value = match.group(name)
    if value is None:
        value = match.group(f"{name}_sq")
    return value or ""


def _present(match: re.Match[str], name: str) -> bool:
    return match.group(name) is not None or match.group(f"{name}_sq") is not None


_JS_HEAD = _head("u")
_CSS_HEAD = _head(r"(?:miniCssF|cssF)")

_NAME_AND_HASH_RE = re.compile(
    _JS_HEAD
    + r"\(?\s*"
    + rf"(?:{_string('prefix')}{_PLUS})?"
    + r"\(\s*" + _table("names") + _index("name_index")
    + r"\s*\|\|\s*" + _echo("fallback") + r"\s*\)"
    + _PLUS + _string("separator")
    + _PLUS + _table("hashes") + _index("hash_index")
    + _PLUS + _string("extension")
)

_HASH_ONLY_RE = re.compile(
    _JS_HEAD
    + r"\(\s*" + _table("hashes") + _index("hash_index")
    + _PLUS + _string("extension") + r"\s*\)"
)

_IDENTIFIER_AND_HASH_RE = re.compile(
    _JS_HEAD
    + r"\(?\s*"
    + rf"(?:{_string('prefix')}{_PLUS})?"
    + _echo("echo")
    + _PLUS + _string("separator")
    + _PLUS + _table("hashes") + _index("hash_index")
    + _PLUS + _string("extension")
)

_SINGLE_TABLE_RE = re.compile(
    _JS_HEAD
    + r"\(?\s*" + _table("table") + _index("table_index")
    + _PLUS + _string("extension")
)

_CSS_IDENTIFIER_AND_HASH_RE = re.compile(
    _CSS_HEAD
    + r"\(?\s*"
    + rf"(?:{_string('prefix')}{_PLUS})?"
    + _echo("echo")
    + _PLUS + _string("separator")
    + _PLUS + _table("hashes") + _index("hash_index")
    + _PLUS + _string("extension")
)

_CSS_HASH_RE = re.compile(
    _CSS_HEAD
    + r"\(?\s*"
    + _string("prefix")
    + _PLUS + _table("hashes") + _index("hash_index")
    + _PLUS + _string("extension")
)


# ----------------------------------------------------------------------
def _build_name_and_hash(match: re.Match[str]) -> Tuple[ChunkShapeTemplate, Optional[str], Optional[str]]:
    template = ChunkShapeTemplate(
        kind=ShapeKind.NAME_AND_HASH,
        base_path=_literal(match, "prefix"),
        name_source=NameSource.TABLE,
        separator=_literal(match, "separator"),
        hash_source=HashSource.TABLE,
        extension=_literal(match, "extension"),
        has_base_path=_present(match, "prefix"),
    )
    return template, match.group("names"), match.group("hashes")


def _build_hash_only(match: re.Match[str]) -> Tuple[ChunkShapeTemplate, Optional[str], Optional[str]]:
    template = ChunkShapeTemplate(
        kind=ShapeKind.HASH_ONLY,
        base_path="",
        name_source=NameSource.NONE,
        separator="",
        hash_source=HashSource.TABLE,
        extension=_literal(match, "extension"),
        has_base_path=False,
    )
    return template, None, match.group("hashes")


def _build_identifier_and_hash(match: re.Match[str]) -> Tuple[ChunkShapeTemplate, Optional[str], Optional[str]]:
    template = ChunkShapeTemplate(
        kind=ShapeKind.IDENTIFIER_AND_HASH,
        base_path=_literal(match, "prefix"),
        name_source=NameSource.IDENTIFIER,
        separator=_literal(match, "separator"),
        hash_source=HashSource.TABLE,
        extension=_literal(match, "extension"),
        has_base_path=_present(match, "prefix"),
    )
    return template, None, match.group("hashes")


def _build_single_table(match: re.Match[str]) -> Tuple[ChunkShapeTemplate, Optional[str], Optional[str]]:
    template = ChunkShapeTemplate(
        kind=ShapeKind.SINGLE_TABLE,
        base_path="",
        name_source=NameSource.NONE,
        separator="",
        hash_source=HashSource.TABLE,
        extension=_literal(match, "extension"),
        has_base_path=False,
    )
    return template, None, match.group("table")


def _build_css_hash(match: re.Match[str]) -> Tuple[ChunkShapeTemplate, Optional[str], Optional[str]]:
    # The stylesheet loader that only looks up a hash still names files
    # ``<id>.<hash>``.
    template = ChunkShapeTemplate(
        kind=ShapeKind.IDENTIFIER_AND_HASH,
        base_path=_literal(match, "prefix"),
        name_source=NameSource.IDENTIFIER,
        separator=".",
        hash_source=HashSource.TABLE,
        extension=_literal(match, "extension"),
    )
    return template, None, match.group("hashes")


_Builder = Callable[[re.Match[str]], Tuple[ChunkShapeTemplate, Optional[str], Optional[str]]]


class ShapeMatcher:
    """One loader body template plus the recogniser for it."""

    def __init__(
        self,
        name: str,
        pattern: re.Pattern[str],
        builder: _Builder,
        identifier_groups: Sequence[str],
        *,
        asset: str = "js",
    ) -> None:
        self.name = name
        self.pattern = pattern
        self.builder = builder
        self.identifier_groups = tuple(identifier_groups)
        self.asset = asset

    def __repr__(self) -> str:
        return f"ShapeMatcher({self.name!r})"

    def match(self, text: str) -> Optional[ShapeMatch]:
        """Return the first consistent occurrence of this shape in ``text``."""

        for match in self.pattern.finditer(text):
            parameter = match.group("bparam") or match.group("param") or match.group("fparam")
            if not self._consistent(match, parameter):
                LOGGER.debug(
                    "%s candidate at %d ignored: lookups do not use parameter %r",
                    self.name,
                    match.start(),
                    parameter,
                )
                continue
            template, name_span, hash_span = self.builder(match)
            return ShapeMatch(
                template=template,
                name_span=name_span,
                hash_span=hash_span,
                start=match.start(),
                end=match.end(),
                parameter=parameter,
                asset=self.asset,
            )
        return None

    def _consistent(self, match: re.Match[str], parameter: str) -> bool:
        return all(match.group(group) == parameter for group in self.identifier_groups)


SHAPE_MATCHERS: Tuple[ShapeMatcher, ...] = (
    ShapeMatcher(
        "name+hash",
        _NAME_AND_HASH_RE,
        _build_name_and_hash,
        ("name_index", "fallback", "hash_index"),
    ),
    ShapeMatcher("hash-only", _HASH_ONLY_RE, _build_hash_only, ("hash_index",)),
    ShapeMatcher(
        "identifier+hash",
        _IDENTIFIER_AND_HASH_RE,
        _build_identifier_and_hash,
        ("echo", "hash_index"),
    ),
    ShapeMatcher("single-table", _SINGLE_TABLE_RE, _build_single_table, ("table_index",)),
)

CSS_MATCHERS: Tuple[ShapeMatcher, ...] = (
    ShapeMatcher(
        "css identifier+hash",
        _CSS_IDENTIFIER_AND_HASH_RE,
        _build_identifier_and_hash,
        ("echo", "hash_index"),
        asset="css",
    ),
    ShapeMatcher("css hash", _CSS_HASH_RE, _build_css_hash, ("hash_index",), asset="css"),
)


def _first_match(matchers: Sequence[ShapeMatcher], text: str) -> Optional[ShapeMatch]:
    if not text:
        return None
    for matcher in matchers:
        found = matcher.match(text)
        if found is not None:
            LOGGER.debug("Matched %s loader at [%d, %d)", matcher.name, found.start, found.end)
            return found
    return None


def match_shape(text: str) -> Optional[ShapeMatch]:
    """Return the highest-priority script chunk shape found in ``text``."""

    return _first_match(SHAPE_MATCHERS, text)


def match_css_manifest(text: str) -> Optional[ShapeMatch]:
    """Return the stylesheet chunk loader found in ``text``, if any."""

    return _first_match(CSS_MATCHERS, text)
