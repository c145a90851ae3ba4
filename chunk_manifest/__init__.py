"""Static reconstruction of bundler chunk manifests."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "analyse",
    "reconstruct",
    "ManifestReport",
    "ChunkManifestError",
    "ShapeInvariantError",
    "decode_table",
    "match_shape",
    "scan_fallback",
    "scan_literal_references",
    "resolve_chunk_urls",
]

_EXPORTS = {
    "analyse": ".engine",
    "reconstruct": ".engine",
    "ManifestReport": ".report",
    "ChunkManifestError": ".exceptions",
    "ShapeInvariantError": ".exceptions",
    "decode_table": ".tables",
    "match_shape": ".shapes",
    "scan_fallback": ".fallback",
    "scan_literal_references": ".literals",
    "resolve_chunk_urls": ".resolve",
}


def __getattr__(name: str) -> Any:  # pragma: no cover - trivial delegator
    if name in _EXPORTS:
        module = import_module(_EXPORTS[name], __name__)
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
