"""Exception hierarchy for the chunk manifest engine."""

from __future__ import annotations


class ChunkManifestError(Exception):
    """Base class for all chunk manifest related errors."""


class ShapeInvariantError(ChunkManifestError):
    """Raised when a matcher hands the composer a template it cannot compose."""


__all__ = ["ChunkManifestError", "ShapeInvariantError"]
