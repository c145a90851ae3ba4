"""Structured summary of one manifest reconstruction."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .composer import ChunkPathEntry


@dataclass
class ManifestReport:
    """Summarises a single bootstrap file for maintainers."""

    source: Optional[str] = None
    shape: Optional[str] = None
    base_path: Optional[str] = None
    separator: Optional[str] = None
    extension: Optional[str] = None
    name_count: int = 0
    hash_count: int = 0
    table_role: Optional[str] = None
    entries: List[ChunkPathEntry] = field(default_factory=list)
    paths: Set[str] = field(default_factory=set)
    css_paths: Set[str] = field(default_factory=set)
    fallback_tables: int = 0
    fallback_literals: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.shape is not None and self.shape != "fallback"

    def to_text(self) -> str:
        """Format the report as a human-readable summary."""

        lines: List[str] = []
        if self.source:
            lines.append(f"Source: {self.source}")
        lines.append(f"Loader shape: {self.shape or 'none'}")
        if self.matched:
            lines.append(f"Base path: {self.base_path!r}")
            lines.append(f"Separator: {self.separator!r}")
            lines.append(f"Extension: {self.extension!r}")
            lines.append(f"Decoded {self.name_count} names, {self.hash_count} hashes")
        if self.table_role:
            lines.append(f"Table values look like: {self.table_role}")
        if self.shape == "fallback":
            lines.append(f"Fallback tables: {self.fallback_tables}")
            if self.fallback_literals:
                lines.append(f"String literals: {len(self.fallback_literals)}")
        lines.append(f"Chunk paths: {len(self.paths)}")
        for path in sorted(self.paths):
            lines.append(f"  {path}")
        if self.css_paths:
            lines.append(f"Stylesheet chunks (not included): {len(self.css_paths)}")
        if self.warnings:
            lines.append("Warnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)
        return "\n".join(lines)

    def to_json(self) -> Dict[str, object]:
        """Return a JSON-serialisable representation."""

        return {
            "source": self.source,
            "shape": self.shape,
            "base_path": self.base_path,
            "separator": self.separator,
            "extension": self.extension,
            "name_count": self.name_count,
            "hash_count": self.hash_count,
            "table_role": self.table_role,
            "entries": [
                {"id": entry.identifier, "path": entry.path} for entry in self.entries
            ],
            "paths": sorted(self.paths),
            "css_paths": sorted(self.css_paths),
            "fallback_tables": self.fallback_tables,
            "fallback_literals": list(self.fallback_literals),
            "warnings": list(self.warnings),
        }


__all__ = ["ManifestReport"]
