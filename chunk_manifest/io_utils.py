"""Filesystem helpers for reading bundles and writing results."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

__all__ = ["read_text", "write_text", "write_json"]


def read_text(path: str | os.PathLike[str]) -> str:
    """Return the text of ``path``, falling back to Latin-1 for non-UTF-8 bytes."""

    target = Path(path)
    try:
        return target.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return target.read_text(encoding="latin-1")


def _atomic_write_text(
    path: str | os.PathLike[str],
    writer,
    *,
    encoding: str = "utf-8",
) -> None:
    target = os.fspath(path)
    directory = os.path.dirname(target) or "."
    os.makedirs(directory, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".partial", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            writer(handle)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, target)
    except Exception:
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        raise


def write_text(
    path: str | os.PathLike[str],
    content: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """Write ``content`` to ``path`` atomically."""

    def _writer(handle) -> None:
        handle.write(content)

    _atomic_write_text(path, _writer, encoding=encoding)


def write_json(
    path: str | os.PathLike[str],
    obj,
    *,
    encoding: str = "utf-8",
) -> None:
    """Serialise ``obj`` as pretty JSON at ``path``."""

    def _writer(handle) -> None:
        json.dump(obj, handle, ensure_ascii=False, indent=2)
        handle.write("\n")

    _atomic_write_text(path, _writer, encoding=encoding)
