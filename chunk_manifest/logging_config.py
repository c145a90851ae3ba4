"""File trace of the matchers for ``chunk-manifest --debug-log``."""

from __future__ import annotations

import logging
from pathlib import Path

__all__ = ["TRACE_LOGGER", "open_trace_log", "close_trace_log"]

TRACE_LOGGER = "chunk_manifest"
_TRACE_HANDLER = "chunk-manifest-trace"


def open_trace_log(path: Path) -> logging.Logger:
    """Route every DEBUG record of the package to ``path``.

    The file is rewritten on each run.  While the trace is open the package
    logger stops propagating, so the console keeps its own level.
    """

    logger = logging.getLogger(TRACE_LOGGER)
    close_trace_log(logger)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.set_name(_TRACE_HANDLER)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def close_trace_log(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() == _TRACE_HANDLER:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
