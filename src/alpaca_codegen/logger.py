"""Stage logging for the normalization pipeline.

One coloured logger for the whole package; each pipeline stage is wrapped in
``log_stage`` so a run shows which stage is active and how long it took.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


class _ColourFormatter(logging.Formatter):
    """ANSI colours plus the active stage name, if any."""

    _GREY = "\033[90m"
    _CYAN = "\033[96m"
    _YELLOW = "\033[93m"
    _RED = "\033[91m"
    _BOLD = "\033[1m"
    _RST = "\033[0m"

    LEVEL_COLOURS = {
        logging.DEBUG: _GREY,
        logging.INFO: _CYAN,
        logging.WARNING: _YELLOW,
        logging.ERROR: _RED,
        logging.CRITICAL: _RED + _BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLOURS.get(record.levelno, self._RST)
        timestamp = time.strftime("%H:%M:%S", time.localtime(record.created))
        stage = getattr(record, "stage", None)
        stage_tag = f" {self._BOLD}[{stage}]{self._RST}" if stage else ""
        return f"{self._GREY}{timestamp}{self._RST}{stage_tag} {colour}{record.getMessage()}{self._RST}"


_logger = logging.getLogger("alpaca_codegen")
_handler: logging.StreamHandler | None = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure and return the package logger."""
    global _handler
    _logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # A fresh handler binds to the current sys.stderr.
    if _handler is not None:
        _logger.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(_ColourFormatter())
    _logger.addHandler(_handler)

    _logger.propagate = False
    return _logger


def get_logger() -> logging.Logger:
    if _handler is None:
        setup_logging()
    return _logger


@contextmanager
def log_stage(stage_name: str) -> Generator[logging.Logger, None, None]:
    """Log entry and exit of a pipeline stage with its duration."""
    logger = get_logger()
    start = time.perf_counter()
    extra = {"stage": stage_name}
    logger.debug("%s ...", stage_name, extra=extra)
    try:
        yield logger
    except Exception:
        logger.error("%s failed (%.2fs)", stage_name, time.perf_counter() - start, extra=extra)
        raise
    else:
        logger.debug("%s done (%.2fs)", stage_name, time.perf_counter() - start, extra=extra)
