"""Loguru setup for the indexer.

The package disables its own loggers on import so that library callers see no
output until :func:`configure_logging` is called (the CLI always calls it).
Records carry a ``druid`` and a ``step`` so batch logs can be filtered per
object and per field step.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator

from loguru import logger

from ..config.settings import Settings, get_settings

PACKAGE_LOGGER = "exhibit_indexer"

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[druid]}</cyan> | "
    "<magenta>{extra[step]}</magenta> | "
    "{message}"
)


def resolve_level(settings: Settings, *, verbose: bool = False) -> str:
    """Return the sink level: DEBUG when *verbose*, else the configured level."""

    return "DEBUG" if verbose else settings.log_level.upper()


def configure_logging(
    settings: Settings | None = None,
    *,
    verbose: bool = False,
    log_to_file: bool = True,
) -> None:
    """Install the stderr sink and, unless disabled, the rotating file sink."""

    cfg = settings or get_settings()
    level = resolve_level(cfg, verbose=verbose)

    logger.remove()
    logger.configure(extra={"druid": "-", "step": "-"})
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False, format=_LOG_FORMAT)
    if log_to_file:
        log_path = cfg.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            format=_LOG_FORMAT,
            level=level,
        )
    logger.enable(PACKAGE_LOGGER)


def get_logger(**context: Any):
    """Return a logger bound to *context* (e.g. ``module=__name__``)."""

    return logger.bind(**context)


@contextmanager
def record_context(druid: str, step: str = "-") -> Iterator[None]:
    """Tag every record emitted inside the block with *druid* and *step*."""

    with logger.contextualize(druid=druid, step=step):
        yield


@contextmanager
def log_timing(step: str, *, logger_=logger) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        logger_.info("Step timing", step=step, seconds=round(time.perf_counter() - start, 3))


__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "get_logger",
    "record_context",
    "resolve_level",
    "log_timing",
]
