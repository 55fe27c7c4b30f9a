"""
Logging configuration for modrank.

Rich-formatted terminal logging for the ranking pipeline, an optional
plain-text log file, and a stage timer the pipeline uses to report how
long each analysis step took.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "modrank"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route modrank logs through a rich handler on stderr.

    Args:
        verbose: DEBUG level, with source paths and local variables in tracebacks
        quiet: ERROR level only (wins over ``verbose``)
        log_file: Also append plain-text records to this file

    Returns:
        The package logger ("modrank")
    """
    level = _level_for(verbose, quiet)

    handlers: list[logging.Handler] = [_terminal_handler(verbose)]
    if log_file:
        handlers.append(_file_handler(log_file))

    # Module ids can contain [brackets]; markup stays off so they print verbatim
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger namespaced under "modrank".

    ``get_logger(__name__)`` inside the package returns the module's own
    logger; any other name is nested under the package logger.
    """
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


@contextmanager
def stage_timer(logger: logging.Logger, stage: str) -> Iterator[None]:
    """Log the wall time of a pipeline stage at DEBUG."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{stage} took {elapsed_ms:.1f}ms")


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def _terminal_handler(verbose: bool) -> RichHandler:
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )


def _file_handler(path: str) -> logging.FileHandler:
    handler = logging.FileHandler(path, mode="a")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler
