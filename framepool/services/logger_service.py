"""Logging setup for framepool: rich console output plus optional rotating log files."""

import logging
import time
from contextlib import contextmanager
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Generator

from rich.console import Console
from rich.logging import RichHandler

from framepool.config import settings
from framepool.constants import LOG_BACKUP_COUNT, LOG_FILE_PREFIX, LOG_ROTATION_BYTES

console = Console()

# HTTP internals log every request at INFO; pools already log per load
QUIET_LOGGERS = ("httpx", "httpcore")

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def _log_file_handler(log_dir: Path) -> tuple[RotatingFileHandler, Path]:
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{LOG_FILE_PREFIX}_{datetime.now():%Y%m%d_%H%M%S}.log"

    handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_ROTATION_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler, log_file


def setup_logging(
    verbose: bool = False,
    log_to_file: bool = True,
    log_dir: Path | None = None,
) -> Path | None:
    """
    Route framepool logs to the console and, optionally, a rotating file.

    Args:
        verbose: DEBUG level with timestamps and source paths on the console
        log_to_file: Write a log file too (only if settings.log_to_file is on)
        log_dir: Directory for log files (defaults to settings.log_dir)

    Returns:
        Path of the log file, or None when logging to console only
    """
    level = logging.DEBUG if verbose else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    console_handler = RichHandler(
        console=console,
        level=level,
        rich_tracebacks=True,
        show_time=verbose,
        show_path=verbose,
    )
    root.addHandler(console_handler)

    log_file = None
    if log_to_file and settings.log_to_file:
        file_handler, log_file = _log_file_handler(Path(log_dir or settings.log_dir))
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if log_file is not None:
        logger.info(f"Logging to file: {log_file}")
    logger.debug(f"Logging level {logging.getLevelName(level)}")
    return log_file


@contextmanager
def log_performance(operation: str, logger: logging.Logger | None = None) -> Generator[None, None, None]:
    """
    Log how long a block took.

    Usage:
        with log_performance("Load album", logger):
            ...
    """
    logger = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    logger.debug(f"[{operation}] Starting...")
    try:
        yield
    finally:
        logger.info(f"[{operation}] Completed in {time.perf_counter() - start:.2f}s")


def log_api_call(
    service: str,
    endpoint: str,
    status: str = "success",
    details: str | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """
    Log one remote call: errors at ERROR, retries at WARNING, the rest at DEBUG.

    Args:
        service: Remote service name (e.g. "Immich")
        endpoint: Method and path called
        status: success, retry or error
        details: Extra context such as the HTTP status
        logger: Logger to use (this module's if None)
    """
    logger = logger or logging.getLogger(__name__)
    parts = ["[API]", service, "|", endpoint, "|", status.upper()]
    if details:
        parts += ["|", details]
    message = " ".join(parts)

    level = {"error": logging.ERROR, "retry": logging.WARNING}.get(status, logging.DEBUG)
    logger.log(level, message)


def cleanup_old_logs(max_age_days: int = 7, log_dir: Path | None = None) -> int:
    """
    Delete framepool log files (rotated backups included) older than max_age_days.

    Returns:
        Number of files deleted
    """
    log_dir = Path(log_dir or settings.log_dir)
    if not log_dir.is_dir():
        return 0

    cutoff = time.time() - max_age_days * 86400
    stale = [f for f in log_dir.glob(f"{LOG_FILE_PREFIX}_*.log*") if f.stat().st_mtime < cutoff]
    for log_file in stale:
        log_file.unlink()

    if stale:
        logging.getLogger(__name__).debug(f"Removed {len(stale)} log files older than {max_age_days} days")
    return len(stale)
