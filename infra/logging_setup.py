import logging
import time
from pathlib import Path
from typing import Optional, Union

from constants import (
    LOG_DATE_FORMAT,
    LOG_FILE_LIFESPAN_SECONDS,
    LOG_FORMAT,
    LOGGER_NAMESPACE,
)

logger = logging.getLogger(f"{LOGGER_NAMESPACE}.logging")


def cleanup_old_logs(log_dir: Path, lifespan_seconds: int = LOG_FILE_LIFESPAN_SECONDS) -> int:
    """Deletes analysis log files older than the specified lifespan."""
    if not log_dir.is_dir():
        return 0

    removed = 0
    cutoff = time.time() - lifespan_seconds
    for log_file in log_dir.glob("forensics_*.log"):
        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                removed += 1
                logger.debug("Deleted old log file: %s", log_file.name)
        except OSError as e:
            logger.warning("Error deleting log %s: %s", log_file.name, e)
    return removed


def setup_logging(level: Union[str, int] = "INFO", log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Configure the ``forensics`` logger hierarchy.

    - Always logs to stderr using the standard format.
    - When ``log_dir`` is given, also logs to a dated file there and
      cleans up files older than two days.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Avoid adding duplicate handlers on repeated setup
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    stream = logging.StreamHandler()
    stream.setLevel(level)
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        cleanup_old_logs(log_path)
        file_handler = logging.FileHandler(log_path / f"forensics_{time.strftime('%Y%m%d')}.log")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``forensics`` namespace."""
    if name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
