"""Root logger configuration for the mockdrills CLI.

Records go to stdout. When ``logging.file`` is configured they are also
written to a size-capped rotating file, so repeated `send` runs over a
large outbox cannot grow the log without bound.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ROTATE_AT_BYTES = 1024 * 1024
ROTATED_FILES_KEPT = 3


def _file_handler(log_file: str) -> logging.Handler:
    return RotatingFileHandler(
        log_file,
        maxBytes=ROTATE_AT_BYTES,
        backupCount=ROTATED_FILES_KEPT,
        encoding='utf-8',
    )


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
) -> None:
    """Replaces the root logger's handlers with mockdrills' own.

    Args:
        log_level: Minimum level for the root logger and every handler.
        log_format: Format string shared by all handlers.
        log_file: Path of the rotating log file; None logs to stdout only.
    """
    root_logger = logging.getLogger()
    for old_handler in root_logger.handlers[:]:
        root_logger.removeHandler(old_handler)
    root_logger.setLevel(log_level)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(_file_handler(log_file))
        except OSError as e:
            file_error = e

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        logging.error(f"Failed to set up file logging to {log_file}: {file_error}; using stdout only.")
    logging.debug(f"Logging configured: level={logging.getLevelName(log_level)}, handlers={len(handlers)}")
