"""Configure application logging using the Python standard library.

Sets up the root logger with a rotating file handler and a console
handler that only shows errors. Records are formatted as JSON and carry
the timestamp, level, module and message plus any ``extra`` dict passed
by the caller.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, UTC

from storekeeper.config import LOG_DIR, LOG_FILE, LOG_LEVEL


class JsonFormatter(logging.Formatter):
    """Format log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }
        # Merge extra dict into top-level (avoid nested 'extra')
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            log_record.update(extra)
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def configure_logging(log_dir: str = LOG_DIR, level: int = LOG_LEVEL) -> None:
    """Configure root logger with JSON formatting and rotating file handler.

    Args:
        log_dir: Directory where log files are written.  The directory
            will be created if it does not exist.
        level: Logging level for the file handler.  The console handler
            only shows errors; warnings go to the file so the interactive
            menu stays readable.
    """
    os.makedirs(log_dir, exist_ok=True)
    logger = logging.getLogger()
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    formatter = JsonFormatter()

    console_handler = logging.StreamHandler()  # stderr
    console_handler.setFormatter(formatter)
    console_handler.setLevel(max(level, logging.ERROR))
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, LOG_FILE),
        maxBytes=5 * 1024 * 1024,  # 5 MB per log file
        backupCount=3,
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)
