"""Logging setup shared by the CLI and the server."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from vocabnote.config import Settings, settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_DETAILED = (
    "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
)

# Client libraries that log every request at INFO
CHATTY_LOGGERS = ("httpx", "httpcore", "openai")


def _file_handler(config: Settings) -> logging.Handler:
    log_path = config.resolved_log_file_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=log_path,
        maxBytes=config.log_file_max_bytes,
        backupCount=config.log_file_backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT_DETAILED))
    return handler


def setup_logging(config: Settings | None = None) -> None:
    """Route log records to stderr and, when enabled, a rotating file.

    Rendered definitions go to stdout, so console logging stays on stderr.
    Request logs of the HTTP clients are only shown at DEBUG.
    """
    config = config or settings
    level = getattr(logging, config.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if config.log_file_enabled:
        root_logger.addHandler(_file_handler(config))

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)
