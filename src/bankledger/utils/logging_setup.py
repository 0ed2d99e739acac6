"""Logging configuration for the command line."""

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool = False, log_level: str = "warning") -> None:
    """Configure root logging.

    The level comes from ``debug`` first, then ``log_level``. When the
    BANKLEDGER_LOG_FILE environment variable is set, records are also written
    to that file.
    """
    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = os.getenv("BANKLEDGER_LOG_FILE")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
