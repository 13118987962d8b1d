"""Logging configuration for the application.

Every record passes through `TokenRedactingFormatter`, so a GitHub token that
ends up in a message or a traceback is never written to the log file.
"""

import logging
import re
import sys
import os
from typing import Optional

import config

# Classic and fine-grained personal access tokens, app tokens, and bearer headers
_TOKEN_PATTERN = re.compile(
    r"(?:\bgh[pousr]_[A-Za-z0-9]{20,}\b|\bgithub_pat_[A-Za-z0-9_]{20,}\b|(?<=Bearer )[^\s'\"]+)"
)
REDACTED = "***"

_loggers: dict = {}


def redact_tokens(text: str) -> str:
    """Replaces anything shaped like a GitHub credential with ``***``."""
    return _TOKEN_PATTERN.sub(REDACTED, text)


class TokenRedactingFormatter(logging.Formatter):
    """Formatter that masks credentials in the message and the traceback."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_tokens(super().format(record))


def setup_logger(name: str = config.LOGGER_NAME, log_file: str = config.LOG_FILE) -> logging.Logger:
    """Sets up and returns a named application logger.

    Writes to `log_file`, plus the console (stderr) when the DEBUG flag in
    config is on. Calling again with the same name returns the same logger.

    Args:
        name: Logger name, shown in the ``%(name)s`` field of each line.
        log_file: Path of the log file; its directory is created if missing.

    Returns:
        logging.Logger: The configured logger.
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(config.LOG_LEVEL)

    if not logger.handlers:
        formatter = TokenRedactingFormatter(config.LOG_FORMAT)

        # stdout is reserved for the rich CLI output
        if config.DEBUG:
            ch = logging.StreamHandler(sys.stderr)
            ch.setLevel(config.LOG_LEVEL)
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        try:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)

            fh = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            fh.setLevel(config.LOG_LEVEL)
            fh.setFormatter(formatter)
            logger.addHandler(fh)
        except OSError as e:
            # Continue without file logging
            logger.error(f"Failed to create file handler for {log_file}: {e}", exc_info=config.DEBUG)

    _loggers[name] = logger
    logger.debug(f"Logger '{name}' writing to {log_file}.")
    return logger


def get_logger(name: str = config.LOGGER_NAME) -> logging.Logger:
    """Returns the logger registered under `name`, setting it up if necessary."""
    return _loggers.get(name) or setup_logger(name)
