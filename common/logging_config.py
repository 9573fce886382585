import logging
import os
import re
import sys
from typing import Optional


class ControlCharacterFilter(logging.Filter):
    """Filter to escape control characters in log records.

    Uploaded file names are untrusted and end up in log lines, so CR/LF and
    other control characters are rendered as escapes instead of being written raw.
    """

    PATTERN = re.compile(r'[\x00-\x1f\x7f]')

    def filter(self, record: logging.LogRecord) -> bool:
        """Escape control characters in the log message and its arguments."""
        if isinstance(record.msg, str):
            record.msg = self._escape(record.msg)

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._escape_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._escape_value(arg) for arg in record.args)

        return True

    def _escape(self, text: str) -> str:
        return self.PATTERN.sub(lambda m: repr(m.group(0))[1:-1], text)

    def _escape_value(self, value):
        """Escape string arguments, leave everything else untouched."""
        if isinstance(value, str):
            return self._escape(value)
        return value


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Args:
        component_name: Name of the component (e.g., 'uploadserver')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    level = getattr(logging, log_level, logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    handler.addFilter(ControlCharacterFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
